"""Product Repository Interface

Defines the contract for catalog persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.product import Product


class ProductRepository(ABC):
    """
    Repository interface for Product persistence

    Read by ordering, invoicing and catalog browsing; written only by
    catalog maintenance.
    """

    @abstractmethod
    async def get_by_id(self, product_id: str) -> Optional[Product]:
        """
        Retrieve product by ID

        Args:
            product_id: Product identifier

        Returns:
            Product if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_all(self) -> List[Product]:
        """
        Retrieve the full catalog

        Returns:
            List of all products
        """
        pass

    @abstractmethod
    async def create(self, product: Product) -> Product:
        """
        Create a new product

        Args:
            product: Product entity to persist

        Returns:
            Created Product
        """
        pass

    @abstractmethod
    async def update(self, product: Product) -> Product:
        """
        Update an existing product

        Args:
            product: Product entity with updated values

        Returns:
            Updated Product
        """
        pass
