"""Order Repository Interface

Defines the contract for order persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.order import Order


class OrderRepository(ABC):
    """
    Repository interface for Order persistence

    Orders are written once and never mutated.
    """

    @abstractmethod
    async def create(self, order: Order) -> Order:
        """
        Create a new order

        Args:
            order: Order entity to persist

        Returns:
            Created Order
        """
        pass

    @abstractmethod
    async def get_by_id(self, order_id: str) -> Optional[Order]:
        """
        Retrieve order by ID

        Args:
            order_id: Order identifier

        Returns:
            Order if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_order_number(self, order_number: str) -> Optional[Order]:
        """
        Retrieve order by its human-facing number

        Args:
            order_number: Zero-padded order number

        Returns:
            Order if found, None otherwise
        """
        pass
