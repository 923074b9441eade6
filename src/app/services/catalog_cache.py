"""Product Catalog Cache

Time-boxed read-through cache in front of the catalog. Raw products are
cached, never priced results: discount windows depend on the read time.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Dict, Generic, List, Optional, TypeVar
from src.app.repositories.product_repository import ProductRepository
from src.domain.product import Product

logger = logging.getLogger(__name__)

V = TypeVar("V")


@dataclass
class CacheEntry(Generic[V]):
    value: V
    expires_at: float


@dataclass
class CacheStats:
    hits: int = 0
    misses: int = 0
    invalidations: int = 0


class ProductCatalogCache:
    """
    Read-through cache for the product listing and single products

    One instance is created at application start and shared by requests.
    Writers must call invalidate() (or clear()) after committing changes.
    Every eviction bumps a generation number; a load that started before
    an eviction returns its result to the caller but does not store it.
    """

    def __init__(self, ttl_seconds: float = 300.0, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._listing: Optional[CacheEntry[List[Product]]] = None
        self._products: Dict[str, CacheEntry[Product]] = {}
        self._generation = 0
        self.stats = CacheStats()

    def _fresh(self, entry: Optional[CacheEntry]) -> bool:
        return entry is not None and entry.expires_at > self._clock()

    def _expiry(self) -> float:
        return self._clock() + self.ttl_seconds

    async def list_products(self, product_repo: ProductRepository) -> List[Product]:
        """
        Return the full catalog, loading it on a miss

        Args:
            product_repo: Repository used to load on a miss

        Returns:
            List of products
        """
        if self._fresh(self._listing):
            self.stats.hits += 1
            return list(self._listing.value)

        self.stats.misses += 1
        generation = self._generation
        products = await product_repo.list_all()
        if generation != self._generation:
            logger.debug("Catalog listing changed while loading; result not cached")
            return list(products)

        expires_at = self._expiry()
        self._listing = CacheEntry(value=list(products), expires_at=expires_at)
        for product in products:
            self._products[product.id] = CacheEntry(value=product, expires_at=expires_at)
        logger.debug(f"Catalog listing loaded: {len(products)} products")
        return list(products)

    async def get_product(
        self, product_id: str, product_repo: ProductRepository
    ) -> Optional[Product]:
        """
        Return one product, loading it on a miss

        Unknown products are not cached.

        Args:
            product_id: Product identifier
            product_repo: Repository used to load on a miss

        Returns:
            Product if found, None otherwise
        """
        entry = self._products.get(product_id)
        if self._fresh(entry):
            self.stats.hits += 1
            return entry.value

        self.stats.misses += 1
        generation = self._generation
        product = await product_repo.get_by_id(product_id)
        if generation != self._generation:
            logger.debug(f"Product {product_id} changed while loading; result not cached")
        elif product is not None:
            self._products[product_id] = CacheEntry(value=product, expires_at=self._expiry())
        else:
            self._products.pop(product_id, None)
        return product

    def invalidate(self, product_id: str) -> None:
        """Evict one product and the aggregate listing"""
        self._products.pop(product_id, None)
        self._listing = None
        self._generation += 1
        self.stats.invalidations += 1
        logger.info(f"Catalog cache invalidated for product {product_id}")

    def clear(self) -> None:
        """Evict everything"""
        self._products.clear()
        self._listing = None
        self._generation += 1
        self.stats.invalidations += 1
        logger.info("Catalog cache cleared")
