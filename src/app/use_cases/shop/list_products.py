"""ListProducts / GetProduct Use Cases

Serve the catalog through the shared cache, priced at request time.
"""

from datetime import datetime
from typing import Callable, Optional
from libs.result import Result, Return, Error
from src.app.repositories.product_repository import ProductRepository
from src.app.services.catalog_cache import ProductCatalogCache
from src.domain.pricing import PricingEngine
from src.domain.product import Product
from .dtos import ListProductsResponseDTO, PricedProductDTO


def to_priced_product_dto(product: Product, at: datetime) -> PricedProductDTO:
    priced = PricingEngine.price(product, at=at)
    return PricedProductDTO(
        id=product.id,
        name=product.name,
        brand=product.brand,
        image_url=product.image_url,
        discount_start=product.discount_start,
        discount_end=product.discount_end,
        **priced.model_dump(exclude={"product_id"}),
    )


class ListProducts:
    """
    Use Case: List the catalog with pricing

    Business Rules:
    1. Listing is read through the catalog cache
    2. Pricing (and discount state) is evaluated on every call
    """

    def __init__(
        self,
        product_repo: ProductRepository,
        cache: ProductCatalogCache,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.product_repo = product_repo
        self.cache = cache
        self.clock = clock or datetime.utcnow

    async def execute(self) -> Result[ListProductsResponseDTO]:
        try:
            products = await self.cache.list_products(self.product_repo)
            now = self.clock()
            dtos = [to_priced_product_dto(p, now) for p in products]
            return Return.ok(ListProductsResponseDTO(products=dtos, total=len(dtos)))
        except Exception as e:
            return Return.err(
                Error(
                    code="LIST_PRODUCTS_FAILED",
                    message="Failed to list products",
                    reason=str(e),
                )
            )


class GetProduct:
    """Use Case: Get one product with pricing"""

    def __init__(
        self,
        product_repo: ProductRepository,
        cache: ProductCatalogCache,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.product_repo = product_repo
        self.cache = cache
        self.clock = clock or datetime.utcnow

    async def execute(self, product_id: str) -> Result[PricedProductDTO]:
        try:
            product = await self.cache.get_product(product_id, self.product_repo)
            if not product:
                return Return.err(
                    Error(
                        code="PRODUCT_NOT_FOUND",
                        message=f"Product not found: {product_id}",
                        reason="Product does not exist",
                    )
                )
            return Return.ok(to_priced_product_dto(product, self.clock()))
        except Exception as e:
            return Return.err(
                Error(
                    code="GET_PRODUCT_FAILED",
                    message="Failed to get product",
                    reason=str(e),
                )
            )
