"""UpdateProductPricing Use Case

Changes a product's price, VAT rate or discount window and evicts it
from the catalog cache.
"""

import logging
from datetime import datetime
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.catalog_cache import ProductCatalogCache
from src.app.repositories.product_repository import ProductRepository
from .dtos import PricedProductDTO, UpdateProductPricingCommandDTO
from .list_products import to_priced_product_dto

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("price", "discounted")


class UpdateProductPricing:
    """
    Use Case: Update catalog pricing

    Business Rules:
    1. Only fields present in the command change
    2. price and discounted can change but never become null
    3. discount_end, when both are set, must not precede discount_start
    4. Cache eviction happens after the commit, for the product and the listing
    """

    def __init__(
        self,
        uow: UnitOfWork,
        product_repo: ProductRepository,
        cache: ProductCatalogCache,
    ):
        self.uow = uow
        self.product_repo = product_repo
        self.cache = cache

    async def execute(self, command: UpdateProductPricingCommandDTO) -> Result[PricedProductDTO]:
        try:
            product = await self.product_repo.get_by_id(command.product_id)
            if not product:
                return Return.err(
                    Error(
                        code="PRODUCT_NOT_FOUND",
                        message=f"Product not found: {command.product_id}",
                        reason="Product does not exist",
                    )
                )

            changes = command.model_dump(exclude={"product_id"}, exclude_unset=True)
            cleared = sorted(f for f in REQUIRED_FIELDS if f in changes and changes[f] is None)
            if cleared:
                return Return.err(
                    Error(
                        code="VALIDATION_ERROR",
                        message=f"Fields cannot be null: {', '.join(cleared)}",
                        reason="price and discounted are required on every product",
                    )
                )

            for field, value in changes.items():
                setattr(product, field, value)

            if (
                product.discount_start is not None
                and product.discount_end is not None
                and product.discount_end < product.discount_start
            ):
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code="VALIDATION_ERROR",
                        message="discount_end must not be before discount_start",
                        reason=f"start={product.discount_start}, end={product.discount_end}",
                    )
                )

            product.updated_at = datetime.utcnow()
            updated = await self.product_repo.update(product)
            await self.uow.commit()
            self.cache.invalidate(updated.id)

            logger.info(f"Pricing updated for product {updated.id}: {sorted(changes)}")
            return Return.ok(to_priced_product_dto(updated, datetime.utcnow()))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="UPDATE_PRODUCT_PRICING_FAILED",
                    message="Failed to update product pricing",
                    reason=str(e),
                )
            )
