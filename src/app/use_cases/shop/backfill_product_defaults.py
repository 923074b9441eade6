"""BackfillProductDefaults Use Case

Fills in missing VAT rate and currency on legacy catalog records.
"""

import logging
from datetime import datetime
from decimal import Decimal
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.catalog_cache import ProductCatalogCache
from src.app.repositories.product_repository import ProductRepository
from src.domain.pricing import DEFAULT_CURRENCY, DEFAULT_VAT_RATE
from .dtos import BackfillResultDTO

logger = logging.getLogger(__name__)


class BackfillProductDefaults:
    """
    Use Case: Backfill catalog defaults

    Business Rules:
    1. vat_rate missing -> 0.20; currency missing -> BGN
    2. Products that already carry both values are left untouched
    3. Safe to re-run (second run updates nothing)
    """

    def __init__(
        self,
        uow: UnitOfWork,
        product_repo: ProductRepository,
        cache: ProductCatalogCache,
        vat_rate: Decimal = DEFAULT_VAT_RATE,
        currency: str = DEFAULT_CURRENCY,
    ):
        self.uow = uow
        self.product_repo = product_repo
        self.cache = cache
        self.vat_rate = vat_rate
        self.currency = currency

    async def execute(self) -> Result[BackfillResultDTO]:
        try:
            products = await self.product_repo.list_all()
            updated = 0
            for product in products:
                changed = False
                if product.vat_rate is None:
                    product.vat_rate = self.vat_rate
                    changed = True
                if not product.currency:
                    product.currency = self.currency
                    changed = True
                if changed:
                    product.updated_at = datetime.utcnow()
                    await self.product_repo.update(product)
                    updated += 1

            await self.uow.commit()
            if updated:
                self.cache.clear()

            logger.info(f"Backfilled defaults on {updated} of {len(products)} products")
            return Return.ok(BackfillResultDTO(total_products=len(products), updated=updated))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="BACKFILL_PRODUCTS_FAILED",
                    message="Failed to backfill product defaults",
                    reason=str(e),
                )
            )
