"""Product API Routes

FastAPI routes for catalog browsing and catalog maintenance.
"""

from decimal import Decimal

from fastapi import APIRouter, Depends, status

from src.api.auth import require_api_key
from src.api.schemas.shop_request import UpdatePricingRequestSchema
from src.app.use_cases.shop.dtos import (
    BackfillResultDTO,
    ListProductsResponseDTO,
    PricedProductDTO,
    UpdateProductPricingCommandDTO,
)
from src.app.use_cases.shop.list_products import GetProduct, ListProducts
from src.app.use_cases.shop.update_product_pricing import UpdateProductPricing
from src.app.use_cases.shop.backfill_product_defaults import BackfillProductDefaults
from src.app.services.catalog_cache import ProductCatalogCache
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_catalog_cache, get_config, get_unit_of_work
from src.api.error import ClientError

router = APIRouter(prefix="/products", tags=["Products"])


def _raise(error):
    if error.code == "PRODUCT_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    if error.code == "VALIDATION_ERROR":
        raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
    raise ClientError(error, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)


@router.get("", response_model=ListProductsResponseDTO)
async def list_products(
    uow: SqlAlchemyUnitOfWork = Depends(get_unit_of_work),
    cache: ProductCatalogCache = Depends(get_catalog_cache),
):
    """List the catalog with net/VAT/gross pricing and active discounts."""
    result = await ListProducts(uow.products, cache).execute()
    if result.is_err():
        _raise(result.error)
    return result.value


@router.get("/{product_id}", response_model=PricedProductDTO)
async def get_product(
    product_id: str,
    uow: SqlAlchemyUnitOfWork = Depends(get_unit_of_work),
    cache: ProductCatalogCache = Depends(get_catalog_cache),
):
    """Get one product with pricing. 404 when it does not exist."""
    result = await GetProduct(uow.products, cache).execute(product_id)
    if result.is_err():
        _raise(result.error)
    return result.value


@router.patch(
    "/{product_id}/pricing",
    response_model=PricedProductDTO,
    dependencies=[Depends(require_api_key)],
)
async def update_product_pricing(
    product_id: str,
    request: UpdatePricingRequestSchema,
    uow: SqlAlchemyUnitOfWork = Depends(get_unit_of_work),
    cache: ProductCatalogCache = Depends(get_catalog_cache),
):
    """
    Change price, VAT rate or discount window of a product.

    Only the fields present in the body change. The product and the
    catalog listing are evicted from the cache.
    """
    command = UpdateProductPricingCommandDTO(
        product_id=product_id,
        **request.model_dump(exclude_unset=True),
    )
    result = await UpdateProductPricing(uow, uow.products, cache).execute(command)
    if result.is_err():
        _raise(result.error)
    return result.value


@router.post(
    "/backfill-defaults",
    response_model=BackfillResultDTO,
    dependencies=[Depends(require_api_key)],
)
async def backfill_product_defaults(
    uow: SqlAlchemyUnitOfWork = Depends(get_unit_of_work),
    cache: ProductCatalogCache = Depends(get_catalog_cache),
    config=Depends(get_config),
):
    """Set the configured default VAT rate and currency on products missing them."""
    result = await BackfillProductDefaults(
        uow,
        uow.products,
        cache,
        vat_rate=Decimal(str(config.DEFAULT_VAT_RATE)),
        currency=config.DEFAULT_CURRENCY,
    ).execute()
    if result.is_err():
        _raise(result.error)
    return result.value
