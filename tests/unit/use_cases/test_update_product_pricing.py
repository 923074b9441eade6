"""Unit tests for UpdateProductPricing use case"""

import pytest
from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.shop.dtos import UpdateProductPricingCommandDTO
from src.app.use_cases.shop.update_product_pricing import UpdateProductPricing


@pytest.fixture
def product(make_product):
    return make_product(id="a")


@pytest.fixture
def mock_product_repo(product):
    repo = MagicMock()
    repo.get_by_id = AsyncMock(return_value=product)
    repo.update = AsyncMock(side_effect=lambda p: p)
    return repo


@pytest.fixture
def mock_cache():
    cache = MagicMock()
    cache.invalidate = MagicMock()
    return cache


@pytest.fixture
def use_case(mock_uow, mock_product_repo, mock_cache):
    return UpdateProductPricing(mock_uow, mock_product_repo, mock_cache)


@pytest.mark.asyncio
class TestUpdateProductPricing:
    async def test_only_given_fields_change(self, use_case, product, mock_uow, mock_cache):
        command = UpdateProductPricingCommandDTO(product_id="a", price=Decimal("20.00"))

        result = await use_case.execute(command)

        assert result.is_ok()
        assert product.price == Decimal("20.00")
        assert product.vat_rate == Decimal("0.20")
        assert result.value.price_gross == Decimal("24.00")
        mock_uow.commit.assert_awaited_once()
        mock_cache.invalidate.assert_called_once_with("a")

    async def test_discount_window_can_be_set(self, use_case, product):
        command = UpdateProductPricingCommandDTO(
            product_id="a",
            discounted=True,
            discount_percent=Decimal("15"),
            discount_start=datetime(2024, 6, 1),
            discount_end=datetime(2099, 6, 30),
        )

        await use_case.execute(command)

        assert product.discounted is True
        assert product.discount_percent == Decimal("15")
        assert product.discount_end == datetime(2099, 6, 30)

    async def test_inverted_window_is_rejected(
        self, use_case, product, mock_uow, mock_cache, mock_product_repo
    ):
        product.discount_start = datetime(2024, 6, 10)
        command = UpdateProductPricingCommandDTO(product_id="a", discount_end=datetime(2024, 6, 1))

        result = await use_case.execute(command)

        assert result.error.code == "VALIDATION_ERROR"
        mock_product_repo.update.assert_not_called()
        mock_uow.rollback.assert_awaited_once()
        mock_cache.invalidate.assert_not_called()

    async def test_unknown_product(self, use_case, mock_product_repo, mock_cache):
        mock_product_repo.get_by_id = AsyncMock(return_value=None)

        result = await use_case.execute(UpdateProductPricingCommandDTO(product_id="x", price=Decimal("1")))

        assert result.error.code == "PRODUCT_NOT_FOUND"
        mock_cache.invalidate.assert_not_called()

    async def test_failed_commit_does_not_evict(self, use_case, mock_uow, mock_cache):
        mock_uow.commit = AsyncMock(side_effect=Exception("Database error"))

        result = await use_case.execute(UpdateProductPricingCommandDTO(product_id="a", price=Decimal("1")))

        assert result.error.code == "UPDATE_PRODUCT_PRICING_FAILED"
        mock_uow.rollback.assert_awaited_once()
        mock_cache.invalidate.assert_not_called()

    async def test_null_price_is_rejected(
        self, use_case, product, mock_uow, mock_cache, mock_product_repo
    ):
        command = UpdateProductPricingCommandDTO(product_id="a", price=None, discounted=None)

        result = await use_case.execute(command)

        assert result.error.code == "VALIDATION_ERROR"
        assert "discounted, price" in result.error.message
        assert product.price == Decimal("10.00")
        mock_product_repo.update.assert_not_called()
        mock_uow.commit.assert_not_awaited()
        mock_cache.invalidate.assert_not_called()
