"""Unit tests for BackfillProductDefaults use case"""

import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

from src.app.use_cases.shop.backfill_product_defaults import BackfillProductDefaults


@pytest.fixture
def mock_cache():
    return MagicMock()


@pytest.mark.asyncio
class TestBackfillProductDefaults:
    async def test_missing_values_are_filled(self, mock_uow, mock_cache, make_product):
        products = [
            make_product(id="a", vat_rate=None, currency=None),
            make_product(id="b", vat_rate=Decimal("0.09"), currency=None),
            make_product(id="c"),
        ]
        repo = MagicMock()
        repo.list_all = AsyncMock(return_value=products)
        repo.update = AsyncMock(side_effect=lambda p: p)

        result = await BackfillProductDefaults(mock_uow, repo, mock_cache).execute()

        assert result.is_ok()
        assert result.value.total_products == 3
        assert result.value.updated == 2
        assert products[0].vat_rate == Decimal("0.20")
        assert products[0].currency == "BGN"
        assert products[1].vat_rate == Decimal("0.09")
        assert products[1].currency == "BGN"
        assert repo.update.await_count == 2
        mock_uow.commit.assert_awaited_once()
        mock_cache.clear.assert_called_once()

    async def test_second_run_updates_nothing(self, mock_uow, mock_cache, make_product):
        repo = MagicMock()
        repo.list_all = AsyncMock(return_value=[make_product(id="a")])
        repo.update = AsyncMock()

        result = await BackfillProductDefaults(mock_uow, repo, mock_cache).execute()

        assert result.value.updated == 0
        repo.update.assert_not_called()
        mock_cache.clear.assert_not_called()

    async def test_failure_rolls_back(self, mock_uow, mock_cache):
        repo = MagicMock()
        repo.list_all = AsyncMock(side_effect=Exception("Database error"))

        result = await BackfillProductDefaults(mock_uow, repo, mock_cache).execute()

        assert result.error.code == "BACKFILL_PRODUCTS_FAILED"
        mock_uow.rollback.assert_awaited_once()
