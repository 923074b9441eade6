"""Integration tests for Shop API endpoints"""

import pytest
from datetime import datetime
from decimal import Decimal
from httpx import AsyncClient

from config import ApplicationConfig
from src.depends import get_config
from src.domain.exceptions import DownstreamServiceError

AUTH = {"x-api-key": "test-api-key"}

ORDER_PAYLOAD = {
    "user_email": "ivan@example.com",
    "user_uid": "uid_123",
    "first_name": "Ivan",
    "last_name": "Petrov",
    "phone": "+359888123456",
    "delivery_option": "address",
    "address": "1 Vitosha Blvd",
    "city": "Sofia",
    "postal_code": "1000",
    "payment_method": "cash",
    "items": [{"product_id": "vertuo", "quantity": 3}],
    "shipping_cost": "5.00",
}


@pytest.mark.asyncio
class TestOrdersAPI:
    async def test_create_order(self, client: AsyncClient, seed_products, make_product):
        await seed_products(make_product())

        response = await client.post("/api/orders", json=ORDER_PAYLOAD)

        assert response.status_code == 201
        data = response.json()
        assert data["order_number"] == "0000001"
        assert Decimal(data["subtotal_gross"]) == Decimal("36.00")
        assert Decimal(data["total_gross"]) == Decimal("42.00")
        assert Decimal(data["total_vat"]) == Decimal("7.00")
        assert data["currency"] == "BGN"

    async def test_create_order_unknown_product(self, client: AsyncClient):
        response = await client.post("/api/orders", json=ORDER_PAYLOAD)

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "PRODUCT_NOT_FOUND"

    @pytest.mark.parametrize(
        "override",
        [
            {"items": []},
            {"items": [{"product_id": "vertuo", "quantity": 0}]},
            {"shipping_cost": "-1.00"},
            {"user_email": ""},
        ],
    )
    async def test_create_order_validation_error(self, client: AsyncClient, override):
        response = await client.post("/api/orders", json={**ORDER_PAYLOAD, **override})

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    async def test_send_confirmation(
        self, client: AsyncClient, seed_products, make_product, email_service
    ):
        await seed_products(make_product())
        order = (await client.post("/api/orders", json=ORDER_PAYLOAD)).json()

        response = await client.post(f"/api/orders/{order['order_id']}/confirmation")

        assert response.status_code == 200
        assert response.json()["recipient_email"] == "ivan@example.com"
        email_service.send_order_confirmation.assert_awaited_once()

    async def test_send_confirmation_unknown_order(self, client: AsyncClient):
        response = await client.post("/api/orders/missing/confirmation")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "ORDER_NOT_FOUND"


@pytest.mark.asyncio
class TestInvoicesAPI:
    async def _order_id(self, client, seed_products, make_product):
        await seed_products(make_product())
        return (await client.post("/api/orders", json=ORDER_PAYLOAD)).json()["order_id"]

    async def test_issue_requires_api_key(self, client: AsyncClient):
        response = await client.post("/api/invoices", json={"order_id": "x"})

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    async def test_issue_and_reissue(self, client: AsyncClient, seed_products, make_product):
        order_id = await self._order_id(client, seed_products, make_product)

        first = await client.post("/api/invoices", json={"order_id": order_id}, headers=AUTH)
        second = await client.post(
            "/api/invoices",
            json={"order_id": order_id, "recipient_email": "copy@example.com"},
            headers=AUTH,
        )

        assert first.status_code == 200
        assert second.status_code == 200
        assert first.json()["invoice_number"] == "0100000001"
        assert first.json()["reused"] is False
        assert second.json()["reused"] is True
        assert second.json()["invoice_number"] == first.json()["invoice_number"]
        assert second.json()["recipient_email"] == "copy@example.com"

    async def test_download_pdf(self, client: AsyncClient, seed_products, make_product):
        order_id = await self._order_id(client, seed_products, make_product)
        await client.post("/api/invoices", json={"order_id": order_id}, headers=AUTH)

        response = await client.get(f"/api/invoices/{order_id}/pdf", headers=AUTH)

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert "0100000001.pdf" in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")

    async def test_download_before_issue(self, client: AsyncClient):
        response = await client.get("/api/invoices/missing/pdf", headers=AUTH)

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "INVOICE_NOT_FOUND"

    async def test_issue_unknown_order(self, client: AsyncClient):
        response = await client.post("/api/invoices", json={"order_id": "missing"}, headers=AUTH)

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "ORDER_NOT_FOUND"

    async def test_email_failure(
        self, client: AsyncClient, seed_products, make_product, email_service
    ):
        order_id = await self._order_id(client, seed_products, make_product)
        email_service.send_invoice.side_effect = DownstreamServiceError("email", "refused")

        response = await client.post("/api/invoices", json={"order_id": order_id}, headers=AUTH)

        assert response.status_code == 502
        assert response.json()["error"]["code"] == "DOWNSTREAM_FAILURE"


@pytest.mark.asyncio
class TestProductsAPI:
    async def test_list_products(self, client: AsyncClient, seed_products, make_product):
        await seed_products(
            make_product(id="a"),
            make_product(
                id="b",
                price=Decimal("100.00"),
                discounted=True,
                discount_percent=Decimal("20"),
                discount_start=datetime(2020, 1, 1),
            ),
        )

        response = await client.get("/api/products")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        by_id = {p["id"]: p for p in data["products"]}
        assert Decimal(by_id["a"]["price_gross"]) == Decimal("12.00")
        assert by_id["a"]["discounted_price_gross"] is None
        assert Decimal(by_id["b"]["discounted_price_gross"]) == Decimal("96.00")

    async def test_get_unknown_product(self, client: AsyncClient):
        response = await client.get("/api/products/missing")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "PRODUCT_NOT_FOUND"

    async def test_pricing_update_evicts_cache(self, client: AsyncClient, seed_products, make_product):
        await seed_products(make_product(id="a"))
        before = await client.get("/api/products/a")

        update = await client.patch(
            "/api/products/a/pricing", json={"price": "20.00"}, headers=AUTH
        )
        after = await client.get("/api/products/a")

        assert Decimal(before.json()["price_gross"]) == Decimal("12.00")
        assert update.status_code == 200
        assert Decimal(after.json()["price_gross"]) == Decimal("24.00")

    async def test_pricing_update_rejects_inverted_window(self, client: AsyncClient):
        response = await client.patch(
            "/api/products/a/pricing",
            json={"discount_start": "2024-06-10T00:00:00", "discount_end": "2024-06-01T00:00:00"},
            headers=AUTH,
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.parametrize("field", ["price", "discounted"])
    async def test_pricing_update_rejects_null_for_required_field(
        self, client: AsyncClient, seed_products, make_product, field
    ):
        await seed_products(make_product(id="a"))

        response = await client.patch("/api/products/a/pricing", json={field: None}, headers=AUTH)
        after = await client.get("/api/products/a")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
        assert Decimal(after.json()["price_gross"]) == Decimal("12.00")

    async def test_pricing_update_allows_clearing_discount_end(
        self, client: AsyncClient, seed_products, make_product
    ):
        await seed_products(make_product(id="a", discount_end=datetime(2024, 6, 30)))

        response = await client.patch("/api/products/a/pricing", json={"discount_end": None}, headers=AUTH)

        assert response.status_code == 200
        assert response.json()["discount_end"] is None

    async def test_backfill_defaults(self, client: AsyncClient, seed_products, make_product):
        await seed_products(make_product(id="a", vat_rate=None, currency=None), make_product(id="b"))

        response = await client.post("/api/products/backfill-defaults", headers=AUTH)

        assert response.status_code == 200
        assert response.json() == {"total_products": 2, "updated": 1}

    async def test_backfill_uses_configured_defaults(
        self, app, client: AsyncClient, seed_products, make_product
    ):
        class EuroConfig(ApplicationConfig):
            DEFAULT_VAT_RATE = "0.09"
            DEFAULT_CURRENCY = "EUR"

        app.dependency_overrides[get_config] = lambda: EuroConfig
        await seed_products(make_product(id="a", vat_rate=None, currency=None))

        response = await client.post("/api/products/backfill-defaults", headers=AUTH)
        product = (await client.get("/api/products/a")).json()

        assert response.json() == {"total_products": 1, "updated": 1}
        assert product["currency"] == "EUR"
        assert Decimal(product["vat_rate"]) == Decimal("0.09")
        assert Decimal(product["price_gross"]) == Decimal("10.90")

    async def test_backfill_requires_api_key(self, client: AsyncClient):
        response = await client.post("/api/products/backfill-defaults")

        assert response.status_code == 401


@pytest.mark.asyncio
class TestAddressAPI:
    async def test_sites(self, client: AsyncClient, address_service):
        response = await client.get("/api/autocomplete/sites", params={"term": "Sof"})

        assert response.status_code == 200
        assert response.json() == [{"id": 68134, "name": "SOFIA"}]

    async def test_sites_missing_term(self, client: AsyncClient):
        response = await client.get("/api/autocomplete/sites")

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    async def test_streets(self, client: AsyncClient, address_service):
        response = await client.get(
            "/api/autocomplete/streets", params={"siteId": 68134, "term": "Vit"}
        )

        assert response.status_code == 200
        address_service.search_streets.assert_awaited_once_with(68134, "Vit")

    async def test_vendor_failure(self, client: AsyncClient, address_service):
        address_service.search_sites.side_effect = DownstreamServiceError("address lookup", "timeout")

        response = await client.get("/api/autocomplete/sites", params={"term": "Sof"})

        assert response.status_code == 502
        assert response.json()["error"]["code"] == "DOWNSTREAM_FAILURE"
