from datetime import datetime
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.domain.order import Order
from src.domain.product import Product


@pytest.fixture
def mock_uow():
    """Mock unit of work"""
    uow = MagicMock()
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    return uow


@pytest.fixture
def make_product():
    """Factory for catalog products (10.00 net, 20% VAT, no discount)"""

    def _make(**overrides):
        fields = dict(
            id="prod_1",
            name="Vertuo 2024",
            brand="Bullpadel",
            image_url="https://cdn.example.com/vertuo.png",
            price=Decimal("10.00"),
            vat_rate=Decimal("0.20"),
            currency="BGN",
            discounted=False,
            discount_percent=None,
            discount_start=None,
            discount_end=None,
            created_at=datetime(2024, 1, 1),
            updated_at=datetime(2024, 1, 1),
        )
        fields.update(overrides)
        return Product(**fields)

    return _make


@pytest.fixture
def make_order():
    """Factory for a persisted order: 3 x 10.00 net at 20% plus 5.00 shipping"""

    def _make(**overrides):
        fields = dict(
            id="order_1",
            order_number="0000042",
            user_email="ivan@example.com",
            user_uid="uid_123",
            first_name="Ivan",
            last_name="Petrov",
            phone="+359888123456",
            delivery_option="address",
            address="1 Vitosha Blvd",
            city="Sofia",
            postal_code="1000",
            payment_method="cash",
            language="en",
            items=[
                {
                    "product_id": "prod_1",
                    "name": "Vertuo 2024",
                    "quantity": 3,
                    "unit_price_net": "10.00",
                    "unit_price_gross": "12.00",
                    "unit_vat_amount": "2.00",
                    "vat_rate": "0.20",
                    "line_total_net": "30.00",
                    "line_total_gross": "36.00",
                    "line_vat_amount": "6.00",
                    "currency": "BGN",
                    "discounted": False,
                    "discount_percent": None,
                    "original_price_net": "10.00",
                    "original_price_gross": "12.00",
                }
            ],
            subtotal_net=Decimal("30.00"),
            subtotal_gross=Decimal("36.00"),
            subtotal_vat=Decimal("6.00"),
            shipping_net=Decimal("5.00"),
            shipping_gross=Decimal("6.00"),
            shipping_vat=Decimal("1.00"),
            shipping_vat_rate=Decimal("0.20"),
            total_net=Decimal("35.00"),
            total_gross=Decimal("42.00"),
            total_vat=Decimal("7.00"),
            currency="BGN",
            created_at=datetime(2024, 6, 15, 12, 0, 0),
        )
        fields.update(overrides)
        return Order(**fields)

    return _make
