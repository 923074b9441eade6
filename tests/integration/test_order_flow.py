"""Integration tests for CreateOrder against the database"""

import pytest
from decimal import Decimal

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.number_allocator import NumberAllocator
from src.app.use_cases.shop.create_order import CreateOrder
from src.app.use_cases.shop.dtos import CreateOrderCommandDTO, OrderItemCommandDTO
from src.domain.customer_profile import CustomerProfile
from src.domain.order import Order


def _command(**overrides):
    fields = dict(
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
        items=[OrderItemCommandDTO(product_id="vertuo", quantity=3)],
        shipping_cost=Decimal("5.00"),
    )
    fields.update(overrides)
    return CreateOrderCommandDTO(**fields)


def _use_case(session):
    uow = SqlAlchemyUnitOfWork(session)
    return CreateOrder(uow, uow.products, uow.orders, uow.profiles, NumberAllocator(uow.counters))


@pytest.mark.asyncio
class TestCreateOrderIntegration:
    async def test_order_is_persisted_with_totals(self, db_session, seed_products, make_product):
        await seed_products(make_product())

        result = await _use_case(db_session).execute(_command())

        assert result.is_ok()
        order = await db_session.get(Order, result.value.order_id)
        assert order.order_number == "0000001"
        assert order.subtotal_gross == Decimal("36.00")
        assert order.shipping_gross == Decimal("6.00")
        assert order.total_gross == Decimal("42.00")
        assert order.total_gross == order.subtotal_gross + order.shipping_gross
        assert order.items[0]["line_total_gross"] == "36.00"

    async def test_order_numbers_are_sequential(self, db_session, seed_products, make_product):
        await seed_products(make_product())

        first = await _use_case(db_session).execute(_command())
        second = await _use_case(db_session).execute(_command())

        assert first.value.order_number == "0000001"
        assert second.value.order_number == "0000002"

    async def test_customer_profile_is_upserted(self, db_session, seed_products, make_product):
        await seed_products(make_product())

        await _use_case(db_session).execute(_command(city="Plovdiv"))
        await _use_case(db_session).execute(_command(city="Varna", payment_method="card"))

        profile = await db_session.get(CustomerProfile, "uid_123")
        assert profile.city == "Varna"
        assert profile.preferred_payment == "card"

    async def test_unknown_product_persists_nothing(self, db_session, seed_products, make_product):
        await seed_products(make_product())
        command = _command(
            items=[
                OrderItemCommandDTO(product_id="vertuo", quantity=1),
                OrderItemCommandDTO(product_id="missing", quantity=1),
            ]
        )

        result = await _use_case(db_session).execute(command)
        retry = await _use_case(db_session).execute(_command())

        assert result.error.code == "PRODUCT_NOT_FOUND"
        # Failed request did not consume an order number
        assert retry.value.order_number == "0000001"
