"""CreateOrder Use Case

Prices the requested items, aggregates the VAT breakdown, allocates an
order number and persists the order.
"""

import logging
from datetime import datetime
from typing import Callable, Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.number_allocator import NumberAllocator, SequenceSpec, ORDER_SEQUENCE
from src.app.repositories.product_repository import ProductRepository
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.customer_profile_repository import CustomerProfileRepository
from src.domain.customer_profile import CustomerProfile
from src.domain.exceptions import AllocationConflictError
from src.domain.order import Order, OrderStatus
from src.domain.order_totals import OrderTotalsCalculator
from src.domain.pricing import PricingEngine
from .dtos import CreateOrderCommandDTO, CreateOrderResponseDTO

logger = logging.getLogger(__name__)


class CreateOrder:
    """
    Use Case: Create an order

    Business Rules:
    1. Every product must exist; otherwise nothing is persisted
    2. Pricing uses the catalog at request time (discount window included)
    3. Shipping VAT uses the first item's rate (0.20 when unknown)
    4. Order number comes from the "orders" counter (zero-padded to 7)
    5. Order and customer profile are committed together

    Flow:
    1. Price each line item
    2. Aggregate order totals
    3. Allocate order number
    4. Persist order and refresh customer profile
    5. Commit transaction
    6. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
        profile_repo: CustomerProfileRepository,
        allocator: NumberAllocator,
        sequence: SequenceSpec = ORDER_SEQUENCE,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.uow = uow
        self.product_repo = product_repo
        self.order_repo = order_repo
        self.profile_repo = profile_repo
        self.allocator = allocator
        self.sequence = sequence
        self.clock = clock or datetime.utcnow

    async def execute(self, command: CreateOrderCommandDTO) -> Result[CreateOrderResponseDTO]:
        """
        Execute order creation

        Args:
            command: CreateOrderCommandDTO with customer details and items

        Returns:
            Result[CreateOrderResponseDTO]: Success with order totals or error
        """
        try:
            now = self.clock()

            # Step 1: Price each line item
            lines = []
            for item in command.items:
                product = await self.product_repo.get_by_id(item.product_id)
                if not product:
                    return Return.err(
                        Error(
                            code="PRODUCT_NOT_FOUND",
                            message=f"Product not found: {item.product_id}",
                            reason="Product does not exist",
                        )
                    )
                unit = PricingEngine.price(product, at=now)
                lines.append(OrderTotalsCalculator.price_line(unit, item.quantity, name=product.name))

            # Step 2: Aggregate totals
            totals = OrderTotalsCalculator.aggregate(lines, shipping_net=command.shipping_cost)

            # Step 3: Allocate order number
            order_number = await self.allocator.next_for(self.sequence)

            # Step 4: Persist order
            order = Order(
                order_number=order_number,
                user_email=command.user_email,
                user_uid=command.user_uid,
                first_name=command.first_name,
                last_name=command.last_name,
                phone=command.phone,
                delivery_option=command.delivery_option,
                address=command.address,
                city=command.city,
                postal_code=command.postal_code,
                payment_method=command.payment_method,
                language=command.language,
                items=[line.model_dump(mode="json") for line in lines],
                subtotal_net=totals.subtotal_net,
                subtotal_gross=totals.subtotal_gross,
                subtotal_vat=totals.subtotal_vat,
                shipping_net=totals.shipping_net,
                shipping_gross=totals.shipping_gross,
                shipping_vat=totals.shipping_vat,
                shipping_vat_rate=totals.shipping_vat_rate,
                total_net=totals.total_net,
                total_gross=totals.total_gross,
                total_vat=totals.total_vat,
                currency=OrderTotalsCalculator.currency_of(lines),
                status=OrderStatus.PENDING,
                created_at=now,
            )
            created_order = await self.order_repo.create(order)

            await self._refresh_profile(command, now)

            # Step 5: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Order {created_order.order_number} created for {command.user_email}: "
                f"{created_order.total_gross} {created_order.currency}"
            )

            # Step 6: Build response
            return Return.ok(
                CreateOrderResponseDTO(
                    order_id=created_order.id,
                    order_number=created_order.order_number,
                    subtotal_net=created_order.subtotal_net,
                    subtotal_gross=created_order.subtotal_gross,
                    total_vat=created_order.total_vat,
                    total_net=created_order.total_net,
                    total_gross=created_order.total_gross,
                    currency=created_order.currency,
                    created_at=created_order.created_at,
                )
            )

        except AllocationConflictError as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="ALLOCATION_CONFLICT",
                    message="Could not allocate an order number, please retry",
                    reason=str(e),
                )
            )
        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Order creation failed: {e}")
            return Return.err(
                Error(
                    code="CREATE_ORDER_FAILED",
                    message="Failed to create order",
                    reason=str(e),
                )
            )

    async def _refresh_profile(self, command: CreateOrderCommandDTO, now: datetime) -> None:
        profile = await self.profile_repo.get_by_user_uid(command.user_uid)
        if profile is None:
            profile = CustomerProfile(user_uid=command.user_uid, email=command.user_email, created_at=now)

        profile.email = command.user_email
        profile.first_name = command.first_name
        profile.last_name = command.last_name
        profile.phone = command.phone
        profile.address = command.address
        profile.city = command.city
        profile.postal_code = command.postal_code
        profile.preferred_payment = command.payment_method
        profile.updated_at = now
        await self.profile_repo.save(profile)
