"""SendOrderConfirmation Use Case

E-mails the order confirmation for an existing order.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.email_service import EmailService
from src.app.services.item_names import resolve_display_items
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.product_repository import ProductRepository
from src.domain.exceptions import DownstreamServiceError
from .dtos import SendOrderConfirmationResponseDTO

logger = logging.getLogger(__name__)


class SendOrderConfirmation:
    """
    Use Case: Send order confirmation e-mail

    Business Rules:
    1. Order must exist
    2. Item names are resolved best-effort from the catalog
    3. Delivery failure is reported, not retried
    """

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        email_service: EmailService,
    ):
        self.order_repo = order_repo
        self.product_repo = product_repo
        self.email_service = email_service

    async def execute(self, order_id: str) -> Result[SendOrderConfirmationResponseDTO]:
        try:
            order = await self.order_repo.get_by_id(order_id)
            if not order:
                return Return.err(
                    Error(
                        code="ORDER_NOT_FOUND",
                        message=f"Order with ID {order_id} not found",
                        reason="Order does not exist",
                    )
                )

            items = await resolve_display_items(self.product_repo, order.items)
            await self.email_service.send_order_confirmation(order, items, order.user_email)

            logger.info(f"Order confirmation sent for order {order.order_number}")
            return Return.ok(
                SendOrderConfirmationResponseDTO(
                    order_id=order.id,
                    order_number=order.order_number,
                    recipient_email=order.user_email,
                )
            )

        except DownstreamServiceError as e:
            logger.error(f"Order confirmation for {order_id}: {e}")
            return Return.err(
                Error(
                    code="DOWNSTREAM_FAILURE",
                    message=f"{e.service} failed for order {order_id}",
                    reason=e.reason,
                )
            )
        except Exception as e:
            return Return.err(
                Error(
                    code="SEND_ORDER_CONFIRMATION_FAILED",
                    message="Failed to send order confirmation",
                    reason=str(e),
                )
            )
