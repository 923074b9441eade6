"""IssueInvoice Use Case

Issues the invoice for an order exactly once and e-mails it. Repeated
requests for the same order re-send the stored document.
"""

import base64
import logging
from datetime import datetime
from typing import Callable, Optional
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.email_service import EmailService
from src.app.services.item_names import resolve_display_items
from src.app.services.number_allocator import NumberAllocator, SequenceSpec, INVOICE_SEQUENCE
from src.app.services.pdf_service import PdfService
from src.app.repositories.invoice_repository import InvoiceRepository
from src.app.repositories.order_repository import OrderRepository
from src.app.repositories.product_repository import ProductRepository
from src.domain.exceptions import (
    AllocationConflictError,
    DownstreamServiceError,
    DuplicateIssuanceError,
)
from src.domain.invoice import Invoice
from src.domain.order import Order
from .dtos import CompanyInfoDTO, IssueInvoiceCommandDTO, IssueInvoiceResponseDTO

logger = logging.getLogger(__name__)


def payment_method_label(payment_method: str) -> str:
    if payment_method == "card":
        return "Pay by Card on Delivery"
    return "Cash on Delivery"


class IssueInvoice:
    """
    Use Case: Issue or re-send the invoice for an order

    Business Rules:
    1. One invoice per order; the store rejects a second one
    2. Already issued: return the stored number and PDF, never re-price
       and never allocate a new number
    3. New invoice: totals come from the persisted order, not the live catalog
    4. Product names are looked up best-effort for display only
    5. Invoice is committed before e-mailing; a failed send leaves it issued

    Flow:
    1. Look up invoice by order
    2. If absent: load order, snapshot it, allocate number, render PDF,
       persist, commit
    3. E-mail PDF to override recipient or customer
    4. Return response
    """

    def __init__(
        self,
        uow: UnitOfWork,
        order_repo: OrderRepository,
        invoice_repo: InvoiceRepository,
        product_repo: ProductRepository,
        allocator: NumberAllocator,
        pdf_service: PdfService,
        email_service: EmailService,
        company: CompanyInfoDTO,
        sequence: SequenceSpec = INVOICE_SEQUENCE,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.uow = uow
        self.order_repo = order_repo
        self.invoice_repo = invoice_repo
        self.product_repo = product_repo
        self.allocator = allocator
        self.pdf_service = pdf_service
        self.email_service = email_service
        self.company = company
        self.sequence = sequence
        self.clock = clock or datetime.utcnow

    async def execute(self, command: IssueInvoiceCommandDTO) -> Result[IssueInvoiceResponseDTO]:
        """
        Execute invoice issuance

        Args:
            command: IssueInvoiceCommandDTO with order_id and optional recipient

        Returns:
            Result[IssueInvoiceResponseDTO]: Success with invoice number and PDF or error
        """
        try:
            # Step 1: Idempotency check
            invoice = await self.invoice_repo.get_by_order_id(command.order_id)
            reused = invoice is not None

            if invoice is not None:
                pdf_bytes = base64.b64decode(invoice.pdf_base64)
                logger.info(f"Re-sending invoice {invoice.invoice_number} for order {command.order_id}")
            else:
                # Step 2: Issue a new invoice
                order = await self.order_repo.get_by_id(command.order_id)
                if not order:
                    return Return.err(
                        Error(
                            code="ORDER_NOT_FOUND",
                            message=f"Order with ID {command.order_id} not found",
                            reason="Order does not exist",
                        )
                    )

                invoice = await self._build_invoice(order)
                invoice.invoice_number = await self.allocator.next_for(self.sequence)

                pdf_bytes = self.pdf_service.render_invoice(invoice)
                invoice.pdf_base64 = base64.b64encode(pdf_bytes).decode("utf-8")

                invoice = await self.invoice_repo.create(invoice)
                await self.uow.commit()
                logger.info(f"Issued invoice {invoice.invoice_number} for order {order.order_number}")

            # Step 3: E-mail
            recipient = command.recipient_email or invoice.user_email
            await self.email_service.send_invoice(invoice, pdf_bytes, recipient)

            # Step 4: Build response
            return Return.ok(
                IssueInvoiceResponseDTO(
                    invoice_number=invoice.invoice_number,
                    order_id=invoice.order_id,
                    order_reference=invoice.order_reference,
                    issue_date=invoice.issue_date,
                    total=invoice.total,
                    currency=invoice.currency,
                    recipient_email=recipient,
                    reused=reused,
                    pdf_base64=invoice.pdf_base64,
                )
            )

        except AllocationConflictError as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="ALLOCATION_CONFLICT",
                    message="Could not allocate an invoice number, please retry",
                    reason=str(e),
                )
            )
        except DuplicateIssuanceError as e:
            await self.uow.rollback()
            return Return.err(
                Error(
                    code="DUPLICATE_ISSUANCE",
                    message=f"Invoice for order {command.order_id} is already being issued",
                    reason=str(e),
                )
            )
        except DownstreamServiceError as e:
            await self.uow.rollback()
            logger.error(f"Invoice for order {command.order_id}: {e}")
            return Return.err(
                Error(
                    code="DOWNSTREAM_FAILURE",
                    message=f"{e.service} failed for order {command.order_id}",
                    reason=e.reason,
                )
            )
        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Invoice issuance failed for order {command.order_id}: {e}")
            return Return.err(
                Error(
                    code="ISSUE_INVOICE_FAILED",
                    message="Failed to issue invoice",
                    reason=str(e),
                )
            )

    async def _build_invoice(self, order: Order) -> Invoice:
        """Snapshot the order, company and display names into an unnumbered invoice"""
        display_items = await resolve_display_items(self.product_repo, order.items)
        items = [
            {**line, "name": display.name}
            for line, display in zip(order.items, display_items)
        ]

        return Invoice(
            order_id=order.id,
            order_reference=order.order_number or order.id,
            invoice_number="",
            issue_date=self.clock().date(),
            user_email=order.user_email,
            customer={
                "name": order.customer_name,
                "first_name": order.first_name,
                "address": order.address,
                "city": order.city,
                "postal_code": order.postal_code,
                "phone": order.phone,
                "delivery_option": order.delivery_option,
            },
            company=self.company.model_dump(),
            items=items,
            subtotal_net=order.subtotal_net,
            subtotal_gross=order.subtotal_gross,
            vat_total=order.total_vat,
            shipping_cost=order.shipping_gross,
            total=order.total_gross,
            payment_method=payment_method_label(order.payment_method),
            currency=order.currency or "BGN",
            language=order.language or "en",
        )
