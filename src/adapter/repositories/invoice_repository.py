"""SQLAlchemy Invoice Repository Implementation

Implements invoice persistence using SQLAlchemy async session.
"""

import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.invoice_repository import InvoiceRepository
from src.domain.exceptions import DuplicateIssuanceError
from src.domain.invoice import Invoice

logger = logging.getLogger(__name__)


class SqlAlchemyInvoiceRepository(InvoiceRepository):
    """
    SQLAlchemy implementation of InvoiceRepository

    The unique constraint on invoices.order_id decides concurrent
    issuances for the same order; the loser sees DuplicateIssuanceError.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice

        Raises:
            DuplicateIssuanceError: If the order already has an invoice
        """
        self.session.add(invoice)
        try:
            await self.session.flush()
        except IntegrityError as e:
            logger.warning(f"Invoice insert rejected for order {invoice.order_id}: {e.orig}")
            raise DuplicateIssuanceError(invoice.order_id) from e
        await self.session.refresh(invoice)
        return invoice

    async def get_by_order_id(self, order_id: str) -> Optional[Invoice]:
        """
        Retrieve the invoice issued for an order

        Args:
            order_id: Order identifier

        Returns:
            Invoice if found, None otherwise
        """
        statement = select(Invoice).where(Invoice.order_id == order_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_invoice_number(self, invoice_number: str) -> Optional[Invoice]:
        """
        Retrieve invoice by invoice number

        Args:
            invoice_number: Unique invoice number

        Returns:
            Invoice if found, None otherwise
        """
        statement = select(Invoice).where(Invoice.invoice_number == invoice_number)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()
