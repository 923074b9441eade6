"""Invoice Repository Interface

Defines the contract for invoice persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.invoice import Invoice


class InvoiceRepository(ABC):
    """
    Repository interface for Invoice persistence

    At most one invoice exists per order; the store enforces it.
    """

    @abstractmethod
    async def create(self, invoice: Invoice) -> Invoice:
        """
        Create a new invoice

        Args:
            invoice: Invoice entity to persist

        Returns:
            Created Invoice

        Raises:
            DuplicateIssuanceError: If an invoice already exists for invoice.order_id
        """
        pass

    @abstractmethod
    async def get_by_order_id(self, order_id: str) -> Optional[Invoice]:
        """
        Retrieve the invoice issued for an order

        Used for idempotent re-issuance.

        Args:
            order_id: Order identifier

        Returns:
            Invoice if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_invoice_number(self, invoice_number: str) -> Optional[Invoice]:
        """
        Retrieve invoice by invoice number

        Args:
            invoice_number: Unique invoice number

        Returns:
            Invoice if found, None otherwise
        """
        pass
