"""E-mail Service Interface

Defines the contract for transactional e-mails sent to customers.
"""

from abc import ABC, abstractmethod
from typing import List
from src.domain.invoice import Invoice
from src.domain.order import Order
from src.app.services.item_names import DisplayItem


class EmailService(ABC):
    """
    Abstract e-mail service

    Implementations raise DownstreamServiceError when delivery fails;
    failures are never reported through a return value.
    """

    @abstractmethod
    async def send_invoice(self, invoice: Invoice, pdf_bytes: bytes, recipient: str) -> None:
        """
        Send the shipment notice with the invoice PDF attached

        Args:
            invoice: Issued invoice (snapshot provides the template data)
            pdf_bytes: Rendered invoice document
            recipient: Destination address
        """
        pass

    @abstractmethod
    async def send_order_confirmation(
        self, order: Order, items: List[DisplayItem], recipient: str
    ) -> None:
        """
        Send the order confirmation

        Args:
            order: Persisted order
            items: Order lines with resolved display names
            recipient: Destination address
        """
        pass
