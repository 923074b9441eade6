"""PDF Generation Service Interface

Defines the contract for invoice document rendering.
"""

from abc import ABC, abstractmethod
from src.domain.invoice import Invoice


class PdfService(ABC):
    """
    Service interface for PDF generation

    Renders an invoice snapshot into a PDF document.
    """

    @abstractmethod
    def render_invoice(self, invoice: Invoice) -> bytes:
        """
        Render an invoice PDF

        Args:
            invoice: Invoice with snapshot data and allocated number

        Returns:
            PDF document as bytes
        """
        pass
