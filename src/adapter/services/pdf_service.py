"""ReportLab PDF Generation Service Implementation

Implements invoice rendering using ReportLab library.
"""

import logging
from decimal import Decimal
from io import BytesIO
from typing import Any

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from src.app.services.pdf_service import PdfService
from src.domain.exceptions import DownstreamServiceError
from src.domain.invoice import Invoice

logger = logging.getLogger(__name__)


def _amount(value: Any) -> Decimal:
    return Decimal(str(value if value is not None else "0"))


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    Generates A4 invoices from the invoice snapshot only.
    """

    def render_invoice(self, invoice: Invoice) -> bytes:
        """
        Render an invoice PDF

        Args:
            invoice: Invoice with snapshot data and allocated number

        Returns:
            PDF document as bytes

        Raises:
            DownstreamServiceError: If ReportLab fails to build the document
        """
        try:
            return self._build(invoice)
        except Exception as e:
            logger.error(f"PDF rendering failed for invoice {invoice.invoice_number}: {e}")
            raise DownstreamServiceError("pdf rendering", str(e)) from e

    def _build(self, invoice: Invoice) -> bytes:
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=20 * mm,
            leftMargin=20 * mm,
            topMargin=20 * mm,
            bottomMargin=20 * mm,
            title=f"Invoice {invoice.invoice_number}",
        )

        styles = getSampleStyleSheet()
        elements = []
        currency = invoice.currency

        title_style = ParagraphStyle(
            "TitleStyle",
            parent=styles["Heading1"],
            fontSize=22,
            spaceAfter=6,
            textColor=colors.HexColor("#2C3E50"),
        )
        header_style = ParagraphStyle(
            "HeaderStyle",
            parent=styles["Normal"],
            fontSize=10,
            textColor=colors.HexColor("#7F8C8D"),
        )
        normal_style = ParagraphStyle(
            "NormalStyle",
            parent=styles["Normal"],
            fontSize=10,
        )
        bold_style = ParagraphStyle(
            "BoldStyle",
            parent=styles["Normal"],
            fontSize=10,
            fontName="Helvetica-Bold",
        )

        # Header - seller block
        company = invoice.company or {}
        elements.append(Paragraph(company.get("name", ""), title_style))
        elements.append(
            Paragraph(f"{company.get('address', '')}, {company.get('city', '')}", header_style)
        )
        if company.get("vat_number"):
            elements.append(Paragraph(f"VAT No: {company['vat_number']}", header_style))
        elements.append(Spacer(1, 8 * mm))
        elements.append(Paragraph("INVOICE", styles["Heading2"]))

        # Invoice details
        invoice_info = [
            ["Invoice Number:", invoice.invoice_number],
            ["Issue Date:", invoice.issue_date.strftime("%Y-%m-%d")],
            ["Order Reference:", invoice.order_reference],
            ["Payment Method:", invoice.payment_method],
        ]
        invoice_table = Table(invoice_info, colWidths=[40 * mm, 100 * mm])
        invoice_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("TEXTCOLOR", (0, 0), (0, -1), colors.HexColor("#7F8C8D")),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        elements.append(invoice_table)
        elements.append(Spacer(1, 8 * mm))

        # Customer block
        customer = invoice.customer or {}
        elements.append(Paragraph("Bill To:", bold_style))
        elements.append(Paragraph(customer.get("name", ""), normal_style))
        elements.append(Paragraph(customer.get("address", ""), normal_style))
        elements.append(
            Paragraph(
                f"{customer.get('postal_code', '')} {customer.get('city', '')}".strip(),
                normal_style,
            )
        )
        if customer.get("phone"):
            elements.append(Paragraph(customer["phone"], normal_style))
        elements.append(Paragraph(invoice.user_email, normal_style))
        elements.append(Spacer(1, 8 * mm))

        # Line items
        line_data = [["Item", "Quantity", "Unit Price", "Total"]]
        for item in invoice.items:
            line_data.append(
                [
                    Paragraph(str(item.get("name", "")), normal_style),
                    str(item.get("quantity", 0)),
                    f"{currency} {_amount(item.get('unit_price_gross')):,.2f}",
                    f"{currency} {_amount(item.get('line_total_gross')):,.2f}",
                ]
            )

        line_table = Table(line_data, colWidths=[80 * mm, 25 * mm, 30 * mm, 35 * mm])
        line_table.setStyle(
            TableStyle(
                [
                    # Header row
                    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#2C3E50")),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, 0), 10),
                    ("ALIGN", (0, 0), (-1, 0), "CENTER"),
                    # Data rows
                    ("FONTSIZE", (0, 1), (-1, -1), 9),
                    ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#BDC3C7")),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
                    ("TOPPADDING", (0, 0), (-1, -1), 6),
                    (
                        "ROWBACKGROUNDS",
                        (0, 1),
                        (-1, -1),
                        [colors.white, colors.HexColor("#F8F9F9")],
                    ),
                ]
            )
        )
        elements.append(line_table)
        elements.append(Spacer(1, 5 * mm))

        # Totals
        total_data = [
            ["", "", "Subtotal (net):", f"{currency} {_amount(invoice.subtotal_net):,.2f}"],
            ["", "", "VAT:", f"{currency} {_amount(invoice.vat_total):,.2f}"],
            ["", "", "Shipping:", f"{currency} {_amount(invoice.shipping_cost):,.2f}"],
            ["", "", "Total:", f"{currency} {_amount(invoice.total):,.2f}"],
        ]
        total_table = Table(total_data, colWidths=[80 * mm, 25 * mm, 30 * mm, 35 * mm])
        total_table.setStyle(
            TableStyle(
                [
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("ALIGN", (2, 0), (-1, -1), "RIGHT"),
                    ("FONTNAME", (2, -1), (-1, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (2, -1), (-1, -1), 11),
                    ("LINEABOVE", (2, -1), (-1, -1), 1.5, colors.HexColor("#2C3E50")),
                    ("TOPPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        elements.append(total_table)

        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes
