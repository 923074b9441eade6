"""Unit tests for e-mail service implementations"""

import smtplib
import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock, patch

from src.adapter.services.email_service import (
    LoggingEmailService,
    SmtpEmailService,
    create_email_service,
    invoice_template_context,
)
from src.app.services.item_names import DisplayItem
from src.domain.exceptions import DownstreamServiceError
from src.domain.invoice import Invoice


@pytest.fixture
def invoice():
    return Invoice(
        order_id="order_1",
        order_reference="0000042",
        invoice_number="0100000001",
        issue_date=date(2024, 6, 16),
        user_email="ivan@example.com",
        customer={
            "name": "Ivan Petrov",
            "first_name": "Ivan",
            "address": "1 Vitosha Blvd",
            "city": "Sofia",
            "delivery_option": "address",
        },
        company={},
        items=[{"name": "Bullpadel Vertuo 2024", "quantity": 3, "unit_price_gross": "12.00", "line_total_gross": "36.00"}],
        subtotal_net=Decimal("30.00"),
        subtotal_gross=Decimal("36.00"),
        vat_total=Decimal("7.00"),
        shipping_cost=Decimal("6.00"),
        total=Decimal("42.00"),
        payment_method="Pay by Card on Delivery",
        currency="BGN",
    )


@pytest.fixture
def smtp_service():
    return SmtpEmailService(
        host="smtp.example.com",
        port=465,
        username="orders@example.com",
        password="secret",
    )


class TestTemplates:
    def test_invoice_context(self, invoice):
        context = invoice_template_context(invoice)

        assert context["first_name"] == "Ivan"
        assert context["order_id"] == "0000042"
        assert context["sub_total"] == "36.00"
        assert context["shipping"] == "6.00"
        assert context["total"] == "42.00"
        assert context["shipping_address"] == "1 Vitosha Blvd, Sofia"
        assert context["payment_method"] == "Pay by Card on Delivery"

    def test_shipment_template_renders(self, smtp_service, invoice):
        html = smtp_service.render_template("order_shipment.html", invoice_template_context(invoice))

        assert "Hi Ivan" in html
        assert "Bullpadel Vertuo 2024" in html
        assert "42.00 BGN" in html

    def test_template_escapes_html(self, smtp_service, invoice):
        invoice.customer = {**invoice.customer, "first_name": "<script>"}

        html = smtp_service.render_template("order_shipment.html", invoice_template_context(invoice))

        assert "<script>" not in html
        assert "&lt;script&gt;" in html


class TestSmtpEmailService:
    def test_message_has_pdf_attachment(self, smtp_service):
        msg = smtp_service.build_message(
            "ivan@example.com",
            "Subject",
            "<p>Hi</p>",
            attachments=[("0100000001.pdf", b"%PDF-1.4")],
        )

        attachments = [part for part in msg.walk() if part.get_filename()]
        assert [part.get_filename() for part in attachments] == ["0100000001.pdf"]
        assert attachments[0].get_content_type() == "application/pdf"
        assert attachments[0].get_payload(decode=True) == b"%PDF-1.4"
        assert msg["To"] == "ivan@example.com"
        assert "Sofia Padel" in msg["From"]

    @pytest.mark.asyncio
    async def test_send_invoice_uses_ssl_connection(self, smtp_service, invoice):
        with patch("src.adapter.services.email_service.smtplib.SMTP_SSL") as smtp_ssl:
            server = smtp_ssl.return_value

            await smtp_service.send_invoice(invoice, b"%PDF-1.4", "ivan@example.com")

        server.login.assert_called_once_with("orders@example.com", "secret")
        from_addr, to_addrs, _ = server.sendmail.call_args[0]
        assert from_addr == "orders@example.com"
        assert to_addrs == ["ivan@example.com"]

    @pytest.mark.asyncio
    async def test_smtp_failure_is_wrapped(self, smtp_service, invoice):
        with patch(
            "src.adapter.services.email_service.smtplib.SMTP_SSL",
            side_effect=smtplib.SMTPConnectError(421, "unavailable"),
        ):
            with pytest.raises(DownstreamServiceError) as exc_info:
                await smtp_service.send_invoice(invoice, b"%PDF-1.4", "ivan@example.com")

        assert exc_info.value.service == "email"


class TestFactory:
    def test_smtp_backend(self):
        assert isinstance(create_email_service("smtp", host="smtp.example.com"), SmtpEmailService)

    def test_smtp_without_host_falls_back_to_logging(self):
        assert isinstance(create_email_service("smtp"), LoggingEmailService)

    @pytest.mark.asyncio
    async def test_logging_backend_never_fails(self, invoice):
        service = create_email_service("logging")

        await service.send_invoice(invoice, b"%PDF", "ivan@example.com")
        await service.send_order_confirmation(
            MagicMock(order_number="0000042"),
            [DisplayItem(name="Vertuo", quantity=1)],
            "ivan@example.com",
        )
