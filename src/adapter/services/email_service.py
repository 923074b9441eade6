"""E-mail Service Implementations

Provides concrete implementations for customer e-mails.
"""

import asyncio
import logging
import smtplib
import ssl
from email import encoders
from email.mime.base import MIMEBase
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
from jinja2 import Environment, FileSystemLoader, select_autoescape
from src.app.services.email_service import EmailService
from src.app.services.item_names import DisplayItem
from src.domain.exceptions import DownstreamServiceError
from src.domain.invoice import Invoice
from src.domain.order import Order

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"

INVOICE_SUBJECT = "Your So Padel order has been shipped"
CONFIRMATION_SUBJECT = "Order Confirmation - Sofia Padel"

Attachment = Tuple[str, bytes]


def _money(value: Any) -> str:
    return f"{float(value or 0):.2f}"


def invoice_template_context(invoice: Invoice) -> Dict[str, Any]:
    """Template variables for the shipment notice, taken from the invoice snapshot"""
    customer = invoice.customer or {}
    address = f"{customer.get('address', '')}, {customer.get('city', '')}"
    return {
        "first_name": customer.get("first_name") or customer.get("name", ""),
        "order_id": invoice.order_reference,
        "invoice_number": invoice.invoice_number,
        "items": [
            {
                "name": item.get("name", ""),
                "quantity": item.get("quantity", 0),
                "price": _money(item.get("unit_price_gross")),
                "total": _money(item.get("line_total_gross")),
            }
            for item in invoice.items
        ],
        "sub_total": _money(invoice.subtotal_gross),
        "shipping": _money(invoice.shipping_cost),
        "total": _money(invoice.total),
        "currency": invoice.currency,
        "shipping_address": address,
        "billing_address": address,
        "shipping_method": customer.get("delivery_option", ""),
        "payment_method": invoice.payment_method,
    }


def confirmation_template_context(order: Order, items: List[DisplayItem]) -> Dict[str, Any]:
    """Template variables for the order confirmation"""
    return {
        "customer_name": order.customer_name,
        "order_number": order.order_number,
        "items": [
            {
                "name": item.name,
                "image_url": item.image_url,
                "quantity": item.quantity,
                "price": _money(item.unit_price_gross),
                "total": _money(item.line_total_gross),
            }
            for item in items
        ],
        "subtotal": _money(order.subtotal_gross),
        "shipping": _money(order.shipping_gross),
        "vat": _money(order.total_vat),
        "total": _money(order.total_gross),
        "currency": order.currency,
        "shipping_address": f"{order.address}, {order.city} {order.postal_code}",
        "delivery_option": order.delivery_option,
        "payment_method": order.payment_method,
        "phone": order.phone,
    }


class LoggingEmailService(EmailService):
    """
    E-mail service that logs messages instead of sending them

    Useful for development and testing.
    """

    async def send_invoice(self, invoice: Invoice, pdf_bytes: bytes, recipient: str) -> None:
        logger.info(
            f"[EMAIL] To: {recipient}, Subject: {INVOICE_SUBJECT}, "
            f"Attachment: {invoice.invoice_number}.pdf ({len(pdf_bytes)} bytes)"
        )

    async def send_order_confirmation(
        self, order: Order, items: List[DisplayItem], recipient: str
    ) -> None:
        logger.info(
            f"[EMAIL] To: {recipient}, Subject: {CONFIRMATION_SUBJECT}, "
            f"Order: {order.order_number}, Items: {len(items)}"
        )


class SmtpEmailService(EmailService):
    """
    E-mail service that sends HTML mail over SMTP

    Bodies are rendered from Jinja2 templates; smtplib calls run in a
    worker thread so the event loop is not blocked.
    """

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        use_ssl: bool = True,
        from_name: str = "Sofia Padel",
        timeout: float = 30.0,
        template_dir: Path = TEMPLATE_DIR,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_ssl = use_ssl
        self.from_name = from_name
        self.timeout = timeout
        self.jinja_env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
        )

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        template = self.jinja_env.get_template(template_name)
        return template.render(**context)

    def build_message(
        self,
        recipient: str,
        subject: str,
        html_content: str,
        text_content: Optional[str] = None,
        attachments: Optional[List[Attachment]] = None,
    ) -> MIMEMultipart:
        """
        Assemble a MIME message

        Args:
            recipient: Destination address
            subject: Subject line
            html_content: Rendered HTML body
            text_content: Optional plain text alternative
            attachments: (filename, bytes) pairs sent as application/pdf

        Returns:
            MIMEMultipart message ready to send
        """
        msg = MIMEMultipart("mixed")
        msg["Subject"] = subject
        msg["From"] = f'"{self.from_name}" <{self.username}>'
        msg["To"] = recipient

        body = MIMEMultipart("alternative")
        if text_content:
            body.attach(MIMEText(text_content, "plain", "utf-8"))
        body.attach(MIMEText(html_content, "html", "utf-8"))
        msg.attach(body)

        for filename, content in attachments or []:
            part = MIMEBase("application", "pdf")
            part.set_payload(content)
            encoders.encode_base64(part)
            part.add_header("Content-Disposition", f'attachment; filename="{filename}"')
            msg.attach(part)

        return msg

    def _deliver(self, recipient: str, msg: MIMEMultipart) -> None:
        if self.use_ssl:
            context = ssl.create_default_context()
            server = smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout, context=context)
        else:
            server = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        with server:
            if not self.use_ssl:
                server.starttls(context=ssl.create_default_context())
            server.login(self.username, self.password)
            server.sendmail(self.username, [recipient], msg.as_string())

    async def _send(self, recipient: str, msg: MIMEMultipart) -> None:
        try:
            await asyncio.to_thread(self._deliver, recipient, msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send '{msg['Subject']}' to {recipient}: {e}")
            raise DownstreamServiceError("email", str(e)) from e
        logger.info(f"Email '{msg['Subject']}' sent to {recipient}")

    async def send_invoice(self, invoice: Invoice, pdf_bytes: bytes, recipient: str) -> None:
        html = self.render_template("order_shipment.html", invoice_template_context(invoice))
        msg = self.build_message(
            recipient,
            INVOICE_SUBJECT,
            html,
            text_content=(
                "Thank you for your purchase! Your invoice is attached. "
                f"Your order reference is: {invoice.order_reference}"
            ),
            attachments=[(f"{invoice.invoice_number}.pdf", pdf_bytes)],
        )
        await self._send(recipient, msg)

    async def send_order_confirmation(
        self, order: Order, items: List[DisplayItem], recipient: str
    ) -> None:
        html = self.render_template(
            "order_confirmation.html", confirmation_template_context(order, items)
        )
        msg = self.build_message(recipient, CONFIRMATION_SUBJECT, html)
        await self._send(recipient, msg)


def create_email_service(
    backend: str,
    host: str = "",
    port: int = 465,
    username: str = "",
    password: str = "",
    use_ssl: bool = True,
    from_name: str = "Sofia Padel",
) -> EmailService:
    """
    Factory function to create the configured e-mail service

    Args:
        backend: "smtp" or "logging"; an smtp backend without a host
            falls back to logging

    Returns:
        EmailService instance
    """
    if backend == "smtp" and host:
        return SmtpEmailService(
            host=host,
            port=port,
            username=username,
            password=password,
            use_ssl=use_ssl,
            from_name=from_name,
        )
    return LoggingEmailService()
