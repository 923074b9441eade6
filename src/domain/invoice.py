"""Invoice Domain Entity

Issued invoice for an order, with a denormalized snapshot and the
rendered PDF.
"""

from datetime import datetime, date
from decimal import Decimal
from typing import Any, Dict, List
from sqlmodel import Field, Column, Index
from sqlalchemy import JSON, Numeric, String, Date, Text
from src.domain.base import BaseModel, generate_uuid


class Invoice(BaseModel, table=True):
    """
    Invoice - Immutable invoice issued for exactly one order

    Domain Rules:
    - order_id is unique (one invoice per order, enforced by the database)
    - invoice_number is unique and allocated from the invoice counter
    - customer/company/items/totals are copied at issue time so later
      catalog or order edits never alter an issued invoice
    - pdf_base64 holds the rendered document; re-issuing returns it as-is
    """

    __tablename__ = "invoices"
    __table_args__ = (
        Index('ix_invoices_order_id', 'order_id', unique=True),
        Index('ix_invoices_invoice_number', 'invoice_number', unique=True),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Invoice identifier"
    )

    order_id: str = Field(
        sa_column=Column(String(64), nullable=False),
        description="Order this invoice was issued for"
    )

    order_reference: str = Field(
        sa_column=Column(String(20), nullable=False),
        description="Human-facing order number printed on the invoice"
    )

    invoice_number: str = Field(
        sa_column=Column(String(20), nullable=False),
        description="Unique invoice number (e.g., 0100000001)"
    )

    issue_date: date = Field(
        sa_column=Column(Date, nullable=False),
        description="Issue date"
    )

    user_email: str = Field(description="Customer e-mail at issue time")

    customer: Dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSON, nullable=False),
        description="Customer snapshot (name, address, city, postal_code, phone, ...)"
    )

    company: Dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSON, nullable=False),
        description="Seller snapshot (name, address, city, vat_number)"
    )

    items: List[Dict[str, Any]] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
        description="Line item snapshot with resolved display names"
    )

    subtotal_net: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))
    subtotal_gross: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))
    vat_total: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))
    shipping_cost: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))
    total: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))

    payment_method: str = Field(
        sa_column=Column(String(100), nullable=False),
        description="Payment method label printed on the invoice"
    )

    currency: str = Field(
        default="BGN",
        sa_column=Column(String(3), nullable=False),
        description="Currency code (ISO 4217)"
    )

    language: str = Field(
        default="en",
        sa_column=Column(String(5), nullable=False),
        description="Document language"
    )

    pdf_base64: str = Field(
        default="",
        sa_column=Column(Text, nullable=False),
        description="Rendered PDF, base64-encoded"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Invoice creation timestamp"
    )

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "order_id": "3f2a9c1e0b7d4e5f8a6b1c2d3e4f5a6b",
                "order_reference": "0000042",
                "invoice_number": "0100000001",
                "issue_date": "2024-06-01",
                "subtotal_net": "30.00",
                "subtotal_gross": "36.00",
                "vat_total": "7.00",
                "shipping_cost": "6.00",
                "total": "42.00",
                "payment_method": "Cash on Delivery",
                "currency": "BGN",
            }
        }
