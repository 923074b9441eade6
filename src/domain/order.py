"""Order Domain Entity

Customer order with priced line items and a VAT breakdown.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional
from sqlmodel import Field, Column, Index
from sqlalchemy import JSON, Numeric, String
from src.domain.base import BaseModel, generate_uuid


class OrderStatus(str, Enum):
    """Order status types"""
    PENDING = "pending"


class Order(BaseModel, table=True):
    """
    Order - Snapshot of a customer purchase

    Domain Rules:
    - order_number is unique and allocated from the "orders" counter
    - items hold PricedLineItem dumps (decimals encoded as strings)
    - total_gross == subtotal_gross + shipping_gross
    - total_gross == subtotal_net + shipping_net + total_vat (within 0.01)
    - Never mutated after creation; invoices read it as the source of truth
    """

    __tablename__ = "orders"
    __table_args__ = (
        Index('ix_orders_order_number', 'order_number', unique=True),
        Index('ix_orders_user_uid', 'user_uid'),
    )

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Order identifier"
    )

    order_number: str = Field(
        sa_column=Column(String(20), nullable=False),
        description="Human-facing order number (e.g., 0000042)"
    )

    user_email: str = Field(description="Customer e-mail")
    user_uid: str = Field(description="Customer account identifier")
    first_name: str = Field(description="Customer first name")
    last_name: str = Field(description="Customer last name")
    phone: str = Field(description="Customer phone")
    delivery_option: str = Field(description="Delivery option (e.g., address, office)")
    address: str = Field(description="Delivery street address")
    city: str = Field(description="Delivery city")
    postal_code: str = Field(description="Delivery postal code")
    payment_method: str = Field(description="Payment method (card, cash)")

    language: str = Field(
        default="en",
        sa_column=Column(String(5), nullable=False, default="en"),
        description="Customer language for documents"
    )

    items: List[Dict[str, Any]] = Field(
        default_factory=list,
        sa_column=Column(JSON, nullable=False),
        description="Priced line items"
    )

    subtotal_net: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))
    subtotal_gross: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))
    subtotal_vat: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))

    shipping_net: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))
    shipping_gross: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))
    shipping_vat: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))
    shipping_vat_rate: Decimal = Field(sa_column=Column(Numeric(5, 4), nullable=False))

    total_net: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))
    total_gross: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))
    total_vat: Decimal = Field(sa_column=Column(Numeric(12, 2), nullable=False))

    currency: str = Field(
        default="BGN",
        sa_column=Column(String(3), nullable=False),
        description="Currency code (ISO 4217)"
    )

    status: OrderStatus = Field(
        default=OrderStatus.PENDING,
        description="Order status"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Order creation timestamp"
    )

    @property
    def customer_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": "3f2a9c1e0b7d4e5f8a6b1c2d3e4f5a6b",
                "order_number": "0000042",
                "user_email": "ivan@example.com",
                "first_name": "Ivan",
                "last_name": "Petrov",
                "subtotal_net": "30.00",
                "subtotal_gross": "36.00",
                "shipping_net": "5.00",
                "shipping_gross": "6.00",
                "total_gross": "42.00",
                "total_vat": "7.00",
                "currency": "BGN",
                "status": "pending",
            }
        }
