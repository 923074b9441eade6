"""Product Domain Entity

Catalog item with net price, VAT rate and an optional discount window.
Read-only to ordering and invoicing; written by catalog maintenance.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from sqlmodel import Field, Column
from sqlalchemy import Boolean, Numeric, String
from src.domain.base import BaseModel, generate_uuid


class Product(BaseModel, table=True):
    """
    Product - Catalog item priced net of VAT

    Domain Rules:
    - price is the net unit price (VAT excluded)
    - vat_rate is a fraction (0.20), never a percentage integer
    - vat_rate/currency may be missing on legacy records (defaults apply)
    - A discount is in effect only when discounted is set, discount_percent > 0,
      discount_start <= now and (discount_end is None or discount_end >= now)
    """

    __tablename__ = "products"

    id: str = Field(
        default_factory=generate_uuid,
        primary_key=True,
        description="Product identifier"
    )

    name: str = Field(
        sa_column=Column(String(255), nullable=False),
        description="Model name"
    )

    brand: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100), nullable=True),
        description="Brand name shown before the model name"
    )

    image_url: Optional[str] = Field(
        default=None,
        sa_column=Column(String(500), nullable=True),
        description="Product image URL"
    )

    price: Decimal = Field(
        sa_column=Column(Numeric(12, 2), nullable=False),
        description="Net unit price (VAT excluded)"
    )

    vat_rate: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(5, 4), nullable=True),
        description="VAT rate as a fraction (None = default 0.20)"
    )

    currency: Optional[str] = Field(
        default=None,
        sa_column=Column(String(3), nullable=True),
        description="Currency code (None = default BGN)"
    )

    discounted: bool = Field(
        default=False,
        sa_column=Column(Boolean, nullable=False, default=False),
        description="Discount active flag"
    )

    discount_percent: Optional[Decimal] = Field(
        default=None,
        sa_column=Column(Numeric(5, 2), nullable=True),
        description="Discount percent (10 = 10%)"
    )

    discount_start: Optional[datetime] = Field(
        default=None,
        description="Discount window start (UTC)"
    )

    discount_end: Optional[datetime] = Field(
        default=None,
        description="Discount window end (UTC, None = open-ended)"
    )

    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Product creation timestamp"
    )

    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Last update timestamp"
    )

    @property
    def display_name(self) -> str:
        """Brand-prefixed name used on invoices and e-mails"""
        if self.brand:
            return f"{self.brand} {self.name}"
        return self.name

    class Config:
        """SQLModel configuration"""
        json_schema_extra = {
            "example": {
                "id": "bbx-vertuo-2024",
                "name": "Vertuo 2024",
                "brand": "Babolat",
                "price": "250.00",
                "vat_rate": "0.2000",
                "currency": "BGN",
                "discounted": True,
                "discount_percent": "10.00",
                "discount_start": "2024-05-01T00:00:00Z",
                "discount_end": None,
            }
        }
