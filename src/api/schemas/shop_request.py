"""Request schemas for Shop API

Pydantic models for validating incoming HTTP requests.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator


class OrderItemRequestSchema(BaseModel):
    product_id: str = Field(..., min_length=1, description="Catalog product identifier")
    quantity: int = Field(..., ge=1, description="Quantity (>= 1)")


class CreateOrderRequestSchema(BaseModel):
    """
    Request schema for placing an order

    Used for POST /orders endpoint.
    """

    user_email: str = Field(..., min_length=3, description="Customer e-mail")
    user_uid: str = Field(..., min_length=1, description="Customer account id")
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    delivery_option: str = Field(..., min_length=1, description="address or office")
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    postal_code: str = Field(..., min_length=1)
    payment_method: str = Field(..., min_length=1, description="card or cash")
    items: List[OrderItemRequestSchema] = Field(..., min_length=1)
    shipping_cost: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Shipping cost excluding VAT"
    )
    language: str = Field(default="en", max_length=5)

    class Config:
        json_schema_extra = {
            "example": {
                "user_email": "ivan@example.com",
                "user_uid": "uid_123",
                "first_name": "Ivan",
                "last_name": "Petrov",
                "phone": "+359888123456",
                "delivery_option": "address",
                "address": "1 Vitosha Blvd",
                "city": "Sofia",
                "postal_code": "1000",
                "payment_method": "card",
                "items": [{"product_id": "3f2a9c1e0b7d4e5f8a6b1c2d3e4f5a6b", "quantity": 2}],
                "shipping_cost": "5.00",
                "language": "bg",
            }
        }


class IssueInvoiceRequestSchema(BaseModel):
    """
    Request schema for issuing an invoice

    Used for POST /invoices endpoint.
    """

    order_id: str = Field(..., min_length=1, description="Order identifier")
    recipient_email: Optional[str] = Field(
        default=None,
        description="Send to this address instead of the customer"
    )


class UpdatePricingRequestSchema(BaseModel):
    """
    Request schema for catalog pricing changes

    Used for PATCH /products/{product_id}/pricing. Omitted fields are
    left unchanged.
    """

    price: Optional[Decimal] = Field(default=None, ge=0)
    vat_rate: Optional[Decimal] = Field(default=None, ge=0, le=1)
    discounted: Optional[bool] = None
    discount_percent: Optional[Decimal] = Field(default=None, ge=0, le=100)
    discount_start: Optional[datetime] = None
    discount_end: Optional[datetime] = None

    @field_validator("price", "discounted", mode="before")
    @classmethod
    def not_null(cls, v, info):
        """price and discounted may be omitted but never cleared"""
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    @field_validator("discount_start", "discount_end")
    @classmethod
    def to_naive_utc(cls, v):
        """Stored timestamps are naive UTC"""
        if v is not None and v.tzinfo is not None:
            return v.astimezone(timezone.utc).replace(tzinfo=None)
        return v

    @model_validator(mode="after")
    def check_window(self):
        if self.discount_start and self.discount_end and self.discount_end < self.discount_start:
            raise ValueError("discount_end must not be before discount_start")
        return self
