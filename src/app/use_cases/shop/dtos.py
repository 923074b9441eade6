"""Data Transfer Objects for Shop Use Cases

Pydantic models for command inputs and response outputs.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class OrderItemCommandDTO(BaseModel):
    """Requested order line"""

    product_id: str = Field(..., min_length=1, description="Product identifier")
    quantity: int = Field(..., ge=1, description="Requested quantity (>= 1)")


class CreateOrderCommandDTO(BaseModel):
    """
    Command DTO for creating an order

    Used as input to CreateOrder use case.
    """

    user_email: str = Field(..., min_length=1)
    user_uid: str = Field(..., min_length=1)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    phone: str = Field(..., min_length=1)
    delivery_option: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    postal_code: str = Field(..., min_length=1)
    payment_method: str = Field(..., min_length=1)
    items: List[OrderItemCommandDTO] = Field(..., min_length=1)
    shipping_cost: Decimal = Field(
        default=Decimal("0"),
        ge=0,
        description="Shipping cost excluding VAT"
    )
    language: str = Field(default="en", description="Customer language")

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
                "payment_method": "cash",
                "items": [{"product_id": "bbx-vertuo-2024", "quantity": 1}],
                "shipping_cost": "5.00",
            }
        }


class CreateOrderResponseDTO(BaseModel):
    """Response DTO returned by CreateOrder"""

    order_id: str
    order_number: str
    subtotal_net: Decimal
    subtotal_gross: Decimal
    total_vat: Decimal
    total_net: Decimal
    total_gross: Decimal
    currency: str
    created_at: datetime


class IssueInvoiceCommandDTO(BaseModel):
    """
    Command DTO for issuing (or re-sending) an invoice

    Used as input to IssueInvoice use case.
    """

    order_id: str = Field(..., min_length=1, description="Order identifier")
    recipient_email: Optional[str] = Field(
        default=None,
        description="Override recipient (defaults to the customer e-mail)"
    )


class IssueInvoiceResponseDTO(BaseModel):
    """Response DTO returned by IssueInvoice"""

    invoice_number: str
    order_id: str
    order_reference: str
    issue_date: date
    total: Decimal
    currency: str
    recipient_email: str
    reused: bool = Field(
        ...,
        description="True when a previously issued invoice was re-sent"
    )
    pdf_base64: str


class PricedProductDTO(BaseModel):
    """Catalog product with pricing evaluated at request time"""

    id: str
    name: str
    brand: Optional[str] = None
    image_url: Optional[str] = None
    currency: str
    vat_rate: Decimal
    price_net: Decimal
    vat_amount: Decimal
    price_gross: Decimal
    discounted: bool
    discount_percent: Optional[Decimal] = None
    discounted_price_net: Optional[Decimal] = None
    vat_amount_discounted: Optional[Decimal] = None
    discounted_price_gross: Optional[Decimal] = None
    discount_start: Optional[datetime] = None
    discount_end: Optional[datetime] = None


class ListProductsResponseDTO(BaseModel):
    products: List[PricedProductDTO]
    total: int


class UpdateProductPricingCommandDTO(BaseModel):
    """
    Command DTO for catalog price/discount changes

    Omitted fields are left unchanged.
    """

    product_id: str = Field(..., min_length=1)
    price: Optional[Decimal] = Field(default=None, ge=0)
    vat_rate: Optional[Decimal] = Field(default=None, ge=0, le=1)
    discounted: Optional[bool] = None
    discount_percent: Optional[Decimal] = Field(default=None, ge=0, le=100)
    discount_start: Optional[datetime] = None
    discount_end: Optional[datetime] = None


class BackfillResultDTO(BaseModel):
    """Response DTO returned by BackfillProductDefaults"""

    total_products: int
    updated: int


class SendOrderConfirmationResponseDTO(BaseModel):
    order_id: str
    order_number: str
    recipient_email: str


class AddressSearchResponseDTO(BaseModel):
    """Vendor autocomplete results passed through unchanged"""

    results: List[Dict[str, Any]]


class CompanyInfoDTO(BaseModel):
    """Seller block printed on invoices"""

    name: str
    address: str
    city: str
    vat_number: str
