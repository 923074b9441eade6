from .base import BaseModel, generate_uuid
from .product import Product
from .order import Order, OrderStatus
from .invoice import Invoice
from .counter import Counter
from .customer_profile import CustomerProfile
from .pricing import PricingEngine, PricedUnit, round2
from .order_totals import OrderTotalsCalculator, PricedLineItem, OrderTotals

__all__ = [
    "BaseModel",
    "generate_uuid",
    "Product",
    "Order",
    "OrderStatus",
    "Invoice",
    "Counter",
    "CustomerProfile",
    "PricingEngine",
    "PricedUnit",
    "round2",
    "OrderTotalsCalculator",
    "PricedLineItem",
    "OrderTotals",
]
