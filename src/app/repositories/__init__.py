from .product_repository import ProductRepository
from .order_repository import OrderRepository
from .invoice_repository import InvoiceRepository
from .counter_repository import CounterRepository
from .customer_profile_repository import CustomerProfileRepository

__all__ = [
    "ProductRepository",
    "OrderRepository",
    "InvoiceRepository",
    "CounterRepository",
    "CustomerProfileRepository",
]
