from .product_repository import SqlAlchemyProductRepository
from .order_repository import SqlAlchemyOrderRepository
from .invoice_repository import SqlAlchemyInvoiceRepository
from .counter_repository import SqlAlchemyCounterRepository
from .customer_profile_repository import SqlAlchemyCustomerProfileRepository

__all__ = [
    "SqlAlchemyProductRepository",
    "SqlAlchemyOrderRepository",
    "SqlAlchemyInvoiceRepository",
    "SqlAlchemyCounterRepository",
    "SqlAlchemyCustomerProfileRepository",
]
