from .unit_of_work import UnitOfWork
from .pdf_service import PdfService
from .email_service import EmailService
from .address_service import AddressLookupService
from .number_allocator import NumberAllocator, SequenceSpec, ORDER_SEQUENCE, INVOICE_SEQUENCE
from .catalog_cache import ProductCatalogCache

__all__ = [
    "UnitOfWork",
    "PdfService",
    "EmailService",
    "AddressLookupService",
    "NumberAllocator",
    "SequenceSpec",
    "ORDER_SEQUENCE",
    "INVOICE_SEQUENCE",
    "ProductCatalogCache",
]
