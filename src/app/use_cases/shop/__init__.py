"""Shop domain use cases"""
from .create_order import CreateOrder
from .issue_invoice import IssueInvoice, payment_method_label
from .get_invoice import GetInvoice
from .list_products import ListProducts, GetProduct
from .update_product_pricing import UpdateProductPricing
from .backfill_product_defaults import BackfillProductDefaults
from .send_order_confirmation import SendOrderConfirmation
from .autocomplete_address import AutocompleteSites, AutocompleteStreets
from .dtos import (
    OrderItemCommandDTO,
    CreateOrderCommandDTO,
    CreateOrderResponseDTO,
    IssueInvoiceCommandDTO,
    IssueInvoiceResponseDTO,
    PricedProductDTO,
    ListProductsResponseDTO,
    UpdateProductPricingCommandDTO,
    BackfillResultDTO,
    SendOrderConfirmationResponseDTO,
    AddressSearchResponseDTO,
    CompanyInfoDTO,
)

__all__ = [
    "CreateOrder",
    "IssueInvoice",
    "payment_method_label",
    "GetInvoice",
    "ListProducts",
    "GetProduct",
    "UpdateProductPricing",
    "BackfillProductDefaults",
    "SendOrderConfirmation",
    "AutocompleteSites",
    "AutocompleteStreets",
    "OrderItemCommandDTO",
    "CreateOrderCommandDTO",
    "CreateOrderResponseDTO",
    "IssueInvoiceCommandDTO",
    "IssueInvoiceResponseDTO",
    "PricedProductDTO",
    "ListProductsResponseDTO",
    "UpdateProductPricingCommandDTO",
    "BackfillResultDTO",
    "SendOrderConfirmationResponseDTO",
    "AddressSearchResponseDTO",
    "CompanyInfoDTO",
]
