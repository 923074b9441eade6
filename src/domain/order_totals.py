"""Order Totals Calculator

Turns priced units into line items and aggregates them, plus shipping,
into order-level subtotals and totals.
"""

from decimal import Decimal
from typing import List, Optional, Sequence
from pydantic import BaseModel
from src.domain.pricing import (
    DEFAULT_CURRENCY,
    DEFAULT_VAT_RATE,
    Number,
    PricedUnit,
    PricingEngine,
    round2,
    to_decimal,
)


class PricedLineItem(BaseModel):
    """
    One priced order line

    Line amounts are rounded unit amounts multiplied by quantity, never
    re-derived from a rounded line net.
    """

    product_id: str
    name: str
    quantity: int
    unit_price_net: Decimal
    unit_price_gross: Decimal
    unit_vat_amount: Decimal
    vat_rate: Decimal
    line_total_net: Decimal
    line_total_gross: Decimal
    line_vat_amount: Decimal
    currency: str = DEFAULT_CURRENCY
    discounted: bool = False
    discount_percent: Optional[Decimal] = None
    original_price_net: Decimal
    original_price_gross: Decimal


class OrderTotals(BaseModel):
    """Order-level VAT breakdown"""

    subtotal_net: Decimal
    subtotal_gross: Decimal
    subtotal_vat: Decimal
    shipping_net: Decimal
    shipping_vat_rate: Decimal
    shipping_vat: Decimal
    shipping_gross: Decimal
    total_net: Decimal
    total_gross: Decimal
    total_vat: Decimal


class OrderTotalsCalculator:
    """Pure aggregation of priced line items"""

    @staticmethod
    def price_line(unit: PricedUnit, quantity: int, name: str = "") -> PricedLineItem:
        """Build a line item from a priced unit and a quantity"""
        return PricedLineItem(
            product_id=unit.product_id or "",
            name=name,
            quantity=quantity,
            unit_price_net=unit.unit_net,
            unit_price_gross=unit.unit_gross,
            unit_vat_amount=unit.unit_vat,
            vat_rate=unit.vat_rate,
            line_total_net=round2(unit.unit_net * quantity),
            line_total_gross=round2(unit.unit_gross * quantity),
            line_vat_amount=round2(unit.unit_vat * quantity),
            currency=unit.currency,
            discounted=unit.discounted,
            discount_percent=unit.discount_percent,
            original_price_net=unit.price_net,
            original_price_gross=unit.price_gross,
        )

    @staticmethod
    def aggregate(
        items: Sequence[PricedLineItem],
        shipping_net: Number = Decimal("0"),
        shipping_vat_rate: Optional[Number] = None,
    ) -> OrderTotals:
        """
        Aggregate line items and shipping into order totals

        Args:
            items: Priced line items
            shipping_net: Shipping cost excluding VAT
            shipping_vat_rate: VAT rate for shipping (defaults to the first
                item's rate, or 0.20 with no items)

        Returns:
            OrderTotals
        """
        shipping_net = to_decimal(shipping_net)
        if shipping_vat_rate is None:
            shipping_vat_rate = items[0].vat_rate if items else DEFAULT_VAT_RATE
        shipping_vat_rate = to_decimal(shipping_vat_rate)
        shipping_vat, shipping_gross = PricingEngine.vat_breakdown(shipping_net, shipping_vat_rate)

        subtotal_net = round2(sum((i.line_total_net for i in items), Decimal("0")))
        subtotal_gross = round2(sum((i.line_total_gross for i in items), Decimal("0")))
        subtotal_vat = round2(sum((i.line_vat_amount for i in items), Decimal("0")))

        return OrderTotals(
            subtotal_net=subtotal_net,
            subtotal_gross=subtotal_gross,
            subtotal_vat=subtotal_vat,
            shipping_net=shipping_net,
            shipping_vat_rate=shipping_vat_rate,
            shipping_vat=shipping_vat,
            shipping_gross=shipping_gross,
            total_net=round2(subtotal_net + shipping_net),
            total_gross=round2(subtotal_gross + shipping_gross),
            total_vat=round2(subtotal_vat + shipping_vat),
        )

    @staticmethod
    def currency_of(items: List[PricedLineItem]) -> str:
        """Order currency: first item's currency, else the default"""
        return items[0].currency if items else DEFAULT_CURRENCY
