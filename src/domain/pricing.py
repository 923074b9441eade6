"""Pricing Engine

Computes net/VAT/gross amounts for a single catalog item, applying the
product's discount when its window is open at the given instant.
"""

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union
from pydantic import BaseModel, Field
from src.domain.product import Product

DEFAULT_VAT_RATE = Decimal("0.20")
DEFAULT_CURRENCY = "BGN"

_CENT = Decimal("0.01")
_HUNDRED = Decimal("100")

Number = Union[Decimal, int, float, str]


def to_decimal(value: Number) -> Decimal:
    """Convert to Decimal without binary float artefacts"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def round2(value: Number) -> Decimal:
    """Round half away from zero to two decimal places"""
    return to_decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP)


class PricedUnit(BaseModel):
    """
    Price breakdown for one unit of a product

    discounted_* fields are None (not zero) when no discount is in effect.
    """

    product_id: Optional[str] = None
    currency: str = DEFAULT_CURRENCY
    vat_rate: Decimal
    price_net: Decimal
    vat_amount: Decimal
    price_gross: Decimal
    discounted: bool = False
    discount_percent: Optional[Decimal] = None
    discounted_price_net: Optional[Decimal] = None
    vat_amount_discounted: Optional[Decimal] = None
    discounted_price_gross: Optional[Decimal] = None

    @property
    def unit_net(self) -> Decimal:
        """Net price actually charged"""
        return self.discounted_price_net if self.discounted else self.price_net

    @property
    def unit_vat(self) -> Decimal:
        return self.vat_amount_discounted if self.discounted else self.vat_amount

    @property
    def unit_gross(self) -> Decimal:
        return self.discounted_price_gross if self.discounted else self.price_gross


class PricingEngine:
    """
    Pure pricing for catalog items

    Rules:
    - vat_amount = round2(net * vat_rate), gross = round2(net + vat_amount)
    - vat_rate falls back to 0.20 only when missing (0 is a valid rate)
    - Discount: net' = round2(net * (1 - percent/100)); VAT and gross are
      recomputed from net' with the same formulas
    - A discount whose rounded gross equals the regular gross (sub-cent
      prices) is reported as not in effect
    - Negative prices are not rejected here
    """

    @staticmethod
    def vat_breakdown(net: Number, vat_rate: Number) -> tuple[Decimal, Decimal]:
        """Return (vat_amount, gross) for a net amount"""
        vat_amount = round2(to_decimal(net) * to_decimal(vat_rate))
        gross = round2(to_decimal(net) + vat_amount)
        return vat_amount, gross

    @staticmethod
    def discount_in_effect(product: Product, at: datetime) -> bool:
        """True when the discount flag is set and the window is open at `at`"""
        if not product.discounted:
            return False
        if product.discount_percent is None or to_decimal(product.discount_percent) <= 0:
            return False
        if product.discount_start is None or product.discount_start > at:
            return False
        return product.discount_end is None or product.discount_end >= at

    @classmethod
    def price(cls, product: Product, at: Optional[datetime] = None) -> PricedUnit:
        """
        Price one unit of a product

        Args:
            product: Catalog product
            at: Instant used to evaluate the discount window (defaults to now, UTC)

        Returns:
            PricedUnit with regular and (if active) discounted breakdowns
        """
        at = at or datetime.utcnow()
        vat_rate = DEFAULT_VAT_RATE if product.vat_rate is None else to_decimal(product.vat_rate)
        net = to_decimal(product.price)
        vat_amount, gross = cls.vat_breakdown(net, vat_rate)

        priced = PricedUnit(
            product_id=product.id,
            currency=product.currency or DEFAULT_CURRENCY,
            vat_rate=vat_rate,
            price_net=net,
            vat_amount=vat_amount,
            price_gross=gross,
        )

        if cls.discount_in_effect(product, at):
            percent = to_decimal(product.discount_percent)
            discounted_net = round2(net * (1 - percent / _HUNDRED))
            discounted_vat, discounted_gross = cls.vat_breakdown(discounted_net, vat_rate)
            if discounted_gross == gross:
                return priced
            priced.discounted = True
            priced.discount_percent = percent
            priced.discounted_price_net = discounted_net
            priced.vat_amount_discounted = discounted_vat
            priced.discounted_price_gross = discounted_gross

        return priced
