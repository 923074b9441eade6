"""Display names for order lines

Looks up the catalog to print "Brand Model" for each order line. Lookups
are best-effort: a missing product or a failing lookup falls back to the
name stored on the line.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence
from pydantic import BaseModel
from src.app.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)

UNKNOWN_PRODUCT = "Unknown Product"


class DisplayItem(BaseModel):
    """Order line as shown to the customer"""

    product_id: Optional[str] = None
    name: str
    brand: str = ""
    image_url: str = ""
    quantity: int
    unit_price_gross: Decimal = Decimal("0")
    line_total_gross: Decimal = Decimal("0")


async def resolve_display_items(
    product_repo: ProductRepository, items: Sequence[Dict[str, Any]]
) -> List[DisplayItem]:
    """
    Build display items for stored order lines

    Args:
        product_repo: Catalog repository
        items: Order line dumps as stored on the order

    Returns:
        One DisplayItem per line, in order
    """
    resolved = []
    for item in items:
        name = item.get("name") or UNKNOWN_PRODUCT
        brand = ""
        image_url = ""
        product_id = item.get("product_id")

        if product_id:
            try:
                product = await product_repo.get_by_id(product_id)
                if product is not None:
                    name = product.display_name
                    brand = product.brand or ""
                    image_url = product.image_url or ""
            except Exception as e:
                logger.warning(f"Product lookup failed for {product_id}, using stored name: {e}")

        resolved.append(
            DisplayItem(
                product_id=product_id,
                name=name,
                brand=brand,
                image_url=image_url,
                quantity=item.get("quantity", 0),
                unit_price_gross=Decimal(str(item.get("unit_price_gross", "0"))),
                line_total_gross=Decimal(str(item.get("line_total_gross", "0"))),
            )
        )
    return resolved
