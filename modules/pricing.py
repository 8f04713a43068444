"""Price calculation for print orders.

Current rule set:
    rate per page   2    up to 100 pages
                    1.5  above 100 pages
                    1    from 1000 pages
    multiplier      instant x1.5, 1-day x1.2, standard x1
    price           round(pages * rate * multiplier)

Rounding follows the browser-side quote (half rounds up), so the price the
customer saw on the form and the one computed here agree.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_FLOOR, Decimal
from typing import Any, Dict, Union

from models.order import DeliveryTier

TierLike = Union[DeliveryTier, str, None]

# (lowest page count, rate); first matching band from the top wins.
# Pages 501-999 deliberately fall through to the 1.5 band.
RATE_BANDS = (
    (1000, Decimal("1")),
    (101, Decimal("1.5")),
)
DEFAULT_RATE = Decimal("2")

DELIVERY_MULTIPLIERS = {
    DeliveryTier.STANDARD: Decimal("1"),
    DeliveryTier.ONE_DAY: Decimal("1.2"),
    DeliveryTier.INSTANT: Decimal("1.5"),
}

# Page count the order form is seeded with
INDICATIVE_PAGES = 50


@dataclass(frozen=True)
class PriceQuote:
    """Breakdown of a computed price."""

    page_count: int
    delivery: DeliveryTier
    rate: Decimal
    base: Decimal
    multiplier: Decimal
    price: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pages": self.page_count,
            "delivery": self.delivery.value,
            "rate": float(self.rate),
            "base": float(self.base),
            "multiplier": float(self.multiplier),
            "price": self.price,
        }


def rate_for_pages(page_count: int) -> Decimal:
    """Per-page rate for the given page count."""
    for lowest, rate in RATE_BANDS:
        if page_count >= lowest:
            return rate
    return DEFAULT_RATE


def delivery_multiplier(delivery: TierLike) -> Decimal:
    return DELIVERY_MULTIPLIERS[DeliveryTier.parse(delivery)]


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return int((value + Decimal("0.5")).to_integral_value(rounding=ROUND_FLOOR))


def quote(page_count: int, delivery: TierLike = DeliveryTier.STANDARD) -> PriceQuote:
    """
    Price an order and keep the intermediate figures.

    Negative page counts are not rejected here; the form layer does that.

    Args:
        page_count: Number of pages to print
        delivery: Tier, or a raw form value such as "1-day"

    Returns:
        PriceQuote with rate, base, multiplier and the integer price
    """
    tier = DeliveryTier.parse(delivery)
    rate = rate_for_pages(page_count)
    base = Decimal(page_count) * rate
    multiplier = DELIVERY_MULTIPLIERS[tier]
    return PriceQuote(
        page_count=page_count,
        delivery=tier,
        rate=rate,
        base=base,
        multiplier=multiplier,
        price=round_half_up(base * multiplier),
    )


def calculate_price(page_count: int, delivery: TierLike = DeliveryTier.STANDARD) -> int:
    """Integer price for page_count pages at the given delivery tier."""
    return quote(page_count, delivery).price


def indicative_price() -> int:
    """Price shown on a freshly opened order form."""
    return calculate_price(INDICATIVE_PAGES, DeliveryTier.STANDARD)


# =============================================================================
# HISTORICAL RULE SET
# =============================================================================

def calculate_legacy_price(page_count: int, delivery: TierLike = DeliveryTier.STANDARD) -> int:
    """
    First published rule set, superseded by calculate_price().

    Flat 100 up to 50 pages, 150 up to 100 pages, then 50 more for every
    started block of 50 pages. Same delivery multipliers as today.
    """
    base = 100
    if 50 < page_count <= 100:
        base = 150
    if page_count > 100:
        base = 150 + math.ceil((page_count - 100) / 50) * 50
    return round_half_up(Decimal(base) * delivery_multiplier(delivery))
