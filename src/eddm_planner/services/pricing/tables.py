"""Static tier tables for the products on offer."""

from __future__ import annotations

import math

from .engine import PricingTable, PricingTier

# 6.25x9 EDDM postcards, 100# gloss cover, 4/4. Print is tiered; postage
# (including drop shipping) and bundling are flat per piece.
PRINT_TABLE = PricingTable(
    name="print",
    tiers=(
        PricingTier(min=500, max=999, rate_per_unit=0.23),
        PricingTier(min=1000, max=2499, rate_per_unit=0.17),
        PricingTier(min=2500, max=4999, rate_per_unit=0.12),
        PricingTier(min=5000, max=9999, rate_per_unit=0.10),
        PricingTier(min=10000, max=math.inf, rate_per_unit=0.089),
    ),
    add_ons={"postage": 0.25, "bundling": 0.035},
)

# All-inclusive: print, prep, postage and USPS drop-off in one rate.
TURNKEY_TABLE = PricingTable(
    name="turnkey",
    tiers=(
        PricingTier(min=0, max=999, rate_per_unit=0.65),
        PricingTier(min=1000, max=2499, rate_per_unit=0.59),
        PricingTier(min=2500, max=9999, rate_per_unit=0.52),
        PricingTier(min=10000, max=math.inf, rate_per_unit=0.49),
    ),
    recommended_minimum=1000,
    label_precision=2,
)

PRICING_TABLES: dict[str, PricingTable] = {
    PRINT_TABLE.name: PRINT_TABLE,
    TURNKEY_TABLE.name: TURNKEY_TABLE,
}


class UnknownProductError(KeyError):
    """Raised when no tier table is registered under the requested product name."""


def get_table(name: str) -> PricingTable:
    try:
        return PRICING_TABLES[name]
    except KeyError:
        raise UnknownProductError(name) from None
