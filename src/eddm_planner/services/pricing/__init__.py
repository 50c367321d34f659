"""Tiered pricing engine and product tables."""

from .engine import (
    InvalidTierTableError,
    PricingResult,
    PricingTable,
    PricingTier,
    estimated_cost,
    price_for,
    rate_for,
)
from .tables import PRICING_TABLES, PRINT_TABLE, TURNKEY_TABLE, UnknownProductError, get_table

__all__ = [
    "InvalidTierTableError",
    "PricingResult",
    "PricingTable",
    "PricingTier",
    "estimated_cost",
    "price_for",
    "rate_for",
    "PRICING_TABLES",
    "PRINT_TABLE",
    "TURNKEY_TABLE",
    "UnknownProductError",
    "get_table",
]
