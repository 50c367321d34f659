"""Tiered volume pricing for direct-mail campaigns.

Tier tables are injected by the caller so several products (print-only,
turnkey) share one engine. Quantities below the lowest tier are a distinct
"below minimum" result and are never priced at the entry rate.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence


class InvalidTierTableError(ValueError):
    """Raised when a tier table is not a sorted, gap-free partition."""


@dataclass(frozen=True, slots=True)
class PricingTier:
    min: int
    max: float
    rate_per_unit: float

    def contains(self, quantity: int) -> bool:
        return self.min <= quantity <= self.max


@dataclass(frozen=True, slots=True)
class PricingTable:
    """An ordered tier table plus fixed per-unit add-ons (postage, bundling...)."""

    name: str
    tiers: tuple[PricingTier, ...]
    add_ons: Mapping[str, float] = field(default_factory=dict)
    recommended_minimum: Optional[int] = None
    label_precision: int = 3

    def __post_init__(self) -> None:
        validate_tiers(self.tiers)
        for label, rate in self.add_ons.items():
            if rate < 0:
                raise InvalidTierTableError(f"add-on '{label}' has a negative rate")

    @property
    def minimum_quantity(self) -> int:
        return self.tiers[0].min

    @property
    def add_on_rate(self) -> float:
        return sum(self.add_ons.values())

    def label(self, rate: float) -> str:
        return f"${rate:.{self.label_precision}f}/piece"


@dataclass(slots=True)
class PricingResult:
    quantity: int
    below_minimum: bool
    minimum_quantity: int
    tier_rate: Optional[float] = None
    unit_rate: Optional[float] = None
    tier_cost: Optional[float] = None
    add_on_costs: dict[str, float] = field(default_factory=dict)
    total: Optional[float] = None
    current_tier_label: Optional[str] = None
    next_tier_rate: Optional[float] = None
    next_tier_label: Optional[str] = None
    units_until_next_tier: int = 0
    potential_savings: float = 0.0
    below_recommended: bool = False


def validate_tiers(tiers: Sequence[PricingTier]) -> None:
    if not tiers:
        raise InvalidTierTableError("tier table must contain at least one tier")
    if tiers[0].min < 0:
        raise InvalidTierTableError("lowest tier must start at a non-negative quantity")

    for index, tier in enumerate(tiers):
        if tier.max < tier.min:
            raise InvalidTierTableError(f"tier {index} has max < min")
        if tier.rate_per_unit < 0:
            raise InvalidTierTableError(f"tier {index} has a negative rate")
        if index == 0:
            continue
        previous = tiers[index - 1]
        if tier.min != previous.max + 1:
            raise InvalidTierTableError(
                f"tier {index} starts at {tier.min}; expected {previous.max + 1} (gap or overlap)"
            )
        if tier.rate_per_unit > previous.rate_per_unit:
            raise InvalidTierTableError(f"tier {index} rate increases with quantity")

    if not math.isinf(tiers[-1].max):
        raise InvalidTierTableError("top tier must be unbounded")


def _tier_index(quantity: int, tiers: Sequence[PricingTier]) -> Optional[int]:
    for index, tier in enumerate(tiers):
        if tier.contains(quantity):
            return index
    return None


def rate_for(quantity: int, table: PricingTable) -> Optional[float]:
    """Tier rate for the quantity, or None when below the table's minimum."""

    index = _tier_index(quantity, table.tiers)
    if index is None:
        return None
    return table.tiers[index].rate_per_unit


def _total(quantity: int, tier_rate: float, table: PricingTable) -> float:
    return quantity * (tier_rate + table.add_on_rate)


def price_for(quantity: int, table: PricingTable) -> PricingResult:
    if quantity < 0:
        raise ValueError("quantity must be >= 0")

    index = _tier_index(quantity, table.tiers)
    if index is None:
        return PricingResult(
            quantity=quantity,
            below_minimum=True,
            minimum_quantity=table.minimum_quantity,
        )

    tier = table.tiers[index]
    next_tier = table.tiers[index + 1] if index + 1 < len(table.tiers) else None
    total = _total(quantity, tier.rate_per_unit, table)

    units_until_next = 0
    savings = 0.0
    if next_tier is not None:
        units_until_next = max(0, next_tier.min - quantity)
        # Cost at the current quantity minus the cost of ordering exactly the next tier's minimum.
        savings = total - _total(next_tier.min, next_tier.rate_per_unit, table)

    recommended = table.recommended_minimum
    return PricingResult(
        quantity=quantity,
        below_minimum=False,
        minimum_quantity=table.minimum_quantity,
        tier_rate=tier.rate_per_unit,
        unit_rate=tier.rate_per_unit + table.add_on_rate,
        tier_cost=quantity * tier.rate_per_unit,
        add_on_costs={label: quantity * rate for label, rate in table.add_ons.items()},
        total=total,
        current_tier_label=table.label(tier.rate_per_unit),
        next_tier_rate=next_tier.rate_per_unit if next_tier else None,
        next_tier_label=table.label(next_tier.rate_per_unit) if next_tier else None,
        units_until_next_tier=units_until_next,
        potential_savings=savings,
        below_recommended=recommended is not None and 0 < quantity < recommended,
    )


def estimated_cost(quantity: int, table: PricingTable) -> float:
    """Priced total, or the entry-tier estimate for quantities below the minimum."""

    result = price_for(quantity, table)
    if result.total is not None:
        return result.total
    return _total(quantity, table.tiers[0].rate_per_unit, table)
