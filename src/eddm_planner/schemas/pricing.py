"""Pydantic request/response models for pricing endpoints."""

from __future__ import annotations

import math
from typing import Optional

from pydantic import BaseModel, Field

from ..services.pricing.engine import PricingResult, PricingTable


class QuoteRequest(BaseModel):
    quantity: int = Field(..., ge=0, description="Number of mail pieces.")
    product: Optional[str] = Field(default=None, description="Pricing table name (print, turnkey).")


class PricingResultModel(BaseModel):
    quantity: int
    below_minimum: bool
    minimum_quantity: int
    tier_rate: Optional[float] = None
    unit_rate: Optional[float] = None
    tier_cost: Optional[float] = None
    add_on_costs: dict[str, float] = Field(default_factory=dict)
    total: Optional[float] = None
    current_tier_label: Optional[str] = None
    next_tier_rate: Optional[float] = None
    next_tier_label: Optional[str] = None
    units_until_next_tier: int = 0
    potential_savings: float = 0.0
    below_recommended: bool = False

    @classmethod
    def from_result(cls, result: PricingResult) -> "PricingResultModel":
        return cls(
            quantity=result.quantity,
            below_minimum=result.below_minimum,
            minimum_quantity=result.minimum_quantity,
            tier_rate=result.tier_rate,
            unit_rate=result.unit_rate,
            tier_cost=result.tier_cost,
            add_on_costs=dict(result.add_on_costs),
            total=result.total,
            current_tier_label=result.current_tier_label,
            next_tier_rate=result.next_tier_rate,
            next_tier_label=result.next_tier_label,
            units_until_next_tier=result.units_until_next_tier,
            potential_savings=result.potential_savings,
            below_recommended=result.below_recommended,
        )


class QuoteResponse(BaseModel):
    product: str
    pricing: PricingResultModel


class TierModel(BaseModel):
    min: int
    max: Optional[int] = Field(default=None, description="Upper bound; null for the open-ended top tier.")
    rate_per_unit: float


class PricingTableModel(BaseModel):
    name: str
    tiers: list[TierModel]
    add_ons: dict[str, float]
    minimum_quantity: int
    recommended_minimum: Optional[int] = None

    @classmethod
    def from_table(cls, table: PricingTable) -> "PricingTableModel":
        return cls(
            name=table.name,
            tiers=[
                TierModel(
                    min=tier.min,
                    max=None if math.isinf(tier.max) else int(tier.max),
                    rate_per_unit=tier.rate_per_unit,
                )
                for tier in table.tiers
            ],
            add_ons=dict(table.add_ons),
            minimum_quantity=table.minimum_quantity,
            recommended_minimum=table.recommended_minimum,
        )
