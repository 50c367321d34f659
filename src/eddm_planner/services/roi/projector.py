"""Closed-form ROI projections for a campaign under three fixed scenarios.

    responses    = addresses x response rate
    customers    = responses x conversion rate
    revenue      = customers x LTV (12-month)
    gross profit = revenue x margin
    net profit   = gross profit - campaign cost
    ROI multiple = gross profit / campaign cost
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from .profiles import Economics, IndustryProfile, ScenarioRates

SCENARIOS: tuple[str, ...] = ("baseline", "typical", "best_in_class")


@dataclass(slots=True)
class ScenarioProjection:
    response_rate: float
    conversion_rate: float
    responses: float
    customers: float
    revenue: float
    gross_profit: float
    net_profit: float
    roi_multiple: float
    roi_percentage: float
    cac: float
    break_even_customers: float
    break_even_response_rate: float


@dataclass(slots=True)
class RoiProjection:
    industry: str
    total_addresses: int
    campaign_cost: float
    economics: Economics
    break_even_customers: float
    baseline: ScenarioProjection
    typical: ScenarioProjection
    best_in_class: ScenarioProjection

    def scenarios(self) -> dict[str, ScenarioProjection]:
        return {name: getattr(self, name) for name in SCENARIOS}


def _project_scenario(
    total_addresses: int,
    campaign_cost: float,
    economics: Economics,
    response_rate: float,
    conversion_rate: float,
    break_even_customers: float,
) -> ScenarioProjection:
    responses = total_addresses * response_rate
    customers = responses * conversion_rate
    revenue = customers * economics.ltv
    gross_profit = revenue * economics.margin
    net_profit = gross_profit - campaign_cost

    roi_multiple = gross_profit / campaign_cost if campaign_cost > 0 else 0.0
    roi_percentage = (gross_profit - campaign_cost) / campaign_cost * 100 if campaign_cost > 0 else 0.0
    cac = campaign_cost / customers if customers > 0 else 0.0

    reach = total_addresses * conversion_rate
    break_even_response_rate = break_even_customers / reach if reach > 0 else 0.0

    return ScenarioProjection(
        response_rate=response_rate,
        conversion_rate=conversion_rate,
        responses=responses,
        customers=customers,
        revenue=revenue,
        gross_profit=gross_profit,
        net_profit=net_profit,
        roi_multiple=roi_multiple,
        roi_percentage=roi_percentage,
        cac=cac,
        break_even_customers=break_even_customers,
        break_even_response_rate=break_even_response_rate,
    )


def project(total_addresses: int, campaign_cost: float, profile: IndustryProfile) -> RoiProjection:
    economics = profile.economics
    per_customer = economics.gross_profit_per_customer
    break_even_customers = campaign_cost / per_customer if per_customer > 0 else 0.0

    projections = {
        scenario: _project_scenario(
            total_addresses,
            campaign_cost,
            economics,
            profile.response_rate.for_scenario(scenario),
            profile.conversion_rate.for_scenario(scenario),
            break_even_customers,
        )
        for scenario in SCENARIOS
    }
    return RoiProjection(
        industry=profile.name,
        total_addresses=total_addresses,
        campaign_cost=campaign_cost,
        economics=economics,
        break_even_customers=break_even_customers,
        **projections,
    )


def validate_overrides(
    response_rate: Optional[ScenarioRates] = None,
    conversion_rate: Optional[ScenarioRates] = None,
    economics: Optional[Mapping[str, Any]] = None,
) -> list[str]:
    """Return human-readable problems with user-supplied assumptions (empty when valid)."""

    errors: list[str] = []
    if response_rate is not None and not 0.0001 <= response_rate.baseline <= 0.10:
        errors.append("Response rate should be between 0.01% and 10%")
    if conversion_rate is not None and not 0.01 <= conversion_rate.baseline <= 1.0:
        errors.append("Conversion rate should be between 1% and 100%")

    economics = economics or {}
    ticket = economics.get("ticket")
    if ticket is not None and not 1 <= ticket <= 100000:
        errors.append("Ticket size should be between $1 and $100,000")
    repeats = economics.get("repeats")
    if repeats is not None and not 0 <= repeats <= 100:
        errors.append("Repeat purchases should be between 0 and 100")
    margin = economics.get("margin")
    if margin is not None and not 0.01 <= margin <= 1.0:
        errors.append("Margin should be between 1% and 100%")
    return errors


def with_overrides(
    profile: IndustryProfile,
    response_rate: Optional[ScenarioRates] = None,
    conversion_rate: Optional[ScenarioRates] = None,
    economics: Optional[Mapping[str, Any]] = None,
) -> IndustryProfile:
    """A copy of ``profile`` with the given assumptions swapped in."""

    unknown = set(economics or {}) - {"ticket", "repeats", "ltv", "margin"}
    if unknown:
        raise ValueError(f"Unknown economics fields: {sorted(unknown)}")
    return replace(
        profile,
        response_rate=response_rate or profile.response_rate,
        conversion_rate=conversion_rate or profile.conversion_rate,
        economics=replace(profile.economics, **dict(economics or {})),
    )
