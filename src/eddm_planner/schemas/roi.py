"""Pydantic request/response models for ROI endpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from ..services.roi.profiles import IndustryProfile, ScenarioRates
from ..services.roi.projector import RoiProjection, ScenarioProjection


class ScenarioRatesModel(BaseModel):
    baseline: float = Field(..., ge=0.0)
    typical: float = Field(..., ge=0.0)
    best_in_class: float = Field(..., ge=0.0)

    def to_domain(self) -> ScenarioRates:
        return ScenarioRates(baseline=self.baseline, typical=self.typical, best_in_class=self.best_in_class)


class EconomicsOverrides(BaseModel):
    ticket: Optional[float] = None
    repeats: Optional[float] = None
    ltv: Optional[float] = None
    margin: Optional[float] = None


class RoiOverrides(BaseModel):
    response_rate: Optional[ScenarioRatesModel] = None
    conversion_rate: Optional[ScenarioRatesModel] = None
    economics: Optional[EconomicsOverrides] = None


class RoiRequest(BaseModel):
    total_addresses: int = Field(..., ge=0)
    campaign_cost: float = Field(..., ge=0.0)
    industry: Optional[str] = Field(default=None, description="Industry profile key.")
    overrides: Optional[RoiOverrides] = None


class ScenarioModel(BaseModel):
    response_rate: float
    responses: int
    conversion_rate: float
    customers: float
    revenue: int
    gross_profit: int
    net_profit: int
    roi_multiple: float
    roi_percentage: int
    cac: int
    break_even_customers: float
    break_even_response_rate: float = Field(..., description="Percentage of addresses that must respond.")

    @classmethod
    def from_projection(cls, scenario: ScenarioProjection) -> "ScenarioModel":
        return cls(
            response_rate=scenario.response_rate,
            responses=round(scenario.responses),
            conversion_rate=scenario.conversion_rate,
            customers=round(scenario.customers, 1),
            revenue=round(scenario.revenue),
            gross_profit=round(scenario.gross_profit),
            net_profit=round(scenario.net_profit),
            roi_multiple=round(scenario.roi_multiple, 2),
            roi_percentage=round(scenario.roi_percentage),
            cac=round(scenario.cac),
            break_even_customers=round(scenario.break_even_customers, 1),
            break_even_response_rate=round(scenario.break_even_response_rate * 100, 2),
        )


class RoiResponse(BaseModel):
    industry: str
    total_addresses: int
    campaign_cost: float
    gross_profit_per_customer: float
    break_even_customers: float
    baseline: ScenarioModel
    typical: ScenarioModel
    best_in_class: ScenarioModel

    @classmethod
    def from_projection(cls, projection: RoiProjection) -> "RoiResponse":
        return cls(
            industry=projection.industry,
            total_addresses=projection.total_addresses,
            campaign_cost=projection.campaign_cost,
            gross_profit_per_customer=projection.economics.gross_profit_per_customer,
            break_even_customers=round(projection.break_even_customers, 1),
            baseline=ScenarioModel.from_projection(projection.baseline),
            typical=ScenarioModel.from_projection(projection.typical),
            best_in_class=ScenarioModel.from_projection(projection.best_in_class),
        )


class IndustryModel(BaseModel):
    key: str
    name: str
    response_rate: ScenarioRatesModel
    conversion_rate: ScenarioRatesModel
    ltv: float
    margin: float
    tips: list[str]

    @classmethod
    def from_profile(cls, profile: IndustryProfile) -> "IndustryModel":
        return cls(
            key=profile.key,
            name=profile.name,
            response_rate=ScenarioRatesModel(
                baseline=profile.response_rate.baseline,
                typical=profile.response_rate.typical,
                best_in_class=profile.response_rate.best_in_class,
            ),
            conversion_rate=ScenarioRatesModel(
                baseline=profile.conversion_rate.baseline,
                typical=profile.conversion_rate.typical,
                best_in_class=profile.conversion_rate.best_in_class,
            ),
            ltv=profile.economics.ltv,
            margin=profile.economics.margin,
            tips=list(profile.tips),
        )
