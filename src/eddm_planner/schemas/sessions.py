"""Pydantic request/response models for planning session endpoints."""

from __future__ import annotations

from typing import Literal, Optional, Sequence

from pydantic import BaseModel, Field, field_validator, model_validator

from ..models.domain import CircleRegion, PolygonRegion, Region, Route
from ..services.fetching.loader import FetchReport
from .pricing import PricingResultModel

DeliveryTypeLiteral = Literal["all", "residential", "business"]


class RouteModel(BaseModel):
    route_id: str
    name: str
    zip_code: str
    coordinates: list[list[tuple[float, float]]]
    centroid: Optional[tuple[float, float]] = None
    residential: int
    business: int
    total: int
    average_income: Optional[float] = None
    median_age: Optional[float] = None

    @classmethod
    def from_route(cls, route: Route) -> "RouteModel":
        return cls(
            route_id=route.route_id,
            name=route.name,
            zip_code=route.zip_code,
            coordinates=[list(ring) for ring in route.coordinates],
            centroid=route.centroid,
            residential=route.residential_count,
            business=route.business_count,
            total=route.total_count,
            average_income=route.average_income,
            median_age=route.median_age,
        )


class SessionCreated(BaseModel):
    session_id: str


class ZipFetchRequest(BaseModel):
    zip_code: str = Field(..., description="5-digit ZIP code to load carrier routes for.")


class RadiusSearchRequest(BaseModel):
    latitude: Optional[float] = Field(default=None, ge=-90.0, le=90.0)
    longitude: Optional[float] = Field(default=None, ge=-180.0, le=180.0)
    address: Optional[str] = Field(default=None, description="Free-text address to geocode when no point is given.")
    radius_miles: float = Field(..., gt=0.0, le=100.0)
    known_zip: Optional[str] = Field(default=None, description="ZIP at the centre, if already known.")

    @model_validator(mode="after")
    def _require_location(self) -> "RadiusSearchRequest":
        has_point = self.latitude is not None and self.longitude is not None
        if not has_point and not (self.address and self.address.strip()):
            raise ValueError("Provide latitude/longitude or an address.")
        return self


class RegionRequest(BaseModel):
    type: Literal["circle", "polygon", "unbounded"]
    center: Optional[tuple[float, float]] = None
    radius_miles: Optional[float] = Field(default=None, gt=0.0)
    vertices: Optional[Sequence[tuple[float, float]]] = None

    @model_validator(mode="after")
    def _check_shape(self) -> "RegionRequest":
        if self.type == "circle" and (self.center is None or self.radius_miles is None):
            raise ValueError("circle regions need center and radius_miles")
        if self.type == "polygon" and (self.vertices is None or len(self.vertices) < 3):
            raise ValueError("polygon regions need at least 3 vertices")
        return self


class DeliveryTypeRequest(BaseModel):
    delivery_type: DeliveryTypeLiteral


class ToggleRequest(BaseModel):
    route_id: str


class SelectRequest(BaseModel):
    route_ids: list[str]


class OptimizeRequest(BaseModel):
    budget: float = Field(..., gt=0.0, description="Campaign budget in dollars.")
    product: Optional[str] = None


class FetchReportModel(BaseModel):
    requested: list[str]
    succeeded: list[str]
    failed: dict[str, str]
    route_count: int

    @classmethod
    def from_report(cls, report: FetchReport) -> "FetchReportModel":
        return cls(
            requested=list(report.requested),
            succeeded=sorted(report.succeeded),
            failed=dict(report.failed),
            route_count=report.route_count,
        )


class RegionModel(BaseModel):
    type: Literal["circle", "polygon", "unbounded"]
    center: Optional[tuple[float, float]] = None
    radius_miles: Optional[float] = None
    vertices: Optional[list[tuple[float, float]]] = None

    @classmethod
    def from_region(cls, region: Region) -> "RegionModel":
        if isinstance(region, PolygonRegion):
            return cls(type="polygon", vertices=list(region.vertices))
        if isinstance(region, CircleRegion):
            return cls(type="circle", center=region.center, radius_miles=region.radius_miles)
        return cls(type="unbounded")


class SessionResponse(BaseModel):
    session_id: str
    delivery_type: str
    active_region: RegionModel
    catalog_size: int
    in_scope: list[RouteModel]
    selection: list[str]
    in_scope_addresses: int
    selected_addresses: int
    product: str
    pricing: PricingResultModel
    fetch: Optional[FetchReportModel] = None


class OptimizeResponse(SessionResponse):
    budget: float
    forced: bool
    estimated_cost: float

    @field_validator("estimated_cost")
    @classmethod
    def _round_cost(cls, value: float) -> float:
        return round(value, 2)
