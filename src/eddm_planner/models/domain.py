"""Domain models for carrier routes and areas of interest."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional, Union

LatLng = tuple[float, float]
Ring = tuple[LatLng, ...]

DeliveryType = Literal["all", "residential", "business"]
DELIVERY_TYPES: tuple[str, ...] = ("all", "residential", "business")


@dataclass(frozen=True, slots=True)
class Route:
    """A USPS carrier route (or ZCTA-derived area) returned for one ZIP query."""

    route_id: str
    name: str
    zip_code: str
    coordinates: tuple[Ring, ...]
    centroid: Optional[LatLng]
    residential_count: int = 0
    business_count: int = 0
    average_income: Optional[float] = None
    median_age: Optional[float] = None

    @property
    def total_count(self) -> int:
        return self.residential_count + self.business_count

    def points(self) -> list[LatLng]:
        return [point for ring in self.coordinates for point in ring]

    def count_for(self, delivery_type: str) -> int:
        if delivery_type == "residential":
            return self.residential_count
        if delivery_type == "business":
            return self.business_count
        return self.total_count


@dataclass(frozen=True, slots=True)
class CircleRegion:
    center: LatLng
    radius_miles: float


@dataclass(frozen=True, slots=True)
class PolygonRegion:
    vertices: tuple[LatLng, ...]


@dataclass(frozen=True, slots=True)
class Unbounded:
    """No area of interest; every fetched route is in scope."""


Region = Union[CircleRegion, PolygonRegion, Unbounded]

UNBOUNDED = Unbounded()
