"""Scope filtering and selection bookkeeping for fetched routes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ...models.domain import CircleRegion, PolygonRegion, Region, Route, UNBOUNDED, Unbounded
from ..intersection import intersects_circle, intersects_polygon


@dataclass(frozen=True, slots=True)
class RegionState:
    """The circle and polygon the user has drawn; at most one is active.

    A polygon overrides the circle while both exist.
    """

    circle: Optional[CircleRegion] = None
    polygon: Optional[PolygonRegion] = None

    def active(self) -> Region:
        if self.polygon is not None:
            return self.polygon
        if self.circle is not None:
            return self.circle
        return UNBOUNDED


def filter_by_delivery_type(routes: Iterable[Route], delivery_type: str) -> list[Route]:
    if delivery_type == "residential":
        return [route for route in routes if route.residential_count > 0]
    if delivery_type == "business":
        return [route for route in routes if route.business_count > 0]
    if delivery_type == "all":
        return list(routes)
    raise ValueError(f"Unknown delivery type '{delivery_type}'.")


def in_scope(routes: Iterable[Route], region: Region | RegionState, delivery_type: str) -> list[Route]:
    if isinstance(region, RegionState):
        region = region.active()

    candidates = filter_by_delivery_type(routes, delivery_type)
    if isinstance(region, PolygonRegion):
        return [route for route in candidates if intersects_polygon(route, region.vertices)]
    if isinstance(region, CircleRegion):
        return [
            route for route in candidates if intersects_circle(route, region.center, region.radius_miles)
        ]
    if isinstance(region, Unbounded):
        return candidates
    raise TypeError(f"Unsupported region type: {type(region).__name__}")


def prune_selection(selection: Sequence[str], in_scope_routes: Iterable[Route]) -> tuple[str, ...]:
    """Drop selected ids that are no longer in scope, keeping the order of the rest."""

    allowed = {route.route_id for route in in_scope_routes}
    return tuple(route_id for route_id in selection if route_id in allowed)


def total_address_count(routes: Iterable[Route], delivery_type: str) -> int:
    return sum(route.count_for(delivery_type) for route in routes)
