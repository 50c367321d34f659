"""Planning session state and its transitions.

A session bundles the route catalog, the active region(s), the delivery
type filter and the selected route ids. Transitions return a new session
whose selection has been pruned against the new in-scope set. The catalog
is the one piece shared by reference: merging a fetch result mutates it in
place, and the session returned by ``merge_routes`` reflects the change.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable, Sequence

from ...models.domain import DELIVERY_TYPES, CircleRegion, LatLng, PolygonRegion, Route
from ..catalog import RouteCatalog
from ..pricing.engine import PricingResult, PricingTable, price_for
from .filter import RegionState, in_scope, prune_selection, total_address_count


@dataclass(frozen=True, slots=True)
class PlanningSession:
    catalog: RouteCatalog = field(default_factory=RouteCatalog)
    selection: tuple[str, ...] = ()
    regions: RegionState = field(default_factory=RegionState)
    delivery_type: str = "all"


@dataclass(slots=True)
class SessionSummary:
    in_scope: list[Route]
    selected: list[Route]
    in_scope_addresses: int
    selected_addresses: int
    pricing: PricingResult


def in_scope_routes(session: PlanningSession) -> list[Route]:
    return in_scope(session.catalog.all(), session.regions, session.delivery_type)


def selected_routes(session: PlanningSession) -> list[Route]:
    by_id = {route.route_id: route for route in session.catalog.all()}
    return [by_id[route_id] for route_id in session.selection if route_id in by_id]


def refresh(session: PlanningSession) -> PlanningSession:
    pruned = prune_selection(session.selection, in_scope_routes(session))
    if pruned == session.selection:
        return session
    return replace(session, selection=pruned)


def merge_routes(session: PlanningSession, zip_code: str, routes: Sequence[Route]) -> PlanningSession:
    session.catalog.merge(zip_code, routes)
    return refresh(session)


def set_circle(session: PlanningSession, center: LatLng, radius_miles: float) -> PlanningSession:
    if radius_miles <= 0:
        raise ValueError("radius_miles must be > 0")
    regions = replace(session.regions, circle=CircleRegion(center=center, radius_miles=radius_miles))
    return refresh(replace(session, regions=regions))


def set_polygon(session: PlanningSession, vertices: Sequence[LatLng]) -> PlanningSession:
    if len(vertices) < 3:
        raise ValueError("A drawn polygon needs at least 3 vertices.")
    regions = replace(session.regions, polygon=PolygonRegion(vertices=tuple(vertices)))
    return refresh(replace(session, regions=regions))


def clear_polygon(session: PlanningSession) -> PlanningSession:
    return refresh(replace(session, regions=replace(session.regions, polygon=None)))


def clear_region(session: PlanningSession) -> PlanningSession:
    return refresh(replace(session, regions=RegionState()))


def set_delivery_type(session: PlanningSession, delivery_type: str) -> PlanningSession:
    if delivery_type not in DELIVERY_TYPES:
        raise ValueError(f"Unknown delivery type '{delivery_type}'.")
    return refresh(replace(session, delivery_type=delivery_type))


def toggle_route(session: PlanningSession, route_id: str) -> PlanningSession:
    if route_id in session.selection:
        return replace(session, selection=tuple(rid for rid in session.selection if rid != route_id))
    if route_id not in {route.route_id for route in in_scope_routes(session)}:
        return session
    return replace(session, selection=session.selection + (route_id,))


def select_routes(session: PlanningSession, route_ids: Iterable[str]) -> PlanningSession:
    unique = tuple(dict.fromkeys(route_ids))
    return refresh(replace(session, selection=unique))


def select_all_in_scope(session: PlanningSession) -> PlanningSession:
    return replace(session, selection=tuple(route.route_id for route in in_scope_routes(session)))


def clear_selection(session: PlanningSession) -> PlanningSession:
    return replace(session, selection=())


def reset(session: PlanningSession) -> PlanningSession:
    session.catalog.clear()
    return PlanningSession(catalog=session.catalog)


def summarize(session: PlanningSession, table: PricingTable) -> SessionSummary:
    scope = in_scope_routes(session)
    selected = selected_routes(session)
    selected_addresses = total_address_count(selected, session.delivery_type)
    return SessionSummary(
        in_scope=scope,
        selected=selected,
        in_scope_addresses=total_address_count(scope, session.delivery_type),
        selected_addresses=selected_addresses,
        pricing=price_for(selected_addresses, table),
    )
