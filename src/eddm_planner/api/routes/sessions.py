"""API routes for route planning sessions."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from fastapi import APIRouter, HTTPException, Query, Request, status

from ...config import settings
from ...schemas.pricing import PricingResultModel
from ...schemas.sessions import (
    DeliveryTypeRequest,
    FetchReportModel,
    OptimizeRequest,
    OptimizeResponse,
    RadiusSearchRequest,
    RegionModel,
    RegionRequest,
    RouteModel,
    SelectRequest,
    SessionCreated,
    SessionResponse,
    ToggleRequest,
    ZipFetchRequest,
)
from ...services.budget.optimizer import plan_within_budget
from ...services.fetching.errors import (
    GeocodingError,
    GeocodingNotConfiguredError,
    InvalidZipCodeError,
    NoZipCodesFoundError,
    RouteFetchError,
)
from ...services.fetching.geocoding import GeocodingClient
from ...services.fetching.loader import FetchReport, load_routes_for_radius, load_routes_for_zips
from ...services.fetching.usps_client import USPSRouteClient, validate_zip
from ...services.pricing.engine import PricingTable
from ...services.pricing.tables import UnknownProductError, get_table
from ...services.selection import session as planning
from ...services.selection.session import PlanningSession
from ...services.selection.store import SessionNotFoundError, SessionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _store(request: Request) -> SessionStore:
    return request.app.state.sessions


def _table(product: Optional[str]) -> PricingTable:
    try:
        return get_table(product or settings.default_product)
    except UnknownProductError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown product '{exc.args[0]}'") from exc


def _session_response(
    session_id: str,
    session: PlanningSession,
    table: PricingTable,
    fetch: FetchReport | None = None,
) -> SessionResponse:
    summary = planning.summarize(session, table)
    return SessionResponse(
        session_id=session_id,
        delivery_type=session.delivery_type,
        active_region=RegionModel.from_region(session.regions.active()),
        catalog_size=len(session.catalog),
        in_scope=[RouteModel.from_route(route) for route in summary.in_scope],
        selection=list(session.selection),
        in_scope_addresses=summary.in_scope_addresses,
        selected_addresses=summary.selected_addresses,
        product=table.name,
        pricing=PricingResultModel.from_result(summary.pricing),
        fetch=FetchReportModel.from_report(fetch) if fetch else None,
    )


def _apply(
    request: Request,
    session_id: str,
    transition: Callable[[PlanningSession], PlanningSession],
) -> PlanningSession:
    try:
        return _store(request).update(session_id, transition)
    except SessionNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown session '{session_id}'") from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


def _get(request: Request, session_id: str) -> PlanningSession:
    try:
        return _store(request).get(session_id)
    except SessionNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown session '{session_id}'") from exc


@router.post("", response_model=SessionCreated, status_code=status.HTTP_201_CREATED)
def create_session(request: Request) -> SessionCreated:
    session_id, _ = _store(request).create()
    return SessionCreated(session_id=session_id)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def close_session(request: Request, session_id: str) -> None:
    try:
        _store(request).close(session_id)
    except SessionNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown session '{session_id}'") from exc


@router.get("/{session_id}", response_model=SessionResponse)
def get_session(request: Request, session_id: str, product: Optional[str] = Query(default=None)) -> SessionResponse:
    table = _table(product)
    return _session_response(session_id, _get(request, session_id), table)


@router.post("/{session_id}/zip", response_model=SessionResponse)
def fetch_zip(
    request: Request,
    session_id: str,
    payload: ZipFetchRequest,
    product: Optional[str] = Query(default=None),
) -> SessionResponse:
    """Load carrier routes for one ZIP code into the session catalog."""
    table = _table(product)
    session = _get(request, session_id)
    try:
        zip_code = validate_zip(payload.zip_code)
    except InvalidZipCodeError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    try:
        routes = USPSRouteClient().fetch_routes(zip_code)
    except RouteFetchError as exc:
        logger.error(f"Error fetching EDDM routes: {exc}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Failed to fetch EDDM routes: {exc}") from exc

    session.catalog.merge(zip_code, routes)
    updated = _apply(request, session_id, planning.refresh)
    report = FetchReport(requested=[zip_code], succeeded=[zip_code], route_count=len(routes))
    return _session_response(session_id, updated, table, fetch=report)


@router.post("/{session_id}/radius", response_model=SessionResponse)
def search_radius(
    request: Request,
    session_id: str,
    payload: RadiusSearchRequest,
    product: Optional[str] = Query(default=None),
) -> SessionResponse:
    """Discover ZIP codes around a point, load their routes and activate the circle."""
    table = _table(product)
    session = _get(request, session_id)
    known_zip = payload.known_zip

    try:
        geocoder = GeocodingClient()
    except GeocodingNotConfiguredError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc

    try:
        if payload.latitude is not None and payload.longitude is not None:
            center = (payload.latitude, payload.longitude)
        else:
            result = geocoder.geocode(payload.address or "")
            center = result.location
            known_zip = known_zip or result.zip_code
        report = load_routes_for_radius(
            session.catalog,
            center,
            payload.radius_miles,
            USPSRouteClient(),
            geocoder,
            known_zip=known_zip,
        )
    except GeocodingError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except NoZipCodesFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No ZIP codes found in this area") from exc
    except ConnectionError as exc:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc)) from exc

    if not report.succeeded:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Could not load routes from any ZIP codes in this area",
        )

    updated = _apply(request, session_id, lambda s: planning.set_circle(s, center, payload.radius_miles))
    return _session_response(session_id, updated, table, fetch=report)


@router.put("/{session_id}/region", response_model=SessionResponse)
def set_region(
    request: Request,
    session_id: str,
    payload: RegionRequest,
    product: Optional[str] = Query(default=None),
) -> SessionResponse:
    table = _table(product)
    if payload.type == "polygon":
        transition = lambda s: planning.set_polygon(s, list(payload.vertices or ()))
    elif payload.type == "circle":
        transition = lambda s: planning.set_circle(s, payload.center, payload.radius_miles)
    else:
        transition = planning.clear_region
    updated = _apply(request, session_id, transition)
    return _session_response(session_id, updated, table)


@router.delete("/{session_id}/region/polygon", response_model=SessionResponse)
def clear_polygon(
    request: Request,
    session_id: str,
    product: Optional[str] = Query(default=None),
) -> SessionResponse:
    table = _table(product)
    updated = _apply(request, session_id, planning.clear_polygon)
    return _session_response(session_id, updated, table)


@router.put("/{session_id}/delivery-type", response_model=SessionResponse)
def set_delivery_type(
    request: Request,
    session_id: str,
    payload: DeliveryTypeRequest,
    product: Optional[str] = Query(default=None),
) -> SessionResponse:
    table = _table(product)
    updated = _apply(request, session_id, lambda s: planning.set_delivery_type(s, payload.delivery_type))
    return _session_response(session_id, updated, table)


@router.post("/{session_id}/selection/toggle", response_model=SessionResponse)
def toggle_route(
    request: Request,
    session_id: str,
    payload: ToggleRequest,
    product: Optional[str] = Query(default=None),
) -> SessionResponse:
    table = _table(product)
    updated = _apply(request, session_id, lambda s: planning.toggle_route(s, payload.route_id))
    return _session_response(session_id, updated, table)


@router.put("/{session_id}/selection", response_model=SessionResponse)
def select_routes(
    request: Request,
    session_id: str,
    payload: SelectRequest,
    product: Optional[str] = Query(default=None),
) -> SessionResponse:
    table = _table(product)
    updated = _apply(request, session_id, lambda s: planning.select_routes(s, payload.route_ids))
    return _session_response(session_id, updated, table)


@router.post("/{session_id}/selection/select-all", response_model=SessionResponse)
def select_all(
    request: Request,
    session_id: str,
    product: Optional[str] = Query(default=None),
) -> SessionResponse:
    table = _table(product)
    updated = _apply(request, session_id, planning.select_all_in_scope)
    return _session_response(session_id, updated, table)


@router.post("/{session_id}/selection/clear", response_model=SessionResponse)
def clear_selection(
    request: Request,
    session_id: str,
    product: Optional[str] = Query(default=None),
) -> SessionResponse:
    table = _table(product)
    updated = _apply(request, session_id, planning.clear_selection)
    return _session_response(session_id, updated, table)


@router.post("/{session_id}/reset", response_model=SessionResponse)
def reset_session(
    request: Request,
    session_id: str,
    product: Optional[str] = Query(default=None),
) -> SessionResponse:
    table = _table(product)
    updated = _apply(request, session_id, planning.reset)
    return _session_response(session_id, updated, table)


@router.post("/{session_id}/optimize", response_model=OptimizeResponse)
def optimize_budget(request: Request, session_id: str, payload: OptimizeRequest) -> OptimizeResponse:
    """Replace the selection with the best set of in-scope routes for the budget."""
    table = _table(payload.product)
    session = _get(request, session_id)
    plan = plan_within_budget(planning.in_scope_routes(session), session.delivery_type, payload.budget, table)

    updated = _apply(request, session_id, lambda s: planning.select_routes(s, plan.route_ids))
    base = _session_response(session_id, updated, table)
    return OptimizeResponse(
        **base.model_dump(),
        budget=payload.budget,
        forced=plan.forced,
        estimated_cost=plan.estimated_cost,
    )
