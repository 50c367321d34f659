"""Accumulated, de-duplicated collection of carrier routes across ZIP fetches."""

from __future__ import annotations

import logging
import threading
from typing import Iterable, Optional, Sequence

from ..models.domain import LatLng, Ring, Route
from .geospatial import mean_point

logger = logging.getLogger(__name__)


def build_route(
    *,
    route_id: str,
    zip_code: str,
    rings: Iterable[Sequence[LatLng]],
    residential_count: int = 0,
    business_count: int = 0,
    name: Optional[str] = None,
    average_income: Optional[float] = None,
    median_age: Optional[float] = None,
) -> Route:
    """Create a Route, deriving its centroid from every point of every ring."""

    coordinates: tuple[Ring, ...] = tuple(
        tuple((float(lat), float(lng)) for lat, lng in ring) for ring in rings
    )
    flat = [point for ring in coordinates for point in ring]
    return Route(
        route_id=route_id,
        name=name or route_id,
        zip_code=zip_code,
        coordinates=coordinates,
        centroid=mean_point(flat),
        residential_count=max(0, int(residential_count)),
        business_count=max(0, int(business_count)),
        average_income=average_income,
        median_age=median_age,
    )


class RouteCatalog:
    """Routes keyed by id, replaced per ZIP as fetches complete.

    ``merge`` is the only mutation entry point and is atomic, so fetch
    workers may call it in any completion order.
    """

    def __init__(self, routes: Iterable[Route] = ()) -> None:
        self._routes: dict[str, Route] = {}
        self._lock = threading.Lock()
        for route in routes:
            self._routes[route.route_id] = route

    def merge(self, zip_code: str, routes: Sequence[Route]) -> None:
        """Replace every route of ``zip_code`` with ``routes``.

        Raises ValueError, leaving the catalog untouched, when a route in the
        batch belongs to another ZIP.
        """
        mismatched = [route.route_id for route in routes if route.zip_code != zip_code]
        if mismatched:
            logger.warning(f"Rejected merge for ZIP {zip_code}: routes from other ZIPs {mismatched}")
            raise ValueError(f"Routes {mismatched} do not belong to ZIP {zip_code}")

        with self._lock:
            stale = [route_id for route_id, route in self._routes.items() if route.zip_code == zip_code]
            for route_id in stale:
                del self._routes[route_id]
            for route in routes:
                self._routes[route.route_id] = route
        logger.debug(f"Merged {len(routes)} routes for ZIP {zip_code} (replaced {len(stale)})")

    def all(self) -> tuple[Route, ...]:
        with self._lock:
            return tuple(self._routes.values())

    def get(self, route_id: str) -> Route | None:
        with self._lock:
            return self._routes.get(route_id)

    def zip_codes(self) -> set[str]:
        with self._lock:
            return {route.zip_code for route in self._routes.values()}

    def clear(self) -> None:
        with self._lock:
            self._routes.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._routes)

    def __contains__(self, route_id: object) -> bool:
        with self._lock:
            return route_id in self._routes
