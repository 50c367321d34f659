"""Route containment heuristics for circle and polygon regions.

These are sampling approximations, not exact polygon clipping: a circle hit
needs a route vertex inside the radius (or the centroid within a slackened
radius), and a polygon hit needs the route centroid inside the polygon (or a
polygon vertex inside one of the route's rings). Long thin routes that cross
a region without any sampled point inside it are missed.
"""

from __future__ import annotations

from typing import Sequence

from ..config import settings
from ..models.domain import LatLng, Route
from .geospatial import distance_miles, point_in_polygon


def intersects_circle(
    route: Route,
    center: LatLng,
    radius_miles: float,
    *,
    slack_factor: float | None = None,
) -> bool:
    if radius_miles < 0:
        return False

    for ring in route.coordinates:
        for point in ring:
            if distance_miles(center, point) <= radius_miles:
                return True

    if route.centroid is None:
        return False
    slack = settings.radius_slack_factor if slack_factor is None else slack_factor
    return distance_miles(center, route.centroid) <= radius_miles * slack


def intersects_polygon(route: Route, vertices: Sequence[LatLng]) -> bool:
    if len(vertices) < 3 or route.centroid is None:
        return False

    if point_in_polygon(route.centroid, vertices):
        return True

    for ring in route.coordinates:
        if len(ring) < 3:
            continue
        if any(point_in_polygon(vertex, ring) for vertex in vertices):
            return True
    return False
