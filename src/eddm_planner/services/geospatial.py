"""Geospatial helper functions."""

from __future__ import annotations

import math
from typing import Sequence

from shapely.geometry import Point, Polygon
from shapely.validation import make_valid

from ..models.domain import LatLng

EARTH_RADIUS_MILES = 3959.0


def distance_miles(a: LatLng, b: LatLng) -> float:
    """Compute distance between two (lat, lng) coordinates using the Haversine formula."""

    lat1, lng1 = a
    lat2, lng2 = b
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)

    h = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_MILES * c


def destination_point(origin: LatLng, distance: float, bearing: float) -> LatLng:
    """Return the point reached travelling ``distance`` miles from ``origin`` on ``bearing`` degrees.

    Bearing 0 is north, measured clockwise. The longitude is not normalised,
    so results near the antimeridian may fall outside [-180, 180].
    """

    lat, lng = origin
    angular = distance / EARTH_RADIUS_MILES
    theta = math.radians(bearing)
    phi1 = math.radians(lat)
    lambda1 = math.radians(lng)

    phi2 = math.asin(
        math.sin(phi1) * math.cos(angular) + math.cos(phi1) * math.sin(angular) * math.cos(theta)
    )
    lambda2 = lambda1 + math.atan2(
        math.sin(theta) * math.sin(angular) * math.cos(phi1),
        math.cos(angular) - math.sin(phi1) * math.sin(phi2),
    )
    return (math.degrees(phi2), math.degrees(lambda2))


def point_in_polygon(point: LatLng, ring: Sequence[LatLng]) -> bool:
    """Return True if the point is strictly inside the ring of (lat, lng) pairs.

    Points on the boundary are outside. Rings with fewer than three points
    never contain anything. A self-intersecting ring (a freehand figure-8)
    is split into its lobes, so a point inside either lobe is inside.
    """

    if len(ring) < 3:
        return False
    lat, lng = point
    polygon = Polygon([(vertex_lng, vertex_lat) for vertex_lat, vertex_lng in ring])
    shape = polygon if polygon.is_valid else make_valid(polygon)
    if shape.is_empty or shape.area == 0:
        return False
    return shape.contains(Point(lng, lat))


def mean_point(points: Sequence[LatLng]) -> LatLng | None:
    """Unweighted arithmetic mean of the points, or None when there are none."""

    if not points:
        return None
    lat = sum(p[0] for p in points) / len(points)
    lng = sum(p[1] for p in points) / len(points)
    return (lat, lng)
