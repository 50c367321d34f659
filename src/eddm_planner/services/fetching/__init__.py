"""Upstream data collaborators: USPS route lookup and geocoding."""

from .errors import (
    GeocodingError,
    GeocodingNotConfiguredError,
    InvalidZipCodeError,
    MalformedPayloadError,
    NoZipCodesFoundError,
    RouteFetchError,
)
from .geocoding import GeocodeResult, GeocodingClient
from .loader import FetchReport, load_routes_for_radius, load_routes_for_zips
from .usps_client import USPSRouteClient, route_from_usps_feature, routes_from_usps_payload, validate_zip

__all__ = [
    "GeocodingError",
    "GeocodingNotConfiguredError",
    "InvalidZipCodeError",
    "MalformedPayloadError",
    "NoZipCodesFoundError",
    "RouteFetchError",
    "GeocodeResult",
    "GeocodingClient",
    "FetchReport",
    "load_routes_for_radius",
    "load_routes_for_zips",
    "USPSRouteClient",
    "route_from_usps_feature",
    "routes_from_usps_payload",
    "validate_zip",
]
