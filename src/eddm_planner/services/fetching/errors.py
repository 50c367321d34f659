"""Typed failures raised at the upstream data boundary."""

from __future__ import annotations


class RouteFetchError(Exception):
    """The route lookup for a ZIP code failed after retries."""

    def __init__(self, zip_code: str, message: str) -> None:
        super().__init__(f"ZIP {zip_code}: {message}")
        self.zip_code = zip_code


class InvalidZipCodeError(ValueError):
    """The ZIP code is not a 5-digit string."""


class MalformedPayloadError(RouteFetchError):
    """The upstream service answered but not with a route feature set."""


class GeocodingError(Exception):
    """An address or coordinate could not be resolved."""


class NoZipCodesFoundError(LookupError):
    """ZIP discovery around a point produced nothing to fetch."""


class GeocodingNotConfiguredError(ValueError):
    """No geocoding API key is available."""
