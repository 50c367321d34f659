"""HTTP client for the USPS EDDM carrier route lookup."""

from __future__ import annotations

import logging
import re
import time
from typing import Any, Iterable, Mapping, Optional

import httpx

from ...config import settings
from ...models.domain import Route
from ..catalog import build_route
from .errors import InvalidZipCodeError, MalformedPayloadError, RouteFetchError

logger = logging.getLogger(__name__)

ZIP_PATTERN = re.compile(r"^\d{5}$")

INCOME_KEYS = ("AVGHHINC_CY", "AVGHHINC_FY", "AVGHHINC", "AVG_HH_INC", "MEDHHINC_CY")
AGE_KEYS = ("MEDAGE_CY", "MEDAGE_FY", "MED_AGE", "MEDIANAGE")


def validate_zip(zip_code: str) -> str:
    zip_code = (zip_code or "").strip()
    if not ZIP_PATTERN.match(zip_code):
        raise InvalidZipCodeError(f"Invalid ZIP code format: '{zip_code}'")
    return zip_code


def _numeric_attribute(attrs: Mapping[str, Any], keys: Iterable[str]) -> Optional[float]:
    """First value among ``keys`` that parses as a number; absent rather than zero."""
    for key in keys:
        value = attrs.get(key)
        if value is None or value == "":
            continue
        try:
            return float(value)
        except (TypeError, ValueError):
            continue
    return None


def _count(attrs: Mapping[str, Any], key: str) -> int:
    try:
        return int(attrs.get(key) or 0)
    except (TypeError, ValueError):
        return 0


def route_from_usps_feature(zip_code: str, feature: Mapping[str, Any], index: int) -> Route:
    attrs = feature.get("attributes") or {}
    paths = (feature.get("geometry") or {}).get("paths") or []
    crid = attrs.get("CRID_ID")

    # USPS returns [lng, lat] pairs.
    rings = [[(coord[1], coord[0]) for coord in path] for path in paths]
    return build_route(
        route_id=f"{zip_code}-{crid or index}",
        name=crid or f"Route {index + 1}",
        zip_code=zip_code,
        rings=rings,
        residential_count=_count(attrs, "RES_CNT"),
        business_count=_count(attrs, "BUS_CNT"),
        average_income=_numeric_attribute(attrs, INCOME_KEYS),
        median_age=_numeric_attribute(attrs, AGE_KEYS),
    )


def routes_from_usps_payload(zip_code: str, payload: Mapping[str, Any]) -> list[Route]:
    try:
        features = payload["results"][0]["value"]["features"]
    except (KeyError, IndexError, TypeError):
        error = payload.get("error") if isinstance(payload, Mapping) else None
        raise MalformedPayloadError(zip_code, f"No route data in response ({error or 'unexpected shape'})") from None
    if not isinstance(features, list):
        raise MalformedPayloadError(zip_code, "features is not a list")
    try:
        return [route_from_usps_feature(zip_code, feature, index) for index, feature in enumerate(features)]
    except (KeyError, IndexError, TypeError, AttributeError, ValueError) as e:
        raise MalformedPayloadError(zip_code, f"Unreadable route feature: {e!r}") from e


class USPSRouteClient:
    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_seconds: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or settings.usps_routes_url
        self.timeout = timeout if timeout is not None else settings.fetch_timeout_seconds
        self.max_retries = max_retries if max_retries is not None else settings.fetch_max_retries
        self.backoff_seconds = backoff_seconds if backoff_seconds is not None else settings.fetch_backoff_seconds
        self.transport = transport

    def _get_client(self) -> httpx.Client:
        """A fresh client per call; fetch workers run on separate threads."""
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            headers={"User-Agent": settings.usps_user_agent},
            transport=self.transport,
        )

    def fetch_routes(self, zip_code: str) -> list[Route]:
        zip_code = validate_zip(zip_code)
        params = {"f": "json", "env:outSR": "4326", "ZIP": zip_code, "UserName": "EDDM"}
        logger.info(f"Fetching EDDM carrier routes for ZIP {zip_code}")

        client = self._get_client()
        try:
            attempt = 0
            while True:
                try:
                    response = client.get(self.base_url, params=params)
                    response.raise_for_status()
                    routes = routes_from_usps_payload(zip_code, response.json())
                    logger.info(f"Loaded {len(routes)} routes for ZIP {zip_code}")
                    return routes
                except httpx.HTTPStatusError as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        raise RouteFetchError(
                            zip_code, f"USPS API returned status {e.response.status_code}"
                        ) from e
                    time.sleep(self.backoff_seconds * attempt)
                except (httpx.TimeoutException, httpx.NetworkError) as e:
                    attempt += 1
                    if attempt > self.max_retries:
                        logger.warning(f"USPS request for ZIP {zip_code} failed after {self.max_retries} retries: {e}")
                        raise RouteFetchError(zip_code, f"USPS service unreachable: {e}") from e
                    wait_time = self.backoff_seconds * (2 ** (attempt - 1))
                    logger.debug(f"USPS request error, retrying in {wait_time:.1f}s (attempt {attempt}/{self.max_retries})")
                    time.sleep(wait_time)
                except ValueError as e:
                    raise MalformedPayloadError(zip_code, f"Response is not valid JSON: {e}") from e
        finally:
            client.close()
