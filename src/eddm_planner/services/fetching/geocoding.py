"""Address and ZIP lookup against the Google Geocoding API."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

import httpx

from ...config import settings
from ...models.domain import LatLng
from ..geospatial import destination_point
from .errors import GeocodingError, GeocodingNotConfiguredError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GeocodeResult:
    location: LatLng
    zip_code: Optional[str]
    formatted_address: Optional[str] = None


def _postal_code(result: Mapping[str, Any]) -> Optional[str]:
    for component in result.get("address_components") or []:
        if "postal_code" in (component.get("types") or []):
            return component.get("long_name")
    return None


class GeocodingClient:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        max_parallel_requests: int | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.api_key = api_key or settings.google_maps_api_key
        if not self.api_key:
            raise GeocodingNotConfiguredError("Geocoding API key is not configured.")
        self.base_url = base_url or settings.geocoding_base_url
        self.timeout = timeout if timeout is not None else settings.fetch_timeout_seconds
        self.max_parallel_requests = max_parallel_requests or settings.max_parallel_fetches
        self.transport = transport

    def _get_client(self) -> httpx.Client:
        return httpx.Client(timeout=httpx.Timeout(self.timeout, connect=10.0), transport=self.transport)

    def _request(self, params: dict[str, str]) -> list[dict]:
        client = self._get_client()
        try:
            response = client.get(self.base_url, params={**params, "key": self.api_key})
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise ConnectionError(f"Geocoding service request failed: {e}") from e
        except ValueError as e:
            raise GeocodingError(f"Geocoding service returned an unreadable response: {e}") from e
        finally:
            client.close()

        if not isinstance(data, dict):
            raise GeocodingError("Geocoding service returned an unexpected payload.")
        status = data.get("status")
        if status == "ZERO_RESULTS":
            return []
        if status != "OK":
            raise GeocodingError(f"Geocoding failed. API Status: {status}")
        return data.get("results") or []

    def geocode(self, address: str) -> GeocodeResult:
        if not address or not address.strip():
            raise GeocodingError("An address is required.")
        results = self._request({"address": address.strip()})
        if not results:
            raise GeocodingError(f"Address not found: '{address}'")
        first = results[0]
        location = first["geometry"]["location"]
        return GeocodeResult(
            location=(float(location["lat"]), float(location["lng"])),
            zip_code=_postal_code(first),
            formatted_address=first.get("formatted_address"),
        )

    def reverse_zip(self, point: LatLng) -> Optional[str]:
        results = self._request({"latlng": f"{point[0]},{point[1]}"})
        if not results:
            return None
        return _postal_code(results[0])

    def nearby_zip_codes(
        self,
        center: LatLng,
        radius_miles: float,
        known_zip: str | None = None,
        bearings: Sequence[float] | None = None,
    ) -> list[str]:
        """ZIP codes at the centre and at points on the circle edge.

        Edge points sit at ``radius_miles`` along each bearing. A failed probe
        is logged and skipped.
        """
        bearings = settings.zip_probe_bearings if bearings is None else bearings
        probes: list[LatLng] = [] if known_zip else [center]
        probes.extend(destination_point(center, radius_miles, bearing) for bearing in bearings)

        found: list[str] = [known_zip] if known_zip else []
        with ThreadPoolExecutor(max_workers=self.max_parallel_requests) as executor:
            future_to_point = {executor.submit(self.reverse_zip, point): point for point in probes}
            for future in as_completed(future_to_point):
                point = future_to_point[future]
                try:
                    zip_code = future.result()
                except (GeocodingError, ConnectionError) as e:
                    logger.warning(f"ZIP probe at {point} failed: {e}")
                    continue
                if zip_code and zip_code not in found:
                    found.append(zip_code)

        logger.info(f"Found {len(found)} unique ZIP codes within {radius_miles} miles of {center}: {found}")
        return found
