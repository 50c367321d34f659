"""Fan-out/fan-in loading of carrier routes for many ZIP codes."""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Iterable, Protocol, Sequence

from ...config import settings
from ...models.domain import LatLng, Route
from ..catalog import RouteCatalog
from .errors import InvalidZipCodeError, NoZipCodesFoundError, RouteFetchError

logger = logging.getLogger(__name__)


class RouteSource(Protocol):
    def fetch_routes(self, zip_code: str) -> list[Route]: ...


class ZipDiscovery(Protocol):
    def nearby_zip_codes(self, center: LatLng, radius_miles: float, known_zip: str | None = None) -> list[str]: ...


@dataclass(slots=True)
class FetchReport:
    requested: list[str]
    succeeded: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)
    route_count: int = 0

    @property
    def partial(self) -> bool:
        return bool(self.succeeded) and bool(self.failed)


def load_routes_for_zips(
    catalog: RouteCatalog,
    zip_codes: Iterable[str],
    client: RouteSource,
    *,
    max_workers: int | None = None,
) -> FetchReport:
    """Fetch every ZIP concurrently and merge each success as it completes.

    A failed ZIP leaves the catalog untouched for that ZIP; successes are
    kept regardless of other failures.
    """
    requested = list(dict.fromkeys(zip_codes))
    report = FetchReport(requested=requested)
    if not requested:
        return report

    start_time = time.time()
    workers = min(max_workers or settings.max_parallel_fetches, len(requested))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        future_to_zip = {executor.submit(client.fetch_routes, zip_code): zip_code for zip_code in requested}
        for future in as_completed(future_to_zip):
            zip_code = future_to_zip[future]
            try:
                routes = future.result()
                catalog.merge(zip_code, routes)
            except (RouteFetchError, InvalidZipCodeError, ConnectionError, ValueError) as e:
                report.failed[zip_code] = str(e)
                logger.warning(f"Route fetch failed for ZIP {zip_code}: {e}")
                continue
            report.succeeded.append(zip_code)
            report.route_count += len(routes)

    elapsed = time.time() - start_time
    if report.failed:
        logger.warning(
            f"Loaded routes from {len(report.succeeded)}/{len(requested)} ZIP codes "
            f"({len(report.failed)} failed) in {elapsed:.2f}s"
        )
    else:
        logger.info(f"Loaded {report.route_count} routes from {len(requested)} ZIP codes in {elapsed:.2f}s")
    return report


def load_routes_for_radius(
    catalog: RouteCatalog,
    center: LatLng,
    radius_miles: float,
    client: RouteSource,
    discovery: ZipDiscovery,
    *,
    known_zip: str | None = None,
    max_workers: int | None = None,
) -> FetchReport:
    zip_codes: Sequence[str] = discovery.nearby_zip_codes(center, radius_miles, known_zip=known_zip)
    if not zip_codes:
        raise NoZipCodesFoundError(f"No ZIP codes found within {radius_miles} miles of {center}")
    return load_routes_for_zips(catalog, zip_codes, client, max_workers=max_workers)
