import httpx
import pytest

from src.eddm_planner.config import settings
from src.eddm_planner.services.catalog import RouteCatalog, build_route
from src.eddm_planner.services.fetching.errors import (
    GeocodingNotConfiguredError,
    InvalidZipCodeError,
    MalformedPayloadError,
    NoZipCodesFoundError,
    RouteFetchError,
)
from src.eddm_planner.services.fetching.geocoding import GeocodingClient
from src.eddm_planner.services.fetching.loader import load_routes_for_radius, load_routes_for_zips
from src.eddm_planner.services.fetching.usps_client import (
    USPSRouteClient,
    routes_from_usps_payload,
    validate_zip,
)


def _payload(*features):
    return {"results": [{"paramName": "routes", "value": {"features": list(features)}}]}


def _feature(crid, res, bus, paths, **extra):
    return {
        "attributes": {"CRID_ID": crid, "RES_CNT": res, "BUS_CNT": bus, **extra},
        "geometry": {"paths": paths},
    }


LAKELAND_PATH = [[-81.95, 28.03], [-81.94, 28.03], [-81.94, 28.05]]


def test_payload_conversion_swaps_lng_lat_and_reads_counts():
    payload = _payload(
        _feature("C001", 350, 12, [LAKELAND_PATH], AVGHHINC_CY="61000", MEDAGE_FY=41.5),
        _feature(None, None, 4, [LAKELAND_PATH, [[-81.90, 28.00], [-81.91, 28.01]]]),
    )
    first, second = routes_from_usps_payload("33815", payload)

    assert first.route_id == "33815-C001"
    assert first.coordinates[0][0] == (28.03, -81.95)
    assert first.total_count == 362
    assert first.average_income == 61000.0
    assert first.median_age == 41.5

    assert second.route_id == "33815-1"
    assert second.name == "Route 2"
    assert second.residential_count == 0
    assert second.average_income is None
    assert len(second.coordinates) == 2


def test_malformed_payload():
    with pytest.raises(MalformedPayloadError):
        routes_from_usps_payload("33815", {"error": {"code": 500}})


@pytest.mark.parametrize(
    "feature",
    [
        _feature("C001", 10, 0, [[[-81.9]]]),
        _feature("C001", 10, 0, [[None, [-81.94, 28.03]]]),
        _feature("C001", 10, 0, [[["west", "north"]]]),
        "not-a-feature",
    ],
)
def test_unreadable_feature_is_a_malformed_payload(feature):
    with pytest.raises(MalformedPayloadError) as excinfo:
        routes_from_usps_payload("33815", _payload(_feature("C002", 5, 0, [LAKELAND_PATH]), feature))
    assert excinfo.value.zip_code == "33815"


def test_zip_validation():
    assert validate_zip(" 33815 ") == "33815"
    with pytest.raises(InvalidZipCodeError):
        validate_zip("3381")


def test_usps_client_retries_then_succeeds():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) == 1:
            return httpx.Response(503)
        return httpx.Response(200, json=_payload(_feature("C001", 10, 0, [LAKELAND_PATH])))

    client = USPSRouteClient(
        base_url="https://usps.test/routes",
        max_retries=2,
        backoff_seconds=0,
        transport=httpx.MockTransport(handler),
    )
    routes = client.fetch_routes("33815")

    assert [route.route_id for route in routes] == ["33815-C001"]
    assert len(calls) == 2
    assert calls[0].url.params["ZIP"] == "33815"


def test_usps_client_gives_up_with_typed_error():
    client = USPSRouteClient(
        base_url="https://usps.test/routes",
        max_retries=1,
        backoff_seconds=0,
        transport=httpx.MockTransport(lambda request: httpx.Response(500)),
    )
    with pytest.raises(RouteFetchError) as excinfo:
        client.fetch_routes("33815")
    assert excinfo.value.zip_code == "33815"


class DummyRouteSource:
    def __init__(self, failing=()):
        self.failing = set(failing)

    def fetch_routes(self, zip_code):
        if zip_code in self.failing:
            raise RouteFetchError(zip_code, "USPS API returned status 500")
        return [
            build_route(route_id=f"{zip_code}-C00{n}", zip_code=zip_code, rings=[[(28.0, -81.9)]], residential_count=10)
            for n in range(3)
        ]


def test_partial_failure_keeps_successful_zips():
    catalog = RouteCatalog()
    catalog.merge("33801", DummyRouteSource().fetch_routes("33801"))

    report = load_routes_for_zips(catalog, ["33815", "33803", "33801", "33815"], DummyRouteSource(failing={"33801"}))

    assert report.requested == ["33815", "33803", "33801"]
    assert sorted(report.succeeded) == ["33803", "33815"]
    assert set(report.failed) == {"33801"}
    assert report.partial is True
    assert report.route_count == 6
    # The failed ZIP keeps what it had; nothing is rolled back.
    assert len(catalog) == 9


class DummyDiscovery:
    def __init__(self, zips):
        self.zips = zips

    def nearby_zip_codes(self, center, radius_miles, known_zip=None):
        return list(self.zips)


def test_radius_load_without_zip_codes():
    with pytest.raises(NoZipCodesFoundError):
        load_routes_for_radius(RouteCatalog(), (28.0, -81.9), 5, DummyRouteSource(), DummyDiscovery([]))


def _geocode_response(zip_code):
    return {
        "status": "OK",
        "results": [
            {
                "formatted_address": "Lakeland, FL",
                "geometry": {"location": {"lat": 28.0395, "lng": -81.9498}},
                "address_components": [{"long_name": zip_code, "types": ["postal_code"]}],
            }
        ],
    }


def test_nearby_zip_codes_deduplicates_and_skips_failed_lookups():
    answers = iter(["33815", "33803", "33815", None, "33801"])

    def handler(request: httpx.Request) -> httpx.Response:
        zip_code = next(answers)
        if zip_code is None:
            return httpx.Response(200, json={"status": "OVER_QUERY_LIMIT"})
        return httpx.Response(200, json=_geocode_response(zip_code))

    geocoder = GeocodingClient(
        api_key="test-key",
        base_url="https://geocode.test/json",
        max_parallel_requests=1,
        transport=httpx.MockTransport(handler),
    )
    found = geocoder.nearby_zip_codes((28.0395, -81.9498), 5)

    assert sorted(found) == ["33801", "33803", "33815"]


def test_geocode_address():
    geocoder = GeocodingClient(
        api_key="test-key",
        base_url="https://geocode.test/json",
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json=_geocode_response("33815"))),
    )
    result = geocoder.geocode("123 Main St, Lakeland FL")
    assert result.location == (28.0395, -81.9498)
    assert result.zip_code == "33815"


def test_malformed_zip_does_not_block_the_rest_of_the_batch():
    def handler(request: httpx.Request) -> httpx.Response:
        zip_code = request.url.params["ZIP"]
        if zip_code == "33801":
            return httpx.Response(200, json=_payload(_feature("C001", 10, 0, [[[-81.9]]])))
        return httpx.Response(200, json=_payload(_feature("C001", 10, 0, [LAKELAND_PATH])))

    client = USPSRouteClient(
        base_url="https://usps.test/routes",
        max_retries=0,
        backoff_seconds=0,
        transport=httpx.MockTransport(handler),
    )
    catalog = RouteCatalog()
    report = load_routes_for_zips(catalog, ["33801", "33803", "33815"], client, max_workers=1)

    assert set(report.failed) == {"33801"}
    assert sorted(report.succeeded) == ["33803", "33815"]
    assert catalog.zip_codes() == {"33803", "33815"}


def test_non_json_geocoding_answer_is_skipped():
    answers = iter(["33815", "html", "33803", "33801", "html"])

    def handler(request: httpx.Request) -> httpx.Response:
        zip_code = next(answers)
        if zip_code == "html":
            return httpx.Response(200, text="<html>rate limited</html>", headers={"Content-Type": "text/html"})
        return httpx.Response(200, json=_geocode_response(zip_code))

    geocoder = GeocodingClient(
        api_key="test-key",
        base_url="https://geocode.test/json",
        max_parallel_requests=1,
        transport=httpx.MockTransport(handler),
    )
    assert sorted(geocoder.nearby_zip_codes((28.0395, -81.9498), 5)) == ["33801", "33803", "33815"]


def test_geocoding_client_requires_api_key(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(settings, "google_maps_api_key", None)
    with pytest.raises(GeocodingNotConfiguredError):
        GeocodingClient()
