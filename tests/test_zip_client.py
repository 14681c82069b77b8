import threading

import httpx
import pytest

from src.localgoods.exceptions import InvalidFormatError, NotFoundError, UpstreamUnavailableError
from src.localgoods.services.geocoding import (
    ZipCodeResolver,
    check_health,
    normalize_postal_code,
    split_primary,
)

PLACES = {
    "90012": {"place name": "Los Angeles", "state": "California", "state abbreviation": "CA",
              "latitude": "34.0614", "longitude": "-118.2385"},
    "10001": {"place name": "New York City", "state": "New York", "state abbreviation": "NY",
              "latitude": "40.7484", "longitude": "-73.9967"},
    "60601": {"place name": "Chicago", "state": "Illinois", "state abbreviation": "IL",
              "latitude": "41.8858", "longitude": "-87.6181"},
}


def _provider(request: httpx.Request) -> httpx.Response:
    code = request.url.path.rsplit("/", 1)[-1]
    if code == "50000":
        return httpx.Response(500, json={})
    if code == "40000":
        raise httpx.ReadTimeout("timed out", request=request)
    if code == "30000":
        raise httpx.ConnectError("connection refused", request=request)
    if code == "20000":
        return httpx.Response(200, json={"post code": code, "places": []})
    if code == "11111":
        return httpx.Response(200, json={"places": [{"place name": "Nowhere"}]})
    if code == "22222":
        return httpx.Response(200, content=b"<html>oops</html>")
    place = PLACES.get(code)
    if place is None:
        return httpx.Response(404, json={})
    return httpx.Response(200, json={"post code": code, "country": "United States", "places": [place]})


@pytest.fixture
def resolver() -> ZipCodeResolver:
    return ZipCodeResolver(base_url="https://zip.test", country="us", transport=httpx.MockTransport(_provider))


def test_normalize_strips_non_digits():
    assert normalize_postal_code(" 900-12 ") == "90012"


@pytest.mark.parametrize("raw", ["", "1234", "123456", "90210-1234", "abcde"])
def test_normalize_rejects_malformed_codes(raw):
    with pytest.raises(InvalidFormatError):
        normalize_postal_code(raw)


def test_resolve_returns_place_metadata(resolver: ZipCodeResolver):
    location = resolver.resolve("90012")

    assert location.postal_code == "90012"
    assert location.city == "Los Angeles"
    assert location.region == "CA"
    assert location.region_name == "California"
    assert location.coordinate.latitude == pytest.approx(34.0614)
    assert location.coordinate.longitude == pytest.approx(-118.2385)


def test_resolve_requests_country_and_clean_code():
    seen: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return _provider(request)

    resolver = ZipCodeResolver(base_url="https://zip.test/", transport=httpx.MockTransport(handler))
    resolver.resolve("100-01")

    assert seen == ["https://zip.test/us/10001"]


def test_invalid_format_never_calls_provider():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("provider should not be called")

    resolver = ZipCodeResolver(base_url="https://zip.test", transport=httpx.MockTransport(handler))
    with pytest.raises(InvalidFormatError):
        resolver.resolve("123")


@pytest.mark.parametrize("code", ["99999", "20000"])
def test_unknown_codes_raise_not_found(resolver: ZipCodeResolver, code: str):
    with pytest.raises(NotFoundError) as excinfo:
        resolver.resolve(code)
    assert excinfo.value.postal_code == code


@pytest.mark.parametrize("code", ["50000", "40000", "30000", "11111", "22222"])
def test_provider_failures_raise_upstream_unavailable(resolver: ZipCodeResolver, code: str):
    with pytest.raises(UpstreamUnavailableError):
        resolver.resolve(code)


def test_resolve_many_isolates_failures_and_keeps_order(resolver: ZipCodeResolver):
    lookups = resolver.resolve_many(["99999", "10001", "abc", "40000", "90012"])

    assert [lookup.postal_code for lookup in lookups] == ["99999", "10001", "abc", "40000", "90012"]
    assert [lookup.ok for lookup in lookups] == [False, True, False, False, True]
    assert isinstance(lookups[0].error, NotFoundError)
    assert isinstance(lookups[2].error, InvalidFormatError)
    assert isinstance(lookups[3].error, UpstreamUnavailableError)

    primary, additional = split_primary(lookups)
    assert primary is not None and primary.postal_code == "10001"
    assert [location.postal_code for location in additional] == ["90012"]


def test_resolve_many_runs_lookups_concurrently():
    barrier = threading.Barrier(3, timeout=5)

    def handler(request: httpx.Request) -> httpx.Response:
        barrier.wait()
        return _provider(request)

    resolver = ZipCodeResolver(
        base_url="https://zip.test",
        max_parallel_requests=3,
        transport=httpx.MockTransport(handler),
    )
    lookups = resolver.resolve_many(["90012", "10001", "60601"])

    assert all(lookup.ok for lookup in lookups)


def test_resolve_many_empty_input(resolver: ZipCodeResolver):
    assert resolver.resolve_many([]) == []
    assert split_primary([]) == (None, [])


def test_check_health(resolver: ZipCodeResolver):
    assert check_health(resolver, probe_code="90012") is True
    assert check_health(resolver, probe_code="50000") is False
