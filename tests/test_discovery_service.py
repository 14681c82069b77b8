import random
from datetime import date, datetime, timedelta, timezone

import pytest

from src.localgoods.data.catalog_repository import Catalog
from src.localgoods.exceptions import NotFoundError
from src.localgoods.models.domain import Coordinate, Merchant, RankableProduct, ResolvedLocation
from src.localgoods.services.discovery import (
    DiscoveryQuery,
    LocationRequest,
    ProductFilters,
    ProximityFilter,
    discover_products,
    recommend_products,
)
from src.localgoods.services.discovery.service import NO_LOCATION_DATA_MESSAGE
from src.localgoods.services.geocoding import LocationLookup
from src.localgoods.services.recommendations import RecommendationComposer

LA = Coordinate(34.0522, -118.2437)
BASE = datetime(2026, 10, 1, tzinfo=timezone.utc)


def _merchant(mid: str, miles_north: float | None) -> Merchant:
    if miles_north is None:
        return Merchant(merchant_id=mid, name=mid, latitude=None, longitude=None)
    return Merchant(
        merchant_id=mid,
        name=mid,
        latitude=LA.latitude + miles_north / 69.0975,
        longitude=LA.longitude,
    )


def _product(pid: str, merchant_id: str, *, days_old: int = 0, featured: bool = False, **kwargs) -> RankableProduct:
    return RankableProduct(
        product_id=pid,
        merchant_id=merchant_id,
        name=kwargs.pop("name", f"Product {pid}"),
        category=kwargs.pop("category", "produce"),
        price=kwargs.pop("price", 5.0),
        created_at=BASE - timedelta(days=days_old),
        featured=featured,
        **kwargs,
    )


class FakeResolver:
    def __init__(self, known: dict[str, Coordinate]):
        self.known = known
        self.calls: list[str] = []

    def resolve(self, postal_code: str) -> ResolvedLocation:
        self.calls.append(postal_code)
        if postal_code not in self.known:
            raise NotFoundError(f"Could not find location for zip code {postal_code}", postal_code=postal_code)
        return ResolvedLocation(postal_code=postal_code, coordinate=self.known[postal_code], city="Test", region="CA")

    def resolve_many(self, postal_codes):
        results = []
        for code in postal_codes:
            try:
                results.append(LocationLookup(postal_code=code, location=self.resolve(code)))
            except NotFoundError as exc:
                results.append(LocationLookup(postal_code=code, error=exc))
        return results


@pytest.fixture
def catalog() -> Catalog:
    merchants = (_merchant("M5", 5), _merchant("M30", 30), _merchant("M60", 60), _merchant("MNONE", None))
    products = (
        _product("P5-old", "M5", days_old=10),
        _product("P5-new", "M5", days_old=1, category="dairy"),
        _product("P30", "M30", days_old=0, featured=True),
        _product("P60", "M60", days_old=3, price=50.0),
        _product("PNONE", "MNONE", days_old=2),
        _product("PHIDDEN", "M5", days_old=0, approval_status="pending"),
    )
    return Catalog(merchants=merchants, products=products)


@pytest.fixture
def resolver() -> FakeResolver:
    return FakeResolver({"90012": LA})


def _ids(products):
    return [product.product_id for product in products]


def test_discover_within_radius(catalog, resolver):
    query = DiscoveryQuery(location=LocationRequest(zip_code="90012", radius_miles=25))
    result = discover_products(query, catalog=catalog, resolver=resolver, proximity=ProximityFilter(3))

    assert result.context.status == "in_range"
    assert result.context.message is None
    assert result.context.location.postal_code == "90012"
    assert _ids(result.page.items) == ["P5-new", "P5-old"]
    assert all(product.distance_miles == 5.0 for product in result.page.items)


def test_discover_falls_back_to_nearest_merchants(catalog, resolver):
    query = DiscoveryQuery(location=LocationRequest(zip_code="90012", radius_miles=1))
    result = discover_products(query, catalog=catalog, resolver=resolver, proximity=ProximityFilter(3))

    assert result.context.status == "fallback"
    assert result.context.proximity.fallback_nearest_distance == 5.0
    assert "closest" in result.context.message
    # featured first, then closest first
    assert _ids(result.page.items) == ["P30", "P5-new", "P5-old", "P60"]


def test_discover_without_merchant_locations_reports_no_data(resolver):
    catalog = Catalog(
        merchants=(_merchant("MNONE", None),),
        products=(_product("A", "MNONE", days_old=4), _product("B", "MNONE", days_old=1)),
    )
    query = DiscoveryQuery(location=LocationRequest(zip_code="90012"))
    result = discover_products(query, catalog=catalog, resolver=resolver)

    assert result.context.status == "no_location_data"
    assert result.context.message == NO_LOCATION_DATA_MESSAGE
    assert _ids(result.page.items) == ["B", "A"]
    assert all(product.distance_miles is None for product in result.page.items)


def test_discover_without_location_lists_newest_first(catalog, resolver):
    result = discover_products(DiscoveryQuery(), catalog=catalog, resolver=resolver)

    assert result.context.status == "none"
    assert resolver.calls == []
    assert _ids(result.page.items) == ["P30", "P5-new", "PNONE", "P60", "P5-old"]


def test_discover_with_coordinates_skips_lookup(catalog, resolver):
    query = DiscoveryQuery(location=LocationRequest(latitude=LA.latitude, longitude=LA.longitude, radius_miles=40))
    result = discover_products(query, catalog=catalog, resolver=resolver)

    assert resolver.calls == []
    assert result.context.status == "in_range"
    assert _ids(result.page.items) == ["P30", "P5-new", "P5-old"]


def test_discover_rejects_invalid_coordinates(catalog):
    query = DiscoveryQuery(location=LocationRequest(latitude=0.0, longitude=0.0))
    with pytest.raises(ValueError):
        discover_products(query, catalog=catalog)


def test_multiple_zip_codes_use_first_success(catalog):
    resolver = FakeResolver({"90012": LA, "90013": Coordinate(34.045, -118.2436)})
    query = DiscoveryQuery(location=LocationRequest(zip_codes=("00000", "90012", "90013"), radius_miles=25))
    result = discover_products(query, catalog=catalog, resolver=resolver)

    context = result.context
    assert context.location.postal_code == "90012"
    assert [location.postal_code for location in context.additional_locations] == ["90013"]
    assert [lookup.postal_code for lookup in context.failed_lookups] == ["00000"]


def test_multiple_zip_codes_all_failing_raise(catalog):
    query = DiscoveryQuery(location=LocationRequest(zip_codes=("00000", "11111")))
    with pytest.raises(NotFoundError):
        discover_products(query, catalog=catalog, resolver=FakeResolver({}))


def test_filters_and_pagination_apply_after_ranking(catalog, resolver):
    query = DiscoveryQuery(
        filters=ProductFilters(max_price=10.0),
        page=2,
        limit=2,
    )
    result = discover_products(query, catalog=catalog, resolver=resolver)

    assert result.page.total_products == 4
    assert result.page.total_pages == 2
    assert result.page.has_more is False
    assert _ids(result.page.items) == ["PNONE", "P5-old"]


def test_recommendations_limited_to_nearby_merchants(catalog, resolver):
    result = recommend_products(
        LocationRequest(zip_code="90012", radius_miles=35),
        12,
        today=date(2026, 10, 19),
        catalog=catalog,
        resolver=resolver,
        composer=RecommendationComposer(rng=random.Random(3)),
    )

    assert result.season == "fall"
    assert result.context.status == "in_range"
    assert sorted(_ids(result.items)) == ["P30", "P5-new", "P5-old"]
    assert all(product.recommendation_type for product in result.items)


def test_recommendations_without_location_use_whole_catalog(catalog):
    result = recommend_products(
        today=date(2026, 1, 5),
        catalog=catalog,
        composer=RecommendationComposer(rng=random.Random(3)),
    )

    assert result.season == "winter"
    assert "PHIDDEN" not in _ids(result.items)
    # P5-old is produce, which is out of season in winter
    assert sorted(_ids(result.items)) == ["P30", "P5-new", "P60", "PNONE"]


def test_zero_recommendations_requested_returns_none(catalog):
    result = recommend_products(
        None,
        0,
        today=date(2026, 1, 5),
        catalog=catalog,
        composer=RecommendationComposer(rng=random.Random(3)),
    )

    assert result.items == []
    assert result.season == "winter"
