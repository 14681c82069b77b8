"""High-level orchestration for product discovery and recommendations."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ...config import settings
from ...data.catalog_repository import Catalog, load_catalog
from ...models.domain import Coordinate, RankableProduct
from ..geocoding import ZipCodeResolver, split_primary
from ..recommendations import RecommendationComposer, season_for_month, seasonal_categories
from .filters import ProductFilters, paginate
from .models import (
    STATUS_FALLBACK,
    STATUS_IN_RANGE,
    STATUS_NO_LOCATION_DATA,
    DiscoveryQuery,
    DiscoveryResult,
    LocationContext,
    LocationRequest,
    RecommendationResult,
)
from .proximity import ProximityFilter
from .ranking import rank_products

logger = logging.getLogger(__name__)

NO_LOCATION_DATA_MESSAGE = "Local merchants are not available yet in your area."


def _fallback_message(radius: float, count: int, nearest: Optional[float]) -> str:
    return (
        f"No merchants found within {radius:g} miles. "
        f"Showing the {count} closest merchants (nearest is {nearest} miles away)."
    )


def _resolve_origin(request: LocationRequest, resolver: Optional[ZipCodeResolver]) -> LocationContext:
    if request.latitude is not None and request.longitude is not None:
        origin = Coordinate(request.latitude, request.longitude)
        if not origin.is_valid():
            raise ValueError(f"Invalid coordinates: ({request.latitude}, {request.longitude})")
        return LocationContext(origin=origin)

    if request.zip_codes:
        lookups = (resolver or ZipCodeResolver()).resolve_many(request.zip_codes)
        primary, additional = split_primary(lookups)
        failures = [lookup for lookup in lookups if not lookup.ok]
        if primary is None:
            raise failures[0].error
        return LocationContext(
            origin=primary.coordinate,
            location=primary,
            additional_locations=additional,
            failed_lookups=failures,
        )

    if request.zip_code:
        location = (resolver or ZipCodeResolver()).resolve(request.zip_code)
        return LocationContext(origin=location.coordinate, location=location)

    return LocationContext()


def locate(
    request: LocationRequest,
    catalog: Catalog,
    *,
    resolver: Optional[ZipCodeResolver] = None,
    proximity: Optional[ProximityFilter] = None,
) -> LocationContext:
    """Resolve the request origin and select the merchants visible from it."""
    context = _resolve_origin(request, resolver)
    if context.origin is None:
        return context

    radius = request.radius_miles if request.radius_miles is not None else settings.default_radius_miles
    result = (proximity or ProximityFilter()).filter(context.origin, radius, catalog.merchant_locations())
    context.radius_miles = radius
    context.proximity = result

    if result.used_fallback:
        context.status = STATUS_FALLBACK
        context.message = _fallback_message(radius, len(result.within_radius), result.fallback_nearest_distance)
    elif result.within_radius:
        context.status = STATUS_IN_RANGE
    else:
        logger.info("No merchant location data available for a location-based search")
        context.status = STATUS_NO_LOCATION_DATA
        context.message = NO_LOCATION_DATA_MESSAGE
    return context


def _products_in_context(products: Sequence[RankableProduct], context: LocationContext) -> list[RankableProduct]:
    if not context.has_location or context.proximity is None:
        return list(products)
    distances = context.proximity.distance_lookup()
    return [
        replace(product, distance_miles=distances[product.merchant_id])
        for product in products
        if product.merchant_id in distances
    ]


def discover_products(
    query: DiscoveryQuery,
    *,
    catalog: Optional[Catalog] = None,
    resolver: Optional[ZipCodeResolver] = None,
    proximity: Optional[ProximityFilter] = None,
) -> DiscoveryResult:
    catalog = catalog or load_catalog()
    context = locate(query.location, catalog, resolver=resolver, proximity=proximity)

    candidates = query.filters.apply(_products_in_context(catalog.products, context))
    ranked = rank_products(candidates, has_location=context.has_location, sort=query.sort)
    page = paginate(ranked, query.page, query.limit)
    logger.debug(
        f"Discovery returned {len(page.items)}/{page.total_products} products (location status: {context.status})"
    )
    return DiscoveryResult(page=page, context=context)


def recommend_products(
    location: Optional[LocationRequest] = None,
    total_count: Optional[int] = None,
    *,
    today: Optional[date] = None,
    catalog: Optional[Catalog] = None,
    resolver: Optional[ZipCodeResolver] = None,
    proximity: Optional[ProximityFilter] = None,
    composer: Optional[RecommendationComposer] = None,
) -> RecommendationResult:
    catalog = catalog or load_catalog()
    context = locate(location or LocationRequest(), catalog, resolver=resolver, proximity=proximity)

    today = today or date.today()
    categories = seasonal_categories(today)
    pool = ProductFilters().apply(_products_in_context(catalog.products, context))
    items = (composer or RecommendationComposer()).compose(
        pool,
        total_count if total_count is not None else settings.recommendation_total_count,
        categories,
    )
    return RecommendationResult(
        items=items,
        context=context,
        season=season_for_month(today.month),
        seasonal_categories=categories,
    )
