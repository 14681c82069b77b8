"""Dependency providers for FastAPI endpoints."""

from __future__ import annotations

from ..data.catalog_repository import Catalog, load_catalog
from ..services.discovery import ProximityFilter
from ..services.geocoding import ZipCodeResolver
from ..services.recommendations import RecommendationComposer


def get_resolver() -> ZipCodeResolver:
    return ZipCodeResolver()


def get_catalog() -> Catalog:
    return load_catalog()


def get_proximity_filter() -> ProximityFilter:
    return ProximityFilter()


def get_composer() -> RecommendationComposer:
    return RecommendationComposer()
