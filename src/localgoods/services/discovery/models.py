"""Discovery request and result containers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ...models.domain import Coordinate, ProximityResult, RankableProduct, ResolvedLocation
from ..geocoding import LocationLookup
from .filters import Page, ProductFilters

STATUS_NONE = "none"
STATUS_IN_RANGE = "in_range"
STATUS_FALLBACK = "fallback"
STATUS_NO_LOCATION_DATA = "no_location_data"


@dataclass(slots=True)
class LocationRequest:
    zip_code: Optional[str] = None
    zip_codes: tuple[str, ...] = ()
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    radius_miles: Optional[float] = None

    @property
    def is_empty(self) -> bool:
        has_coordinates = self.latitude is not None and self.longitude is not None
        return not (has_coordinates or self.zip_code or self.zip_codes)


@dataclass(slots=True)
class LocationContext:
    """Where a request is searching from and which merchants it can see."""

    status: str = STATUS_NONE
    origin: Optional[Coordinate] = None
    location: Optional[ResolvedLocation] = None
    additional_locations: List[ResolvedLocation] = field(default_factory=list)
    failed_lookups: List[LocationLookup] = field(default_factory=list)
    radius_miles: Optional[float] = None
    proximity: Optional[ProximityResult] = None
    message: Optional[str] = None

    @property
    def has_location(self) -> bool:
        return self.status in (STATUS_IN_RANGE, STATUS_FALLBACK)


@dataclass(slots=True)
class DiscoveryQuery:
    location: LocationRequest = field(default_factory=LocationRequest)
    filters: ProductFilters = field(default_factory=ProductFilters)
    sort: Optional[str] = None
    page: int = 1
    limit: int = 20


@dataclass(slots=True)
class DiscoveryResult:
    page: Page
    context: LocationContext


@dataclass(slots=True)
class RecommendationResult:
    items: List[RankableProduct]
    context: LocationContext
    season: str
    seasonal_categories: frozenset[str]
