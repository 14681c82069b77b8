"""Domain models for merchants, products and resolved locations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


def utc_timestamp(value: datetime) -> float:
    """Epoch seconds, reading naive datetimes as UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()


@dataclass(frozen=True, slots=True)
class Coordinate:
    latitude: float
    longitude: float

    def is_valid(self) -> bool:
        """True when both values are finite and inside the geographic range.

        The (0, 0) pair is a placeholder left by merchants who never set a
        location, so it is treated as invalid as well.
        """
        lat, lon = self.latitude, self.longitude
        if lat != lat or lon != lon:
            return False
        if not (-90.0 <= lat <= 90.0 and -180.0 <= lon <= 180.0):
            return False
        return not (lat == 0.0 and lon == 0.0)


@dataclass(frozen=True, slots=True)
class ResolvedLocation:
    """Place metadata returned for a postal code."""

    postal_code: str
    coordinate: Coordinate
    city: Optional[str] = None
    region: Optional[str] = None
    region_name: Optional[str] = None


@dataclass(frozen=True, slots=True)
class MerchantLocation:
    merchant_id: str
    coordinate: Optional[Coordinate]


@dataclass(frozen=True, slots=True)
class MerchantDistance:
    merchant: MerchantLocation
    distance_miles: float


@dataclass(frozen=True, slots=True)
class ProximityResult:
    within_radius: tuple[MerchantDistance, ...]
    used_fallback: bool
    fallback_nearest_distance: Optional[float] = None

    @property
    def merchant_ids(self) -> list[str]:
        return [entry.merchant.merchant_id for entry in self.within_radius]

    def distance_lookup(self) -> dict[str, float]:
        return {entry.merchant.merchant_id: entry.distance_miles for entry in self.within_radius}


@dataclass(slots=True)
class Merchant:
    """Merchant record as stored in the catalog."""

    merchant_id: str
    name: str
    latitude: Optional[float]
    longitude: Optional[float]
    city: Optional[str] = None
    region: Optional[str] = None
    postal_code: Optional[str] = None

    def to_location(self) -> MerchantLocation:
        coordinate = None
        if self.latitude is not None and self.longitude is not None:
            coordinate = Coordinate(self.latitude, self.longitude)
        return MerchantLocation(merchant_id=self.merchant_id, coordinate=coordinate)


@dataclass(frozen=True, slots=True)
class RankableProduct:
    """Product listing enriched with the fields ranking and recommendations use.

    Instances are never mutated; ranking and composition return copies made
    with ``dataclasses.replace``.
    """

    product_id: str
    merchant_id: str
    name: str
    category: str
    price: float
    created_at: datetime
    featured: bool = False
    rating: float = 0.0
    views: int = 0
    subcategory: Optional[str] = None
    description: str = ""
    tags: tuple[str, ...] = ()
    is_organic: bool = False
    is_locally_sourced: bool = False
    is_active: bool = True
    approval_status: str = "approved"
    distance_miles: Optional[float] = None
    recommendation_type: Optional[str] = None
    raw: dict = field(default_factory=dict, compare=False, hash=False)

    @property
    def is_listed(self) -> bool:
        return self.is_active and self.approval_status == "approved"

    @property
    def created_timestamp(self) -> float:
        return utc_timestamp(self.created_at)
