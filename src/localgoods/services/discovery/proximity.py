"""Radius search over merchant locations with a nearest-merchant fallback."""

from __future__ import annotations

import logging
from typing import Sequence

from ...config import settings
from ...models.domain import Coordinate, MerchantDistance, MerchantLocation, ProximityResult
from ..geospatial import distance_miles

logger = logging.getLogger(__name__)


class ProximityFilter:
    """Select merchants within a radius of an origin.

    When nothing lies inside the radius, the ``fallback_count`` closest
    merchants are returned instead and the result is flagged with
    ``used_fallback`` so the caller can explain the substitution. An empty
    candidate list yields an empty, non-fallback result, which callers read
    as "no merchant location data" rather than "nothing in range".
    """

    def __init__(self, fallback_count: int | None = None) -> None:
        self.fallback_count = settings.fallback_merchant_count if fallback_count is None else fallback_count
        if self.fallback_count < 1:
            raise ValueError("fallback_count must be >= 1")

    def filter(
        self,
        origin: Coordinate,
        radius_miles: float,
        candidates: Sequence[MerchantLocation],
    ) -> ProximityResult:
        measured = [
            MerchantDistance(merchant=merchant, distance_miles=distance_miles(origin, merchant.coordinate))
            for merchant in candidates
            if merchant.coordinate is not None and merchant.coordinate.is_valid()
        ]
        if not measured:
            return ProximityResult(within_radius=(), used_fallback=False)

        measured.sort(key=lambda entry: entry.distance_miles)
        in_range = tuple(entry for entry in measured if entry.distance_miles <= radius_miles)
        if in_range:
            return ProximityResult(within_radius=in_range, used_fallback=False)

        nearest = tuple(measured[: self.fallback_count])
        logger.info(
            f"No merchants within {radius_miles} miles; falling back to {len(nearest)} closest "
            f"(nearest at {measured[0].distance_miles} miles)"
        )
        return ProximityResult(
            within_radius=nearest,
            used_fallback=True,
            fallback_nearest_distance=measured[0].distance_miles,
        )
