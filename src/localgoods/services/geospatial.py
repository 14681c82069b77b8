"""Geospatial helper functions."""

from __future__ import annotations

import math

from ..models.domain import Coordinate

EARTH_RADIUS_MILES = 3959.0


def haversine_miles(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_MILES * c


def round_tenth(value: float) -> float:
    """Round to one decimal place with halves going up (12.25 -> 12.3)."""
    return math.floor(value * 10 + 0.5) / 10


def distance_miles(a: Coordinate, b: Coordinate) -> float:
    """Great-circle distance in miles, rounded to one decimal place.

    Inputs are not validated; callers drop out-of-range coordinates first.
    """

    return round_tenth(haversine_miles(a.latitude, a.longitude, b.latitude, b.longitude))
