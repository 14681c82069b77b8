"""Postal code resolution."""

from .zip_client import (
    LocationLookup,
    ZipCodeResolver,
    check_health,
    normalize_postal_code,
    split_primary,
)

__all__ = [
    "LocationLookup",
    "ZipCodeResolver",
    "check_health",
    "normalize_postal_code",
    "split_primary",
]
