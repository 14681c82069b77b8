"""Composite ordering for product listings."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ...models.domain import RankableProduct, utc_timestamp

# Requested sort -> (attribute, descending)
SORT_FIELDS: dict[str, tuple[str, bool]] = {
    "createdAt": ("created_at", False),
    "-createdAt": ("created_at", True),
    "price": ("price", False),
    "-price": ("price", True),
    "rating": ("rating", False),
    "-rating": ("rating", True),
    "views": ("views", False),
    "-views": ("views", True),
    "name": ("name", False),
    "-name": ("name", True),
}


def _distance_or_recency_key(has_location: bool):
    def key(product: RankableProduct) -> tuple:
        newest_first = -product.created_timestamp
        if has_location and product.distance_miles is not None:
            return (0, product.distance_miles, newest_first)
        if has_location:
            return (1, 0.0, newest_first)
        return (newest_first,)

    return key


def _field_key(attribute: str):
    def key(product: RankableProduct):
        value = getattr(product, attribute)
        if isinstance(value, datetime):
            return utc_timestamp(value)
        return value.lower() if isinstance(value, str) else value

    return key


def rank_products(
    products: Sequence[RankableProduct],
    has_location: bool,
    sort: Optional[str] = None,
) -> list[RankableProduct]:
    """Order products featured-first, then by distance or recency.

    With a location context products carrying a distance are ordered closest
    first, and any without one follow them newest first. Without a location
    everything is newest first. A requested ``sort`` replaces that secondary
    rule but featured listings still lead. Sorting is stable and returns a
    new list.
    """
    if sort:
        try:
            attribute, descending = SORT_FIELDS[sort]
        except KeyError as exc:
            raise ValueError(f"Unsupported sort '{sort}'. Choose one of: {', '.join(SORT_FIELDS)}") from exc
        ordered = sorted(products, key=_field_key(attribute), reverse=descending)
    else:
        ordered = sorted(products, key=_distance_or_recency_key(has_location))

    return sorted(ordered, key=lambda product: not product.featured)
