"""Season Category Map used by the seasonal recommendation bucket."""

from __future__ import annotations

from datetime import date
from typing import Mapping, Optional

SEASON_MONTHS: dict[str, tuple[int, ...]] = {
    "winter": (12, 1, 2),
    "spring": (3, 4, 5),
    "summer": (6, 7, 8),
    "fall": (9, 10, 11),
}

SEASON_CATEGORY_MAP: dict[str, frozenset[str]] = {
    "winter": frozenset({"bakery", "beverages", "prepared-foods", "spices", "crafts"}),
    "spring": frozenset({"produce", "flowers", "dairy", "health"}),
    "summer": frozenset({"produce", "seafood", "beverages", "flowers", "snacks"}),
    "fall": frozenset({"produce", "bakery", "spices", "condiments", "crafts", "home"}),
}

_MONTH_TO_SEASON: dict[int, str] = {
    month: season for season, months in SEASON_MONTHS.items() for month in months
}


def season_for_month(month: int) -> str:
    try:
        return _MONTH_TO_SEASON[month]
    except KeyError:
        raise ValueError(f"month must be between 1 and 12, got {month}") from None


def seasonal_categories(
    today: Optional[date] = None,
    season_map: Mapping[str, frozenset[str]] = SEASON_CATEGORY_MAP,
) -> frozenset[str]:
    """Category tags in season for ``today`` (defaults to the current date)."""
    season = season_for_month((today or date.today()).month)
    return frozenset(season_map.get(season, frozenset()))
