"""Data access helpers for loading merchants and product listings."""

from __future__ import annotations

import csv
import functools
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ..config import settings
from ..models.domain import Merchant, MerchantLocation, RankableProduct

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "y", "t"}


def _coerce_float(value: Optional[str]) -> Optional[float]:
    if value is None or value.strip() == "":
        return None
    try:
        return float(value.replace(",", ""))
    except ValueError as exc:
        raise ValueError(f"Unable to parse float from value '{value}'") from exc


def _coerce_int(value: Optional[str]) -> int:
    number = _coerce_float(value)
    return int(number) if number is not None else 0


def _coerce_bool(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in _TRUE_VALUES


def _coerce_datetime(value: Optional[str]) -> datetime:
    if not value or not value.strip():
        raise ValueError("Product record is missing created_at")
    parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _read_rows(path: Path) -> list[dict[str, str]]:
    if not path.exists():
        raise FileNotFoundError(f"Catalog file not found: {path}")
    with path.open(mode="r", encoding="utf-8-sig", newline="") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            raise ValueError(f"Catalog file '{path}' is missing a header row.")
        return list(reader)


@dataclass(frozen=True, slots=True)
class Catalog:
    merchants: tuple[Merchant, ...]
    products: tuple[RankableProduct, ...]

    def merchant_locations(self) -> list[MerchantLocation]:
        """Locations of merchants that have coordinates on file."""
        return [
            merchant.to_location()
            for merchant in self.merchants
            if merchant.latitude is not None and merchant.longitude is not None
        ]


def load_merchants(source: Path) -> tuple[Merchant, ...]:
    merchants: list[Merchant] = []
    for row in _read_rows(source):
        merchant_id = (row.get("merchant_id") or "").strip()
        if not merchant_id:
            continue
        merchants.append(
            Merchant(
                merchant_id=merchant_id,
                name=(row.get("name") or "").strip(),
                latitude=_coerce_float(row.get("latitude")),
                longitude=_coerce_float(row.get("longitude")),
                city=(row.get("city") or "").strip() or None,
                region=(row.get("state") or "").strip() or None,
                postal_code=(row.get("zip_code") or "").strip() or None,
            )
        )
    return tuple(merchants)


def load_products(source: Path) -> tuple[RankableProduct, ...]:
    products: list[RankableProduct] = []
    for row in _read_rows(source):
        product_id = (row.get("product_id") or "").strip()
        if not product_id:
            continue
        tags = tuple(tag.strip() for tag in (row.get("tags") or "").split(";") if tag.strip())
        products.append(
            RankableProduct(
                product_id=product_id,
                merchant_id=(row.get("merchant_id") or "").strip(),
                name=(row.get("name") or "").strip(),
                description=(row.get("description") or "").strip(),
                category=(row.get("category") or "other").strip(),
                subcategory=(row.get("subcategory") or "").strip() or None,
                price=_coerce_float(row.get("price")) or 0.0,
                featured=_coerce_bool(row.get("featured")),
                rating=_coerce_float(row.get("rating")) or 0.0,
                views=_coerce_int(row.get("views")),
                created_at=_coerce_datetime(row.get("created_at")),
                tags=tags,
                is_organic=_coerce_bool(row.get("is_organic")),
                is_locally_sourced=_coerce_bool(row.get("is_locally_sourced")),
                is_active=_coerce_bool(row.get("is_active") or "true"),
                approval_status=(row.get("approval_status") or "approved").strip(),
                raw=dict(row),
            )
        )
    return tuple(products)


@functools.lru_cache(maxsize=1)
def load_catalog(
    merchants_source: Optional[Path] = None,
    products_source: Optional[Path] = None,
) -> Catalog:
    """Load merchants and products from the configured CSV files."""

    merchants = load_merchants(merchants_source or settings.merchants_file)
    products = load_products(products_source or settings.products_file)
    logger.info(f"Loaded catalog with {len(merchants)} merchants and {len(products)} products")
    return Catalog(merchants=merchants, products=products)
