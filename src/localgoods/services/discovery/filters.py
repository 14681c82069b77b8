"""Attribute filters and pagination for product listings."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from ...models.domain import RankableProduct


@dataclass(slots=True)
class ProductFilters:
    category: Optional[str] = None
    subcategory: Optional[str] = None
    merchant_id: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    is_organic: Optional[bool] = None
    is_locally_sourced: Optional[bool] = None
    featured: Optional[bool] = None
    search: Optional[str] = None

    def matches(self, product: RankableProduct) -> bool:
        if not product.is_listed:
            return False
        if self.category and product.category != self.category:
            return False
        if self.subcategory and product.subcategory != self.subcategory:
            return False
        if self.merchant_id and product.merchant_id != self.merchant_id:
            return False
        if self.min_price is not None and product.price < self.min_price:
            return False
        if self.max_price is not None and product.price > self.max_price:
            return False
        if self.is_organic is not None and product.is_organic != self.is_organic:
            return False
        if self.is_locally_sourced is not None and product.is_locally_sourced != self.is_locally_sourced:
            return False
        if self.featured is not None and product.featured != self.featured:
            return False
        if self.search and not _matches_text(product, self.search):
            return False
        return True

    def apply(self, products: Iterable[RankableProduct]) -> list[RankableProduct]:
        return [product for product in products if self.matches(product)]


def _matches_text(product: RankableProduct, search: str) -> bool:
    needle = search.strip().lower()
    if not needle:
        return True
    haystack = " ".join((product.name, product.description, *product.tags)).lower()
    return needle in haystack


@dataclass(slots=True)
class Page:
    items: list[RankableProduct]
    current_page: int
    total_pages: int
    total_products: int

    @property
    def has_more(self) -> bool:
        return self.current_page < self.total_pages


def paginate(products: Sequence[RankableProduct], page: int, limit: int) -> Page:
    if page < 1:
        raise ValueError("page must be >= 1")
    if limit < 1:
        raise ValueError("limit must be >= 1")
    total = len(products)
    offset = (page - 1) * limit
    return Page(
        items=list(products[offset : offset + limit]),
        current_page=page,
        total_pages=math.ceil(total / limit),
        total_products=total,
    )
