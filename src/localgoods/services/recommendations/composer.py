"""Builds a mixed recommendation list from featured, popular, recent and seasonal buckets."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, replace
from typing import AbstractSet, Callable, Optional, Sequence

from ...config import settings
from ...models.domain import RankableProduct

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RecommendationBucketSpec:
    """One bucket of the mix.

    ``target_fraction`` of ``None`` marks the remainder bucket, which takes
    whatever is left of the requested total after the other buckets.
    """

    name: str
    target_fraction: Optional[float]
    predicate: Callable[[RankableProduct], bool]
    sort_key: Callable[[RankableProduct], tuple]

    def target_count(self, total_count: int, selected_so_far: int) -> int:
        if self.target_fraction is None:
            return max(total_count - selected_so_far, 0)
        return math.ceil(total_count * self.target_fraction)


def _newest(product: RankableProduct) -> float:
    return -product.created_timestamp


def build_bucket_specs(
    seasonal: AbstractSet[str],
    *,
    featured_fraction: float,
    popular_fraction: float,
    recent_fraction: float,
    popular_min_rating: float,
    popular_min_views: int,
) -> list[RecommendationBucketSpec]:
    return [
        RecommendationBucketSpec(
            name="featured",
            target_fraction=featured_fraction,
            predicate=lambda p: p.featured,
            sort_key=lambda p: (-p.rating, -p.views),
        ),
        RecommendationBucketSpec(
            name="popular",
            target_fraction=popular_fraction,
            predicate=lambda p: p.rating >= popular_min_rating and p.views >= popular_min_views,
            sort_key=lambda p: (-p.views, -p.rating),
        ),
        RecommendationBucketSpec(
            name="recent",
            target_fraction=recent_fraction,
            predicate=lambda p: True,
            sort_key=lambda p: (_newest(p),),
        ),
        RecommendationBucketSpec(
            name="seasonal",
            target_fraction=None,
            predicate=lambda p: p.category in seasonal,
            sort_key=lambda p: (_newest(p), -p.rating),
        ),
    ]


class RecommendationComposer:
    """Assemble a bounded, de-duplicated, shuffled recommendation list.

    Buckets are filled in order and each one only sees products not already
    taken by an earlier bucket. A bucket with too few matches contributes
    fewer items; nothing is padded. The combined list is shuffled with the
    injected ``rng`` so tests can pin the order with a seeded generator.
    """

    def __init__(
        self,
        *,
        featured_fraction: float | None = None,
        popular_fraction: float | None = None,
        recent_fraction: float | None = None,
        popular_min_rating: float | None = None,
        popular_min_views: int | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.featured_fraction = (
            featured_fraction if featured_fraction is not None else settings.recommendation_featured_fraction
        )
        self.popular_fraction = (
            popular_fraction if popular_fraction is not None else settings.recommendation_popular_fraction
        )
        self.recent_fraction = (
            recent_fraction if recent_fraction is not None else settings.recommendation_recent_fraction
        )
        self.popular_min_rating = (
            popular_min_rating if popular_min_rating is not None else settings.popular_min_rating
        )
        self.popular_min_views = popular_min_views if popular_min_views is not None else settings.popular_min_views
        self.rng = rng or random.Random()

    def bucket_specs(self, seasonal: AbstractSet[str]) -> list[RecommendationBucketSpec]:
        return build_bucket_specs(
            seasonal,
            featured_fraction=self.featured_fraction,
            popular_fraction=self.popular_fraction,
            recent_fraction=self.recent_fraction,
            popular_min_rating=self.popular_min_rating,
            popular_min_views=self.popular_min_views,
        )

    def compose(
        self,
        candidate_pool: Sequence[RankableProduct],
        total_count: int,
        seasonal_categories: AbstractSet[str],
    ) -> list[RankableProduct]:
        if total_count <= 0:
            return []

        selected_ids: set[str] = set()
        combined: list[RankableProduct] = []
        for spec in self.bucket_specs(seasonal_categories):
            wanted = spec.target_count(total_count, len(combined))
            if wanted <= 0:
                continue
            matches = sorted(
                (p for p in candidate_pool if p.product_id not in selected_ids and spec.predicate(p)),
                key=spec.sort_key,
            )
            taken = 0
            for product in matches:
                if taken >= wanted:
                    break
                if product.product_id in selected_ids:
                    continue
                selected_ids.add(product.product_id)
                combined.append(replace(product, recommendation_type=spec.name))
                taken += 1
            logger.debug(f"Recommendation bucket {spec.name}: {taken}/{wanted}")

        self.rng.shuffle(combined)
        return combined[:total_count]
