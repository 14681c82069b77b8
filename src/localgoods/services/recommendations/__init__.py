"""Recommendation mix assembly."""

from .composer import RecommendationBucketSpec, RecommendationComposer, build_bucket_specs
from .seasons import SEASON_CATEGORY_MAP, season_for_month, seasonal_categories

__all__ = [
    "RecommendationBucketSpec",
    "RecommendationComposer",
    "build_bucket_specs",
    "SEASON_CATEGORY_MAP",
    "season_for_month",
    "seasonal_categories",
]
