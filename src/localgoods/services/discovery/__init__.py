"""Product discovery: proximity filtering, ranking and orchestration."""

from .filters import Page, ProductFilters, paginate
from .models import DiscoveryQuery, DiscoveryResult, LocationContext, LocationRequest, RecommendationResult
from .proximity import ProximityFilter
from .ranking import SORT_FIELDS, rank_products
from .service import discover_products, locate, recommend_products

__all__ = [
    "DiscoveryQuery",
    "DiscoveryResult",
    "LocationContext",
    "LocationRequest",
    "Page",
    "ProductFilters",
    "ProximityFilter",
    "RecommendationResult",
    "SORT_FIELDS",
    "discover_products",
    "locate",
    "paginate",
    "rank_products",
    "recommend_products",
]
