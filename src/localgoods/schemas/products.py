"""Pydantic response models for discovery and recommendation endpoints."""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel

from ..models.domain import RankableProduct
from ..services.discovery import LocationContext
from .locations import LocationErrorModel, ResolvedLocationModel


class ProductModel(BaseModel):
    id: str
    merchantId: str
    name: str
    description: str
    category: str
    subcategory: Optional[str] = None
    price: float
    featured: bool
    rating: float
    views: int
    isOrganic: bool
    isLocallySourced: bool
    createdAt: datetime
    distanceMiles: Optional[float] = None
    recommendationType: Optional[str] = None

    @classmethod
    def from_domain(cls, product: RankableProduct) -> "ProductModel":
        return cls(
            id=product.product_id,
            merchantId=product.merchant_id,
            name=product.name,
            description=product.description,
            category=product.category,
            subcategory=product.subcategory,
            price=product.price,
            featured=product.featured,
            rating=product.rating,
            views=product.views,
            isOrganic=product.is_organic,
            isLocallySourced=product.is_locally_sourced,
            createdAt=product.created_at,
            distanceMiles=product.distance_miles,
            recommendationType=product.recommendation_type,
        )


class NearbyMerchantModel(BaseModel):
    merchantId: str
    distanceMiles: float


class LocationInfoModel(BaseModel):
    status: Literal["none", "in_range", "fallback", "no_location_data"]
    radiusMiles: Optional[float] = None
    usedFallback: bool = False
    fallbackNearestDistance: Optional[float] = None
    message: Optional[str] = None
    location: Optional[ResolvedLocationModel] = None
    additionalLocations: List[ResolvedLocationModel] = []
    failedLocations: List[LocationErrorModel] = []
    merchants: List[NearbyMerchantModel] = []

    @classmethod
    def from_context(cls, context: LocationContext) -> "LocationInfoModel":
        proximity = context.proximity
        return cls(
            status=context.status,
            radiusMiles=context.radius_miles,
            usedFallback=bool(proximity and proximity.used_fallback),
            fallbackNearestDistance=proximity.fallback_nearest_distance if proximity else None,
            message=context.message,
            location=ResolvedLocationModel.from_domain(context.location) if context.location else None,
            additionalLocations=[ResolvedLocationModel.from_domain(loc) for loc in context.additional_locations],
            failedLocations=[
                LocationErrorModel(
                    zipCode=lookup.postal_code,
                    error=type(lookup.error).__name__,
                    message=str(lookup.error),
                )
                for lookup in context.failed_lookups
            ],
            merchants=[
                NearbyMerchantModel(merchantId=entry.merchant.merchant_id, distanceMiles=entry.distance_miles)
                for entry in (proximity.within_radius if proximity else ())
            ],
        )


class PaginationModel(BaseModel):
    currentPage: int
    totalPages: int
    totalProducts: int
    hasMore: bool


class ProductListResponse(BaseModel):
    products: List[ProductModel]
    pagination: PaginationModel
    location: LocationInfoModel


class RecommendationResponse(BaseModel):
    products: List[ProductModel]
    season: str
    seasonalCategories: List[str]
    location: LocationInfoModel
