"""Product discovery and recommendation endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...config import settings
from ...data.catalog_repository import Catalog
from ...schemas.locations import LOCATION_ERROR_RESPONSES
from ...schemas.products import (
    LocationInfoModel,
    PaginationModel,
    ProductListResponse,
    ProductModel,
    RecommendationResponse,
)
from ...services.discovery import (
    SORT_FIELDS,
    DiscoveryQuery,
    LocationRequest,
    ProductFilters,
    ProximityFilter,
    discover_products,
    recommend_products,
)
from ...services.geocoding import ZipCodeResolver
from ...services.recommendations import RecommendationComposer
from ..dependencies import get_catalog, get_composer, get_proximity_filter, get_resolver

router = APIRouter(prefix="/products", tags=["products"])


def _location_request(
    zipCode: Optional[str] = Query(default=None, description="Postal code to search around"),
    zipCodes: Optional[List[str]] = Query(
        default=None,
        description="Several postal codes; the first that resolves is the search origin",
    ),
    latitude: Optional[float] = Query(default=None, ge=-90, le=90),
    longitude: Optional[float] = Query(default=None, ge=-180, le=180),
    radius: Optional[float] = Query(default=None, ge=0, description="Search radius in miles"),
) -> LocationRequest:
    codes: list[str] = []
    for value in zipCodes or []:
        codes.extend(code.strip() for code in value.split(",") if code.strip())
    return LocationRequest(
        zip_code=zipCode,
        zip_codes=tuple(codes),
        latitude=latitude,
        longitude=longitude,
        radius_miles=radius,
    )


@router.get(
    "",
    response_model=ProductListResponse,
    status_code=status.HTTP_200_OK,
    responses=LOCATION_ERROR_RESPONSES,
)
def list_products(
    location: LocationRequest = Depends(_location_request),
    category: Optional[str] = Query(default=None),
    subcategory: Optional[str] = Query(default=None),
    merchant: Optional[str] = Query(default=None, description="Only products of this merchant"),
    minPrice: Optional[float] = Query(default=None, ge=0),
    maxPrice: Optional[float] = Query(default=None, ge=0),
    isOrganic: Optional[bool] = Query(default=None),
    isLocallySourced: Optional[bool] = Query(default=None),
    featured: Optional[bool] = Query(default=None),
    search: Optional[str] = Query(default=None),
    sort: Optional[str] = Query(default=None, description=f"One of: {', '.join(SORT_FIELDS)}"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=settings.default_page_size, ge=1, le=settings.max_page_size),
    catalog: Catalog = Depends(get_catalog),
    resolver: ZipCodeResolver = Depends(get_resolver),
    proximity: ProximityFilter = Depends(get_proximity_filter),
) -> ProductListResponse:
    if sort is not None and sort not in SORT_FIELDS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported sort '{sort}'. Choose one of: {', '.join(SORT_FIELDS)}",
        )

    query = DiscoveryQuery(
        location=location,
        filters=ProductFilters(
            category=category,
            subcategory=subcategory,
            merchant_id=merchant,
            min_price=minPrice,
            max_price=maxPrice,
            is_organic=isOrganic,
            is_locally_sourced=isLocallySourced,
            featured=featured,
            search=search,
        ),
        sort=sort,
        page=page,
        limit=limit,
    )
    try:
        result = discover_products(query, catalog=catalog, resolver=resolver, proximity=proximity)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return ProductListResponse(
        products=[ProductModel.from_domain(product) for product in result.page.items],
        pagination=PaginationModel(
            currentPage=result.page.current_page,
            totalPages=result.page.total_pages,
            totalProducts=result.page.total_products,
            hasMore=result.page.has_more,
        ),
        location=LocationInfoModel.from_context(result.context),
    )


@router.get(
    "/recommendations",
    response_model=RecommendationResponse,
    status_code=status.HTTP_200_OK,
    responses=LOCATION_ERROR_RESPONSES,
)
def get_recommendations(
    location: LocationRequest = Depends(_location_request),
    limit: int = Query(default=settings.recommendation_total_count, ge=1, le=settings.max_page_size),
    catalog: Catalog = Depends(get_catalog),
    resolver: ZipCodeResolver = Depends(get_resolver),
    proximity: ProximityFilter = Depends(get_proximity_filter),
    composer: RecommendationComposer = Depends(get_composer),
) -> RecommendationResponse:
    try:
        result = recommend_products(
            location,
            limit,
            catalog=catalog,
            resolver=resolver,
            proximity=proximity,
            composer=composer,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    return RecommendationResponse(
        products=[ProductModel.from_domain(product) for product in result.items],
        season=result.season,
        seasonalCategories=sorted(result.seasonal_categories),
        location=LocationInfoModel.from_context(result.context),
    )
