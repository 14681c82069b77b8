"""Postal code lookup endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...schemas.locations import LOCATION_ERROR_RESPONSES, ResolvedLocationModel
from ...services.geocoding import ZipCodeResolver
from ..dependencies import get_resolver

router = APIRouter(prefix="/locations", tags=["locations"])


@router.get(
    "/{zip_code}",
    response_model=ResolvedLocationModel,
    status_code=status.HTTP_200_OK,
    responses=LOCATION_ERROR_RESPONSES,
)
def lookup_zip_code(zip_code: str, resolver: ZipCodeResolver = Depends(get_resolver)) -> ResolvedLocationModel:
    return ResolvedLocationModel.from_domain(resolver.resolve(zip_code))
