"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from ...services.geocoding import ZipCodeResolver, check_health
from ..dependencies import get_resolver

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/geocoder", status_code=status.HTTP_200_OK)
def health_geocoder(resolver: ZipCodeResolver = Depends(get_resolver)) -> dict:
    """Check that the postal code lookup provider answers."""
    return {"service": "geocoder", "healthy": check_health(resolver)}
