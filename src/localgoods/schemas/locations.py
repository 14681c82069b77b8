"""Location API schemas."""

from __future__ import annotations

from pydantic import BaseModel

from ..models.domain import ResolvedLocation


class ResolvedLocationModel(BaseModel):
    zipCode: str
    city: str | None = None
    state: str | None = None
    stateName: str | None = None
    latitude: float
    longitude: float

    @classmethod
    def from_domain(cls, location: ResolvedLocation) -> "ResolvedLocationModel":
        return cls(
            zipCode=location.postal_code,
            city=location.city,
            state=location.region,
            stateName=location.region_name,
            latitude=location.coordinate.latitude,
            longitude=location.coordinate.longitude,
        )


class LocationErrorModel(BaseModel):
    zipCode: str
    error: str
    message: str


class ErrorResponse(BaseModel):
    """Body of a failed request. ``error`` names the lookup failure when there is one."""

    detail: str
    error: str | None = None


LOCATION_ERROR_RESPONSES: dict[int | str, dict] = {
    400: {"model": ErrorResponse, "description": "Malformed postal code or invalid query"},
    404: {"model": ErrorResponse, "description": "Postal code has no known location"},
    503: {"model": ErrorResponse, "description": "Postal code lookup service unavailable"},
}
