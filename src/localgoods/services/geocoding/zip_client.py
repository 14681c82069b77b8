"""HTTP client for the postal code lookup provider."""

from __future__ import annotations

import logging
import re
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Sequence

import httpx

from ...config import settings
from ...exceptions import (
    InvalidFormatError,
    LocationError,
    NotFoundError,
    UpstreamUnavailableError,
)
from ...models.domain import Coordinate, ResolvedLocation

POSTAL_CODE_LENGTH = 5
_NON_DIGITS = re.compile(r"\D")

logger = logging.getLogger(__name__)


def normalize_postal_code(postal_code: str) -> str:
    """Strip everything but digits and require exactly five of them."""
    cleaned = _NON_DIGITS.sub("", postal_code or "")
    if len(cleaned) != POSTAL_CODE_LENGTH:
        raise InvalidFormatError(
            f"Invalid zip code format: '{postal_code}' (expected {POSTAL_CODE_LENGTH} digits)",
            postal_code=postal_code,
        )
    return cleaned


@dataclass(frozen=True, slots=True)
class LocationLookup:
    """Outcome of resolving one postal code inside a batch."""

    postal_code: str
    location: Optional[ResolvedLocation] = None
    error: Optional[LocationError] = None

    @property
    def ok(self) -> bool:
        return self.location is not None


class ZipCodeResolver:
    """Resolves US postal codes to coordinates through a Zippopotam-style API.

    The provider answers ``GET {base_url}/{country}/{code}`` with a JSON body
    holding a ``places`` list; only the first place is used. No caching
    happens here, every call hits the provider once.
    """

    def __init__(
        self,
        base_url: str | None = None,
        country: str | None = None,
        timeout: float | None = None,
        max_parallel_requests: int | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.zip_lookup_base_url).rstrip("/")
        if not self.base_url:
            raise ValueError("Postal code lookup URL is not configured.")
        self.country = country or settings.zip_lookup_country
        self.timeout = timeout if timeout is not None else settings.zip_lookup_timeout_seconds
        self.max_parallel_requests = max_parallel_requests or settings.zip_lookup_max_parallel
        self._transport = transport

    def _get_client(self) -> httpx.Client:
        # One client per lookup so worker threads never share a connection pool
        return httpx.Client(
            timeout=httpx.Timeout(self.timeout),
            transport=self._transport,
        )

    def resolve(self, postal_code: str) -> ResolvedLocation:
        """Resolve a single postal code.

        Raises:
            InvalidFormatError: the code is not five digits after cleanup
            NotFoundError: the provider has no place for the code
            UpstreamUnavailableError: timeout, network failure, server error or garbled payload
        """
        code = normalize_postal_code(postal_code)
        url = f"{self.base_url}/{self.country}/{code}"
        logger.debug(f"Looking up postal code {code} at {url}")

        client = self._get_client()
        try:
            response = client.get(url)
            if response.status_code == httpx.codes.NOT_FOUND:
                raise NotFoundError(f"Could not find location for zip code {code}", postal_code=code)
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as exc:
            raise UpstreamUnavailableError(
                f"Postal code lookup timed out after {self.timeout}s", postal_code=code
            ) from exc
        except httpx.HTTPStatusError as exc:
            raise UpstreamUnavailableError(
                f"Postal code lookup failed with status {exc.response.status_code}", postal_code=code
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamUnavailableError(
                f"Postal code lookup service is unreachable: {exc}", postal_code=code
            ) from exc
        except ValueError as exc:
            raise UpstreamUnavailableError(
                "Postal code lookup returned an unreadable response", postal_code=code
            ) from exc
        finally:
            client.close()

        return self._parse_location(code, data)

    @staticmethod
    def _parse_location(code: str, data: object) -> ResolvedLocation:
        places = data.get("places") if isinstance(data, dict) else None
        if not places:
            raise NotFoundError(f"No location data found for zip code {code}", postal_code=code)

        place = places[0]
        try:
            coordinate = Coordinate(
                latitude=float(place["latitude"]),
                longitude=float(place["longitude"]),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise UpstreamUnavailableError(
                f"Postal code lookup returned malformed coordinates for {code}", postal_code=code
            ) from exc

        return ResolvedLocation(
            postal_code=code,
            coordinate=coordinate,
            city=place.get("place name"),
            region=place.get("state abbreviation"),
            region_name=place.get("state"),
        )

    def _lookup(self, postal_code: str) -> LocationLookup:
        try:
            return LocationLookup(postal_code=postal_code, location=self.resolve(postal_code))
        except LocationError as exc:
            logger.warning(f"Postal code {postal_code!r} could not be resolved: {exc}")
            return LocationLookup(postal_code=postal_code, error=exc)

    def resolve_many(self, postal_codes: Sequence[str]) -> list[LocationLookup]:
        """Resolve several postal codes concurrently.

        Each code is looked up independently; a failure is recorded on its own
        ``LocationLookup`` and never cancels the others. Results keep input order.
        """
        codes = list(postal_codes)
        if not codes:
            return []

        workers = min(self.max_parallel_requests, len(codes))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures = [executor.submit(self._lookup, code) for code in codes]
            results = [future.result() for future in futures]

        failed = sum(1 for result in results if not result.ok)
        if failed:
            logger.info(f"Resolved {len(results) - failed}/{len(results)} postal codes")
        return results


def split_primary(
    lookups: Sequence[LocationLookup],
) -> tuple[Optional[ResolvedLocation], list[ResolvedLocation]]:
    """Return the first successful location and the remaining successes in order."""
    resolved = [lookup.location for lookup in lookups if lookup.location is not None]
    if not resolved:
        return None, []
    return resolved[0], resolved[1:]


def check_health(resolver: ZipCodeResolver | None = None, probe_code: str = "90210") -> bool:
    """Check the lookup provider by resolving a well-known postal code."""
    try:
        (resolver or ZipCodeResolver()).resolve(probe_code)
    except LocationError as exc:
        logger.warning(f"Postal code lookup health check failed: {exc}")
        return False
    return True
