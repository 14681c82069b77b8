"""Errors raised while resolving customer locations."""


class LocationError(Exception):
    """Base error for postal code resolution failures."""

    def __init__(self, message: str, postal_code: str | None = None) -> None:
        super().__init__(message)
        self.postal_code = postal_code


class InvalidFormatError(LocationError):
    """Postal code is not exactly five digits once non-digits are stripped."""


class NotFoundError(LocationError):
    """Well-formed postal code with no known location."""


class UpstreamUnavailableError(LocationError):
    """Lookup provider timed out, was unreachable, or returned a server error."""
