"""
Exception taxonomy for the YourDayIn backend.

Every error carries a machine-readable ``error_code`` and the HTTP status the
API layer answers with. ``main.py`` registers one handler for the base class
that renders ``{"error": error_code, "details": message}``.

Request-level (fatal) errors:
- UpstreamUnavailableError: Gemini failed or answered without text
- ResponseParseError: no list of candidates could be extracted
- ResponseValidationError: extracted value is not a list of objects

Per-item errors (recovered inside the pipeline):
- GeocodeError: Mapbox geocoding failed after all retries
"""

from typing import Optional

from fastapi import status


class YourDayInError(Exception):
    """Base class for all domain errors raised by services."""

    error_code: str = "internal_error"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UpstreamUnavailableError(YourDayInError):
    """The generative backend could not produce a usable answer."""

    error_code = "upstream_unavailable"
    status_code = status.HTTP_502_BAD_GATEWAY


class ResponseParseError(YourDayInError):
    """No list of candidates could be extracted from the model's text."""

    error_code = "parse_error"


class ResponseValidationError(YourDayInError):
    """The model's answer parsed, but is not an array of place objects."""

    error_code = "invalid_response"


class GeocodeError(YourDayInError):
    """Geocoding failed after exhausting all retries."""

    error_code = "geocoding_failed"
    status_code = status.HTTP_502_BAD_GATEWAY

    def __init__(self, query: str, last_error: Optional[BaseException] = None):
        message = f"Geocoding failed for '{query}'"
        if last_error is not None:
            message = f"{message}: {last_error}"
        super().__init__(message)
        self.query = query
        self.last_error = last_error


class RouteError(YourDayInError):
    """Waypoints are unusable or the directions provider returned no route."""

    error_code = "route_error"
    status_code = status.HTTP_400_BAD_REQUEST


class RouteProviderError(RouteError):
    """The directions provider failed after all retries."""

    error_code = "route_provider_error"
    status_code = status.HTTP_502_BAD_GATEWAY


class LocationNotFoundError(YourDayInError):
    """The searched place name matched nothing at the geocoding provider."""

    error_code = "location_not_found"
    status_code = status.HTTP_404_NOT_FOUND
