"""
Geocoding Service - Mapbox forward geocoding with retry, backoff and pacing

Turns free-text place descriptions into [longitude, latitude] pairs.

Architecture:
- Provider: Mapbox Geocoding API v5 (mapbox.places)
- HTTP: httpx.AsyncClient, one short-lived client per resolve() call
- Pacing: every resolve() first waits on a shared RateLimiter so back-to-back
  candidate lookups stay under the per-token rate limit
- Retries: retry_with_backoff; HTTP 429, other non-2xx answers, network errors
  and undecodable bodies all count as a failed attempt, with the delay doubled
  after each one
- Proximity: queries are biased toward the searched location's center so
  "Cathedral" in Seville does not resolve to a cathedral elsewhere

resolve() returns the raw feature list (possibly empty). Choosing the best
feature is left to the caller via best_match().
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from yourdayin.config import settings
from yourdayin.errors import GeocodeError
from yourdayin.schemas.recommendations import Coordinates
from yourdayin.utils.rate_limit import RateLimiter
from yourdayin.utils.retry import SleepFunc, retry_with_backoff

logger = logging.getLogger(__name__)

# Lazy singleton shared by all requests so pacing holds process-wide
_geocode_resolver = None


@dataclass
class GeocodeFeature:
    """One Mapbox feature reduced to the fields the pipeline uses."""
    center: Coordinates
    place_name: str
    relevance: float = 0.0
    id: Optional[str] = None
    place_type: List[str] = field(default_factory=list)

    @classmethod
    def from_mapbox(cls, raw: Dict[str, Any]) -> "GeocodeFeature":
        """
        Build a feature from a Mapbox GeoJSON feature.

        Raises:
            ValueError: If the feature has no usable center.
        """
        center = raw.get("center")
        if center is None:
            center = (raw.get("geometry") or {}).get("coordinates")
        if not isinstance(center, (list, tuple)) or len(center) != 2:
            raise ValueError(f"Feature without a valid center: {raw.get('id')}")

        return cls(
            center=(float(center[0]), float(center[1])),
            place_name=str(raw.get("place_name") or raw.get("text") or ""),
            relevance=float(raw.get("relevance") or 0.0),
            id=raw.get("id"),
            place_type=list(raw.get("place_type") or []),
        )


def best_match(features: List[GeocodeFeature]) -> Optional[GeocodeFeature]:
    """
    Pick the most relevant feature.

    Sorting is stable, so with equal relevance the provider's order wins.
    """
    if not features:
        return None
    return sorted(features, key=lambda f: f.relevance, reverse=True)[0]


class GeocodeResolver:
    """
    Mapbox forward geocoder with pacing and retry/backoff.

    Args:
        access_token: Mapbox token (defaults to settings.MAPBOX_ACCESS_TOKEN)
        base_url: Mapbox API root (defaults to settings.MAPBOX_BASE_URL)
        rate_limiter: Shared pacing limiter; built from settings if omitted
        transport: Optional httpx transport (tests pass httpx.MockTransport)
        sleep: Sleep used between retries (tests pass a recorder)
        timeout: Per-request timeout in seconds
    """

    def __init__(
        self,
        access_token: Optional[str] = None,
        base_url: Optional[str] = None,
        *,
        rate_limiter: Optional[RateLimiter] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: SleepFunc = asyncio.sleep,
        timeout: Optional[float] = None,
    ):
        self.access_token = access_token if access_token is not None else settings.MAPBOX_ACCESS_TOKEN
        self.base_url = (base_url or settings.MAPBOX_BASE_URL).rstrip("/")
        self.rate_limiter = rate_limiter or RateLimiter(settings.GEOCODE_MIN_INTERVAL_MS)
        self.transport = transport
        self.sleep = sleep
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS

    def _build_url(self, query: str) -> str:
        return f"{self.base_url}/geocoding/v5/mapbox.places/{quote(query, safe='')}.json"

    def _build_params(self, center: Optional[Coordinates]) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "access_token": self.access_token,
            "limit": 1,
        }
        if center is not None:
            params["proximity"] = f"{center[0]},{center[1]}"
        return params

    async def resolve(
        self,
        query: str,
        center: Optional[Coordinates] = None,
        retries: Optional[int] = None,
        base_delay_ms: Optional[int] = None,
    ) -> List[GeocodeFeature]:
        """
        Geocode ``query``, biased toward ``center``.

        Args:
            query: Free-text place description ("name, address, city")
            center: [lng, lat] proximity bias; None disables the bias
            retries: Maximum attempts (defaults to settings.GEOCODE_RETRIES)
            base_delay_ms: First backoff delay (defaults to settings.GEOCODE_BASE_DELAY_MS)

        Returns:
            Features returned by the provider, possibly empty.

        Raises:
            GeocodeError: When every attempt failed, carrying the last error.
        """
        retries = retries if retries is not None else settings.GEOCODE_RETRIES
        base_delay_ms = base_delay_ms if base_delay_ms is not None else settings.GEOCODE_BASE_DELAY_MS

        if not self.access_token:
            logger.error("MAPBOX_ACCESS_TOKEN not configured")
            raise GeocodeError(query, RuntimeError("MAPBOX_ACCESS_TOKEN is not configured"))

        waited = await self.rate_limiter.acquire()
        if waited:
            logger.debug(f"Geocoding paced by {waited * 1000:.0f}ms")

        url = self._build_url(query)
        params = self._build_params(center)

        async with httpx.AsyncClient(
            timeout=self.timeout,
            transport=self.transport,
            headers={"Cache-Control": "max-age=3600"},
        ) as client:

            async def attempt() -> List[GeocodeFeature]:
                response = await client.get(url, params=params)
                response.raise_for_status()
                data = response.json()
                raw_features = data.get("features") if isinstance(data, dict) else None
                if not isinstance(raw_features, list):
                    raise ValueError("Geocoding response has no 'features' list")
                return [GeocodeFeature.from_mapbox(f) for f in raw_features]

            try:
                features = await retry_with_backoff(
                    attempt,
                    attempts=retries,
                    base_delay_ms=base_delay_ms,
                    sleep=self.sleep,
                    description=f"geocoding '{query}'",
                )
            except (httpx.HTTPError, ValueError) as e:
                logger.error(f"Geocoding failed for '{query}' after {retries} attempts: {e}")
                raise GeocodeError(query, e) from e

        logger.debug(f"Geocoding '{query}' returned {len(features)} feature(s)")
        return features

    async def lookup_location(self, location: str) -> Optional[GeocodeFeature]:
        """
        Resolve the searched location itself (no proximity bias).

        Returns:
            The best feature, or None if the provider knows no such place.
        """
        logger.info(f"Looking up search location '{location}'")
        features = await self.resolve(location, center=None)
        match = best_match(features)
        if match:
            logger.info(f"Search location '{location}' resolved to {list(match.center)}")
        else:
            logger.warning(f"Search location '{location}' not found")
        return match


def get_geocode_resolver() -> GeocodeResolver:
    """
    Lazy initialization of the process-wide resolver.

    A single instance means a single RateLimiter, so pacing holds across
    every geocoding call the process makes.
    """
    global _geocode_resolver

    if _geocode_resolver is None:
        _geocode_resolver = GeocodeResolver()
        logger.info("Geocode resolver initialized")

    return _geocode_resolver
