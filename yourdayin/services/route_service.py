"""
Route Service - Mapbox Directions pass-through for the loop route

The map connects the recommendations with a closed loop: the waypoints are
the recommendation coordinates in order, with the first point appended at
the end. Route geometry, distance and duration come from the Mapbox
Directions API; nothing is computed locally beyond unit conversion.
"""

import asyncio
import logging
from typing import List, Optional, Sequence

import httpx

from yourdayin.config import settings
from yourdayin.errors import RouteError, RouteProviderError
from yourdayin.schemas.recommendations import Coordinates
from yourdayin.schemas.routes import RouteProfile, RouteSummary
from yourdayin.utils.constants import WALKABLE_DISTANCE_METERS
from yourdayin.utils.retry import SleepFunc, retry_with_backoff

logger = logging.getLogger(__name__)


def build_loop_waypoints(coordinates: Sequence[Optional[Coordinates]]) -> List[Coordinates]:
    """
    Order waypoints for a closed loop.

    Missing entries and consecutive duplicates are dropped, then the first
    point is appended at the end.

    Raises:
        RouteError: If fewer than two distinct points remain.
    """
    waypoints: List[Coordinates] = []
    for point in coordinates:
        if point is None:
            continue
        point = (float(point[0]), float(point[1]))
        if waypoints and waypoints[-1] == point:
            continue
        waypoints.append(point)

    # A loop ending on its start point would repeat it
    if len(waypoints) > 1 and waypoints[-1] == waypoints[0]:
        waypoints.pop()

    if len(waypoints) < 2:
        raise RouteError("Not enough valid coordinates to create a route")

    waypoints.append(waypoints[0])
    return waypoints


def _summarize_route(route: dict, profile: str, waypoints: List[Coordinates]) -> RouteSummary:
    distance = float(route.get("distance") or 0.0)
    duration = float(route.get("duration") or 0.0)
    return RouteSummary(
        distance_meters=distance,
        duration_seconds=duration,
        distance_km=round(distance / 1000, 1),
        duration_minutes=round(duration / 60),
        is_walkable=distance < WALKABLE_DISTANCE_METERS,
        profile=profile,
        waypoints=waypoints,
        geometry=route.get("geometry") or {},
    )


async def fetch_route(
    coordinates: Sequence[Optional[Coordinates]],
    profile: RouteProfile = "driving",
    *,
    access_token: Optional[str] = None,
    base_url: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    sleep: SleepFunc = asyncio.sleep,
) -> RouteSummary:
    """
    Fetch the loop route through ``coordinates`` from Mapbox Directions.

    Args:
        coordinates: Recommendation coordinates in display order
        profile: Mapbox routing profile (driving, walking, cycling)
        access_token: Mapbox token (defaults to settings.MAPBOX_ACCESS_TOKEN)
        base_url: Mapbox API root (defaults to settings.MAPBOX_BASE_URL)
        transport: Optional httpx transport (tests)
        sleep: Sleep used between retries (tests)

    Returns:
        RouteSummary for the first route Mapbox proposes.

    Raises:
        RouteError: Unusable waypoints, or the provider found no route.
        RouteProviderError: Provider failure after all retries.
    """
    waypoints = build_loop_waypoints(coordinates)

    token = access_token if access_token is not None else settings.MAPBOX_ACCESS_TOKEN
    if not token:
        logger.error("MAPBOX_ACCESS_TOKEN not configured")
        raise RouteProviderError("Directions service is not configured")

    root = (base_url or settings.MAPBOX_BASE_URL).rstrip("/")
    waypoints_str = ";".join(f"{lng},{lat}" for lng, lat in waypoints)
    url = f"{root}/directions/v5/mapbox/{profile}/{waypoints_str}"
    params = {
        "geometries": "geojson",
        "overview": "full",
        "steps": "true",
        "access_token": token,
    }

    logger.info(f"Fetching {profile} route for waypoints: {waypoints_str}")

    async with httpx.AsyncClient(
        timeout=settings.HTTP_TIMEOUT_SECONDS,
        transport=transport,
        headers={"Cache-Control": "max-age=3600"},
    ) as client:

        async def attempt() -> dict:
            response = await client.get(url, params=params)
            response.raise_for_status()
            return response.json()

        try:
            data = await retry_with_backoff(
                attempt,
                attempts=settings.GEOCODE_RETRIES,
                base_delay_ms=settings.GEOCODE_BASE_DELAY_MS,
                sleep=sleep,
                description="directions request",
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error getting route: {e}")
            raise RouteProviderError(f"Error getting route: {e}") from e

    routes = data.get("routes") if isinstance(data, dict) else None
    if not routes:
        logger.error(f"No routes returned (code={data.get('code') if isinstance(data, dict) else None})")
        raise RouteError("No route found between the locations")

    summary = _summarize_route(routes[0], profile, waypoints)
    logger.info(
        f"Route received: {summary.distance_km} km, {summary.duration_minutes} min, "
        f"walkable={summary.is_walkable}"
    )
    return summary
