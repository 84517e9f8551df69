"""
Service layer for the YourDayIn backend.

Contains the orchestration that:
- Calls Gemini for candidate places and normalizes its answer
- Geocodes candidates through Mapbox with pacing and retry/backoff
- Relays loop routes from the Mapbox Directions API
- Maps provider output into Pydantic models

Services act as the glue between routes (HTTP layer) and external providers.
"""

from .geocoding_service import (
    GeocodeFeature,
    GeocodeResolver,
    best_match,
    get_geocode_resolver,
)
from .recommendation_service import offset_coordinates, query_recommendations
from .route_service import build_loop_waypoints, fetch_route

__all__ = [
    "GeocodeFeature",
    "GeocodeResolver",
    "best_match",
    "get_geocode_resolver",
    "query_recommendations",
    "offset_coordinates",
    "build_loop_waypoints",
    "fetch_route",
]
