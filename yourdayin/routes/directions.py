"""
FastAPI routes for the loop route between recommendations.

Endpoints:
- POST /routes: relay a closed-loop route from Mapbox Directions
"""

import logging

from fastapi import APIRouter

from yourdayin.schemas.recommendations import ErrorResponse
from yourdayin.schemas.routes import RouteRequest, RouteSummary
from yourdayin.services.route_service import fetch_route

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/routes",
    tags=["routes"]
)


@router.post(
    "",
    response_model=RouteSummary,
    status_code=200,
    summary="Loop route through the recommended places",
    responses={
        400: {"model": ErrorResponse, "description": "Unusable waypoints or no route found"},
        502: {"model": ErrorResponse, "description": "Directions provider failed"},
    },
    description="""
    Connects the given coordinates in order and back to the first one.
    Geometry, distance and duration come from the Mapbox Directions API.
    """
)
async def fetch_route_endpoint(request: RouteRequest) -> RouteSummary:
    """Relay the loop route; RouteError subclasses go to the global handler."""
    logger.info(
        f"POST /routes called with {len(request.coordinates)} points, profile={request.profile}"
    )

    return await fetch_route(request.coordinates, profile=request.profile)
