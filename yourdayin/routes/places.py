"""
FastAPI routes for place lookup.

Endpoints:
- POST /places/lookup: resolve the searched place name to center coordinates
"""

import logging

from fastapi import APIRouter, Depends

from yourdayin.errors import LocationNotFoundError
from yourdayin.schemas.places import PlaceLookupRequest, PlaceLookupResponse
from yourdayin.schemas.recommendations import ErrorResponse
from yourdayin.services.geocoding_service import GeocodeResolver, get_geocode_resolver

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/places",
    tags=["places"]
)


@router.post(
    "/lookup",
    response_model=PlaceLookupResponse,
    status_code=200,
    summary="Resolve a searched location to coordinates",
    responses={
        404: {"model": ErrorResponse, "description": "Location not found"},
        502: {"model": ErrorResponse, "description": "Geocoding provider failed"},
    },
)
async def lookup_place_endpoint(
    request: PlaceLookupRequest,
    resolver: GeocodeResolver = Depends(get_geocode_resolver),
) -> PlaceLookupResponse:
    """
    Geocode the place the user typed, without proximity bias.

    GeocodeError propagates to the global handler (502).
    """
    logger.info(f"POST /places/lookup called for location='{request.location[:50]}'")

    match = await resolver.lookup_location(request.location)

    if match is None:
        raise LocationNotFoundError(f"Could not find the location '{request.location}'")

    return PlaceLookupResponse(
        location=request.location,
        coordinates=match.center,
        place_name=match.place_name,
    )
