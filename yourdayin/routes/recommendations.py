"""
FastAPI routes for the recommendation endpoint.

Endpoints:
- POST /recommendations: five points of interest with coordinates

Request-level failures raised by the service (YourDayInError subclasses) are
rendered by the handler registered in main.py as {"error", "details"}.
"""

import logging

from fastapi import APIRouter

from yourdayin.schemas.recommendations import (
    ErrorResponse,
    RecommendationQueryRequest,
    RecommendationQueryResponse,
)
from yourdayin.services.recommendation_service import query_recommendations

logger = logging.getLogger(__name__)

# Create router
router = APIRouter(
    prefix="/recommendations",
    tags=["recommendations"]
)


# ============================================================================
# ENDPOINTS
# ============================================================================

@router.post(
    "",
    response_model=RecommendationQueryResponse,
    response_model_exclude_none=True,
    status_code=200,
    summary="Recommend places to visit around a location",
    responses={
        422: {"model": ErrorResponse, "description": "Missing or invalid location/coordinates"},
        500: {"model": ErrorResponse, "description": "Model answer could not be parsed"},
        502: {"model": ErrorResponse, "description": "Generative backend unavailable"},
    },
    description="""
    Returns up to 5 must-visit places for the searched location, each with
    coordinates for the map.

    **Frontend Flow:**
    1. User types a place name
    2. POST /places/lookup resolves it to center coordinates
    3. POST /recommendations with location + coordinates
    4. POST /routes with the returned coordinates to draw the loop

    **Coordinates:**
    Every recommendation has coordinates. When geocoding fails for an item,
    the item is placed at a small offset from the center instead and carries
    `geocodingError` or `processingError`. Per-item failures never fail the
    request.
    """
)
async def query_recommendations_endpoint(
    request: RecommendationQueryRequest,
) -> RecommendationQueryResponse:
    """
    Recommendation query endpoint.

    - Parse/Validate: Handled by Pydantic RecommendationQueryRequest
    - Call LLM + geocoder: service layer
    - Map output: RecommendationResult -> RecommendationQueryResponse
    """
    logger.info(
        f"POST /recommendations called for location='{request.location[:50]}', "
        f"coordinates={list(request.coordinates)}"
    )

    result = await query_recommendations(
        location=request.location,
        center=request.coordinates,
    )

    logger.info(
        f"Returning {result.final_count} recommendations "
        f"({result.original_count} candidates parsed)"
    )
    return RecommendationQueryResponse(recommendations=result.recommendations)
