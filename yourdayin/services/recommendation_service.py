"""
Recommendation Service - Gemini candidates + Mapbox geocoding

This service turns a searched place name into five points of interest with
coordinates, ready to be plotted and connected by a loop route.

Architecture:
- Pattern: Single-shot LLM call, then sequential per-candidate geocoding
- Model: Gemini 2.5 Flash via the Google Gen AI Python SDK (google-genai)
- Geocoding: Mapbox, through GeocodeResolver (pacing + retry/backoff)
- Output: RecommendationResult (list + counts)

Pipeline per request:
1. Generate  - one Gemini call; any failure is fatal (UpstreamUnavailableError)
2. Normalize - normalize_candidates(); any failure is fatal
3. Resolve   - candidate by candidate, in order:
   - no name or no address  -> synthetic offset coordinates, no API call
   - "{name}, {address}, {location}" -> best feature + geocodingResult
   - zero features -> "{name}, {location}" -> coordinates only
   - zero features again -> synthetic offset coordinates
   - GeocodeError -> synthetic offset coordinates + geocodingError
   - anything else -> synthetic offset coordinates + processingError
4. Finalize  - safety net for entries without a finite coordinate pair

Synthetic offset for item i: center + (i + 1) * 0.005 on both axes, so no two
fallback markers coincide and they grow strictly with i.
"""

import logging
import math
import os
from typing import List, Optional

from google import genai
from google.genai import types

from yourdayin.agents.recommendation.normalizer import normalize_candidates
from yourdayin.agents.recommendation.prompts import (
    RECOMMENDATION_SYSTEM_PROMPT,
    build_recommendation_user_prompt,
)
from yourdayin.config import settings
from yourdayin.errors import GeocodeError, UpstreamUnavailableError
from yourdayin.schemas.recommendations import (
    Candidate,
    Coordinates,
    GeocodingResult,
    RecommendationResult,
    ResolvedRecommendation,
)
from yourdayin.services.geocoding_service import (
    GeocodeResolver,
    best_match,
    get_geocode_resolver,
)
from yourdayin.utils.constants import (
    CANDIDATE_DEFAULTS,
    FALLBACK_OFFSET_STEP,
    MAX_RECOMMENDATIONS,
    SAFETY_NET_OFFSET_STEP,
)

logger = logging.getLogger(__name__)

# Initialize Gemini client (lazy initialization)
_gemini_client = None


def _get_gemini_client():
    """
    Lazy initialization of Gemini client.
    Uses the Google Gen AI SDK.
    """
    global _gemini_client

    if _gemini_client is not None:
        return _gemini_client

    api_key = settings.GOOGLE_API_KEY or os.getenv("GOOGLE_API_KEY", "")

    if not api_key:
        logger.warning(
            "GOOGLE_API_KEY not configured. Recommendation service will not work. "
            "Please set GOOGLE_API_KEY in your .env file."
        )
        return None

    try:
        _gemini_client = genai.Client(api_key=api_key)
        logger.info("Gemini client initialized successfully for recommendations")
        return _gemini_client
    except Exception as e:
        logger.error(f"Failed to initialize Gemini client: {e}")
        return None


def _extract_response_text(response) -> Optional[str]:
    """
    Get the text out of a Gemini response.

    The response.text property can be None even when parts carry text, so
    parts are read first.
    """
    if not response or not response.candidates:
        return None

    candidate = response.candidates[0]
    if candidate.content and candidate.content.parts:
        for part in candidate.content.parts:
            if getattr(part, "text", None):
                return part.text

    return response.text


def _recommendation_limit() -> int:
    """settings.MAX_RECOMMENDATIONS, never above the hard cap of the response schema."""
    return max(0, min(settings.MAX_RECOMMENDATIONS, MAX_RECOMMENDATIONS))


async def _generate_candidates_text(client, location: str) -> str:
    """
    Ask Gemini for candidate places in ``location``.

    Raises:
        UpstreamUnavailableError: On API errors or an answer without text.
    """
    user_prompt = build_recommendation_user_prompt(
        location=location,
        count=_recommendation_limit(),
    )

    config = types.GenerateContentConfig(
        system_instruction=RECOMMENDATION_SYSTEM_PROMPT,
        temperature=0.7,
        max_output_tokens=4096,
        response_mime_type="application/json",
    )

    try:
        logger.info(f"Calling Gemini API for location='{location}'")
        response = await client.aio.models.generate_content(
            model=settings.GEMINI_MODEL,
            contents=user_prompt,
            config=config,
        )
    except Exception as e:
        logger.error(f"Error calling Gemini API: {e}")
        raise UpstreamUnavailableError(
            f"Failed to get recommendations from AI: {e}"
        ) from e

    content = _extract_response_text(response)
    if not content:
        logger.error("Empty text in Gemini response")
        raise UpstreamUnavailableError("Invalid response from AI: no message content")

    return content


def offset_coordinates(
    center: Coordinates,
    index: int,
    step: float = FALLBACK_OFFSET_STEP,
) -> Coordinates:
    """Synthetic coordinates for item ``index``: center + (index + 1) * step."""
    offset = (index + 1) * step
    return (center[0] + offset, center[1] + offset)


def _build_recommendation(
    candidate: Candidate,
    coordinates: Coordinates,
    geocoding_result: Optional[GeocodingResult] = None,
    geocoding_error: Optional[str] = None,
    processing_error: Optional[str] = None,
) -> ResolvedRecommendation:
    """Apply default texts for missing fields and attach coordinates."""
    return ResolvedRecommendation(
        name=candidate.name or CANDIDATE_DEFAULTS["name"],
        description=candidate.description or CANDIDATE_DEFAULTS["description"],
        address=candidate.address or CANDIDATE_DEFAULTS["address"],
        recommended_time=candidate.recommended_time or CANDIDATE_DEFAULTS["recommended_time"],
        tips=candidate.tips or CANDIDATE_DEFAULTS["tips"],
        coordinates=coordinates,
        geocoding_result=geocoding_result,
        geocoding_error=geocoding_error,
        processing_error=processing_error,
    )


async def _resolve_candidate(
    resolver: GeocodeResolver,
    candidate: Candidate,
    index: int,
    location: str,
    center: Coordinates,
) -> ResolvedRecommendation:
    """
    Geocode one candidate, degrading to synthetic coordinates.

    GeocodeError is handled here; any other exception propagates to the
    caller's per-item guard.
    """
    if not candidate.is_resolvable:
        logger.warning(
            f"Place {index + 1} is missing name or address, using offset coordinates"
        )
        return _build_recommendation(candidate, offset_coordinates(center, index))

    query = f"{candidate.name}, {candidate.address}, {location}"
    logger.info(f"Geocoding query for place {index + 1}: {query}")

    try:
        features = await resolver.resolve(query, center)
        match = best_match(features)

        if match:
            logger.info(f"Successfully geocoded '{candidate.name}' to {list(match.center)}")
            return _build_recommendation(
                candidate,
                match.center,
                geocoding_result=GeocodingResult(
                    place_name=match.place_name,
                    relevance=match.relevance,
                    id=match.id,
                    place_type=match.place_type,
                ),
            )

        # Broader query: drop the address, keep the location context
        fallback_query = f"{candidate.name}, {location}"
        logger.info(f"Using fallback query: {fallback_query}")
        fallback_match = best_match(await resolver.resolve(fallback_query, center))

        if fallback_match:
            logger.info(
                f"Used fallback geocoding for '{candidate.name}' to {list(fallback_match.center)}"
            )
            return _build_recommendation(candidate, fallback_match.center)

        logger.warning(f"No geocoding match for '{candidate.name}', using offset coordinates")
        return _build_recommendation(candidate, offset_coordinates(center, index))

    except GeocodeError as e:
        logger.error(f"Error geocoding '{candidate.name}': {e}")
        return _build_recommendation(
            candidate,
            offset_coordinates(center, index),
            geocoding_error=str(e),
        )


def _has_valid_coordinates(recommendation: ResolvedRecommendation) -> bool:
    coords = recommendation.coordinates
    return (
        coords is not None
        and len(coords) == 2
        and all(isinstance(c, (int, float)) and math.isfinite(c) for c in coords)
    )


def _ensure_coordinates(
    recommendations: List[ResolvedRecommendation],
    center: Coordinates,
) -> List[ResolvedRecommendation]:
    """Safety net: any entry without a finite pair gets center + index * 0.01."""
    checked = []
    for index, rec in enumerate(recommendations):
        if not _has_valid_coordinates(rec):
            offset = SAFETY_NET_OFFSET_STEP * index
            logger.warning(f"'{rec.name}' has no valid coordinates, applying safety offset")
            rec = rec.model_copy(
                update={"coordinates": (center[0] + offset, center[1] + offset)}
            )
        checked.append(rec)
    return checked


async def query_recommendations(
    location: str,
    center: Coordinates,
    *,
    resolver: Optional[GeocodeResolver] = None,
    client=None,
) -> RecommendationResult:
    """
    Get up to five recommended places around ``location`` with coordinates.

    Args:
        location: Place name the user searched for
        center: [lng, lat] of the searched location
        resolver: Geocoder to use (defaults to the process-wide resolver)
        client: Gemini client (defaults to the lazily created client)

    Returns:
        RecommendationResult with recommendations in the model's order.

    Raises:
        UpstreamUnavailableError: Gemini is unconfigured, failed, or answered empty.
        ResponseParseError: No list could be extracted from the answer.
        ResponseValidationError: The answer is not an array of objects.
    """
    logger.info(f"query_recommendations called for location='{location}', center={list(center)}")

    client = client or _get_gemini_client()
    if client is None:
        logger.error("Gemini client not available")
        raise UpstreamUnavailableError(
            "Recommendation service is not configured. Please contact support."
        )

    content = await _generate_candidates_text(client, location)
    candidates = normalize_candidates(content, max_items=_recommendation_limit())

    resolver = resolver or get_geocode_resolver()

    recommendations: List[ResolvedRecommendation] = []
    for index, candidate in enumerate(candidates):
        try:
            recommendation = await _resolve_candidate(
                resolver, candidate, index, location, center
            )
        except Exception as e:
            logger.error(
                f"Error processing recommendation '{candidate.name}': {e}",
                exc_info=True,
            )
            recommendation = _build_recommendation(
                candidate,
                offset_coordinates(center, index),
                processing_error=str(e),
            )
        recommendations.append(recommendation)

    recommendations = _ensure_coordinates(recommendations, center)

    logger.info(
        f"Final recommendations for '{location}': {len(candidates)} candidates -> "
        f"{len(recommendations)} results "
        f"{[(r.name, list(r.coordinates)) for r in recommendations]}"
    )

    return RecommendationResult(
        recommendations=recommendations,
        original_count=len(candidates),
        final_count=len(recommendations),
    )
