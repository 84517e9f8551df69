"""
Pydantic schemas for the recommendation endpoint.

These models define the request/response contracts for
POST /recommendations. Field names on the wire are camelCase
(``recommendedTime``, ``geocodingResult``) because the map/card frontend
consumes them as-is; Python code uses snake_case via aliases.
"""

from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

# (longitude, latitude) in WGS84 degrees, the order Mapbox uses
Coordinates = Tuple[float, float]


def validate_lng_lat(value: Coordinates) -> Coordinates:
    lng, lat = value
    if not -180 <= lng <= 180:
        raise ValueError("longitude must be between -180 and 180")
    if not -90 <= lat <= 90:
        raise ValueError("latitude must be between -90 and 90")
    return value


# ============================================================================
# REQUEST MODELS
# ============================================================================

class RecommendationQueryRequest(BaseModel):
    """
    Request for five recommended places around a searched location.

    ``coordinates`` is the center of the searched location (usually obtained
    from POST /places/lookup). It biases geocoding toward nearby matches and
    anchors synthetic fallback coordinates.
    """
    location: str = Field(
        ...,
        description="Place name the user searched for",
        min_length=1,
        max_length=200,
        examples=["Paris", "Barrio Gótico, Barcelona"]
    )
    coordinates: Coordinates = Field(
        ...,
        description="Center of the searched location as [longitude, latitude]",
        examples=[[2.35, 48.86]]
    )

    @field_validator("location")
    @classmethod
    def validate_location(cls, v: str) -> str:
        """Reject blank location strings."""
        v = v.strip()
        if not v:
            raise ValueError("location must not be blank")
        return v

    @field_validator("coordinates")
    @classmethod
    def validate_coordinates(cls, v: Coordinates) -> Coordinates:
        return validate_lng_lat(v)


# ============================================================================
# PIPELINE MODELS
# ============================================================================

class Candidate(BaseModel):
    """
    An unresolved place suggestion as returned by the generative backend.

    Every field is optional: the model may omit any of them. Scalars are
    coerced to strings and blank strings count as missing.
    """
    name: Optional[str] = None
    description: Optional[str] = None
    address: Optional[str] = None
    recommended_time: Optional[str] = Field(None, alias="recommendedTime")
    tips: Optional[str] = None

    model_config = {
        "populate_by_name": True,
        "extra": "ignore",
    }

    @field_validator("*", mode="before")
    @classmethod
    def coerce_to_text(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        if isinstance(v, (list, dict)):
            return None
        text = str(v).strip()
        return text or None

    @property
    def is_resolvable(self) -> bool:
        """Geocoding needs both a name and an address."""
        return bool(self.name and self.address)


class GeocodingResult(BaseModel):
    """Place echoed by the geocoding provider for the primary query."""
    place_name: str = Field(
        ...,
        alias="placeName",
        description="Full place name returned by Mapbox",
        examples=["Louvre Museum, Rue de Rivoli, 75001 Paris, France"]
    )
    relevance: float = Field(
        ...,
        description="Mapbox relevance score (0-1)",
        examples=[0.98]
    )
    id: Optional[str] = Field(None, description="Provider feature id")
    place_type: List[str] = Field(
        default_factory=list,
        alias="placeType",
        description="Provider feature types",
        examples=[["poi"]]
    )

    model_config = {"populate_by_name": True}


class ResolvedRecommendation(BaseModel):
    """
    A candidate enriched with coordinates.

    ``coordinates`` is always present. It is either the geocoded position or
    a synthetic offset from the search center; the optional diagnostic fields
    explain which.
    """
    name: str = Field(..., examples=["Louvre Museum"])
    description: str = Field(..., examples=["The world's most visited art museum."])
    address: str = Field(..., examples=["Rue de Rivoli, 75001 Paris"])
    recommended_time: str = Field(..., alias="recommendedTime", examples=["2-3 hours"])
    tips: str = Field(..., examples=["Book tickets online to skip the line."])
    coordinates: Coordinates = Field(
        ...,
        description="[longitude, latitude], real or synthetic",
        examples=[[2.3376, 48.8606]]
    )
    geocoding_result: Optional[GeocodingResult] = Field(None, alias="geocodingResult")
    geocoding_error: Optional[str] = Field(None, alias="geocodingError")
    processing_error: Optional[str] = Field(None, alias="processingError")

    model_config = {"populate_by_name": True}


class RecommendationResult(BaseModel):
    """Pipeline output: resolved list plus counts for observability."""
    recommendations: List[ResolvedRecommendation]
    original_count: int = Field(..., ge=0, description="Candidates parsed from the model")
    final_count: int = Field(..., ge=0, description="Recommendations returned")


# ============================================================================
# RESPONSE MODELS
# ============================================================================

class RecommendationQueryResponse(BaseModel):
    """Successful response for POST /recommendations."""
    recommendations: List[ResolvedRecommendation] = Field(
        ...,
        description="Up to 5 recommendations, in the order the model proposed them",
        max_length=5
    )


class ErrorResponse(BaseModel):
    """Error body shared by every endpoint."""
    error: str = Field(..., examples=["upstream_unavailable"])
    details: Optional[Any] = Field(None, examples=["Gemini returned an empty response"])
