"""
Pydantic schemas for the loop route endpoint.

The route itself is computed by the Mapbox Directions API; these models only
describe what is passed in and what is relayed back to the map.
"""

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, Field, field_validator

from yourdayin.schemas.recommendations import Coordinates, validate_lng_lat

RouteProfile = Literal["driving", "walking", "cycling"]


class RouteRequest(BaseModel):
    """Ordered recommendation coordinates to connect with a loop route."""
    coordinates: List[Coordinates] = Field(
        ...,
        description="Ordered [longitude, latitude] pairs (the loop is closed server-side)",
        min_length=2,
        max_length=24,
        examples=[[[2.3376, 48.8606], [2.2945, 48.8584], [2.3499, 48.8530]]]
    )
    profile: RouteProfile = Field(
        "driving",
        description="Mapbox routing profile"
    )

    @field_validator("coordinates")
    @classmethod
    def validate_coordinates(cls, v: List[Coordinates]) -> List[Coordinates]:
        return [validate_lng_lat(point) for point in v]


class RouteSummary(BaseModel):
    """Route geometry and timing relayed from the directions provider."""
    distance_meters: float = Field(..., alias="distanceMeters", ge=0)
    duration_seconds: float = Field(..., alias="durationSeconds", ge=0)
    distance_km: float = Field(..., alias="distanceKm", ge=0, examples=[7.4])
    duration_minutes: int = Field(..., alias="durationMinutes", ge=0, examples=[23])
    is_walkable: bool = Field(
        ...,
        alias="isWalkable",
        description="True when the loop is shorter than 5 km"
    )
    profile: RouteProfile = Field(...)
    waypoints: List[Coordinates] = Field(
        ...,
        description="Waypoints actually sent to the provider (closed loop)"
    )
    geometry: Dict[str, Any] = Field(..., description="GeoJSON LineString")

    model_config = {"populate_by_name": True}
