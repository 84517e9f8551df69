"""
Pydantic schemas for the place lookup endpoint.

POST /places/lookup turns the searched place name into the center
coordinates that POST /recommendations expects.
"""

from pydantic import BaseModel, Field, field_validator

from yourdayin.schemas.recommendations import Coordinates


class PlaceLookupRequest(BaseModel):
    """Request to resolve a searched place name to coordinates."""
    location: str = Field(
        ...,
        description="Free-text place the user typed",
        min_length=1,
        max_length=200,
        examples=["Paris", "Valencia, Spain"]
    )

    @field_validator("location")
    @classmethod
    def validate_location(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("location must not be blank")
        return v


class PlaceLookupResponse(BaseModel):
    """Resolved center of the searched location."""
    location: str = Field(..., description="Location as searched")
    coordinates: Coordinates = Field(..., description="[longitude, latitude]")
    place_name: str = Field(..., alias="placeName", description="Provider place name")

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "examples": [
                {
                    "location": "Paris",
                    "coordinates": [2.3514, 48.8567],
                    "placeName": "Paris, France"
                }
            ]
        }
    }
