"""
Pytest configuration for YourDayIn backend tests.

Sets up test environment and global fixtures. No test talks to Gemini or
Mapbox: Gemini is a MagicMock, Mapbox is an httpx.MockTransport, and every
sleep is recorded instead of awaited.
"""
import os
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("GOOGLE_API_KEY", "test-google-api-key")
os.environ.setdefault("MAPBOX_ACCESS_TOKEN", "test-mapbox-token")
os.environ.setdefault("MAPBOX_BASE_URL", "https://mapbox.test")


class SleepRecorder:
    """Stand-in for asyncio.sleep that records requested durations."""

    def __init__(self):
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def sleep_recorder():
    return SleepRecorder()


def mapbox_feature(
    lng: float,
    lat: float,
    place_name: str = "Test Place, Paris, France",
    relevance: float = 1.0,
    feature_id: Optional[str] = "poi.123",
) -> Dict[str, Any]:
    """A Mapbox geocoding feature as returned by the v5 API."""
    return {
        "id": feature_id,
        "type": "Feature",
        "place_type": ["poi"],
        "relevance": relevance,
        "place_name": place_name,
        "center": [lng, lat],
        "geometry": {"type": "Point", "coordinates": [lng, lat]},
    }


def gemini_response(text: Optional[str]) -> MagicMock:
    """A Gemini GenerateContentResponse carrying ``text`` in its first part."""
    response = MagicMock()
    part = MagicMock()
    part.text = text
    candidate = MagicMock()
    candidate.content.parts = [part]
    response.candidates = [candidate]
    response.text = text
    return response


def gemini_client(text: Optional[str] = None, error: Optional[Exception] = None) -> MagicMock:
    """Mock genai.Client whose async generate_content answers ``text`` or raises ``error``."""
    client = MagicMock()
    if error is not None:
        client.aio.models.generate_content = AsyncMock(side_effect=error)
    else:
        client.aio.models.generate_content = AsyncMock(return_value=gemini_response(text))
    return client


@pytest.fixture
def make_feature():
    """Factory fixture for Mapbox features."""
    return mapbox_feature


@pytest.fixture
def make_gemini_client():
    """Factory fixture for mocked Gemini clients."""
    return gemini_client
