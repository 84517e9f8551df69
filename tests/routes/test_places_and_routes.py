"""
Tests for POST /places/lookup, POST /routes and GET /health.

The geocoder is swapped through FastAPI dependency overrides; the route
service is patched where the router imports it.
"""

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from yourdayin.errors import GeocodeError, RouteError, RouteProviderError
from yourdayin.main import app
from yourdayin.schemas.routes import RouteSummary
from yourdayin.services.geocoding_service import GeocodeFeature, get_geocode_resolver


@pytest.fixture
def client():
    """Create test client for FastAPI app."""
    return TestClient(app)


@pytest.fixture
def mock_resolver():
    """Override the geocode resolver dependency with an AsyncMock-backed stub."""
    resolver = AsyncMock()
    app.dependency_overrides[get_geocode_resolver] = lambda: resolver

    yield resolver

    # Clean up after test
    app.dependency_overrides.clear()


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok", "service": "yourdayin-backend"}


class TestPlaceLookup:
    """Tests for POST /places/lookup."""

    def test_found(self, client, mock_resolver):
        mock_resolver.lookup_location.return_value = GeocodeFeature(
            center=(2.3514, 48.8567), place_name="Paris, France", relevance=1.0
        )

        response = client.post("/places/lookup", json={"location": "Paris"})

        assert response.status_code == 200
        assert response.json() == {
            "location": "Paris",
            "coordinates": [2.3514, 48.8567],
            "placeName": "Paris, France",
        }
        mock_resolver.lookup_location.assert_awaited_once_with("Paris")

    def test_not_found_is_404(self, client, mock_resolver):
        mock_resolver.lookup_location.return_value = None

        response = client.post("/places/lookup", json={"location": "Qwzxyvv"})

        assert response.status_code == 404
        assert response.json()["error"] == "location_not_found"

    def test_provider_failure_is_502(self, client, mock_resolver):
        mock_resolver.lookup_location.side_effect = GeocodeError("Paris", RuntimeError("timeout"))

        response = client.post("/places/lookup", json={"location": "Paris"})

        assert response.status_code == 502
        assert response.json()["error"] == "geocoding_failed"

    def test_blank_location_is_422(self, client, mock_resolver):
        response = client.post("/places/lookup", json={"location": "  "})

        assert response.status_code == 422
        mock_resolver.lookup_location.assert_not_awaited()


class TestRoutes:
    """Tests for POST /routes."""

    COORDS = [[2.3376, 48.8606], [2.2945, 48.8584]]

    def _summary(self):
        return RouteSummary(
            distance_meters=3200.0,
            duration_seconds=2400.0,
            distance_km=3.2,
            duration_minutes=40,
            is_walkable=True,
            profile="walking",
            waypoints=[(2.3376, 48.8606), (2.2945, 48.8584), (2.3376, 48.8606)],
            geometry={"type": "LineString", "coordinates": []},
        )

    def test_happy_path(self, client):
        with patch(
            "yourdayin.routes.directions.fetch_route",
            new=AsyncMock(return_value=self._summary()),
        ) as mock_fetch:
            response = client.post("/routes", json={"coordinates": self.COORDS, "profile": "walking"})

        assert response.status_code == 200
        body = response.json()
        assert body["distanceKm"] == 3.2
        assert body["durationMinutes"] == 40
        assert body["isWalkable"] is True
        assert len(body["waypoints"]) == 3
        assert mock_fetch.await_args.kwargs["profile"] == "walking"

    def test_route_error_is_400(self, client):
        with patch(
            "yourdayin.routes.directions.fetch_route",
            new=AsyncMock(side_effect=RouteError("No route found between the locations")),
        ):
            response = client.post("/routes", json={"coordinates": self.COORDS})

        assert response.status_code == 400
        assert response.json() == {
            "error": "route_error",
            "details": "No route found between the locations",
        }

    def test_provider_error_is_502(self, client):
        with patch(
            "yourdayin.routes.directions.fetch_route",
            new=AsyncMock(side_effect=RouteProviderError("Error getting route: 503")),
        ):
            response = client.post("/routes", json={"coordinates": self.COORDS})

        assert response.status_code == 502
        assert response.json()["error"] == "route_provider_error"

    @pytest.mark.parametrize(
        "payload",
        [
            {"coordinates": [[2.3376, 48.8606]]},
            {"coordinates": [[2.3376, 48.8606], [2.2945, 48.8584]], "profile": "flying"},
            {"coordinates": [[2.3376, 148.8606], [2.2945, 48.8584]]},
        ],
    )
    def test_invalid_input_is_422(self, client, payload):
        with patch("yourdayin.routes.directions.fetch_route", new=AsyncMock()) as mock_fetch:
            response = client.post("/routes", json=payload)

        assert response.status_code == 422
        mock_fetch.assert_not_awaited()
