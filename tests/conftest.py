"""
Shared pytest fixtures for all tests.

This module provides common fixtures including:
- Sample Pollen API payloads
- Sample plant readings
- Sample correlation history
- In-memory repository and cache
- Mock API client
- FastAPI test client
"""
import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from pollen_paw.main import app, limiter
from pollen_paw.domain.models import (
    CorrelationRecord,
    GeoLocation,
    PlantReading,
    SymptomAxes,
)
from pollen_paw.infrastructure.google_api_client import (
    DailyPollenInfo,
    GoogleEnvironmentalClient,
)
from pollen_paw.infrastructure.repository import (
    InMemoryPollenCache,
    InMemoryPollenRepository,
)
from pollen_paw.services.domain.pollen_extractor import PollenExtractor
from pollen_paw.services.application.environmental_service import EnvironmentalService


# ============================================================
# Sample Data Fixtures
# ============================================================

@pytest.fixture
def sample_readings() -> list[PlantReading]:
    """Grass, tree and weed readings for one day."""
    return [
        PlantReading(code="GRAMINALES", index_value=3, recommendations=("Wear sunglasses",)),
        PlantReading(code="BIRCH", index_value=2, recommendations=("Stay indoors",)),
        PlantReading(code="RAGWEED", index_value=1, recommendations=()),
    ]


@pytest.fixture
def sample_pollen_payload() -> dict:
    """Pollen API forecast response with two days."""
    return {
        "regionCode": "us",
        "dailyInfo": [
            {
                "date": {"year": 2026, "month": 4, "day": 1},
                "pollenTypeInfo": [
                    {"code": "GRASS", "displayName": "Grass", "indexInfo": {"value": 3}},
                    {"code": "TREE", "displayName": "Tree", "indexInfo": {"value": 4}},
                ],
                "plantInfo": [
                    {
                        "code": "BIRCH",
                        "displayName": "Birch",
                        "indexInfo": {"value": 4, "category": "High"},
                        "healthRecommendations": ["Stay indoors", "Keep windows closed"],
                    },
                    {
                        "code": "OAK",
                        "displayName": "Oak",
                        "indexInfo": {"value": 3},
                        "healthRecommendations": ["Stay indoors"],
                    },
                    {
                        "code": "GRAMINALES",
                        "displayName": "Grasses",
                        "indexInfo": {"value": 3},
                        "healthRecommendations": ["Wear sunglasses"],
                    },
                    {"code": "RAGWEED", "displayName": "Ragweed"},
                    {"code": "OLIVE", "displayName": "Olive", "indexInfo": {"value": 5}},
                ],
            },
            {
                "date": {"year": 2026, "month": 4, "day": 2},
                "plantInfo": [
                    {"code": "RAGWEED", "indexInfo": {"value": 1}},
                ],
            },
        ],
    }


@pytest.fixture
def sample_geocode_payload() -> dict:
    """Geocoding API response for a postal code."""
    return {
        "status": "OK",
        "results": [
            {
                "formatted_address": "New York, NY 10001, USA",
                "geometry": {"location": {"lat": 40.7506, "lng": -73.9972}},
            }
        ],
    }


@pytest.fixture
def sample_location() -> GeoLocation:
    return GeoLocation(lat=40.7506, lng=-73.9972, formatted_address="New York, NY 10001, USA")


@pytest.fixture
def sample_forecast_days() -> list[DailyPollenInfo]:
    """Parsed forecast days as returned by the API client."""
    return [
        DailyPollenInfo(
            date="2026-04-01",
            readings=[
                PlantReading(code="BIRCH", index_value=4, recommendations=("Stay indoors",)),
                PlantReading(code="GRAMINALES", index_value=2, recommendations=("Stay indoors", "Shower after walks")),
            ],
        ),
        DailyPollenInfo(
            date="2026-04-02",
            readings=[PlantReading(code="RAGWEED", index_value=1)],
        ),
    ]


def _make_record(day: int, tree: float, grass: float = 0, weed: float = 0, **axes) -> CorrelationRecord:
    return CorrelationRecord(
        date=f"2026-04-{day:02d}",
        symptom_axes=SymptomAxes(**axes),
        tree_pollen=tree,
        grass_pollen=grass,
        weed_pollen=weed,
    )


@pytest.fixture
def make_record():
    """Factory building a CorrelationRecord for April ``day`` 2026."""
    return _make_record


@pytest.fixture
def tree_driven_history() -> list[CorrelationRecord]:
    """Three days where severity tracks tree pollen exactly."""
    return [
        _make_record(1, tree=1, eye_symptoms=1),
        _make_record(2, tree=3, eye_symptoms=3),
        _make_record(3, tree=5, eye_symptoms=5),
    ]


# ============================================================
# Storage Fixtures
# ============================================================

@pytest.fixture
def repository() -> InMemoryPollenRepository:
    """Fresh in-memory repository with one pet."""
    repo = InMemoryPollenRepository()
    repo.create_pet(name="Biscuit", zip_code="10001", species="dog")
    return repo


@pytest.fixture
def pollen_cache() -> InMemoryPollenCache:
    return InMemoryPollenCache()


# ============================================================
# Mock API Client Fixtures
# ============================================================

@pytest.fixture
def mock_api_client(sample_location, sample_forecast_days):
    """Create a mock Google API client."""
    mock_client = AsyncMock(spec=GoogleEnvironmentalClient)
    mock_client.geocode.return_value = sample_location
    mock_client.get_pollen_forecast.return_value = sample_forecast_days
    mock_client.get_air_quality.return_value = 42
    return mock_client


@pytest.fixture
def environmental_service(mock_api_client, repository, pollen_cache) -> EnvironmentalService:
    return EnvironmentalService(
        api_client=mock_api_client,
        extractor=PollenExtractor(treat_zero_as_missing=True),
        repository=repository,
        cache=pollen_cache,
    )


# ============================================================
# FastAPI Test Client Fixtures
# ============================================================

@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Start every test with an empty rate limit window."""
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def test_client() -> TestClient:
    """Create a synchronous test client for FastAPI."""
    return TestClient(app)


@pytest.fixture
def wired_client(repository, pollen_cache, mock_api_client):
    """
    Test client whose storage and Google client are replaced with
    in-memory fixtures.
    """
    from pollen_paw.infrastructure.google_api_client import get_api_client
    from pollen_paw.infrastructure.repository import get_pollen_cache, get_repository

    app.dependency_overrides[get_repository] = lambda: repository
    app.dependency_overrides[get_pollen_cache] = lambda: pollen_cache
    app.dependency_overrides[get_api_client] = lambda: mock_api_client
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
