"""
Unit tests for the environmental application service.
"""
import pytest

from pollen_paw.domain.exceptions import LocationNotFoundError
from pollen_paw.domain.models import PollenLevel, PollenSnapshot
from pollen_paw.infrastructure.google_api_client import ExternalAPIError


# ============================================================
# Forecast Tests
# ============================================================

class TestPollenForecast:
    """Tests for building the multi-day forecast."""

    @pytest.mark.asyncio
    async def test_forecast_report(self, environmental_service, mock_api_client, sample_location):
        report = await environmental_service.get_pollen_forecast("10001")

        assert report.zip_code == "10001"
        assert report.location == "New York, NY 10001, USA"
        assert report.coordinates == sample_location
        assert [day.date for day in report.forecast] == ["2026-04-01", "2026-04-02"]
        mock_api_client.get_pollen_forecast.assert_awaited_once_with(40.7506, -73.9972)

    @pytest.mark.asyncio
    async def test_forecast_day_values(self, environmental_service):
        report = await environmental_service.get_pollen_forecast("10001")
        first, second = report.forecast

        assert first.extracted.tree_value == 4
        assert first.extracted.grass_value == 2
        assert first.level is PollenLevel.VERY_HIGH
        assert first.recommendations == ["Stay indoors", "Shower after walks"]
        assert second.extracted.weed_value == 1
        assert second.level is PollenLevel.LOW

    @pytest.mark.asyncio
    async def test_unknown_zip_propagates(self, environmental_service, mock_api_client):
        mock_api_client.geocode.side_effect = LocationNotFoundError("00000")

        with pytest.raises(LocationNotFoundError):
            await environmental_service.get_pollen_forecast("00000")


# ============================================================
# Historical Pollen Tests
# ============================================================

class TestHistoricalPollen:
    """Tests for per-day pollen lookups and caching."""

    @pytest.mark.asyncio
    async def test_snapshot_for_day(self, environmental_service, pollen_cache):
        snapshot = await environmental_service.get_historical_pollen("2026-04-01", "10001")

        assert snapshot == PollenSnapshot(
            tree_pollen=4,
            grass_pollen=2,
            weed_pollen=0,
            pollen_level=PollenLevel.VERY_HIGH,
        )
        assert pollen_cache.get("10001", "2026-04-01") == snapshot

    @pytest.mark.asyncio
    async def test_cache_hit_skips_upstream(self, environmental_service, mock_api_client, pollen_cache):
        cached = PollenSnapshot(tree_pollen=1.5)
        pollen_cache.set("10001", "2026-04-01", cached)

        snapshot = await environmental_service.get_historical_pollen("2026-04-01", "10001")

        assert snapshot is cached
        mock_api_client.geocode.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_day_outside_forecast(self, environmental_service, pollen_cache):
        snapshot = await environmental_service.get_historical_pollen("2025-12-25", "10001")

        assert snapshot is None
        assert len(pollen_cache) == 0

    @pytest.mark.asyncio
    async def test_upstream_failure_returns_none(self, environmental_service, mock_api_client):
        mock_api_client.get_pollen_forecast.side_effect = ExternalAPIError("boom", status_code=500)

        assert await environmental_service.get_historical_pollen("2026-04-01", "10001") is None

    @pytest.mark.asyncio
    async def test_record_daily_pollen(self, environmental_service, repository):
        record = await environmental_service.record_daily_pollen("10001", "2026-04-01")

        assert record.tree_pollen == 4
        assert record.pollen_level is PollenLevel.VERY_HIGH
        assert repository.get_environmental_data("10001", "2026-04-01") == record

    @pytest.mark.asyncio
    async def test_record_daily_pollen_unavailable(self, environmental_service, repository):
        assert await environmental_service.record_daily_pollen("10001", "2025-12-25") is None
        assert repository.get_environmental_data("10001", "2025-12-25") is None


# ============================================================
# Air Quality Tests
# ============================================================

class TestAirQuality:
    """Tests for AQI lookups."""

    @pytest.mark.asyncio
    async def test_aqi_stored(self, environmental_service, repository, sample_location):
        location, aqi = await environmental_service.get_air_quality("10001", "2026-04-01")

        assert location == sample_location
        assert aqi == 42
        assert repository.get_environmental_data("10001", "2026-04-01").air_quality == 42

    @pytest.mark.asyncio
    async def test_aqi_merges_with_pollen(self, environmental_service, repository):
        await environmental_service.record_daily_pollen("10001", "2026-04-01")
        await environmental_service.get_air_quality("10001", "2026-04-01")

        stored = repository.get_environmental_data("10001", "2026-04-01")
        assert stored.tree_pollen == 4
        assert stored.air_quality == 42

    @pytest.mark.asyncio
    async def test_aqi_failure_returns_none(self, environmental_service, mock_api_client, repository):
        mock_api_client.get_air_quality.side_effect = ExternalAPIError("quota", status_code=429)

        _, aqi = await environmental_service.get_air_quality("10001", "2026-04-01")

        assert aqi is None
        assert repository.get_environmental_data("10001", "2026-04-01") is None
