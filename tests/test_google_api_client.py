"""
Unit tests for the Google environmental API client.

HTTP traffic is intercepted with respx; retry waits are disabled so
retried calls complete immediately.
"""
import httpx
import pytest
import respx
from tenacity import wait_none

from pollen_paw.config import settings
from pollen_paw.domain.exceptions import LocationNotFoundError
from pollen_paw.infrastructure.google_api_client import (
    ExternalAPIError,
    GoogleEnvironmentalClient,
)
from pollen_paw.services.domain.pollen_extractor import PollenExtractor


GEOCODE_HOST = "maps.googleapis.com"
POLLEN_HOST = "pollen.googleapis.com"
AIR_QUALITY_HOST = "airquality.googleapis.com"


@pytest.fixture
def client() -> GoogleEnvironmentalClient:
    return GoogleEnvironmentalClient(api_key="test-key")


@pytest.fixture
def no_retry_wait(monkeypatch):
    """Retry immediately instead of backing off."""
    monkeypatch.setattr(GoogleEnvironmentalClient._send.retry, "wait", wait_none())


# ============================================================
# Geocoding Tests
# ============================================================

class TestGeocode:
    """Tests for postal code geocoding."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_geocode_success(self, client, sample_geocode_payload):
        route = respx.get(host=GEOCODE_HOST, path="/maps/api/geocode/json").mock(
            return_value=httpx.Response(200, json=sample_geocode_payload)
        )

        location = await client.geocode("10001")

        assert location.lat == 40.7506
        assert location.lng == -73.9972
        assert location.formatted_address == "New York, NY 10001, USA"
        request = route.calls.last.request
        assert request.url.params["address"] == "10001"
        assert request.url.params["key"] == "test-key"

    @pytest.mark.asyncio
    @respx.mock
    async def test_geocode_zero_results(self, client):
        respx.get(host=GEOCODE_HOST, path="/maps/api/geocode/json").mock(
            return_value=httpx.Response(200, json={"status": "ZERO_RESULTS", "results": []})
        )

        with pytest.raises(LocationNotFoundError) as exc_info:
            await client.geocode("00000")

        assert exc_info.value.zip_code == "00000"

    @pytest.mark.asyncio
    @respx.mock
    async def test_geocode_missing_geometry(self, client):
        respx.get(host=GEOCODE_HOST, path="/maps/api/geocode/json").mock(
            return_value=httpx.Response(200, json={"status": "OK", "results": [{}]})
        )

        with pytest.raises(LocationNotFoundError):
            await client.geocode("10001")


# ============================================================
# Pollen Forecast Tests
# ============================================================

class TestPollenForecast:
    """Tests for fetching and parsing the pollen forecast."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_forecast_parsed_per_day(self, client, sample_pollen_payload):
        route = respx.get(host=POLLEN_HOST, path="/v1/forecast:lookup").mock(
            return_value=httpx.Response(200, json=sample_pollen_payload)
        )

        days = await client.get_pollen_forecast(40.75, -73.99)

        assert [day.date for day in days] == ["2026-04-01", "2026-04-02"]
        params = route.calls.last.request.url.params
        assert params["days"] == str(settings.pollen_forecast_days)
        assert params["location.latitude"] == "40.75"

    @pytest.mark.asyncio
    @respx.mock
    async def test_forecast_days_clamped(self, client):
        route = respx.get(host=POLLEN_HOST, path="/v1/forecast:lookup").mock(
            return_value=httpx.Response(200, json={"dailyInfo": []})
        )

        await client.get_pollen_forecast(40.75, -73.99, days=14)

        assert route.calls.last.request.url.params["days"] == "5"

    def test_parse_daily_info_keeps_type_and_plant_entries(self, client, sample_pollen_payload):
        days = client.parse_daily_info(sample_pollen_payload)

        codes = [reading.code for reading in days[0].readings]
        assert codes == ["GRASS", "TREE", "BIRCH", "OAK", "GRAMINALES", "RAGWEED", "OLIVE"]

    def test_parsed_day_extracts_category_values(self, client, sample_pollen_payload):
        """Type-level and unknown codes drop out during extraction."""
        first_day = client.parse_daily_info(sample_pollen_payload)[0]

        extracted = PollenExtractor(treat_zero_as_missing=True).extract(first_day.readings)

        assert extracted.tree_value == 3.5
        assert extracted.grass_value == 3
        assert extracted.weed_value == 0
        assert extracted.tree_recommendations == ("Stay indoors", "Keep windows closed")

    def test_parse_skips_days_without_date(self, client):
        data = {
            "dailyInfo": [
                {"plantInfo": [{"code": "OAK", "indexInfo": {"value": 2}}]},
                {"date": {"year": 2026, "month": 4}},
                {"date": {"year": 2026, "month": 4, "day": 9}},
            ]
        }

        days = client.parse_daily_info(data)

        assert [day.date for day in days] == ["2026-04-09"]
        assert days[0].readings == []

    def test_parse_empty_response(self, client):
        assert client.parse_daily_info({}) == []


# ============================================================
# Air Quality Tests
# ============================================================

class TestAirQuality:
    """Tests for the current air quality lookup."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_air_quality_aqi(self, client):
        route = respx.post(host=AIR_QUALITY_HOST, path="/v1/currentConditions:lookup").mock(
            return_value=httpx.Response(200, json={"indexes": [{"code": "uaqi", "aqi": 55}]})
        )

        aqi = await client.get_air_quality(40.75, -73.99)

        assert aqi == 55
        assert route.calls.last.request.url.params["key"] == "test-key"

    @pytest.mark.asyncio
    @respx.mock
    async def test_air_quality_falls_back_to_value(self, client):
        respx.post(host=AIR_QUALITY_HOST, path="/v1/currentConditions:lookup").mock(
            return_value=httpx.Response(200, json={"indexes": [{"value": 31}]})
        )

        assert await client.get_air_quality(40.75, -73.99) == 31

    @pytest.mark.asyncio
    @respx.mock
    async def test_air_quality_missing_indexes(self, client):
        respx.post(host=AIR_QUALITY_HOST, path="/v1/currentConditions:lookup").mock(
            return_value=httpx.Response(200, json={})
        )

        assert await client.get_air_quality(40.75, -73.99) is None


# ============================================================
# Error Handling and Retry Tests
# ============================================================

class TestErrorHandling:
    """Tests for error mapping and retry behaviour."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_client_error_not_retried(self, client, no_retry_wait):
        route = respx.get(host=GEOCODE_HOST, path="/maps/api/geocode/json").mock(
            return_value=httpx.Response(403, json={"error": "forbidden"})
        )

        with pytest.raises(ExternalAPIError) as exc_info:
            await client.geocode("10001")

        assert exc_info.value.status_code == 403
        assert route.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_server_error_retried(self, client, no_retry_wait):
        route = respx.get(host=GEOCODE_HOST, path="/maps/api/geocode/json").mock(
            return_value=httpx.Response(500, text="boom")
        )

        with pytest.raises(ExternalAPIError) as exc_info:
            await client.geocode("10001")

        assert exc_info.value.status_code == 500
        assert route.call_count == settings.max_retry_attempts

    @pytest.mark.asyncio
    @respx.mock
    async def test_recovers_after_transient_failure(self, client, no_retry_wait, sample_geocode_payload):
        route = respx.get(host=GEOCODE_HOST, path="/maps/api/geocode/json").mock(
            side_effect=[
                httpx.Response(503),
                httpx.Response(200, json=sample_geocode_payload),
            ]
        )

        location = await client.geocode("10001")

        assert location.lat == 40.7506
        assert route.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_transport_error_maps_to_503(self, client, no_retry_wait):
        respx.get(host=GEOCODE_HOST, path="/maps/api/geocode/json").mock(
            side_effect=httpx.ConnectError
        )

        with pytest.raises(ExternalAPIError) as exc_info:
            await client.geocode("10001")

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    @respx.mock
    async def test_malformed_json(self, client):
        respx.get(host=GEOCODE_HOST, path="/maps/api/geocode/json").mock(
            return_value=httpx.Response(200, text="not json")
        )

        with pytest.raises(ExternalAPIError) as exc_info:
            await client.geocode("10001")

        assert exc_info.value.status_code == 502
