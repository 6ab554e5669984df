"""
Infrastructure layer: Google environmental API client with retry logic.

Wraps the Geocoding, Pollen and Air Quality APIs. Responses are parsed
leniently: missing optional fields become defaults so the domain layer
never sees partial upstream JSON.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, Field
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from pollen_paw.config import settings
from pollen_paw.domain.exceptions import LocationNotFoundError
from pollen_paw.domain.models import GeoLocation, PlantReading
from pollen_paw.infrastructure.api_constants import APIConstants, GoogleAPIEndpoints
from pollen_paw.utils.date_format import format_api_date

logger = logging.getLogger(__name__)


class DailyPollenInfo(BaseModel):
    """One forecast day from the Pollen API."""
    date: str = Field(description="Date key in YYYY-MM-DD format")
    readings: List[PlantReading] = Field(default_factory=list)


class ExternalAPIError(Exception):
    """Custom exception for external API errors."""

    def __init__(self, message: str, status_code: int = 502):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class GoogleEnvironmentalClient:
    """
    Client for the Google Geocoding, Pollen and Air Quality APIs.
    Implements retry logic with exponential backoff.
    """

    def __init__(self, api_key: Optional[str] = None):
        """Initialize the API client with configuration."""
        self.api_key = api_key if api_key is not None else settings.google_api_key
        self.geocoding_base_url = settings.geocoding_api_base_url
        self.pollen_base_url = settings.pollen_api_base_url
        self.air_quality_base_url = settings.air_quality_api_base_url
        self.client = httpx.AsyncClient(
            headers={"accept": APIConstants.CONTENT_TYPE_JSON},
            timeout=settings.request_timeout,
        )

    async def __aenter__(self) -> "GoogleEnvironmentalClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    @retry(
        stop=stop_after_attempt(settings.max_retry_attempts),
        wait=wait_exponential(
            multiplier=settings.retry_backoff_multiplier,
            min=settings.retry_min_wait,
            max=settings.retry_max_wait,
        ),
        retry=retry_if_exception_type((httpx.HTTPStatusError, httpx.RequestError)),
        reraise=True,
    )
    async def _send(self, method: str, url: str, **kwargs) -> Dict[str, Any]:
        """
        Send an HTTP request, retrying server and transport errors.

        Client errors (4xx) are raised as ExternalAPIError immediately and
        are not retried.
        """
        response = await self.client.request(method, url, **kwargs)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            # Retry on server errors (5xx)
            if e.response.status_code >= 500:
                raise
            raise ExternalAPIError(
                f"API request failed: {e.response.status_code} - {e.response.text}",
                status_code=e.response.status_code,
            )
        return response.json()

    async def _make_request(self, method: str, url: str, **kwargs) -> Dict[str, Any]:
        """
        Make an HTTP request with retry logic.

        Args:
            method: HTTP method (GET, POST, etc.)
            url: Absolute endpoint URL
            **kwargs: Additional arguments for the request

        Returns:
            Response data as dictionary

        Raises:
            ExternalAPIError: If the request fails after retries
        """
        try:
            return await self._send(method, url, **kwargs)
        except httpx.HTTPStatusError as e:
            raise ExternalAPIError(
                f"API request failed: {e.response.status_code} - {e.response.text}",
                status_code=e.response.status_code,
            )
        except httpx.RequestError as e:
            raise ExternalAPIError(f"API request error: {str(e)}", status_code=503)
        except ValueError as e:
            raise ExternalAPIError(f"Malformed API response: {str(e)}")

    async def geocode(self, zip_code: str) -> GeoLocation:
        """
        Resolve a postal code to coordinates.

        Args:
            zip_code: Postal code

        Returns:
            GeoLocation instance

        Raises:
            LocationNotFoundError: If the geocoder has no match
            ExternalAPIError: If the request fails
        """
        data = await self._make_request(
            "GET",
            f"{self.geocoding_base_url}{GoogleAPIEndpoints.GEOCODE}",
            params=GoogleAPIEndpoints.geocode_params(zip_code, self.api_key),
        )

        results = data.get("results") or []
        if data.get("status") != APIConstants.GEOCODE_STATUS_OK or not results:
            logger.warning(f"Geocoding failed for {zip_code}: status={data.get('status')}")
            raise LocationNotFoundError(zip_code)

        first = results[0]
        location = (first.get("geometry") or {}).get("location") or {}
        if "lat" not in location or "lng" not in location:
            raise LocationNotFoundError(zip_code)

        return GeoLocation(
            lat=location["lat"],
            lng=location["lng"],
            formatted_address=first.get("formatted_address", ""),
        )

    async def get_pollen_forecast(
        self,
        lat: float,
        lng: float,
        days: Optional[int] = None,
    ) -> List[DailyPollenInfo]:
        """
        Fetch the daily pollen forecast for a location.

        Args:
            lat: Latitude in degrees
            lng: Longitude in degrees
            days: Forecast length; defaults to the configured value

        Returns:
            List of DailyPollenInfo, in upstream order

        Raises:
            ExternalAPIError: If the request fails
        """
        days = days or settings.pollen_forecast_days
        days = max(APIConstants.MIN_FORECAST_DAYS, min(APIConstants.MAX_FORECAST_DAYS, days))

        data = await self._make_request(
            "GET",
            f"{self.pollen_base_url}{GoogleAPIEndpoints.POLLEN_FORECAST}",
            params=GoogleAPIEndpoints.pollen_forecast_params(lat, lng, days, self.api_key),
        )
        return self.parse_daily_info(data)

    async def get_air_quality(self, lat: float, lng: float) -> Optional[float]:
        """
        Fetch the current air quality index for a location.

        Args:
            lat: Latitude in degrees
            lng: Longitude in degrees

        Returns:
            AQI of the first reported index, or None if absent

        Raises:
            ExternalAPIError: If the request fails
        """
        data = await self._make_request(
            "POST",
            f"{self.air_quality_base_url}{GoogleAPIEndpoints.AIR_QUALITY_CURRENT}",
            params={"key": self.api_key},
            json={"location": {"latitude": lat, "longitude": lng}},
        )

        indexes = data.get("indexes") or []
        if not indexes:
            logger.warning("Could not find AQI value in air quality response")
            return None

        first = indexes[0]
        aqi = first.get("aqi")
        if aqi is None:
            aqi = first.get("value")
        return aqi

    def parse_daily_info(self, data: Dict[str, Any]) -> List[DailyPollenInfo]:
        """
        Parse a Pollen API response into per-day readings.

        Plant-level (``plantInfo``) and type-level (``pollenTypeInfo``)
        entries are both kept; codes without a category are dropped later
        by the extractor. Days without a usable date are skipped.

        Args:
            data: Raw response body

        Returns:
            List of DailyPollenInfo
        """
        days = []
        for day in data.get("dailyInfo") or []:
            try:
                date_key = format_api_date(day["date"])
            except (KeyError, TypeError, ValueError):
                logger.warning(f"Skipping forecast day without a valid date: {day.get('date')}")
                continue

            entries = [*(day.get("pollenTypeInfo") or []), *(day.get("plantInfo") or [])]
            readings = [
                PlantReading.from_api(entry)
                for entry in entries
                if isinstance(entry, dict)
            ]
            days.append(DailyPollenInfo(date=date_key, readings=readings))

        logger.debug(f"Parsed {len(days)} forecast days")
        return days


# Singleton instance
_api_client: Optional[GoogleEnvironmentalClient] = None


def get_api_client() -> GoogleEnvironmentalClient:
    """
    Get or create the singleton API client instance.

    Returns:
        GoogleEnvironmentalClient instance
    """
    global _api_client
    if _api_client is None:
        _api_client = GoogleEnvironmentalClient()
    return _api_client
