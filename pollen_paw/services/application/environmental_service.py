"""
Application service: Orchestration layer for pollen and air quality lookups.
"""
import logging
from typing import Optional

from pollen_paw.domain.models import (
    DailyForecast,
    GeoLocation,
    PollenForecastReport,
    PollenSnapshot,
)
from pollen_paw.infrastructure.google_api_client import (
    DailyPollenInfo,
    ExternalAPIError,
    GoogleEnvironmentalClient,
)
from pollen_paw.infrastructure.repository import (
    EnvironmentalRecord,
    PollenCache,
    PollenRepository,
)
from pollen_paw.services.domain.pollen_classifier import classify_pollen_level
from pollen_paw.services.domain.pollen_extractor import (
    PollenExtractor,
    combine_recommendations,
)
from pollen_paw.utils.date_format import to_date_key

logger = logging.getLogger(__name__)


class EnvironmentalService:
    """
    Application service for environmental data.

    Coordinates the Google client, the pollen domain services and the
    storage collaborators. No pollen arithmetic lives here.
    """

    def __init__(
        self,
        api_client: GoogleEnvironmentalClient,
        extractor: PollenExtractor,
        repository: PollenRepository,
        cache: PollenCache,
    ):
        """
        Initialize the service with dependencies.

        Args:
            api_client: Google client for geocoding, pollen and AQI data
            extractor: Pollen value extractor
            repository: Storage for environmental readings
            cache: Per-day pollen snapshot cache
        """
        self.api_client = api_client
        self.extractor = extractor
        self.repository = repository
        self.cache = cache

    def build_daily_forecast(self, day: DailyPollenInfo) -> DailyForecast:
        """
        Run one forecast day through extraction, classification and
        recommendation combining.

        Args:
            day: Parsed upstream forecast day

        Returns:
            DailyForecast
        """
        extracted = self.extractor.extract(day.readings)
        level = classify_pollen_level(
            extracted.tree_value,
            extracted.grass_value,
            extracted.weed_value,
        )
        return DailyForecast(
            date=day.date,
            extracted=extracted,
            level=level,
            recommendations=combine_recommendations(extracted),
        )

    async def get_pollen_forecast(self, zip_code: str) -> PollenForecastReport:
        """
        Get the multi-day pollen forecast for a postal code.

        This method orchestrates:
        1. Geocoding the postal code
        2. Fetching the upstream pollen forecast
        3. Building one DailyForecast per day

        Args:
            zip_code: Postal code

        Returns:
            PollenForecastReport

        Raises:
            LocationNotFoundError: If the postal code cannot be geocoded
            ExternalAPIError: If data fetching fails
        """
        location = await self.api_client.geocode(zip_code)
        logger.info(f"Resolved {zip_code} to ({location.lat}, {location.lng})")

        days = await self.api_client.get_pollen_forecast(location.lat, location.lng)
        forecast = [self.build_daily_forecast(day) for day in days]
        logger.info(f"Built {len(forecast)}-day pollen forecast for {zip_code}")

        return PollenForecastReport(
            zip_code=zip_code,
            location=location.formatted_address,
            coordinates=location,
            forecast=forecast,
        )

    async def get_historical_pollen(
        self,
        date_key: str,
        zip_code: str,
    ) -> Optional[PollenSnapshot]:
        """
        Look up pollen values for one postal code on one day.

        Results are cached by (postal code, date). Upstream failures are
        logged and reported as None so callers can render the day without
        pollen data.

        Args:
            date_key: Date in YYYY-MM-DD format
            zip_code: Postal code

        Returns:
            PollenSnapshot, or None if the day is unavailable
        """
        date_key = to_date_key(date_key)
        cached = self.cache.get(zip_code, date_key)
        if cached is not None:
            logger.debug(f"Pollen cache hit for {zip_code} @ {date_key}")
            return cached

        try:
            location = await self.api_client.geocode(zip_code)
            days = await self.api_client.get_pollen_forecast(location.lat, location.lng)
        except (ExternalAPIError, LookupError) as e:
            logger.warning(f"Pollen lookup failed for {zip_code} @ {date_key}: {e}")
            return None

        day = next((d for d in days if d.date == date_key), None)
        if day is None:
            logger.info(f"No pollen forecast available for {zip_code} @ {date_key}")
            return None

        forecast = self.build_daily_forecast(day)
        snapshot = PollenSnapshot(
            tree_pollen=forecast.extracted.tree_value,
            grass_pollen=forecast.extracted.grass_value,
            weed_pollen=forecast.extracted.weed_value,
            pollen_level=forecast.level,
        )
        self.cache.set(zip_code, date_key, snapshot)
        return snapshot

    async def record_daily_pollen(self, zip_code: str, date_key: str) -> Optional[EnvironmentalRecord]:
        """
        Look up pollen for a day and store it for later correlation.

        Args:
            zip_code: Postal code
            date_key: Date in YYYY-MM-DD format

        Returns:
            Stored EnvironmentalRecord, or None if pollen data is unavailable
        """
        snapshot = await self.get_historical_pollen(date_key, zip_code)
        if snapshot is None:
            return None

        return self.repository.upsert_environmental_data(EnvironmentalRecord(
            zip_code=zip_code,
            date=to_date_key(date_key),
            tree_pollen=snapshot.tree_pollen,
            grass_pollen=snapshot.grass_pollen,
            weed_pollen=snapshot.weed_pollen,
            pollen_level=snapshot.pollen_level,
        ))

    async def get_air_quality(
        self,
        zip_code: str,
        date_key: str,
    ) -> tuple[GeoLocation, Optional[float]]:
        """
        Fetch the current AQI for a postal code and store it.

        Args:
            zip_code: Postal code
            date_key: Date the reading is stored under

        Returns:
            Tuple of (location, AQI or None if unavailable)

        Raises:
            LocationNotFoundError: If the postal code cannot be geocoded
            ExternalAPIError: If geocoding fails
        """
        location = await self.api_client.geocode(zip_code)

        try:
            aqi = await self.api_client.get_air_quality(location.lat, location.lng)
        except ExternalAPIError as e:
            logger.warning(f"Air quality lookup failed for {zip_code}: {e}")
            return location, None

        if aqi is not None:
            logger.info(f"Storing AQI {aqi} for {zip_code} @ {date_key}")
            self.repository.upsert_environmental_data(EnvironmentalRecord(
                zip_code=zip_code,
                date=to_date_key(date_key),
                air_quality=aqi,
            ))

        return location, aqi
