"""
API endpoint constants and configuration.

This module contains all external API endpoint paths and related constants.
Centralizing these values makes it easy to swap out endpoints or update API versions.
"""


# Google Maps Platform Endpoints
class GoogleAPIEndpoints:
    """Google Geocoding, Pollen and Air Quality endpoint paths."""

    GEOCODE = "/maps/api/geocode/json"
    POLLEN_FORECAST = "/v1/forecast:lookup"
    AIR_QUALITY_CURRENT = "/v1/currentConditions:lookup"

    @classmethod
    def geocode_params(cls, zip_code: str, api_key: str) -> dict[str, str]:
        """
        Query parameters for a postal code geocoding lookup.

        Args:
            zip_code: Postal code to resolve
            api_key: Google API key

        Returns:
            Query parameter mapping
        """
        return {"address": zip_code, "key": api_key}

    @classmethod
    def pollen_forecast_params(
        cls,
        lat: float,
        lng: float,
        days: int,
        api_key: str,
    ) -> dict[str, str]:
        """
        Query parameters for a multi-day pollen forecast lookup.

        Args:
            lat: Latitude in degrees
            lng: Longitude in degrees
            days: Number of forecast days (1-5)
            api_key: Google API key

        Returns:
            Query parameter mapping
        """
        return {
            "key": api_key,
            "location.latitude": str(lat),
            "location.longitude": str(lng),
            "days": str(days),
        }


# API Configuration Constants
class APIConstants:
    """General API configuration constants."""

    # HTTP Headers
    CONTENT_TYPE_JSON = "application/json"

    # Geocoding status values
    GEOCODE_STATUS_OK = "OK"

    # Pollen forecast window supported upstream
    MIN_FORECAST_DAYS = 1
    MAX_FORECAST_DAYS = 5
