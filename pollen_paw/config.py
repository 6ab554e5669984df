"""
Application configuration using Pydantic settings.
"""
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Google Maps Platform Configuration
    google_api_key: str = Field(
        default="",
        description="API key for the Geocoding, Pollen and Air Quality APIs"
    )
    geocoding_api_base_url: str = Field(
        default="https://maps.googleapis.com",
        description="Base URL for the Geocoding API"
    )
    pollen_api_base_url: str = Field(
        default="https://pollen.googleapis.com",
        description="Base URL for the Pollen API"
    )
    air_quality_api_base_url: str = Field(
        default="https://airquality.googleapis.com",
        description="Base URL for the Air Quality API"
    )

    # Retry Configuration
    max_retry_attempts: int = Field(
        default=3,
        description="Maximum number of retry attempts for API calls"
    )
    retry_backoff_multiplier: int = Field(
        default=1,
        description="Multiplier for exponential backoff"
    )
    retry_min_wait: int = Field(
        default=4,
        description="Minimum wait time in seconds between retries"
    )
    retry_max_wait: int = Field(
        default=10,
        description="Maximum wait time in seconds between retries"
    )
    request_timeout: float = Field(
        default=30.0,
        description="Timeout in seconds for outbound HTTP requests"
    )

    # Pollen Pipeline Parameters
    pollen_forecast_days: int = Field(
        default=5,
        description="Number of forecast days requested from the Pollen API"
    )
    pollen_treat_zero_as_missing: bool = Field(
        default=True,
        description="Treat an index value of 0 as 'no reading' when averaging"
    )

    # Correlation Analysis Parameters
    correlation_min_days: int = Field(
        default=3,
        description="Minimum number of logged days before correlations are reported"
    )
    default_pet_name: str = Field(
        default="Your pet",
        description="Name used in insights when the pet has no stored name"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins (use specific origins in production)"
    )

    # Rate Limiting
    rate_limit_requests: int = Field(
        default=100,
        description="Maximum requests per minute per client"
    )

    # Application Settings
    app_name: str = Field(
        default="Pollen Paw API",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
