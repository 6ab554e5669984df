"""
API router for environmental data endpoints.
"""
from fastapi import APIRouter, HTTPException, Query
from typing import Annotated

from pollen_paw.api.dependencies import EnvironmentalServiceDep
from pollen_paw.api.v1.models.responses import (
    AirQualityResponse,
    Coordinates,
    PollenForecastResponse,
)
from pollen_paw.domain.exceptions import LocationNotFoundError
from pollen_paw.utils.date_format import today_key


router = APIRouter(
    prefix="/environmental",
    tags=["environmental"],
)

ZipCodeQuery = Annotated[str, Query(alias="zipCode", min_length=1, description="Postal code")]


@router.get(
    "/pollen",
    response_model=PollenForecastResponse,
    summary="Get pollen forecast",
    description="""
    Return a multi-day pollen forecast for a postal code.

    Plant-level readings from the upstream forecast are grouped into tree,
    grass and weed values, classified into a daily pollen level, and their
    health recommendations are merged without duplicates.
    """,
    responses={
        404: {"description": "ZIP code could not be geocoded"},
        502: {"description": "External API failure"},
        429: {"description": "Rate limit exceeded"},
    },
)
async def get_pollen_forecast(
    zip_code: ZipCodeQuery,
    environmental_service: EnvironmentalServiceDep,
) -> PollenForecastResponse:
    """
    Get the pollen forecast for a postal code.

    Args:
        zip_code: Postal code
        environmental_service: Environmental service (injected dependency)

    Returns:
        PollenForecastResponse

    Raises:
        HTTPException: If the postal code cannot be resolved
    """
    try:
        report = await environmental_service.get_pollen_forecast(zip_code)
    except LocationNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return PollenForecastResponse.from_domain(report)


@router.get(
    "/air-quality",
    response_model=AirQualityResponse,
    summary="Get current air quality",
    responses={
        404: {"description": "ZIP code could not be geocoded"},
        429: {"description": "Rate limit exceeded"},
    },
)
async def get_air_quality(
    zip_code: ZipCodeQuery,
    environmental_service: EnvironmentalServiceDep,
) -> AirQualityResponse:
    """
    Get and store the current AQI for a postal code.

    Args:
        zip_code: Postal code
        environmental_service: Environmental service (injected dependency)

    Returns:
        AirQualityResponse; ``aqi`` is null when upstream has no reading
    """
    date_key = today_key()
    try:
        location, aqi = await environmental_service.get_air_quality(zip_code, date_key)
    except LocationNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return AirQualityResponse(
        zip_code=zip_code,
        date=date_key,
        aqi=aqi,
        coordinates=Coordinates(lat=location.lat, lng=location.lng),
    )
