"""
API response models using Pydantic.

Field names are snake_case in Python and camelCase on the wire.
"""
from typing import List, Literal, Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from pollen_paw.domain.models import DailyForecast, PollenForecastReport, PollenSnapshot
from pollen_paw.infrastructure.repository import PetRecord, SymptomLogRecord
from pollen_paw.services.domain.correlation_engine import (
    CorrelationSummary,
    InsufficientData,
)


class CamelModel(BaseModel):
    """Base model serializing with camelCase aliases."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class Coordinates(CamelModel):
    """Latitude/longitude pair."""
    lat: float = Field(description="Latitude in degrees", examples=[40.7128])
    lng: float = Field(description="Longitude in degrees", examples=[-74.0060])


class PollenForecastDay(CamelModel):
    """One day of the pollen forecast."""
    date: str = Field(description="Date in YYYY-MM-DD format", examples=["2026-01-05"])
    tree_pollen: float
    grass_pollen: float
    weed_pollen: float
    pollen_level: str = Field(examples=["HIGH"])
    health_recommendations: List[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, day: DailyForecast) -> "PollenForecastDay":
        return cls(
            date=day.date,
            tree_pollen=day.extracted.tree_value,
            grass_pollen=day.extracted.grass_value,
            weed_pollen=day.extracted.weed_value,
            pollen_level=day.level.value,
            health_recommendations=list(day.recommendations),
        )


class PollenForecastResponse(CamelModel):
    """Response model for the pollen forecast endpoint."""
    zip_code: str
    location: str
    coordinates: Coordinates
    forecast: List[PollenForecastDay]

    @classmethod
    def from_domain(cls, report: PollenForecastReport) -> "PollenForecastResponse":
        return cls(
            zip_code=report.zip_code,
            location=report.location,
            coordinates=Coordinates(lat=report.coordinates.lat, lng=report.coordinates.lng),
            forecast=[PollenForecastDay.from_domain(day) for day in report.forecast],
        )


class AirQualityResponse(CamelModel):
    """Response model for the air quality endpoint."""
    zip_code: str
    date: str
    aqi: Optional[float] = Field(default=None, description="Air quality index, null if unavailable")
    coordinates: Coordinates


class PetResponse(CamelModel):
    """Pet profile."""
    id: int
    name: str
    zip_code: str
    species: Optional[str] = None

    @classmethod
    def from_record(cls, pet: PetRecord) -> "PetResponse":
        return cls(id=pet.id, name=pet.name, zip_code=pet.zip_code, species=pet.species)


class PollenDataPatch(CamelModel):
    """Stored environmental data for a symptom log's day."""
    tree_pollen: float
    grass_pollen: float
    weed_pollen: float
    pollen_level: str
    air_quality: Optional[float] = None

    @classmethod
    def from_domain(cls, snapshot: PollenSnapshot) -> "PollenDataPatch":
        return cls(
            tree_pollen=snapshot.tree_pollen,
            grass_pollen=snapshot.grass_pollen,
            weed_pollen=snapshot.weed_pollen,
            pollen_level=snapshot.pollen_level.value,
            air_quality=snapshot.air_quality,
        )


class SymptomLogResponse(CamelModel):
    """Symptom log, optionally enriched with pollen data."""
    id: int
    pet_id: int
    zip_code: str
    log_date: str
    eye_symptoms: Optional[int] = None
    fur_quality: Optional[int] = None
    skin_irritation: Optional[int] = None
    respiratory: Optional[int] = None
    notes: Optional[str] = None
    pollen_data: Optional[PollenDataPatch] = None

    @classmethod
    def from_record(
        cls,
        log: SymptomLogRecord,
        pollen_data: Optional[PollenSnapshot] = None,
    ) -> "SymptomLogResponse":
        return cls(
            id=log.id,
            pet_id=log.pet_id,
            zip_code=log.zip_code,
            log_date=log.log_date,
            notes=log.notes,
            pollen_data=PollenDataPatch.from_domain(pollen_data) if pollen_data else None,
            **log.axes.model_dump(),
        )


class CorrelationValuesModel(CamelModel):
    """Rounded correlation coefficients and the top trigger."""
    tree_corr: float = Field(ge=-1, le=1)
    grass_corr: float = Field(ge=-1, le=1)
    weed_corr: float = Field(ge=-1, le=1)
    top_trigger: Literal["tree", "grass", "weed"]
    top_trigger_value: float = Field(ge=-1, le=1)


class ChartDataPointModel(CamelModel):
    """One day of the joined series for charting."""
    date: str
    symptom_severity: float
    tree_pollen: float
    grass_pollen: float
    weed_pollen: float


class InsightsModel(CamelModel):
    """Natural-language insights for the top trigger."""
    top_trigger_insight: str
    threshold_insight: str
    action_recommendation: str


class InsufficientDataResponse(CamelModel):
    """Correlation response when too few days are logged."""
    status: Literal["insufficient_data"] = "insufficient_data"
    days_logged: int
    days_needed: int
    pet_name: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def from_domain(cls, result: InsufficientData) -> "InsufficientDataResponse":
        return cls(
            days_logged=result.days_logged,
            days_needed=result.days_needed,
            pet_name=result.pet_name,
            message=result.message,
        )


class CorrelationSuccessResponse(CamelModel):
    """Correlation response with coefficients, chart data and insights."""
    status: Literal["success"] = "success"
    days_logged: int
    pet_name: Optional[str] = None
    correlations: CorrelationValuesModel
    chart_data: List[ChartDataPointModel]
    insights: Optional[InsightsModel] = None

    class Config:
        json_schema_extra = {
            "example": {
                "status": "success",
                "daysLogged": 3,
                "petName": "Biscuit",
                "correlations": {
                    "treeCorr": 1.0,
                    "grassCorr": 0.0,
                    "weedCorr": 0.0,
                    "topTrigger": "tree",
                    "topTriggerValue": 1.0,
                },
                "chartData": [
                    {"date": "2026-04-01", "symptomSeverity": 1.0,
                     "treePollen": 1.0, "grassPollen": 0.0, "weedPollen": 0.0},
                ],
                "insights": {
                    "topTriggerInsight": "Biscuit's symptoms strongly correlate with Tree Pollen (r=1.00)",
                    "thresholdInsight": "Symptoms appear when tree pollen reaches 5.0",
                    "actionRecommendation": "Recommend closing windows when tree pollen index is 5.0 or higher",
                },
            }
        }

    @classmethod
    def from_domain(cls, result: CorrelationSummary) -> "CorrelationSuccessResponse":
        values = result.correlations
        insights = result.insights
        return cls(
            days_logged=result.days_logged,
            pet_name=result.pet_name,
            correlations=CorrelationValuesModel(
                tree_corr=values.tree_corr,
                grass_corr=values.grass_corr,
                weed_corr=values.weed_corr,
                top_trigger=values.top_trigger.value,
                top_trigger_value=values.top_trigger_value,
            ),
            chart_data=[
                ChartDataPointModel(
                    date=point.date,
                    symptom_severity=point.symptom_severity,
                    tree_pollen=point.tree_pollen,
                    grass_pollen=point.grass_pollen,
                    weed_pollen=point.weed_pollen,
                )
                for point in result.chart_data
            ],
            insights=InsightsModel(
                top_trigger_insight=insights.top_trigger_insight,
                threshold_insight=insights.threshold_insight,
                action_recommendation=insights.action_recommendation,
            ) if insights else None,
        )
