"""
Domain models for pollen readings, forecasts and symptom observations.

These models represent the core domain entities and should be independent
of any infrastructure concerns (API clients, databases, etc.).
"""
import math
from enum import Enum
from numbers import Real
from typing import Any, Mapping, Optional

from pydantic import BaseModel, Field


class PollenCategory(str, Enum):
    """Canonical pollen categories. ``NONE`` marks an unmapped plant code."""
    TREE = "tree"
    GRASS = "grass"
    WEED = "weed"
    NONE = "none"

    @property
    def display_name(self) -> str:
        return f"{self.value.capitalize()} Pollen"


class PollenLevel(str, Enum):
    """Ordinal daily pollen severity."""
    LOW = "LOW"
    MODERATE = "MODERATE"
    HIGH = "HIGH"
    VERY_HIGH = "VERY_HIGH"

    @property
    def rank(self) -> int:
        return _LEVEL_ORDER.index(self)


_LEVEL_ORDER = [
    PollenLevel.LOW,
    PollenLevel.MODERATE,
    PollenLevel.HIGH,
    PollenLevel.VERY_HIGH,
]


def _parse_index_value(raw: Any) -> Optional[float]:
    # bool is a Real subclass but never a reading
    if isinstance(raw, bool) or not isinstance(raw, Real):
        return None
    value = float(raw)
    if not math.isfinite(value) or value < 0:
        return None
    return value


class PlantReading(BaseModel):
    """One taxonomic pollen observation for a single day."""
    code: str
    index_value: Optional[float] = Field(
        default=None,
        description="Measured intensity; open-ended upper bound, None when absent"
    )
    recommendations: tuple[str, ...] = ()

    class Config:
        frozen = True

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "PlantReading":
        """
        Build a reading from an upstream ``pollenTypeInfo``/``plantInfo`` entry.

        Missing or malformed fields are defaulted rather than rejected:
        absent, non-numeric or negative index values become ``None`` and a
        missing recommendation list becomes empty.

        Args:
            payload: Raw entry, e.g.
                ``{"code": "BIRCH", "indexInfo": {"value": 2},
                "healthRecommendations": ["..."]}``

        Returns:
            PlantReading instance
        """
        index_info = payload.get("indexInfo") or {}
        raw_value = index_info.get("value") if isinstance(index_info, Mapping) else None

        raw_recommendations = payload.get("healthRecommendations") or []
        if isinstance(raw_recommendations, str):
            raw_recommendations = [raw_recommendations]

        return cls(
            code=str(payload.get("code") or ""),
            index_value=_parse_index_value(raw_value),
            recommendations=tuple(
                str(rec) for rec in raw_recommendations if rec is not None
            ),
        )


class ExtractedPollen(BaseModel):
    """One day's per-category pollen values and recommendations."""
    tree_value: float = Field(default=0.0, ge=0)
    grass_value: float = Field(default=0.0, ge=0)
    weed_value: float = Field(default=0.0, ge=0)
    tree_recommendations: tuple[str, ...] = ()
    grass_recommendations: tuple[str, ...] = ()
    weed_recommendations: tuple[str, ...] = ()

    class Config:
        frozen = True


class DailyForecast(BaseModel):
    """One calendar day of a multi-day pollen forecast."""
    date: str = Field(description="Date key in YYYY-MM-DD format")
    extracted: ExtractedPollen
    level: PollenLevel
    recommendations: list[str] = Field(default_factory=list)

    class Config:
        frozen = True


class GeoLocation(BaseModel):
    """Resolved coordinates for a postal code."""
    lat: float
    lng: float
    formatted_address: str = ""


class PollenForecastReport(BaseModel):
    """Pollen forecast for a postal code."""
    zip_code: str
    location: str
    coordinates: GeoLocation
    forecast: list[DailyForecast]


class PollenSnapshot(BaseModel):
    """Category values and level for one postal code on one day."""
    tree_pollen: float = 0.0
    grass_pollen: float = 0.0
    weed_pollen: float = 0.0
    pollen_level: PollenLevel = PollenLevel.LOW
    air_quality: Optional[float] = None


class SymptomAxes(BaseModel):
    """Four independent symptom scores, each unset or 1-5."""
    eye_symptoms: Optional[int] = None
    fur_quality: Optional[int] = None
    skin_irritation: Optional[int] = None
    respiratory: Optional[int] = None

    def as_tuple(self) -> tuple[Optional[int], Optional[int], Optional[int], Optional[int]]:
        return (self.eye_symptoms, self.fur_quality, self.skin_irritation, self.respiratory)


class CorrelationRecord(BaseModel):
    """One day of a pet's joined symptom and pollen history."""
    date: str = Field(description="Date key in YYYY-MM-DD format")
    symptom_axes: SymptomAxes = Field(default_factory=SymptomAxes)
    tree_pollen: float = 0.0
    grass_pollen: float = 0.0
    weed_pollen: float = 0.0
