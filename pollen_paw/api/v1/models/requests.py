"""
API request models using Pydantic.

Symptom axis ranges are not constrained here: out-of-range scores are
rejected by the symptom domain service so the client receives a 400 that
names the offending field.
"""
from typing import Optional
from pydantic import Field

from pollen_paw.api.v1.models.responses import CamelModel
from pollen_paw.domain.models import SymptomAxes


class PetCreateRequest(CamelModel):
    """Request body for creating a pet."""
    name: str = Field(min_length=1, description="Pet name")
    zip_code: str = Field(min_length=1, description="Owner's postal code")
    species: Optional[str] = Field(default=None, examples=["dog"])


class SymptomScores(CamelModel):
    """Symptom axis scores (1-5), each optional."""
    eye_symptoms: Optional[int] = None
    fur_quality: Optional[int] = None
    skin_irritation: Optional[int] = None
    respiratory: Optional[int] = None
    notes: Optional[str] = None

    def to_axes(self) -> SymptomAxes:
        return SymptomAxes(**self.model_dump(
            include={"eye_symptoms", "fur_quality", "skin_irritation", "respiratory"},
            exclude_unset=True,
        ))


class SymptomCreateRequest(SymptomScores):
    """Request body for creating a symptom log."""
    pet_id: int
    log_date: Optional[str] = Field(
        default=None,
        description="Date in YYYY-MM-DD format; defaults to today",
        examples=["2026-04-01"],
    )


class SymptomUpdateRequest(SymptomScores):
    """Request body for updating a symptom log."""
