"""
API router for symptom log endpoints.
"""
import logging
from fastapi import APIRouter, HTTPException, Path, Query, Response, status
from typing import Annotated

from pollen_paw.api.dependencies import EnvironmentalServiceDep, SymptomServiceDep
from pollen_paw.api.v1.models.requests import SymptomCreateRequest, SymptomUpdateRequest
from pollen_paw.api.v1.models.responses import SymptomLogResponse
from pollen_paw.domain.exceptions import PetNotFoundError, SymptomLogNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/symptoms",
    tags=["symptoms"],
)

SymptomIdPath = Annotated[int, Path(description="Unique identifier for the symptom log")]


@router.post(
    "",
    response_model=SymptomLogResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "A symptom score is outside 1-5"},
        404: {"description": "Pet not found"},
    },
)
async def create_symptom_log(
    body: SymptomCreateRequest,
    symptom_service: SymptomServiceDep,
    environmental_service: EnvironmentalServiceDep,
) -> SymptomLogResponse:
    """
    Log a day of symptoms for a pet.

    Pollen data for the log's postal code and day is looked up and stored
    when available, so the log can take part in correlation analysis.
    Out-of-range scores raise SymptomValidationError, reported as a 400.
    """
    try:
        log = symptom_service.create_log(
            pet_id=body.pet_id,
            axes=body.to_axes(),
            log_date=body.log_date,
            notes=body.notes,
        )
    except PetNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    record = await environmental_service.record_daily_pollen(log.zip_code, log.log_date)
    if record is None:
        logger.info(f"No pollen data stored for {log.zip_code} @ {log.log_date}")

    return SymptomLogResponse.from_record(log, record.to_snapshot() if record else None)


@router.get("", response_model=list[SymptomLogResponse])
async def list_symptom_logs(
    pet_id: Annotated[int, Query(alias="petId", description="Pet to list logs for")],
    symptom_service: SymptomServiceDep,
) -> list[SymptomLogResponse]:
    """List a pet's symptom logs, newest first, with stored pollen data."""
    try:
        logs = symptom_service.list_logs(pet_id)
    except PetNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return [SymptomLogResponse.from_record(item.log, item.pollen_data) for item in logs]


@router.put("/{log_id}", response_model=SymptomLogResponse)
async def update_symptom_log(
    log_id: SymptomIdPath,
    body: SymptomUpdateRequest,
    symptom_service: SymptomServiceDep,
) -> SymptomLogResponse:
    """Update a symptom log's scores or notes."""
    try:
        log = symptom_service.update_log(log_id, axes=body.to_axes(), notes=body.notes)
    except SymptomLogNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return SymptomLogResponse.from_record(log)


@router.delete("/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_symptom_log(log_id: SymptomIdPath, symptom_service: SymptomServiceDep) -> Response:
    """Delete a symptom log."""
    try:
        symptom_service.delete_log(log_id)
    except SymptomLogNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
