"""
API router for correlation analysis endpoints.
"""
from fastapi import APIRouter, HTTPException, Query
from typing import Annotated, Union

from pollen_paw.api.dependencies import AnalysisServiceDep
from pollen_paw.api.v1.models.responses import (
    CorrelationSuccessResponse,
    InsufficientDataResponse,
)
from pollen_paw.domain.exceptions import PetNotFoundError
from pollen_paw.services.domain.correlation_engine import InsufficientData


router = APIRouter(
    prefix="/analysis",
    tags=["analysis"],
)


@router.get(
    "/correlation",
    response_model=Union[CorrelationSuccessResponse, InsufficientDataResponse],
    summary="Correlate symptoms with pollen",
    description="""
    Correlate a pet's daily symptom severity with tree, grass and weed pollen.

    Severity is the mean of the symptom scores recorded that day. Pearson's
    r is computed over the pet's full history for each pollen category, and
    the category with the largest absolute r is reported as the top trigger.
    Fewer than three logged days yields an ``insufficient_data`` status.
    """,
    responses={
        404: {"description": "Pet not found"},
    },
)
async def get_correlation(
    pet_id: Annotated[int, Query(alias="petId", description="Pet to analyse")],
    analysis_service: AnalysisServiceDep,
) -> Union[CorrelationSuccessResponse, InsufficientDataResponse]:
    """
    Get the symptom/pollen correlation analysis for a pet.

    Args:
        pet_id: Pet to analyse
        analysis_service: Analysis service (injected dependency)

    Returns:
        CorrelationSuccessResponse or InsufficientDataResponse
    """
    try:
        result = analysis_service.get_correlation(pet_id)
    except PetNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    if isinstance(result, InsufficientData):
        return InsufficientDataResponse.from_domain(result)
    return CorrelationSuccessResponse.from_domain(result)
