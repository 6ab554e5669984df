"""
API router for pet endpoints.
"""
from fastapi import APIRouter, HTTPException, Path, status
from typing import Annotated

from pollen_paw.api.dependencies import RepositoryDep
from pollen_paw.api.v1.models.requests import PetCreateRequest
from pollen_paw.api.v1.models.responses import PetResponse
from pollen_paw.domain.exceptions import PetNotFoundError


router = APIRouter(
    prefix="/pets",
    tags=["pets"],
)


@router.post("", response_model=PetResponse, status_code=status.HTTP_201_CREATED)
async def create_pet(body: PetCreateRequest, repository: RepositoryDep) -> PetResponse:
    """Create a pet profile tied to its owner's postal code."""
    pet = repository.create_pet(name=body.name, zip_code=body.zip_code, species=body.species)
    return PetResponse.from_record(pet)


@router.get("/{pet_id}", response_model=PetResponse)
async def get_pet(
    pet_id: Annotated[int, Path(description="Unique identifier for the pet")],
    repository: RepositoryDep,
) -> PetResponse:
    """Fetch a pet profile."""
    try:
        pet = repository.get_pet(pet_id)
    except PetNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return PetResponse.from_record(pet)
