"""
Application service: symptom log management.
"""
import logging
from typing import Optional

from pydantic import BaseModel

from pollen_paw.domain.models import PollenSnapshot, SymptomAxes
from pollen_paw.infrastructure.repository import PollenRepository, SymptomLogRecord
from pollen_paw.services.domain.symptom_severity import validate_symptom_axes
from pollen_paw.utils.date_format import to_date_key, today_key

logger = logging.getLogger(__name__)


class EnrichedSymptomLog(BaseModel):
    """Symptom log with the stored pollen snapshot for its day."""
    log: SymptomLogRecord
    pollen_data: Optional[PollenSnapshot] = None


class SymptomService:
    """
    Application service for symptom logs.

    Validates axis scores before anything is stored and attaches the
    owning pet's postal code to every log so it can be joined against
    environmental data.
    """

    def __init__(self, repository: PollenRepository):
        """
        Initialize the service with dependencies.

        Args:
            repository: Storage for pets, logs and environmental data
        """
        self.repository = repository

    def create_log(
        self,
        pet_id: int,
        axes: SymptomAxes,
        log_date: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> SymptomLogRecord:
        """
        Validate and store a new symptom log.

        Args:
            pet_id: Pet the log belongs to
            axes: Symptom scores
            log_date: Date key; defaults to today
            notes: Free-text notes

        Returns:
            Stored SymptomLogRecord

        Raises:
            SymptomValidationError: If an axis is outside 1-5
            PetNotFoundError: If the pet does not exist
        """
        validate_symptom_axes(axes)
        pet = self.repository.get_pet(pet_id)
        date_key = to_date_key(log_date) if log_date else today_key()

        log = self.repository.add_symptom_log(
            pet_id=pet.id,
            zip_code=pet.zip_code,
            log_date=date_key,
            axes=axes,
            notes=notes,
        )
        logger.info(f"Created symptom log {log.id} for pet {pet.id} on {date_key}")
        return log

    def update_log(
        self,
        log_id: int,
        axes: Optional[SymptomAxes] = None,
        notes: Optional[str] = None,
    ) -> SymptomLogRecord:
        """
        Validate and apply changes to an existing log.

        Raises:
            SymptomValidationError: If an axis is outside 1-5
            SymptomLogNotFoundError: If the log does not exist
        """
        if axes is not None:
            validate_symptom_axes(axes)
        return self.repository.update_symptom_log(log_id, axes=axes, notes=notes)

    def delete_log(self, log_id: int) -> None:
        self.repository.delete_symptom_log(log_id)
        logger.info(f"Deleted symptom log {log_id}")

    def list_logs(self, pet_id: int) -> list[EnrichedSymptomLog]:
        """
        List a pet's logs newest first, each with its day's pollen data.

        Args:
            pet_id: Pet to list logs for

        Returns:
            List of EnrichedSymptomLog

        Raises:
            PetNotFoundError: If the pet does not exist
        """
        enriched = []
        for log in self.repository.list_symptom_logs(pet_id):
            environment = self.repository.get_environmental_data(log.zip_code, log.log_date)
            enriched.append(EnrichedSymptomLog(
                log=log,
                pollen_data=environment.to_snapshot() if environment else None,
            ))
        return enriched
