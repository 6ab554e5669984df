"""
Application service: Orchestration layer for correlation analysis.
"""
import logging

from pollen_paw.infrastructure.repository import PollenRepository, record_from_row
from pollen_paw.services.domain.correlation_engine import (
    CorrelationEngine,
    CorrelationResult,
)

logger = logging.getLogger(__name__)


class AnalysisService:
    """
    Application service for symptom/pollen correlation.

    Loads a pet's joined history from storage and hands it to the
    correlation engine.
    """

    def __init__(self, repository: PollenRepository, engine: CorrelationEngine):
        """
        Initialize the service with dependencies.

        Args:
            repository: Storage providing joined symptom/pollen rows
            engine: Correlation engine
        """
        self.repository = repository
        self.engine = engine

    def get_correlation(self, pet_id: int) -> CorrelationResult:
        """
        Correlate a pet's symptom severity with pollen exposure.

        Args:
            pet_id: Pet to analyse

        Returns:
            InsufficientData or CorrelationSummary

        Raises:
            PetNotFoundError: If the pet does not exist
        """
        pet = self.repository.get_pet(pet_id)
        rows = self.repository.get_correlation_rows(pet_id)
        records = [record_from_row(row) for row in rows]
        logger.info(f"Analyzing pet {pet_id}: {len(records)} symptom log(s)")

        return self.engine.correlate(records, pet_name=pet.name or None)
