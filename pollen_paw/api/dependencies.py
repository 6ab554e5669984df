"""
Dependency injection for FastAPI.
"""
from typing import Annotated
from fastapi import Depends

from pollen_paw.infrastructure.google_api_client import (
    GoogleEnvironmentalClient,
    get_api_client,
)
from pollen_paw.infrastructure.repository import (
    InMemoryPollenCache,
    InMemoryPollenRepository,
    get_pollen_cache,
    get_repository,
)
from pollen_paw.services.domain.correlation_engine import CorrelationEngine
from pollen_paw.services.domain.pollen_extractor import PollenExtractor
from pollen_paw.services.application.analysis_service import AnalysisService
from pollen_paw.services.application.environmental_service import EnvironmentalService
from pollen_paw.services.application.symptom_service import SymptomService


RepositoryDep = Annotated[InMemoryPollenRepository, Depends(get_repository)]


def get_pollen_extractor() -> PollenExtractor:
    """
    Dependency factory for PollenExtractor.

    Returns:
        PollenExtractor using the configured zero-value policy
    """
    return PollenExtractor()


def get_correlation_engine() -> CorrelationEngine:
    """
    Dependency factory for CorrelationEngine.

    Returns:
        CorrelationEngine instance
    """
    return CorrelationEngine()


def get_environmental_service(
    api_client: Annotated[GoogleEnvironmentalClient, Depends(get_api_client)],
    extractor: Annotated[PollenExtractor, Depends(get_pollen_extractor)],
    repository: RepositoryDep,
    cache: Annotated[InMemoryPollenCache, Depends(get_pollen_cache)],
) -> EnvironmentalService:
    """
    Dependency factory for EnvironmentalService.

    Args:
        api_client: Google API client (injected)
        extractor: Pollen extractor (injected)
        repository: Storage (injected)
        cache: Pollen cache (injected)

    Returns:
        EnvironmentalService instance
    """
    return EnvironmentalService(
        api_client=api_client,
        extractor=extractor,
        repository=repository,
        cache=cache,
    )


def get_symptom_service(repository: RepositoryDep) -> SymptomService:
    """Dependency factory for SymptomService."""
    return SymptomService(repository=repository)


def get_analysis_service(
    repository: RepositoryDep,
    engine: Annotated[CorrelationEngine, Depends(get_correlation_engine)],
) -> AnalysisService:
    """Dependency factory for AnalysisService."""
    return AnalysisService(repository=repository, engine=engine)


# Type aliases for cleaner route signatures
EnvironmentalServiceDep = Annotated[EnvironmentalService, Depends(get_environmental_service)]
SymptomServiceDep = Annotated[SymptomService, Depends(get_symptom_service)]
AnalysisServiceDep = Annotated[AnalysisService, Depends(get_analysis_service)]
