"""
Infrastructure layer: persistence and cache collaborators.

Defines the storage interfaces the application services depend on, plus
in-memory implementations used by default and in tests. Persistence rows
are mapped into domain records through ``record_from_row`` so that column
naming in a backing store never leaks into the domain layer.
"""
import logging
from typing import Any, Mapping, Optional, Protocol

from pydantic import BaseModel, Field

from pollen_paw.domain.exceptions import PetNotFoundError, SymptomLogNotFoundError
from pollen_paw.domain.models import (
    CorrelationRecord,
    PollenLevel,
    PollenSnapshot,
    SymptomAxes,
)
from pollen_paw.utils.date_format import to_date_key

logger = logging.getLogger(__name__)


class PetRecord(BaseModel):
    """Stored pet profile."""
    id: int
    name: str
    zip_code: str
    species: Optional[str] = None


class SymptomLogRecord(BaseModel):
    """Stored symptom log entry."""
    id: int
    pet_id: int
    zip_code: str
    log_date: str = Field(description="Date key in YYYY-MM-DD format")
    axes: SymptomAxes = Field(default_factory=SymptomAxes)
    notes: Optional[str] = None


class EnvironmentalRecord(BaseModel):
    """Stored environmental readings for one postal code on one day."""
    zip_code: str
    date: str = Field(description="Date key in YYYY-MM-DD format")
    tree_pollen: Optional[float] = None
    grass_pollen: Optional[float] = None
    weed_pollen: Optional[float] = None
    pollen_level: Optional[PollenLevel] = None
    air_quality: Optional[float] = None

    def to_snapshot(self) -> PollenSnapshot:
        return PollenSnapshot(
            tree_pollen=self.tree_pollen or 0.0,
            grass_pollen=self.grass_pollen or 0.0,
            weed_pollen=self.weed_pollen or 0.0,
            pollen_level=self.pollen_level or PollenLevel.LOW,
            air_quality=self.air_quality,
        )


# Accepted column names per record field, snake_case first
ROW_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "date": ("log_date", "logDate", "date"),
    "eye_symptoms": ("eye_symptoms", "eyeSymptoms"),
    "fur_quality": ("fur_quality", "furQuality"),
    "skin_irritation": ("skin_irritation", "skinIrritation"),
    "respiratory": ("respiratory",),
    "tree_pollen": ("tree_pollen", "treePollen"),
    "grass_pollen": ("grass_pollen", "grassPollen"),
    "weed_pollen": ("weed_pollen", "weedPollen"),
}


def _row_value(row: Mapping[str, Any], field: str) -> Any:
    for key in ROW_FIELD_ALIASES[field]:
        if row.get(key) is not None:
            return row[key]
    return None


def _as_number(value: Any) -> float:
    try:
        return float(value) if value is not None else 0.0
    except (TypeError, ValueError):
        return 0.0


def _as_axis(value: Any) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def record_from_row(row: Mapping[str, Any]) -> CorrelationRecord:
    """
    Map a joined symptom/environment row into a CorrelationRecord.

    Missing pollen columns become 0 and missing or unparsable symptom
    columns become unset axes.

    Args:
        row: Row mapping using snake_case or camelCase column names

    Returns:
        CorrelationRecord
    """
    return CorrelationRecord(
        date=to_date_key(_row_value(row, "date")),
        symptom_axes=SymptomAxes(
            eye_symptoms=_as_axis(_row_value(row, "eye_symptoms")),
            fur_quality=_as_axis(_row_value(row, "fur_quality")),
            skin_irritation=_as_axis(_row_value(row, "skin_irritation")),
            respiratory=_as_axis(_row_value(row, "respiratory")),
        ),
        tree_pollen=_as_number(_row_value(row, "tree_pollen")),
        grass_pollen=_as_number(_row_value(row, "grass_pollen")),
        weed_pollen=_as_number(_row_value(row, "weed_pollen")),
    )


class PollenRepository(Protocol):
    """Storage operations required by the application services."""

    def create_pet(self, name: str, zip_code: str, species: Optional[str] = None) -> PetRecord: ...

    def get_pet(self, pet_id: int) -> PetRecord: ...

    def add_symptom_log(
        self,
        pet_id: int,
        zip_code: str,
        log_date: str,
        axes: SymptomAxes,
        notes: Optional[str] = None,
    ) -> SymptomLogRecord: ...

    def update_symptom_log(
        self,
        log_id: int,
        axes: Optional[SymptomAxes] = None,
        notes: Optional[str] = None,
    ) -> SymptomLogRecord: ...

    def delete_symptom_log(self, log_id: int) -> None: ...

    def list_symptom_logs(self, pet_id: int) -> list[SymptomLogRecord]: ...

    def get_environmental_data(self, zip_code: str, date_key: str) -> Optional[EnvironmentalRecord]: ...

    def upsert_environmental_data(self, record: EnvironmentalRecord) -> EnvironmentalRecord: ...

    def get_correlation_rows(self, pet_id: int) -> list[dict[str, Any]]: ...


class PollenCache(Protocol):
    """Cache for per-day pollen lookups keyed by postal code and date."""

    def get(self, zip_code: str, date_key: str) -> Optional[PollenSnapshot]: ...

    def set(self, zip_code: str, date_key: str, snapshot: PollenSnapshot) -> None: ...


def cache_key(zip_code: str, date_key: str) -> str:
    return f"{zip_code}-{date_key}"


class InMemoryPollenCache:
    """Dictionary-backed PollenCache."""

    def __init__(self):
        self._entries: dict[str, PollenSnapshot] = {}

    def get(self, zip_code: str, date_key: str) -> Optional[PollenSnapshot]:
        return self._entries.get(cache_key(zip_code, date_key))

    def set(self, zip_code: str, date_key: str, snapshot: PollenSnapshot) -> None:
        self._entries[cache_key(zip_code, date_key)] = snapshot

    def __len__(self) -> int:
        return len(self._entries)


class InMemoryPollenRepository:
    """
    Dictionary-backed PollenRepository.

    Environmental rows are keyed by (postal code, date key), matching the
    join used by correlation analysis.
    """

    def __init__(self):
        self._pets: dict[int, PetRecord] = {}
        self._logs: dict[int, SymptomLogRecord] = {}
        self._environment: dict[tuple[str, str], EnvironmentalRecord] = {}
        self._next_pet_id = 1
        self._next_log_id = 1

    # Pets

    def create_pet(self, name: str, zip_code: str, species: Optional[str] = None) -> PetRecord:
        pet = PetRecord(id=self._next_pet_id, name=name, zip_code=zip_code, species=species)
        self._pets[pet.id] = pet
        self._next_pet_id += 1
        logger.debug(f"Created pet {pet.id} ({pet.name})")
        return pet

    def get_pet(self, pet_id: int) -> PetRecord:
        pet = self._pets.get(pet_id)
        if pet is None:
            raise PetNotFoundError(pet_id)
        return pet

    # Symptom logs

    def add_symptom_log(
        self,
        pet_id: int,
        zip_code: str,
        log_date: str,
        axes: SymptomAxes,
        notes: Optional[str] = None,
    ) -> SymptomLogRecord:
        self.get_pet(pet_id)
        log = SymptomLogRecord(
            id=self._next_log_id,
            pet_id=pet_id,
            zip_code=zip_code,
            log_date=to_date_key(log_date),
            axes=axes,
            notes=notes,
        )
        self._logs[log.id] = log
        self._next_log_id += 1
        return log

    def update_symptom_log(
        self,
        log_id: int,
        axes: Optional[SymptomAxes] = None,
        notes: Optional[str] = None,
    ) -> SymptomLogRecord:
        existing = self._logs.get(log_id)
        if existing is None:
            raise SymptomLogNotFoundError(log_id)

        changes: dict[str, Any] = {}
        if axes is not None:
            merged = existing.axes.model_dump()
            merged.update(axes.model_dump(exclude_unset=True))
            changes["axes"] = SymptomAxes(**merged)
        if notes is not None:
            changes["notes"] = notes

        updated = existing.model_copy(update=changes)
        self._logs[log_id] = updated
        return updated

    def delete_symptom_log(self, log_id: int) -> None:
        if self._logs.pop(log_id, None) is None:
            raise SymptomLogNotFoundError(log_id)

    def list_symptom_logs(self, pet_id: int) -> list[SymptomLogRecord]:
        self.get_pet(pet_id)
        logs = [log for log in self._logs.values() if log.pet_id == pet_id]
        return sorted(logs, key=lambda log: (log.log_date, log.id), reverse=True)

    # Environmental data

    def get_environmental_data(self, zip_code: str, date_key: str) -> Optional[EnvironmentalRecord]:
        return self._environment.get((zip_code, to_date_key(date_key)))

    def upsert_environmental_data(self, record: EnvironmentalRecord) -> EnvironmentalRecord:
        """Insert a record, or merge its non-null fields into the existing one."""
        key = (record.zip_code, to_date_key(record.date))
        existing = self._environment.get(key)
        if existing is not None:
            record = existing.model_copy(update=record.model_dump(exclude_none=True))
        self._environment[key] = record
        return record

    # Analysis

    def get_correlation_rows(self, pet_id: int) -> list[dict[str, Any]]:
        """
        Left-join a pet's symptom logs with environmental data.

        Returns:
            Rows ascending by log date, with missing pollen coalesced to 0
        """
        self.get_pet(pet_id)
        logs = sorted(
            (log for log in self._logs.values() if log.pet_id == pet_id),
            key=lambda log: (log.log_date, log.id),
        )

        rows = []
        for log in logs:
            environment = self._environment.get((log.zip_code, log.log_date))
            rows.append({
                "log_date": log.log_date,
                "eye_symptoms": log.axes.eye_symptoms,
                "fur_quality": log.axes.fur_quality,
                "skin_irritation": log.axes.skin_irritation,
                "respiratory": log.axes.respiratory,
                "tree_pollen": (environment.tree_pollen if environment else None) or 0,
                "grass_pollen": (environment.grass_pollen if environment else None) or 0,
                "weed_pollen": (environment.weed_pollen if environment else None) or 0,
                "air_quality": (environment.air_quality if environment else None) or 0,
            })
        return rows


# Singleton instances
_repository: Optional[InMemoryPollenRepository] = None
_pollen_cache: Optional[InMemoryPollenCache] = None


def get_repository() -> InMemoryPollenRepository:
    """
    Get or create the singleton repository instance.

    Returns:
        InMemoryPollenRepository instance
    """
    global _repository
    if _repository is None:
        _repository = InMemoryPollenRepository()
    return _repository


def get_pollen_cache() -> InMemoryPollenCache:
    """
    Get or create the singleton pollen cache instance.

    Returns:
        InMemoryPollenCache instance
    """
    global _pollen_cache
    if _pollen_cache is None:
        _pollen_cache = InMemoryPollenCache()
    return _pollen_cache
