"""Store protocols consumed by the matcher.

The SQLite repositories in `lift_match.db` implement these; any other
persistence layer can be injected instead.
"""

from datetime import datetime
from typing import Protocol, runtime_checkable

from ..models.equipment import UserEquipment
from ..models.exercises import CatalogEntry
from ..models.matching import AliasRecord, AliasSource, ExerciseMetadata, UnmappedEntry


@runtime_checkable
class CatalogStore(Protocol):
    """Protocol for the canonical exercise catalog."""

    async def get(self, exercise_id: str) -> CatalogEntry | None: ...

    async def find_by_id(self, key: str) -> CatalogEntry | None: ...

    async def find_by_exact_name(self, name: str) -> CatalogEntry | None: ...

    async def find_by_normalized_name(
        self, normalized_key: str, field: str = "canonical_name", english_only: bool = True
    ) -> CatalogEntry | None: ...

    async def find_all_with_canonical_name(self) -> list[CatalogEntry]: ...

    async def list_all(self) -> list[CatalogEntry]: ...

    async def insert(self, entry: CatalogEntry) -> CatalogEntry: ...

    async def update(self, entry: CatalogEntry) -> None: ...


@runtime_checkable
class AliasStore(Protocol):
    """Protocol for learned aliases."""

    async def find(self, normalized_key: str) -> str | None: ...

    async def save(
        self,
        target_exercise_id: str,
        raw_name: str,
        language: str = "en",
        source: AliasSource = AliasSource.SEED,
    ) -> bool: ...

    async def create_admin_alias(
        self, target_exercise_id: str, raw_name: str, language: str = "sv"
    ) -> AliasRecord: ...


@runtime_checkable
class UnmappedStore(Protocol):
    """Protocol for the unmapped review queue."""

    async def find_by_raw_name(self, ai_name: str) -> UnmappedEntry | None: ...

    async def get(self, entry_id: int) -> UnmappedEntry | None: ...

    async def upsert_with_increment(
        self,
        ai_name: str,
        suggested_match: str | None = None,
        metadata: ExerciseMetadata | None = None,
        seen_at: datetime | None = None,
    ) -> None: ...

    async def delete_by_id(self, entry_id: int) -> None: ...

    async def delete_many(self, entry_ids: list[int]) -> int: ...

    async def list_all_sorted_by_count(self) -> list[UnmappedEntry]: ...


@runtime_checkable
class EquipmentStore(Protocol):
    """Protocol for user equipment lookups."""

    async def list_available_for_user(
        self, user_id: str, gym_id: str | None = None
    ) -> list[UserEquipment]: ...

    async def get_selected_gym(self, user_id: str) -> str | None: ...
