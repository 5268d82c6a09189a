"""Review queue for exercise names nothing could resolve."""

import logging

from ..errors import NotFoundError
from ..models.exercises import UNKNOWN_TAG, CatalogEntry
from ..models.matching import ExerciseMetadata, UnmappedEntry
from ..utils.exercise_utils import normalize_name
from .catalog_lookup import CatalogLookup
from .heuristics import looks_localized
from .stores import AliasStore, CatalogStore, UnmappedStore

logger = logging.getLogger(__name__)


class UnmappedReviewQueue:
    """Records unresolved names and lets an operator resolve them.

    Recording is best-effort and never raises into the matching flow.
    Every resolution path deletes the queued entry afterwards.
    """

    def __init__(self, unmapped: UnmappedStore, catalog: CatalogStore, aliases: AliasStore):
        self.unmapped = unmapped
        self.catalog = catalog
        self.aliases = aliases

    async def record(
        self,
        ai_name: str,
        suggested_match: str | None = None,
        metadata: ExerciseMetadata | None = None,
    ) -> None:
        """Count one more unresolved sighting of `ai_name`."""
        try:
            await self.unmapped.upsert_with_increment(
                ai_name, suggested_match=suggested_match, metadata=metadata
            )
            logger.info(
                "Queued unmapped exercise %r", ai_name,
                extra={"match_raw_name": ai_name, "match_reason": suggested_match},
            )
        except Exception:
            logger.exception("Failed to log unmapped exercise %r", ai_name)

    async def list_pending(self) -> list[UnmappedEntry]:
        """Queued entries, most frequent first."""
        return await self.unmapped.list_all_sorted_by_count()

    async def resolve_with_alias(self, entry_id: int, exercise_id: str) -> CatalogEntry:
        """Alias the queued name to an existing exercise."""
        entry = await self._require(entry_id)
        target = await self.catalog.get(exercise_id)
        if target is None:
            raise NotFoundError(f"Exercise {exercise_id} not found")
        if not target.canonical_name:
            raise ValueError(f"Exercise {exercise_id} has no English name")

        await self.aliases.create_admin_alias(
            target.id, entry.ai_name, language=_guess_language(entry.ai_name)
        )
        await self.unmapped.delete_by_id(entry_id)
        logger.info("Resolved %r as alias of %r", entry.ai_name, target.display_name)
        return target

    async def resolve_with_new_exercise(
        self,
        entry_id: int,
        canonical_name: str,
        localized_name: str | None = None,
        external_id: str | None = None,
    ) -> CatalogEntry:
        """Create a catalog entry from the queued name and its captured metadata."""
        entry = await self._require(entry_id)
        if not normalize_name(canonical_name):
            raise ValueError("Canonical name must not be empty")
        for name in (canonical_name, localized_name):
            if name and await self.catalog.find_by_exact_name(name) is not None:
                raise ValueError(f"Exercise {name!r} already exists")
        if external_id and await self.catalog.find_by_id(external_id) is not None:
            raise ValueError(f"Exercise {external_id!r} already exists")

        meta = entry.metadata
        new_entry = CatalogEntry(
            localized_name=localized_name or canonical_name,
            canonical_name=canonical_name,
            external_id=external_id,
            category=meta.category or "strength",
            difficulty=meta.difficulty or "intermediate",
            primary_muscles=meta.primary_muscles or [UNKNOWN_TAG],
            secondary_muscles=meta.secondary_muscles or [],
            required_equipment=meta.equipment or [UNKNOWN_TAG],
        )
        await self.catalog.insert(new_entry)
        await self.aliases.create_admin_alias(
            new_entry.id, entry.ai_name, language=_guess_language(entry.ai_name)
        )
        await self.unmapped.delete_by_id(entry_id)
        logger.info("Resolved %r by creating exercise %r", entry.ai_name, canonical_name)
        return new_entry

    async def reject(self, entry_id: int) -> None:
        """Drop a queued name without mapping it."""
        entry = await self._require(entry_id)
        await self.unmapped.delete_by_id(entry_id)
        logger.info("Rejected unmapped exercise %r", entry.ai_name)

    async def reject_many(self, entry_ids: list[int]) -> int:
        return await self.unmapped.delete_many(entry_ids)

    async def cleanup(self) -> int:
        """Remove queued names that now resolve by exact or stored-alias lookup."""
        lookup = CatalogLookup(self.catalog)
        removed = 0

        for entry in await self.unmapped.list_all_sorted_by_count():
            if await lookup.find_exact(entry.ai_name) is not None:
                reason = "exact match"
            elif await self._alias_target(entry.ai_name) is not None:
                reason = "alias match"
            else:
                continue

            logger.info("Cleanup: %r now resolves by %s", entry.ai_name, reason)
            await self.unmapped.delete_by_id(entry.id)
            removed += 1

        return removed

    async def _alias_target(self, ai_name: str) -> CatalogEntry | None:
        exercise_id = await self.aliases.find(normalize_name(ai_name))
        if exercise_id is None:
            return None
        target = await self.catalog.get(exercise_id)
        if target is None or not target.canonical_name:
            return None
        return target

    async def _require(self, entry_id: int) -> UnmappedEntry:
        entry = await self.unmapped.get(entry_id)
        if entry is None:
            raise NotFoundError(f"Unmapped exercise {entry_id} not found")
        return entry


def _guess_language(name: str) -> str:
    return "sv" if looks_localized(name) else "en"
