"""Auto-expansion of the catalog with new English exercise names."""

import logging
from dataclasses import dataclass

from ..models.exercises import UNKNOWN_TAG, CatalogEntry
from ..models.matching import ExerciseMetadata
from ..utils.exercise_utils import normalize_name
from .heuristics import looks_like_id, looks_localized
from .stores import CatalogStore

logger = logging.getLogger(__name__)

REJECT_EMPTY = "Rejected: empty name"
REJECT_ID_STRING = "Rejected: Name is a UUID/ID string"
REJECT_NON_ENGLISH = "Rejected: non-English name (English-only policy)"
REJECT_NO_CANONICAL = "Rejected: catalog entry has no English name"
REJECT_INSERT_FAILED = "Rejected: catalog insert failed"


@dataclass
class ExpansionOutcome:
    """Result of an auto-expansion attempt.

    Exactly one of `entry` and `rejection` is set. `created` is False when
    an existing entry with the same name was returned instead.
    """

    entry: CatalogEntry | None = None
    rejection: str | None = None
    created: bool = False

    @property
    def accepted(self) -> bool:
        return self.entry is not None


class AutoExpansionGate:
    """Decide whether an unresolvable name is a real new exercise and add it."""

    def __init__(self, catalog: CatalogStore):
        self.catalog = catalog

    async def try_create(
        self, raw_name: str, metadata: ExerciseMetadata | None = None
    ) -> ExpansionOutcome:
        name = (raw_name or "").strip()

        if not normalize_name(name):
            logger.warning("[AUTO-EXPAND] Rejected empty exercise name")
            return ExpansionOutcome(rejection=REJECT_EMPTY)

        if looks_like_id(name):
            logger.warning("[AUTO-EXPAND] Rejected ID-like exercise name: %s", name)
            return ExpansionOutcome(rejection=REJECT_ID_STRING)

        existing = await self._find_same_name(name)
        if existing is not None:
            if not existing.canonical_name:
                logger.warning("[AUTO-EXPAND] Rejected name of exercise without English name: %s", name)
                return ExpansionOutcome(rejection=REJECT_NO_CANONICAL)
            return ExpansionOutcome(entry=existing)

        if looks_localized(name):
            logger.warning("[AUTO-EXPAND] Rejected Swedish exercise name: %s", name)
            return ExpansionOutcome(rejection=REJECT_NON_ENGLISH)

        meta = metadata or ExerciseMetadata()
        entry = CatalogEntry(
            localized_name=name,
            canonical_name=name,
            category=meta.category or "strength",
            difficulty=meta.difficulty or "intermediate",
            primary_muscles=meta.primary_muscles or [UNKNOWN_TAG],
            secondary_muscles=meta.secondary_muscles or [],
            required_equipment=meta.equipment or [UNKNOWN_TAG],
        )

        try:
            await self.catalog.insert(entry)
        except Exception:
            # A concurrent caller may have created it first
            existing = await self.catalog.find_by_exact_name(name)
            if existing is not None:
                return ExpansionOutcome(entry=existing)
            logger.exception("[AUTO-EXPAND] Failed to create exercise %r", name)
            return ExpansionOutcome(rejection=REJECT_INSERT_FAILED)

        logger.info(
            "[AUTO-EXPAND] Created new exercise: %s", name,
            extra={"match_raw_name": raw_name, "match_exercise_id": entry.id},
        )
        return ExpansionOutcome(entry=entry, created=True)

    async def _find_same_name(self, name: str) -> CatalogEntry | None:
        """Any entry, English-named or not, whose name normalizes like `name`."""
        key = normalize_name(name)
        for field in ("canonical_name", "localized_name"):
            entry = await self.catalog.find_by_normalized_name(key, field=field, english_only=False)
            if entry is not None:
                return entry
        return None
