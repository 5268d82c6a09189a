"""Cascading resolution of AI-generated exercise names."""

import logging
from enum import Enum

from ..config import DEFAULT_FUZZY_THRESHOLD
from ..models.exercises import CatalogEntry
from ..models.matching import AliasSource, ExerciseMetadata, MatchConfidence, MatchResult
from ..utils.exercise_utils import normalize_name
from .aliases import StaticAliasTable
from .catalog_lookup import CatalogLookup
from .expansion import AutoExpansionGate
from .fuzzy import FuzzyMatcher
from .heuristics import looks_localized
from .review_queue import UnmappedReviewQueue
from .stores import AliasStore, CatalogStore, UnmappedStore

logger = logging.getLogger(__name__)


class MatchStage(str, Enum):
    """Stages a request passes through, in order."""

    START = "start"
    EXACT_TRIED = "exact_tried"
    ALIAS_TRIED = "alias_tried"
    FUZZY_TRIED = "fuzzy_tried"
    EXPANSION_TRIED = "expansion_tried"
    TERMINAL = "terminal"


class ExerciseMatcher:
    """Map a raw exercise name onto the catalog.

    Stages run strictly in order and stop at the first success:
    exact lookup, stored alias, static alias table, fuzzy match,
    auto-expansion, and finally the unmapped review queue.

    Non-exact successes are written back to the alias store so the same
    raw string resolves from the store next time. Alias and review-queue
    writes are best-effort: failures are logged and never change the
    returned result.
    """

    def __init__(
        self,
        catalog: CatalogStore,
        aliases: AliasStore,
        unmapped: UnmappedStore,
        static_aliases: StaticAliasTable | None = None,
        fuzzy_threshold: int = DEFAULT_FUZZY_THRESHOLD,
        auto_expand: bool = True,
    ):
        self.catalog = catalog
        self.aliases = aliases
        self.static_aliases = static_aliases if static_aliases is not None else StaticAliasTable()
        self.lookup = CatalogLookup(catalog)
        self.fuzzy = FuzzyMatcher(catalog, threshold=fuzzy_threshold)
        self.expansion = AutoExpansionGate(catalog) if auto_expand else None
        self.review_queue = UnmappedReviewQueue(unmapped, catalog, aliases)

    async def match_exercise(
        self, raw_name: str, metadata: ExerciseMetadata | None = None
    ) -> MatchResult:
        """Resolve one raw name. Never raises for policy rejections."""
        raw_name = raw_name or ""
        normalized = normalize_name(raw_name)
        stage = MatchStage.START

        exact = await self.lookup.find_exact(raw_name)
        if exact is not None:
            if exact.formatting_drift:
                await self._remember(exact.entry, raw_name, AliasSource.EXACT_VARIANT)
            return self._result(exact.entry, MatchConfidence.EXACT, stage)
        stage = MatchStage.EXACT_TRIED

        entry = await self._find_by_stored_alias(normalized)
        if entry is not None:
            return self._result(entry, MatchConfidence.ALIAS, stage)

        entry = await self._find_by_static_alias(raw_name)
        if entry is not None:
            await self._remember(entry, raw_name, AliasSource.STATIC_ALIAS)
            return self._result(entry, MatchConfidence.ALIAS, stage)
        stage = MatchStage.ALIAS_TRIED

        fuzzy = await self.fuzzy.find_fuzzy(raw_name)
        if fuzzy is not None:
            await self._remember(fuzzy.entry, raw_name, AliasSource.FUZZY)
            return self._result(fuzzy.entry, MatchConfidence.FUZZY, stage, distance=fuzzy.distance)
        stage = MatchStage.FUZZY_TRIED

        rejection = None
        if self.expansion is not None:
            outcome = await self.expansion.try_create(raw_name, metadata)
            if outcome.accepted:
                if outcome.created and raw_name != outcome.entry.canonical_name:
                    await self._remember(outcome.entry, raw_name, AliasSource.AUTO_EXPAND)
                return self._result(outcome.entry, MatchConfidence.NONE, stage)
            rejection = outcome.rejection
        stage = MatchStage.EXPANSION_TRIED

        if normalized:
            await self.review_queue.record(raw_name, suggested_match=rejection, metadata=metadata)
        logger.warning(
            "No match for exercise %r (%s)", raw_name, rejection or "auto-expansion disabled",
            extra={"match_raw_name": raw_name, "match_stage": MatchStage.TERMINAL.value},
        )
        return MatchResult.unmatched()

    async def match_many(
        self, names: list[str], metadata: list[ExerciseMetadata | None] | None = None
    ) -> list[MatchResult]:
        """Resolve a plan's exercise names in order."""
        metadata = metadata or [None] * len(names)
        if len(metadata) != len(names):
            raise ValueError("metadata must line up with names")
        return [await self.match_exercise(name, meta) for name, meta in zip(names, metadata)]

    async def _find_by_stored_alias(self, normalized: str) -> CatalogEntry | None:
        if not normalized:
            return None
        exercise_id = await self.aliases.find(normalized)
        if exercise_id is None:
            return None
        entry = await self.catalog.get(exercise_id)
        if entry is None:
            logger.warning("Alias %r points at missing exercise %s", normalized, exercise_id)
            return None
        if not entry.canonical_name:
            logger.warning("Alias %r points at exercise %s with no English name", normalized, exercise_id)
            return None
        return entry

    async def _find_by_static_alias(self, raw_name: str) -> CatalogEntry | None:
        canonical = self.static_aliases.lookup(raw_name)
        if canonical is None:
            return None
        entry = await self.catalog.find_by_normalized_name(normalize_name(canonical))
        if entry is None:
            logger.debug("Static alias target %r is not in the catalog", canonical)
        return entry

    async def _remember(self, entry: CatalogEntry, raw_name: str, source: AliasSource) -> None:
        language = "sv" if looks_localized(raw_name) else "en"
        try:
            await self.aliases.save(entry.id, raw_name, language=language, source=source)
        except Exception:
            logger.exception("Failed to save alias %r -> %s", raw_name, entry.id)

    def _result(
        self,
        entry: CatalogEntry,
        confidence: MatchConfidence,
        stage: MatchStage,
        distance: int | None = None,
    ) -> MatchResult:
        logger.debug(
            "Matched after %s via %s: %s", stage.value, confidence.value, entry.display_name,
            extra={"match_exercise_id": entry.id, "match_confidence": confidence.value},
        )
        return MatchResult(
            matched=True,
            confidence=confidence,
            exercise_name=entry.display_name,
            exercise_id=entry.id,
            distance=distance,
        )
