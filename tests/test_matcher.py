"""Tests for the cascading exercise matcher."""

import aiosqlite
import pytest

from lift_match.db.repositories import (
    ExerciseAliasRepository,
    ExerciseRepository,
    UnmappedExerciseRepository,
)
from lift_match.matching.aliases import StaticAliasTable
from lift_match.matching.expansion import REJECT_ID_STRING, REJECT_NO_CANONICAL, REJECT_NON_ENGLISH
from lift_match.matching.matcher import ExerciseMatcher
from lift_match.models.exercises import UNKNOWN_TAG
from lift_match.models.matching import AliasSource, ExerciseMetadata, MatchConfidence


class FailingAliasRepository(ExerciseAliasRepository):
    async def save(self, *args, **kwargs):
        raise aiosqlite.OperationalError("database is locked")


class FailingUnmappedRepository(UnmappedExerciseRepository):
    async def upsert_with_increment(self, *args, **kwargs):
        raise aiosqlite.OperationalError("database is locked")


@pytest.mark.asyncio
class TestExactMatch:
    """Tests for the exact-match stage."""

    async def test_matches_by_external_id(self, services):
        result = await services.matcher.match_exercise("deadlift")

        assert result.matched
        assert result.confidence == MatchConfidence.EXACT
        assert result.exercise_name == "Deadlift"

    async def test_matches_by_internal_id_without_alias(self, services):
        """Test an ID lookup never records an alias."""
        entry = await services.exercises.find_by_exact_name("Lateral Raise")

        result = await services.matcher.match_exercise(entry.id)

        assert result.confidence == MatchConfidence.EXACT
        assert result.exercise_id == entry.id
        assert await services.aliases.list_all() == []

    async def test_matches_localized_name(self, services):
        result = await services.matcher.match_exercise("Marklyft")

        assert result.confidence == MatchConfidence.EXACT
        assert result.exercise_name == "Deadlift"

    async def test_formatting_drift_records_alias(self, services):
        """Test a case/punctuation variant is remembered as an alias."""
        result = await services.matcher.match_exercise("BARBELL BENCH PRESS.")

        assert result.confidence == MatchConfidence.EXACT
        aliases = await services.aliases.list_for_exercise(result.exercise_id)
        assert [a.raw_name for a in aliases] == ["BARBELL BENCH PRESS."]
        assert aliases[0].source == AliasSource.EXACT_VARIANT

    async def test_identical_name_records_no_alias(self, services):
        result = await services.matcher.match_exercise("Deadlift")

        assert result.confidence == MatchConfidence.EXACT
        assert await services.aliases.list_all() == []

    async def test_exact_short_circuits_fuzzy(self, services, monkeypatch):
        """Test fuzzy matching never runs when an exact match exists."""

        async def fail(*args, **kwargs):
            raise AssertionError("fuzzy matcher should not run")

        monkeypatch.setattr(services.matcher.fuzzy, "find_fuzzy", fail)

        result = await services.matcher.match_exercise("Push Up")

        assert result.confidence == MatchConfidence.EXACT

    async def test_entry_without_english_name_is_invisible(self, strict_services):
        """Test a localized-only entry is not found by ID, name or drifted name."""
        for name in ("stolpdrag", "Stolpdrag", "STOLPDRAG!"):
            result = await strict_services.matcher.match_exercise(name)

            assert not result.matched
            assert result.exercise_name is None

        assert await strict_services.aliases.list_all() == []


@pytest.mark.asyncio
class TestAliasMatch:
    """Tests for persistent and static alias stages."""

    async def test_persistent_alias(self, services):
        target = await services.exercises.find_by_exact_name("Deadlift")
        await services.aliases.save(target.id, "Conventional Pull")

        result = await services.matcher.match_exercise("conventional pull!")

        assert result.confidence == MatchConfidence.ALIAS
        assert result.exercise_id == target.id

    async def test_alias_to_deleted_entry_is_a_miss(self, strict_services):
        target = await strict_services.exercises.find_by_exact_name("Deadlift")
        await strict_services.aliases.save(target.id, "Conventional Pull")
        await strict_services.exercises.delete(target.id)

        result = await strict_services.matcher.match_exercise("Conventional Pull")

        assert not result.matched

    async def test_alias_to_entry_without_english_name_is_a_miss(self, strict_services):
        target = await strict_services.exercises.find_by_id("stolpdrag")
        await strict_services.aliases.save(target.id, "Pillar Pulldown Variation")

        result = await strict_services.matcher.match_exercise("Pillar Pulldown Variation")

        assert not result.matched

    async def test_static_alias_records_persistent_alias(self, db_path):
        """Test a static hit is written back and then served from the store."""
        catalog, aliases, unmapped = _repos(db_path)
        matcher = ExerciseMatcher(
            catalog=catalog,
            aliases=aliases,
            unmapped=unmapped,
            static_aliases=StaticAliasTable({"Lateral Raise": ["side raise", "sidan lyft"]}),
        )

        first = await matcher.match_exercise("Side Raise")
        assert first.confidence == MatchConfidence.ALIAS
        assert first.exercise_name == "Lateral Raise"

        records = await matcher.aliases.list_all()
        assert [(r.normalized_key, r.source) for r in records] == [
            ("side raise", AliasSource.STATIC_ALIAS)
        ]

        matcher.static_aliases = StaticAliasTable({})
        second = await matcher.match_exercise("side raise")
        assert second.confidence == MatchConfidence.ALIAS
        assert second.exercise_id == first.exercise_id

    async def test_static_alias_target_missing_from_catalog(self, strict_services):
        """Test a static alias whose canonical name is not catalogued falls through."""
        result = await strict_services.matcher.match_exercise("Knäböj")

        assert not result.matched


@pytest.mark.asyncio
class TestFuzzyMatch:
    """Tests for the fuzzy stage."""

    async def test_distance_five_matches(self, services):
        result = await services.matcher.match_exercise("dxxxxxft")

        assert result.confidence == MatchConfidence.FUZZY
        assert result.exercise_name == "Deadlift"
        assert result.distance == 5

    async def test_distance_six_does_not_match(self, strict_services):
        result = await strict_services.matcher.match_exercise("dxxxxxxt")

        assert not result.matched
        assert result.distance is None

    async def test_custom_threshold(self, db_path):
        catalog, aliases, unmapped = _repos(db_path)
        matcher = ExerciseMatcher(catalog, aliases, unmapped, fuzzy_threshold=1, auto_expand=False)

        assert (await matcher.match_exercise("Deadlyft")).confidence == MatchConfidence.FUZZY
        assert not (await matcher.match_exercise("Dedlyft")).matched

    async def test_alias_learning(self, services):
        """Test the second lookup is served from the alias store."""
        first = await services.matcher.match_exercise("Lateral Raises")
        assert first.confidence == MatchConfidence.FUZZY
        assert first.distance == 1

        second = await services.matcher.match_exercise("Lateral Raises")
        assert second.confidence == MatchConfidence.ALIAS
        assert second.exercise_id == first.exercise_id

        records = await services.aliases.list_for_exercise(first.exercise_id)
        assert records[0].source == AliasSource.FUZZY

    async def test_alias_store_failure_is_swallowed(self, db_path):
        catalog, _, unmapped = _repos(db_path)
        matcher = ExerciseMatcher(catalog, FailingAliasRepository(db_path), unmapped)

        result = await matcher.match_exercise("Lateral Raises")

        assert result.confidence == MatchConfidence.FUZZY


@pytest.mark.asyncio
class TestAutoExpansion:
    """Tests for catalog auto-expansion and the unmapped queue."""

    async def test_creates_english_exercise(self, services):
        meta = ExerciseMetadata(category="core", equipment=["cable machine"], primary_muscles=["obliques"])

        result = await services.matcher.match_exercise("Cable Woodchop", meta)

        assert result.matched
        assert result.confidence == MatchConfidence.NONE
        created = await services.exercises.get(result.exercise_id)
        assert created.canonical_name == created.localized_name == "Cable Woodchop"
        assert created.category == "core"
        assert created.required_equipment == ["cable machine"]

        again = await services.matcher.match_exercise("Cable Woodchop")
        assert again.confidence == MatchConfidence.EXACT
        assert again.exercise_id == result.exercise_id

    async def test_placeholders_without_metadata(self, services):
        result = await services.matcher.match_exercise("Turkish Get-Up Complex Flow")

        created = await services.exercises.get(result.exercise_id)
        assert created.primary_muscles == [UNKNOWN_TAG]
        assert created.required_equipment == [UNKNOWN_TAG]
        assert created.difficulty == "intermediate"

    async def test_uuid_is_rejected(self, services):
        result = await services.matcher.match_exercise("550e8400-e29b-41d4-a716-446655440000")

        assert not result.matched
        pending = await services.unmapped.list_all_sorted_by_count()
        assert [p.suggested_match for p in pending] == [REJECT_ID_STRING]

    async def test_swedish_name_is_rejected(self, services):
        """Test the English-only policy keeps Swedish names out of the catalog."""
        before = len(await services.exercises.list_all())

        result = await services.matcher.match_exercise("Knäböj")

        assert not result.matched
        assert len(await services.exercises.list_all()) == before
        entry = await services.unmapped.find_by_raw_name("Knäböj")
        assert entry.suggested_match == REJECT_NON_ENGLISH

    async def test_unmapped_count_accumulates(self, services):
        for _ in range(3):
            result = await services.matcher.match_exercise("Knäböj")
            assert not result.matched

        entry = await services.unmapped.find_by_raw_name("Knäböj")
        assert entry.occurrence_count == 3

    async def test_disabled_expansion_queues_name(self, strict_services):
        meta = ExerciseMetadata(category="core")

        result = await strict_services.matcher.match_exercise("Cable Woodchop", meta)

        assert not result.matched
        entry = await strict_services.unmapped.find_by_raw_name("Cable Woodchop")
        assert entry.suggested_match is None
        assert entry.metadata.category == "core"

    async def test_blank_name_is_not_queued(self, services):
        result = await services.matcher.match_exercise("   ")

        assert not result.matched
        assert await services.unmapped.list_all_sorted_by_count() == []

    async def test_punctuation_only_name_is_rejected(self, services):
        """Test names that normalize to nothing never enter the catalog."""
        before = await services.exercises.list_all()

        for name in ("!!!", "???", " - "):
            result = await services.matcher.match_exercise(name)
            assert not result.matched

        assert await services.exercises.list_all() == before
        assert await services.unmapped.list_all_sorted_by_count() == []

    async def test_short_name_does_not_fuzzy_match_junk(self, services):
        await services.matcher.match_exercise("!!!")

        result = await services.matcher.match_exercise("Pogo")

        assert result.confidence == MatchConfidence.NONE
        assert result.exercise_name == "Pogo"

    async def test_name_of_entry_without_english_name_is_not_expanded(self, services):
        """Test a localized-only catalog name is queued instead of added again."""
        before = len(await services.exercises.list_all())

        result = await services.matcher.match_exercise("stolpdrag.")

        assert not result.matched
        assert len(await services.exercises.list_all()) == before
        entry = await services.unmapped.find_by_raw_name("stolpdrag.")
        assert entry.suggested_match == REJECT_NO_CANONICAL

    async def test_unmapped_store_failure_is_swallowed(self, db_path):
        catalog, aliases, _ = _repos(db_path)
        matcher = ExerciseMatcher(catalog, aliases, FailingUnmappedRepository(db_path))

        result = await matcher.match_exercise("Knäböj")

        assert not result.matched


@pytest.mark.asyncio
class TestMatchMany:
    """Tests for matching a list of names."""

    async def test_preserves_order(self, services):
        results = await services.matcher.match_many(["Marklyft", "Knäböj", "Push Up"])

        assert [r.matched for r in results] == [True, False, True]
        assert results[0].exercise_name == "Deadlift"
        assert results[2].exercise_name == "Push Up"

    async def test_metadata_must_line_up(self, services):
        with pytest.raises(ValueError):
            await services.matcher.match_many(["Deadlift"], [None, None])


def _repos(db_path):
    return (
        ExerciseRepository(db_path),
        ExerciseAliasRepository(db_path),
        UnmappedExerciseRepository(db_path),
    )
