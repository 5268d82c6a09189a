"""Tests for equipment availability filtering."""

import pytest

from lift_match.matching.equipment_filter import bodyweight_exercises, filter_by_equipment
from lift_match.models.equipment import UserEquipment
from lift_match.models.exercises import UNKNOWN_TAG, CatalogEntry


@pytest.fixture
def catalog():
    return [
        CatalogEntry(localized_name="Bänkpress", canonical_name="Bench Press", required_equipment=["barbell", "bench"]),
        CatalogEntry(localized_name="Marklyft", canonical_name="Deadlift", required_equipment=["barbell"]),
        CatalogEntry(localized_name="Sidolyft", canonical_name="Lateral Raise", required_equipment=["dumbbells"]),
        CatalogEntry(localized_name="Chins", canonical_name="Pull Up", required_equipment=["Pull-up Bar"]),
        CatalogEntry(localized_name="Armhävning", canonical_name="Push Up"),
        CatalogEntry(localized_name="Plankan", canonical_name="Plank"),
        CatalogEntry(localized_name="Stolpdrag", required_equipment=[]),
        CatalogEntry(localized_name="Cable Woodchop", canonical_name="Cable Woodchop", required_equipment=[UNKNOWN_TAG]),
    ]


def names(entries):
    return [entry.display_name for entry in entries]


class TestFilterByEquipment:
    """Tests for filter_by_equipment."""

    def test_exact_key_match(self, catalog):
        """Test an entry passes only when every required tag is available."""
        result = filter_by_equipment(catalog, ["barbell"])

        assert "Deadlift" in names(result)
        assert "Bench Press" not in names(result)
        assert "Lateral Raise" not in names(result)

    def test_bodyweight_entries_always_pass(self, catalog):
        result = filter_by_equipment(catalog, ["barbell"])

        assert "Push Up" in names(result)
        assert "Plank" in names(result)

    def test_unknown_tag_always_passes(self, catalog):
        result = filter_by_equipment(catalog, ["dumbbells"])
        assert "Cable Woodchop" in names(result)

    def test_entries_without_english_name_are_excluded(self, catalog):
        result = filter_by_equipment(catalog, ["barbell", "bench", "dumbbells"])
        assert "Stolpdrag" not in names(result)

    def test_tags_are_normalized(self, catalog):
        """Test punctuation and case differences do not block a match."""
        result = filter_by_equipment(catalog, ["pull-up bar"])
        assert "Pull Up" in names(result)

    def test_key_substring_match(self, catalog):
        """Test a key containing the required tag satisfies it."""
        result = filter_by_equipment(catalog, ["adjustable dumbbells"])
        assert "Lateral Raise" in names(result)

    def test_equipment_name_match(self, catalog):
        """Test the display name is used when the key does not match."""
        available = [
            UserEquipment(user_id="u", gym_id="g", equipment_key="eq-1", equipment_name="Olympic Barbell"),
            UserEquipment(user_id="u", gym_id="g", equipment_key="eq-2", equipment_name="Flat Bench"),
        ]

        result = filter_by_equipment(catalog, available)

        assert "Bench Press" in names(result)
        assert "Deadlift" in names(result)

    def test_no_equipment_falls_back_to_bodyweight(self, catalog):
        result = filter_by_equipment(catalog, [])
        assert names(result) == ["Push Up", "Plank"]

    def test_bodyweight_fallback_when_nothing_matches(self):
        """Test zero matches returns the bodyweight set instead of nothing."""
        catalog = [
            CatalogEntry(localized_name="Marklyft", canonical_name="Deadlift", required_equipment=["barbell"]),
            CatalogEntry(localized_name="Armhävning", canonical_name="Push Up"),
        ]
        only_equipment = [catalog[0]]

        assert filter_by_equipment(only_equipment, ["kettlebell"]) == []
        assert names(filter_by_equipment(catalog, ["kettlebell"])) == ["Push Up"]

    def test_bodyweight_exercises(self, catalog):
        assert names(bodyweight_exercises(catalog)) == ["Push Up", "Plank"]
