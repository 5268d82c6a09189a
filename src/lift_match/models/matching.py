"""Match results, aliases and review-queue records."""

from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum


class MatchConfidence(str, Enum):
    """Stage that produced a match.

    NONE is also reported for auto-created entries, meaning the name was
    matched through creation rather than recognition.
    """

    EXACT = "exact"
    ALIAS = "alias"
    FUZZY = "fuzzy"
    NONE = "none"


class AliasSource(str, Enum):
    """Provenance of an alias record."""

    EXACT_VARIANT = "exact_variant"
    STATIC_ALIAS = "static_alias"
    FUZZY = "fuzzy"
    AUTO_EXPAND = "auto_expand"
    ADMIN = "admin"
    SEED = "seed"


@dataclass
class ExerciseMetadata:
    """Optional hints supplied alongside a raw name, typically by the LLM."""

    category: str | None = None
    equipment: list[str] | None = None
    primary_muscles: list[str] | None = None
    secondary_muscles: list[str] | None = None
    difficulty: str | None = None

    def is_empty(self) -> bool:
        return all(getattr(self, f.name) in (None, []) for f in fields(self))

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: dict | None) -> "ExerciseMetadata":
        """Build from a loose dict, ignoring unknown keys.

        A single equipment string is accepted and wrapped in a list.
        """
        if not data:
            return cls()
        equipment = data.get("equipment")
        if isinstance(equipment, str):
            equipment = [equipment]
        return cls(
            category=data.get("category") or None,
            equipment=equipment or None,
            primary_muscles=data.get("primary_muscles") or None,
            secondary_muscles=data.get("secondary_muscles") or None,
            difficulty=data.get("difficulty") or None,
        )


@dataclass
class MatchResult:
    """Outcome of resolving one raw exercise name."""

    matched: bool
    confidence: MatchConfidence
    exercise_name: str | None = None
    exercise_id: str | None = None
    distance: int | None = None

    @classmethod
    def unmatched(cls) -> "MatchResult":
        return cls(matched=False, confidence=MatchConfidence.NONE)

    def to_dict(self) -> dict:
        data = {
            "matched": self.matched,
            "exercise_name": self.exercise_name,
            "exercise_id": self.exercise_id,
            "confidence": self.confidence.value,
        }
        if self.distance is not None:
            data["distance"] = self.distance
        return data


@dataclass
class AliasRecord:
    """A learned mapping from a raw name to a catalog entry."""

    raw_name: str
    normalized_key: str
    target_exercise_id: str
    language: str = "en"
    source: AliasSource = AliasSource.SEED
    id: int | None = None
    created_at: datetime | None = None


@dataclass
class UnmappedEntry:
    """A raw name that no stage could resolve, queued for human review."""

    ai_name: str
    suggested_match: str | None = None
    occurrence_count: int = 1
    metadata: ExerciseMetadata = field(default_factory=ExerciseMetadata)
    first_seen_at: datetime | None = None
    last_seen_at: datetime | None = None
    id: int | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "ai_name": self.ai_name,
            "suggested_match": self.suggested_match,
            "occurrence_count": self.occurrence_count,
            "metadata": self.metadata.to_dict(),
            "first_seen_at": self.first_seen_at.isoformat() if self.first_seen_at else None,
            "last_seen_at": self.last_seen_at.isoformat() if self.last_seen_at else None,
        }
