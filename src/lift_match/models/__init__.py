"""Data models for lift-match."""

from .equipment import UserEquipment
from .exercises import CatalogEntry, SEED_EXERCISES, UNKNOWN_TAG
from .matching import (
    AliasRecord,
    AliasSource,
    ExerciseMetadata,
    MatchConfidence,
    MatchResult,
    UnmappedEntry,
)

__all__ = [
    "AliasRecord",
    "AliasSource",
    "CatalogEntry",
    "ExerciseMetadata",
    "MatchConfidence",
    "MatchResult",
    "SEED_EXERCISES",
    "UNKNOWN_TAG",
    "UnmappedEntry",
    "UserEquipment",
]
