"""Exercise name matching and equipment filtering."""

from .aliases import DEFAULT_EXERCISE_ALIASES, StaticAliasTable
from .catalog_lookup import CatalogLookup, ExactHit
from .equipment_filter import (
    EquipmentResolver,
    bodyweight_exercises,
    filter_by_equipment,
)
from .expansion import AutoExpansionGate, ExpansionOutcome
from .fuzzy import FuzzyHit, FuzzyMatcher
from .matcher import ExerciseMatcher, MatchStage
from .review_queue import UnmappedReviewQueue
from .stores import AliasStore, CatalogStore, EquipmentStore, UnmappedStore

__all__ = [
    "AliasStore",
    "AutoExpansionGate",
    "bodyweight_exercises",
    "CatalogLookup",
    "CatalogStore",
    "DEFAULT_EXERCISE_ALIASES",
    "EquipmentResolver",
    "EquipmentStore",
    "ExactHit",
    "ExerciseMatcher",
    "ExpansionOutcome",
    "filter_by_equipment",
    "FuzzyHit",
    "FuzzyMatcher",
    "MatchStage",
    "StaticAliasTable",
    "UnmappedReviewQueue",
    "UnmappedStore",
]
