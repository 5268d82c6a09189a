"""Database layer for lift-match."""

from .engine import get_db_path, init_db, seed_catalog
from .repositories import (
    ExerciseAliasRepository,
    ExerciseRepository,
    UnmappedExerciseRepository,
    UserEquipmentRepository,
)

__all__ = [
    "ExerciseAliasRepository",
    "ExerciseRepository",
    "get_db_path",
    "init_db",
    "seed_catalog",
    "UnmappedExerciseRepository",
    "UserEquipmentRepository",
]
