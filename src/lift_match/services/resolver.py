"""Build the matcher, review queue and equipment resolver from a Config."""

from dataclasses import dataclass
from pathlib import Path

from ..config import Config
from ..db.repositories import (
    ExerciseAliasRepository,
    ExerciseRepository,
    UnmappedExerciseRepository,
    UserEquipmentRepository,
)
from ..matching.aliases import StaticAliasTable
from ..matching.equipment_filter import EquipmentResolver
from ..matching.matcher import ExerciseMatcher
from ..matching.review_queue import UnmappedReviewQueue


@dataclass
class ResolverServices:
    """Repositories and the components built on top of them."""

    exercises: ExerciseRepository
    aliases: ExerciseAliasRepository
    unmapped: UnmappedExerciseRepository
    equipment: UserEquipmentRepository
    matcher: ExerciseMatcher
    review_queue: UnmappedReviewQueue
    equipment_resolver: EquipmentResolver


def build_services(
    config: Config | None = None,
    db_path: Path | None = None,
    static_aliases: StaticAliasTable | None = None,
) -> ResolverServices:
    """Create every component against one SQLite database.

    `db_path` overrides the path derived from `config.data_dir`.
    """
    config = config or Config.from_env()
    db_path = db_path or config.db_path

    exercises = ExerciseRepository(db_path)
    aliases = ExerciseAliasRepository(db_path)
    unmapped = UnmappedExerciseRepository(db_path)
    equipment = UserEquipmentRepository(db_path)

    matcher = ExerciseMatcher(
        catalog=exercises,
        aliases=aliases,
        unmapped=unmapped,
        static_aliases=static_aliases or StaticAliasTable(),
        fuzzy_threshold=config.fuzzy_threshold,
        auto_expand=config.auto_expand,
    )

    return ResolverServices(
        exercises=exercises,
        aliases=aliases,
        unmapped=unmapped,
        equipment=equipment,
        matcher=matcher,
        review_queue=matcher.review_queue,
        equipment_resolver=EquipmentResolver(exercises, equipment),
    )
