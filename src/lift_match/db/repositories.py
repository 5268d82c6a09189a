"""Data access layer for lift-match."""

import json
from datetime import datetime
from pathlib import Path

import aiosqlite

from ..errors import NotFoundError
from ..models.equipment import UserEquipment
from ..models.exercises import CatalogEntry
from ..models.matching import AliasRecord, AliasSource, ExerciseMetadata, UnmappedEntry
from ..utils.exercise_utils import normalize_name
from .engine import get_db_path


def _loads_list(value: str | None) -> list[str] | None:
    if value is None:
        return None
    return json.loads(value)


def _dumps_list(value: list[str] | None) -> str | None:
    if value is None:
        return None
    return json.dumps(value)


def _parse_timestamp(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


class ExerciseRepository:
    """Repository for the exercise catalog."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def get(self, exercise_id: str) -> CatalogEntry | None:
        """Get an exercise by internal ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM exercises WHERE id = ?", (exercise_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_entry(row)

    async def find_by_id(self, key: str) -> CatalogEntry | None:
        """Get an exercise whose external ID or internal ID equals `key` verbatim."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM exercises
                WHERE external_id = ? OR id = ?
                ORDER BY CASE WHEN external_id = ? THEN 0 ELSE 1 END, rowid
                LIMIT 1
                """,
                (key, key, key),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_entry(row)

    async def find_by_exact_name(self, name: str) -> CatalogEntry | None:
        """Get an exercise whose canonical or localized name is exactly `name`."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                """
                SELECT * FROM exercises
                WHERE canonical_name = ? OR localized_name = ?
                ORDER BY rowid
                LIMIT 1
                """,
                (name, name),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_entry(row)

    async def find_by_normalized_name(
        self, normalized_key: str, field: str = "canonical_name", english_only: bool = True
    ) -> CatalogEntry | None:
        """Get the first exercise whose normalized `field` equals the key.

        With `english_only`, entries without a canonical name are skipped.
        """
        if field not in ("canonical_name", "localized_name"):
            raise ValueError(f"Cannot match on field {field!r}")
        if not normalized_key:
            return None

        async with aiosqlite.connect(self.db_path) as db:
            await db.create_function("normalize_name", 1, normalize_name, deterministic=True)
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                f"""
                SELECT * FROM exercises
                WHERE {field} IS NOT NULL AND normalize_name({field}) = ?
                  AND (? = 0 OR canonical_name IS NOT NULL)
                ORDER BY rowid
                LIMIT 1
                """,
                (normalized_key, int(english_only)),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_entry(row)

    async def find_all_with_canonical_name(self) -> list[CatalogEntry]:
        """List exercises that have an English name, in insertion order."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM exercises WHERE canonical_name IS NOT NULL ORDER BY rowid"
            )
            rows = await cursor.fetchall()
            return [self._row_to_entry(row) for row in rows]

    async def list_all(self) -> list[CatalogEntry]:
        """List all exercises in insertion order."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM exercises ORDER BY rowid")
            rows = await cursor.fetchall()
            return [self._row_to_entry(row) for row in rows]

    async def insert(self, entry: CatalogEntry) -> CatalogEntry:
        """Add a new exercise.

        Raises aiosqlite.IntegrityError when the name or external ID is taken.
        """
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO exercises
                (id, external_id, localized_name, canonical_name, primary_muscles,
                 secondary_muscles, required_equipment, category, difficulty,
                 is_compound, instructions, youtube_url)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    entry.id,
                    entry.external_id,
                    entry.localized_name,
                    entry.canonical_name,
                    json.dumps(entry.primary_muscles),
                    json.dumps(entry.secondary_muscles),
                    json.dumps(entry.required_equipment),
                    entry.category,
                    entry.difficulty,
                    1 if entry.is_compound else 0,
                    entry.instructions,
                    entry.youtube_url,
                ),
            )
            await db.commit()
        return entry

    async def update(self, entry: CatalogEntry) -> None:
        """Update an existing exercise."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                UPDATE exercises SET
                    external_id = ?, localized_name = ?, canonical_name = ?,
                    primary_muscles = ?, secondary_muscles = ?, required_equipment = ?,
                    category = ?, difficulty = ?, is_compound = ?,
                    instructions = ?, youtube_url = ?
                WHERE id = ?
                """,
                (
                    entry.external_id,
                    entry.localized_name,
                    entry.canonical_name,
                    json.dumps(entry.primary_muscles),
                    json.dumps(entry.secondary_muscles),
                    json.dumps(entry.required_equipment),
                    entry.category,
                    entry.difficulty,
                    1 if entry.is_compound else 0,
                    entry.instructions,
                    entry.youtube_url,
                    entry.id,
                ),
            )
            await db.commit()
            if cursor.rowcount == 0:
                raise NotFoundError(f"Exercise {entry.id} not found")

    async def delete(self, exercise_id: str) -> None:
        """Delete an exercise."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("DELETE FROM exercises WHERE id = ?", (exercise_id,))
            await db.commit()

    async def merge(self, source_id: str, target_id: str) -> None:
        """Fold `source_id` into `target_id`: move its aliases, then delete it."""
        source = await self.get(source_id)
        target = await self.get(target_id)
        if source is None or target is None:
            raise NotFoundError("Source or target exercise not found")

        async with aiosqlite.connect(self.db_path) as db:
            # Drop source aliases the target already owns, then move the rest
            await db.execute(
                """
                DELETE FROM exercise_aliases
                WHERE exercise_id = ? AND alias_norm IN (
                    SELECT alias_norm FROM exercise_aliases WHERE exercise_id = ?
                )
                """,
                (source_id, target_id),
            )
            await db.execute(
                "UPDATE exercise_aliases SET exercise_id = ? WHERE exercise_id = ?",
                (target_id, source_id),
            )
            await db.execute("DELETE FROM exercises WHERE id = ?", (source_id,))
            await db.commit()

    def _row_to_entry(self, row: aiosqlite.Row) -> CatalogEntry:
        """Convert a database row to a CatalogEntry."""
        return CatalogEntry(
            id=row["id"],
            external_id=row["external_id"],
            localized_name=row["localized_name"],
            canonical_name=row["canonical_name"],
            primary_muscles=json.loads(row["primary_muscles"]),
            secondary_muscles=json.loads(row["secondary_muscles"]),
            required_equipment=json.loads(row["required_equipment"]),
            category=row["category"],
            difficulty=row["difficulty"],
            is_compound=bool(row["is_compound"]),
            instructions=row["instructions"],
            youtube_url=row["youtube_url"],
        )


class ExerciseAliasRepository:
    """Repository for learned exercise aliases."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def find(self, normalized_key: str) -> str | None:
        """Return the target exercise ID for a normalized key, oldest alias first."""
        if not normalized_key:
            return None
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT exercise_id FROM exercise_aliases WHERE alias_norm = ? ORDER BY id LIMIT 1",
                (normalized_key,),
            )
            row = await cursor.fetchone()
            return row[0] if row else None

    async def save(
        self,
        target_exercise_id: str,
        raw_name: str,
        language: str = "en",
        source: AliasSource = AliasSource.SEED,
    ) -> bool:
        """Insert an alias unless the same key already points at the target.

        Returns True if a new row was written.
        """
        normalized_key = normalize_name(raw_name)
        if not normalized_key:
            return False

        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT OR IGNORE INTO exercise_aliases
                (exercise_id, alias, alias_norm, lang, source)
                VALUES (?, ?, ?, ?, ?)
                """,
                (target_exercise_id, raw_name, normalized_key, language, AliasSource(source).value),
            )
            await db.commit()
            return cursor.rowcount > 0

    async def create_admin_alias(
        self, target_exercise_id: str, raw_name: str, language: str = "sv"
    ) -> AliasRecord:
        """Point a name at an exercise, replacing any existing target for its key."""
        normalized_key = normalize_name(raw_name)
        if not normalized_key:
            raise ValueError("Alias must contain at least one letter or digit")

        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                "DELETE FROM exercise_aliases WHERE alias_norm = ? AND exercise_id != ?",
                (normalized_key, target_exercise_id),
            )
            await db.execute(
                """
                INSERT INTO exercise_aliases (exercise_id, alias, alias_norm, lang, source)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT (alias_norm, exercise_id) DO UPDATE SET
                    alias = excluded.alias, lang = excluded.lang, source = excluded.source
                """,
                (target_exercise_id, raw_name, normalized_key, language, AliasSource.ADMIN.value),
            )
            await db.commit()

        records = await self.list_for_exercise(target_exercise_id)
        return next(r for r in records if r.normalized_key == normalized_key)

    async def list_for_exercise(self, exercise_id: str) -> list[AliasRecord]:
        """List all aliases pointing at an exercise."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM exercise_aliases WHERE exercise_id = ? ORDER BY id",
                (exercise_id,),
            )
            rows = await cursor.fetchall()
            return [self._row_to_alias(row) for row in rows]

    async def list_all(self) -> list[AliasRecord]:
        """List all aliases."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute("SELECT * FROM exercise_aliases ORDER BY id")
            rows = await cursor.fetchall()
            return [self._row_to_alias(row) for row in rows]

    async def delete(self, alias_id: int) -> None:
        """Delete an alias."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute("DELETE FROM exercise_aliases WHERE id = ?", (alias_id,))
            await db.commit()
            if cursor.rowcount == 0:
                raise NotFoundError(f"Alias {alias_id} not found")

    def _row_to_alias(self, row: aiosqlite.Row) -> AliasRecord:
        """Convert a database row to an AliasRecord."""
        return AliasRecord(
            id=row["id"],
            raw_name=row["alias"],
            normalized_key=row["alias_norm"],
            target_exercise_id=row["exercise_id"],
            language=row["lang"],
            source=AliasSource(row["source"]),
            created_at=_parse_timestamp(row["created_at"]),
        )


class UnmappedExerciseRepository:
    """Repository for the unmapped-exercise review queue."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def find_by_raw_name(self, ai_name: str) -> UnmappedEntry | None:
        """Get a queued entry by its exact raw name."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM unmapped_exercises WHERE ai_name = ?", (ai_name,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_entry(row)

    async def get(self, entry_id: int) -> UnmappedEntry | None:
        """Get a queued entry by ID."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM unmapped_exercises WHERE id = ?", (entry_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_entry(row)

    async def upsert_with_increment(
        self,
        ai_name: str,
        suggested_match: str | None = None,
        metadata: ExerciseMetadata | None = None,
        seen_at: datetime | None = None,
    ) -> None:
        """Insert with count 1, or bump the count of an existing row.

        On repeat sightings only fields that are still NULL are filled in.
        Two concurrent first sightings collapse into one row via the
        unique constraint on ai_name.
        """
        metadata = metadata or ExerciseMetadata()
        seen = (seen_at or datetime.now()).isoformat()

        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO unmapped_exercises
                (ai_name, suggested_match, category, equipment, primary_muscles,
                 secondary_muscles, difficulty, count, first_seen, last_seen)
                VALUES (?, ?, ?, ?, ?, ?, ?, 1, ?, ?)
                ON CONFLICT (ai_name) DO UPDATE SET
                    count = count + 1,
                    last_seen = excluded.last_seen,
                    suggested_match = COALESCE(suggested_match, excluded.suggested_match),
                    category = COALESCE(category, excluded.category),
                    equipment = COALESCE(equipment, excluded.equipment),
                    primary_muscles = COALESCE(primary_muscles, excluded.primary_muscles),
                    secondary_muscles = COALESCE(secondary_muscles, excluded.secondary_muscles),
                    difficulty = COALESCE(difficulty, excluded.difficulty)
                """,
                (
                    ai_name,
                    suggested_match,
                    metadata.category,
                    _dumps_list(metadata.equipment),
                    _dumps_list(metadata.primary_muscles),
                    _dumps_list(metadata.secondary_muscles),
                    metadata.difficulty,
                    seen,
                    seen,
                ),
            )
            await db.commit()

    async def list_all_sorted_by_count(self) -> list[UnmappedEntry]:
        """List queued entries, most frequent first."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            cursor = await db.execute(
                "SELECT * FROM unmapped_exercises ORDER BY count DESC, last_seen DESC"
            )
            rows = await cursor.fetchall()
            return [self._row_to_entry(row) for row in rows]

    async def delete_by_id(self, entry_id: int) -> None:
        """Delete a queued entry."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("DELETE FROM unmapped_exercises WHERE id = ?", (entry_id,))
            await db.commit()

    async def delete_many(self, entry_ids: list[int]) -> int:
        """Delete several queued entries, returning how many existed."""
        if not entry_ids:
            return 0
        placeholders = ", ".join("?" for _ in entry_ids)
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                f"DELETE FROM unmapped_exercises WHERE id IN ({placeholders})",
                tuple(entry_ids),
            )
            await db.commit()
            return cursor.rowcount

    def _row_to_entry(self, row: aiosqlite.Row) -> UnmappedEntry:
        """Convert a database row to an UnmappedEntry."""
        return UnmappedEntry(
            id=row["id"],
            ai_name=row["ai_name"],
            suggested_match=row["suggested_match"],
            occurrence_count=row["count"],
            metadata=ExerciseMetadata(
                category=row["category"],
                equipment=_loads_list(row["equipment"]),
                primary_muscles=_loads_list(row["primary_muscles"]),
                secondary_muscles=_loads_list(row["secondary_muscles"]),
                difficulty=row["difficulty"],
            ),
            first_seen_at=_parse_timestamp(row["first_seen"]),
            last_seen_at=_parse_timestamp(row["last_seen"]),
        )


class UserEquipmentRepository:
    """Repository for user equipment and gym selection."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def add(self, equipment: UserEquipment) -> int:
        """Add equipment to a user's gym, updating availability if it exists."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                INSERT INTO user_equipment
                (user_id, gym_id, equipment_key, equipment_name, available)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT (user_id, gym_id, equipment_name) DO UPDATE SET
                    equipment_key = excluded.equipment_key,
                    available = excluded.available
                """,
                (
                    equipment.user_id,
                    equipment.gym_id,
                    equipment.equipment_key,
                    equipment.equipment_name,
                    1 if equipment.available else 0,
                ),
            )
            await db.commit()
            return cursor.lastrowid

    async def list_available_for_user(
        self, user_id: str, gym_id: str | None = None
    ) -> list[UserEquipment]:
        """List available equipment at one gym, or across all gyms when gym_id is None."""
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            if gym_id:
                cursor = await db.execute(
                    """
                    SELECT * FROM user_equipment
                    WHERE user_id = ? AND gym_id = ? AND available = 1
                    ORDER BY id
                    """,
                    (user_id, gym_id),
                )
            else:
                cursor = await db.execute(
                    """
                    SELECT * FROM user_equipment
                    WHERE user_id = ? AND available = 1
                    ORDER BY id
                    """,
                    (user_id,),
                )
            rows = await cursor.fetchall()
            return [self._row_to_equipment(row) for row in rows]

    async def remove(self, user_id: str, gym_id: str, equipment_name: str) -> None:
        """Remove a piece of equipment from a gym."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                """
                DELETE FROM user_equipment
                WHERE user_id = ? AND gym_id = ? AND equipment_name = ?
                """,
                (user_id, gym_id, equipment_name),
            )
            await db.commit()
            if cursor.rowcount == 0:
                raise NotFoundError(f"{equipment_name!r} not found in {gym_id}")

    async def get_selected_gym(self, user_id: str) -> str | None:
        """Get the gym a user has selected, if any."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT selected_gym_id FROM user_profiles WHERE user_id = ?", (user_id,)
            )
            row = await cursor.fetchone()
            return row[0] if row else None

    async def set_selected_gym(self, user_id: str, gym_id: str | None) -> None:
        """Select the gym used when no gym is given explicitly."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO user_profiles (user_id, selected_gym_id) VALUES (?, ?)
                ON CONFLICT (user_id) DO UPDATE SET
                    selected_gym_id = excluded.selected_gym_id,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (user_id, gym_id),
            )
            await db.commit()

    def _row_to_equipment(self, row: aiosqlite.Row) -> UserEquipment:
        """Convert a database row to a UserEquipment."""
        return UserEquipment(
            id=row["id"],
            user_id=row["user_id"],
            gym_id=row["gym_id"],
            equipment_key=row["equipment_key"],
            equipment_name=row["equipment_name"],
            available=bool(row["available"]),
        )
