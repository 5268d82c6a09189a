"""Database engine setup and initialization."""

import json
import logging
from pathlib import Path

import aiosqlite

from ..config import DEFAULT_DATA_DIR

logger = logging.getLogger(__name__)


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = DEFAULT_DATA_DIR
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / "lift_match.db"


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        # Canonical exercise catalog; rowid keeps insertion order for scans
        await db.execute("""
            CREATE TABLE IF NOT EXISTS exercises (
                id TEXT PRIMARY KEY,
                external_id TEXT UNIQUE,
                localized_name TEXT UNIQUE NOT NULL,
                canonical_name TEXT,
                primary_muscles TEXT NOT NULL DEFAULT '[]',
                secondary_muscles TEXT NOT NULL DEFAULT '[]',
                required_equipment TEXT NOT NULL DEFAULT '[]',
                category TEXT NOT NULL DEFAULT 'strength',
                difficulty TEXT NOT NULL DEFAULT 'intermediate',
                is_compound INTEGER DEFAULT 0,
                instructions TEXT,
                youtube_url TEXT,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Learned aliases: raw name -> exercise
        await db.execute("""
            CREATE TABLE IF NOT EXISTS exercise_aliases (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                exercise_id TEXT NOT NULL,
                alias TEXT NOT NULL,
                alias_norm TEXT NOT NULL,
                lang TEXT DEFAULT 'en',
                source TEXT DEFAULT 'seed',
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                UNIQUE (alias_norm, exercise_id)
            )
        """)

        # Names nothing could resolve, queued for admin review
        await db.execute("""
            CREATE TABLE IF NOT EXISTS unmapped_exercises (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                ai_name TEXT UNIQUE NOT NULL,
                suggested_match TEXT,
                category TEXT,
                equipment TEXT,
                primary_muscles TEXT,
                secondary_muscles TEXT,
                difficulty TEXT,
                count INTEGER NOT NULL DEFAULT 1,
                first_seen TIMESTAMP NOT NULL,
                last_seen TIMESTAMP NOT NULL
            )
        """)

        # Equipment per user and gym
        await db.execute("""
            CREATE TABLE IF NOT EXISTS user_equipment (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                user_id TEXT NOT NULL,
                gym_id TEXT NOT NULL,
                equipment_key TEXT NOT NULL,
                equipment_name TEXT NOT NULL,
                available INTEGER DEFAULT 1,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                UNIQUE (user_id, gym_id, equipment_name)
            )
        """)

        await db.execute("""
            CREATE TABLE IF NOT EXISTS user_profiles (
                user_id TEXT PRIMARY KEY,
                selected_gym_id TEXT,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        # Create indexes for common queries
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_exercises_canonical_name
            ON exercises(canonical_name)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_exercise_aliases_norm
            ON exercise_aliases(alias_norm)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_exercise_aliases_exercise
            ON exercise_aliases(exercise_id)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_unmapped_count
            ON unmapped_exercises(count)
        """)
        await db.execute("""
            CREATE INDEX IF NOT EXISTS idx_user_equipment_user_gym
            ON user_equipment(user_id, gym_id)
        """)

        await db.commit()


async def seed_catalog(db_path: Path | None = None, entries=None) -> int:
    """Seed the catalog, skipping entries whose names already exist.

    Returns the number of newly inserted entries.
    """
    from ..models.exercises import SEED_EXERCISES

    if db_path is None:
        db_path = get_db_path()
    if entries is None:
        entries = SEED_EXERCISES

    inserted = 0
    async with aiosqlite.connect(db_path) as db:
        for entry in entries:
            cursor = await db.execute(
                """
                INSERT OR IGNORE INTO exercises
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
            inserted += cursor.rowcount

        await db.commit()

    logger.info("Seeded %d of %d catalog entries", inserted, len(entries))
    return inserted
