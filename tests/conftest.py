"""Pytest configuration and fixtures."""

import tempfile
from pathlib import Path

import pytest
import pytest_asyncio

from lift_match.config import Config
from lift_match.db import init_db, seed_catalog
from lift_match.models.exercises import CatalogEntry
from lift_match.services import build_services


@pytest.fixture
def temp_db_path():
    """Create a temporary database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir) / "test.db"


@pytest.fixture
def catalog_entries():
    """A small catalog with English and Swedish names."""
    return [
        CatalogEntry(
            external_id="barbell_bench_press",
            localized_name="Bänkpress med skivstång",
            canonical_name="Barbell Bench Press",
            primary_muscles=["chest"],
            required_equipment=["barbell", "bench"],
        ),
        CatalogEntry(
            external_id="deadlift",
            localized_name="Marklyft",
            canonical_name="Deadlift",
            primary_muscles=["hamstrings", "glutes"],
            required_equipment=["barbell"],
        ),
        CatalogEntry(
            external_id="lateral_raise",
            localized_name="Sidolyft",
            canonical_name="Lateral Raise",
            primary_muscles=["shoulders"],
            required_equipment=["dumbbells"],
        ),
        CatalogEntry(
            external_id="push_up",
            localized_name="Armhävning",
            canonical_name="Push Up",
            primary_muscles=["chest"],
        ),
        CatalogEntry(
            external_id="stolpdrag",
            localized_name="Stolpdrag",
            primary_muscles=["lats"],
            required_equipment=["cable machine"],
        ),
    ]


@pytest_asyncio.fixture
async def db_path(temp_db_path, catalog_entries):
    """An initialized database seeded with `catalog_entries`."""
    await init_db(temp_db_path)
    await seed_catalog(temp_db_path, catalog_entries)
    return temp_db_path


@pytest.fixture
def config(db_path):
    return Config(data_dir=db_path.parent)


@pytest.fixture
def services(config, db_path):
    """Repositories and matcher wired against the seeded database."""
    return build_services(config, db_path=db_path)


@pytest.fixture
def strict_services(db_path):
    """Like `services` but with auto-expansion turned off."""
    return build_services(Config(data_dir=db_path.parent, auto_expand=False), db_path=db_path)
