"""Exercise catalog loader from JSON."""

import json
import logging
from pathlib import Path

from ..db.engine import get_db_path, seed_catalog
from ..models.exercises import SEED_EXERCISES, CatalogEntry

logger = logging.getLogger(__name__)


def get_catalog_json_path() -> Path:
    """Get the path to the bundled catalog JSON file."""
    return Path(__file__).parent / "exercises.json"


def load_catalog_json(json_path: Path | None = None) -> list[CatalogEntry]:
    """Load catalog entries from a JSON file.

    The file holds {"exercises": [...]} where each item uses the
    CatalogEntry.to_dict() field names. Invalid items are skipped.

    Returns:
        List of CatalogEntry objects, empty if the file does not exist
    """
    json_path = json_path or get_catalog_json_path()
    if not json_path.exists():
        return []

    with open(json_path, encoding="utf-8") as f:
        data = json.load(f)

    entries = []
    for item in data.get("exercises", []):
        try:
            entries.append(CatalogEntry.from_dict(item))
        except (KeyError, TypeError) as e:
            logger.warning("Skipping invalid exercise %s: %s", item.get("localized_name", "unknown"), e)
            continue

    return entries


async def seed_catalog_from_json(db_path: Path | None = None, json_path: Path | None = None) -> int:
    """Seed the catalog with the built-in entries plus the JSON catalog.

    Entries whose names already exist are left untouched.

    Returns:
        Number of entries inserted
    """
    if db_path is None:
        db_path = get_db_path()

    entries = SEED_EXERCISES + load_catalog_json(json_path)
    return await seed_catalog(db_path, entries)
