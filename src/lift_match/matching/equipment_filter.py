"""Reduce the catalog to exercises a user's equipment allows."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ..models.equipment import UserEquipment
from ..models.exercises import UNKNOWN_TAG, CatalogEntry
from ..utils.exercise_utils import normalize_name
from .stores import CatalogStore, EquipmentStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Available:
    key: str
    name: str


def _normalize_available(items: Iterable[str | UserEquipment]) -> list[_Available]:
    normalized = []
    for item in items:
        if isinstance(item, UserEquipment):
            key = normalize_name(item.equipment_key)
            name = normalize_name(item.equipment_name)
        else:
            key = name = normalize_name(item)
        if key or name:
            normalized.append(_Available(key=key, name=name))
    return normalized


def _contains_either_way(a: str, b: str) -> bool:
    return bool(a) and bool(b) and (a in b or b in a)


def is_tag_available(required: str, available: list[_Available]) -> bool:
    """Check one normalized required tag against the available equipment.

    Tiers, most to least strict: exact key, key substring either way,
    equipment name substring either way.
    """
    if required == UNKNOWN_TAG:
        return True
    if any(item.key == required for item in available):
        return True
    if any(_contains_either_way(item.key, required) for item in available):
        return True
    return any(_contains_either_way(item.name, required) for item in available)


def bodyweight_exercises(catalog: Iterable[CatalogEntry]) -> list[CatalogEntry]:
    """Entries needing no equipment that have an English name."""
    return [entry for entry in catalog if entry.canonical_name and not entry.required_equipment]


def filter_by_equipment(
    catalog: Iterable[CatalogEntry],
    available_equipment: Iterable[str | UserEquipment],
) -> list[CatalogEntry]:
    """Return the catalog entries performable with the given equipment.

    Entries without an English name are never returned. When no equipment
    is supplied, or nothing matches, the bodyweight set is returned instead.
    """
    catalog = list(catalog)
    available = _normalize_available(available_equipment)

    if not available:
        logger.warning("[EXERCISE FILTER] No equipment supplied, falling back to bodyweight exercises")
        return bodyweight_exercises(catalog)

    matching = []
    for entry in catalog:
        if not entry.canonical_name:
            continue
        required = [normalize_name(tag) for tag in entry.required_equipment]
        required = [tag for tag in required if tag]
        if all(is_tag_available(tag, available) for tag in required):
            matching.append(entry)

    if not matching:
        logger.warning("[EXERCISE FILTER] No exercises matched equipment, falling back to bodyweight exercises")
        return bodyweight_exercises(catalog)

    logger.debug("[EXERCISE FILTER] %d exercises match %d pieces of equipment", len(matching), len(available))
    return matching


class EquipmentResolver:
    """Look up a user's equipment and filter the catalog with it.

    Equipment comes from the requested gym (or the user's selected gym),
    then from all of the user's gyms combined. With no equipment at all
    the bodyweight set is returned.
    """

    def __init__(self, catalog: CatalogStore, equipment: EquipmentStore):
        self.catalog = catalog
        self.equipment = equipment

    async def equipment_for_user(self, user_id: str, gym_id: str | None = None) -> list[UserEquipment]:
        target_gym = gym_id or await self.equipment.get_selected_gym(user_id)

        items: list[UserEquipment] = []
        if target_gym:
            items = await self.equipment.list_available_for_user(user_id, target_gym)
            logger.info("[EXERCISE FILTER] Filtering for gym %s", target_gym)
        if not items:
            items = await self.equipment.list_available_for_user(user_id)
            logger.info("[EXERCISE FILTER] Using aggregate equipment for user %s", user_id)
        return items

    async def available_for_user(self, user_id: str, gym_id: str | None = None) -> list[CatalogEntry]:
        items = await self.equipment_for_user(user_id, gym_id)
        catalog = await self.catalog.list_all()
        return filter_by_equipment(catalog, items)
