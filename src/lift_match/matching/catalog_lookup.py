"""Exact catalog lookup by ID or normalized name."""

from dataclasses import dataclass

from ..models.exercises import CatalogEntry
from ..utils.exercise_utils import normalize_name
from .stores import CatalogStore


@dataclass
class ExactHit:
    """An exact catalog hit.

    `formatting_drift` is True when the raw string only matched after
    normalization, so it is worth remembering as an alias.
    """

    entry: CatalogEntry
    formatting_drift: bool


class CatalogLookup:
    """Exact-match search against the catalog, first hit wins:

    1. raw name equals an entry's external ID or internal ID verbatim
    2. normalized raw name equals a normalized canonical name
    3. normalized raw name equals a normalized localized name

    Entries without a canonical name are never returned.
    """

    def __init__(self, catalog: CatalogStore):
        self.catalog = catalog

    async def find_exact(self, raw_name: str) -> ExactHit | None:
        if not raw_name:
            return None

        by_id = await self.catalog.find_by_id(raw_name)
        if by_id is not None and by_id.canonical_name:
            return ExactHit(entry=by_id, formatting_drift=False)

        normalized = normalize_name(raw_name)
        if not normalized:
            return None

        for field in ("canonical_name", "localized_name"):
            entry = await self.catalog.find_by_normalized_name(normalized, field=field)
            if entry is not None:
                stored_name = getattr(entry, field)
                return ExactHit(entry=entry, formatting_drift=raw_name != stored_name)

        return None
