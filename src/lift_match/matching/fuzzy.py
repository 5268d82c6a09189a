"""Edit-distance search over the catalog's English names."""

from dataclasses import dataclass

from ..config import DEFAULT_FUZZY_THRESHOLD
from ..models.exercises import CatalogEntry
from ..utils.exercise_utils import levenshtein_distance, normalize_name
from .stores import CatalogStore


@dataclass
class FuzzyHit:
    entry: CatalogEntry
    distance: int


class FuzzyMatcher:
    """Find the closest canonical name within a fixed edit distance.

    Scans every entry with a canonical name in catalog insertion order, so
    cost grows linearly with catalog size. On equal distances the first
    entry scanned wins.
    """

    def __init__(self, catalog: CatalogStore, threshold: int = DEFAULT_FUZZY_THRESHOLD):
        self.catalog = catalog
        self.threshold = threshold

    async def find_fuzzy(self, raw_name: str) -> FuzzyHit | None:
        normalized = normalize_name(raw_name)
        if not normalized:
            return None

        candidates = await self.catalog.find_all_with_canonical_name()
        return self.closest(normalized, candidates)

    def closest(self, normalized: str, candidates: list[CatalogEntry]) -> FuzzyHit | None:
        """Pick the nearest candidate for an already-normalized name."""
        best: FuzzyHit | None = None

        for entry in candidates:
            if not entry.canonical_name:
                continue
            distance = levenshtein_distance(normalized, normalize_name(entry.canonical_name))
            if distance <= self.threshold and (best is None or distance < best.distance):
                best = FuzzyHit(entry=entry, distance=distance)
                if distance == 0:
                    break

        return best
