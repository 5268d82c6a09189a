"""Static table of known exercise-name variants."""

import logging
from collections.abc import Mapping
from types import MappingProxyType

from ..utils.exercise_utils import normalize_name

logger = logging.getLogger(__name__)

# Canonical English name -> variants an LLM commonly produces, in both languages
DEFAULT_EXERCISE_ALIASES: dict[str, list[str]] = {
    "Back Squat": ["squat", "barbell squat", "back squat", "backsquat", "knäböj"],
    "Bench Press": ["bench press", "barbell bench press", "flat bench press", "bänkpress"],
    "Deadlift": ["deadlift", "conventional deadlift", "barbell deadlift", "marklyft"],
    "Overhead Press": [
        "overhead press", "shoulder press", "military press", "standing press", "axelpress", "ohp",
    ],
    "Lat Pulldown": ["lat pulldown", "lat pull down", "wide grip pulldown", "latsdrag", "pulldown"],
    "Barbell Row": ["barbell row", "bent over row", "pendlay row", "bb row", "rodd"],
    "Barbell Curl": ["barbell curl", "bicep curl", "ez bar curl", "bicepscurl"],
    "Triceps Pushdown": ["triceps pushdown", "cable pushdown", "tricep pushdown", "rope pushdown"],
    "Leg Press": ["leg press", "benpress"],
    "Leg Curl": ["leg curl", "lying leg curl", "hamstring curl", "bencurl"],
    "Leg Extension": ["leg extension", "quad extension", "benförlängning", "bensträck"],
    "Calf Raise": ["calf raise", "standing calf raise", "seated calf raise", "vadpress"],
    "Push Up": ["push up", "pushup", "push-up", "armhävning"],
    "Pull Up": ["pull up", "pullup", "pull-up", "chin up", "chins"],
    "Dip": ["dip", "dips", "parallel bar dip", "tricep dip"],
    "Plank": ["plank", "front plank", "plankan"],
    "Crunch": ["crunch", "ab crunch", "abdominal crunch", "sit up"],
    "Hip Thrust": ["hip thrust", "barbell hip thrust", "glute bridge", "höftlyft"],
    "Lateral Raise": ["lateral raise", "side raise", "dumbbell lateral raise", "lat raise", "sidan lyft"],
    "Front Raise": ["front raise", "dumbbell front raise", "framåtlyft"],
    "Rear Delt Fly": ["rear delt fly", "rear delt raise", "reverse fly", "bakåtlyft"],
    "Incline Bench Press": ["incline bench", "incline press", "incline barbell bench"],
    "Dumbbell Bench Press": ["dumbbell bench", "dumbbell press", "db bench press", "hantelpress"],
    "Romanian Deadlift": ["romanian deadlift", "rdl", "stiff leg deadlift", "rumänsk marklyft"],
    "Walking Lunge": ["walking lunge", "lunges", "forward lunge", "utfallssteg"],
    "Bulgarian Split Squat": [
        "bulgarian split squat", "split squat", "rear foot elevated split squat", "bulgariska splitknäböj",
    ],
    "Hammer Curl": ["hammer curl", "neutral grip curl"],
    "Preacher Curl": ["preacher curl", "scott curl"],
    "Face Pull": ["face pull", "face pulls", "rear delt pull", "cable face pull"],
    "Farmer Walk": ["farmers walk", "farmer walk", "farmer carry", "farmers carry"],
    "Kettlebell Swing": ["kettlebell swing", "kb swing", "russian swing"],
}


class StaticAliasTable:
    """Immutable reverse lookup from normalized variant to canonical name.

    Built once at startup and injected into the matcher. When two canonical
    names claim the same variant, the first one registered keeps it.
    """

    def __init__(self, aliases: Mapping[str, list[str]] | None = None):
        if aliases is None:
            aliases = DEFAULT_EXERCISE_ALIASES

        reverse: dict[str, str] = {}
        for canonical, variants in aliases.items():
            for variant in [canonical, *variants]:
                key = normalize_name(variant)
                if not key:
                    continue
                owner = reverse.get(key)
                if owner is None:
                    reverse[key] = canonical
                elif owner != canonical:
                    logger.warning(
                        "Alias %r claimed by both %r and %r; keeping %r",
                        variant, owner, canonical, owner,
                    )

        self._reverse = MappingProxyType(reverse)

    def __len__(self) -> int:
        return len(self._reverse)

    def __contains__(self, raw_name: str) -> bool:
        return self.lookup(raw_name) is not None

    def lookup(self, raw_name: str) -> str | None:
        """Return the canonical name a raw name is a known variant of."""
        return self._reverse.get(normalize_name(raw_name))
