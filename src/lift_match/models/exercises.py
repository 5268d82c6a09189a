"""Exercise catalog definitions and seed data."""

from dataclasses import dataclass, field
from uuid import uuid4

# Placeholder tag used for auto-created exercises until an admin enriches them.
UNKNOWN_TAG = "unknown"


@dataclass
class CatalogEntry:
    """A canonical exercise in the catalog.

    `canonical_name` is the English name used for matching, aliasing and
    auto-expansion. `localized_name` is the Swedish display name. Entries
    without a canonical name are invisible to fuzzy matching.
    """

    localized_name: str
    canonical_name: str | None = None
    external_id: str | None = None  # Stable catalog code, e.g. "bench_press"
    primary_muscles: list[str] = field(default_factory=list)
    secondary_muscles: list[str] = field(default_factory=list)
    required_equipment: list[str] = field(default_factory=list)  # empty = bodyweight
    category: str = "strength"
    difficulty: str = "intermediate"
    is_compound: bool = False
    instructions: str | None = None
    youtube_url: str | None = None
    id: str = field(default_factory=lambda: str(uuid4()))

    @property
    def display_name(self) -> str:
        """Name shown to callers: English when present, else localized."""
        return self.canonical_name or self.localized_name

    @property
    def is_bodyweight(self) -> bool:
        return not self.required_equipment

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "id": self.id,
            "external_id": self.external_id,
            "localized_name": self.localized_name,
            "canonical_name": self.canonical_name,
            "primary_muscles": self.primary_muscles,
            "secondary_muscles": self.secondary_muscles,
            "required_equipment": self.required_equipment,
            "category": self.category,
            "difficulty": self.difficulty,
            "is_compound": self.is_compound,
            "instructions": self.instructions,
            "youtube_url": self.youtube_url,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CatalogEntry":
        """Create from dictionary."""
        entry = cls(
            localized_name=data["localized_name"],
            canonical_name=data.get("canonical_name"),
            external_id=data.get("external_id"),
            primary_muscles=data.get("primary_muscles") or [],
            secondary_muscles=data.get("secondary_muscles") or [],
            required_equipment=data.get("required_equipment") or [],
            category=data.get("category") or "strength",
            difficulty=data.get("difficulty") or "intermediate",
            is_compound=bool(data.get("is_compound", False)),
            instructions=data.get("instructions"),
            youtube_url=data.get("youtube_url"),
        )
        if data.get("id"):
            entry.id = data["id"]
        return entry


# Built-in catalog used by `lift-match init` when no JSON catalog is present.
# Localized names are Swedish, canonical names English.
SEED_EXERCISES: list[CatalogEntry] = [
    CatalogEntry(
        external_id="back_squat",
        localized_name="Knäböj",
        canonical_name="Back Squat",
        primary_muscles=["quads", "glutes"],
        secondary_muscles=["hamstrings", "lower_back"],
        required_equipment=["barbell", "squat rack"],
        is_compound=True,
    ),
    CatalogEntry(
        external_id="bench_press",
        localized_name="Bänkpress",
        canonical_name="Bench Press",
        primary_muscles=["chest"],
        secondary_muscles=["triceps", "shoulders"],
        required_equipment=["barbell", "bench"],
        is_compound=True,
    ),
    CatalogEntry(
        external_id="deadlift",
        localized_name="Marklyft",
        canonical_name="Deadlift",
        primary_muscles=["hamstrings", "glutes", "lower_back"],
        secondary_muscles=["traps", "forearms"],
        required_equipment=["barbell"],
        is_compound=True,
    ),
    CatalogEntry(
        external_id="overhead_press",
        localized_name="Axelpress",
        canonical_name="Overhead Press",
        primary_muscles=["shoulders"],
        secondary_muscles=["triceps"],
        required_equipment=["barbell"],
        is_compound=True,
    ),
    CatalogEntry(
        external_id="lat_pulldown",
        localized_name="Latsdrag",
        canonical_name="Lat Pulldown",
        primary_muscles=["lats"],
        secondary_muscles=["biceps"],
        required_equipment=["lat pulldown"],
        is_compound=True,
    ),
    CatalogEntry(
        external_id="barbell_row",
        localized_name="Skivstångsrodd",
        canonical_name="Barbell Row",
        primary_muscles=["back", "lats"],
        secondary_muscles=["biceps"],
        required_equipment=["barbell"],
        is_compound=True,
    ),
    CatalogEntry(
        external_id="barbell_curl",
        localized_name="Bicepscurl med skivstång",
        canonical_name="Barbell Curl",
        primary_muscles=["biceps"],
        required_equipment=["barbell"],
    ),
    CatalogEntry(
        external_id="triceps_pushdown",
        localized_name="Triceps press i kabel",
        canonical_name="Triceps Pushdown",
        primary_muscles=["triceps"],
        required_equipment=["cable machine"],
    ),
    CatalogEntry(
        external_id="leg_press",
        localized_name="Benpress",
        canonical_name="Leg Press",
        primary_muscles=["quads", "glutes"],
        required_equipment=["leg press"],
        is_compound=True,
    ),
    CatalogEntry(
        external_id="leg_curl",
        localized_name="Bencurl",
        canonical_name="Leg Curl",
        primary_muscles=["hamstrings"],
        required_equipment=["leg curl"],
    ),
    CatalogEntry(
        external_id="leg_extension",
        localized_name="Bensträck",
        canonical_name="Leg Extension",
        primary_muscles=["quads"],
        required_equipment=["leg extension"],
    ),
    CatalogEntry(
        external_id="calf_raise",
        localized_name="Vadpress",
        canonical_name="Calf Raise",
        primary_muscles=["calves"],
    ),
    CatalogEntry(
        external_id="push_up",
        localized_name="Armhävning",
        canonical_name="Push Up",
        primary_muscles=["chest"],
        secondary_muscles=["triceps", "shoulders"],
        is_compound=True,
    ),
    CatalogEntry(
        external_id="pull_up",
        localized_name="Chins",
        canonical_name="Pull Up",
        primary_muscles=["lats"],
        secondary_muscles=["biceps"],
        required_equipment=["pull-up bar"],
        is_compound=True,
    ),
    CatalogEntry(
        external_id="plank",
        localized_name="Plankan",
        canonical_name="Plank",
        primary_muscles=["abs"],
        category="core",
        difficulty="beginner",
    ),
    CatalogEntry(
        external_id="hip_thrust",
        localized_name="Höftlyft",
        canonical_name="Hip Thrust",
        primary_muscles=["glutes"],
        secondary_muscles=["hamstrings"],
        required_equipment=["barbell", "bench"],
    ),
    CatalogEntry(
        external_id="lateral_raise",
        localized_name="Sidolyft",
        canonical_name="Lateral Raise",
        primary_muscles=["shoulders"],
        required_equipment=["dumbbells"],
    ),
    CatalogEntry(
        external_id="romanian_deadlift",
        localized_name="Rumänsk marklyft",
        canonical_name="Romanian Deadlift",
        primary_muscles=["hamstrings", "glutes"],
        required_equipment=["barbell"],
        is_compound=True,
    ),
    CatalogEntry(
        external_id="walking_lunge",
        localized_name="Utfallssteg",
        canonical_name="Walking Lunge",
        primary_muscles=["quads", "glutes"],
        is_compound=True,
    ),
    CatalogEntry(
        external_id="kettlebell_swing",
        localized_name="Kettlebellsving",
        canonical_name="Kettlebell Swing",
        primary_muscles=["glutes", "hamstrings"],
        required_equipment=["kettlebells"],
        is_compound=True,
    ),
]
