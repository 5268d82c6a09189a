"""Runtime configuration read from the environment."""

import os
from dataclasses import dataclass
from pathlib import Path

# Default data directory (repository root /data)
DEFAULT_DATA_DIR = Path(__file__).parent.parent.parent / "data"

DEFAULT_FUZZY_THRESHOLD = 5


def _env_bool(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Config:
    data_dir: Path = DEFAULT_DATA_DIR
    fuzzy_threshold: int = DEFAULT_FUZZY_THRESHOLD
    auto_expand: bool = True
    log_format: str = "text"
    log_level: str = "INFO"

    @property
    def db_path(self) -> Path:
        return self.data_dir / "lift_match.db"

    @classmethod
    def from_env(cls) -> "Config":
        threshold = int(os.environ.get("LIFT_MATCH_FUZZY_THRESHOLD", str(DEFAULT_FUZZY_THRESHOLD)))
        if threshold < 0:
            raise ValueError("LIFT_MATCH_FUZZY_THRESHOLD must be >= 0")

        log_format = os.environ.get("LIFT_MATCH_LOG_FORMAT", "text")
        if log_format not in ("text", "json"):
            raise ValueError("LIFT_MATCH_LOG_FORMAT must be 'text' or 'json'")

        data_dir = os.environ.get("LIFT_MATCH_DATA_DIR")

        return cls(
            data_dir=Path(data_dir) if data_dir else DEFAULT_DATA_DIR,
            fuzzy_threshold=threshold,
            auto_expand=_env_bool("LIFT_MATCH_AUTO_EXPAND", True),
            log_format=log_format,
            log_level=os.environ.get("LIFT_MATCH_LOG_LEVEL", "INFO").upper(),
        )
