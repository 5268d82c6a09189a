"""String heuristics used by the auto-expansion gate."""

import re

_UUID = re.compile(
    r"\b[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}\b", re.IGNORECASE
)
_BARE_HEX = re.compile(r"^[0-9a-f]{20,}$", re.IGNORECASE)
_SWEDISH_CHARS = re.compile(r"[åäöÅÄÖ]")

# Fragments that only show up in Swedish exercise names
SWEDISH_KEYWORDS = (
    "böj",
    "boj",
    "lyft",
    "rodd",
    "hantel",
    "skivstång",
    "skivstang",
    "armhävning",
    "armhavning",
    "utfall",
    "sträck",
    "stolpe",
)


def looks_like_uuid(name: str) -> bool:
    return bool(_UUID.search(name.strip()))


def looks_like_hex_id(name: str) -> bool:
    return bool(_BARE_HEX.match(name.strip()))


def looks_like_id(name: str) -> bool:
    """True for UUIDs and long bare hex strings passed through as names."""
    return looks_like_uuid(name) or looks_like_hex_id(name)


def looks_localized(name: str) -> bool:
    """True when a name is likely Swedish rather than English."""
    if _SWEDISH_CHARS.search(name):
        return True
    lowered = name.lower()
    return any(keyword in lowered for keyword in SWEDISH_KEYWORDS)
