"""Utilities for exercise name normalization and edit distance."""

import re
import unicodedata

_DISALLOWED_CHARS = re.compile(r"[^a-z0-9åäö\s]")
_WHITESPACE = re.compile(r"\s+")


def normalize_name(name: str | None) -> str:
    """Normalize an exercise name into a matching key.

    Lower-cases, keeps ASCII letters, the Swedish letters å/ä/ö, digits and
    whitespace, collapses whitespace runs and trims. Idempotent; empty or
    None input gives an empty string.
    """
    if not name:
        return ""

    # Composed form so "a" + combining ring survives as "å"
    normalized = unicodedata.normalize("NFC", name).lower()
    normalized = _DISALLOWED_CHARS.sub("", normalized)
    normalized = _WHITESPACE.sub(" ", normalized)

    return normalized.strip()


def levenshtein_distance(a: str, b: str) -> int:
    """Classic edit distance with unit-cost substitution, insertion and deletion."""
    if a == b:
        return 0
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            if char_a == char_b:
                current.append(previous[j - 1])
            else:
                current.append(
                    min(
                        previous[j - 1] + 1,  # substitution
                        current[j - 1] + 1,  # insertion
                        previous[j] + 1,  # deletion
                    )
                )
        previous = current

    return previous[-1]
