"""Shared helpers."""

from .exercise_utils import levenshtein_distance, normalize_name

__all__ = ["levenshtein_distance", "normalize_name"]
