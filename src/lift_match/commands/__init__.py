"""CLI commands for lift-match."""

from .catalog import catalog
from .equipment import equipment
from .init import init
from .match import match
from .serve import serve
from .unmapped import unmapped

__all__ = [
    "catalog",
    "equipment",
    "init",
    "match",
    "serve",
    "unmapped",
]
