"""HTTP API for lift-match."""

from .app import create_app

__all__ = ["create_app"]
