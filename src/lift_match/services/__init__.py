"""Wiring of repositories into the matching components."""

from .resolver import ResolverServices, build_services

__all__ = ["ResolverServices", "build_services"]
