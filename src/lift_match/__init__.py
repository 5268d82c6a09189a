"""Resolve AI-generated exercise names onto a canonical catalog."""

__version__ = "0.1.0"
