"""Exceptions raised by admin operations."""


class NotFoundError(ValueError):
    """A referenced exercise or unmapped entry does not exist."""
