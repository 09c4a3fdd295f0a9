"""Exceptions raised by the weekly goals package."""

from __future__ import annotations


class GoalsError(Exception):
    """Base class for weekly goals errors."""


class StorageError(GoalsError):
    """A document or folder could not be read, created or written.

    Never recovered inside the package; callers decide how to report it.
    """

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path
