"""Error taxonomy for the diary core."""

from __future__ import annotations


class DiaryError(Exception):
    """Base class for every diary error."""


class ValidationError(DiaryError):
    """Missing mood or blank reflection. Raised before any side effect."""


class StorageReadFailure(DiaryError):
    """Persisted data is unreadable or does not describe a list of entries."""


class StorageWriteFailure(DiaryError):
    """The backing store rejected a write (full disk, locked database, ...)."""


class GenerationFailure(DiaryError):
    """The delegated text-generation call did not produce usable text."""
