"""Exceptions raised while reading SRD reference files."""
from __future__ import annotations

from pathlib import Path


class DataError(Exception):
    """Base exception for the data layer; `path` names the offending file."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class DataLoadError(DataError):
    """The reference file is missing, unreadable or not JSON."""


class DataValidationError(DataError):
    """A reference record has the wrong shape or duplicates another."""
