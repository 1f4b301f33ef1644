"""Locations of the bundled SRD reference files."""
from __future__ import annotations

import os
from pathlib import Path

REFERENCE_DIR_ENV = "CHARSHEET_REFERENCE_DIR"


def get_repo_root() -> Path:
    """Return the repository root."""
    return Path(__file__).resolve().parents[3]


def get_reference_path(base_path: Path | str | None = None) -> Path:
    """Return the reference directory.

    An explicit `base_path` wins, then the CHARSHEET_REFERENCE_DIR
    environment variable, then `data/reference` in the repository.
    """
    if base_path is not None:
        return Path(base_path)
    override = os.environ.get(REFERENCE_DIR_ENV)
    if override:
        return Path(override)
    return get_repo_root() / "data" / "reference"
