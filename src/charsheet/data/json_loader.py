"""Reading reference collections from disk."""
from __future__ import annotations

import json
from pathlib import Path

from .errors import DataLoadError, DataValidationError


def load_json_array(path: Path) -> list[object]:
    """Return the top-level JSON array stored at `path`."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DataLoadError(f"Reference file not found: {path}", path=path) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise DataLoadError(f"Unable to read reference file {path}: {exc}", path=path) from exc

    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DataLoadError(f"Invalid JSON in {path}: {exc}", path=path) from exc
    if not isinstance(payload, list):
        raise DataValidationError(f"Expected a top-level array in {path}", path=path)
    return payload
