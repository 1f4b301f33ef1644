"""Per-user configuration read by the CLI entry point."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Dict

from charsheet.data.paths import get_reference_path

_DEFAULT_CHARACTERS_DIR = "characters"
_CONFIG_KEYS = ("characters_dir", "reference_dir")


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / "CharSheet"
        return Path.home() / "CharSheet"
    return Path.home() / ".config" / "charsheet"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def get_log_dir() -> Path:
    """Return the per-user log directory."""
    return get_user_data_dir() / "logs"


def default_config() -> Dict[str, str]:
    return {
        "characters_dir": _DEFAULT_CHARACTERS_DIR,
        "reference_dir": str(get_reference_path()),
    }


def _normalize(raw: object) -> Dict[str, str]:
    config = default_config()
    if not isinstance(raw, dict):
        return config
    for key in _CONFIG_KEYS:
        value = raw.get(key)
        if isinstance(value, str) and value.strip():
            config[key] = value.strip()
    return config


def load_config(path: Path | None = None) -> Dict[str, str]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return default_config()
    except (OSError, ValueError):
        return default_config()
    return _normalize(raw)

