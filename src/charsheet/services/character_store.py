"""File-system storage for saved characters."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from charsheet.domain.character import Character
from charsheet.services.errors import SaveLoadError
from charsheet.services.save_service import SaveService

logger = logging.getLogger(__name__)

DEFAULT_CHARACTERS_DIR = "characters"


class CharacterStore:
    """One pretty-printed JSON file per character, named after the character."""

    def __init__(self, base_dir: Path | str | None = None, save_service: SaveService | None = None) -> None:
        self._base_dir = Path(base_dir) if base_dir is not None else Path(DEFAULT_CHARACTERS_DIR)
        self._save_service = save_service or SaveService()

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def path_for(self, name: str) -> Path:
        return self._base_dir / f"{name.replace(' ', '_')}.json"

    def list_files(self) -> List[Path]:
        """Return saved character files in name order."""
        if not self._base_dir.is_dir():
            return []
        return sorted(path for path in self._base_dir.glob("*.json") if path.is_file())

    def save(self, character: Character) -> Path:
        """Persist the character and return the file written."""
        payload = self._save_service.serialize(character)
        path = self.path_for(character.name)
        try:
            self._base_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        except OSError as exc:
            raise SaveLoadError(f"Unable to write {path}: {exc}") from exc
        logger.info("Saved character %r to %s", character.name, path)
        return path

    def load(self, path: Path | str) -> Character:
        """Read and validate one character file."""
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SaveLoadError(f"Unable to read {path}: {exc}") from exc
        try:
            payload: Dict[str, Any] = json.loads(text)
        except json.JSONDecodeError as exc:
            raise SaveLoadError(f"Invalid JSON in {path}: {exc}") from exc
        character = self._save_service.deserialize(payload)
        logger.info("Loaded character %r from %s", character.name, path)
        return character

    def load_first(self) -> Character | None:
        """Load the first saved character, or return None when there are none."""
        files = self.list_files()
        if not files:
            return None
        return self.load(files[0])
