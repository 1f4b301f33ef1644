"""Spells repository."""
from __future__ import annotations

from charsheet.data.errors import DataValidationError
from charsheet.data.repositories.base import RepositoryBase
from charsheet.domain.defs import SpellDef

_TEXT_FIELDS = ("school", "casting_time", "range", "components", "duration", "description", "classes")


class SpellsRepository(RepositoryBase[SpellDef]):
    """Loads and validates spell templates."""

    def __init__(self, base_path=None) -> None:
        super().__init__("srd_spells.json", base_path)

    def _build_one(self, raw: dict[str, object], context: str) -> SpellDef:
        self._assert_exact_fields(raw, {"name", "level"}, context, optional_fields=set(_TEXT_FIELDS))
        name = self._require_str(raw["name"], f"{context} name")
        level = self._require_int(raw["level"], f"{context} level")
        if level < 0:
            raise DataValidationError(f"{context} level must be non-negative.")
        text = {key: self._require_str(raw.get(key, ""), f"{context} {key}") for key in _TEXT_FIELDS}
        return SpellDef(name=name, level=level, **text)
