"""Weapons repository."""
from __future__ import annotations

from charsheet.data.repositories.base import RepositoryBase
from charsheet.domain.defs import WeaponDef

_OPTIONAL_FIELDS = {"cost", "damage", "weight", "properties", "description"}


class WeaponsRepository(RepositoryBase[WeaponDef]):
    """Loads and validates weapon templates."""

    def __init__(self, base_path=None) -> None:
        super().__init__("srd_weapons.json", base_path)

    def _build_one(self, raw: dict[str, object], context: str) -> WeaponDef:
        self._assert_exact_fields(raw, {"name"}, context, optional_fields=_OPTIONAL_FIELDS)
        values = {
            key: self._require_str(raw.get(key, ""), f"{context} {key}") for key in sorted(_OPTIONAL_FIELDS)
        }
        return WeaponDef(name=self._require_str(raw["name"], f"{context} name"), **values)
