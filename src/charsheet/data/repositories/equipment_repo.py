"""Equipment repository."""
from __future__ import annotations

from charsheet.data.repositories.base import RepositoryBase
from charsheet.domain.character import normalize_slot
from charsheet.domain.defs import EquipmentDef

_OPTIONAL_FIELDS = {"cost", "weight", "category", "description", "equippable", "slot"}


class EquipmentRepository(RepositoryBase[EquipmentDef]):
    """Loads and validates equipment templates."""

    def __init__(self, base_path=None) -> None:
        super().__init__("srd_equipment.json", base_path)

    def _build_one(self, raw: dict[str, object], context: str) -> EquipmentDef:
        self._assert_exact_fields(raw, {"name"}, context, optional_fields=_OPTIONAL_FIELDS)
        name = self._require_str(raw["name"], f"{context} name")
        return EquipmentDef(
            name=name,
            cost=self._require_str(raw.get("cost", ""), f"{context} cost"),
            weight=self._require_str(raw.get("weight", ""), f"{context} weight"),
            category=self._require_str(raw.get("category", ""), f"{context} category"),
            description=self._require_str(raw.get("description", ""), f"{context} description"),
            equippable=self._require_bool(raw.get("equippable", False), f"{context} equippable"),
            slot=normalize_slot(self._require_str(raw.get("slot", "none"), f"{context} slot")),
        )
