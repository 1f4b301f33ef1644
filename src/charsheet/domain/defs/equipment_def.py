"""Reference equipment definition structures."""
from __future__ import annotations

from dataclasses import dataclass

from charsheet.core.types import SlotCategory


@dataclass(slots=True)
class EquipmentDef:
    """Equipment template from the SRD reference list."""

    name: str
    cost: str = ""
    weight: str = ""
    category: str = ""
    description: str = ""
    equippable: bool = False
    slot: SlotCategory = "none"
