"""Shared type aliases for the core and domain layers."""
from typing import Literal

SlotCategory = Literal["head", "body", "hands", "feet", "ring", "neck", "none"]
HandAssignment = Literal["main", "off"]
EditorMode = Literal["view", "edit"]
EquipView = Literal["inventory", "equipped"]
TabId = Literal[
    "basic_info",
    "abilities",
    "skills",
    "equipment",
    "weapons",
    "spells",
    "background",
    "proficiencies",
    "currency",
]

__all__ = ["EditorMode", "EquipView", "HandAssignment", "SlotCategory", "TabId"]
