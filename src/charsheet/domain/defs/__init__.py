"""Reference definition exports."""

from .equipment_def import EquipmentDef
from .spell_def import SpellDef
from .weapon_def import WeaponDef

__all__ = [
    "EquipmentDef",
    "SpellDef",
    "WeaponDef",
]
