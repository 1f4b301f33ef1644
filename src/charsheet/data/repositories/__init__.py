"""Repository exports."""

from .equipment_repo import EquipmentRepository
from .spells_repo import SpellsRepository
from .weapons_repo import WeaponsRepository

__all__ = [
    "EquipmentRepository",
    "SpellsRepository",
    "WeaponsRepository",
]
