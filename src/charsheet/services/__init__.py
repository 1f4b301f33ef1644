"""Service layer exports."""

from .character_store import CharacterStore
from .errors import SaveLoadError
from .reference_service import ReferenceLibrary, load_reference_library
from .save_service import SaveService
from .slot_allocator import EquipFailedEvent, ItemEquippedEvent, ItemUnequippedEvent, SlotAllocator

__all__ = [
    "CharacterStore",
    "EquipFailedEvent",
    "ItemEquippedEvent",
    "ItemUnequippedEvent",
    "ReferenceLibrary",
    "SaveLoadError",
    "SaveService",
    "SlotAllocator",
    "load_reference_library",
]
