"""Character document models."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from charsheet.core.ids import make_instance_id
from charsheet.core.types import HandAssignment, SlotCategory


SLOT_CATEGORIES: tuple[SlotCategory, ...] = ("head", "body", "hands", "feet", "ring", "neck", "none")
FIXED_SLOTS: tuple[str, ...] = ("head", "body", "hands", "feet", "neck")
RING_SLOTS: tuple[str, ...] = ("ring1", "ring2")
HAND_SLOTS: tuple[str, ...] = ("main_hand", "off_hand")
ABILITY_NAMES: tuple[str, ...] = (
    "strength",
    "dexterity",
    "constitution",
    "intelligence",
    "wisdom",
    "charisma",
)
DENOMINATIONS: tuple[str, ...] = ("cp", "sp", "ep", "gp", "pp")


def normalize_slot(value: object) -> SlotCategory:
    """Map a raw slot string onto a known category, defaulting to 'none'."""
    if isinstance(value, str) and value.lower() in SLOT_CATEGORIES:
        return value.lower()  # type: ignore[return-value]
    return "none"


@dataclass(slots=True)
class Abilities:
    strength: int = 10
    dexterity: int = 10
    constitution: int = 10
    intelligence: int = 10
    wisdom: int = 10
    charisma: int = 10


@dataclass(slots=True)
class Skill:
    name: str
    proficient: bool = False
    modifier: int = 0


@dataclass(slots=True)
class Item:
    """An inventory entry; `id` identifies this instance across copies."""

    name: str
    description: str = ""
    quantity: int = 1
    weight: str = ""
    cost: str = ""
    equipped: bool = False
    slot: SlotCategory = "none"
    id: str = field(default_factory=lambda: make_instance_id("item"))


@dataclass(slots=True)
class Weapon:
    """A weapon entry; `hand` is None while the weapon is unassigned."""

    name: str
    description: str = ""
    damage: str = ""
    properties: str = ""
    weight: str = ""
    cost: str = ""
    equipped: bool = False
    hand: HandAssignment | None = None
    id: str = field(default_factory=lambda: make_instance_id("weapon"))


@dataclass(slots=True)
class Spell:
    name: str
    description: str = ""
    level: int = 0
    school: str = ""
    prepared: bool = False


@dataclass(slots=True)
class Currency:
    cp: int = 0
    sp: int = 0
    ep: int = 0
    gp: int = 0
    pp: int = 0


@dataclass(slots=True)
class Equipped:
    """Allocation table: copies of whatever occupies each body slot and hand."""

    head: Item | None = None
    body: Item | None = None
    hands: Item | None = None
    feet: Item | None = None
    neck: Item | None = None
    ring1: Item | None = None
    ring2: Item | None = None
    main_hand: Weapon | None = None
    off_hand: Weapon | None = None

    def get_item(self, slot: str) -> Item | None:
        if slot not in FIXED_SLOTS + RING_SLOTS:
            raise KeyError(slot)
        return getattr(self, slot)

    def set_item(self, slot: str, item: Item | None) -> None:
        if slot not in FIXED_SLOTS + RING_SLOTS:
            raise KeyError(slot)
        setattr(self, slot, item)

    def get_weapon(self, hand: str) -> Weapon | None:
        if hand not in HAND_SLOTS:
            raise KeyError(hand)
        return getattr(self, hand)

    def set_weapon(self, hand: str, weapon: Weapon | None) -> None:
        if hand not in HAND_SLOTS:
            raise KeyError(hand)
        setattr(self, hand, weapon)


@dataclass
class Character:
    """The character sheet being edited."""

    name: str = "New Character"
    race: str = "Human"
    char_class: str = "Fighter"
    level: int = 1
    background: str = "Acolyte"
    abilities: Abilities = field(default_factory=Abilities)
    skills: List[Skill] = field(default_factory=list)
    equipment: List[Item] = field(default_factory=list)
    weapons: List[Weapon] = field(default_factory=list)
    spells: List[Spell] = field(default_factory=list)
    proficiencies: List[str] = field(default_factory=list)
    currency: Currency = field(default_factory=lambda: Currency(gp=15))
    equipped: Equipped = field(default_factory=Equipped)
