"""Editor session state tracking."""
from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import List

from charsheet.core.types import EditorMode, EquipView, TabId
from charsheet.domain.character import Character, Item, Skill, Spell, Weapon
from charsheet.domain.selection import SelectionCursor
from charsheet.domain.staging import InputStaging

TABS: tuple[tuple[TabId, str], ...] = (
    ("basic_info", "Basic Info"),
    ("abilities", "Abilities"),
    ("skills", "Skills"),
    ("equipment", "Equipment"),
    ("weapons", "Weapons"),
    ("spells", "Spells"),
    ("background", "Background"),
    ("proficiencies", "Proficiencies"),
    ("currency", "Currency"),
)

WELCOME_MESSAGE = "Welcome to D&D Character Editor!"


@dataclass
class EditorState:
    """Everything one editing session owns: the document plus UI state.

    The list fields are working copies of the character's lists; toggles and
    additions land there and are copied back on commit.
    """

    character: Character
    staging: InputStaging
    skills: List[Skill] = field(default_factory=list)
    equipment: List[Item] = field(default_factory=list)
    weapons: List[Weapon] = field(default_factory=list)
    spells: List[Spell] = field(default_factory=list)
    proficiencies: List[str] = field(default_factory=list)
    active_tab: int = 0
    mode: EditorMode = "view"
    equip_view: EquipView = "inventory"
    inventory_cursor: SelectionCursor = field(default_factory=SelectionCursor)
    weapon_cursor: SelectionCursor = field(default_factory=SelectionCursor)
    field_focus: int = 0
    message: str = WELCOME_MESSAGE

    @classmethod
    def for_character(cls, character: Character | None = None) -> "EditorState":
        character = character if character is not None else Character()
        state = cls(character=character, staging=InputStaging.from_character(character))
        state.pull_working_lists()
        return state

    @property
    def active_tab_id(self) -> TabId:
        return TABS[self.active_tab][0]

    def pull_working_lists(self) -> None:
        self.skills = copy.deepcopy(self.character.skills)
        self.equipment = copy.deepcopy(self.character.equipment)
        self.weapons = copy.deepcopy(self.character.weapons)
        self.spells = copy.deepcopy(self.character.spells)
        self.proficiencies = list(self.character.proficiencies)

    def push_working_lists(self) -> None:
        self.character.skills = copy.deepcopy(self.skills)
        self.character.equipment = copy.deepcopy(self.equipment)
        self.character.weapons = copy.deepcopy(self.weapons)
        self.character.spells = copy.deepcopy(self.spells)
        self.character.proficiencies = list(self.proficiencies)

    def replace_character(self, character: Character) -> None:
        """Swap in a different document and rebuild everything derived from it."""
        self.character = character
        self.staging.reset(character)
        self.pull_working_lists()
        self.inventory_cursor.reset()
        self.weapon_cursor.reset()
        self.field_focus = 0
