"""UI-agnostic controller that drives the editor state machine."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Literal

from charsheet.core.types import EditorMode, EquipView, TabId
from charsheet.domain.character import Item, Weapon
from charsheet.domain.editor_state import TABS, EditorState
from charsheet.domain.selection import SelectionCursor
from charsheet.domain.staging import FIELD_SPECS, fields_for_tab
from charsheet.services.character_store import CharacterStore
from charsheet.services.errors import SaveLoadError
from charsheet.services.reference_service import (
    ReferenceLibrary,
    item_from_def,
    next_standard_skill,
    next_unused,
    spell_from_def,
    weapon_from_def,
)
from charsheet.services.slot_allocator import AllocationEvent, SlotAllocator

logger = logging.getLogger(__name__)

EditorActionType = Literal[
    "advance",
    "retreat",
    "next_tab",
    "prev_tab",
    "enter_edit",
    "enter_view",
    "commit",
    "toggle_equip",
    "show_inventory",
    "show_equipped",
    "add_sample",
    "add_reference",
    "focus_next_field",
    "focus_prev_field",
    "stage_value",
    "save",
    "load",
    "quit",
]


@dataclass(slots=True)
class EditorAction:
    """One discrete input event for the editor."""

    action_type: EditorActionType
    field_key: str | None = None
    text: str | None = None


@dataclass(slots=True)
class EditorEvent:
    """Base class for editor events."""


@dataclass(slots=True)
class TabChangedEvent(EditorEvent):
    tab_id: TabId


@dataclass(slots=True)
class CursorMovedEvent(EditorEvent):
    list_name: Literal["equipment", "weapons"]
    index: int


@dataclass(slots=True)
class ModeChangedEvent(EditorEvent):
    mode: EditorMode


@dataclass(slots=True)
class EquipViewChangedEvent(EditorEvent):
    view: EquipView


@dataclass(slots=True)
class FieldFocusedEvent(EditorEvent):
    field_key: str


@dataclass(slots=True)
class ValueStagedEvent(EditorEvent):
    field_key: str
    text: str


@dataclass(slots=True)
class CharacterCommittedEvent(EditorEvent):
    tab_id: TabId
    rejected_fields: List[str] = field(default_factory=list)


@dataclass(slots=True)
class EntryAddedEvent(EditorEvent):
    list_name: str
    name: str


@dataclass(slots=True)
class AllocationChangedEvent(EditorEvent):
    outcomes: List[AllocationEvent]


@dataclass(slots=True)
class CharacterSavedEvent(EditorEvent):
    path: Path


@dataclass(slots=True)
class CharacterLoadedEvent(EditorEvent):
    name: str


@dataclass(slots=True)
class StorageFailedEvent(EditorEvent):
    operation: Literal["save", "load"]
    reason: str


@dataclass(slots=True)
class QuitRequestedEvent(EditorEvent):
    """Signals the session loop to stop; nothing is saved."""


def make_sample_item() -> Item:
    return Item(
        name="Backpack",
        description="A backpack for carrying items",
        quantity=1,
        weight="5 lb.",
        cost="2 gp",
        slot="none",
    )


def make_sample_weapon() -> Weapon:
    return Weapon(
        name="Longsword",
        description="A versatile martial weapon",
        damage="1d8 slashing",
        properties="Versatile (1d10)",
        weight="3 lb.",
        cost="15 gp",
    )


class EditorController:
    """
    Applies one EditorAction at a time to an EditorState.

    Every input goes through dispatch(): it either changes navigation state
    (tab, mode, cursors, staged text) or hands an equip/unequip to the
    SlotAllocator. Expected failures become status messages on the state and
    events in the result; nothing here raises for them.
    """

    def __init__(
        self,
        *,
        store: CharacterStore | None = None,
        allocator: SlotAllocator | None = None,
        reference: ReferenceLibrary | None = None,
        sample_item_factory: Callable[[], Item] = make_sample_item,
        sample_weapon_factory: Callable[[], Weapon] = make_sample_weapon,
    ) -> None:
        self._store = store or CharacterStore()
        self._allocator = allocator or SlotAllocator()
        self._reference = reference or ReferenceLibrary()
        self._sample_item_factory = sample_item_factory
        self._sample_weapon_factory = sample_weapon_factory
        self._handlers: Dict[str, Callable[[EditorState, EditorAction], List[EditorEvent]]] = {
            "advance": lambda state, _action: self._step(state, 1),
            "retreat": lambda state, _action: self._step(state, -1),
            "next_tab": lambda state, _action: self._change_tab(state, 1),
            "prev_tab": lambda state, _action: self._change_tab(state, -1),
            "enter_edit": lambda state, _action: self._set_mode(state, "edit"),
            "enter_view": lambda state, _action: self._set_mode(state, "view"),
            "commit": self._commit,
            "toggle_equip": self._toggle_equip,
            "show_inventory": lambda state, _action: self._set_equip_view(state, "inventory"),
            "show_equipped": lambda state, _action: self._set_equip_view(state, "equipped"),
            "add_sample": self._add_sample,
            "add_reference": self._add_reference,
            "focus_next_field": lambda state, _action: self._move_focus(state, 1),
            "focus_prev_field": lambda state, _action: self._move_focus(state, -1),
            "stage_value": self._stage_value,
            "save": self._save,
            "load": self._load,
            "quit": lambda state, _action: [QuitRequestedEvent()],
        }

    @property
    def reference(self) -> ReferenceLibrary:
        return self._reference

    def dispatch(self, state: EditorState, action: EditorAction) -> List[EditorEvent]:
        """Apply `action` to `state` and return what happened."""
        try:
            handler = self._handlers[action.action_type]
        except KeyError as exc:
            raise ValueError(f"Unknown editor action: {action.action_type}") from exc
        return handler(state, action)

    def focused_field(self, state: EditorState) -> str | None:
        """Return the key of the field that field-editing actions target."""
        keys = fields_for_tab(state.active_tab_id)
        if not keys:
            return None
        return keys[state.field_focus % len(keys)]

    # --------------------------------------------------------------- Navigation
    def _step(self, state: EditorState, step: int) -> List[EditorEvent]:
        tab_id = state.active_tab_id
        if tab_id == "equipment" and state.equip_view == "inventory" and state.equipment:
            self._move_cursor(state.inventory_cursor, len(state.equipment), step)
            return [CursorMovedEvent(list_name="equipment", index=state.inventory_cursor.index)]
        if tab_id == "weapons" and state.weapons:
            self._move_cursor(state.weapon_cursor, len(state.weapons), step)
            return [CursorMovedEvent(list_name="weapons", index=state.weapon_cursor.index)]
        return self._change_tab(state, step)

    @staticmethod
    def _move_cursor(cursor: SelectionCursor, length: int, step: int) -> None:
        if step > 0:
            cursor.advance(length)
        else:
            cursor.retreat(length)

    def _change_tab(self, state: EditorState, step: int) -> List[EditorEvent]:
        state.active_tab = (state.active_tab + step) % len(TABS)
        state.inventory_cursor.reset()
        state.weapon_cursor.reset()
        state.field_focus = 0
        return [TabChangedEvent(tab_id=state.active_tab_id)]

    def _set_mode(self, state: EditorState, mode: EditorMode) -> List[EditorEvent]:
        state.mode = mode
        return [ModeChangedEvent(mode=mode)]

    def _set_equip_view(self, state: EditorState, view: EquipView) -> List[EditorEvent]:
        if state.active_tab_id != "equipment":
            return []
        state.equip_view = view
        state.message = "Viewing inventory" if view == "inventory" else "Viewing equipped items"
        return [EquipViewChangedEvent(view=view)]

    def _move_focus(self, state: EditorState, step: int) -> List[EditorEvent]:
        if state.mode != "edit":
            return []
        keys = fields_for_tab(state.active_tab_id)
        if not keys:
            return []
        state.field_focus = (state.field_focus + step) % len(keys)
        return [FieldFocusedEvent(field_key=keys[state.field_focus])]

    # ------------------------------------------------------------------ Editing
    def _stage_value(self, state: EditorState, action: EditorAction) -> List[EditorEvent]:
        if state.mode != "edit" or action.text is None:
            return []
        key = action.field_key or self.focused_field(state)
        if key is None or key not in fields_for_tab(state.active_tab_id):
            return []
        state.staging.set(key, action.text)
        state.message = f"{FIELD_SPECS[key].label} changed, press Enter to apply"
        return [ValueStagedEvent(field_key=key, text=action.text)]

    def _commit(self, state: EditorState, _action: EditorAction) -> List[EditorEvent]:
        if state.mode != "edit":
            return []
        tab_id = state.active_tab_id
        rejected = state.staging.apply(state.character, fields_for_tab(tab_id))
        state.push_working_lists()
        state.message = "Character data updated!"
        if rejected:
            state.message += f" Ignored invalid values: {', '.join(rejected)}"
            logger.info("Commit on %s ignored invalid values for %s", tab_id, rejected)
        return [CharacterCommittedEvent(tab_id=tab_id, rejected_fields=rejected)]

    def _toggle_equip(self, state: EditorState, _action: EditorAction) -> List[EditorEvent]:
        if state.mode != "edit":
            return []
        tab_id = state.active_tab_id
        if tab_id == "equipment":
            index = state.inventory_cursor.selected(len(state.equipment))
            if index is None:
                return []
            outcomes = self._allocator.toggle_item(state.character.equipped, state.equipment, index)
        elif tab_id == "weapons":
            index = state.weapon_cursor.selected(len(state.weapons))
            if index is None:
                return []
            outcomes = self._allocator.toggle_weapon(state.character.equipped, state.weapons, index)
        else:
            return []
        state.message = "; ".join(outcome.message for outcome in outcomes)
        return [AllocationChangedEvent(outcomes=outcomes)]

    def _add_sample(self, state: EditorState, action: EditorAction) -> List[EditorEvent]:
        if state.mode != "edit":
            return []
        tab_id = state.active_tab_id
        if tab_id == "equipment":
            item = self._sample_item_factory()
            state.equipment.append(item)
            return self._added(state, "equipment", item.name)
        if tab_id == "weapons":
            weapon = self._sample_weapon_factory()
            state.weapons.append(weapon)
            return self._added(state, "weapons", weapon.name)
        if tab_id == "skills":
            skill = next_standard_skill(state.skills)
            if skill is None:
                state.message = "All standard skills are already listed"
                return []
            state.skills.append(skill)
            return self._added(state, "skills", skill.name)
        if tab_id == "spells":
            return self._add_reference_spell(state)
        if tab_id == "proficiencies":
            text = (action.text or "").strip()
            if not text:
                return []
            state.proficiencies.append(text)
            return self._added(state, "proficiencies", text)
        return []

    def _add_reference(self, state: EditorState, _action: EditorAction) -> List[EditorEvent]:
        if state.mode != "edit":
            return []
        tab_id = state.active_tab_id
        if tab_id == "equipment":
            definition = next_unused(self._reference.equipment, [item.name for item in state.equipment])
            if definition is None:
                state.message = "No unused SRD equipment available"
                return []
            state.equipment.append(item_from_def(definition))
            return self._added(state, "equipment", definition.name)
        if tab_id == "weapons":
            definition = next_unused(self._reference.weapons, [weapon.name for weapon in state.weapons])
            if definition is None:
                state.message = "No unused SRD weapons available"
                return []
            state.weapons.append(weapon_from_def(definition))
            return self._added(state, "weapons", definition.name)
        if tab_id == "spells":
            return self._add_reference_spell(state)
        return []

    def _add_reference_spell(self, state: EditorState) -> List[EditorEvent]:
        definition = next_unused(self._reference.spells, [spell.name for spell in state.spells])
        if definition is None:
            state.message = "No unused SRD spells available"
            return []
        state.spells.append(spell_from_def(definition))
        return self._added(state, "spells", definition.name)

    @staticmethod
    def _added(state: EditorState, list_name: str, name: str) -> List[EditorEvent]:
        state.message = f"Added {name} to {list_name}"
        return [EntryAddedEvent(list_name=list_name, name=name)]

    # ------------------------------------------------------------------ Storage
    def _save(self, state: EditorState, _action: EditorAction) -> List[EditorEvent]:
        if state.mode != "edit":
            return []
        state.push_working_lists()
        try:
            path = self._store.save(state.character)
        except SaveLoadError as exc:
            logger.warning("Save failed: %s", exc)
            state.message = f"Error saving character: {exc}"
            return [StorageFailedEvent(operation="save", reason=str(exc))]
        state.message = "Character saved successfully!"
        return [CharacterSavedEvent(path=path)]

    def _load(self, state: EditorState, _action: EditorAction) -> List[EditorEvent]:
        try:
            character = self._store.load_first()
        except SaveLoadError as exc:
            logger.warning("Load failed: %s", exc)
            state.message = f"Error loading character: {exc}"
            return [StorageFailedEvent(operation="load", reason=str(exc))]
        if character is None:
            state.message = "No saved characters found"
            return []
        state.replace_character(character)
        state.message = f"Loaded character: {character.name}"
        return [CharacterLoadedEvent(name=character.name)]
