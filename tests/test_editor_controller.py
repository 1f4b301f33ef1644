import json
from pathlib import Path

import pytest

from charsheet.domain.character import Item, Weapon
from charsheet.domain.defs import EquipmentDef, SpellDef, WeaponDef
from charsheet.domain.editor_state import TABS, WELCOME_MESSAGE, EditorState
from charsheet.services import CharacterStore, ReferenceLibrary
from charsheet.services.controllers import EditorAction, EditorController
from charsheet.services.controllers.editor_controller import (
    AllocationChangedEvent,
    CharacterCommittedEvent,
    CharacterLoadedEvent,
    CharacterSavedEvent,
    CursorMovedEvent,
    EntryAddedEvent,
    QuitRequestedEvent,
    StorageFailedEvent,
    TabChangedEvent,
)


def _make_controller(tmp_path: Path, **kwargs) -> EditorController:
    return EditorController(store=CharacterStore(tmp_path / "characters"), **kwargs)


def _tab_index(tab_id: str) -> int:
    return [tab for tab, _label in TABS].index(tab_id)


def _on_tab(state: EditorState, tab_id: str) -> None:
    state.active_tab = _tab_index(tab_id)


def _act(controller: EditorController, state: EditorState, action_type: str, **kwargs):
    return controller.dispatch(state, EditorAction(action_type=action_type, **kwargs))


def _editing(tab_id: str) -> EditorState:
    state = EditorState.for_character()
    state.mode = "edit"
    _on_tab(state, tab_id)
    return state


def test_new_session_defaults() -> None:
    state = EditorState.for_character()

    assert state.active_tab_id == "basic_info"
    assert state.mode == "view"
    assert state.equip_view == "inventory"
    assert state.message == WELCOME_MESSAGE
    assert state.character.name == "New Character"
    assert state.character.currency.gp == 15


def test_advance_and_retreat_change_tab_on_field_tabs(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path)
    state = EditorState.for_character()

    events = _act(controller, state, "advance")
    assert state.active_tab_id == "abilities"
    assert isinstance(events[0], TabChangedEvent)

    _act(controller, state, "retreat")
    _act(controller, state, "retreat")
    assert state.active_tab_id == "currency"


def test_tab_change_resets_cursors_and_focus(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path)
    state = EditorState.for_character()
    state.inventory_cursor.index = 2
    state.weapon_cursor.index = 1
    state.field_focus = 3

    _act(controller, state, "next_tab")

    assert state.inventory_cursor.index == -1
    assert state.weapon_cursor.index == -1
    assert state.field_focus == 0


def test_next_tab_always_changes_tab_on_list_tabs(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path)
    state = EditorState.for_character()
    state.equipment.append(Item(name="Torch"))
    _on_tab(state, "equipment")

    _act(controller, state, "next_tab")
    assert state.active_tab_id == "weapons"
    _act(controller, state, "prev_tab")
    _act(controller, state, "prev_tab")
    assert state.active_tab_id == "skills"


def test_advance_moves_inventory_cursor_when_list_has_entries(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path)
    state = EditorState.for_character()
    state.equipment.extend([Item(name="Torch"), Item(name="Rope")])
    _on_tab(state, "equipment")

    events = _act(controller, state, "advance")
    assert state.inventory_cursor.index == 0
    assert events == [CursorMovedEvent(list_name="equipment", index=0)]

    _act(controller, state, "advance")
    _act(controller, state, "advance")
    assert state.inventory_cursor.index == 0
    assert state.active_tab_id == "equipment"


def test_advance_on_empty_inventory_changes_tab(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path)
    state = EditorState.for_character()
    _on_tab(state, "equipment")

    _act(controller, state, "advance")

    assert state.active_tab_id == "weapons"


def test_advance_in_equipped_view_changes_tab(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path)
    state = EditorState.for_character()
    state.equipment.append(Item(name="Torch"))
    _on_tab(state, "equipment")
    _act(controller, state, "show_equipped")

    _act(controller, state, "advance")

    assert state.active_tab_id == "weapons"
    assert state.inventory_cursor.index == -1


def test_retreat_on_weapons_selects_last_entry(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path)
    state = EditorState.for_character()
    state.weapons.extend([Weapon(name="Sword"), Weapon(name="Dagger"), Weapon(name="Mace")])
    _on_tab(state, "weapons")

    _act(controller, state, "retreat")

    assert state.weapon_cursor.index == 2


def test_sub_view_switch_only_on_equipment_tab(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path)
    state = EditorState.for_character()

    assert _act(controller, state, "show_equipped") == []
    assert state.equip_view == "inventory"

    _on_tab(state, "equipment")
    _act(controller, state, "show_equipped")
    assert state.equip_view == "equipped"
    assert state.message == "Viewing equipped items"
    _act(controller, state, "show_inventory")
    assert state.equip_view == "inventory"
    assert state.message == "Viewing inventory"


def test_edit_actions_are_ignored_in_view_mode(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path, sample_item_factory=lambda: Item(name="X", slot="head"))
    state = EditorState.for_character()
    _on_tab(state, "equipment")

    for action_type in ("add_sample", "add_reference", "commit", "toggle_equip", "save"):
        assert _act(controller, state, action_type) == []

    assert state.equipment == []
    assert state.message == WELCOME_MESSAGE
    assert not (tmp_path / "characters").exists()


def test_mode_switches(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path)
    state = EditorState.for_character()

    _act(controller, state, "enter_edit")
    assert state.mode == "edit"
    _act(controller, state, "enter_view")
    assert state.mode == "view"


def test_stage_and_commit_basic_info(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path)
    state = _editing("basic_info")

    _act(controller, state, "stage_value", field_key="name", text="Aria")
    assert state.message == "Name changed, press Enter to apply"
    assert state.character.name == "New Character"

    events = _act(controller, state, "commit")

    assert state.character.name == "Aria"
    assert state.message == "Character data updated!"
    assert events == [CharacterCommittedEvent(tab_id="basic_info", rejected_fields=[])]


def test_stage_uses_focused_field(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path)
    state = _editing("basic_info")

    _act(controller, state, "focus_next_field")
    assert controller.focused_field(state) == "race"
    _act(controller, state, "stage_value", text="Dwarf")
    _act(controller, state, "commit")

    assert state.character.race == "Dwarf"


def test_focus_is_ignored_in_view_mode(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path)
    state = EditorState.for_character()

    assert _act(controller, state, "focus_next_field") == []
    assert state.field_focus == 0


def test_focus_wraps_within_tab(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path)
    state = _editing("background")

    _act(controller, state, "focus_prev_field")

    assert controller.focused_field(state) == "background"


def test_stage_rejects_field_from_other_tab(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path)
    state = _editing("abilities")

    assert _act(controller, state, "stage_value", field_key="name", text="Nope") == []
    assert state.staging.get("name") == "New Character"


def test_commit_ignores_invalid_numbers(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path)
    state = _editing("abilities")
    state.staging.set("str", "abc")
    state.staging.set("dex", "16")

    events = _act(controller, state, "commit")

    assert state.character.abilities.strength == 10
    assert state.character.abilities.dexterity == 16
    assert state.message == "Character data updated! Ignored invalid values: Strength"
    assert events[0].rejected_fields == ["Strength"]


def test_commit_on_list_tab_pushes_working_lists(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path)
    state = _editing("equipment")

    _act(controller, state, "add_sample")
    assert state.character.equipment == []

    _act(controller, state, "commit")
    assert [item.name for item in state.character.equipment] == ["Backpack"]
    assert state.character.equipment[0] is not state.equipment[0]


def test_add_equip_unequip_head_item(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path, sample_item_factory=lambda: Item(name="X", slot="head"))
    state = EditorState.for_character()
    _on_tab(state, "equipment")
    _act(controller, state, "enter_edit")

    events = _act(controller, state, "add_sample")
    assert events == [EntryAddedEvent(list_name="equipment", name="X")]
    assert state.message == "Added X to equipment"

    _act(controller, state, "advance")
    assert state.inventory_cursor.index == 0

    events = _act(controller, state, "toggle_equip")
    assert isinstance(events[0], AllocationChangedEvent)
    assert state.equipment[0].equipped is True
    assert state.character.equipped.head is not None
    assert state.character.equipped.head.name == "X"
    assert state.message == "X equipped"

    _act(controller, state, "toggle_equip")
    assert state.equipment[0].equipped is False
    assert state.character.equipped.head is None
    assert state.message == "X unequipped"


def test_toggle_without_selection_is_ignored(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path)
    state = _editing("equipment")
    _act(controller, state, "add_sample")

    assert _act(controller, state, "toggle_equip") == []
    assert state.equipment[0].equipped is False


def test_third_ring_is_rejected(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path, sample_item_factory=lambda: Item(name="Ring", slot="ring"))
    state = _editing("equipment")
    for _ in range(3):
        _act(controller, state, "add_sample")

    for _ in range(3):
        _act(controller, state, "advance")
        _act(controller, state, "toggle_equip")

    assert state.message == "No ring slots available"
    assert [item.equipped for item in state.equipment] == [True, True, False]


def test_displaced_head_item_message(tmp_path: Path) -> None:
    names = iter(["Helmet", "Circlet"])
    controller = _make_controller(tmp_path, sample_item_factory=lambda: Item(name=next(names), slot="head"))
    state = _editing("equipment")
    _act(controller, state, "add_sample")
    _act(controller, state, "add_sample")

    _act(controller, state, "advance")
    _act(controller, state, "toggle_equip")
    _act(controller, state, "advance")
    _act(controller, state, "toggle_equip")

    assert state.message == "Helmet unequipped (replaced); Circlet equipped"
    assert [item.equipped for item in state.equipment] == [False, True]


def test_weapons_fill_both_hands_then_reject(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path)
    state = _editing("weapons")
    for _ in range(3):
        _act(controller, state, "add_sample")

    for _ in range(3):
        _act(controller, state, "advance")
        _act(controller, state, "toggle_equip")

    equipped = state.character.equipped
    assert equipped.main_hand is not None and equipped.main_hand.id == state.weapons[0].id
    assert equipped.off_hand is not None and equipped.off_hand.id == state.weapons[1].id
    assert state.weapons[2].equipped is False
    assert state.message == "No hand available for weapon"


def test_add_skill_uses_standard_list(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path)
    state = _editing("skills")

    _act(controller, state, "add_sample")
    _act(controller, state, "add_sample")

    assert [skill.name for skill in state.skills] == ["Acrobatics", "Animal Handling"]
    assert state.skills[0].proficient is False


def test_add_proficiency_requires_text(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path)
    state = _editing("proficiencies")

    assert _act(controller, state, "add_sample", text="   ") == []
    _act(controller, state, "add_sample", text="Light armor")

    assert state.proficiencies == ["Light armor"]
    assert state.message == "Added Light armor to proficiencies"


def test_add_spell_without_reference_reports_none_left(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path)
    state = _editing("spells")

    assert _act(controller, state, "add_sample") == []
    assert state.message == "No unused SRD spells available"


def test_add_reference_entries_skip_names_already_listed(tmp_path: Path) -> None:
    reference = ReferenceLibrary(
        equipment=[
            EquipmentDef(name="Helmet", slot="head", cost="10 gp"),
            EquipmentDef(name="Ring of Protection", slot="ring"),
        ],
        weapons=[WeaponDef(name="Dagger", damage="1d4 piercing")],
        spells=[SpellDef(name="Fire Bolt", level=0, school="Evocation")],
    )
    controller = _make_controller(tmp_path, reference=reference)
    state = _editing("equipment")

    _act(controller, state, "add_reference")
    _act(controller, state, "add_reference")
    assert _act(controller, state, "add_reference") == []
    assert [item.name for item in state.equipment] == ["Helmet", "Ring of Protection"]
    assert state.equipment[0].slot == "head"
    assert state.equipment[0].cost == "10 gp"
    assert state.message == "No unused SRD equipment available"

    _on_tab(state, "weapons")
    _act(controller, state, "add_reference")
    assert state.weapons[0].damage == "1d4 piercing"

    _on_tab(state, "spells")
    _act(controller, state, "add_sample")
    assert [spell.name for spell in state.spells] == ["Fire Bolt"]


def test_save_writes_character_file(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path)
    state = _editing("weapons")
    _act(controller, state, "add_sample")
    _act(controller, state, "advance")
    _act(controller, state, "toggle_equip")

    events = _act(controller, state, "save")

    path = tmp_path / "characters" / "New_Character.json"
    assert events == [CharacterSavedEvent(path=path)]
    assert state.message == "Character saved successfully!"
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["name"] == "New Character"
    assert payload["weapons"][0]["equipped"] is True
    assert payload["equipped"]["mainHand"]["name"] == "Longsword"
    assert payload["equipped"]["head"] is None


def test_load_with_no_files(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path)
    state = EditorState.for_character()

    assert _act(controller, state, "load") == []
    assert state.message == "No saved characters found"


def test_save_then_load_restores_document(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path)
    state = _editing("basic_info")
    _act(controller, state, "stage_value", field_key="name", text="Aria")
    _act(controller, state, "commit")
    _act(controller, state, "save")

    fresh = EditorState.for_character()
    fresh.inventory_cursor.index = 3
    events = _act(controller, fresh, "load")

    assert events == [CharacterLoadedEvent(name="Aria")]
    assert fresh.character.name == "Aria"
    assert fresh.staging.get("name") == "Aria"
    assert fresh.inventory_cursor.index == -1
    assert fresh.message == "Loaded character: Aria"


def test_load_failure_keeps_document(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path)
    characters_dir = tmp_path / "characters"
    characters_dir.mkdir()
    (characters_dir / "Broken.json").write_text("{not json", encoding="utf-8")
    state = EditorState.for_character()
    before = state.character

    events = _act(controller, state, "load")

    assert isinstance(events[0], StorageFailedEvent)
    assert events[0].operation == "load"
    assert state.character is before
    assert state.message.startswith("Error loading character:")


def test_load_undecodable_file_keeps_document(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path)
    characters_dir = tmp_path / "characters"
    characters_dir.mkdir()
    (characters_dir / "Bad.json").write_bytes(b'{"name": "\xff\xfe"}')
    state = EditorState.for_character()
    before = state.character

    events = _act(controller, state, "load")

    assert isinstance(events[0], StorageFailedEvent)
    assert state.character is before
    assert state.message.startswith("Error loading character:")


def test_quit_requests_stop(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path)
    state = EditorState.for_character()

    assert _act(controller, state, "quit") == [QuitRequestedEvent()]


def test_unknown_action_raises(tmp_path: Path) -> None:
    controller = _make_controller(tmp_path)
    with pytest.raises(ValueError):
        _act(controller, EditorState.for_character(), "explode")
