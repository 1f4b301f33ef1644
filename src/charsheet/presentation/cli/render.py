"""Rich renderables for the editor screen."""
from __future__ import annotations

import os
from typing import List, Sequence

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from charsheet.domain.character import FIXED_SLOTS, HAND_SLOTS, RING_SLOTS, Equipped, Item, Weapon
from charsheet.domain.editor_state import TABS, EditorState
from charsheet.domain.staging import FIELD_SPECS, fields_for_tab

HELP_LINE = (
    "tab/shift+tab: tabs  l/h: next/prev  e/v: edit/view  up/down: field  c: change  "
    "enter: apply  space: equip  i/w: inventory/equipped  a/A: add/add SRD  s: save  o: load  q: quit"
)

_SLOT_LABELS = {
    "head": "Head",
    "body": "Body",
    "hands": "Hands",
    "feet": "Feet",
    "neck": "Neck",
    "ring1": "Ring 1",
    "ring2": "Ring 2",
    "main_hand": "Main Hand",
    "off_hand": "Off Hand",
}


def debug_enabled() -> bool:
    """Return True only when CHARSHEET_DEBUG is explicitly set to '1'."""
    return os.getenv("CHARSHEET_DEBUG") == "1"


def render_screen(state: EditorState, focused_field: str | None = None) -> RenderableType:
    """Build the whole screen for one frame."""
    return Group(
        Text("D&D Character Editor", style="bold magenta"),
        render_tab_bar(state),
        render_mode(state),
        Panel(render_tab_content(state, focused_field), title=TABS[state.active_tab][1]),
        render_message(state.message),
        Text(HELP_LINE, style="dim"),
    )


def render_tab_bar(state: EditorState) -> Text:
    bar = Text()
    for index, (_tab_id, label) in enumerate(TABS):
        if index:
            bar.append(" | ", style="dim")
        if index == state.active_tab:
            bar.append(f" {label} ", style="bold reverse")
        else:
            bar.append(label)
    return bar


def render_mode(state: EditorState) -> Text:
    if state.mode == "edit":
        return Text("EDIT MODE", style="bold yellow")
    return Text("VIEW MODE", style="bold cyan")


def render_message(message: str) -> Text:
    return Text(message, style="green") if message else Text("")


def render_tab_content(state: EditorState, focused_field: str | None = None) -> RenderableType:
    tab_id = state.active_tab_id
    if fields_for_tab(tab_id):
        return render_fields(state, focused_field)
    if tab_id == "skills":
        return render_skills(state)
    if tab_id == "equipment":
        if state.equip_view == "equipped":
            return render_equipped_items(state.character.equipped)
        return render_inventory(state.equipment, state.inventory_cursor.index)
    if tab_id == "weapons":
        return Group(
            render_weapons(state.weapons, state.weapon_cursor.index),
            render_equipped_weapons(state.character.equipped),
        )
    if tab_id == "spells":
        return render_spells(state)
    return render_proficiencies(state.proficiencies)


def render_fields(state: EditorState, focused_field: str | None = None) -> Table:
    """Staged values for the active tab, focus marked while editing."""
    table = Table(show_header=False, box=None)
    table.add_column("Field", style="bold")
    table.add_column("Value")
    for key in fields_for_tab(state.active_tab_id):
        style = "reverse" if state.mode == "edit" and key == focused_field else ""
        table.add_row(f"{FIELD_SPECS[key].label}:", Text(state.staging.get(key), style=style))
    return table


def render_skills(state: EditorState) -> RenderableType:
    if not state.skills:
        return Text("No skills listed.", style="dim")
    table = Table()
    table.add_column("Skill")
    table.add_column("Proficient", justify="center")
    table.add_column("Modifier", justify="right")
    for skill in state.skills:
        table.add_row(skill.name, "yes" if skill.proficient else "", f"{skill.modifier:+d}")
    return table


def render_inventory(items: Sequence[Item], cursor: int) -> RenderableType:
    if not items:
        return Text("Inventory is empty.", style="dim")
    table = Table()
    table.add_column("#", justify="right")
    table.add_column("Item")
    table.add_column("Slot")
    table.add_column("Qty", justify="right")
    table.add_column("Weight")
    table.add_column("Cost")
    table.add_column("")
    if debug_enabled():
        table.add_column("Id", style="dim")
    for index, item in enumerate(items):
        row: List[str] = [
            str(index + 1),
            item.name,
            item.slot,
            str(item.quantity),
            item.weight,
            item.cost,
            "[EQUIPPED]" if item.equipped else "",
        ]
        if debug_enabled():
            row.append(item.id)
        table.add_row(*row, style="reverse" if index == cursor else None)
    return table


def render_weapons(weapons: Sequence[Weapon], cursor: int) -> RenderableType:
    if not weapons:
        return Text("No weapons.", style="dim")
    table = Table()
    table.add_column("#", justify="right")
    table.add_column("Weapon")
    table.add_column("Damage")
    table.add_column("Properties")
    table.add_column("")
    if debug_enabled():
        table.add_column("Id", style="dim")
    for index, weapon in enumerate(weapons):
        marker = f"[EQUIPPED: {weapon.hand}]" if weapon.equipped and weapon.hand else ""
        row: List[str] = [str(index + 1), weapon.name, weapon.damage, weapon.properties, marker]
        if debug_enabled():
            row.append(weapon.id)
        table.add_row(*row, style="reverse" if index == cursor else None)
    return table


def render_equipped_items(equipped: Equipped) -> Table:
    table = Table(title="Equipped")
    table.add_column("Slot", style="bold")
    table.add_column("Item")
    for slot in FIXED_SLOTS + RING_SLOTS:
        occupant = equipped.get_item(slot)
        table.add_row(_SLOT_LABELS[slot], occupant.name if occupant else "-")
    return table


def render_equipped_weapons(equipped: Equipped) -> Table:
    table = Table(title="Hands")
    table.add_column("Hand", style="bold")
    table.add_column("Weapon")
    for hand in HAND_SLOTS:
        occupant = equipped.get_weapon(hand)
        table.add_row(_SLOT_LABELS[hand], occupant.name if occupant else "-")
    return table


def render_spells(state: EditorState) -> RenderableType:
    if not state.spells:
        return Text("No spells known.", style="dim")
    table = Table()
    table.add_column("Spell")
    table.add_column("Level", justify="right")
    table.add_column("School")
    table.add_column("Prepared", justify="center")
    for spell in state.spells:
        level = "Cantrip" if spell.level == 0 else str(spell.level)
        table.add_row(spell.name, level, spell.school, "yes" if spell.prepared else "")
    return table


def render_proficiencies(proficiencies: Sequence[str]) -> RenderableType:
    if not proficiencies:
        return Text("No proficiencies listed.", style="dim")
    return Text("\n".join(f"- {entry}" for entry in proficiencies))
