"""Provisional text values for editable character fields."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Mapping

from charsheet.core.types import TabId
from charsheet.domain.character import Character

FieldKind = Literal["text", "int", "count"]


@dataclass(frozen=True, slots=True)
class FieldSpec:
    """Describes one editable field and where it lives on the character."""

    key: str
    label: str
    path: tuple[str, ...]
    kind: FieldKind = "text"


FIELD_SPECS: Dict[str, FieldSpec] = {
    spec.key: spec
    for spec in (
        FieldSpec("name", "Name", ("name",)),
        FieldSpec("race", "Race", ("race",)),
        FieldSpec("class", "Class", ("char_class",)),
        FieldSpec("level", "Level", ("level",), "int"),
        FieldSpec("background", "Background", ("background",)),
        FieldSpec("str", "Strength", ("abilities", "strength"), "int"),
        FieldSpec("dex", "Dexterity", ("abilities", "dexterity"), "int"),
        FieldSpec("con", "Constitution", ("abilities", "constitution"), "int"),
        FieldSpec("int", "Intelligence", ("abilities", "intelligence"), "int"),
        FieldSpec("wis", "Wisdom", ("abilities", "wisdom"), "int"),
        FieldSpec("cha", "Charisma", ("abilities", "charisma"), "int"),
        FieldSpec("cp", "Copper", ("currency", "cp"), "count"),
        FieldSpec("sp", "Silver", ("currency", "sp"), "count"),
        FieldSpec("ep", "Electrum", ("currency", "ep"), "count"),
        FieldSpec("gp", "Gold", ("currency", "gp"), "count"),
        FieldSpec("pp", "Platinum", ("currency", "pp"), "count"),
    )
}

TAB_FIELDS: Mapping[TabId, tuple[str, ...]] = {
    "basic_info": ("name", "race", "class", "level"),
    "abilities": ("str", "dex", "con", "int", "wis", "cha"),
    "background": ("background",),
    "currency": ("cp", "sp", "ep", "gp", "pp"),
}


def fields_for_tab(tab_id: TabId) -> tuple[str, ...]:
    return TAB_FIELDS.get(tab_id, ())


def read_field(character: Character, key: str) -> object:
    target: object = character
    for attr in FIELD_SPECS[key].path:
        target = getattr(target, attr)
    return target


def write_field(character: Character, key: str, value: object) -> None:
    *parents, attr = FIELD_SPECS[key].path
    target: object = character
    for parent in parents:
        target = getattr(target, parent)
    setattr(target, attr, value)


@dataclass
class InputStaging:
    """Holds what the user has typed for each field until it is committed."""

    values: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_character(cls, character: Character) -> "InputStaging":
        staging = cls()
        staging.reset(character)
        return staging

    def reset(self, character: Character) -> None:
        self.values = {key: str(read_field(character, key)) for key in FIELD_SPECS}

    def get(self, key: str) -> str:
        return self.values.get(key, "")

    def set(self, key: str, text: str) -> None:
        if key not in FIELD_SPECS:
            raise KeyError(key)
        self.values[key] = text

    def apply(self, character: Character, keys: tuple[str, ...]) -> list[str]:
        """Copy staged values for `keys` onto the character.

        Returns the labels of numeric fields whose text did not parse; those
        fields keep their previous value.
        """
        rejected: list[str] = []
        for key in keys:
            spec = FIELD_SPECS[key]
            raw = self.get(key)
            if spec.kind == "text":
                write_field(character, key, raw)
                continue
            try:
                number = int(raw.strip())
            except ValueError:
                rejected.append(spec.label)
                continue
            if spec.kind == "count" and number < 0:
                rejected.append(spec.label)
                continue
            write_field(character, key, number)
        return rejected
