from __future__ import annotations

import pytest

from charsheet.domain.character import Character, Equipped, Item, Skill, Spell, Weapon
from charsheet.services.errors import SaveLoadError
from charsheet.services.save_service import SaveService
from charsheet.services.slot_allocator import SlotAllocator


def _build_character() -> Character:
    character = Character(name="Aria Vale", race="Elf", char_class="Wizard", level=5, background="Sage")
    character.abilities.intelligence = 18
    character.skills = [Skill(name="Arcana", proficient=True, modifier=7)]
    character.spells = [Spell(name="Shield", level=1, school="Abjuration", prepared=True)]
    character.proficiencies = ["Daggers", "Quarterstaffs"]
    character.currency.sp = 12
    character.equipment = [
        Item(name="Ring of Protection", slot="ring"),
        Item(name="Ring of Protection", slot="ring"),
        Item(name="Circlet", slot="head"),
    ]
    character.weapons = [Weapon(name="Dagger", damage="1d4 piercing"), Weapon(name="Quarterstaff")]
    allocator = SlotAllocator()
    for item in character.equipment:
        allocator.equip_item(character.equipped, item, character.equipment)
    allocator.equip_weapon(character.equipped, character.weapons[0], hand="off")
    return character


def test_round_trip_preserves_character() -> None:
    service = SaveService()
    character = _build_character()

    restored = service.deserialize(service.serialize(character))

    assert restored == character
    assert restored.equipped.ring2 is not None
    assert restored.equipped.ring2.id == character.equipment[1].id


def test_serialize_uses_file_keys() -> None:
    payload = SaveService().serialize(_build_character())

    assert payload["class"] == "Wizard"
    assert set(payload["equipped"]) == {
        "head",
        "body",
        "hands",
        "feet",
        "ring1",
        "ring2",
        "neck",
        "mainHand",
        "offHand",
    }
    assert payload["equipped"]["body"] is None
    assert payload["equipped"]["offHand"]["hand"] == "off"
    assert payload["weapons"][1]["hand"] == ""
    assert payload["currency"] == {"cp": 0, "sp": 12, "ep": 0, "gp": 15, "pp": 0}


def test_legacy_payload_without_ids() -> None:
    payload = {
        "name": "Old Hero",
        "race": "Human",
        "class": "Fighter",
        "level": 2,
        "abilities": {"strength": 15},
        "equipment": [
            {"name": "Backpack", "quantity": 1, "slot": "back", "equipped": False},
            {"name": "Helmet", "slot": "head", "equipped": True},
        ],
        "weapons": [{"name": "Longsword", "equipped": True, "hand": "main"}],
        "equipped": {
            "head": {"name": "Helmet", "slot": "head", "equipped": True},
            "body": {"name": ""},
            "mainHand": {"name": "Longsword", "equipped": True, "hand": "main"},
            "offHand": None,
        },
    }

    character = SaveService().deserialize(payload)

    assert character.abilities.strength == 15
    assert character.abilities.wisdom == 10
    assert character.equipment[0].slot == "none"
    assert character.equipment[0].id
    assert character.equipped.body is None
    assert character.equipped.head is not None
    assert character.equipped.head.id == character.equipment[1].id
    assert character.equipped.main_hand is not None
    assert character.equipped.main_hand.id == character.weapons[0].id
    assert character.currency.gp == 0


def test_legacy_ids_let_unequip_clear_slot() -> None:
    payload = {
        "name": "Old Hero",
        "equipment": [{"name": "Helmet", "slot": "head", "equipped": True}],
        "equipped": {"head": {"name": "Helmet", "slot": "head", "equipped": True}},
    }
    character = SaveService().deserialize(payload)

    SlotAllocator().unequip_item(character.equipped, character.equipment[0])

    assert character.equipped == Equipped()


def test_legacy_same_name_rings_get_distinct_ids() -> None:
    ring = {"name": "Ring of Protection", "slot": "ring", "equipped": True}
    payload = {
        "name": "Old Hero",
        "equipment": [dict(ring), dict(ring)],
        "equipped": {"ring1": dict(ring), "ring2": dict(ring)},
    }
    character = SaveService().deserialize(payload)
    first, second = character.equipment

    assert character.equipped.ring1 is not None and character.equipped.ring1.id == first.id
    assert character.equipped.ring2 is not None and character.equipped.ring2.id == second.id

    SlotAllocator().unequip_item(character.equipped, second)

    assert character.equipped.ring1 is not None
    assert character.equipped.ring2 is None


def test_legacy_copy_skips_entry_claimed_by_explicit_id() -> None:
    payload = {
        "name": "Old Hero",
        "equipment": [
            {"id": "item_a", "name": "Signet", "slot": "ring", "equipped": True},
            {"id": "item_b", "name": "Signet", "slot": "ring", "equipped": True},
        ],
        "equipped": {
            "ring1": {"name": "Signet", "slot": "ring", "equipped": True},
            "ring2": {"id": "item_a", "name": "Signet", "slot": "ring", "equipped": True},
        },
    }

    character = SaveService().deserialize(payload)

    assert character.equipped.ring1 is not None and character.equipped.ring1.id == "item_b"
    assert character.equipped.ring2 is not None and character.equipped.ring2.id == "item_a"


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"level": 1},
        {"name": "A", "level": "3"},
        {"name": "A", "level": True},
        {"name": "A", "abilities": {"strength": "high"}},
        {"name": "A", "skills": "Stealth"},
        {"name": "A", "currency": {"gp": -1}},
        {"name": "A", "weapons": [{"name": "Bow", "hand": "left"}]},
        {"name": "A", "equipped": {"head": "Helmet"}},
    ],
)
def test_invalid_payloads_raise(payload) -> None:
    with pytest.raises(SaveLoadError):
        SaveService().deserialize(payload)


def test_error_names_field_path() -> None:
    payload = {"name": "A", "equipment": [{"name": "Torch"}, {"name": "Rope", "quantity": "two"}]}

    with pytest.raises(SaveLoadError, match=r"equipment\[1\]\.quantity"):
        SaveService().deserialize(payload)
