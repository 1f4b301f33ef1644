"""Serialization helpers for character files."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Set

from charsheet.core.ids import make_instance_id
from charsheet.domain.character import (
    ABILITY_NAMES,
    DENOMINATIONS,
    FIXED_SLOTS,
    RING_SLOTS,
    Abilities,
    Character,
    Currency,
    Equipped,
    Item,
    Skill,
    Spell,
    Weapon,
    normalize_slot,
)
from charsheet.services.errors import SaveLoadError

CharacterPayload = Dict[str, Any]

_EQUIPPED_KEYS: Dict[str, str] = {
    "head": "head",
    "body": "body",
    "hands": "hands",
    "feet": "feet",
    "ring1": "ring1",
    "ring2": "ring2",
    "neck": "neck",
    "main_hand": "mainHand",
    "off_hand": "offHand",
}


class SaveService:
    """Converts a Character to/from the JSON payload stored on disk."""

    def serialize(self, character: Character) -> CharacterPayload:
        """Return a JSON-serializable payload for disk persistence."""
        equipped_payload: Dict[str, Any] = {}
        for attr, key in _EQUIPPED_KEYS.items():
            occupant = getattr(character.equipped, attr)
            if occupant is None:
                equipped_payload[key] = None
            elif isinstance(occupant, Weapon):
                equipped_payload[key] = self._serialize_weapon(occupant)
            else:
                equipped_payload[key] = self._serialize_item(occupant)
        return {
            "name": character.name,
            "race": character.race,
            "class": character.char_class,
            "level": character.level,
            "abilities": {name: getattr(character.abilities, name) for name in ABILITY_NAMES},
            "skills": [
                {"name": skill.name, "proficient": skill.proficient, "modifier": skill.modifier}
                for skill in character.skills
            ],
            "equipment": [self._serialize_item(item) for item in character.equipment],
            "weapons": [self._serialize_weapon(weapon) for weapon in character.weapons],
            "spells": [
                {
                    "name": spell.name,
                    "description": spell.description,
                    "level": spell.level,
                    "school": spell.school,
                    "prepared": spell.prepared,
                }
                for spell in character.spells
            ],
            "background": character.background,
            "proficiencies": list(character.proficiencies),
            "currency": {name: getattr(character.currency, name) for name in DENOMINATIONS},
            "equipped": equipped_payload,
        }

    def deserialize(self, payload: Mapping[str, Any]) -> Character:
        """Rebuild a Character from a persisted payload."""
        if not isinstance(payload, Mapping):
            raise SaveLoadError("Character data must be a JSON object.")
        character = Character(
            name=self._require_str(payload.get("name"), "name"),
            race=self._coerce_str(payload.get("race"), "race"),
            char_class=self._coerce_str(payload.get("class"), "class"),
            level=self._require_int(payload.get("level", 1), "level"),
            background=self._coerce_str(payload.get("background"), "background"),
            abilities=self._coerce_abilities(payload.get("abilities")),
            skills=[
                self._coerce_skill(entry, f"skills[{index}]")
                for index, entry in enumerate(self._coerce_list(payload.get("skills"), "skills"))
            ],
            equipment=[
                self._coerce_item(entry, f"equipment[{index}]")
                for index, entry in enumerate(self._coerce_list(payload.get("equipment"), "equipment"))
            ],
            weapons=[
                self._coerce_weapon(entry, f"weapons[{index}]")
                for index, entry in enumerate(self._coerce_list(payload.get("weapons"), "weapons"))
            ],
            spells=[
                self._coerce_spell(entry, f"spells[{index}]")
                for index, entry in enumerate(self._coerce_list(payload.get("spells"), "spells"))
            ],
            proficiencies=self._coerce_str_list(payload.get("proficiencies"), "proficiencies"),
            currency=self._coerce_currency(payload.get("currency")),
        )
        character.equipped = self._coerce_equipped(payload.get("equipped"), character)
        return character

    # ---------------------------------------------------------------- Serialize
    @staticmethod
    def _serialize_item(item: Item) -> Dict[str, Any]:
        return {
            "id": item.id,
            "name": item.name,
            "description": item.description,
            "quantity": item.quantity,
            "weight": item.weight,
            "cost": item.cost,
            "equipped": item.equipped,
            "slot": item.slot,
        }

    @staticmethod
    def _serialize_weapon(weapon: Weapon) -> Dict[str, Any]:
        return {
            "id": weapon.id,
            "name": weapon.name,
            "description": weapon.description,
            "damage": weapon.damage,
            "properties": weapon.properties,
            "weight": weapon.weight,
            "cost": weapon.cost,
            "equipped": weapon.equipped,
            "hand": weapon.hand or "",
        }

    # ------------------------------------------------------------------ Coerce
    def _coerce_abilities(self, value: Any) -> Abilities:
        if value is None:
            return Abilities()
        mapping = self._require_dict(value, "abilities")
        scores = {
            name: self._require_int(mapping.get(name, 10), f"abilities.{name}") for name in ABILITY_NAMES
        }
        return Abilities(**scores)

    def _coerce_currency(self, value: Any) -> Currency:
        if value is None:
            return Currency()
        mapping = self._require_dict(value, "currency")
        amounts: Dict[str, int] = {}
        for name in DENOMINATIONS:
            amount = self._require_int(mapping.get(name, 0), f"currency.{name}")
            if amount < 0:
                raise SaveLoadError(f"currency.{name} must be a non-negative integer.")
            amounts[name] = amount
        return Currency(**amounts)

    def _coerce_skill(self, value: Any, context: str) -> Skill:
        mapping = self._require_dict(value, context)
        return Skill(
            name=self._require_str(mapping.get("name"), f"{context}.name"),
            proficient=self._coerce_bool(mapping.get("proficient"), f"{context}.proficient"),
            modifier=self._require_int(mapping.get("modifier", 0), f"{context}.modifier"),
        )

    def _coerce_spell(self, value: Any, context: str) -> Spell:
        mapping = self._require_dict(value, context)
        return Spell(
            name=self._require_str(mapping.get("name"), f"{context}.name"),
            description=self._coerce_str(mapping.get("description"), f"{context}.description"),
            level=self._require_int(mapping.get("level", 0), f"{context}.level"),
            school=self._coerce_str(mapping.get("school"), f"{context}.school"),
            prepared=self._coerce_bool(mapping.get("prepared"), f"{context}.prepared"),
        )

    def _coerce_item(self, value: Any, context: str) -> Item:
        mapping = self._require_dict(value, context)
        return Item(
            id=self._coerce_id(mapping.get("id"), "item", f"{context}.id"),
            name=self._require_str(mapping.get("name"), f"{context}.name"),
            description=self._coerce_str(mapping.get("description"), f"{context}.description"),
            quantity=self._require_int(mapping.get("quantity", 1), f"{context}.quantity"),
            weight=self._coerce_str(mapping.get("weight"), f"{context}.weight"),
            cost=self._coerce_str(mapping.get("cost"), f"{context}.cost"),
            equipped=self._coerce_bool(mapping.get("equipped"), f"{context}.equipped"),
            slot=normalize_slot(mapping.get("slot")),
        )

    def _coerce_weapon(self, value: Any, context: str) -> Weapon:
        mapping = self._require_dict(value, context)
        hand = mapping.get("hand")
        if hand not in (None, "", "main", "off"):
            raise SaveLoadError(f"{context}.hand must be 'main', 'off' or empty.")
        return Weapon(
            id=self._coerce_id(mapping.get("id"), "weapon", f"{context}.id"),
            name=self._require_str(mapping.get("name"), f"{context}.name"),
            description=self._coerce_str(mapping.get("description"), f"{context}.description"),
            damage=self._coerce_str(mapping.get("damage"), f"{context}.damage"),
            properties=self._coerce_str(mapping.get("properties"), f"{context}.properties"),
            weight=self._coerce_str(mapping.get("weight"), f"{context}.weight"),
            cost=self._coerce_str(mapping.get("cost"), f"{context}.cost"),
            equipped=self._coerce_bool(mapping.get("equipped"), f"{context}.equipped"),
            hand=hand or None,
        )

    def _coerce_equipped(self, value: Any, character: Character) -> Equipped:
        equipped = Equipped()
        if value is None:
            return equipped
        mapping = self._require_dict(value, "equipped")
        # Ids written explicitly in the file are never handed to a legacy copy.
        claimed = {
            raw["id"]
            for raw in mapping.values()
            if isinstance(raw, Mapping) and isinstance(raw.get("id"), str) and raw["id"]
        }
        for attr, key in _EQUIPPED_KEYS.items():
            raw = mapping.get(key)
            if raw is None:
                continue
            context = f"equipped.{key}"
            if not self._has_name(raw, context):
                continue
            had_id = bool(raw.get("id"))
            if attr in FIXED_SLOTS or attr in RING_SLOTS:
                occupant = self._coerce_item(raw, context)
                if not had_id:
                    occupant.id = self._adopt_id(occupant.name, character.equipment, occupant.id, claimed)
                equipped.set_item(attr, occupant)
            else:
                weapon = self._coerce_weapon(raw, context)
                if not had_id:
                    weapon.id = self._adopt_id(weapon.name, character.weapons, weapon.id, claimed)
                equipped.set_weapon(attr, weapon)
        return equipped

    def _has_name(self, raw: Any, context: str) -> bool:
        mapping = self._require_dict(raw, context)
        return bool(mapping.get("name"))

    @staticmethod
    def _adopt_id(
        name: str,
        entries: List[Item] | List[Weapon],
        fallback: str,
        claimed: Set[str],
    ) -> str:
        """Link a legacy equipped copy to the first unclaimed list entry it could come from."""
        for entry in entries:
            if entry.equipped and entry.name == name and entry.id not in claimed:
                claimed.add(entry.id)
                return entry.id
        return fallback

    def _coerce_id(self, value: Any, prefix: str, context: str) -> str:
        if value is None or value == "":
            return make_instance_id(prefix)
        return self._require_str(value, context)

    @staticmethod
    def _require_str(value: Any, context: str) -> str:
        if not isinstance(value, str):
            raise SaveLoadError(f"{context} must be a string.")
        return value

    def _coerce_str(self, value: Any, context: str) -> str:
        if value is None:
            return ""
        return self._require_str(value, context)

    @staticmethod
    def _require_int(value: Any, context: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise SaveLoadError(f"{context} must be an integer.")
        return value

    @staticmethod
    def _coerce_bool(value: Any, context: str) -> bool:
        if value is None:
            return False
        if not isinstance(value, bool):
            raise SaveLoadError(f"{context} must be a boolean.")
        return value

    @staticmethod
    def _coerce_list(value: Any, context: str) -> List[Any]:
        if value is None:
            return []
        if not isinstance(value, list):
            raise SaveLoadError(f"{context} must be a list.")
        return value

    def _coerce_str_list(self, value: Any, context: str) -> List[str]:
        return [self._require_str(entry, f"{context}[]") for entry in self._coerce_list(value, context)]

    @staticmethod
    def _require_dict(value: Any, context: str) -> Dict[str, Any]:
        if not isinstance(value, Mapping):
            raise SaveLoadError(f"{context} must be an object.")
        return dict(value)
