"""Equipment slot and weapon hand allocation."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import List, Literal, Sequence

from charsheet.core.types import HandAssignment
from charsheet.domain.character import FIXED_SLOTS, RING_SLOTS, Equipped, Item, Weapon

logger = logging.getLogger(__name__)

_HAND_FIELDS: dict[HandAssignment, str] = {"main": "main_hand", "off": "off_hand"}
_HAND_NAMES: dict[str, HandAssignment] = {"main_hand": "main", "off_hand": "off"}


@dataclass(slots=True)
class AllocationEvent:
    """Base class for equip/unequip outcomes."""

    @property
    def message(self) -> str:
        raise NotImplementedError


@dataclass(slots=True)
class ItemEquippedEvent(AllocationEvent):
    item_id: str
    item_name: str
    slot: str | None
    category: Literal["item", "weapon"]

    @property
    def message(self) -> str:
        return f"{self.item_name} equipped"


@dataclass(slots=True)
class ItemUnequippedEvent(AllocationEvent):
    item_id: str
    item_name: str
    slot: str | None
    category: Literal["item", "weapon"]
    displaced: bool = False

    @property
    def message(self) -> str:
        if self.displaced:
            return f"{self.item_name} unequipped (replaced)"
        return f"{self.item_name} unequipped"


@dataclass(slots=True)
class EquipFailedEvent(AllocationEvent):
    item_id: str
    item_name: str
    reason: str
    detail: str

    @property
    def message(self) -> str:
        return self.detail


class SlotAllocator:
    """Decides which body slot or hand an entry occupies.

    Every operation updates the entry's own flags and the allocation table in
    one step and reports the outcome as events; rejections are events too.
    Table entries are copies and are matched back to list entries by id.
    """

    # ------------------------------------------------------------------ Toggles
    def toggle_item(self, equipped: Equipped, items: Sequence[Item], index: int) -> List[AllocationEvent]:
        item = items[index]
        if item.equipped:
            return self.unequip_item(equipped, item)
        return self.equip_item(equipped, item, items)

    def toggle_weapon(self, equipped: Equipped, weapons: Sequence[Weapon], index: int) -> List[AllocationEvent]:
        weapon = weapons[index]
        if weapon.equipped:
            return self.unequip_weapon(equipped, weapon)
        return self.equip_weapon(equipped, weapon)

    # ------------------------------------------------------------- Item actions
    def equip_item(self, equipped: Equipped, item: Item, items: Sequence[Item] = ()) -> List[AllocationEvent]:
        if item.slot in FIXED_SLOTS:
            return self._equip_fixed(equipped, item, items)
        if item.slot == "ring":
            return self._equip_ring(equipped, item)
        item.equipped = True
        return [ItemEquippedEvent(item_id=item.id, item_name=item.name, slot=None, category="item")]

    def unequip_item(self, equipped: Equipped, item: Item) -> List[AllocationEvent]:
        item.equipped = False
        candidates: tuple[str, ...] = ()
        if item.slot in FIXED_SLOTS:
            candidates = (item.slot,)
        elif item.slot == "ring":
            candidates = RING_SLOTS
        cleared: str | None = None
        for slot in candidates:
            occupant = equipped.get_item(slot)
            if occupant is not None and occupant.id == item.id:
                equipped.set_item(slot, None)
                cleared = slot
                break
        return [ItemUnequippedEvent(item_id=item.id, item_name=item.name, slot=cleared, category="item")]

    # ----------------------------------------------------------- Weapon actions
    def equip_weapon(
        self,
        equipped: Equipped,
        weapon: Weapon,
        *,
        hand: HandAssignment | None = None,
    ) -> List[AllocationEvent]:
        requested = hand if hand is not None else weapon.hand
        order = ("off_hand", "main_hand") if requested == "off" else ("main_hand", "off_hand")

        target = self._held_in(equipped, weapon)
        if target is None:
            target = next((field for field in order if equipped.get_weapon(field) is None), None)
        if target is None:
            weapon.equipped = False
            logger.info("No free hand for weapon %s (%s)", weapon.name, weapon.id)
            return [
                EquipFailedEvent(
                    item_id=weapon.id,
                    item_name=weapon.name,
                    reason="no_hand",
                    detail="No hand available for weapon",
                )
            ]

        weapon.equipped = True
        weapon.hand = _HAND_NAMES[target]
        equipped.set_weapon(target, replace(weapon))
        return [ItemEquippedEvent(item_id=weapon.id, item_name=weapon.name, slot=target, category="weapon")]

    def unequip_weapon(self, equipped: Equipped, weapon: Weapon) -> List[AllocationEvent]:
        weapon.equipped = False
        order = ("main_hand", "off_hand")
        if weapon.hand is not None:
            first = _HAND_FIELDS[weapon.hand]
            order = (first,) + tuple(field for field in order if field != first)
        cleared: str | None = None
        for field in order:
            occupant = equipped.get_weapon(field)
            if occupant is not None and occupant.id == weapon.id:
                equipped.set_weapon(field, None)
                cleared = field
                break
        weapon.hand = None
        return [ItemUnequippedEvent(item_id=weapon.id, item_name=weapon.name, slot=cleared, category="weapon")]

    # ------------------------------------------------------------ Internal impl
    def _equip_fixed(self, equipped: Equipped, item: Item, items: Sequence[Item]) -> List[AllocationEvent]:
        events: List[AllocationEvent] = []
        occupant = equipped.get_item(item.slot)
        if occupant is not None and occupant.id != item.id:
            for entry in items:
                if entry.id == occupant.id:
                    entry.equipped = False
            events.append(
                ItemUnequippedEvent(
                    item_id=occupant.id,
                    item_name=occupant.name,
                    slot=item.slot,
                    category="item",
                    displaced=True,
                )
            )
        item.equipped = True
        equipped.set_item(item.slot, replace(item))
        events.append(ItemEquippedEvent(item_id=item.id, item_name=item.name, slot=item.slot, category="item"))
        return events

    def _equip_ring(self, equipped: Equipped, item: Item) -> List[AllocationEvent]:
        target = next(
            (slot for slot in RING_SLOTS if self._occupant_id(equipped.get_item(slot)) == item.id),
            None,
        )
        if target is None:
            target = next((slot for slot in RING_SLOTS if equipped.get_item(slot) is None), None)
        if target is None:
            item.equipped = False
            logger.info("No free ring slot for %s (%s)", item.name, item.id)
            return [
                EquipFailedEvent(
                    item_id=item.id,
                    item_name=item.name,
                    reason="no_ring_slot",
                    detail="No ring slots available",
                )
            ]
        item.equipped = True
        equipped.set_item(target, replace(item))
        return [ItemEquippedEvent(item_id=item.id, item_name=item.name, slot=target, category="item")]

    def _held_in(self, equipped: Equipped, weapon: Weapon) -> str | None:
        for field in ("main_hand", "off_hand"):
            if self._occupant_id(equipped.get_weapon(field)) == weapon.id:
                return field
        return None

    @staticmethod
    def _occupant_id(occupant: Item | Weapon | None) -> str | None:
        return occupant.id if occupant is not None else None
