"""SRD reference collections used by the add affordances."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence

from charsheet.data.errors import DataError
from charsheet.data.repositories import EquipmentRepository, SpellsRepository, WeaponsRepository
from charsheet.data.repositories.base import RepositoryBase
from charsheet.domain.character import Item, Skill, Spell, Weapon
from charsheet.domain.defs import EquipmentDef, SpellDef, WeaponDef

logger = logging.getLogger(__name__)

STANDARD_SKILLS: tuple[str, ...] = (
    "Acrobatics",
    "Animal Handling",
    "Arcana",
    "Athletics",
    "Deception",
    "History",
    "Insight",
    "Intimidation",
    "Investigation",
    "Medicine",
    "Nature",
    "Perception",
    "Performance",
    "Persuasion",
    "Religion",
    "Sleight of Hand",
    "Stealth",
    "Survival",
)


@dataclass(slots=True)
class ReferenceLibrary:
    """Loaded SRD templates plus the errors hit while loading them."""

    equipment: List[EquipmentDef] = field(default_factory=list)
    weapons: List[WeaponDef] = field(default_factory=list)
    spells: List[SpellDef] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


def load_reference_library(base_path: Path | str | None = None) -> ReferenceLibrary:
    """Load each reference collection independently.

    A collection that fails to load is left empty and its error recorded;
    the others are still loaded.
    """
    library = ReferenceLibrary()
    library.equipment = _load_all(EquipmentRepository(base_path), library.errors)
    library.weapons = _load_all(WeaponsRepository(base_path), library.errors)
    library.spells = _load_all(SpellsRepository(base_path), library.errors)
    return library


def _load_all(repo: RepositoryBase, errors: List[str]) -> list:
    try:
        definitions = repo.all()
    except DataError as exc:
        logger.warning("Error loading %s: %s", exc.path or repo.filename, exc)
        errors.append(f"Error loading {repo.filename}: {exc}")
        return []
    logger.debug("Loaded %d definitions from %s", len(definitions), repo.filename)
    return definitions


def item_from_def(definition: EquipmentDef) -> Item:
    return Item(
        name=definition.name,
        description=definition.description,
        weight=definition.weight,
        cost=definition.cost,
        slot=definition.slot,
    )


def weapon_from_def(definition: WeaponDef) -> Weapon:
    return Weapon(
        name=definition.name,
        description=definition.description,
        damage=definition.damage,
        properties=definition.properties,
        weight=definition.weight,
        cost=definition.cost,
    )


def spell_from_def(definition: SpellDef) -> Spell:
    return Spell(
        name=definition.name,
        description=definition.description,
        level=definition.level,
        school=definition.school,
    )


def next_unused(definitions: Sequence, present_names: Sequence[str]):
    """Return the first definition whose name is not already present."""
    taken = set(present_names)
    for definition in definitions:
        if definition.name not in taken:
            return definition
    return None


def next_standard_skill(skills: Sequence[Skill]) -> Skill | None:
    taken = {skill.name for skill in skills}
    for name in STANDARD_SKILLS:
        if name not in taken:
            return Skill(name=name)
    return None
