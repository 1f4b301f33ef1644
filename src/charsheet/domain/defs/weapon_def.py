"""Reference weapon definition structures."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class WeaponDef:
    """Weapon template from the SRD reference list."""

    name: str
    cost: str = ""
    damage: str = ""
    weight: str = ""
    properties: str = ""
    description: str = ""
