"""Reference spell definition structures."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class SpellDef:
    """Spell template from the SRD reference list."""

    name: str
    level: int = 0
    school: str = ""
    casting_time: str = ""
    range: str = ""
    components: str = ""
    duration: str = ""
    description: str = ""
    classes: str = ""
