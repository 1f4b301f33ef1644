"""List selection cursors used as the target of equip actions."""
from __future__ import annotations

from dataclasses import dataclass

NO_SELECTION = -1


@dataclass(slots=True)
class SelectionCursor:
    """Index into a displayed list; -1 means nothing is selected."""

    index: int = NO_SELECTION

    def advance(self, length: int) -> None:
        if length <= 0:
            self.index = NO_SELECTION
            return
        if self.index < 0:
            self.index = 0
            return
        self.index = (self.index + 1) % length

    def retreat(self, length: int) -> None:
        """Step back one entry; from no selection this lands on the last entry,
        mirroring advance landing on the first.
        """
        if length <= 0:
            self.index = NO_SELECTION
            return
        if self.index < 0:
            self.index = length - 1
            return
        self.index = (self.index - 1) % length

    def reset(self) -> None:
        self.index = NO_SELECTION

    def selected(self, length: int) -> int | None:
        """Return the index when it points inside a list of `length`, else None."""
        if 0 <= self.index < length:
            return self.index
        return None
