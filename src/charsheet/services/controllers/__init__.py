"""UI-agnostic controllers for editor flow orchestration."""
from __future__ import annotations

from .editor_controller import EditorAction, EditorActionType, EditorController, EditorEvent

__all__ = [
    "EditorAction",
    "EditorActionType",
    "EditorController",
    "EditorEvent",
]
