"""Single-key terminal input and the key map for the editor."""
from __future__ import annotations

import os
import sys
from typing import Dict

from charsheet.services.controllers.editor_controller import EditorActionType

KEYMAP: Dict[str, EditorActionType] = {
    "right": "advance",
    "l": "advance",
    "n": "advance",
    "left": "retreat",
    "h": "retreat",
    "p": "retreat",
    "tab": "next_tab",
    "shift+tab": "prev_tab",
    "e": "enter_edit",
    "v": "enter_view",
    "enter": "commit",
    "space": "toggle_equip",
    "i": "show_inventory",
    "w": "show_equipped",
    "a": "add_sample",
    "A": "add_reference",
    "down": "focus_next_field",
    "up": "focus_prev_field",
    "c": "stage_value",
    "s": "save",
    "o": "load",
    "q": "quit",
    "ctrl+c": "quit",
}

_ESCAPE_SEQUENCES: Dict[str, str] = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1b[Z": "shift+tab",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
}

# msvcrt reports arrows as a 0x00/0xe0 prefix followed by a scan code.
_WINDOWS_SCAN_CODES: Dict[str, str] = {
    "H": "up",
    "P": "down",
    "M": "right",
    "K": "left",
}


def normalize_key(raw: str) -> str:
    """Turn the characters read for one key press into a key name."""
    if raw in _ESCAPE_SEQUENCES:
        return _ESCAPE_SEQUENCES[raw]
    if raw in ("\r", "\n"):
        return "enter"
    if raw == "\t":
        return "tab"
    if raw == " ":
        return "space"
    if raw == "\x03":
        return "ctrl+c"
    if raw == "\x1b":
        return "escape"
    return raw


def action_for_key(key: str) -> EditorActionType | None:
    return KEYMAP.get(key)


def read_key() -> str:
    """Block until one key press and return its normalized name."""
    if os.name == "nt":
        return _read_key_windows()
    return _read_key_posix()


def _read_key_windows() -> str:
    import msvcrt

    char = msvcrt.getwch()
    if char in ("\x00", "\xe0"):
        code = msvcrt.getwch()
        return _WINDOWS_SCAN_CODES.get(code, "")
    return normalize_key(char)


def _read_key_posix() -> str:
    import select
    import termios
    import tty

    fd = sys.stdin.fileno()
    previous = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        raw = os.read(fd, 1).decode("utf-8", errors="ignore")
        if raw == "\x1b":
            # Collect the rest of an escape sequence if one is pending.
            while select.select([fd], [], [], 0.05)[0]:
                raw += os.read(fd, 1).decode("utf-8", errors="ignore")
                if len(raw) >= 3:
                    break
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, previous)
    return normalize_key(raw)
