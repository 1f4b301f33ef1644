"""Console-driven editor loop for CharSheet."""
from __future__ import annotations

import logging
from pathlib import Path

from rich.console import Console
from rich.prompt import Prompt

from charsheet.domain.editor_state import EditorState
from charsheet.domain.staging import FIELD_SPECS
from charsheet.presentation.cli.keys import action_for_key, read_key
from charsheet.presentation.cli.render import render_screen
from charsheet.services import CharacterStore, SlotAllocator, load_reference_library
from charsheet.services.controllers import EditorAction, EditorController
from charsheet.services.controllers.editor_controller import QuitRequestedEvent

logger = logging.getLogger(__name__)


def main(
    *,
    characters_dir: Path | str = "characters",
    reference_dir: Path | str | None = None,
    console: Console | None = None,
) -> None:
    """Start the interactive editor session."""
    console = console or Console()
    controller = _build_controller(characters_dir, reference_dir)
    state = EditorState.for_character()
    if controller.reference.errors:
        state.message = "; ".join(controller.reference.errors)
    logger.info("Editor session started (characters in %s)", characters_dir)
    _run_loop(console, controller, state)
    console.print("Goodbye!")


def _build_controller(characters_dir: Path | str, reference_dir: Path | str | None) -> EditorController:
    """Construct the EditorController with concrete stores."""
    reference = load_reference_library(reference_dir)
    return EditorController(
        store=CharacterStore(characters_dir),
        allocator=SlotAllocator(),
        reference=reference,
    )


def _run_loop(console: Console, controller: EditorController, state: EditorState) -> None:
    while True:
        console.clear()
        console.print(render_screen(state, controller.focused_field(state)))
        try:
            key = read_key()
        except KeyboardInterrupt:
            key = "ctrl+c"
        action_type = action_for_key(key)
        if action_type is None:
            continue
        action = _build_action(console, controller, state, action_type)
        if action is None:
            continue
        events = controller.dispatch(state, action)
        if any(isinstance(event, QuitRequestedEvent) for event in events):
            logger.info("Editor session ended")
            return


def _build_action(
    console: Console,
    controller: EditorController,
    state: EditorState,
    action_type: str,
) -> EditorAction | None:
    """Attach prompted text to the actions that need it."""
    if state.mode != "edit":
        return EditorAction(action_type=action_type)
    if action_type == "stage_value":
        key = controller.focused_field(state)
        if key is None:
            return None
        text = _prompt(console, FIELD_SPECS[key].label, default=state.staging.get(key))
        if text is None:
            return None
        return EditorAction(action_type="stage_value", field_key=key, text=text)
    if action_type == "add_sample" and state.active_tab_id == "proficiencies":
        text = _prompt(console, "New proficiency")
        if text is None:
            return None
        return EditorAction(action_type="add_sample", text=text)
    return EditorAction(action_type=action_type)


def _prompt(console: Console, label: str, *, default: str = "") -> str | None:
    try:
        return Prompt.ask(label, console=console, default=default, show_default=bool(default))
    except (EOFError, KeyboardInterrupt):
        return None
