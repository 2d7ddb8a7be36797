"""Mode-switching verbs and the verbs that act on traversal sets."""

from __future__ import annotations

from typing import Optional

from vipix.canvas import WHITE, EditorState, RegionPolicy
from vipix.modes import Engine, Mode

from .registry import Positions

ALL_EDITING_MODES = (Mode.NORMAL, Mode.VISUAL, Mode.INSERTION)


def enter_insert_mode(
    engine: Engine, state: EditorState, positions: Optional[Positions]
) -> None:
    """Enter insertion; coming from visual, the highlighted pixels become the selection."""

    del positions
    if engine.mode is Mode.VISUAL:
        state.selection.clear()
        state.selection.update(engine.visual_selection())
    engine.set_mode(Mode.INSERTION)


def enter_square_visual(
    engine: Engine, state: EditorState, positions: Optional[Positions]
) -> None:
    del state, positions
    engine.region_policy = RegionPolicy.SQUARE
    engine.set_mode(Mode.VISUAL)


def enter_circle_visual(
    engine: Engine, state: EditorState, positions: Optional[Positions]
) -> None:
    del state, positions
    engine.region_policy = RegionPolicy.CIRCLE
    engine.set_mode(Mode.VISUAL)


def enter_command_mode(
    engine: Engine, state: EditorState, positions: Optional[Positions]
) -> None:
    del state, positions
    engine.set_mode(Mode.COMMAND)


def escape(engine: Engine, state: EditorState, positions: Optional[Positions]) -> None:
    del positions
    state.clear_selection()
    engine.set_mode(Mode.NORMAL)


def paint_white(
    engine: Engine, state: EditorState, positions: Optional[Positions]
) -> None:
    del engine
    state.canvas.paint(positions or (), WHITE)


def noop(engine: Engine, state: EditorState, positions: Optional[Positions]) -> None:
    del engine, state, positions


def register_core_verbs(engine: Engine) -> None:
    engine.add_verb(":", False, enter_command_mode, description="Enter command mode")
    engine.add_verb("i", False, enter_insert_mode, description="Enter insertion mode")
    engine.add_verb("v", False, enter_square_visual, description="Square selection")
    engine.add_verb("V", False, enter_circle_visual, description="Circle selection")
    engine.add_verb(
        "<Esc>",
        False,
        escape,
        modes=ALL_EDITING_MODES,
        description="Clear selection and return to normal mode",
    )
    engine.add_verb("s", True, paint_white, description="Paint the motion's pixels white")
    engine.add_verb("_", True, noop, description="Consume a motion without acting")


__all__ = [
    "ALL_EDITING_MODES",
    "enter_circle_visual",
    "enter_command_mode",
    "enter_insert_mode",
    "enter_square_visual",
    "escape",
    "noop",
    "paint_white",
    "register_core_verbs",
]
