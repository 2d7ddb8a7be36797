"""Assemble a ready-to-use pixel editor: engine, built-ins and host state."""

from __future__ import annotations

from typing import Optional, Tuple

from vipix.actions.command import register_commands
from vipix.actions.core import register_core_verbs
from vipix.actions.motions import register_motions
from vipix.actions.view import register_view_verbs
from vipix.canvas import Canvas, Coord, EditorState, Palette
from vipix.config import EditorConfig
from vipix.keymaps import KeyToken
from vipix.modes import Engine, WindowEvent


def edit_positions(engine: Engine, state: EditorState) -> set[Coord]:
    """Pixels an insertion keystroke affects: the selection, else the cursor."""

    if state.selection:
        return set(state.selection)
    return {engine.cursor}


def paint_key(engine: Engine, state: EditorState, token: KeyToken) -> None:
    """Insertion-mode edit: paint the token's palette color, if it has one."""

    color = state.palette.get(token)
    if color is None:
        return
    state.canvas.paint(edit_positions(engine, state), color)


def on_window_event(state: EditorState, event: WindowEvent) -> None:
    if event.kind != "resize" or event.width <= 0 or event.height <= 0:
        return
    state.scale = (1.0 / event.width, 1.0 / event.height)
    state.window_size = (float(event.width), float(event.height))
    state.must_resize = True


def create_engine(config: Optional[EditorConfig] = None) -> Engine:
    """Build an engine with every built-in object, verb, command and remap."""

    config = config or EditorConfig()
    engine = Engine(paint_key, max_remap_depth=config.max_remap_depth)
    engine.set_window_event_listener(on_window_event)
    register_motions(engine)
    register_core_verbs(engine)
    register_view_verbs(engine, zoom_step=config.zoom_step)
    register_commands(engine)
    return engine


def create_state(config: Optional[EditorConfig] = None) -> EditorState:
    config = config or EditorConfig()
    width, height = config.canvas_width, config.canvas_height
    window = (float(config.window_width), float(config.window_height))
    return EditorState(
        canvas=Canvas(width, height),
        palette=Palette(config.palette),
        zoom=config.zoom,
        center=(-width / 2.0, -height / 2.0),
        scale=(1.0 / window[0], 1.0 / window[1]),
        window_size=window,
    )


def create_editor(
    config: Optional[EditorConfig] = None,
) -> Tuple[Engine, EditorState]:
    config = config or EditorConfig()
    return create_engine(config), create_state(config)


__all__ = [
    "create_editor",
    "create_engine",
    "create_state",
    "edit_positions",
    "on_window_event",
    "paint_key",
]
