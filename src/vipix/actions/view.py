"""Zoom and pan verbs; they only touch view fields of the host state."""

from __future__ import annotations

from functools import partial
from typing import Optional

from vipix.canvas import EditorState
from vipix.modes import Engine

from .registry import Positions

DEFAULT_ZOOM_STEP = 0.1
MIN_ZOOM = 0.1

PAN_KEYS: dict[str, tuple[float, float]] = {
    "H": (-1.0, 0.0),
    "J": (0.0, 1.0),
    "K": (0.0, -1.0),
    "L": (1.0, 0.0),
}


def zoom(
    engine: Engine,
    state: EditorState,
    positions: Optional[Positions],
    *,
    step: float,
) -> None:
    del engine, positions
    state.zoom = max(MIN_ZOOM, round(state.zoom + step, 6))


def pan(
    engine: Engine,
    state: EditorState,
    positions: Optional[Positions],
    *,
    dx: float,
    dy: float,
) -> None:
    del engine, positions
    cx, cy = state.center
    state.center = (cx + dx, cy + dy)


def register_view_verbs(engine: Engine, *, zoom_step: float = DEFAULT_ZOOM_STEP) -> None:
    engine.add_verb("+", False, partial(zoom, step=zoom_step), description="Zoom in")
    engine.add_verb("-", False, partial(zoom, step=-zoom_step), description="Zoom out")
    for key, (dx, dy) in PAN_KEYS.items():
        engine.add_verb(key, False, partial(pan, dx=dx, dy=dy), description="Pan view")


__all__ = [
    "DEFAULT_ZOOM_STEP",
    "MIN_ZOOM",
    "PAN_KEYS",
    "pan",
    "register_view_verbs",
    "zoom",
]
