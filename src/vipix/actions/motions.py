"""Cursor motions (objects) that wrap around the canvas edges."""

from __future__ import annotations

from typing import Callable, List

from vipix.canvas import Coord, EditorState
from vipix.modes import Engine

# key -> (dx, dy, description); y grows downwards.
DIRECTIONS: dict[str, tuple[int, int, str]] = {
    "h": (-1, 0, "Move left"),
    "j": (0, 1, "Move down"),
    "k": (0, -1, "Move up"),
    "l": (1, 0, "Move right"),
    ".": (0, 0, "Stay on the current pixel"),
}


def displacement(dx: int, dy: int) -> Callable[[Engine, EditorState], List[Coord]]:
    """Build an object that shifts the cursor by ``(dx, dy)``."""

    def move(engine: Engine, state: EditorState) -> List[Coord]:
        start = engine.cursor
        width, height = state.canvas.size()
        end = engine.wrapping_displace(dx, dy, width, height)
        return [start, end]

    return move


def register_motions(engine: Engine) -> None:
    for key, (dx, dy, description) in DIRECTIONS.items():
        engine.add_object(key, displacement(dx, dy), description=description)


__all__ = ["DIRECTIONS", "displacement", "register_motions"]
