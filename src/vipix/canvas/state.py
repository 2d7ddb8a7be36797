"""Host-owned editor state handed to verbs, objects and commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Set, Tuple

from .geometry import Coord
from .palette import Palette
from .pixmap import Canvas


@dataclass(slots=True)
class EditorState:
    """Everything the rendering side owns: pixels, palette, view and selection."""

    canvas: Canvas
    palette: Palette = field(default_factory=Palette)
    selection: Set[Coord] = field(default_factory=set)
    zoom: float = 1.0
    center: Tuple[float, float] = (0.0, 0.0)
    scale: Tuple[float, float] = (1.0, 1.0)
    window_size: Tuple[float, float] = (800.0, 600.0)
    must_resize: bool = False

    def clear_selection(self) -> None:
        self.selection.clear()


__all__ = ["EditorState"]
