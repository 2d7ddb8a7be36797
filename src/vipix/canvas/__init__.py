"""Pixel canvas, palette, host state and selection geometry."""

from .geometry import CIRCLE_TOLERANCE, Coord, RegionPolicy, normalize_rect, select_pixels
from .pixmap import BLACK, WHITE, Canvas, Color, PixelGrid
from .palette import DEFAULT_COLORS, Palette
from .state import EditorState

__all__ = [
    "BLACK",
    "CIRCLE_TOLERANCE",
    "Canvas",
    "Color",
    "Coord",
    "DEFAULT_COLORS",
    "EditorState",
    "Palette",
    "PixelGrid",
    "RegionPolicy",
    "WHITE",
    "normalize_rect",
    "select_pixels",
]
