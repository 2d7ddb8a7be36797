"""In-memory RGB pixel canvas."""

from __future__ import annotations

from typing import List, Tuple

from .geometry import Coord

Color = Tuple[int, int, int]

BLACK: Color = (0, 0, 0)
WHITE: Color = (255, 255, 255)

PixelGrid = Tuple[Tuple[Color, ...], ...]


def _ensure_color(color: Color) -> Color:
    if len(color) != 3 or any(not 0 <= int(c) <= 255 for c in color):
        raise ValueError(f"invalid RGB color {color!r}")
    return (int(color[0]), int(color[1]), int(color[2]))


class Canvas:
    """Fixed-size grid of RGB pixels addressed as ``(x, y)``."""

    def __init__(self, width: int, height: int, *, fill: Color = BLACK) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("canvas dimensions must be positive")
        self.width = width
        self.height = height
        fill = _ensure_color(fill)
        self._rows: List[List[Color]] = [[fill] * width for _ in range(height)]
        self.version = 0

    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def set_pixel_color(self, x: int, y: int, color: Color) -> None:
        if not self.contains(x, y):
            raise IndexError(f"pixel {(x, y)} outside {self.width}x{self.height} canvas")
        self._rows[y][x] = _ensure_color(color)
        self.version += 1

    def get_pixel_color(self, x: int, y: int) -> Color:
        if not self.contains(x, y):
            raise IndexError(f"pixel {(x, y)} outside {self.width}x{self.height} canvas")
        return self._rows[y][x]

    def paint(self, positions, color: Color) -> int:
        """Set every coordinate in ``positions``; return how many were painted."""

        count = 0
        for x, y in positions:
            self.set_pixel_color(x, y, color)
            count += 1
        return count

    def as_pixel_grid(self) -> PixelGrid:
        """Read-only row-major snapshot (``grid[y][x]``)."""

        return tuple(tuple(row) for row in self._rows)

    def painted(self, background: Color = BLACK) -> set[Coord]:
        return {
            (x, y)
            for y, row in enumerate(self._rows)
            for x, color in enumerate(row)
            if color != background
        }


__all__ = ["BLACK", "Canvas", "Color", "PixelGrid", "WHITE"]
