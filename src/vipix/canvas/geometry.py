"""Rasterize a visual-mode rectangle into the pixels it covers."""

from __future__ import annotations

from enum import Enum
from typing import FrozenSet, Iterator, Tuple

Coord = Tuple[int, int]  # (x, y)

# Squared-distance band around r**2 that counts as "on" the circle.
CIRCLE_TOLERANCE = 2.0


class RegionPolicy(str, Enum):
    """Shape rule applied to the anchor/cursor rectangle."""

    SQUARE = "square"
    CIRCLE = "circle"

    def __str__(self) -> str:
        return self.value

    def select_pixels(self, start: Coord, end: Coord) -> FrozenSet[Coord]:
        return select_pixels(self, start, end)


def normalize_rect(a: Coord, b: Coord) -> tuple[Coord, Coord]:
    """Return ``(top_left, bottom_right)`` for two arbitrary corners."""

    (ax, ay), (bx, by) = a, b
    return (min(ax, bx), min(ay, by)), (max(ax, bx), max(ay, by))


def _rectangle(start: Coord, end: Coord) -> Iterator[Coord]:
    (x1, y1), (x2, y2) = start, end
    for x in range(x1, x2 + 1):
        for y in range(y1, y2 + 1):
            yield (x, y)


def _on_ring(coord: Coord, center: Coord, radius: float) -> bool:
    dx = center[0] - coord[0]
    dy = center[1] - coord[1]
    return abs((dx * dx + dy * dy) - radius * radius) <= CIRCLE_TOLERANCE


def select_pixels(policy: RegionPolicy, start: Coord, end: Coord) -> FrozenSet[Coord]:
    """Pixels covered by ``policy`` over the normalized rectangle ``start``-``end``.

    ``SQUARE`` fills the closed rectangle. ``CIRCLE`` keeps the thin ring of
    pixels whose squared distance to the integer center lies within
    ``CIRCLE_TOLERANCE`` of ``r**2``, where ``r`` is half the width.
    """

    (x1, y1), (x2, y2) = start, end
    if x1 > x2 or y1 > y2:
        raise ValueError(f"rectangle corners not normalized: {start} {end}")

    if policy is RegionPolicy.SQUARE:
        return frozenset(_rectangle(start, end))

    center = ((x1 + x2) // 2, (y1 + y2) // 2)
    radius = (x2 - x1) / 2.0
    return frozenset(c for c in _rectangle(start, end) if _on_ring(c, center, radius))


__all__ = [
    "CIRCLE_TOLERANCE",
    "Coord",
    "RegionPolicy",
    "normalize_rect",
    "select_pixels",
]
