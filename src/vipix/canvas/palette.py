"""Key-to-color palette consulted while typing in insertion mode."""

from __future__ import annotations

from typing import Dict, Iterator, Mapping, Optional

from vipix.keymaps import KeyToken, parse_token, render

from .pixmap import Color, _ensure_color

DEFAULT_COLORS: Mapping[str, Color] = {
    "a": (255, 0, 0),
    "z": (0, 255, 0),
    "e": (0, 0, 255),
}


class Palette:
    """Maps key tokens (character plus modifiers) to RGB colors."""

    def __init__(self, colors: Mapping[str, Color] | None = None) -> None:
        self._colors: Dict[KeyToken, Color] = {}
        for notation, color in (colors if colors is not None else DEFAULT_COLORS).items():
            self.assign(notation, color)

    def assign(self, key: KeyToken | str, color: Color) -> None:
        token = key if isinstance(key, KeyToken) else parse_token(key)
        self._colors[token] = _ensure_color(color)

    def get(self, token: KeyToken) -> Optional[Color]:
        return self._colors.get(token)

    def __contains__(self, token: object) -> bool:
        return token in self._colors

    def __iter__(self) -> Iterator[KeyToken]:
        return iter(self._colors)

    def __len__(self) -> int:
        return len(self._colors)

    def legend(self) -> list[tuple[str, Color]]:
        return [(render(token), color) for token, color in self._colors.items()]


__all__ = ["DEFAULT_COLORS", "Palette"]
