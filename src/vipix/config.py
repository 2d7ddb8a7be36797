"""Editor configuration, with ``VIPIX_*`` environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Callable, Dict, Mapping, Optional, TypeVar

from vipix.canvas import DEFAULT_COLORS, Color
from vipix.modes import DEFAULT_MAX_REMAP_DEPTH

ENV_PREFIX = "VIPIX_"

T = TypeVar("T")


def _env_value(
    env: Mapping[str, str], name: str, cast: Callable[[str], T], fallback: T
) -> T:
    raw = env.get(f"{ENV_PREFIX}{name}")
    if raw is None:
        return fallback
    try:
        return cast(raw)
    except ValueError:
        return fallback


def _positive(cast: Callable[[str], T]) -> Callable[[str], T]:
    def parse(raw: str) -> T:
        value = cast(raw)
        if value <= 0:  # type: ignore[operator]
            raise ValueError(raw)
        return value

    return parse


@dataclass(slots=True)
class EditorConfig:
    """Knobs used when assembling an editor."""

    canvas_width: int = 16
    canvas_height: int = 16
    window_width: int = 800
    window_height: int = 600
    zoom: float = 1.0
    zoom_step: float = 0.1
    max_remap_depth: int = DEFAULT_MAX_REMAP_DEPTH
    palette: Dict[str, Color] = field(default_factory=lambda: dict(DEFAULT_COLORS))

    def __post_init__(self) -> None:
        if self.canvas_width <= 0 or self.canvas_height <= 0:
            raise ValueError("canvas dimensions must be positive")
        if self.max_remap_depth <= 0:
            raise ValueError("max_remap_depth must be positive")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "EditorConfig":
        """Read overrides from ``env`` (default ``os.environ``); bad values fall back."""

        source = os.environ if env is None else env
        defaults = cls()
        return cls(
            canvas_width=_env_value(
                source, "CANVAS_WIDTH", _positive(int), defaults.canvas_width
            ),
            canvas_height=_env_value(
                source, "CANVAS_HEIGHT", _positive(int), defaults.canvas_height
            ),
            zoom_step=_env_value(
                source, "ZOOM_STEP", _positive(float), defaults.zoom_step
            ),
            max_remap_depth=_env_value(
                source, "MAX_REMAP_DEPTH", _positive(int), defaults.max_remap_depth
            ),
        )


__all__ = ["ENV_PREFIX", "EditorConfig"]
