"""Key token notation, remap table and remap resolution."""

from .models import (
    BACKSPACE,
    ENTER,
    ESC,
    Binding,
    KeySequence,
    KeyToken,
    MalformedToken,
    parse,
    parse_token,
    render,
    render_sequence,
)
from .registry import KeymapRegistry, RegistryStats, RemapCycle
from .resolver import KeymapResolver, ResolutionResult
from .defaults import load_default_keymaps

__all__ = [
    "BACKSPACE",
    "ENTER",
    "ESC",
    "Binding",
    "KeySequence",
    "KeyToken",
    "MalformedToken",
    "parse",
    "parse_token",
    "render",
    "render_sequence",
    "KeymapRegistry",
    "RegistryStats",
    "RemapCycle",
    "KeymapResolver",
    "ResolutionResult",
    "load_default_keymaps",
]
