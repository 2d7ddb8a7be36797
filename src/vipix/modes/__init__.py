"""Editing modes and the engine that dispatches keys between them."""

from .base_mode import BaseMode, Mode, ModeBus, ModeResult
from .normal_mode import NormalMode
from .insert_mode import InsertMode
from .visual_mode import VisualMode
from .command_mode import CommandMode
from .engine import DEFAULT_MAX_REMAP_DEPTH, Engine, WindowEvent

__all__ = [
    "BaseMode",
    "Mode",
    "ModeBus",
    "ModeResult",
    "NormalMode",
    "InsertMode",
    "VisualMode",
    "CommandMode",
    "DEFAULT_MAX_REMAP_DEPTH",
    "Engine",
    "WindowEvent",
]
