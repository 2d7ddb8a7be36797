"""Textual host for the pixel editor."""

from .controller import (
    CanvasView,
    TextualPixelAdapter,
    TextualUIHooks,
    token_from_textual,
)

__all__ = [
    "CanvasView",
    "TextualPixelAdapter",
    "TextualUIHooks",
    "token_from_textual",
]
