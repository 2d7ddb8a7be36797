"""Modal, vi-style pixel-art editing engine."""

__all__ = [
    "actions",
    "adapters",
    "canvas",
    "config",
    "editor",
    "keymaps",
    "modes",
    "runtime",
]

__version__ = "0.1.0"
