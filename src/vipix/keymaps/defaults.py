"""Built-in remaps seeded into every editor."""

from __future__ import annotations

from .registry import KeymapRegistry

INSERTION = "insertion"

# (mode, trigger, expansion)
DEFAULT_BINDINGS: tuple[tuple[str, str, str], ...] = (
    # Arrow keys leave insertion, move, and come straight back.
    (INSERTION, "<Left>", "<Esc>hi"),
    (INSERTION, "<Right>", "<Esc>li"),
    (INSERTION, "<Down>", "<Esc>ji"),
    (INSERTION, "<Up>", "<Esc>ki"),
)


def load_default_keymaps(registry: KeymapRegistry) -> None:
    for mode, trigger, expansion in DEFAULT_BINDINGS:
        registry.bind(mode, trigger, expansion, source="default")


__all__ = ["DEFAULT_BINDINGS", "load_default_keymaps"]
