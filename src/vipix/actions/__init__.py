"""Object, verb and command registry plus the built-in handlers.

Built-ins live in ``motions``, ``core``, ``view`` and ``command``; each
exposes a ``register_*`` function taking the engine.
"""

from .registry import (
    GRAMMAR_MODES,
    ActionRegistry,
    CommandError,
    CommandHandler,
    ObjectHandler,
    Positions,
    UnknownCommand,
    VerbHandler,
)

__all__ = [
    "GRAMMAR_MODES",
    "ActionRegistry",
    "CommandError",
    "CommandHandler",
    "ObjectHandler",
    "Positions",
    "UnknownCommand",
    "VerbHandler",
]
