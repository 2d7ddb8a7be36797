"""Command-line commands: quitting and user remaps."""

from __future__ import annotations

from functools import partial
from typing import List

from vipix.canvas import EditorState
from vipix.modes import Engine, Mode

from .registry import CommandError


def quit_editor(engine: Engine, state: EditorState, args: List[str]) -> None:
    del state, args
    engine.close()


def map_keys(
    engine: Engine, state: EditorState, args: List[str], *, mode: Mode
) -> None:
    """``<x>map <trigger> <expansion>``: remap keys for ``mode``."""

    del state
    if len(args) != 2:
        raise CommandError("expected <trigger> <expansion>")
    trigger, expansion = args
    engine.bind_key(trigger, mode, expansion)
    engine.report(f"{trigger} -> {expansion}")


_COMMANDS = {
    "q": quit_editor,
    "quit": quit_editor,
    "imap": partial(map_keys, mode=Mode.INSERTION),
    "nmap": partial(map_keys, mode=Mode.NORMAL),
    "vmap": partial(map_keys, mode=Mode.VISUAL),
}


def register_commands(engine: Engine) -> None:
    for name, handler in _COMMANDS.items():
        engine.add_command(name, handler)


__all__ = ["map_keys", "quit_editor", "register_commands"]
