"""Insertion mode: keys become paint strokes unless a verb claims them."""

from __future__ import annotations

from typing import Any

from vipix.keymaps import KeyToken, render
from vipix.runtime import telemetry

from .base_mode import BaseMode, Mode, ModeResult


class InsertMode(BaseMode):
    name = Mode.INSERTION

    def handle_key(self, token: KeyToken, state: Any) -> ModeResult:
        engine = self.engine
        verb = engine.actions.get_verb(self.name, token)
        if verb is not None:
            self._run_verb(verb, state, None)
            return ModeResult(consumed=True, status="verb")

        obj = engine.actions.get_object(self.name, token)
        if obj is not None:
            self._run_object(obj, state)
            return ModeResult(consumed=True, status="motion")

        if engine.edit_handler is None:
            return ModeResult(consumed=False, status="miss")

        with telemetry.span(
            "actions::edit",
            component="actions",
            metadata={"key": render(token), "cursor": engine.cursor},
        ):
            engine.edit_handler(engine, state, token)
        return ModeResult(consumed=True, status="edit")


__all__ = ["InsertMode"]
