"""Verb/object grammar shared by normal and visual mode."""

from __future__ import annotations

from typing import Any

from vipix.keymaps import KeyToken, render

from .base_mode import BaseMode, Mode, ModeResult


class NormalMode(BaseMode):
    name = Mode.NORMAL

    def handle_key(self, token: KeyToken, state: Any) -> ModeResult:
        engine = self.engine
        verb = engine.actions.get_verb(self.name, token)
        if verb is not None:
            if verb.requires_positions:
                engine._set_pending_verb(verb)
                return ModeResult(
                    consumed=True,
                    status="pending",
                    message="awaiting_object",
                )
            # A complete verb cancels whatever was waiting for an object.
            engine._take_pending_verb()
            self._run_verb(verb, state, None)
            return ModeResult(consumed=True, status="verb")

        obj = engine.actions.get_object(self.name, token)
        if obj is not None:
            pending = engine._take_pending_verb()
            positions = self._run_object(obj, state)
            if pending is None:
                return ModeResult(consumed=True, status="motion")
            self._run_verb(pending, state, positions)
            return ModeResult(consumed=True, status="verb")

        dropped = engine._take_pending_verb()
        self.logger.debug(f"unmatched key {render(token)} in {self.name.value}")
        return ModeResult(
            consumed=False,
            status="miss",
            message="operator_cancel" if dropped is not None else None,
        )


__all__ = ["NormalMode"]
