"""Visual mode: normal-mode grammar plus a selection anchor."""

from __future__ import annotations

from typing import Any

from vipix.keymaps import KeyToken

from .base_mode import Mode, ModeResult
from .normal_mode import NormalMode


class VisualMode(NormalMode):
    name = Mode.VISUAL

    def on_enter(self, previous: Mode | None) -> None:
        del previous
        self.engine._anchor = self.engine.cursor
        self._publish()

    def on_exit(self, next_mode: Mode | None) -> None:
        del next_mode
        self.engine._anchor = None

    def handle_key(self, token: KeyToken, state: Any) -> ModeResult:
        result = super().handle_key(token, state)
        if result.status == "motion" and self.engine.mode is Mode.VISUAL:
            self._publish()
            result.status = "visual_select"
        return result

    def _publish(self) -> None:
        start, end = self.engine.get_selection()
        self.engine.bus.emit(
            "visual.selection",
            {
                "anchor": self.engine.anchor,
                "cursor": self.engine.cursor,
                "rect": (start, end),
                "policy": self.engine.region_policy,
            },
        )


__all__ = ["VisualMode"]
