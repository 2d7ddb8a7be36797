"""Command-line mode with inline editing."""

from __future__ import annotations

from typing import Any, List

from vipix.actions.registry import CommandError, UnknownCommand
from vipix.keymaps import BACKSPACE, ENTER, ESC, KeyToken, MalformedToken
from vipix.runtime import telemetry

from .base_mode import BaseMode, Mode, ModeResult


class CommandMode(BaseMode):
    name = Mode.COMMAND

    def __init__(self, engine) -> None:
        super().__init__(engine)
        self._typed: List[str] = []

    def on_enter(self, previous: Mode | None) -> None:
        del previous
        self._typed.clear()
        self.engine.bus.emit("command.start", None)

    def on_exit(self, next_mode: Mode | None) -> None:
        del next_mode
        self.engine.bus.emit("command.end", self.current_command)
        self._typed.clear()

    @property
    def current_command(self) -> str:
        return "".join(self._typed)

    def handle_key(self, token: KeyToken, state: Any) -> ModeResult:
        if token == ESC:
            self.engine.set_mode(Mode.NORMAL)
            return ModeResult(consumed=True, status="command_cancel")

        if token == ENTER:
            return self._submit(state)

        if token == BACKSPACE:
            if not self._typed:
                self.engine.set_mode(Mode.NORMAL)
                return ModeResult(consumed=True, status="command_cancel")
            self._typed.pop()
            return ModeResult(consumed=True, status="editing")

        if token.printable and token.text:
            self._typed.append(token.text)
            return ModeResult(consumed=True, status="editing")

        return ModeResult(consumed=False, status="miss", message="unhandled")

    def _submit(self, state: Any) -> ModeResult:
        engine = self.engine
        text = self.current_command.strip()
        self._typed.clear()
        engine.bus.emit("command.submit", text)

        try:
            if not text:
                return ModeResult(consumed=True, status="command_empty")
            name, *args = text.split()
            return self._invoke(state, name, args)
        finally:
            # A command may already have picked the next mode (or closed the editor).
            if engine.mode is Mode.COMMAND:
                engine.set_mode(Mode.NORMAL)

    def _invoke(self, state: Any, name: str, args: List[str]) -> ModeResult:
        engine = self.engine
        with telemetry.span(
            "command::execute",
            component="commands",
            metadata={"command": name, "args": args},
        ) as handle:
            try:
                command = engine.actions.get_command(name)
                command(engine, state, args)
            except UnknownCommand as exc:
                handle.warn("unknown_command")
                telemetry.record_event(
                    "command.unknown", level="warning", data={"command": name}
                )
                engine.bus.emit("command.error", name)
                engine.report(str(exc))
                return ModeResult(consumed=True, status="command_error", message=str(exc))
            except (CommandError, MalformedToken) as exc:
                handle.warn("command_failed")
                engine.bus.emit("command.error", name)
                engine.report(f"{name}: {exc}")
                return ModeResult(
                    consumed=True, status="command_error", message=f"{name}: {exc}"
                )
            except Exception as exc:
                handle.fail(repr(exc))
                self.logger.error(f"command {name} failed: {exc!r}")
                engine.bus.emit("command.error", name)
                engine.report(f"{name}: {exc!r}")
                return ModeResult(
                    consumed=True, status="command_error", message=f"{name}: {exc!r}"
                )
        return ModeResult(consumed=True, status="command", message=name)


__all__ = ["CommandMode"]
