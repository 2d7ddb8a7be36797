"""Base classes and shared types for editor modes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from vipix.actions.registry import ObjectHandler, Positions, VerbHandler
from vipix.keymaps import KeyToken, render
from vipix.runtime import telemetry

if TYPE_CHECKING:  # pragma: no cover
    from .engine import Engine


class Mode(str, Enum):
    """Editing modes; exactly one is active at a time."""

    NORMAL = "normal"
    INSERTION = "insertion"
    VISUAL = "visual"
    COMMAND = "command"

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return "INSERT" if self is Mode.INSERTION else self.value.upper()


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``BaseMode.handle_key``."""

    consumed: bool
    status: str = "ok"
    message: Optional[str] = None


class ModeBus:
    """Minimal event bus letting the engine publish structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class BaseMode:
    """Base class all concrete editor modes inherit from."""

    name: Mode = Mode.NORMAL

    def __init__(self, engine: "Engine") -> None:
        self.engine = engine
        self.logger = telemetry.get_logger(f"vipix.modes.{self.name.value}")

    def on_enter(
        self, previous: Optional[Mode]
    ) -> None:  # pragma: no cover - default no-op
        del previous

    def on_exit(
        self, next_mode: Optional[Mode]
    ) -> None:  # pragma: no cover - default no-op
        del next_mode

    def handle_key(
        self, token: KeyToken, state: Any
    ) -> ModeResult:  # pragma: no cover - abstract override
        raise NotImplementedError

    def _run_verb(
        self, verb: VerbHandler, state: Any, positions: Optional[Positions]
    ) -> None:
        with telemetry.span(
            "actions::verb",
            component="actions",
            metadata={
                "verb": render(verb.token),
                "positions": len(positions) if positions is not None else "none",
            },
        ):
            verb(self.engine, state, positions)

    def _run_object(self, obj: ObjectHandler, state: Any) -> Positions:
        with telemetry.span(
            "actions::object",
            component="actions",
            metadata={"object": render(obj.token)},
        ) as handle:
            positions = obj(self.engine, state)
            handle.add_metadata("visited", len(positions))
        return positions


__all__ = ["BaseMode", "Mode", "ModeBus", "ModeResult"]
