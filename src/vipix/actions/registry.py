"""Named objects (motions), verbs and line commands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    FrozenSet,
    Iterable,
    List,
    Optional,
    Sequence,
    Tuple,
)

from vipix.canvas.geometry import Coord
from vipix.keymaps import KeyToken, parse_token
from vipix.runtime.telemetry import span

if TYPE_CHECKING:  # pragma: no cover
    from vipix.modes.engine import Engine

Positions = Tuple[Coord, ...]
ObjectFn = Callable[["Engine", Any], Iterable[Coord]]
VerbFn = Callable[["Engine", Any, Optional[Positions]], None]
CommandFn = Callable[["Engine", Any, List[str]], None]

GRAMMAR_MODES: FrozenSet[str] = frozenset({"normal", "visual"})


class UnknownCommand(RuntimeError):
    """Raised when a command line names no registered command."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Not an editor command: {name}")
        self.name = name


class CommandError(RuntimeError):
    """Raised by command handlers when their arguments are unusable."""


def _modes(modes: Iterable[str] | None) -> FrozenSet[str]:
    if modes is None:
        return GRAMMAR_MODES
    values = frozenset(str(mode) for mode in modes)
    if not values:
        raise ValueError("handler must be active in at least one mode")
    return values


@dataclass(frozen=True, slots=True)
class ObjectHandler:
    """A motion: moves the cursor and reports the coordinates it crossed."""

    token: KeyToken
    handler: ObjectFn
    modes: FrozenSet[str] = GRAMMAR_MODES
    description: str = ""

    def __post_init__(self) -> None:
        if not callable(self.handler):
            raise TypeError("handler must be callable")

    def __call__(self, engine: "Engine", state: Any) -> Positions:
        # Order of first visit is kept; repeats collapse.
        return tuple(dict.fromkeys(self.handler(engine, state) or ()))


@dataclass(frozen=True, slots=True)
class VerbHandler:
    """An action, optionally waiting for an object's traversal set."""

    token: KeyToken
    requires_positions: bool
    handler: VerbFn
    modes: FrozenSet[str] = GRAMMAR_MODES
    description: str = ""

    def __post_init__(self) -> None:
        if not callable(self.handler):
            raise TypeError("handler must be callable")

    def __call__(
        self, engine: "Engine", state: Any, positions: Optional[Positions] = None
    ) -> None:
        self.handler(engine, state, positions)


@dataclass(frozen=True, slots=True)
class CommandHandler:
    """A command-line command invoked with whitespace-split arguments."""

    name: str
    handler: CommandFn
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name or any(ch.isspace() for ch in self.name):
            raise ValueError(f"invalid command name {self.name!r}")
        if not callable(self.handler):
            raise TypeError("handler must be callable")

    def __call__(self, engine: "Engine", state: Any, args: Sequence[str]) -> None:
        self.handler(engine, state, list(args))


class ActionRegistry:
    """Three independent name tables; registering a name again overwrites it."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._objects: Dict[KeyToken, ObjectHandler] = {}
        self._verbs: Dict[KeyToken, VerbHandler] = {}
        self._commands: Dict[str, CommandHandler] = {}
        self._logger_name = logger_name

    def add_object(
        self,
        name: KeyToken | str,
        handler: ObjectFn,
        *,
        modes: Iterable[str] | None = None,
        description: str = "",
    ) -> ObjectHandler:
        token = _token(name)
        with span(
            "actions::add_object",
            logger_name=self._logger_name,
            component="actions",
            metadata={"object": token},
        ):
            entry = ObjectHandler(
                token=token, handler=handler, modes=_modes(modes), description=description
            )
            self._objects[token] = entry
            return entry

    def add_verb(
        self,
        name: KeyToken | str,
        requires_positions: bool,
        handler: VerbFn,
        *,
        modes: Iterable[str] | None = None,
        description: str = "",
    ) -> VerbHandler:
        token = _token(name)
        with span(
            "actions::add_verb",
            logger_name=self._logger_name,
            component="actions",
            metadata={"verb": token, "requires_positions": requires_positions},
        ):
            entry = VerbHandler(
                token=token,
                requires_positions=bool(requires_positions),
                handler=handler,
                modes=_modes(modes),
                description=description,
            )
            self._verbs[token] = entry
            return entry

    def add_command(
        self, name: str, handler: CommandFn, *, description: str = ""
    ) -> CommandHandler:
        with span(
            "actions::add_command",
            logger_name=self._logger_name,
            component="actions",
            metadata={"command": name},
        ):
            entry = CommandHandler(name=name, handler=handler, description=description)
            self._commands[name] = entry
            return entry

    def get_object(self, mode: str, token: KeyToken) -> Optional[ObjectHandler]:
        entry = self._objects.get(token)
        if entry is None or str(mode) not in entry.modes:
            return None
        return entry

    def get_verb(self, mode: str, token: KeyToken) -> Optional[VerbHandler]:
        entry = self._verbs.get(token)
        if entry is None or str(mode) not in entry.modes:
            return None
        return entry

    def get_command(self, name: str) -> CommandHandler:
        entry = self._commands.get(name)
        if entry is None:
            raise UnknownCommand(name)
        return entry


def _token(name: KeyToken | str) -> KeyToken:
    if isinstance(name, KeyToken):
        return name
    return parse_token(name)


__all__ = [
    "ActionRegistry",
    "CommandError",
    "CommandHandler",
    "GRAMMAR_MODES",
    "ObjectHandler",
    "Positions",
    "UnknownCommand",
    "VerbHandler",
]
