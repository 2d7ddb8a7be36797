"""The modal dispatcher: owns mode, cursor and anchor, and routes keys."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    Deque,
    Dict,
    FrozenSet,
    Iterable,
    List,
    Literal,
    Optional,
    Tuple,
    Union,
)

from vipix.actions.registry import (
    ActionRegistry,
    CommandFn,
    CommandHandler,
    ObjectFn,
    ObjectHandler,
    VerbFn,
    VerbHandler,
)
from vipix.canvas.geometry import Coord, RegionPolicy, normalize_rect, select_pixels
from vipix.keymaps import (
    Binding,
    KeymapRegistry,
    KeymapResolver,
    KeySequence,
    KeyToken,
    RemapCycle,
    load_default_keymaps,
    parse,
    render,
)
from vipix.runtime import telemetry

from .base_mode import BaseMode, Mode, ModeBus, ModeResult
from .command_mode import CommandMode
from .insert_mode import InsertMode
from .normal_mode import NormalMode
from .visual_mode import VisualMode

DEFAULT_MAX_REMAP_DEPTH = 32

EditHandler = Callable[["Engine", Any, KeyToken], None]
WindowListener = Callable[[Any, "WindowEvent"], None]


@dataclass(frozen=True, slots=True)
class WindowEvent:
    """Window-level notification delivered by the host alongside key presses."""

    kind: Literal["resize", "close"]
    width: int = 0
    height: int = 0

    @classmethod
    def resize(cls, width: int, height: int) -> "WindowEvent":
        return cls("resize", width, height)

    @classmethod
    def close(cls) -> "WindowEvent":
        return cls("close")


QueuedEvent = Union[KeyToken, WindowEvent]


class Engine:
    """Turns a stream of key tokens into verbs, motions and commands.

    The engine owns mode, cursor, selection anchor, region policy, the
    command-line buffer and the pending-verb slot. Everything else (canvas,
    palette, free-form selection, view) is host state passed to ``input``
    and handed through to handlers unchanged.
    """

    def __init__(
        self,
        edit_handler: Optional[EditHandler] = None,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        actions: ActionRegistry | None = None,
        bus: ModeBus | None = None,
        max_remap_depth: int = DEFAULT_MAX_REMAP_DEPTH,
        load_defaults: bool = True,
    ) -> None:
        if max_remap_depth < 1:
            raise ValueError("max_remap_depth must be positive")
        self.logger = telemetry.get_logger("vipix.modes")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="vipix.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="vipix.keymaps"
        )
        self.actions = actions or ActionRegistry(logger_name="vipix.actions")
        self.bus = bus or ModeBus()
        self.edit_handler = edit_handler
        self.max_remap_depth = max_remap_depth
        self.region_policy = RegionPolicy.SQUARE
        self.status = ""

        self._cursor: Coord = (0, 0)
        self._anchor: Optional[Coord] = None
        self._pending_verb: Optional[VerbHandler] = None
        self._pending_keys: List[KeyToken] = []
        self._events: Deque[QueuedEvent] = deque()
        self._window_listener: Optional[WindowListener] = None
        self._closed = False

        self._command_line = CommandMode(self)
        self._modes: Dict[Mode, BaseMode] = {
            mode.name: mode
            for mode in (
                NormalMode(self),
                InsertMode(self),
                VisualMode(self),
                self._command_line,
            )
        }
        self._active = Mode.NORMAL

    # -- readback -----------------------------------------------------------

    @property
    def mode(self) -> Mode:
        return self._active

    def get_mode(self) -> Mode:
        return self._active

    @property
    def active_mode(self) -> BaseMode:
        return self._modes[self._active]

    @property
    def cursor(self) -> Coord:
        return self._cursor

    @property
    def anchor(self) -> Optional[Coord]:
        return self._anchor

    @property
    def pending_verb(self) -> Optional[VerbHandler]:
        return self._pending_verb

    @property
    def pending_keys(self) -> Tuple[KeyToken, ...]:
        return tuple(self._pending_keys)

    @property
    def command_text(self) -> str:
        return self._command_line.current_command

    @property
    def closed(self) -> bool:
        return self._closed

    # -- handler surface ----------------------------------------------------

    def set_mode(self, mode: Mode | str) -> None:
        target = Mode(mode)
        previous = self._active
        if previous is target:
            return
        self._modes[previous].on_exit(target)
        self._active = target
        self._modes[target].on_enter(previous)
        telemetry.record_event(
            "mode.switch",
            level="debug",
            data={"from": previous.value, "mode": target.value},
        )
        self.bus.emit("mode.switch", {"from": previous, "mode": target})

    def set_cursor(self, x: int, y: int, width: int, height: int) -> Coord:
        """Place the cursor at (x, y), wrapped onto a ``width``x``height`` grid."""

        if width <= 0 or height <= 0:
            raise ValueError(f"grid must be non-empty, got {width}x{height}")
        self._cursor = (x % width, y % height)
        return self._cursor

    def wrapping_displace(self, dx: int, dy: int, width: int, height: int) -> Coord:
        """Move the cursor by ``(dx, dy)``, wrapping around a ``width``x``height`` grid."""

        x, y = self._cursor
        return self.set_cursor(x + dx, y + dy, width, height)

    def get_selection(self) -> Tuple[Coord, Coord]:
        """Normalized anchor/cursor rectangle (a single point outside visual mode)."""

        anchor = self._anchor if self._anchor is not None else self._cursor
        return normalize_rect(anchor, self._cursor)

    def visual_selection(self) -> FrozenSet[Coord]:
        start, end = self.get_selection()
        return select_pixels(self.region_policy, start, end)

    def close(self) -> None:
        if not self._closed:
            telemetry.record_event("engine.close", level="info")
        self._closed = True

    def report(self, message: str) -> None:
        """Show ``message`` on the status line."""

        self.status = message
        self.bus.emit("status", message)

    # -- registration -------------------------------------------------------

    def add_object(
        self,
        name: KeyToken | str,
        handler: ObjectFn,
        *,
        modes: Iterable[Mode | str] | None = None,
        description: str = "",
    ) -> ObjectHandler:
        return self.actions.add_object(
            name, handler, modes=modes, description=description
        )

    def add_verb(
        self,
        name: KeyToken | str,
        requires_positions: bool,
        handler: VerbFn,
        *,
        modes: Iterable[Mode | str] | None = None,
        description: str = "",
    ) -> VerbHandler:
        return self.actions.add_verb(
            name, requires_positions, handler, modes=modes, description=description
        )

    def add_command(
        self, name: str, handler: CommandFn, *, description: str = ""
    ) -> CommandHandler:
        return self.actions.add_command(name, handler, description=description)

    def bind_key(
        self, trigger: KeySequence | str, mode: Mode | str, expansion: KeySequence | str
    ) -> Binding:
        """Remap ``trigger`` to ``expansion`` in ``mode``; raises ``MalformedToken``."""

        return self.keymap_registry.bind(Mode(mode), trigger, expansion)

    def set_window_event_listener(self, listener: Optional[WindowListener]) -> None:
        self._window_listener = listener

    # -- event loop ---------------------------------------------------------

    def push_key(self, key: KeyToken | str) -> None:
        if isinstance(key, KeyToken):
            self._events.append(key)
        else:
            self._events.extend(parse(key))

    def push_window_event(self, event: WindowEvent) -> None:
        self._events.append(event)

    def input(self, state: Any) -> bool:
        """Drain queued events in arrival order; ``False`` once the editor closed."""

        if self._closed:
            self._events.clear()
            return False
        while self._events and not self._closed:
            event = self._events.popleft()
            if isinstance(event, WindowEvent):
                self._handle_window_event(state, event)
            else:
                self._feed(state, event)
        if self._closed:
            self._events.clear()
        return not self._closed

    def handle_key(self, state: Any, token: KeyToken) -> ModeResult:
        """Process one key immediately, bypassing the event queue."""

        return self._feed(state, token)

    def feed(self, state: Any, text: str) -> bool:
        """Queue every key written in ``text`` notation, then drain."""

        self.push_key(text)
        return self.input(state)

    def _handle_window_event(self, state: Any, event: WindowEvent) -> None:
        if self._window_listener is not None:
            self._window_listener(state, event)
        if event.kind == "close":
            self.close()

    def _feed(self, state: Any, token: KeyToken) -> ModeResult:
        # Work queue of (token, remap depth); expansions are pushed to the front.
        work: Deque[Tuple[KeyToken, int]] = deque([(token, 0)])
        result = ModeResult(consumed=False, status="idle")
        while work and not self._closed:
            current, depth = work.popleft()
            self._pending_keys.append(current)
            resolution = self.keymap_resolver.resolve(self._active, self._pending_keys)

            if resolution.status == "pending":
                result = ModeResult(
                    consumed=True, status="pending", message="awaiting_sequence"
                )
                continue

            if resolution.status == "match" and resolution.binding is not None:
                self._pending_keys.clear()
                try:
                    expansion = self._expand(resolution.binding, depth)
                except RemapCycle as exc:
                    work.clear()
                    result = self._remap_cycle(exc)
                    continue
                work.extendleft(reversed(expansion))
                result = ModeResult(consumed=True, status="remap")
                continue

            buffered, self._pending_keys = self._pending_keys, []
            # Only the first buffered key is known not to start a trigger.
            work.extendleft(reversed([(key, depth) for key in buffered[1:]]))
            result = self._dispatch(state, buffered[0])
        return result

    def _expand(self, binding: Binding, depth: int) -> List[Tuple[KeyToken, int]]:
        if depth >= self.max_remap_depth:
            raise RemapCycle(binding.trigger, self.max_remap_depth)
        return [(key, depth + 1) for key in binding.expansion]

    def _remap_cycle(self, exc: RemapCycle) -> ModeResult:
        self.logger.warning(str(exc))
        telemetry.record_event(
            "keymaps.remap_cycle",
            level="warning",
            data={"trigger": str(exc.trigger), "depth": exc.depth},
        )
        self.bus.emit("keymaps.remap_cycle", exc)
        self.report(str(exc))
        return ModeResult(consumed=True, status="remap_cycle", message=str(exc))

    def _dispatch(self, state: Any, token: KeyToken) -> ModeResult:
        mode = self.active_mode
        with telemetry.span(
            name=f"mode::{mode.name.value}",
            component=True,
            metadata={"key": render(token), "mode": mode.name.value},
        ):
            return mode.handle_key(token, state)

    # -- pending verb slot (used by the grammar modes) ----------------------

    def _set_pending_verb(self, verb: VerbHandler) -> None:
        self._pending_verb = verb

    def _take_pending_verb(self) -> Optional[VerbHandler]:
        verb, self._pending_verb = self._pending_verb, None
        return verb


__all__ = [
    "DEFAULT_MAX_REMAP_DEPTH",
    "EditHandler",
    "Engine",
    "WindowEvent",
    "WindowListener",
]
