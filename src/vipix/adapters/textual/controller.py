"""Textual adapter that feeds terminal keys to the engine and reports back."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, FrozenSet, Iterable, Optional

from vipix.canvas import Coord, EditorState, PixelGrid
from vipix.keymaps import KeyToken, render
from vipix.keymaps.models import ALT, CTRL, SHIFT
from vipix.modes import Engine, Mode, WindowEvent

# Textual key names -> named keys in our notation.
TEXTUAL_KEY_NAMES: Dict[str, str] = {
    "escape": "Esc",
    "enter": "CR",
    "return": "CR",
    "tab": "Tab",
    "backspace": "BS",
    "delete": "Del",
    "space": "Space",
    "left": "Left",
    "right": "Right",
    "up": "Up",
    "down": "Down",
    "home": "Home",
    "end": "End",
}

_MODIFIER_ALIASES: Dict[str, str] = {
    "ctrl": CTRL,
    "control": CTRL,
    "alt": ALT,
    "meta": ALT,
    "shift": SHIFT,
}


def token_from_textual(
    key: str,
    character: Optional[str] = None,
    modifiers: Iterable[str] = (),
) -> Optional[KeyToken]:
    """Translate a Textual key event to a token; ``None`` for keys we ignore."""

    parts = key.split("+") if len(key) > 1 else [key]
    base = parts[-1] or "+"
    mods = {
        _MODIFIER_ALIASES[m.lower()]
        for m in (*parts[:-1], *modifiers)
        if m.lower() in _MODIFIER_ALIASES
    }

    name = TEXTUAL_KEY_NAMES.get(base.lower())
    if name is not None:
        return KeyToken(name, tuple(mods))
    if character and len(character) == 1 and character.isprintable() and CTRL not in mods:
        return KeyToken(character, tuple(mods - {SHIFT}))
    if len(base) == 1:
        return KeyToken(base, tuple(mods))
    return None


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(frozen=True, slots=True)
class CanvasView:
    """Everything a frame needs to draw."""

    grid: PixelGrid
    cursor: Coord
    highlight: FrozenSet[Coord]
    mode: Mode
    status: str
    command: str
    zoom: float


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_canvas: Callable[[CanvasView], None]
    update_status: Callable[[str], None] = _noop
    show_command: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


class TextualPixelAdapter:
    """Bridges the engine and its bus to a Textual-friendly surface."""

    def __init__(self, engine: Engine, state: EditorState, hooks: TextualUIHooks) -> None:
        self.engine = engine
        self.state = state
        self.hooks = hooks
        self._subscribe_events()
        self._refresh()

    def handle_textual_key(
        self,
        key: str,
        *,
        character: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> bool:
        """Queue one key and run a tick; ``False`` means the editor closed."""

        token = token_from_textual(key, character, modifiers)
        if token is None:
            self.hooks.log(f"ignored key {key!r}")
            return not self.engine.closed
        self.hooks.log(f"key -> {render(token)} mode={self.engine.mode.value}")
        self.engine.push_key(token)
        return self.tick()

    def handle_resize(self, width: int, height: int) -> bool:
        self.engine.push_window_event(WindowEvent.resize(width, height))
        return self.tick()

    def tick(self) -> bool:
        running = self.engine.input(self.state)
        self._refresh()
        return running

    def snapshot(self) -> CanvasView:
        engine = self.engine
        if engine.mode is Mode.VISUAL:
            highlight = engine.visual_selection()
        else:
            highlight = frozenset(self.state.selection)
        return CanvasView(
            grid=self.state.canvas.as_pixel_grid(),
            cursor=engine.cursor,
            highlight=highlight,
            mode=engine.mode,
            status=self.status_line(),
            command=engine.command_text,
            zoom=self.state.zoom,
        )

    def status_line(self) -> str:
        engine = self.engine
        x, y = engine.cursor
        parts = [f"-- {engine.mode.label} --", f"{x},{y}"]
        if engine.mode is Mode.VISUAL:
            parts.append(str(engine.region_policy))
        if engine.pending_verb is not None:
            parts.append(render(engine.pending_verb.token))
        if engine.status:
            parts.append(engine.status)
        return "  ".join(parts)

    def _subscribe_events(self) -> None:
        bus = self.engine.bus
        for event in (
            "mode.switch",
            "visual.selection",
            "command.submit",
            "command.error",
            "keymaps.remap_cycle",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self.hooks.log(f"event -> {name} {payload!r}")
        self.hooks.handle_event(name, payload)
        # Command results stay visible in normal mode until another mode starts.
        if name == "mode.switch" and isinstance(payload, dict):
            if payload.get("mode") is not Mode.NORMAL and self.engine.status:
                self.engine.report("")

    def _refresh(self) -> None:
        view = self.snapshot()
        self.hooks.update_canvas(view)
        self.hooks.update_status(view.status)
        self.hooks.show_command(view.command)


__all__ = [
    "CanvasView",
    "TEXTUAL_KEY_NAMES",
    "TextualPixelAdapter",
    "TextualUIHooks",
    "token_from_textual",
]
