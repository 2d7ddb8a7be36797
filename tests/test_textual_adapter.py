from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest

from vipix.adapters.textual import (
    CanvasView,
    TextualPixelAdapter,
    TextualUIHooks,
    token_from_textual,
)
from vipix.adapters.textual.app import render_canvas
from vipix.config import EditorConfig
from vipix.editor import create_editor
from vipix.keymaps import ENTER, ESC, KeyToken, parse_token
from vipix.modes import Mode


def make_adapter(
    views: Optional[List[CanvasView]] = None,
    statuses: Optional[List[str]] = None,
    commands: Optional[List[str]] = None,
    events: Optional[List[Dict[str, Any]]] = None,
    logs: Optional[List[str]] = None,
) -> TextualPixelAdapter:
    engine, state = create_editor(EditorConfig(canvas_width=4, canvas_height=4))
    hooks = TextualUIHooks(
        update_canvas=lambda view: views.append(view) if views is not None else None,
        update_status=lambda status: (
            statuses.append(status) if statuses is not None else None
        ),
        show_command=lambda text: commands.append(text) if commands is not None else None,
        handle_event=lambda name, payload: (
            events.append({"name": name, "payload": payload})
            if events is not None
            else None
        ),
        log=lambda line: logs.append(line) if logs is not None else None,
    )
    return TextualPixelAdapter(engine, state, hooks)


@pytest.mark.parametrize(
    ("key", "character", "expected"),
    [
        ("escape", None, ESC),
        ("enter", "\r", ENTER),
        ("plus", "+", KeyToken("+")),
        ("+", "+", KeyToken("+")),
        ("ctrl+a", "\x01", parse_token("<C-a>")),
        ("shift+v", "V", KeyToken("V")),
        ("space", " ", KeyToken("Space")),
        ("left", None, parse_token("<Left>")),
        ("l", "l", KeyToken("l")),
    ],
)
def test_token_from_textual(key: str, character: Optional[str], expected: KeyToken) -> None:
    assert token_from_textual(key, character) == expected


def test_token_from_textual_ignores_unknown_keys() -> None:
    assert token_from_textual("f1") is None


def test_adapter_pushes_canvas_snapshots() -> None:
    views: List[CanvasView] = []
    adapter = make_adapter(views=views)

    adapter.handle_textual_key("i", character="i")
    adapter.handle_textual_key("a", character="a")

    assert views[-1].mode is Mode.INSERTION
    assert views[-1].grid[0][0] == (255, 0, 0)
    assert views[-1].cursor == (0, 0)


def test_adapter_highlights_visual_selection() -> None:
    views: List[CanvasView] = []
    events: List[Dict[str, Any]] = []
    adapter = make_adapter(views=views, events=events)

    adapter.handle_textual_key("v", character="v")
    adapter.handle_textual_key("l", character="l")

    assert views[-1].highlight == frozenset({(0, 0), (1, 0)})
    visual_payloads = [event for event in events if event["name"] == "visual.selection"]
    assert visual_payloads
    assert visual_payloads[-1]["payload"]["rect"] == ((0, 0), (1, 0))


def test_adapter_status_line_shows_mode_and_pending_verb() -> None:
    statuses: List[str] = []
    adapter = make_adapter(statuses=statuses)

    adapter.handle_textual_key("v", character="v")
    assert statuses[-1].startswith("-- VISUAL --")
    assert "square" in statuses[-1]

    adapter.handle_textual_key("s", character="s")
    assert statuses[-1].endswith("s")


def test_adapter_relays_command_line() -> None:
    commands: List[str] = []
    events: List[Dict[str, Any]] = []
    adapter = make_adapter(commands=commands, events=events)

    adapter.handle_textual_key(":", character=":")
    adapter.handle_textual_key("x", character="x")
    adapter.handle_textual_key("enter")

    assert "x" in commands
    assert commands[-1] == ""
    names = [event["name"] for event in events]
    assert "command.submit" in names
    assert "command.error" in names
    assert "Not an editor command: x" in adapter.status_line()


def test_adapter_clears_status_when_leaving_normal_mode() -> None:
    adapter = make_adapter()
    adapter.engine.report("stale")

    adapter.handle_textual_key("i", character="i")

    assert adapter.engine.status == ""


def test_adapter_quit_stops_running() -> None:
    adapter = make_adapter()

    assert adapter.handle_textual_key(":", character=":")
    assert adapter.handle_textual_key("q", character="q")
    assert adapter.handle_textual_key("enter") is False
    assert adapter.tick() is False


def test_adapter_resize_reaches_host_state() -> None:
    adapter = make_adapter()

    assert adapter.handle_resize(120, 40)

    assert adapter.state.window_size == (120.0, 40.0)
    assert adapter.state.must_resize


def test_adapter_emits_log_lines() -> None:
    logs: List[str] = []
    adapter = make_adapter(logs=logs)

    adapter.handle_textual_key("i", character="i")
    adapter.handle_textual_key("f1")

    assert any(line.startswith("key ->") for line in logs)
    assert any(line.startswith("ignored key") for line in logs)


def test_render_canvas_draws_two_cells_per_pixel() -> None:
    adapter = make_adapter()

    text = render_canvas(adapter.snapshot())

    lines = text.plain.splitlines()
    assert len(lines) == 4
    assert lines[0] == "[]" + "  " * 3
