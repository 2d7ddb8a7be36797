"""Executable Textual app that hosts the pixel editor."""

from __future__ import annotations

import argparse
from typing import Optional, Sequence

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.containers import Vertical
from textual.widgets import Footer, Header, Static

from vipix.config import EditorConfig
from vipix.editor import create_editor
from vipix.modes import Mode
from vipix.runtime import telemetry

from .controller import CanvasView, TextualPixelAdapter, TextualUIHooks

CELL = "  "


def _luminance(color: tuple[int, int, int]) -> float:
    r, g, b = color
    return 0.299 * r + 0.587 * g + 0.114 * b


def render_canvas(view: CanvasView) -> Text:
    """Two terminal columns per pixel; cursor as ``[]``, selection as ``··``."""

    text = Text()
    for y, row in enumerate(view.grid):
        for x, color in enumerate(row):
            r, g, b = color
            ink = "black" if _luminance(color) > 128 else "white"
            style = f"{ink} on rgb({r},{g},{b})"
            if (x, y) == view.cursor:
                text.append("[]", style=f"bold {style}")
            elif (x, y) in view.highlight:
                text.append("··", style=style)
            else:
                text.append(CELL, style=style)
        text.append("\n")
    return text


class VipixApp(App[None]):
    """Minimal Textual UI embedding the pixel editor."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#canvas-view {
		height: 1fr;
		border: round $accent;
		padding: 1 2;
		content-align: center middle;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}

	#command-line {
		height: 1;
		background: $surface-darken-2;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
    ]

    def __init__(self, config: Optional[EditorConfig] = None) -> None:
        super().__init__()
        self.config = config or EditorConfig.from_env()
        self.adapter: TextualPixelAdapter | None = None
        self._canvas_widget: Static | None = None
        self._status_widget: Static | None = None
        self._command_widget: Static | None = None
        self.logger = telemetry.get_logger("vipix.adapters.textual")

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="canvas-area"):
            self._canvas_widget = Static("", id="canvas-view")
            yield self._canvas_widget
        self._status_widget = Static("", id="status-line")
        self._command_widget = Static("", id="command-line")
        yield self._status_widget
        yield self._command_widget
        yield Footer()

    def on_mount(self) -> None:
        engine, state = create_editor(self.config)
        hooks = TextualUIHooks(
            update_canvas=self._update_canvas,
            update_status=self._update_status,
            show_command=self._show_command,
            log=self._log_line,
        )
        self.adapter = TextualPixelAdapter(engine, state, hooks)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key == "ctrl+c":
            return
        event.stop()
        if not self.adapter.handle_textual_key(event.key, character=event.character):
            self.exit()

    def on_resize(self, event: events.Resize) -> None:
        if self.adapter and not self.adapter.handle_resize(
            event.size.width, event.size.height
        ):
            self.exit()

    def _update_canvas(self, view: CanvasView) -> None:
        if self._canvas_widget:
            self._canvas_widget.update(render_canvas(view))

    def _update_status(self, status: str) -> None:
        if self._status_widget:
            self._status_widget.update(status)

    def _show_command(self, command: str) -> None:
        if self._command_widget is None or self.adapter is None:
            return
        in_command = self.adapter.engine.mode is Mode.COMMAND
        self._command_widget.update(f":{command}" if in_command else "")

    def _log_line(self, line: str) -> None:
        self.logger.debug(line)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    defaults = EditorConfig.from_env()
    parser = argparse.ArgumentParser(description="Edit pixel art with vi keys.")
    parser.add_argument(
        "--width",
        type=int,
        default=defaults.canvas_width,
        help=f"Canvas width in pixels (default: {defaults.canvas_width})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=defaults.canvas_height,
        help=f"Canvas height in pixels (default: {defaults.canvas_height})",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default=None,
        help="telelog preset (default: $VIPIX_LOG_PRESET or quiet)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    defaults = EditorConfig.from_env()
    config = EditorConfig(
        canvas_width=args.width,
        canvas_height=args.height,
        zoom_step=defaults.zoom_step,
        max_remap_depth=defaults.max_remap_depth,
    )
    VipixApp(config).run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
