from __future__ import annotations

import pytest

from vipix.canvas import WHITE, Canvas, Palette
from vipix.config import EditorConfig
from vipix.editor import create_editor, create_state, edit_positions
from vipix.modes import Mode


def test_create_state_centers_view_on_canvas() -> None:
    state = create_state(EditorConfig(canvas_width=10, canvas_height=6))

    assert state.canvas.size() == (10, 6)
    assert state.center == (-5.0, -3.0)
    assert state.window_size == (800.0, 600.0)
    assert state.scale == (1.0 / 800, 1.0 / 600)
    assert state.zoom == 1.0


def test_zoom_verbs_step_view() -> None:
    engine, state = create_editor()

    engine.feed(state, "+")
    assert state.zoom == pytest.approx(1.1)

    engine.feed(state, "--")
    assert state.zoom == pytest.approx(0.9)


def test_zoom_never_drops_below_minimum() -> None:
    engine, state = create_editor(EditorConfig(zoom_step=0.5))

    engine.feed(state, "----")

    assert state.zoom == pytest.approx(0.1)


def test_pan_verbs_shift_center() -> None:
    engine, state = create_editor(EditorConfig(canvas_width=8, canvas_height=8))

    engine.feed(state, "LLJ")
    assert state.center == (-2.0, -3.0)

    engine.feed(state, "HK")
    assert state.center == (-3.0, -4.0)


def test_view_verbs_leave_cursor_alone() -> None:
    engine, state = create_editor()

    engine.feed(state, "+HJ")

    assert engine.cursor == (0, 0)
    assert engine.mode is Mode.NORMAL


def test_s_paints_motion_positions_white() -> None:
    engine, state = create_editor()

    engine.feed(state, "sl")

    assert state.canvas.painted() == {(0, 0), (1, 0)}
    assert state.canvas.get_pixel_color(1, 0) == WHITE


def test_underscore_consumes_motion_without_painting() -> None:
    engine, state = create_editor()

    engine.feed(state, "_l")

    assert engine.cursor == (1, 0)
    assert state.canvas.painted() == set()
    assert engine.pending_verb is None


def test_verb_in_visual_mode_keeps_anchor() -> None:
    engine, state = create_editor()

    engine.feed(state, "vsj")

    assert engine.mode is Mode.VISUAL
    assert engine.anchor == (0, 0)
    assert state.canvas.painted() == {(0, 0), (0, 1)}


def test_edit_positions_prefer_selection() -> None:
    engine, state = create_editor()
    assert edit_positions(engine, state) == {(0, 0)}

    state.selection.update({(2, 2), (3, 3)})

    assert edit_positions(engine, state) == {(2, 2), (3, 3)}


def test_palette_from_config_drives_insertion() -> None:
    config = EditorConfig(palette={"x": (1, 2, 3), "<S-q>": (9, 9, 9)})
    engine, state = create_editor(config)

    engine.feed(state, "ixl")
    assert state.canvas.get_pixel_color(0, 0) == (1, 2, 3)
    assert engine.cursor == (0, 0)

    engine.feed(state, "<S-q>")
    assert state.canvas.get_pixel_color(0, 0) == (9, 9, 9)


def test_palette_rejects_invalid_colors() -> None:
    palette = Palette({})

    with pytest.raises(ValueError):
        palette.assign("a", (256, 0, 0))
    assert len(palette) == 0


def test_palette_legend_uses_key_notation() -> None:
    palette = Palette({"<lt>": (1, 1, 1)})

    assert palette.legend() == [("<lt>", (1, 1, 1))]


def test_canvas_bounds_are_enforced() -> None:
    canvas = Canvas(2, 2)

    canvas.set_pixel_color(1, 1, (5, 5, 5))

    assert canvas.as_pixel_grid()[1][1] == (5, 5, 5)
    assert canvas.version == 1
    with pytest.raises(IndexError):
        canvas.get_pixel_color(2, 0)
    with pytest.raises(IndexError):
        canvas.paint([(0, 0), (0, 5)], (1, 1, 1))
