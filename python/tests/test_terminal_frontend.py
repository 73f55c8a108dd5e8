"""Terminal collaborators: keyboard pointer, camera, and canvas renderer."""

from __future__ import annotations

from pathlib import Path

import pygame
import pytest

from backend.engine.gameplay import JigsawGame
from backend.engine.gridplanner import GridPlanner
from backend.engine.interfaces import PointerSample
from backend.models.config import GameSettings
from backend.models.geometry import GridDimensions, PieceSize
from backend.models.level import LevelCatalog
from frontend.cli.input_handler import _decode, _resolve
from frontend.cli.rich.app import (
    BOARD_SCALE,
    CANVAS_COLS,
    CANVAS_ROWS,
    PRESET_LEVELS,
    KeyboardPointer,
    TerminalCamera,
    TerminalRenderer,
    TerminalShell,
    _world_to_cell,
    build_levels,
)


# -- input --------------------------------------------------------------------


@pytest.mark.parametrize(
    ("ch", "action"),
    [("w", "up"), ("D", "fast_right"), (" ", "grab"), ("q", "quit"), ("\r", "enter"), ("3", "3")],
)
def test_key_mapping(ch: str, action: str) -> None:
    assert _resolve(ch) == action


def _feed(*chars: str | None):
    """Stand-in for the terminal: hands out *chars*, then None."""
    pending = list(chars)
    return lambda: pending.pop(0) if pending else None


@pytest.mark.parametrize(
    ("first", "tail", "action"),
    [
        ("\x1b", ("[", "A"), "up"),
        ("\x1b", ("[", "D"), "left"),
        ("\x1b", (), "quit"),
        ("\x1b", ("x",), "quit"),
        ("\x1b", ("[",), ""),
        ("s", (), "down"),
    ],
)
def test_escape_sequences(first: str, tail: tuple[str, ...], action: str) -> None:
    assert _decode(first, _feed(*tail)) == action


def test_plain_key_reads_nothing_more() -> None:
    def read_more() -> str | None:
        raise AssertionError("only escape sequences read ahead")

    assert _decode("r", read_more) == "restart"


def test_grab_toggles_press_and_release() -> None:
    pointer = KeyboardPointer()

    pointer.apply("grab")
    sample = PointerSample.from_input(pointer)
    assert sample.pressed and sample.held and not sample.released
    pointer.end_step()

    pointer.apply("right")
    sample = PointerSample.from_input(pointer)
    assert not sample.pressed and sample.held
    pointer.end_step()

    pointer.apply("grab")
    sample = PointerSample.from_input(pointer)
    assert sample.released and not sample.held


def test_cursor_is_clamped_to_canvas() -> None:
    pointer = KeyboardPointer()
    for _ in range(100):
        pointer.apply("fast_left")
        pointer.apply("fast_up")
    assert pointer.current_pointer_position() == (0.0, 0.0)


# -- camera -------------------------------------------------------------------


def test_camera_round_trip() -> None:
    camera = TerminalCamera()
    for cell in [(0, 0), (CANVAS_COLS - 1, CANVAS_ROWS - 1), (17, 9)]:
        x, y, _ = camera.screen_to_world(cell)
        assert _world_to_cell(x, y) == pytest.approx(cell)


def test_camera_centre_is_origin() -> None:
    x, y, _ = TerminalCamera().screen_to_world((CANVAS_COLS / 2 - 0.5, CANVAS_ROWS / 2 - 0.5))
    assert (x, y) == pytest.approx((0.0, 0.0))


@pytest.mark.parametrize("image", PRESET_LEVELS, ids=lambda i: i.id)
def test_presets_fit_the_canvas(image) -> None:
    dims = GridPlanner.dimensions(image.width, image.height, 6)
    size = GridPlanner.piece_size(image.width, image.height, dims)
    half_w, half_h = TerminalCamera().viewport_half_extents()
    assert size.width * dims.columns * BOARD_SCALE / 2 <= half_w
    assert size.height * dims.rows * BOARD_SCALE / 2 <= half_h


# -- levels -------------------------------------------------------------------


def _save_image(path: Path, width: int, height: int) -> None:
    pygame.image.save(pygame.Surface((width, height)), str(path))


def test_levels_are_presets_without_images() -> None:
    assert build_levels(None).ids() == [image.id for image in PRESET_LEVELS]


def test_levels_include_images_found(tmp_path: Path) -> None:
    _save_image(tmp_path / "harbour.bmp", 120, 90)
    (tmp_path / "notes.txt").write_text("not an image")

    catalog = build_levels(tmp_path)

    assert catalog.ids()[: len(PRESET_LEVELS)] == [image.id for image in PRESET_LEVELS]
    image = catalog.get("harbour")
    assert (image.width, image.height) == (120, 90)
    assert image.texture is None
    assert "notes" not in catalog.ids()


def test_unreadable_image_is_skipped(tmp_path: Path) -> None:
    (tmp_path / "broken.png").write_bytes(b"not really a png")
    _save_image(tmp_path / "good.bmp", 40, 30)

    catalog = build_levels(tmp_path)

    assert "broken" not in catalog.ids()
    assert "good" in catalog.ids()


def test_image_named_like_a_preset_is_skipped(tmp_path: Path) -> None:
    _save_image(tmp_path / "square.bmp", 10, 20)

    catalog = build_levels(tmp_path)

    assert len(catalog) == len(PRESET_LEVELS)
    assert catalog.get("square").width == 600


def test_levels_stop_at_menu_capacity(tmp_path: Path) -> None:
    for i in range(8):
        _save_image(tmp_path / f"img{i}.bmp", 20, 10)

    catalog = build_levels(tmp_path)

    assert len(catalog) == 9
    assert catalog.ids()[-1] == "img3"


# -- renderer -----------------------------------------------------------------


def test_label_recovers_piece_index() -> None:
    renderer = TerminalRenderer(BOARD_SCALE)
    dims = GridDimensions(columns=8, rows=4)
    handle = renderer.create_piece_visual(
        PieceSize(0.25, 0.25), GridPlanner.uv_rect(2, 5, dims), None
    )
    renderer.set_position(handle, (0.0, 0.0), -1.0)
    canvas = renderer.paint((0, 0), held=None).plain
    assert "21" in canvas


def test_paint_shows_outline_and_cursor() -> None:
    renderer = TerminalRenderer(BOARD_SCALE)
    renderer.draw_outline([(-0.5, 0.5), (0.5, 0.5), (0.5, -0.5), (-0.5, -0.5)], 0.1)
    plain = renderer.paint((3, 3), held=None).plain
    lines = plain.split("\n")
    assert len(lines) == CANVAS_ROWS
    assert all(len(line) == CANVAS_COLS for line in lines)
    assert "┌" in plain and "┘" in plain
    assert lines[3][3] == "✚"

    renderer.hide_outline()
    assert "┌" not in renderer.paint((3, 3), held=None).plain


# -- full game ----------------------------------------------------------------


def test_keyboard_playthrough_locks_a_piece() -> None:
    renderer = TerminalRenderer(BOARD_SCALE)
    pointer = KeyboardPointer()
    shell = TerminalShell()
    camera = TerminalCamera()
    game = JigsawGame(
        renderer, camera, shell,
        GameSettings(difficulty=2, board_scale=BOARD_SCALE, seed=1),
        LevelCatalog(PRESET_LEVELS),
    )
    session = game.start_level("square")
    assert not shell.level_select_visible

    # Put the top piece under the cursor, then walk the cursor to its cell.
    piece = session.pieces[-1]
    x, y, _ = camera.screen_to_world((pointer.col, pointer.row))
    piece.position = (x / BOARD_SCALE, y / BOARD_SCALE)

    target = GridPlanner.target_position(piece.index, session.dimensions, session.piece_size)
    goal_col, goal_row = _world_to_cell(target[0] * BOARD_SCALE, target[1] * BOARD_SCALE)

    def press(key: str) -> None:
        pointer.apply(key)
        game.step(PointerSample.from_input(pointer))
        pointer.end_step()

    press("grab")
    assert session.dragged_piece_index == piece.index
    while abs(pointer.row - goal_row) >= 1:
        press("down" if pointer.row < goal_row else "up")
    while abs(pointer.col - goal_col) >= 2:
        press("right" if pointer.col < goal_col else "left")
    press("grab")

    assert piece.locked
    assert piece.position == target
    assert session.correct_count == 1
