"""End-to-end sessions through JigsawGame.

Screen coordinates equal local coordinates here (identity camera and a
board scale of 1), so pointer samples can be written in puzzle units.
"""

from __future__ import annotations

import random

import pytest

from backend.engine.gameplay import JigsawGame
from backend.engine.gridplanner import GridPlanner
from backend.engine.interfaces import PointerSample
from backend.errors import InvalidConfiguration
from backend.models.config import GameSettings
from backend.models.level import LevelCatalog, SourceImage
from conftest import IdentityCamera, RecordingRenderer, RecordingShell

LANDSCAPE = SourceImage("landscape", 800, 400, texture="landscape.png")
SQUARE = SourceImage("square", 600, 600, texture="square.png")


@pytest.fixture
def game(
    renderer: RecordingRenderer, camera: IdentityCamera, shell: RecordingShell
) -> JigsawGame:
    return JigsawGame(
        renderer=renderer,
        camera=camera,
        ui=shell,
        settings=GameSettings(difficulty=4, board_scale=1.0, seed=11),
        levels=LevelCatalog([LANDSCAPE, SQUARE]),
    )


def _solve(game: JigsawGame) -> None:
    """Drag every piece onto its target, topmost first."""
    session = game.session
    assert session is not None
    for piece in reversed(session.pieces):
        target = GridPlanner.target_position(piece.index, session.dimensions, session.piece_size)
        game.step(PointerSample(position=piece.position, pressed=True, held=True))
        game.step(PointerSample(position=target, held=True))
        game.step(PointerSample(position=target, released=True))


# -- start --------------------------------------------------------------------


def test_start_game_builds_a_scattered_session(
    game: JigsawGame, renderer: RecordingRenderer, shell: RecordingShell
) -> None:
    session = game.start_game(LANDSCAPE)

    assert (session.dimensions.columns, session.dimensions.rows) == (8, 4)
    assert session.total_count == len(session.pieces) == 32
    assert session.correct_count == 0
    assert shell.level_select == [False]
    assert len(renderer.created) == 32
    assert all(texture == "landscape.png" for _, _, texture in renderer.created)

    bx, by = 8.0 - 0.125, 5.0 - 0.125
    for piece in session.pieces:
        assert abs(piece.position[0]) <= bx
        assert abs(piece.position[1]) <= by

    assert renderer.outline is not None
    points, width = renderer.outline
    assert points == GridPlanner.border_outline(session.dimensions, session.piece_size)
    assert width == 0.1


def test_start_level_looks_up_the_catalog(game: JigsawGame) -> None:
    session = game.start_level("square")
    assert (session.dimensions.columns, session.dimensions.rows) == (4, 4)


def test_unknown_level_is_a_configuration_error(game: JigsawGame) -> None:
    with pytest.raises(InvalidConfiguration):
        game.start_level("missing")


def test_seeded_games_scatter_identically(
    renderer: RecordingRenderer, camera: IdentityCamera, shell: RecordingShell
) -> None:
    settings = GameSettings(board_scale=1.0, seed=5)
    a = JigsawGame(renderer, camera, shell, settings).start_game(LANDSCAPE)
    b = JigsawGame(renderer, camera, shell, settings).start_game(LANDSCAPE)
    assert [p.position for p in a.pieces] == [p.position for p in b.pieces]


def test_injected_rng_is_used(
    renderer: RecordingRenderer, camera: IdentityCamera, shell: RecordingShell
) -> None:
    settings = GameSettings(board_scale=1.0)
    a = JigsawGame(renderer, camera, shell, settings, rng=random.Random(9)).start_game(SQUARE)
    b = JigsawGame(renderer, camera, shell, settings, rng=random.Random(9)).start_game(SQUARE)
    assert [p.position for p in a.pieces] == [p.position for p in b.pieces]


# -- configuration errors -----------------------------------------------------


def test_invalid_image_raises_before_any_mutation(
    game: JigsawGame, renderer: RecordingRenderer, shell: RecordingShell
) -> None:
    session = game.start_game(LANDSCAPE)
    created = len(renderer.created)

    with pytest.raises(InvalidConfiguration):
        game.start_game(SourceImage("broken", 0, 400))

    assert game.session is session
    assert len(renderer.created) == created
    assert renderer.destroyed == []
    assert shell.level_select == [False]


def test_out_of_range_difficulty_is_rejected(
    renderer: RecordingRenderer, camera: IdentityCamera, shell: RecordingShell
) -> None:
    game = JigsawGame(renderer, camera, shell, GameSettings(difficulty=7))
    with pytest.raises(InvalidConfiguration):
        game.start_game(LANDSCAPE)
    assert game.session is None
    assert renderer.created == []


def test_non_positive_board_scale_is_rejected() -> None:
    with pytest.raises(InvalidConfiguration):
        GameSettings(board_scale=0.0)


# -- play ---------------------------------------------------------------------


def test_full_playthrough_completes_once(game: JigsawGame, shell: RecordingShell) -> None:
    game.start_game(SQUARE)
    assert not game.is_won

    _solve(game)

    session = game.session
    assert session is not None
    assert game.is_won
    assert session.correct_count == session.total_count == 16
    assert session.drags == 16
    assert shell.play_again == [True]
    assert all(p.locked for p in session.pieces)

    # Further input changes nothing.
    game.step(PointerSample(position=(0.0, 0.0), pressed=True, held=True))
    assert session.drag is None
    assert shell.play_again == [True]


def test_step_without_a_session_is_a_no_op(game: JigsawGame) -> None:
    game.step(PointerSample(position=(0.0, 0.0), pressed=True, held=True))
    assert game.session is None


# -- restart ------------------------------------------------------------------


def test_restart_destroys_pieces_and_shows_level_select(
    game: JigsawGame, renderer: RecordingRenderer, shell: RecordingShell
) -> None:
    session = game.start_game(LANDSCAPE)
    handles = [p.handle for p in session.pieces]
    _solve(game)

    game.restart_game()

    assert game.session is None
    assert sorted(renderer.destroyed) == sorted(handles)
    assert session.pieces == []
    assert session.correct_count == 0
    assert renderer.outline is None
    assert shell.play_again == [True, False]
    assert shell.level_select == [False, True]


def test_restart_mid_drag_aborts_the_drag(game: JigsawGame) -> None:
    session = game.start_game(LANDSCAPE)
    top = session.pieces[-1]
    game.step(PointerSample(position=top.position, pressed=True, held=True))
    assert session.dragged_piece_index == top.index

    game.restart_game()
    assert session.drag is None


def test_starting_a_new_game_discards_the_old_one(
    game: JigsawGame, renderer: RecordingRenderer
) -> None:
    first = game.start_game(LANDSCAPE)
    old_handles = [p.handle for p in first.pieces]

    second = game.start_game(SQUARE)

    assert second is not first
    assert sorted(renderer.destroyed) == sorted(old_handles)
    assert renderer.outline_hidden == 1
    assert renderer.outline is not None
    assert second.total_count == 16
