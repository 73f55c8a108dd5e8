"""Shared fakes for the engine's collaborator protocols."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from backend.engine.gamestate import PuzzleSession
from backend.engine.gridplanner import GridPlanner
from backend.engine.piecefactory import PieceFactory
from backend.models.config import PuzzleConfig
from backend.models.geometry import PieceSize, Point, UVRect


class RecordingRenderer:
    """Keeps every call so tests can assert on what the engine drew."""

    def __init__(self) -> None:
        self.created: list[tuple[PieceSize, UVRect, Any]] = []
        self.positions: dict[int, tuple[Point, float]] = {}
        self.enabled: dict[int, bool] = {}
        self.destroyed: list[int] = []
        self.outline: tuple[list[Point], float] | None = None
        self.outline_hidden = 0

    def create_piece_visual(self, geometry: PieceSize, uv_rect: UVRect, texture: Any) -> int:
        self.created.append((geometry, uv_rect, texture))
        handle = len(self.created) - 1
        self.enabled[handle] = True
        return handle

    def set_position(self, handle: int, position: Point, depth: float) -> None:
        self.positions[handle] = (position, depth)

    def set_visual_property(self, handle: int, enabled: bool) -> None:
        self.enabled[handle] = enabled

    def draw_outline(self, points: list[Point], line_width: float) -> None:
        self.outline = (list(points), line_width)

    def hide_outline(self) -> None:
        self.outline = None
        self.outline_hidden += 1

    def destroy(self, handle: int) -> None:
        self.destroyed.append(handle)


class IdentityCamera:
    """Screen coordinates are world coordinates."""

    def __init__(self, half_extents: tuple[float, float] = (8.0, 5.0)) -> None:
        self.half_extents = half_extents

    def screen_to_world(self, point: Point) -> tuple[float, float, float]:
        return (point[0], point[1], 0.0)

    def viewport_half_extents(self) -> tuple[float, float]:
        return self.half_extents


class RecordingShell:
    def __init__(self) -> None:
        self.level_select: list[bool] = []
        self.play_again: list[bool] = []

    def show_level_select(self, visible: bool) -> None:
        self.level_select.append(visible)

    def show_play_again(self, visible: bool) -> None:
        self.play_again.append(visible)


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def camera() -> IdentityCamera:
    return IdentityCamera()


@pytest.fixture
def shell() -> RecordingShell:
    return RecordingShell()


@pytest.fixture
def make_session(renderer: RecordingRenderer) -> Callable[..., PuzzleSession]:
    """Build a solved-layout session (no scatter) for an image size."""

    def _make(
        width: int = 800,
        height: int = 400,
        difficulty: int = 4,
        board_scale: float = 1.0,
    ) -> PuzzleSession:
        config = PuzzleConfig(difficulty, width, height)
        dims = GridPlanner.dimensions(width, height, difficulty)
        size = GridPlanner.piece_size(width, height, dims)
        pieces = PieceFactory.create(dims, size, "texture", renderer)
        return PuzzleSession(config, dims, size, pieces, board_scale=board_scale)

    return _make
