"""Collaborator protocols the engine calls into.

Frontends implement these; the engine never imports a display library.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from backend.models.geometry import PieceSize, Point, UVRect

Point3 = tuple[float, float, float]


class Renderer(Protocol):
    def create_piece_visual(
        self, geometry: PieceSize, uv_rect: UVRect, texture: Any
    ) -> Any: ...

    def set_position(self, handle: Any, position: Point, depth: float) -> None: ...

    def set_visual_property(self, handle: Any, enabled: bool) -> None: ...

    def draw_outline(self, points: list[Point], line_width: float) -> None: ...

    def hide_outline(self) -> None: ...

    def destroy(self, handle: Any) -> None: ...


class InputSource(Protocol):
    def current_pointer_position(self) -> Point | None: ...

    def was_pressed_this_step(self) -> bool: ...

    def is_press_held(self) -> bool: ...

    def was_released_this_step(self) -> bool: ...


class Camera(Protocol):
    def screen_to_world(self, point: Point) -> Point3: ...

    def viewport_half_extents(self) -> tuple[float, float]: ...


class UIShell(Protocol):
    def show_level_select(self, visible: bool) -> None: ...

    def show_play_again(self, visible: bool) -> None: ...


@dataclass(frozen=True)
class PointerSample:
    """One step's worth of pointer state, in screen coordinates."""

    position: Point | None
    pressed: bool = False
    held: bool = False
    released: bool = False

    @classmethod
    def from_input(cls, source: InputSource) -> PointerSample:
        return cls(
            position=source.current_pointer_position(),
            pressed=source.was_pressed_this_step(),
            held=source.is_press_held(),
            released=source.was_released_this_step(),
        )
