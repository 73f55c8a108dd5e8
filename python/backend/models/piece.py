"""A single jigsaw piece."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from backend.models.geometry import PIECE_DEPTH, PieceSize, Point, UVRect


@dataclass
class Piece:
    """One rectangular piece of the puzzle.

    ``index`` is row-major (``row * columns + col``) and identifies the
    piece's correct cell.  ``handle`` is whatever the renderer returned
    for the piece's visual.
    """

    index: int
    grid_row: int
    grid_col: int
    uv_rect: UVRect
    position: Point
    depth: float = PIECE_DEPTH
    locked: bool = False
    handle: Any = None

    @property
    def name(self) -> str:
        return f"Piece {self.index}"

    def contains(self, point: Point, size: PieceSize) -> bool:
        """Return True if *point* lies inside this piece's rectangle."""
        x, y = self.position
        px, py = point
        return (
            abs(px - x) <= size.width / 2
            and abs(py - y) <= size.height / 2
        )
