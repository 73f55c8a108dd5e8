"""Random initial placement of pieces."""

from __future__ import annotations

import random

from backend.engine.interfaces import Renderer
from backend.models.geometry import PIECE_DEPTH, PieceSize
from backend.models.piece import Piece


class Scatterer:
    """Spreads pieces uniformly over the visible viewport."""

    @staticmethod
    def bounds(
        viewport_half_extents: tuple[float, float],
        size: PieceSize,
        board_scale: float,
    ) -> tuple[float, float]:
        """Half extents, in local units, that a piece *centre* may occupy.

        The viewport is shrunk by half a piece on every side so that each
        piece stays fully visible.  A piece larger than the viewport is
        pinned to the centre on that axis.
        """
        half_w, half_h = viewport_half_extents
        return (
            max(0.0, half_w / board_scale - size.width / 2),
            max(0.0, half_h / board_scale - size.height / 2),
        )

    @staticmethod
    def scatter(
        pieces: list[Piece],
        bounds: tuple[float, float],
        rng: random.Random,
        renderer: Renderer | None = None,
    ) -> None:
        """Move every piece to an independent uniform random point in *bounds*."""
        bx, by = bounds
        for piece in pieces:
            x = rng.uniform(-bx, bx)
            y = rng.uniform(-by, by)
            piece.position = (x, y)
            piece.depth = PIECE_DEPTH
            if renderer is not None:
                renderer.set_position(piece.handle, piece.position, piece.depth)
