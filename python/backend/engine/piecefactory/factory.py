"""Builds the pieces for a new game."""

from __future__ import annotations

import logging
from typing import Any

from backend.engine.gridplanner import GridPlanner
from backend.engine.interfaces import Renderer
from backend.models.geometry import PIECE_DEPTH, GridDimensions, PieceSize
from backend.models.piece import Piece

logger = logging.getLogger(__name__)


class PieceFactory:
    """Creates pieces in their solved layout and registers their visuals."""

    @staticmethod
    def create(
        dims: GridDimensions,
        size: PieceSize,
        texture: Any,
        renderer: Renderer,
    ) -> list[Piece]:
        """Return every piece in row-major order, each at its target cell.

        The renderer receives one ``create_piece_visual`` call per piece
        with the shared *texture* and the piece's own UV rectangle.
        """
        pieces: list[Piece] = []
        for row in range(dims.rows):
            for col in range(dims.columns):
                index = row * dims.columns + col
                position = GridPlanner.target_position(index, dims, size)
                uv = GridPlanner.uv_rect(row, col, dims)

                handle = renderer.create_piece_visual(size, uv, texture)
                renderer.set_position(handle, position, PIECE_DEPTH)

                pieces.append(
                    Piece(
                        index=index,
                        grid_row=row,
                        grid_col=col,
                        uv_rect=uv,
                        position=position,
                        depth=PIECE_DEPTH,
                        handle=handle,
                    )
                )

        logger.debug(
            "Created %d pieces (%d×%d)", len(pieces), dims.columns, dims.rows
        )
        return pieces
