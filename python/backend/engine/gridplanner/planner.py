"""Grid sizing and per-piece geometry."""

from __future__ import annotations

from backend.errors import InvalidConfiguration
from backend.models.geometry import GridDimensions, PieceSize, Point, UVRect


class GridPlanner:
    """Stateless planner — all methods are static."""

    @staticmethod
    def dimensions(width: int, height: int, difficulty: int) -> GridDimensions:
        """Return the grid for an image of *width*×*height* pixels.

        Difficulty is the number of pieces along the image's shorter side,
        which keeps pieces as square as possible.  The longer side is
        truncated with integer division, so e.g. 1000×600 at difficulty 3
        gives 5 columns, not 5.33.

        Square images go through the "wider" branch.
        """
        if width <= 0 or height <= 0:
            raise InvalidConfiguration(
                f"Image dimensions must be positive, got {width}×{height}."
            )
        if difficulty < 1:
            raise InvalidConfiguration(
                f"Difficulty must be at least 1, got {difficulty}."
            )

        if width < height:
            return GridDimensions(columns=difficulty, rows=(difficulty * height) // width)
        return GridDimensions(columns=(difficulty * width) // height, rows=difficulty)

    @staticmethod
    def piece_size(width: int, height: int, dims: GridDimensions) -> PieceSize:
        """Piece size in local units (the whole puzzle is one unit tall)."""
        aspect = width / height
        return PieceSize(width=aspect / dims.columns, height=1 / dims.rows)

    @staticmethod
    def cell(index: int, dims: GridDimensions) -> tuple[int, int]:
        """Return ``(row, col)`` for a row-major *index*."""
        if not 0 <= index < dims.count:
            raise IndexError(f"Piece index {index} outside a {dims.count}-piece grid.")
        return index // dims.columns, index % dims.columns

    @staticmethod
    def target_position(index: int, dims: GridDimensions, size: PieceSize) -> Point:
        """Centre of the cell that piece *index* belongs in."""
        row, col = GridPlanner.cell(index, dims)
        w, h = size.width, size.height
        return (
            (-w * dims.columns / 2) + (w * col) + (w / 2),
            (-h * dims.rows / 2) + (h * row) + (h / 2),
        )

    @staticmethod
    def uv_rect(row: int, col: int, dims: GridDimensions) -> UVRect:
        """Texture rectangle for the piece at (*row*, *col*)."""
        u = 1 / dims.columns
        v = 1 / dims.rows
        return UVRect(
            bottom_left=(u * col, v * row),
            bottom_right=(u * (col + 1), v * row),
            top_left=(u * col, v * (row + 1)),
            top_right=(u * (col + 1), v * (row + 1)),
        )

    @staticmethod
    def border_outline(dims: GridDimensions, size: PieceSize) -> list[Point]:
        """Corners of the assembled puzzle: TL, TR, BR, BL."""
        half_w = (size.width * dims.columns) / 2
        half_h = (size.height * dims.rows) / 2
        return [
            (-half_w, half_h),
            (half_w, half_h),
            (half_w, -half_h),
            (-half_w, -half_h),
        ]
