"""Grid and coordinate value types.

All positions live in the puzzle's *local* unit space: the assembled
puzzle is exactly one unit tall and ``image_width / image_height`` units
wide, centred on the origin.  Frontends scale this into world space.
"""

from __future__ import annotations

from dataclasses import dataclass

Point = tuple[float, float]

# Pieces render one layer in front of the board plane (depth 0), where
# the border outline is drawn.  Smaller is closer to the viewer.
PIECE_DEPTH = -1.0


@dataclass(frozen=True)
class GridDimensions:
    """Number of pieces along each axis."""

    columns: int
    rows: int

    @property
    def count(self) -> int:
        return self.columns * self.rows


@dataclass(frozen=True)
class PieceSize:
    """Size of a single piece in local units."""

    width: float
    height: float


@dataclass(frozen=True)
class UVRect:
    """Texture-space corners of one piece.

    The field order is the quad's vertex winding (anti-clockwise):
    bottom-left, bottom-right, top-left, top-right.
    """

    bottom_left: Point
    bottom_right: Point
    top_left: Point
    top_right: Point

    def as_list(self) -> list[Point]:
        return [self.bottom_left, self.bottom_right, self.top_left, self.top_right]

    @property
    def min_u(self) -> float:
        return self.bottom_left[0]

    @property
    def min_v(self) -> float:
        return self.bottom_left[1]

    @property
    def max_u(self) -> float:
        return self.top_right[0]

    @property
    def max_v(self) -> float:
        return self.top_right[1]
