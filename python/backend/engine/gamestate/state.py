"""Tracks the mutable state of a puzzle in progress."""

from __future__ import annotations

import time
from dataclasses import dataclass

from backend.models.config import PuzzleConfig
from backend.models.geometry import GridDimensions, PieceSize, Point
from backend.models.piece import Piece


@dataclass(frozen=True)
class DragState:
    """The piece currently held and its offset from the pointer."""

    piece_index: int
    grab_offset: Point


class PuzzleSession:
    """Holds the pieces, lock counter, current drag, and elapsed time."""

    def __init__(
        self,
        config: PuzzleConfig,
        dimensions: GridDimensions,
        piece_size: PieceSize,
        pieces: list[Piece],
        board_scale: float = 1.0,
    ) -> None:
        if len(pieces) != dimensions.count:
            raise ValueError(
                f"Expected {dimensions.count} pieces for a "
                f"{dimensions.columns}×{dimensions.rows} grid, got {len(pieces)}."
            )
        self.config = config
        self.dimensions = dimensions
        self.piece_size = piece_size
        self.pieces = pieces
        self.board_scale = board_scale
        self.correct_count: int = 0
        self.drag: DragState | None = None
        self.completed: bool = False
        self.drags: int = 0
        self._start_time: float = time.time()
        self._elapsed_banked: float = 0.0
        self._running: bool = True

    # -- queries --------------------------------------------------------------

    @property
    def total_count(self) -> int:
        return len(self.pieces)

    @property
    def dragged_piece_index(self) -> int | None:
        return self.drag.piece_index if self.drag is not None else None

    @property
    def is_complete(self) -> bool:
        return self.correct_count == self.total_count

    def piece(self, index: int) -> Piece:
        return self.pieces[index]

    def unlocked_pieces(self) -> list[Piece]:
        return [p for p in self.pieces if not p.locked]

    # -- time tracking --------------------------------------------------------

    @property
    def elapsed_time(self) -> float:
        if self._running:
            return self._elapsed_banked + (time.time() - self._start_time)
        return self._elapsed_banked

    def pause(self) -> None:
        if self._running:
            self._elapsed_banked += time.time() - self._start_time
            self._running = False

    def resume(self) -> None:
        if not self._running:
            self._start_time = time.time()
            self._running = True

    # -- counters -------------------------------------------------------------

    def record_lock(self) -> None:
        if self.correct_count >= self.total_count:
            raise RuntimeError("All pieces are already locked.")
        self.correct_count += 1

    def increment_drags(self) -> None:
        self.drags += 1
