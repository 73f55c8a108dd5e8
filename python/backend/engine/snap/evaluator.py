"""Locks released pieces that are close enough to their cell."""

from __future__ import annotations

import logging
import math

from backend.engine.gamestate import PuzzleSession
from backend.engine.gridplanner import GridPlanner
from backend.engine.interfaces import Renderer, UIShell

logger = logging.getLogger(__name__)


class SnapEvaluator:
    """Decides whether a dropped piece snaps into place."""

    def __init__(self, renderer: Renderer, ui: UIShell) -> None:
        self._renderer = renderer
        self._ui = ui

    @staticmethod
    def threshold(session: PuzzleSession) -> float:
        """Snap tolerance: half a piece's width."""
        return session.piece_size.width / 2

    def evaluate(self, session: PuzzleSession, index: int) -> bool:
        """Snap piece *index* if it was dropped near its target.

        Returns True if the piece was locked by this call.  When the last
        piece locks, the session is marked complete and the UI is told to
        offer "play again".
        """
        piece = session.piece(index)
        if piece.locked:
            return False

        target = GridPlanner.target_position(index, session.dimensions, session.piece_size)
        distance = math.dist(piece.position, target)
        if not distance < self.threshold(session):
            logger.debug("%s dropped %.3f from target; not locked", piece.name, distance)
            return False

        piece.position = target
        piece.locked = True
        self._renderer.set_position(piece.handle, piece.position, piece.depth)
        self._renderer.set_visual_property(piece.handle, False)
        session.record_lock()
        logger.debug(
            "%s locked (%d/%d)", piece.name, session.correct_count, session.total_count
        )

        if session.is_complete:
            session.completed = True
            session.pause()
            logger.info(
                "Puzzle complete: %d pieces, %d drags, %.1fs",
                session.total_count,
                session.drags,
                session.elapsed_time,
            )
            self._ui.show_play_again(True)
        return True
