"""Pointer-driven pick up / drag / release state machine."""

from __future__ import annotations

import logging

from backend.engine.gamestate import DragState, PuzzleSession
from backend.engine.interfaces import Camera, PointerSample, Renderer
from backend.engine.snap import SnapEvaluator
from backend.models.geometry import Point
from backend.models.piece import Piece

logger = logging.getLogger(__name__)


class InteractionController:
    """Advances the drag state of a session once per frame.

    The session is either idle (``session.drag is None``) or dragging one
    piece.  Only one pointer is tracked; a press while a piece is already
    held is ignored until that piece is released.
    """

    def __init__(
        self, camera: Camera, renderer: Renderer, snap: SnapEvaluator
    ) -> None:
        self._camera = camera
        self._renderer = renderer
        self._snap = snap

    # -- coordinates ----------------------------------------------------------

    def pointer_local(self, session: PuzzleSession, screen_pos: Point) -> Point:
        """Convert a screen position to the puzzle's local units."""
        x, y, _ = self._camera.screen_to_world(screen_pos)
        return (x / session.board_scale, y / session.board_scale)

    @staticmethod
    def hit_test(session: PuzzleSession, point: Point) -> Piece | None:
        """Return the topmost unlocked piece under *point*, if any.

        Later pieces are drawn on top, so they are tested first.
        """
        for piece in reversed(session.pieces):
            if piece.locked:
                continue
            if piece.contains(point, session.piece_size):
                return piece
        return None

    # -- per-frame update -----------------------------------------------------

    def step(self, session: PuzzleSession, sample: PointerSample) -> None:
        if sample.position is None:
            # Pointer left the viewport; a release still ends the drag.
            if sample.released and session.drag is not None:
                self._release(session)
            return

        pointer = self.pointer_local(session, sample.position)

        # PRESS
        if sample.pressed and session.drag is None:
            piece = self.hit_test(session, pointer)
            if piece is not None:
                offset = (
                    piece.position[0] - pointer[0],
                    piece.position[1] - pointer[1],
                )
                session.drag = DragState(piece_index=piece.index, grab_offset=offset)
                logger.debug("Picked up %s", piece.name)

        if session.drag is None:
            return

        piece = session.piece(session.drag.piece_index)

        # DRAG
        if sample.held:
            ox, oy = session.drag.grab_offset
            piece.position = (pointer[0] + ox, pointer[1] + oy)
            self._renderer.set_position(piece.handle, piece.position, piece.depth)

        # RELEASE
        if sample.released:
            self._release(session)

    def _release(self, session: PuzzleSession) -> None:
        """Drop the held piece where it is and try to snap it."""
        assert session.drag is not None
        session.increment_drags()
        self._snap.evaluate(session, session.drag.piece_index)
        session.drag = None
