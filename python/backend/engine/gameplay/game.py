"""Core gameplay — starts, steps, and tears down puzzle sessions."""

from __future__ import annotations

import logging
import random

from backend.engine.gamestate import PuzzleSession
from backend.engine.gridplanner import GridPlanner
from backend.engine.interaction import InteractionController
from backend.engine.interfaces import Camera, PointerSample, Renderer, UIShell
from backend.engine.piecefactory import PieceFactory
from backend.engine.scatterer import Scatterer
from backend.engine.snap import SnapEvaluator
from backend.models.config import GameSettings, PuzzleConfig
from backend.models.level import LevelCatalog, SourceImage

logger = logging.getLogger(__name__)


class JigsawGame:
    """Orchestrates the single active puzzle session.

    The host calls :meth:`start_level` (or :meth:`start_game`) from its
    level-select screen, :meth:`step` once per frame, and
    :meth:`restart_game` from its "play again" button.
    """

    def __init__(
        self,
        renderer: Renderer,
        camera: Camera,
        ui: UIShell,
        settings: GameSettings | None = None,
        levels: LevelCatalog | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.settings = settings or GameSettings()
        self.levels = levels or LevelCatalog()
        self._renderer = renderer
        self._camera = camera
        self._ui = ui
        self._rng = rng or random.Random(self.settings.seed)
        self._snap = SnapEvaluator(renderer, ui)
        self._controller = InteractionController(camera, renderer, self._snap)
        self.session: PuzzleSession | None = None

    # -- lifecycle ------------------------------------------------------------

    def start_level(self, image_id: str) -> PuzzleSession:
        """Start the level registered under *image_id*."""
        return self.start_game(self.levels.get(image_id))

    def start_game(self, image: SourceImage) -> PuzzleSession:
        """Build, scatter, and outline a new puzzle for *image*.

        Raises ``InvalidConfiguration`` before touching any state if the
        image or difficulty is unusable.  Any game already in progress is
        discarded.
        """
        config = PuzzleConfig(
            difficulty=self.settings.difficulty,
            source_image_width=image.width,
            source_image_height=image.height,
        )
        dims = GridPlanner.dimensions(
            config.source_image_width, config.source_image_height, config.difficulty
        )
        size = GridPlanner.piece_size(
            config.source_image_width, config.source_image_height, dims
        )

        if self.session is not None:
            self._teardown()

        self._ui.show_level_select(False)

        pieces = PieceFactory.create(dims, size, image.texture, self._renderer)
        bounds = Scatterer.bounds(
            self._camera.viewport_half_extents(), size, self.settings.board_scale
        )
        Scatterer.scatter(pieces, bounds, self._rng, self._renderer)

        self._renderer.draw_outline(
            GridPlanner.border_outline(dims, size), self.settings.border_width
        )

        self.session = PuzzleSession(
            config=config,
            dimensions=dims,
            piece_size=size,
            pieces=pieces,
            board_scale=self.settings.board_scale,
        )
        logger.info(
            "Started '%s' (%d×%d px): %d×%d grid, %d pieces",
            image.title,
            image.width,
            image.height,
            dims.columns,
            dims.rows,
            dims.count,
        )
        return self.session

    def restart_game(self) -> None:
        """Destroy the current pieces and return to level select."""
        if self.session is not None:
            self._teardown()
        self._ui.show_play_again(False)
        self._ui.show_level_select(True)
        logger.info("Returned to level select")

    def _teardown(self) -> None:
        assert self.session is not None
        for piece in self.session.pieces:
            self._renderer.destroy(piece.handle)
        self.session.pieces.clear()
        self.session.correct_count = 0
        self.session.drag = None
        self._renderer.hide_outline()
        self.session = None

    # -- per-frame update -----------------------------------------------------

    def step(self, sample: PointerSample) -> None:
        """Advance the drag state machine by one frame."""
        if self.session is None:
            return
        self._controller.step(self.session, sample)

    # -- queries --------------------------------------------------------------

    @property
    def is_won(self) -> bool:
        return self.session is not None and self.session.completed
