#!/usr/bin/env python3
"""Jigsaw Puzzle Game.

Usage::

    python main.py                  # Pygame GUI
    python main.py -f rich -d 3     # Rich terminal, 3 pieces on the short side
    python main.py --images ~/pics  # play your own images
"""

import importlib
import logging
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer

ROOT = Path(__file__).resolve().parent  # python/
PROJECT_ROOT = ROOT.parent
ASSETS_DIR = PROJECT_ROOT / "assets"
IMAGES_DIR = ASSETS_DIR / "images"

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.errors import InvalidConfiguration  # noqa: E402
from backend.logging_config import setup_logging  # noqa: E402
from backend.models.config import (  # noqa: E402
    DEFAULT_DIFFICULTY,
    MAX_DIFFICULTY,
    MIN_DIFFICULTY,
    GameSettings,
)

logger = logging.getLogger("frontend.main")


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    rich = "rich"
    pygame = "pygame"


_RUNNERS = {
    Frontend.rich: "frontend.cli.rich.app",
    Frontend.pygame: "frontend.gui.pygame.app",
}


class LogLevel(StrEnum):
    debug = "debug"
    info = "info"
    warning = "warning"
    error = "error"


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Frontend = typer.Option(
        Frontend.pygame, "-f", "--frontend",
        help="Frontend to launch.",
    ),
    difficulty: int = typer.Option(
        DEFAULT_DIFFICULTY, "-d", "--difficulty",
        min=MIN_DIFFICULTY, max=MAX_DIFFICULTY,
        help="Pieces along the image's shorter side.",
    ),
    images: Path = typer.Option(
        IMAGES_DIR, "-i", "--images",
        file_okay=False,
        help="Folder of puzzle images.",
    ),
    seed: Optional[int] = typer.Option(
        None, "--seed",
        help="Seed the scatter RNG for a reproducible layout.",
    ),
    log_level: LogLevel = typer.Option(
        LogLevel.warning, "--log-level",
        help="Logging verbosity.",
    ),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file",
        dir_okay=False,
        help="Also write logs to this file.",
    ),
) -> None:
    """Jigsaw Puzzle Game."""
    setup_logging(getattr(logging, log_level.value.upper()), log_file)

    try:
        settings = GameSettings(difficulty=difficulty, seed=seed)
    except InvalidConfiguration as exc:
        logger.error("%s", exc)
        raise typer.Exit(code=2) from exc

    logger.info("Launching %s frontend (difficulty %d)", frontend.value, difficulty)
    mod = importlib.import_module(_RUNNERS[frontend])
    mod.run(settings=settings, images_dir=images)


if __name__ == "__main__":
    app()
