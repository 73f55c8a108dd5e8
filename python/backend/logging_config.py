"""Logging setup shared by every frontend."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

_NAMESPACES = ("backend", "frontend")


def setup_logging(level: int = logging.WARNING, log_file: Path | None = None) -> None:
    """Configure the ``backend`` and ``frontend`` logger namespaces.

    Args:
        level: Logging level (e.g. ``logging.DEBUG``).
        log_file: Optional path that receives a copy of every record.
    """
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    handlers: list[logging.Handler] = []
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for name in _NAMESPACES:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # Re-initialising (e.g. menu -> game -> menu) must not duplicate output.
        if logger.hasHandlers():
            logger.handlers.clear()
        for handler in handlers:
            logger.addHandler(handler)
        logger.propagate = False

    logging.getLogger("backend").info("Logging initialized.")
