"""Errors raised by the puzzle backend."""

from __future__ import annotations


class PuzzleError(Exception):
    """Base class for all puzzle errors."""


class InvalidConfiguration(PuzzleError, ValueError):
    """Raised at game start when the image or difficulty cannot be used.

    Nothing is mutated before this is raised, so the caller can stay on
    the level-select screen and try again.
    """
