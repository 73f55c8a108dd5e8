"""Game configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from backend.errors import InvalidConfiguration

MIN_DIFFICULTY = 2
MAX_DIFFICULTY = 6
DEFAULT_DIFFICULTY = 4


@dataclass(frozen=True)
class PuzzleConfig:
    """The inputs a single game is planned from.  Validated on creation."""

    difficulty: int
    source_image_width: int
    source_image_height: int

    def __post_init__(self) -> None:
        if not MIN_DIFFICULTY <= self.difficulty <= MAX_DIFFICULTY:
            raise InvalidConfiguration(
                f"Difficulty must be between {MIN_DIFFICULTY} and "
                f"{MAX_DIFFICULTY}, got {self.difficulty}."
            )
        if self.source_image_width <= 0 or self.source_image_height <= 0:
            raise InvalidConfiguration(
                f"Image dimensions must be positive, got "
                f"{self.source_image_width}×{self.source_image_height}."
            )


@dataclass(frozen=True)
class GameSettings:
    """Host-level settings that stay fixed across games."""

    difficulty: int = DEFAULT_DIFFICULTY
    board_scale: float = 8.0  # world units per local unit
    border_width: float = 0.1
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.board_scale <= 0:
            raise InvalidConfiguration(
                f"Board scale must be positive, got {self.board_scale}."
            )
