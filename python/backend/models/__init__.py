from backend.models.config import GameSettings, PuzzleConfig
from backend.models.geometry import (
    PIECE_DEPTH,
    GridDimensions,
    PieceSize,
    Point,
    UVRect,
)
from backend.models.level import LevelCatalog, SourceImage
from backend.models.piece import Piece

__all__ = [
    "PIECE_DEPTH",
    "GameSettings",
    "GridDimensions",
    "LevelCatalog",
    "Piece",
    "PieceSize",
    "Point",
    "PuzzleConfig",
    "SourceImage",
    "UVRect",
]
