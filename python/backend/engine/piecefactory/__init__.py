from backend.engine.piecefactory.factory import PieceFactory

__all__ = ["PieceFactory"]
