from backend.engine.gamestate.state import DragState, PuzzleSession

__all__ = ["DragState", "PuzzleSession"]
