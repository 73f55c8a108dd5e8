from backend.engine.gameplay.game import JigsawGame

__all__ = ["JigsawGame"]
