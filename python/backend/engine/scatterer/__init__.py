from backend.engine.scatterer.scatter import Scatterer

__all__ = ["Scatterer"]
