from backend.engine.snap.evaluator import SnapEvaluator

__all__ = ["SnapEvaluator"]
