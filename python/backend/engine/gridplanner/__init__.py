from backend.engine.gridplanner.planner import GridPlanner

__all__ = ["GridPlanner"]
