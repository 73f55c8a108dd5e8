from backend.engine.interaction.controller import InteractionController

__all__ = ["InteractionController"]
