"""Jigsaw puzzle backend — pure game logic with no display dependencies."""
