"""Puzzle engine: planning, building, scattering, dragging, snapping."""
