"""Utility helpers: debug preview rendering."""

from .visualizer import render_canvas_preview, save_canvas_preview

__all__ = ["render_canvas_preview", "save_canvas_preview"]
