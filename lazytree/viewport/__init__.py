"""Viewport windowing for the virtualized tree."""

from .windowing import DEFAULT_OVERSCAN, TreeWindow, Viewport, compute_window, window_row_count

__all__ = [
    "DEFAULT_OVERSCAN",
    "TreeWindow",
    "Viewport",
    "compute_window",
    "window_row_count",
]
