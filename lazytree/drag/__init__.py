"""Drag feedback for repositioning nodes."""

from .reorder import DRAG_THROTTLE_SECONDS, DRAGGING, IDLE, DragReorder, indicator_for, snap_row
from .throttle import LatestValueThrottle

__all__ = [
    "DRAG_THROTTLE_SECONDS",
    "DRAGGING",
    "IDLE",
    "DragReorder",
    "LatestValueThrottle",
    "indicator_for",
    "snap_row",
]
