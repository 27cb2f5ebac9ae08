"""Drag gesture tracking with a snapped insertion indicator.

Only visual feedback is produced: the dragged node's edge follows the pointer
and an indicator marks the candidate row. Dropping does not move the node.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable

from ..scene.types import DragIndicator
from ..tree_model import TreeNode
from .throttle import LatestValueThrottle

logger = logging.getLogger(__name__)

DRAG_THROTTLE_SECONDS = 0.04

IDLE = "idle"
DRAGGING = "dragging"


def snap_row(pointer_y: float, row_height: float) -> float:
    """Snap a pointer y to half-row granularity, rounding halves upward."""
    return math.floor((pointer_y / row_height) * 2 + 0.5) / 2


def indicator_for(pointer_y: float, row_height: float) -> DragIndicator:
    """Return the indicator geometry for a pointer y.

    On a whole row the indicator covers that row; between rows it is a one
    unit line through the gap.
    """
    row = snap_row(pointer_y, row_height)
    between = row % 1 != 0
    y = row * row_height + (row_height / 2 if between else 0)
    return DragIndicator(snapped_row=row, y=y, height=1 if between else row_height)


class DragReorder:
    """``idle -> dragging -> idle`` state machine for one drag gesture."""

    def __init__(
        self,
        row_height: float,
        *,
        interval: float = DRAG_THROTTLE_SECONDS,
        on_indicator: Callable[[DragIndicator | None], None] | None = None,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self.row_height = row_height
        self.state = IDLE
        self.node: TreeNode | None = None
        self.last_pointer_y: float | None = None
        self.indicator: DragIndicator | None = None
        self._on_indicator = on_indicator
        self._throttle: LatestValueThrottle[float] = LatestValueThrottle(
            interval,
            self._recompute_indicator,
            monotonic=monotonic,
        )

    @property
    def active(self) -> bool:
        return self.state == DRAGGING

    def _recompute_indicator(self, pointer_y: float) -> None:
        self.indicator = indicator_for(pointer_y, self.row_height)
        if self._on_indicator is not None:
            self._on_indicator(self.indicator)

    def start(self, node: TreeNode) -> None:
        """Mark ``node`` as dragged; a drag already in progress is ended first."""
        if self.active:
            self.end()
        node.is_dragged = True
        node.drag_y = None
        self.node = node
        self.state = DRAGGING
        logger.debug("drag start on %r", node.identifier)

    def move(self, pointer_y: float) -> bool:
        """Record the latest pointer y; return whether the indicator moved now."""
        if not self.active or self.node is None:
            return False
        self.last_pointer_y = pointer_y
        self.node.drag_y = pointer_y
        return self._throttle.submit(pointer_y)

    def poll(self) -> bool:
        """Flush a throttled pointer sample once its interval has elapsed."""
        if not self.active:
            return False
        return self._throttle.poll()

    def end(self) -> TreeNode | None:
        """Finish the gesture wherever the pointer is and hide the indicator."""
        node = self.node
        if node is not None:
            node.is_dragged = False
            node.drag_y = None
        self._throttle.cancel()
        self.node = None
        self.state = IDLE
        self.last_pointer_y = None
        self.indicator = None
        if self._on_indicator is not None:
            self._on_indicator(None)
        if node is not None:
            logger.debug("drag end on %r", node.identifier)
        return node
