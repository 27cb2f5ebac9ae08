"""Scroll input port and row windowing for virtualized trees.

Only a contiguous slice of the flattened tree is materialized at any time. The
slice covers the visible band plus overscan rows so fast scrolling does not
reveal unrendered space before the next update lands.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from ..tree_model import TreeNode

DEFAULT_OVERSCAN = 1.5


@dataclass(frozen=True)
class Viewport:
    """Scroll band reported by the host for the current page position.

    ``scroll_top``/``scroll_bottom`` delimit the overscan-extended band in
    content coordinates. The band starts half a viewport above the page offset
    and spans ``overscan`` viewports.
    """

    page_offset: float = 0.0
    height: float = 0.0
    overscan: float = DEFAULT_OVERSCAN

    @classmethod
    def from_page(
        cls,
        page_offset: float,
        height: float,
        overscan: float = DEFAULT_OVERSCAN,
    ) -> Viewport:
        return cls(page_offset=float(page_offset), height=max(0.0, float(height)), overscan=overscan)

    @property
    def scroll_top(self) -> float:
        return max(0.0, self.page_offset - self.height / 2)

    @property
    def scroll_bottom(self) -> float:
        return self.scroll_top + self.height * self.overscan

    def intersects(self, top: float, bottom: float) -> bool:
        """Return whether the vertical span ``[top, bottom]`` touches the band."""
        return top <= self.scroll_bottom and self.scroll_top <= bottom


@dataclass(frozen=True)
class TreeWindow:
    """Contiguous slice of the flattened tree selected for materialization."""

    start: int
    rows: int
    nodes: tuple[TreeNode, ...]

    def signature(self) -> tuple[int, int, int]:
        """Return the values that decide whether rows must be rebuilt."""
        return self.start, self.rows, len(self.nodes)


def window_row_count(viewport_size: float, row_height: float, overscan: float = DEFAULT_OVERSCAN) -> int:
    """Return how many rows a viewport of ``viewport_size`` materializes."""
    if row_height <= 0:
        raise ValueError("row_height must be > 0")
    effective = max(0.0, viewport_size) * overscan
    return math.ceil(effective / row_height) + 1


def compute_window(
    visible: Sequence[TreeNode],
    scroll_offset: float,
    viewport_size: float,
    row_height: float,
    overscan: float = DEFAULT_OVERSCAN,
) -> TreeWindow:
    """Select the slice of ``visible`` to materialize for one scroll position.

    ``start`` is the first row at or above ``scroll_offset`` and is clamped to
    ``len(visible)``, so the returned slice never reaches past the list.
    """
    rows = window_row_count(viewport_size, row_height, overscan)
    start = math.floor(max(scroll_offset, 0) / row_height)
    start = min(start, len(visible))
    return TreeWindow(start=start, rows=rows, nodes=tuple(visible[start:start + rows]))
