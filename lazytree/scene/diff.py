"""Reconcile successive tree windows into scene diffs.

The reconciler remembers the previous window signature and the identifiers it
materialized. When neither changes shape, only attribute updates are emitted so
backends can keep their existing elements across pixel-level scrolling; row
elements are created and released only when the visible row set moves.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..tree_model import IconRegistry, TreeNode, checkbox_state, format_node_label, shows_checkbox
from ..viewport import TreeWindow, Viewport
from .types import DragIndicator, EdgeRecord, NodeRecord, SceneDiff

logger = logging.getLogger(__name__)


class SceneReconciler:
    """Turn ``TreeWindow`` snapshots into enter/update/exit scene diffs."""

    def __init__(
        self,
        *,
        row_height: float,
        indent_width: float,
        show_checkboxes: bool = False,
        show_icons: bool = False,
        icons: IconRegistry | None = None,
    ) -> None:
        self.row_height = row_height
        self.indent_width = indent_width
        self.show_checkboxes = show_checkboxes
        self.show_icons = show_icons
        self.icons = icons if icons is not None else IconRegistry()
        self._visible: Sequence[TreeNode] = ()
        self._row_index: dict[str, int] = {}
        self._previous_signature: tuple[int, int, int] | None = None
        self._previous_ids: list[str] = []

    @property
    def materialized_ids(self) -> list[str]:
        """Identifiers currently held by the backend, in row order."""
        return list(self._previous_ids)

    def set_visible(self, visible: Sequence[TreeNode]) -> None:
        """Adopt a new flattened list; the next reconcile is structural."""
        self._visible = visible
        self._row_index = {node.identifier: idx for idx, node in enumerate(visible)}
        self._previous_signature = None

    def node_position(self, node: TreeNode, row_index: int) -> tuple[float, float]:
        return node.depth * self.indent_width, row_index * self.row_height

    def node_record(self, node: TreeNode, row_index: int) -> NodeRecord:
        """Build the attribute record shared by entered and updated nodes."""
        x, y = self.node_position(node, row_index)
        state: str | None = None
        if self.show_checkboxes and shows_checkbox(node):
            state = checkbox_state(node)
        return NodeRecord(
            identifier=node.identifier,
            x=x,
            y=y,
            label=format_node_label(node, show_checkboxes=self.show_checkboxes),
            toggle_visible=node.has_children,
            toggle_open=node.open,
            checkbox_state=state,
            icon_ref=self.icons.ref_for(node) if self.show_icons else None,
        )

    def visible_edges(self, viewport: Viewport) -> tuple[EdgeRecord, ...]:
        """Return parent/child edges whose vertical span meets the overscan band."""
        edges: list[EdgeRecord] = []
        for row_index, node in enumerate(self._visible):
            parent = node.parent
            if parent is None:
                continue
            parent_index = self._row_index.get(parent.identifier)
            if parent_index is None:
                continue
            source = self.node_position(parent, parent_index)
            target = self.node_position(node, row_index)
            if node.is_dragged and node.drag_y is not None:
                target = (target[0], node.drag_y)
            if not viewport.intersects(source[1], target[1]):
                continue
            edges.append(
                EdgeRecord(
                    source_id=parent.identifier,
                    target_id=node.identifier,
                    source=source,
                    target=target,
                    has_children_at_target=node.has_children,
                    indent_width=self.indent_width,
                )
            )
        return tuple(edges)

    def reconcile(
        self,
        window: TreeWindow,
        viewport: Viewport,
        *,
        refresh_edges: bool = False,
        indicator: DragIndicator | None = None,
    ) -> SceneDiff:
        """Diff ``window`` against the previously materialized window.

        ``refresh_edges`` forces edge recomputation on a non-structural pass
        (used while a dragged node moves).
        """
        records = [
            self.node_record(node, window.start + offset)
            for offset, node in enumerate(window.nodes)
        ]
        content_height = len(self._visible) * self.row_height
        signature = window.signature()

        if signature == self._previous_signature:
            return SceneDiff(
                structural=False,
                update=tuple(records),
                edges=self.visible_edges(viewport) if refresh_edges else None,
                icon_definitions=self.icons.drain_new(),
                content_height=content_height,
                indicator=indicator,
            )

        new_ids = [record.identifier for record in records]
        new_id_set = set(new_ids)
        previous_id_set = set(self._previous_ids)
        exit_ids = tuple(identifier for identifier in self._previous_ids if identifier not in new_id_set)
        enter = tuple(record for record in records if record.identifier not in previous_id_set)
        update = tuple(record for record in records if record.identifier in previous_id_set)

        self._previous_signature = signature
        self._previous_ids = new_ids
        logger.debug(
            "structural reconcile start=%d rows=%d: %d enter, %d update, %d exit",
            window.start,
            window.rows,
            len(enter),
            len(update),
            len(exit_ids),
        )
        return SceneDiff(
            structural=True,
            enter=enter,
            update=update,
            exit=exit_ids,
            edges=self.visible_edges(viewport),
            icon_definitions=self.icons.drain_new(),
            content_height=content_height,
            indicator=indicator,
        )
