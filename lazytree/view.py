"""Tree view façade wiring model, windowing, diffing, selection and drag.

The host environment owns the event sources and calls these methods
synchronously: load completion, scroll and resize, toggle and checkbox
clicks, drag start/move/end. Every public operation mutates the model and
re-runs the flatten → window → reconcile pipeline before returning, so no
partially updated state is ever observable from a handler.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from .config import TreeSettings
from .drag import DragReorder
from .events import TreeEvents
from .scene import DragIndicator, SceneDiff, SceneReconciler
from .selection import SelectionPropagator
from .tree_model import TreeModel, TreeNode, build_tree_model, flatten_visible_nodes
from .viewport import TreeWindow, Viewport, compute_window

logger = logging.getLogger(__name__)


class TreeView:
    """Virtualized, collapsible tree bound to one rendering backend.

    ``apply_scene`` receives every ``SceneDiff``; whatever it raises
    propagates out of the triggering call. Tri-state selection is enabled by
    ``settings.show_checkboxes`` and lives in ``self.selection``.
    """

    def __init__(
        self,
        settings: TreeSettings,
        apply_scene: Callable[[SceneDiff], None],
        *,
        events: TreeEvents | None = None,
        monotonic: Callable[[], float] = time.monotonic,
    ) -> None:
        self.settings = settings
        self.events = events or TreeEvents()
        self._apply_scene = apply_scene
        self.model: TreeModel | None = None
        self.selection: SelectionPropagator | None = None
        self.visible: list[TreeNode] = []
        self.viewport = Viewport.from_page(0, 0, overscan=settings.overscan)
        self.last_window: TreeWindow | None = None
        self.reconciler = SceneReconciler(
            row_height=settings.node_height,
            indent_width=settings.indent_width,
            show_checkboxes=settings.show_checkboxes,
            show_icons=settings.show_icons,
        )
        self.drag = DragReorder(
            settings.node_height,
            interval=settings.drag_throttle_seconds,
            on_indicator=self._on_drag_indicator,
            monotonic=monotonic,
        )

    @property
    def content_height(self) -> float:
        """Total scrollable height of the flattened tree."""
        return len(self.visible) * self.settings.node_height

    def _require_model(self) -> TreeModel:
        if self.model is None:
            raise RuntimeError("no tree loaded")
        return self.model

    def _require_selection(self) -> SelectionPropagator:
        if self.selection is None:
            raise RuntimeError("checkboxes are disabled for this tree view")
        return self.selection

    def load(self, payload: object) -> TreeModel:
        """Replace the current tree with one built from ``payload``.

        The payload is validated completely before any state changes; a
        ``TreeLoadError`` leaves the previous tree and scene untouched.
        """
        return self.load_model(build_tree_model(payload))

    def load_model(self, model: TreeModel) -> TreeModel:
        """Adopt an already built ``TreeModel`` and render it."""
        if self.drag.active:
            self.drag.end()
        self.model = model
        self.selection = None
        if self.settings.show_checkboxes:
            self.selection = SelectionPropagator(model)
            self.selection.recompute_all()
        logger.debug("loaded tree with %d nodes", len(model))
        self.events.after_load.emit(model)
        self.reflatten()
        self.update()
        return model

    def reflatten(self) -> list[TreeNode]:
        """Recompute the visible node list after ``open`` flags changed."""
        model = self._require_model()
        self.visible = flatten_visible_nodes(model.nodes)
        self.reconciler.set_visible(self.visible)
        return self.visible

    def set_scroll(self, page_offset: float) -> SceneDiff | None:
        self.viewport = Viewport.from_page(page_offset, self.viewport.height, overscan=self.settings.overscan)
        return self.update()

    def resize(self, viewport_height: float) -> SceneDiff | None:
        self.viewport = Viewport.from_page(self.viewport.page_offset, viewport_height, overscan=self.settings.overscan)
        return self.update()

    def set_open(self, identifier: object, is_open: bool) -> TreeNode:
        """Expand or collapse one node and refresh the scene."""
        node = self._require_model().node(identifier)
        if node.open == is_open:
            return node
        node.open = is_open
        self.reflatten()
        self.events.after_toggle.emit(node)
        self.update()
        return node

    def toggle_open(self, identifier: object) -> TreeNode:
        node = self._require_model().node(identifier)
        return self.set_open(identifier, not node.open)

    def set_checked(self, identifier: object, checked: bool) -> TreeNode:
        """Check or uncheck one node, propagate, notify, then refresh."""
        selection = self._require_selection()
        node = selection.set_checked(identifier, checked)
        self.events.after_selection_change.emit(selection.checked_ids())
        self.update()
        return node

    def toggle_checked(self, identifier: object) -> TreeNode:
        node = self._require_model().node(identifier)
        return self.set_checked(identifier, not node.checked)

    def checked_ids(self) -> list[str]:
        return self._require_selection().checked_ids()

    def drag_start(self, identifier: object) -> TreeNode:
        node = self._require_model().node(identifier)
        self.drag.start(node)
        return node

    def drag_move(self, pointer_y: float) -> bool:
        return self.drag.move(pointer_y)

    def poll(self) -> bool:
        """Flush throttled drag feedback; call from the host's idle loop."""
        return self.drag.poll()

    def drag_end(self) -> TreeNode | None:
        return self.drag.end()

    def _on_drag_indicator(self, _indicator: DragIndicator | None) -> None:
        self.update(refresh_edges=True)

    def update(self, *, refresh_edges: bool = False) -> SceneDiff | None:
        """Window the visible list, reconcile, and hand the diff to the backend."""
        if self.model is None:
            return None
        settings = self.settings
        window = compute_window(
            self.visible,
            self.viewport.scroll_top,
            self.viewport.height,
            settings.node_height,
            overscan=settings.overscan,
        )
        self.events.before_update.emit(window)
        diff = self.reconciler.reconcile(
            window,
            self.viewport,
            refresh_edges=refresh_edges,
            indicator=self.drag.indicator,
        )
        self.last_window = window
        self._apply_scene(diff)
        for record in diff.records:
            self.events.after_node_render.emit(record)
        return diff
