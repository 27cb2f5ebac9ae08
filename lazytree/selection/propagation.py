"""Tri-state checkbox propagation over a loaded tree.

A node is *indeterminate* when it is unchecked and at least one descendant is
checked or indeterminate. The whole tree is settled once after load with
``recompute_all``; afterwards a single toggle only revisits the toggled node's
ancestor chain, leaving sibling subtrees untouched.
"""

from __future__ import annotations

import logging

from ..tree_model import TreeModel, TreeNode, checkbox_state

logger = logging.getLogger(__name__)


class SelectionStateError(RuntimeError):
    """Raised when an incremental update runs before any full recompute."""


def _marks_parent(node: TreeNode) -> bool:
    return node.checked or bool(node.indeterminate)


def has_checked_or_indeterminate_children(node: TreeNode) -> bool:
    """Return whether any direct child is checked or indeterminate."""
    return any(_marks_parent(child) for child in node.children)


class SelectionPropagator:
    """Selection capability composed alongside a ``TreeView``."""

    def __init__(self, model: TreeModel) -> None:
        self.model = model

    def recompute_all(self) -> None:
        """Reset and rebuild every indeterminate flag in one children-first pass."""
        model = self.model
        for node in model.nodes:
            node.indeterminate = False
        for node in model.children_first():
            parent = node.parent
            if parent is not None and _marks_parent(node):
                parent.indeterminate = True
        # Checked wins over indeterminate.
        for node in model.nodes:
            if node.checked:
                node.indeterminate = False
        model.selection_recomputed = True
        logger.debug("recomputed selection state for %d nodes", len(model.nodes))

    def update_ancestors(self, node: TreeNode) -> None:
        """Refresh indeterminate flags along ``node``'s ancestor chain only."""
        if not self.model.selection_recomputed:
            raise SelectionStateError("update_ancestors called before recompute_all")
        marks = _marks_parent(node)
        for ancestor in node.ancestors():
            ancestor.indeterminate = (marks or has_checked_or_indeterminate_children(ancestor)) and not ancestor.checked

    def set_checked(self, identifier: object, checked: bool) -> TreeNode:
        """Set ``checked`` on one node and propagate to its ancestors."""
        node = self.model.node(identifier)
        node.checked = bool(checked)
        if node.checked:
            node.indeterminate = False
        else:
            node.indeterminate = has_checked_or_indeterminate_children(node)
        self.update_ancestors(node)
        return node

    def toggle(self, identifier: object) -> TreeNode:
        """Flip ``checked`` on one node and propagate to its ancestors."""
        node = self.model.node(identifier)
        return self.set_checked(identifier, not node.checked)

    def checked_ids(self) -> list[str]:
        """Return identifiers of checked nodes in preorder."""
        return [node.identifier for node in self.model.nodes if node.checked]

    def state_of(self, identifier: object) -> str:
        return checkbox_state(self.model.node(identifier))
