"""Per-node attribute helpers shared by the reconciler and backends."""

from __future__ import annotations

from .types import TreeNode

CHECKED = "checked"
UNCHECKED = "unchecked"
INDETERMINATE = "indeterminate"


def checkbox_state(node: TreeNode) -> str:
    """Return the tri-state checkbox name for ``node``.

    A checked node never reports indeterminate, whatever its cached flag says.
    """
    if node.checked:
        return CHECKED
    if node.indeterminate:
        return INDETERMINATE
    return UNCHECKED


def shows_checkbox(node: TreeNode) -> bool:
    """Unselectable nodes get no checkbox unless they are already checked."""
    return node.selectable or node.checked


def format_node_label(node: TreeNode, show_checkboxes: bool = False) -> str:
    """Return the text label of ``node`` with selection annotations."""
    if not show_checkboxes:
        return node.name
    state = checkbox_state(node)
    if state == UNCHECKED:
        return node.name
    return f"{node.name} ({state})"
