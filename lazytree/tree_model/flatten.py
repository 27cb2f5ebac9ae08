"""Visible-row projection of a loaded tree."""

from __future__ import annotations

from collections.abc import Sequence

from .types import TreeNode


def flatten_visible_nodes(nodes_preorder: Sequence[TreeNode]) -> list[TreeNode]:
    """Return preorder nodes whose whole ancestor chain is open.

    Closed identifiers are collected in one pass, then each node's precomputed
    ancestor chain is tested against that set, so no subtree is re-walked.
    """
    closed = {node.identifier for node in nodes_preorder if not node.open}
    if not closed:
        return list(nodes_preorder)
    return [
        node
        for node in nodes_preorder
        if not any(ancestor_id in closed for ancestor_id in node.ancestor_ids)
    ]
