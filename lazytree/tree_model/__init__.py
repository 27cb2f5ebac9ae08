"""Tree-model creation, visible-row flattening, and node attribute helpers.

Defines ``TreeNode``/``TreeModel`` and the payload loader.
Also formats node labels and checkbox states for the scene layer.
"""

from __future__ import annotations

from .build import TreeLoadError, TreeModel, build_tree_model, load_tree_payload
from .flatten import flatten_visible_nodes
from .icons import CHECKBOX_ICON_REFS, IconRegistry, icon_hash, icon_ref
from .rendering import (
    CHECKED,
    INDETERMINATE,
    UNCHECKED,
    checkbox_state,
    format_node_label,
    shows_checkbox,
)
from .types import TreeNode

__all__ = [
    "TreeNode",
    "TreeModel",
    "TreeLoadError",
    "build_tree_model",
    "load_tree_payload",
    "flatten_visible_nodes",
    "IconRegistry",
    "CHECKBOX_ICON_REFS",
    "icon_hash",
    "icon_ref",
    "CHECKED",
    "UNCHECKED",
    "INDETERMINATE",
    "checkbox_state",
    "format_node_label",
    "shows_checkbox",
]
