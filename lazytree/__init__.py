"""Public package surface for lazytree.

Exports the ``TreeView`` façade, its settings, and ``main`` for programmatic
CLI invocation. Most implementation lives in submodules under ``lazytree``.
"""

from __future__ import annotations

from .config import TreeSettings
from .events import Channel, TreeEvents
from .scene import SceneDiff, TextSceneBackend
from .tree_model import TreeLoadError, TreeModel, TreeNode, build_tree_model
from .view import TreeView


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "Channel",
    "SceneDiff",
    "TextSceneBackend",
    "TreeEvents",
    "TreeLoadError",
    "TreeModel",
    "TreeNode",
    "TreeSettings",
    "TreeView",
    "build_tree_model",
    "main",
]
