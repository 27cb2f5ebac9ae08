"""Scene diffing and rendering backends."""

from .diff import SceneReconciler
from .text_backend import TextSceneBackend
from .types import DragIndicator, EdgeRecord, NodeRecord, SceneDiff

__all__ = [
    "DragIndicator",
    "EdgeRecord",
    "NodeRecord",
    "SceneDiff",
    "SceneReconciler",
    "TextSceneBackend",
]
