"""Typed lifecycle channels for tree-view observers.

Each lifecycle point has its own channel with a fixed payload type. Handlers
run synchronously in subscription order; an exception raised by a handler
propagates to whoever triggered the event.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from .scene.types import NodeRecord
from .tree_model import TreeModel, TreeNode
from .viewport import TreeWindow

T = TypeVar("T")


class Channel(Generic[T]):
    """Ordered list of handlers for one lifecycle point."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._handlers: list[Callable[[T], None]] = []

    def __len__(self) -> int:
        return len(self._handlers)

    def subscribe(self, handler: Callable[[T], None]) -> Callable[[], None]:
        """Register ``handler`` and return a callable that removes it again."""
        self._handlers.append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers:
                self._handlers.remove(handler)

        return unsubscribe

    def emit(self, payload: T) -> None:
        for handler in list(self._handlers):
            handler(payload)


@dataclass
class TreeEvents:
    """All lifecycle channels exposed by ``TreeView``."""

    after_load: Channel[TreeModel] = field(default_factory=lambda: Channel("after_load"))
    before_update: Channel[TreeWindow] = field(default_factory=lambda: Channel("before_update"))
    after_node_render: Channel[NodeRecord] = field(default_factory=lambda: Channel("after_node_render"))
    after_selection_change: Channel[list[str]] = field(
        default_factory=lambda: Channel("after_selection_change")
    )
    after_toggle: Channel[TreeNode] = field(default_factory=lambda: Channel("after_toggle"))
