"""Tree node datatypes shared by the model, scene and selection modules."""

from __future__ import annotations

import weakref
from dataclasses import dataclass, field


@dataclass(eq=False)
class TreeNode:
    """One node of a loaded tree.

    Shape fields (``depth``, ``ancestor_ids``, ``has_children``) are filled in
    once at load time and never change afterwards. ``open``, ``checked`` and
    ``indeterminate`` are the only state mutated by user interaction.
    ``indeterminate`` stays ``None`` until the first full selection recompute.
    """

    identifier: str
    name: str
    icon: str | None = None
    depth: int = 0
    open: bool = True
    checked: bool = False
    indeterminate: bool | None = None
    selectable: bool = True
    has_children: bool = False
    ancestor_ids: tuple[str, ...] = ()
    children: list[TreeNode] = field(default_factory=list, repr=False)
    is_dragged: bool = field(default=False, repr=False)
    drag_y: float | None = field(default=None, repr=False)
    _parent_ref: weakref.ReferenceType[TreeNode] | None = field(default=None, repr=False)

    @property
    def parent(self) -> TreeNode | None:
        """Return the parent node, or ``None`` for roots."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @parent.setter
    def parent(self, value: TreeNode | None) -> None:
        self._parent_ref = weakref.ref(value) if value is not None else None

    def ancestors(self) -> list[TreeNode]:
        """Return ancestor nodes from the immediate parent up to the root."""
        out: list[TreeNode] = []
        node = self.parent
        while node is not None:
            out.append(node)
            node = node.parent
        return out
