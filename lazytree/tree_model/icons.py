"""Icon reference hashing and deduplicated icon definitions."""

from __future__ import annotations

from .types import TreeNode

CHECKBOX_ICON_REFS: dict[str, str] = {
    "unchecked": "#icon-check",
    "checked": "#icon-checked",
    "indeterminate": "#icon-indeterminate",
}


def icon_hash(icon: str) -> int:
    """Return a stable non-negative 32-bit hash of an icon's markup."""
    value = 0
    for ch in icon:
        value = ((value << 5) - value + ord(ch)) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return abs(value)


def icon_ref(icon: str) -> str:
    return f"#icon-{icon_hash(icon)}"


class IconRegistry:
    """Collect one definition per distinct icon markup.

    Definitions are registered while nodes are materialized; ``drain_new``
    returns only definitions the backend has not been handed yet.
    """

    def __init__(self) -> None:
        self._definitions: dict[str, str] = {}
        self._pending: list[str] = []

    def __len__(self) -> int:
        return len(self._definitions)

    def ref_for(self, node: TreeNode) -> str | None:
        if not node.icon:
            return None
        ref = icon_ref(node.icon)
        if ref not in self._definitions:
            self._definitions[ref] = node.icon
            self._pending.append(ref)
        return ref

    def drain_new(self) -> dict[str, str]:
        fresh = {ref: self._definitions[ref] for ref in self._pending}
        self._pending.clear()
        return fresh