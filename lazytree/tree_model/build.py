"""Tree-model construction from hierarchical payloads."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .types import TreeNode

logger = logging.getLogger(__name__)


class TreeLoadError(ValueError):
    """Raised when a payload cannot be turned into a tree."""


@dataclass
class TreeModel:
    """All nodes of one loaded tree in preorder, plus an identifier index."""

    nodes: list[TreeNode]
    roots: list[TreeNode]
    by_id: dict[str, TreeNode]
    selection_recomputed: bool = field(default=False)

    def __len__(self) -> int:
        return len(self.nodes)

    def node(self, identifier: object) -> TreeNode:
        """Return the node for ``identifier`` or raise ``KeyError``."""
        key = str(identifier)
        try:
            return self.by_id[key]
        except KeyError:
            raise KeyError(f"unknown node identifier: {key!r}") from None

    def children_first(self) -> Iterator[TreeNode]:
        """Yield every node after all of its descendants (reversed preorder)."""
        return reversed(self.nodes)


def _payload_identifier(raw: Mapping[str, object]) -> str:
    value = raw.get("identifier")
    if value is None or isinstance(value, bool) or not isinstance(value, (str, int)):
        raise TreeLoadError(f"node is missing a string or integer identifier: {dict(raw)!r:.80}")
    identifier = str(value)
    if not identifier:
        raise TreeLoadError("node identifier must not be empty")
    return identifier


def _payload_children(raw: Mapping[str, object], identifier: str) -> Sequence[object]:
    children = raw.get("children")
    if children is None:
        return ()
    if isinstance(children, (str, bytes)) or not isinstance(children, Sequence):
        raise TreeLoadError(f"children of {identifier!r} must be a list")
    return children


def _optional_bool(raw: Mapping[str, object], key: str, default: bool) -> bool:
    value = raw.get(key, default)
    return value if isinstance(value, bool) else default


def build_tree_model(payload: object) -> TreeModel:
    """Build a ``TreeModel`` from a root mapping or a list of root mappings.

    The walk is iterative and single-pass: depth, parent link, ancestor chain
    and ``has_children`` are assigned as each node is created. Any malformed
    node aborts the whole load with ``TreeLoadError``; no partial model is
    returned.
    """
    if isinstance(payload, Mapping):
        raw_roots: Sequence[object] = [payload]
    elif isinstance(payload, Sequence) and not isinstance(payload, (str, bytes)):
        raw_roots = payload
    else:
        raise TreeLoadError("tree payload must be an object or a list of objects")

    nodes: list[TreeNode] = []
    roots: list[TreeNode] = []
    by_id: dict[str, TreeNode] = {}
    source_by_id: dict[str, int] = {}

    stack: list[tuple[object, TreeNode | None]] = [(raw, None) for raw in reversed(raw_roots)]
    while stack:
        raw, parent = stack.pop()
        if not isinstance(raw, Mapping):
            raise TreeLoadError(f"tree node must be an object, got {type(raw).__name__}")
        identifier = _payload_identifier(raw)

        if identifier in by_id:
            # The same payload object showing up under its own subtree is a cycle.
            if source_by_id[identifier] == id(raw) and parent is not None and (
                parent.identifier == identifier or identifier in parent.ancestor_ids
            ):
                raise TreeLoadError(f"cyclic ancestry at node {identifier!r}")
            raise TreeLoadError(f"duplicate node identifier {identifier!r}")

        raw_children = _payload_children(raw, identifier)
        name = raw.get("name")
        icon = raw.get("icon")
        node = TreeNode(
            identifier=identifier,
            name=str(name) if name is not None else identifier,
            icon=icon if isinstance(icon, str) and icon else None,
            open=_optional_bool(raw, "open", True),
            checked=_optional_bool(raw, "checked", False),
            selectable=_optional_bool(raw, "selectable", True),
            has_children=bool(raw_children),
        )
        if parent is None:
            roots.append(node)
        else:
            node.parent = parent
            node.depth = parent.depth + 1
            node.ancestor_ids = (parent.identifier, *parent.ancestor_ids)
            parent.children.append(node)

        nodes.append(node)
        by_id[identifier] = node
        source_by_id[identifier] = id(raw)
        for child in reversed(raw_children):
            stack.append((child, node))

    logger.debug("built tree model with %d nodes and %d roots", len(nodes), len(roots))
    return TreeModel(nodes=nodes, roots=roots, by_id=by_id)


def load_tree_payload(path: Path) -> TreeModel:
    """Read a JSON payload from ``path`` and build its tree model."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise TreeLoadError(f"{path}: invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    return build_tree_model(payload)
