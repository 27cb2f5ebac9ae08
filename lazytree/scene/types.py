"""Scene value objects handed to rendering backends."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..tree_model import CHECKBOX_ICON_REFS


@dataclass(frozen=True)
class NodeRecord:
    """Rendered attributes of one materialized node."""

    identifier: str
    x: float
    y: float
    label: str
    toggle_visible: bool
    toggle_open: bool
    checkbox_state: str | None = None
    icon_ref: str | None = None

    @property
    def toggle_transform(self) -> str:
        return "translate(8 -8) rotate(90)" if self.toggle_open else "translate(-8 -8) rotate(0)"

    @property
    def checkbox_icon_ref(self) -> str | None:
        if self.checkbox_state is None:
            return None
        return CHECKBOX_ICON_REFS[self.checkbox_state]


@dataclass(frozen=True)
class EdgeRecord:
    """Connector between a parent row and one of its child rows."""

    source_id: str
    target_id: str
    source: tuple[float, float]
    target: tuple[float, float]
    has_children_at_target: bool
    indent_width: float = 16.0

    def path_data(self) -> str:
        """Return the squared-diagonal path: down from the parent, then across.

        Leaf targets stop a quarter indent past the child's x so the line meets
        the row instead of the (absent) toggle chevron.
        """
        sx, sy = self.source
        tx, ty = self.target
        end_x = tx if self.has_children_at_target else tx + self.indent_width / 4
        return f"M{_num(sx)} {_num(sy)} V{_num(ty)} H{_num(end_x)}"


def _num(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


@dataclass(frozen=True)
class DragIndicator:
    """Insertion marker drawn while a node is dragged.

    A whole ``snapped_row`` highlights that row; a half row draws a thin line
    between two rows.
    """

    snapped_row: float
    y: float
    height: float

    @property
    def between_rows(self) -> bool:
        return self.snapped_row % 1 != 0


@dataclass(frozen=True)
class SceneDiff:
    """Enter/update/exit operations for one reconcile pass.

    ``structural`` is false when the visible row set did not change; then
    ``enter`` and ``exit`` are empty and ``edges`` is ``None`` (keep the
    previously drawn edges).
    """

    structural: bool
    enter: tuple[NodeRecord, ...] = ()
    update: tuple[NodeRecord, ...] = ()
    exit: tuple[str, ...] = ()
    edges: tuple[EdgeRecord, ...] | None = None
    icon_definitions: dict[str, str] = field(default_factory=dict)
    content_height: float = 0.0
    indicator: DragIndicator | None = None

    @property
    def records(self) -> tuple[NodeRecord, ...]:
        """All records carrying attributes, entered ones first."""
        return self.enter + self.update
