"""Terminal rendering backend for scene diffs.

Keeps one row element per materialized node identifier and draws them as ANSI
text. Elements are created only on ``enter`` and released only on ``exit``;
``update`` rewrites attributes of elements that already exist.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from ..ansi import clip_ansi_line, display_width
from ..ui_theme import DEFAULT_THEME, UITheme
from .types import DragIndicator, EdgeRecord, NodeRecord, SceneDiff

INDENT_COLUMNS = 2

CHECKBOX_GLYPHS: dict[str, str] = {
    "unchecked": "[ ] ",
    "checked": "[x] ",
    "indeterminate": "[-] ",
}

_JOIN_GLYPHS: dict[tuple[str, str], str] = {
    ("│", "└"): "├",
    ("└", "│"): "├",
    ("├", "└"): "├",
    ("├", "│"): "├",
}


@dataclass
class RowElement:
    """Backend-side element owned for one materialized node."""

    record: NodeRecord
    updates: int = 0


class TextSceneBackend:
    """Apply ``SceneDiff`` values to an in-memory set of text rows."""

    def __init__(
        self,
        *,
        row_height: float,
        indent_width: float,
        width: int = 80,
        theme: UITheme | None = None,
    ) -> None:
        self.row_height = row_height
        self.indent_width = indent_width
        self.width = width
        self.theme = theme or DEFAULT_THEME
        self.elements: dict[str, RowElement] = {}
        self.edges: tuple[EdgeRecord, ...] = ()
        self.icon_definitions: dict[str, str] = {}
        self.indicator: DragIndicator | None = None
        self.content_height = 0.0
        self.created_count = 0
        self.released_count = 0

    def __call__(self, diff: SceneDiff) -> None:
        self.apply(diff)

    def apply(self, diff: SceneDiff) -> None:
        """Release exited rows, create entered rows, then rewrite updated ones.

        Unknown identifiers raise ``KeyError``: a diff that does not match the
        elements held here means the caller and backend disagree on state.
        """
        for identifier in diff.exit:
            del self.elements[identifier]
            self.released_count += 1
        for record in diff.enter:
            self.elements[record.identifier] = RowElement(record)
            self.created_count += 1
        for record in diff.update:
            element = self.elements[record.identifier]
            element.record = record
            element.updates += 1
        if diff.edges is not None:
            self.edges = diff.edges
        self.icon_definitions.update(diff.icon_definitions)
        self.indicator = diff.indicator
        self.content_height = diff.content_height

    def _row_of(self, y: float) -> int:
        return int(round(y / self.row_height))

    def _column_of(self, x: float) -> int:
        return int(round(x / self.indent_width)) * INDENT_COLUMNS

    def _edge_cells(self) -> dict[tuple[int, int], str]:
        """Rasterize edges into guide characters keyed by ``(row, column)``."""
        cells: dict[tuple[int, int], str] = {}

        def put(row: int, col: int, glyph: str) -> None:
            existing = cells.get((row, col))
            if existing is None or existing == glyph:
                cells[(row, col)] = glyph
                return
            cells[(row, col)] = _JOIN_GLYPHS.get((existing, glyph), existing)

        for edge in self.edges:
            col = self._column_of(edge.source[0])
            source_row = self._row_of(edge.source[1])
            target_row = self._row_of(edge.target[1])
            for row in range(source_row + 1, target_row):
                put(row, col, "│")
            put(target_row, col, "└")
            put(target_row, col + 1, "─")
        return cells

    def _format_record(self, record: NodeRecord, guides: str) -> str:
        theme = self.theme
        reset = theme.reset
        if record.toggle_visible:
            marker = "▾ " if record.toggle_open else "▸ "
            name_color = theme.tree_branch
        else:
            marker = "· "
            name_color = theme.tree_leaf
        parts = [f"{theme.tree_edge}{guides}{reset}", f"{theme.tree_marker}{marker}{reset}"]
        if record.checkbox_state is not None:
            color = {
                "checked": theme.checkbox_checked,
                "indeterminate": theme.checkbox_indeterminate,
            }.get(record.checkbox_state, theme.checkbox)
            parts.append(f"{color}{CHECKBOX_GLYPHS[record.checkbox_state]}{reset}")
        if record.icon_ref is not None:
            parts.append("◆ ")
        parts.append(f"{name_color}{record.label}{reset}")
        return "".join(parts)

    def render_lines(self, first_row: int | None = None, row_count: int | None = None) -> list[str]:
        """Render materialized rows as text, one line per row.

        Rows without a materialized element render empty. A drag indicator
        between rows is drawn as an extra rule line after the upper row.
        """
        by_row = {self._row_of(element.record.y): element.record for element in self.elements.values()}
        if not by_row:
            return []
        if first_row is None:
            first_row = min(by_row)
        if row_count is None:
            row_count = max(by_row) - first_row + 1
        cells = self._edge_cells()
        theme = self.theme

        lines: list[str] = []
        for row in range(first_row, first_row + row_count):
            record = by_row.get(row)
            if record is None:
                lines.append("")
            else:
                column = self._column_of(record.x)
                guides = "".join(cells.get((row, col), " ") for col in range(column))
                text = clip_ansi_line(self._format_record(record, guides), self.width)
                if self.indicator is not None and not self.indicator.between_rows and self.indicator.snapped_row == row:
                    text = f"{theme.reverse}{text}{theme.reset}"
                lines.append(text)
            if self.indicator is not None and self.indicator.between_rows and math.floor(self.indicator.snapped_row) == row:
                lines.append(f"{theme.drag_indicator}{'─' * max(1, self.width)}{theme.reset}")
        return lines

    def padded_lines(self, first_row: int | None = None, row_count: int | None = None) -> list[str]:
        """Render rows padded to ``width`` display columns."""
        out: list[str] = []
        for line in self.render_lines(first_row, row_count):
            pad = self.width - display_width(line)
            out.append(line + (" " * pad) if pad > 0 else line)
        return out
