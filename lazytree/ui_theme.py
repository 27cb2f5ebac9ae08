"""ANSI palettes for the terminal tree renderer.

Only the text scene backend reads them; the core pipeline never emits
styling.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the text backend."""

    name: str
    reset: str
    reverse: str
    tree_marker: str
    tree_edge: str
    tree_branch: str
    tree_leaf: str
    checkbox: str
    checkbox_checked: str
    checkbox_indeterminate: str
    drag_indicator: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    tree_marker="\033[38;5;44m",
    tree_edge="\033[2m",
    tree_branch="\033[1;34m",
    tree_leaf="\033[38;5;252m",
    checkbox="\033[38;5;250m",
    checkbox_checked="\033[38;5;42m",
    checkbox_indeterminate="\033[38;5;214m",
    drag_indicator="\033[38;5;81m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    reverse="\033[7m",
    tree_marker="\033[38;5;39m",
    tree_edge="\033[2;38;5;31m",
    tree_branch="\033[1;38;5;45m",
    tree_leaf="\033[38;5;252m",
    checkbox="\033[38;5;110m",
    checkbox_checked="\033[38;5;84m",
    checkbox_indeterminate="\033[38;5;215m",
    drag_indicator="\033[38;5;45m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    reverse="",
    tree_marker="",
    tree_edge="",
    tree_branch="",
    tree_leaf="",
    checkbox="",
    checkbox_checked="",
    checkbox_indeterminate="",
    drag_indicator="",
)

THEMES: dict[str, UITheme] = {theme.name: theme for theme in (DEFAULT_THEME, OCEAN_THEME)}


def available_theme_names() -> tuple[str, ...]:
    """Names accepted by ``--theme``; ``plain`` is reached through ``--no-color``."""
    return tuple(sorted(THEMES))


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Pick the palette for ``name``.

    Unknown names fall back to the default palette with a warning, so a stale
    persisted theme never stops the tree from rendering.
    """
    if no_color:
        return PLAIN_THEME
    key = (name or DEFAULT_THEME.name).strip().lower()
    theme = THEMES.get(key)
    if theme is None:
        logger.warning("unknown theme %r, using %r", name, DEFAULT_THEME.name)
        return DEFAULT_THEME
    return theme
