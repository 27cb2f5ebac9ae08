"""Command-line front door for lazytree.

Loads a JSON tree payload, applies requested collapses and checks, and prints
the materialized window through the terminal scene backend.
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from dataclasses import replace
from pathlib import Path

from .config import load_theme_name, load_tree_settings
from .logging_config import setup_logging
from .scene import TextSceneBackend
from .tree_model import TreeLoadError, load_tree_payload
from .ui_theme import available_theme_names, resolve_theme
from .view import TreeView

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _nonnegative_float(value: str) -> float:
    """argparse type for scroll offsets."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be >= 0")
    return parsed


def _default_render_width() -> int:
    term = shutil.get_terminal_size((80, 24))
    return max(1, term.columns)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazytree",
        description="Render the visible window of a large JSON tree.",
    )
    parser.add_argument("path", help="Path to a JSON tree payload.")
    parser.add_argument("--scroll", type=_nonnegative_float, default=0.0, help="Page scroll offset in pixels.")
    parser.add_argument("--rows", type=_positive_int, default=None, help="Viewport height in rows (default: terminal height).")
    parser.add_argument("--checkboxes", action="store_true", help="Enable tri-state checkboxes.")
    parser.add_argument("--icons", action="store_true", help="Show icon markers for nodes with icons.")
    parser.add_argument("--collapse", action="append", default=[], metavar="ID", help="Collapse node ID (repeatable).")
    parser.add_argument("--check", action="append", default=[], metavar="ID", help="Check node ID (repeatable, implies --checkboxes).")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--max-cols", type=_positive_int, default=None, help="Output width (default: terminal width).")
    parser.add_argument("--verbose", action="store_true", help="Log pipeline activity to stderr.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments, build the view, and print its current window."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    path = Path(args.path)
    if not path.exists():
        raise SystemExit(f"Path not found: {path}")

    settings = load_tree_settings()
    show_checkboxes = settings.show_checkboxes or args.checkboxes or bool(args.check)
    settings = replace(
        settings,
        show_checkboxes=show_checkboxes,
        show_icons=settings.show_icons or args.icons,
    )
    width = args.max_cols if args.max_cols is not None else _default_render_width()
    rows = args.rows if args.rows is not None else max(1, shutil.get_terminal_size((80, 24)).lines - 1)
    theme = resolve_theme(args.theme or load_theme_name(), no_color=args.no_color)

    backend = TextSceneBackend(
        row_height=settings.node_height,
        indent_width=settings.indent_width,
        width=width,
        theme=theme,
    )
    view = TreeView(settings, backend)
    try:
        model = load_tree_payload(path)
    except (TreeLoadError, OSError) as exc:
        logger.error("failed to load %s: %s", path, exc)
        raise SystemExit(f"Cannot load tree: {exc}") from exc

    view.load_model(model)

    try:
        for identifier in args.collapse:
            view.set_open(identifier, False)
        for identifier in args.check:
            view.set_checked(identifier, True)
    except KeyError as exc:
        raise SystemExit(str(exc.args[0])) from exc

    view.resize(rows * settings.node_height)
    view.set_scroll(args.scroll)

    first_row = int(args.scroll // settings.node_height)
    lines = backend.render_lines(first_row, rows)
    while lines and not lines[-1]:
        lines.pop()
    out = [line + "\n" for line in lines]
    if settings.show_checkboxes:
        out.append(f"checked: {','.join(view.checked_ids())}\n")
    sys.stdout.write("".join(out))


if __name__ == "__main__":
    main()
