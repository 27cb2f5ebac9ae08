"""Tree settings and persistent JSON config helpers.

Stores default view settings and the UI theme name.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path

from platformdirs import user_config_dir

APP_NAME = "lazytree"
CONFIG_FILENAME = "config.json"
DEFAULT_CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
CONFIG_PATH = DEFAULT_CONFIG_PATH


@dataclass(frozen=True)
class TreeSettings:
    """Geometry and feature switches for one tree view."""

    show_checkboxes: bool = False
    show_icons: bool = False
    node_height: float = 20
    indent_width: float = 16
    overscan: float = 1.5
    drag_throttle_seconds: float = 0.04

    def __post_init__(self) -> None:
        if self.node_height <= 0:
            raise ValueError("node_height must be > 0")
        if self.indent_width <= 0:
            raise ValueError("indent_width must be > 0")
        if self.overscan < 1:
            raise ValueError("overscan must be >= 1")
        if self.drag_throttle_seconds < 0:
            raise ValueError("drag_throttle_seconds must be >= 0")

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> TreeSettings:
        """Build settings from loosely typed JSON values.

        Unknown keys are ignored. Values of the wrong type or outside their
        valid range fall back to the defaults.
        """
        defaults = cls()
        values: dict[str, object] = {}
        for item in fields(cls):
            raw = data.get(item.name)
            default = getattr(defaults, item.name)
            if isinstance(default, bool):
                if isinstance(raw, bool):
                    values[item.name] = raw
                continue
            if isinstance(raw, bool) or not isinstance(raw, (int, float)):
                continue
            try:
                replace(defaults, **{item.name: raw})
            except ValueError:
                continue
            values[item.name] = raw
        return cls(**values)

    def to_mapping(self) -> dict[str, object]:
        return {item.name: getattr(self, item.name) for item in fields(self)}


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except Exception:
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON.

    Any filesystem/serialization error is ignored to keep runtime behavior
    non-fatal when config cannot be written.
    """
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except Exception:
        pass


def load_tree_settings() -> TreeSettings:
    """Load persisted view settings from the ``"tree"`` config object."""
    value = load_config().get("tree")
    if not isinstance(value, dict):
        return TreeSettings()
    return TreeSettings.from_mapping(value)


def save_tree_settings(settings: TreeSettings) -> None:
    config = load_config()
    config["tree"] = settings.to_mapping()
    save_config(config)


def load_theme_name() -> str | None:
    """Load persisted UI theme name, returning ``None`` when unset/invalid."""
    value = load_config().get("theme")
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def save_theme_name(theme_name: str) -> None:
    """Persist selected UI theme name."""
    stripped = str(theme_name).strip()
    if not stripped:
        return
    config = load_config()
    config["theme"] = stripped
    save_config(config)
