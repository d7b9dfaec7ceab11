"""Persistent JSON config and the immutable runtime configuration value.

The config file lives under the platform user-config directory. Reads are
defensive: a missing or malformed file behaves like an empty one.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..git.diff import normalize_tool
from ..highlight import DEFAULT_STYLE

logger = logging.getLogger(__name__)

APP_NAME = "diffview"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_TREE_PANE_PERCENT = 25.0
DEFAULT_DIFF_PANE_HEIGHT = 20


def load_config() -> dict[str, object]:
    """Load the persisted JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def save_config(data: dict[str, object]) -> None:
    """Persist config data as pretty-printed JSON; write errors are logged only."""
    try:
        CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
        CONFIG_PATH.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        logger.warning("could not write config %s: %s", CONFIG_PATH, exc)


def _load_string(data: dict[str, object], key: str) -> str | None:
    value = data.get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


def _load_percent(data: dict[str, object], key: str) -> float | None:
    """Read a percentage constrained to ``[10, 90]``."""
    value = data.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if value < 10 or value > 90:
        return None
    return float(value)


@dataclass(frozen=True)
class AppConfig:
    """Runtime settings fixed for the life of one session."""

    repo_root: Path
    diff_tool: str = "raw"
    style: str = DEFAULT_STYLE
    tree_pane_percent: float = DEFAULT_TREE_PANE_PERCENT
    revision: str | None = None
    no_color: bool = False

    @property
    def read_only(self) -> bool:
        return self.revision is not None


def build_app_config(
    repo_root: Path,
    tool_override: str | None = None,
    style_override: str | None = None,
    revision: str | None = None,
    no_color: bool = False,
    data: dict[str, object] | None = None,
) -> AppConfig:
    """Merge file settings with CLI overrides into one ``AppConfig``."""
    if data is None:
        data = load_config()
    tool = tool_override if tool_override is not None else _load_string(data, "diff_tool")
    style = style_override if style_override is not None else _load_string(data, "style")
    percent = _load_percent(data, "tree_pane_percent")
    return AppConfig(
        repo_root=repo_root,
        diff_tool=normalize_tool(tool),
        style=style or DEFAULT_STYLE,
        tree_pane_percent=percent if percent is not None else DEFAULT_TREE_PANE_PERCENT,
        revision=revision,
        no_color=no_color,
    )


def save_tree_pane_percent(percent: float) -> None:
    """Persist the tree pane width, keeping any other stored keys."""
    data = load_config()
    data["tree_pane_percent"] = round(float(percent), 1)
    save_config(data)
