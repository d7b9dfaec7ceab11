"""Runtime composition layer for diffview.

Builds the controller against git, sizes it to the terminal, and runs the loop.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys

from ..errors import DiffviewError
from ..render import compute_layout
from .config import AppConfig
from .controller import NavigationController, git_controller_deps
from .loop import run_main_loop
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def build_controller(config: AppConfig) -> NavigationController:
    """Return an initialized controller sized to the current terminal."""
    controller = NavigationController(config, git_controller_deps(config))
    term = shutil.get_terminal_size((80, 24))
    layout = compute_layout(term.columns, term.lines, controller.tree_pane_percent)
    controller.update_viewport(layout.right_width, layout.diff_rows)
    controller.initialize()
    return controller


def run_app(config: AppConfig) -> None:
    """Run the interactive session for ``config``.

    Requires an interactive terminal on stdin; raises ``SystemExit`` otherwise.
    """
    stdin_fd = sys.stdin.fileno()
    if not os.isatty(stdin_fd):
        raise SystemExit("diffview needs an interactive terminal")

    try:
        controller = build_controller(config)
    except DiffviewError as exc:
        raise SystemExit(f"diffview: {exc}") from exc

    logger.debug("starting session in %s (tool=%s)", config.repo_root, config.diff_tool)
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    run_main_loop(controller, terminal, stdin_fd)
    logger.debug("session ended")
