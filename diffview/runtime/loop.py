"""Main interactive event loop for the terminal UI.

Each iteration measures the terminal, renders when needed, and dispatches at
most one key to the controller. Feature logic lives in the controller.
"""

from __future__ import annotations

import shutil
from collections.abc import Callable
from dataclasses import dataclass

from ..input import read_key
from ..render import compute_layout, render_screen
from .controller import NavigationController
from .terminal import TerminalController

KEY_POLL_TIMEOUT_MS = 120


@dataclass(frozen=True)
class RuntimeLoopDeps:
    """Injected terminal operations used by ``run_main_loop``."""

    terminal_size: Callable[[], tuple[int, int]]
    read_key: Callable[[int], str]
    write_frame: Callable[[str], None]


def _terminal_size() -> tuple[int, int]:
    term = shutil.get_terminal_size((80, 24))
    return term.columns, term.lines


def default_loop_deps(terminal: TerminalController) -> RuntimeLoopDeps:
    return RuntimeLoopDeps(
        terminal_size=_terminal_size,
        read_key=lambda fd: read_key(fd, timeout_ms=KEY_POLL_TIMEOUT_MS),
        write_frame=terminal.write_frame,
    )


def run_loop_iteration(
    controller: NavigationController,
    stdin_fd: int,
    deps: RuntimeLoopDeps,
    last_size: tuple[int, int] | None,
) -> tuple[int, int]:
    """Measure, render if needed, then handle at most one key.

    Returns the terminal size observed this iteration.
    """
    columns, rows = deps.terminal_size()
    size = (columns, rows)
    layout = compute_layout(columns, rows, controller.tree_pane_percent)
    controller.update_viewport(layout.right_width, layout.diff_rows)
    if size != last_size:
        controller.dirty = True

    if controller.dirty:
        deps.write_frame(render_screen(controller, columns, rows))
        controller.dirty = False

    try:
        key = deps.read_key(stdin_fd)
    except KeyboardInterrupt:
        key = "CTRL_C"
    if key:
        controller.handle_key(key)
    return size


def run_main_loop(
    controller: NavigationController,
    terminal: TerminalController,
    stdin_fd: int,
    deps: RuntimeLoopDeps | None = None,
) -> None:
    """Run the interactive loop inside raw mode until the controller quits."""
    if deps is None:
        deps = default_loop_deps(terminal)
    last_size: tuple[int, int] | None = None
    with terminal.raw_mode():
        while not controller.should_quit:
            last_size = run_loop_iteration(controller, stdin_fd, deps, last_size)
