"""Per-focus key tables binding key tokens to controller actions."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .controller import NavigationController


@dataclass(frozen=True)
class KeyComboBinding:
    """One or more key tokens mapped to a single action."""

    combos: tuple[str, ...]
    handler: Callable[[], None]


class KeyComboRegistry:
    """Exact-match key dispatch table."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], None]] = {}

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Register one binding, overwriting existing handlers for the same combos."""
        for combo in binding.combos:
            self._handlers[combo] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        for binding in bindings:
            self.register_binding(binding)
        return self

    def dispatch(self, key: str) -> bool:
        """Invoke the handler bound to ``key``; returns whether one existed."""
        handler = self._handlers.get(key)
        if handler is None:
            return False
        handler()
        return True


def _tree_registry(controller: NavigationController) -> KeyComboRegistry:
    return KeyComboRegistry().register_bindings(
        KeyComboBinding(("j", "DOWN"), controller.tree_move_down),
        KeyComboBinding(("k", "UP"), controller.tree_move_up),
        KeyComboBinding(("l", "RIGHT"), controller.tree_open),
        KeyComboBinding(("h", "LEFT"), controller.tree_collapse),
        KeyComboBinding(("ENTER",), controller.tree_commit),
        KeyComboBinding(("c",), controller.tree_copy_path),
        KeyComboBinding(("?",), controller.show_help),
        KeyComboBinding(("SHIFT_LEFT", "<"), controller.narrow_tree_pane),
        KeyComboBinding(("SHIFT_RIGHT", ">"), controller.widen_tree_pane),
        KeyComboBinding(("q", "CTRL_C"), controller.quit),
    )


def _diff_registry(controller: NavigationController) -> KeyComboRegistry:
    return KeyComboRegistry().register_bindings(
        KeyComboBinding(("j", "DOWN"), controller.scroll_down),
        KeyComboBinding(("k", "UP"), controller.scroll_up),
        KeyComboBinding(("CTRL_D",), controller.scroll_half_page_down),
        KeyComboBinding(("CTRL_U",), controller.scroll_half_page_up),
        KeyComboBinding(("g",), controller.scroll_to_top),
        KeyComboBinding(("G",), controller.scroll_to_bottom),
        KeyComboBinding(("n",), controller.jump_next_hunk),
        KeyComboBinding(("p",), controller.jump_prev_hunk),
        KeyComboBinding(("h", "LEFT", "ESC"), controller.return_to_origin),
        KeyComboBinding(("v",), controller.enter_inline_select),
        KeyComboBinding(("ENTER", "a"), controller.apply_current_hunk),
        KeyComboBinding(("?",), controller.show_diff_help),
        KeyComboBinding(("q", "CTRL_C"), controller.quit),
    )


def _inline_registry(controller: NavigationController) -> KeyComboRegistry:
    return KeyComboRegistry().register_bindings(
        KeyComboBinding(("j", "DOWN"), controller.cursor_down),
        KeyComboBinding(("k", "UP"), controller.cursor_up),
        KeyComboBinding(("CTRL_D",), controller.cursor_half_page_down),
        KeyComboBinding(("CTRL_U",), controller.cursor_half_page_up),
        KeyComboBinding(("n",), controller.jump_next_hunk),
        KeyComboBinding(("p",), controller.jump_prev_hunk),
        KeyComboBinding((" ",), controller.toggle_line_selection),
        KeyComboBinding(("ENTER",), controller.apply_selection),
        KeyComboBinding(("ESC",), controller.clear_selection),
        KeyComboBinding(("v", "h", "LEFT"), controller.exit_inline_select),
        KeyComboBinding(("q", "CTRL_C"), controller.quit),
    )


def build_key_registries(controller: NavigationController) -> dict[str, KeyComboRegistry]:
    """Return the key table for every focus state of ``controller``."""
    tree = _tree_registry(controller)
    return {
        "unstaged": tree,
        "staged": tree,
        "diff": _diff_registry(controller),
        "inline": _inline_registry(controller),
    }
