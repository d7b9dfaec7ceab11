"""Tests for terminal mode switching and clipboard command selection.

Verifies raw-mode lifecycle safety and the escape payloads written on entry
and exit.
"""

from __future__ import annotations

import subprocess
import termios
import unittest
from unittest import mock

from diffview.runtime.app_helpers import copy_text_to_clipboard
from diffview.runtime.terminal import TerminalController


class TerminalBehaviorTests(unittest.TestCase):
    def test_enable_and_disable_tui_mode_use_alternate_screen_sequences(self) -> None:
        saved_state = [1, 2, 3]

        with mock.patch("diffview.runtime.terminal.termios.tcgetattr", return_value=saved_state), mock.patch(
            "diffview.runtime.terminal.tty.setraw"
        ) as setraw_mock, mock.patch("diffview.runtime.terminal.os.write") as write_mock, mock.patch(
            "diffview.runtime.terminal.termios.tcsetattr"
        ) as setattr_mock:
            controller = TerminalController(stdin_fd=0, stdout_fd=1)
            controller.enable_tui_mode()
            controller.disable_tui_mode()

        setraw_mock.assert_called_once_with(0, termios.TCSAFLUSH)
        self.assertEqual(write_mock.call_args_list[0].args, (1, b"\x1b[?1049h\x1b[?25l"))
        self.assertEqual(write_mock.call_args_list[1].args, (1, b"\x1b[0m\x1b[?25h\x1b[?1049l"))
        setattr_mock.assert_called_once_with(0, termios.TCSAFLUSH, saved_state)

    def test_raw_mode_restores_terminal_after_exception(self) -> None:
        with mock.patch("diffview.runtime.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(stdin_fd=0, stdout_fd=1)

        with mock.patch.object(controller, "enable_tui_mode") as enable_mock, mock.patch.object(
            controller, "disable_tui_mode"
        ) as disable_mock:
            with self.assertRaises(RuntimeError):
                with controller.raw_mode():
                    raise RuntimeError("boom")

        enable_mock.assert_called_once()
        disable_mock.assert_called_once()

    def test_write_frame_retries_partial_writes(self) -> None:
        with mock.patch("diffview.runtime.terminal.termios.tcgetattr", return_value=[0]):
            controller = TerminalController(stdin_fd=0, stdout_fd=1)

        with mock.patch("diffview.runtime.terminal.os.write", side_effect=[3, 2]) as write_mock:
            controller.write_frame("hello")

        self.assertEqual(
            write_mock.call_args_list,
            [mock.call(1, b"hello"), mock.call(1, b"lo")],
        )


class ClipboardTests(unittest.TestCase):
    def test_first_available_command_receives_text(self) -> None:
        completed = subprocess.CompletedProcess(["xclip"], 0, "", "")
        with mock.patch("diffview.runtime.app_helpers.sys.platform", "linux"), mock.patch(
            "diffview.runtime.app_helpers.os.name", "posix"
        ), mock.patch(
            "diffview.runtime.app_helpers.shutil.which",
            side_effect=lambda name: "/usr/bin/xclip" if name == "xclip" else None,
        ), mock.patch("diffview.runtime.app_helpers.subprocess.run", return_value=completed) as run_mock:
            self.assertTrue(copy_text_to_clipboard("src/app.py"))

        run_mock.assert_called_once()
        self.assertEqual(run_mock.call_args.args[0], ["xclip", "-selection", "clipboard"])
        self.assertEqual(run_mock.call_args.kwargs["input"], "src/app.py")

    def test_no_clipboard_tool_reports_failure(self) -> None:
        with mock.patch("diffview.runtime.app_helpers.shutil.which", return_value=None):
            self.assertFalse(copy_text_to_clipboard("src/app.py"))

    def test_empty_text_is_not_copied(self) -> None:
        with mock.patch("diffview.runtime.app_helpers.subprocess.run") as run_mock:
            self.assertFalse(copy_text_to_clipboard(""))
        run_mock.assert_not_called()


if __name__ == "__main__":
    unittest.main()
