"""CLI argument, repository-resolution, and logging setup tests.

Verifies how ``diffview.cli.main`` turns arguments into an ``AppConfig``
without starting the interactive runtime.
"""

from __future__ import annotations

import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from diffview import cli
from diffview.errors import SourceUnavailable, SubprocessFailure


class CliConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        patcher = mock.patch("diffview.runtime.config.load_config", return_value={})
        patcher.start()
        self.addCleanup(patcher.stop)
        logging_patcher = mock.patch("diffview.cli.configure_logging")
        logging_patcher.start()
        self.addCleanup(logging_patcher.stop)

    def test_main_defaults_to_current_working_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            previous_cwd = Path.cwd()
            try:
                os.chdir(root)
                with mock.patch("diffview.cli.resolve_repo_root", return_value=root) as resolve, mock.patch(
                    "diffview.cli.run_app"
                ) as run_app:
                    cli.main([])
            finally:
                os.chdir(previous_cwd)

        self.assertEqual(resolve.call_args.args[0], root)
        run_app.assert_called_once()
        config = run_app.call_args.args[0]
        self.assertEqual(config.repo_root, root)
        self.assertEqual(config.diff_tool, "raw")
        self.assertFalse(config.read_only)
        self.assertFalse(config.no_color)

    def test_options_flow_into_config(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            with mock.patch("diffview.cli.resolve_repo_root", return_value=root), mock.patch(
                "diffview.cli.resolve_commit", return_value="f" * 40
            ) as resolve_commit, mock.patch("diffview.cli.run_app") as run_app:
                cli.main([str(root), "--tool", "delta", "--commit", "HEAD~1", "--style", "native", "--no-color"])

        resolve_commit.assert_called_once_with("HEAD~1", root)
        config = run_app.call_args.args[0]
        self.assertEqual(config.diff_tool, "delta")
        self.assertEqual(config.revision, "f" * 40)
        self.assertTrue(config.read_only)
        self.assertEqual(config.style, "native")
        self.assertTrue(config.no_color)

    def test_unknown_tool_is_rejected_by_parser(self) -> None:
        with mock.patch("sys.stderr"), self.assertRaises(SystemExit):
            cli.main([".", "--tool", "vimdiff"])

    def test_missing_path_exits_with_message(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "nope"
            with self.assertRaises(SystemExit) as ctx:
                cli.main([str(missing)])
        self.assertEqual(str(ctx.exception), f"Path not found: {missing}")

    def test_not_a_repository_exits_with_message(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            error = SourceUnavailable(f"Not in a git repository: {tmp}")
            with mock.patch("diffview.cli.resolve_repo_root", side_effect=error), mock.patch(
                "diffview.cli.run_app"
            ) as run_app, self.assertRaises(SystemExit) as ctx:
                cli.main([tmp])
        self.assertIn("Not in a git repository", str(ctx.exception))
        run_app.assert_not_called()

    def test_unknown_commit_exits_with_message(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            failure = SubprocessFailure(["git", "rev-parse"], 128, "fatal: bad revision")
            with mock.patch("diffview.cli.resolve_repo_root", return_value=root), mock.patch(
                "diffview.cli.resolve_commit", side_effect=failure
            ), self.assertRaises(SystemExit) as ctx:
                cli.main([str(root), "--commit", "nope"])
        self.assertEqual(str(ctx.exception), "Unknown commit: nope")


class ConfigureLoggingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.logger = logging.getLogger("diffview")
        self.saved_handlers = list(self.logger.handlers)
        self.saved_level = self.logger.level
        self.saved_propagate = self.logger.propagate

    def tearDown(self) -> None:
        for handler in self.logger.handlers:
            if handler not in self.saved_handlers:
                handler.close()
        self.logger.handlers = self.saved_handlers
        self.logger.setLevel(self.saved_level)
        self.logger.propagate = self.saved_propagate

    def test_without_log_file_nothing_reaches_stderr(self) -> None:
        cli.configure_logging(None)
        self.assertFalse(self.logger.propagate)
        self.assertTrue(any(isinstance(handler, logging.NullHandler) for handler in self.logger.handlers))

    def test_log_file_receives_debug_records(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "diffview.log"
            cli.configure_logging(log_path)
            logging.getLogger("diffview.git.runner").debug("running git status")
            for handler in self.logger.handlers:
                handler.flush()
            text = log_path.read_text(encoding="utf-8")
            for handler in list(self.logger.handlers):
                if handler not in self.saved_handlers:
                    handler.close()
                    self.logger.removeHandler(handler)

        self.assertIn("DEBUG diffview.git.runner: running git status", text)


if __name__ == "__main__":
    unittest.main()
