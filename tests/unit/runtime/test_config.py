"""Tests for config persistence and runtime-config merging.

Malformed or out-of-range stored values must fall back to defaults, and CLI
overrides always win over the config file.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from diffview.runtime import config


class ConfigFileTests(unittest.TestCase):
    def test_missing_file_loads_as_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("diffview.runtime.config.CONFIG_PATH", Path(tmp) / "absent.json"):
                self.assertEqual(config.load_config(), {})

    def test_malformed_json_loads_as_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("{not json", encoding="utf-8")
            with mock.patch("diffview.runtime.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})

    def test_non_object_json_loads_as_empty(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("[1, 2]\n", encoding="utf-8")
            with mock.patch("diffview.runtime.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})

    def test_tree_pane_percent_is_saved_alongside_other_keys(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            with mock.patch("diffview.runtime.config.CONFIG_PATH", config_path):
                config.save_config({"diff_tool": "delta"})
                config.save_tree_pane_percent(32.04)
                saved = config.load_config()

        self.assertEqual(saved, {"diff_tool": "delta", "tree_pane_percent": 32.0})


class BuildAppConfigTests(unittest.TestCase):
    def test_defaults_from_empty_config(self) -> None:
        app_config = config.build_app_config(Path("/repo"), data={})
        self.assertEqual(app_config.diff_tool, "raw")
        self.assertEqual(app_config.style, config.DEFAULT_STYLE)
        self.assertEqual(app_config.tree_pane_percent, config.DEFAULT_TREE_PANE_PERCENT)
        self.assertFalse(app_config.read_only)

    def test_file_values_are_used(self) -> None:
        data = {"diff_tool": " Delta ", "style": "native", "tree_pane_percent": 40}
        app_config = config.build_app_config(Path("/repo"), data=data)
        self.assertEqual(app_config.diff_tool, "delta")
        self.assertEqual(app_config.style, "native")
        self.assertEqual(app_config.tree_pane_percent, 40.0)

    def test_cli_overrides_win(self) -> None:
        data = {"diff_tool": "delta", "style": "native"}
        app_config = config.build_app_config(
            Path("/repo"),
            tool_override="difftastic",
            style_override="friendly",
            revision="abc123",
            no_color=True,
            data=data,
        )
        self.assertEqual(app_config.diff_tool, "difftastic")
        self.assertEqual(app_config.style, "friendly")
        self.assertTrue(app_config.read_only)
        self.assertTrue(app_config.no_color)

    def test_invalid_values_fall_back(self) -> None:
        for percent in (5, 95, True, "30"):
            with self.subTest(percent=percent):
                data = {"diff_tool": "vimdiff", "style": 7, "tree_pane_percent": percent}
                app_config = config.build_app_config(Path("/repo"), data=data)
                self.assertEqual(app_config.diff_tool, "raw")
                self.assertEqual(app_config.style, config.DEFAULT_STYLE)
                self.assertEqual(app_config.tree_pane_percent, config.DEFAULT_TREE_PANE_PERCENT)

    def test_reads_config_file_when_no_data_given(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text('{"tree_pane_percent": 55.5}\n', encoding="utf-8")
            with mock.patch("diffview.runtime.config.CONFIG_PATH", config_path):
                app_config = config.build_app_config(Path("/repo"))
        self.assertEqual(app_config.tree_pane_percent, 55.5)


if __name__ == "__main__":
    unittest.main()
