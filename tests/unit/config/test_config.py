"""Tests for search-config validation and persisted settings."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from umm import config
from umm.config import SearchConfig, load_settings
from umm.errors import ConfigurationError


class SearchConfigTests(unittest.TestCase):
    def test_missing_root_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(ConfigurationError):
                SearchConfig(root=Path(tmp) / "nope").validate()

    def test_file_root_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "f.txt"
            target.write_text("x", encoding="utf-8")
            with self.assertRaises(ConfigurationError):
                SearchConfig(root=target).validate()

    def test_pattern_required_only_when_non_interactive(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            SearchConfig(root=Path(tmp)).validate()
            with self.assertRaises(ConfigurationError):
                SearchConfig(root=Path(tmp), interactive=False).validate()
            SearchConfig(root=Path(tmp), pattern="x", interactive=False).validate()

    def test_negative_depth_is_rejected(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(ConfigurationError):
                SearchConfig(root=Path(tmp), max_depth=-1).validate()


class SettingsTests(unittest.TestCase):
    def _with_config(self, data: object):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        config_path = Path(tmp.name) / "config.json"
        config_path.write_text(json.dumps(data), encoding="utf-8")
        patcher = mock.patch("umm.config.CONFIG_PATH", config_path)
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_defaults_without_config_or_env(self) -> None:
        with mock.patch("umm.config.CONFIG_PATH", Path("/nonexistent/umm/config.json")):
            settings = load_settings(environ={})
        self.assertEqual(settings.editor, "nvim")
        self.assertEqual(settings.preview_window, "top:60%")
        self.assertEqual(settings.debounce_ms, 50)
        self.assertAlmostEqual(settings.debounce_seconds, 0.05)

    def test_env_editor_wins_over_config(self) -> None:
        self._with_config({"editor": "micro"})
        self.assertEqual(load_settings(environ={"EDITOR": "code"}).editor, "code")
        self.assertEqual(load_settings(environ={"EDITOR": "  "}).editor, "micro")

    def test_config_values_are_applied(self) -> None:
        self._with_config({"preview_window": "right:50%", "debounce_ms": 120, "style": "native"})
        settings = load_settings(environ={})
        self.assertEqual(settings.preview_window, "right:50%")
        self.assertEqual(settings.debounce_ms, 120)
        self.assertEqual(settings.style, "native")

    def test_invalid_values_fall_back(self) -> None:
        self._with_config({"debounce_ms": True, "preview_window": 3})
        settings = load_settings(environ={})
        self.assertEqual(settings.debounce_ms, 50)
        self.assertEqual(settings.preview_window, "top:60%")

    def test_malformed_config_is_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("{not json", encoding="utf-8")
            with mock.patch("umm.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})


if __name__ == "__main__":
    unittest.main()
