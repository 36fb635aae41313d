"""Tests for config loading and value sanitization.

Malformed config data falls back to defaults key by key.
"""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from searchpane import config


def _write(path: Path, data: object) -> None:
    path.write_text(json.dumps(data), encoding="utf-8")


class ConfigBehaviorTests(unittest.TestCase):
    def test_missing_config_yields_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("searchpane.config.CONFIG_PATH", Path(tmp) / "config.json"):
                self.assertEqual(config.load_config(), {})
                settings = config.load_settings()

        self.assertEqual(settings, config.SearchPaneConfig())
        self.assertEqual(settings.search_delay_seconds, 2.0)
        self.assertEqual(settings.style, "monokai")
        self.assertFalse(settings.show_hidden)

    def test_saved_values_are_loaded(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            _write(config_path, {"search_delay_seconds": 0.5, "show_hidden": True})
            with mock.patch("searchpane.config.CONFIG_PATH", config_path):
                settings = config.load_settings()
                raw = config.load_config()

        self.assertEqual(raw, {"search_delay_seconds": 0.5, "show_hidden": True})
        self.assertEqual(settings.search_delay_seconds, 0.5)
        self.assertTrue(settings.show_hidden)

    def test_invalid_values_fall_back_per_key(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            _write(
                config_path,
                {
                    "search_delay_seconds": True,
                    "theme": "OCEAN",
                    "style": "   ",
                    "show_hidden": "yes",
                },
            )
            with mock.patch("searchpane.config.CONFIG_PATH", config_path):
                settings = config.load_settings()

        self.assertEqual(settings.search_delay_seconds, 2.0)
        self.assertEqual(settings.theme, "ocean")
        self.assertEqual(settings.style, "monokai")
        self.assertFalse(settings.show_hidden)

    def test_delay_bounds(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("searchpane.config.CONFIG_PATH", config_path):
                for bad in (0, -1, 61, "2"):
                    _write(config_path, {"search_delay_seconds": bad})
                    self.assertEqual(config.load_settings().search_delay_seconds, 2.0)
                _write(config_path, {"search_delay_seconds": 60})
                self.assertEqual(config.load_settings().search_delay_seconds, 60.0)

    def test_malformed_json_is_ignored_with_warning(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("{not json", encoding="utf-8")
            with mock.patch("searchpane.config.CONFIG_PATH", config_path):
                with self.assertLogs("searchpane.config", level="WARNING"):
                    self.assertEqual(config.load_config(), {})

    def test_non_object_json_is_ignored(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("[1, 2]", encoding="utf-8")
            with mock.patch("searchpane.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})


if __name__ == "__main__":
    unittest.main()
