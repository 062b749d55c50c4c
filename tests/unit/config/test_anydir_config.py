"""Tests for config persistence and input sanitization."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from anydir import config


class ConfigBehaviorTests(unittest.TestCase):
    def test_missing_or_malformed_config_falls_back_to_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("anydir.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})
                self.assertEqual(config.load_style(), "monokai")

                config_path.write_text("[1, 2]\n", encoding="utf-8")
                self.assertEqual(config.load_config(), {})

                config_path.write_text("{not json", encoding="utf-8")
                self.assertEqual(config.load_tokens(), {})

    def test_style_round_trip_ignores_blank_names(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            with mock.patch("anydir.config.CONFIG_PATH", config_path):
                config.save_style("  native ")
                config.save_style("   ")
                self.assertEqual(config.load_style(), "native")

    def test_tokens_round_trip_and_drop_invalid_entries(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            with mock.patch("anydir.config.CONFIG_PATH", config_path):
                config.save_config({"tokens": {"GOOD": "/srv", "EMPTY": "", "NUM": 3}, "style": 7})
                config.save_token("EXTRA", "/opt")
                config.save_token(" ", "/ignored")

                self.assertEqual(config.load_tokens(), {"GOOD": "/srv", "EXTRA": "/opt"})
                self.assertEqual(config.load_style(), "monokai")

    def test_save_config_swallows_write_errors(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "blocker"
            blocker.write_text("", encoding="utf-8")
            with mock.patch("anydir.config.CONFIG_PATH", blocker / "config.json"):
                config.save_style("native")
                self.assertEqual(config.load_style(), "monokai")

    def test_save_config_skips_unserializable_data_without_touching_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text('{"style": "native"}\n', encoding="utf-8")
            with mock.patch("anydir.config.CONFIG_PATH", config_path):
                config.save_config({"style": object()})
                self.assertEqual(config.load_style(), "native")


if __name__ == "__main__":
    unittest.main()
