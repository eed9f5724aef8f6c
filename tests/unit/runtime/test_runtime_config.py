"""Persistent config loading and theme persistence tests."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from dirpicker.export import DEFAULT_CONTENT_FILENAME, DEFAULT_SELECTION_FILENAME
from dirpicker.file_tree_model import DEFAULT_IGNORE_DIRS
from dirpicker.runtime import config


class RuntimeConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.config_path = Path(self._tmp.name) / "nested" / "config.json"
        patcher = mock.patch.object(config, "CONFIG_PATH", self.config_path)
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(self._tmp.cleanup)

    def _write(self, payload: object) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text(json.dumps(payload), encoding="utf-8")

    def test_missing_file_gives_defaults(self) -> None:
        loaded = config.load_explorer_config()
        self.assertEqual(loaded.ignore_dirs, DEFAULT_IGNORE_DIRS)
        self.assertEqual(loaded.selection_filename, DEFAULT_SELECTION_FILENAME)
        self.assertEqual(loaded.content_filename, DEFAULT_CONTENT_FILENAME)
        self.assertIsNone(loaded.theme)

    def test_malformed_json_is_logged_and_ignored(self) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        self.config_path.write_text("{not json", encoding="utf-8")

        with self.assertLogs("dirpicker.runtime.config", level="WARNING"):
            self.assertEqual(config.load_config(), {})

    def test_non_object_json_is_ignored(self) -> None:
        self._write(["a", "b"])
        self.assertEqual(config.load_config(), {})

    def test_values_are_read_and_cleaned(self) -> None:
        self._write(
            {
                "ignore_dirs": [" vendor ", "vendor", "", 3, "target"],
                "selection_filename": "  picks.txt ",
                "content_filename": "",
                "theme": "ocean",
                "style": "friendly",
            }
        )

        loaded = config.load_explorer_config()

        self.assertEqual(loaded.ignore_dirs, ("vendor", "target"))
        self.assertEqual(loaded.selection_filename, "picks.txt")
        self.assertEqual(loaded.content_filename, DEFAULT_CONTENT_FILENAME)
        self.assertEqual(loaded.theme, "ocean")
        self.assertEqual(loaded.style, "friendly")

    def test_empty_ignore_list_disables_deferral(self) -> None:
        self._write({"ignore_dirs": []})
        self.assertEqual(config.load_explorer_config().ignore_dirs, ())

    def test_non_list_ignore_dirs_falls_back(self) -> None:
        self._write({"ignore_dirs": "node_modules"})
        self.assertEqual(config.load_explorer_config().ignore_dirs, DEFAULT_IGNORE_DIRS)

    def test_save_theme_name_keeps_other_keys(self) -> None:
        self._write({"ignore_dirs": ["vendor"]})

        config.save_theme_name(" ocean ")

        saved = json.loads(self.config_path.read_text(encoding="utf-8"))
        self.assertEqual(saved, {"ignore_dirs": ["vendor"], "theme": "ocean"})

    def test_save_theme_name_creates_parent_directory(self) -> None:
        config.save_theme_name("default")
        self.assertTrue(self.config_path.exists())

    def test_blank_theme_name_is_not_saved(self) -> None:
        config.save_theme_name("   ")
        self.assertFalse(self.config_path.exists())


if __name__ == "__main__":
    unittest.main()
