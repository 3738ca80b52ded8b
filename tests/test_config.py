"""Config loading falls back to defaults on anything unexpected."""

from __future__ import annotations

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazyls import config
from lazyls.columns import SizeFormat
from lazyls.fields import TimeType
from lazyls.filtering import SortField


class ConfigTests(unittest.TestCase):
    def _with_config(self, text: str | None):
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        path = Path(tmp.name) / "config.json"
        if text is not None:
            path.write_text(text, encoding="utf-8")
        patcher = mock.patch.dict(os.environ, {config.CONFIG_ENV_VAR: str(path)})
        patcher.start()
        self.addCleanup(patcher.stop)
        return path

    def test_env_var_overrides_location(self) -> None:
        path = self._with_config(None)
        self.assertEqual(config.config_path(), path)

    def test_missing_file_is_empty(self) -> None:
        self._with_config(None)
        self.assertEqual(config.load_config(), {})

    def test_malformed_file_is_empty(self) -> None:
        self._with_config("{not json")
        self.assertEqual(config.load_config(), {})
        self._with_config("[1, 2]")
        self.assertEqual(config.load_config(), {})

    def test_known_keys(self) -> None:
        self._with_config(
            json.dumps(
                {
                    "theme": "ocean",
                    "header": True,
                    "size_format": "binary",
                    "time": "accessed",
                    "sort": "size",
                    "show_hidden": True,
                    "group_directories_first": True,
                }
            )
        )
        settings = config.load_config()
        self.assertEqual(config.load_theme_name(settings), "ocean")
        self.assertTrue(config.load_header(settings))
        self.assertEqual(config.load_size_format(settings), SizeFormat.BINARY_BYTES)
        self.assertEqual(config.load_time_type(settings), TimeType.ACCESSED)
        self.assertEqual(config.load_sort_field(settings), SortField.SIZE)
        self.assertTrue(config.load_show_hidden(settings))
        self.assertTrue(config.load_group_directories_first(settings))

    def test_wrong_types_fall_back(self) -> None:
        settings = {"header": "yes", "size_format": 3, "sort": "sideways", "theme": 1}
        self.assertFalse(config.load_header(settings))
        self.assertEqual(config.load_size_format(settings), SizeFormat.DECIMAL_BYTES)
        self.assertEqual(config.load_sort_field(settings), SortField.NAME)
        self.assertIsNone(config.load_theme_name(settings))


if __name__ == "__main__":
    unittest.main()
