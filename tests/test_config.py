from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from listening_blocks.config import config_sha256, load_config
from listening_blocks.config_schema import AppConfig
from listening_blocks.errors import ConfigError


_VALID_YAML = """\
blocks:
  default_topic: Campaña
  separator: "\\nOR\\n"

titles:
  max_words: 6
  min_words: 3

export:
  markdown_filename: bloques.md
  workbook_filename: bloques.xlsx
"""


class TestConfig(unittest.TestCase):
    def test_defaults_without_path(self) -> None:
        cfg = load_config(None)

        self.assertEqual(cfg.blocks.default_topic, "Post")
        self.assertEqual(cfg.blocks.separator, "\nOR\n")
        self.assertEqual(cfg.titles.max_words, 7)
        self.assertEqual(cfg.titles.min_words, 4)
        self.assertEqual(cfg.export.markdown_filename, "listening_blocks.md")

    def test_load_config_ok(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "config.yaml"
            path.write_text(_VALID_YAML, encoding="utf-8")

            cfg = load_config(path)
            self.assertEqual(cfg.blocks.default_topic, "Campaña")
            self.assertEqual(cfg.blocks.separator, "\nOR\n")
            self.assertEqual(cfg.titles.max_words, 6)
            self.assertEqual(cfg.export.workbook_filename, "bloques.xlsx")

    def test_empty_file_means_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "config.yaml"
            path.write_text("", encoding="utf-8")

            self.assertEqual(load_config(path), AppConfig())

    def test_load_config_rejects_min_above_max(self) -> None:
        bad_yaml = _VALID_YAML.replace("min_words: 3", "min_words: 9")
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "config.yaml"
            path.write_text(bad_yaml, encoding="utf-8")

            with self.assertRaises(ConfigError) as ctx:
                load_config(path)
            self.assertIn("Invalid configuration", str(ctx.exception))

    def test_load_config_rejects_unknown_keys_and_paths(self) -> None:
        for bad_yaml in ("topic: x\n", "export:\n  markdown_filename: ../x.md\n", "- a\n- b\n"):
            with self.subTest(bad_yaml=bad_yaml), tempfile.TemporaryDirectory() as td:
                path = Path(td) / "config.yaml"
                path.write_text(bad_yaml, encoding="utf-8")

                with self.assertRaises(ConfigError):
                    load_config(path)

    def test_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(ConfigError):
                load_config(Path(td) / "missing.yaml")

    def test_config_hash_is_stable(self) -> None:
        self.assertEqual(config_sha256(AppConfig()), config_sha256(AppConfig()))
        self.assertEqual(len(config_sha256(AppConfig())), 64)


if __name__ == "__main__":
    unittest.main()
