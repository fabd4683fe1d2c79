# tests/test_config.py
import os
import sys
import tempfile
import types
import unittest
from unittest.mock import patch

from viewmod import config as config_module
from viewmod.config import DEFAULTS, Config, get_config, set_config
from viewmod.exceptions import ConfigurationError
from viewmod.modifiers import ModifierRegistry
from viewmod.styles import EdgeInsets
from viewmod.widgets import Text


class TempConfigMixin:
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)

    def write_config(self, text):
        path = os.path.join(self._tmp.name, "config.yaml")
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(text)
        return path


class TestConfig(TempConfigMixin, unittest.TestCase):
    def test_file_values_merge_with_defaults(self):
        path = self.write_config("log_level: DEBUG\nregistry:\n  on_duplicate: shadow\n")
        cfg = Config(config_file=path, prefer_embedded=False)
        self.assertEqual(cfg.source, "file")
        self.assertEqual(cfg.get("log_level"), "DEBUG")
        self.assertEqual(cfg.get_nested("registry.on_duplicate"), "shadow")
        self.assertEqual(cfg.get_nested("defaults.padding"), 16)

    def test_missing_file_uses_defaults(self):
        cfg = Config(config_file=os.path.join(self._tmp.name, "nope.yaml"), prefer_embedded=False)
        self.assertIsNone(cfg.source)
        self.assertIsNone(cfg.resolved_config_path)
        self.assertEqual(cfg.as_dict(), DEFAULTS)

    def test_invalid_yaml_is_ignored(self):
        path = self.write_config("log_level: [unclosed\n")
        with self.assertLogs("viewmod.config", level="WARNING"):
            cfg = Config(config_file=path, prefer_embedded=False)
        self.assertIsNone(cfg.source)
        self.assertEqual(cfg.get("log_level"), "WARNING")

    def test_non_mapping_yaml_is_ignored(self):
        path = self.write_config("- just\n- a list\n")
        with self.assertLogs("viewmod.config", level="WARNING"):
            cfg = Config(config_file=path, prefer_embedded=False)
        self.assertIsNone(cfg.source)

    def test_get_nested_missing(self):
        cfg = Config(config_file=os.path.join(self._tmp.name, "nope.yaml"), prefer_embedded=False)
        self.assertEqual(cfg.get_nested("registry.missing", "fallback"), "fallback")
        self.assertEqual(cfg.get_nested("log_level.deeper", "fallback"), "fallback")
        self.assertEqual(cfg.get_nested("", "fallback"), "fallback")

    def test_defaults_are_not_shared(self):
        cfg = Config(config_file=os.path.join(self._tmp.name, "nope.yaml"), prefer_embedded=False)
        cfg.as_dict()["registry"]["on_duplicate"] = "shadow"
        self.assertEqual(DEFAULTS["registry"]["on_duplicate"], "error")

    def test_embedded_module_wins(self):
        path = self.write_config("log_level: DEBUG\n")
        module = types.ModuleType("_test_embedded_config")
        module.CONFIG = {"log_level": "ERROR"}
        with patch.dict(sys.modules, {"_test_embedded_config": module}):
            cfg = Config(config_file=path, embedded_module_name="_test_embedded_config")
            self.assertTrue(cfg.is_embedded)
            self.assertEqual(cfg.get("log_level"), "ERROR")

            cfg.reload(prefer_embedded=False)
            self.assertEqual(cfg.source, "file")
            self.assertEqual(cfg.get("log_level"), "DEBUG")


class TestConfigDrivesRegistry(TempConfigMixin, unittest.TestCase):
    def setUp(self):
        super().setUp()
        self.addCleanup(set_config, None)

    def use(self, text):
        set_config(Config(config_file=self.write_config(text), prefer_embedded=False))

    def test_shared_config(self):
        set_config(None)
        self.assertIs(get_config(), get_config())
        self.assertIs(config_module.get_config(), get_config())

    def test_duplicate_policy_from_config(self):
        self.use("registry:\n  on_duplicate: shadow\n")
        registry = ModifierRegistry()
        self.assertEqual(registry.on_duplicate, "shadow")
        with self.assertLogs("viewmod.modifiers", level="WARNING"):
            registry.define_modifier("font", lambda content, font: content)

    def test_bad_duplicate_policy_in_config(self):
        self.use("registry:\n  on_duplicate: sometimes\n")
        with self.assertRaises(ConfigurationError):
            ModifierRegistry()

    def test_default_padding_from_config(self):
        self.use("defaults:\n  padding: 4\n")
        self.assertEqual(Text("a").padding().resolved_properties()["padding"], EdgeInsets.all(4))


if __name__ == "__main__":
    unittest.main()
