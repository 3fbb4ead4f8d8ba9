#!/usr/bin/env python3
"""
配置与日志单元测试

测试 sitemapkit/config.py 与 sitemapkit/logging.py
"""

import os
import unittest
from pathlib import Path
from unittest import mock
import sys

# 添加项目根目录到Python路径
sys.path.append(str(Path(__file__).parent.parent))

from sitemapkit import (
    ChangeFreq, ConfigurationManager, DictConfigProvider,
    EnvironmentConfigProvider, SitemapConfiguration,
)
from sitemapkit.logging import (
    LoggerFactory, MemoryLogger, NullLogger, StandardLogger,
)


class TestSitemapConfiguration(unittest.TestCase):
    """测试配置数据结构"""

    def test_defaults(self):
        config = SitemapConfiguration()

        self.assertEqual(config.default_change_freq, ChangeFreq.MONTHLY)
        self.assertEqual(config.default_priority, 0.5)
        self.assertTrue(config.strict_change_freq)
        self.assertTrue(config.declare_extension_namespaces)
        self.assertEqual(config.indent, "  ")
        self.assertTrue(config.validate())

    def test_from_dict_provider(self):
        provider = DictConfigProvider({
            "DEFAULT_CHANGEFREQ": "Weekly",
            "DEFAULT_PRIORITY": "0.7",
            "STRICT_CHANGEFREQ": "no",
            "DECLARE_EXTENSION_NAMESPACES": "0",
            "INDENT": "    ",
        })
        config = SitemapConfiguration.from_provider(provider)

        self.assertEqual(config.default_change_freq, ChangeFreq.WEEKLY)
        self.assertEqual(config.default_priority, 0.7)
        self.assertFalse(config.strict_change_freq)
        self.assertFalse(config.declare_extension_namespaces)
        self.assertEqual(config.indent, "    ")

    def test_invalid_values_fall_back_to_defaults(self):
        provider = DictConfigProvider({
            "DEFAULT_CHANGEFREQ": "sometimes",
            "DEFAULT_PRIORITY": "high",
            "STRICT_CHANGEFREQ": "maybe",
        })
        config = SitemapConfiguration.from_provider(provider)

        self.assertEqual(config.default_change_freq, ChangeFreq.MONTHLY)
        self.assertEqual(config.default_priority, 0.5)
        self.assertTrue(config.strict_change_freq)

    def test_non_whitespace_indent_falls_back_to_default(self):
        """缩进只能由空白字符组成，否则使用默认值"""
        for indent in ("xx", " - ", 4):
            with self.subTest(indent=indent):
                config = SitemapConfiguration.from_provider(DictConfigProvider({"INDENT": indent}))
                self.assertEqual(config.indent, "  ")
                self.assertTrue(config.validate())

        config = SitemapConfiguration.from_provider(DictConfigProvider({"INDENT": "\t"}))
        self.assertEqual(config.indent, "\t")

    def test_empty_env_value_treated_as_unset(self):
        with mock.patch.dict(os.environ, {"SITEMAP_DEFAULT_PRIORITY": ""}):
            config = SitemapConfiguration.from_env()
        self.assertEqual(config.default_priority, 0.5)

    def test_from_env(self):
        env = {
            "SITEMAP_DEFAULT_CHANGEFREQ": "hourly",
            "SITEMAP_DEFAULT_PRIORITY": "0.2",
        }
        with mock.patch.dict(os.environ, env):
            config = SitemapConfiguration.from_env()

        self.assertEqual(config.default_change_freq, ChangeFreq.HOURLY)
        self.assertEqual(config.default_priority, 0.2)

    def test_validate(self):
        self.assertFalse(SitemapConfiguration(default_priority=1.5).validate())
        self.assertFalse(SitemapConfiguration(indent="--").validate())
        self.assertTrue(SitemapConfiguration(default_priority=None).validate())


class TestConfigProviders(unittest.TestCase):
    """测试配置提供者"""

    def test_environment_provider_prefix(self):
        with mock.patch.dict(os.environ, {"SITEMAP_INDENT": "\t"}):
            provider = EnvironmentConfigProvider(prefix="SITEMAP_")
            self.assertEqual(provider.get("INDENT"), "\t")
            self.assertEqual(provider.get("MISSING", "fallback"), "fallback")
            self.assertTrue(provider.validate())

    def test_environment_provider_custom_mapping(self):
        provider = EnvironmentConfigProvider(environ={"SITEMAP_STRICT_CHANGEFREQ": "off"})
        self.assertEqual(provider.get("strict_changefreq"), "off")
        self.assertIsNone(provider.get("INDENT"))

    def test_dict_provider_keys_case_insensitive(self):
        provider = DictConfigProvider({"default_priority": "0.4"})
        self.assertEqual(provider.get("DEFAULT_PRIORITY"), "0.4")
        self.assertEqual(SitemapConfiguration.from_provider(provider).default_priority, 0.4)

    def test_dict_provider_validate(self):
        """未知配置项视为无效"""
        self.assertTrue(DictConfigProvider({}).validate())
        self.assertTrue(DictConfigProvider({"INDENT": " "}).validate())
        self.assertFalse(DictConfigProvider({"INDNET": " "}).validate())

    def test_configuration_manager(self):
        manager = ConfigurationManager(DictConfigProvider({"DEFAULT_PRIORITY": "0.9"}))

        self.assertEqual(manager.get_sitemap_config().default_priority, 0.9)
        self.assertTrue(manager.validate_all())

    def test_configuration_manager_rejects_bad_values(self):
        manager = ConfigurationManager(DictConfigProvider({"DEFAULT_PRIORITY": "3"}))
        self.assertFalse(manager.validate_all())


class TestLoggerFactory(unittest.TestCase):
    """测试日志工厂"""

    def test_create_by_type(self):
        self.assertIsInstance(LoggerFactory.create("memory"), MemoryLogger)
        self.assertIsInstance(LoggerFactory.create("standard", name="sitemapkit.test"), StandardLogger)
        self.assertIsInstance(LoggerFactory.create("null"), NullLogger)

    def test_unknown_type(self):
        with self.assertRaises(ValueError):
            LoggerFactory.create("syslog")

    def test_memory_logger_records_levels(self):
        logger = LoggerFactory.create_memory_logger()
        logger.debug("generated")
        logger.info("done")

        self.assertEqual(logger.records, [("DEBUG", "generated"), ("INFO", "done")])
        self.assertEqual(logger.messages("info"), ["done"])

    def test_standard_logger_without_level_adds_no_handler(self):
        logger = LoggerFactory.create_standard_logger("sitemapkit.test.quiet")
        self.assertEqual(logger.logger.handlers, [])

    def test_standard_logger_uses_logging(self):
        logger = LoggerFactory.create_standard_logger("sitemapkit.test.standard", level="DEBUG")
        with self.assertLogs("sitemapkit.test.standard", level="DEBUG") as captured:
            logger.debug("parsed 3 urls")

        self.assertEqual(captured.records[0].getMessage(), "parsed 3 urls")


if __name__ == '__main__':
    unittest.main()
