"""
Configuration module behavioral tests (precedence and environment overrides).

Scope
- Validate option > environment > default precedence.
- Validate conversion of CDP_* variables and their faults.
- Validate the logging level implied by the flags.

Conventions
- Test method names follow CamelCase per project convention.
- Environments are plain dicts; os.environ is never touched.
"""

import logging
import unittest
from unittest import TestCase

from cdpcli import (
    ArgumentParser,
    CLIConfig,
    InvalidChoiceError,
    InvalidEnvironmentError,
    load_config,
    variable,
)


class TestLoadConfig(TestCase):
    """load_config() precedence and conversion."""

    def testDefaults(self):
        self.assertEqual(load_config({}, {}), CLIConfig())
        self.assertEqual(load_config(environ={}).port, 9222)

    def testEnvironmentOverridesDefaults(self):
        config = load_config({}, {"CDP_HOST": "remote", "CDP_PORT": "9333", "CDP_DEBUG": "yes"})
        self.assertEqual(config.host, "remote")
        self.assertEqual(config.port, 9333)
        self.assertTrue(config.debug)

    def testOptionsOverrideEnvironment(self):
        parsed = ArgumentParser().parse_arguments(["node", "cli", "--port", "9444"])
        config = load_config(parsed.global_options, {"CDP_PORT": "9333"})
        self.assertEqual(config.port, 9444)

    def testPlainValuesAccepted(self):
        self.assertEqual(load_config({"format": "json", "target": "ignored"}, {}).format, "json")

    def testUnconvertibleVariable(self):
        with self.assertRaises(InvalidEnvironmentError) as context:
            load_config({}, {"CDP_TIMEOUT": "soon"})
        self.assertEqual(str(context.exception), "Invalid value in CDP_TIMEOUT: Option --timeout must be a number, got: soon")

    def testVariableOutsideChoices(self):
        with self.assertRaisesRegex(InvalidChoiceError, "Option --format must be one of: json, text"):
            load_config({}, {"CDP_FORMAT": "xml"})

    def testVariableNames(self):
        self.assertEqual(variable("port"), "CDP_PORT")
        self.assertEqual(variable("full-page"), "CDP_FULL_PAGE")


class TestLoggingLevel(TestCase):
    """CLIConfig.level."""

    def testLevels(self):
        self.assertEqual(CLIConfig().level, logging.WARNING)
        self.assertEqual(CLIConfig(verbose=True).level, logging.INFO)
        self.assertEqual(CLIConfig(debug=True, verbose=True).level, logging.DEBUG)
        self.assertEqual(CLIConfig(quiet=True).level, logging.ERROR)


if __name__ == "__main__":
    unittest.main()
