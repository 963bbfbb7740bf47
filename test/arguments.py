"""
Arguments module behavioral tests (option and positional definitions).

Scope
- Validate OptionDefinition construction, type normalization and flags.
- Validate ArgumentDefinition defaults.
- Validate read-only, detached properties and repr output.
- Validate the global option table.

Conventions
- Test method names follow CamelCase per project convention.
"""

import unittest
from unittest import TestCase

from cdpcli import GLOBAL_OPTIONS, ArgumentDefinition, ArgumentType, OptionDefinition, OptionType


class TestOptionDefinition(TestCase):
    """Behavioral tests for OptionDefinition."""

    def testDefaults(self):
        option = OptionDefinition("filename")
        self.assertIs(option.type, OptionType.STRING)
        self.assertIsNone(option.short)
        self.assertFalse(option.required)
        self.assertIsNone(option.default)
        self.assertEqual(option.choices, [])
        self.assertIsNone(option.validator)

    def testTypeSpellingNormalized(self):
        self.assertIs(OptionDefinition("port", "number").type, OptionType.NUMBER)

    def testFlagsForValueOption(self):
        self.assertEqual(OptionDefinition("filename", short="o").flags, ["-o", "--filename"])

    def testFlagsForBooleanOption(self):
        self.assertEqual(OptionDefinition("full-page", "boolean").flags, ["--full-page", "--no-full-page"])

    def testPropertiesAreReadOnly(self):
        option = OptionDefinition("format", choices=("png", "jpeg"))
        with self.assertRaises(AttributeError):
            option.name = "other"

    def testChoicesAreDetachedCopies(self):
        option = OptionDefinition("format", choices=("png", "jpeg"))
        choices = option.choices
        choices.append("gif")
        self.assertEqual(option.choices, ["png", "jpeg"])

    def testReprShowsTypename(self):
        text = repr(OptionDefinition("port", "number", short="p", default=9222))
        self.assertTrue(text.startswith("option-definition("))
        self.assertIn("name='port'", text)
        self.assertIn("default=9222", text)


class TestArgumentDefinition(TestCase):
    """Behavioral tests for ArgumentDefinition."""

    def testDefaults(self):
        argument = ArgumentDefinition("selector")
        self.assertIs(argument.type, ArgumentType.STRING)
        self.assertFalse(argument.required)
        self.assertFalse(argument.variadic)

    def testTypeSpellingNormalized(self):
        self.assertIs(ArgumentDefinition("url", "url", required=True).type, ArgumentType.URL)

    def testReprShowsTypename(self):
        self.assertTrue(repr(ArgumentDefinition("files", variadic=True)).startswith("argument-definition("))


class TestGlobalOptions(TestCase):
    """The fixed table of options accepted before the command name."""

    def testTable(self):
        table = {option.name: (option.short, option.type, option.default) for option in GLOBAL_OPTIONS}
        self.assertEqual(table, {
            "host": ("h", OptionType.STRING, "localhost"),
            "port": ("p", OptionType.NUMBER, 9222),
            "format": ("f", OptionType.STRING, "text"),
            "verbose": ("v", OptionType.BOOLEAN, False),
            "quiet": ("q", OptionType.BOOLEAN, False),
            "timeout": ("t", OptionType.NUMBER, 30000),
            "debug": ("d", OptionType.BOOLEAN, False),
            "config": ("c", OptionType.STRING, None),
        })

    def testFormatChoices(self):
        option, = (option for option in GLOBAL_OPTIONS if option.name == "format")
        self.assertEqual(option.choices, ["json", "text"])


if __name__ == "__main__":
    unittest.main()
