"""
Values module behavioral tests (coercion per option type, positional checks).

Scope
- Validate number/boolean/array/string coercion and their error messages.
- Validate defaults for absent values and unwrap() of tagged values.
- Validate positional checks for number, file and url arguments.

Conventions
- Test method names follow CamelCase per project convention.
"""

import unittest
from unittest import TestCase

from cdpcli import ArgumentDefinition, OptionDefinition
from cdpcli.values import (
    ArrayValue,
    BoolValue,
    NumberValue,
    OptionType,
    StringValue,
    check,
    coerce,
    parse_number,
    unwrap,
)


class TestCoercion(TestCase):
    """Coercion of raw tokens into tagged option values."""

    def testIntegralNumberBecomesInt(self):
        value = coerce(OptionDefinition("port", "number"), "9223")
        self.assertEqual(value, NumberValue(9223))
        self.assertIsInstance(value.value, int)

    def testFractionalNumberBecomesFloat(self):
        self.assertEqual(coerce(OptionDefinition("scale", "number"), "0.5"), NumberValue(0.5))

    def testNonNumericNumberRejected(self):
        with self.assertRaises(ValueError) as context:
            coerce(OptionDefinition("port", "number"), "abc")
        self.assertEqual(str(context.exception), "Option --port must be a number, got: abc")

    def testNumberRejectsNanAndEmpty(self):
        for raw in ("nan", "inf", "", "  "):
            with self.subTest(raw=raw), self.assertRaises(ValueError):
                parse_number(raw)

    def testBooleanSpellings(self):
        option = OptionDefinition("force", "boolean")
        for raw in ("true", "TRUE", "1", "yes"):
            self.assertEqual(coerce(option, raw), BoolValue(True))
        for raw in ("false", "0", "No"):
            self.assertEqual(coerce(option, raw), BoolValue(False))

    def testBooleanRejectsOtherText(self):
        with self.assertRaisesRegex(ValueError, "must be a boolean"):
            coerce(OptionDefinition("force", "boolean"), "maybe")

    def testArraySplitsAndTrims(self):
        value = coerce(OptionDefinition("types", "array"), "error, warn ,log")
        self.assertEqual(value, ArrayValue(("error", "warn", "log")))
        self.assertEqual(unwrap(value), ["error", "warn", "log"])

    def testStringKeepsText(self):
        self.assertEqual(coerce(OptionDefinition("host"), "remote"), StringValue("remote"))

    def testAbsentValueFallsBackToDefault(self):
        self.assertEqual(coerce(OptionDefinition("timeout", "number", default=30000)), NumberValue(30000))
        self.assertIsNone(coerce(OptionDefinition("config")))

    def testUnknownTypeSpellingIsKeptVerbatim(self):
        option = OptionDefinition("odd", "decimal")
        self.assertEqual(option.type, "decimal")
        self.assertNotIsInstance(option.type, OptionType)

    def testBoolValueInverts(self):
        self.assertEqual(~BoolValue(True), BoolValue(False))

    def testTaggedValuesMatchByVariant(self):
        match coerce(OptionDefinition("port", "number"), "80"):
            case NumberValue(port):
                self.assertEqual(port, 80)
            case _:
                self.fail("expected a NumberValue")


class TestPositionalChecks(TestCase):
    """Type checks applied to raw positionals."""

    def testNumberArgument(self):
        check(ArgumentDefinition("count", "number"), "12")
        with self.assertRaises(ValueError) as context:
            check(ArgumentDefinition("count", "number"), "twelve")
        self.assertEqual(str(context.exception), "Argument count must be a number, got: twelve")

    def testFileArgumentNeedsText(self):
        check(ArgumentDefinition("path", "file"), "script.js")
        with self.assertRaisesRegex(ValueError, "must be a valid file path"):
            check(ArgumentDefinition("path", "file"), "  ")

    def testUrlArgument(self):
        check(ArgumentDefinition("url", "url"), "https://example.com")
        check(ArgumentDefinition("url", "url"), "file:///tmp/page.html")
        with self.assertRaisesRegex(ValueError, "must be a valid URL"):
            check(ArgumentDefinition("url", "url"), "example.com")

    def testStringArgumentAcceptsAnything(self):
        check(ArgumentDefinition("selector"), "#submit")


if __name__ == "__main__":
    unittest.main()
