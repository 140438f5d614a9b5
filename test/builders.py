# python
"""
Builders module behavioral tests (method-chaining declarations).

Scope
- Validate complete and minimal declarations of options and positionals.
- Validate stringified defaults and separators.
- Validate that builders are single-use and defer validation to Grammar.add().

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argrammar import (
    Grammar,
    Positional,
    Separator,
    PositionalBuilder,
    OptionBuilder,
    SeparatorBuilder,
    DuplicateArgumentError,
    InvalidOrderingError,
)


class TestOptionBuilder(TestCase):
    """Option declarations."""

    def setUp(self):
        self.grammar = Grammar()

    def testCompleteOption(self):
        option = (
            self.grammar.option("-f")
            .name("-foo")
            .name("--bar")
            .name("--blubblub")
            .value_name("FOO")
            .default("bar")
            .description("test description")
            .key("foo")
        )
        self.assertEqual(option, self.grammar.arguments[0])
        self.assertEqual(option.names, ("-f", "-foo", "--bar", "--blubblub"))
        self.assertEqual(option.metavar, "FOO")
        self.assertEqual(option.default, "bar")
        self.assertEqual(option.descr, "test description")
        self.assertEqual(option.key, "foo")

    def testMinimalOption(self):
        option = self.grammar.option("-f").key("foo")
        self.assertEqual(option.names, ("-f",))
        self.assertTrue(option.flag)
        self.assertIsNone(option.default)
        self.assertIsNone(option.descr)

    def testNonStringDefaults(self):
        self.assertEqual(self.grammar.option("-i").value_name("INT").default(42).key("i").default, "42")
        self.assertEqual(self.grammar.option("-d").value_name("DBL").default(23.42).key("d").default, "23.42")
        self.assertEqual(self.grammar.option("-b").value_name("BOOL").default(True).key("b").default, "true")

    def testOptionBuilderType(self):
        self.assertIsInstance(self.grammar.option("-f"), OptionBuilder)

    def testDuplicateAliasRejectedAtKey(self):
        self.grammar.option("-v").key("verbose")
        builder = self.grammar.option("-q").name("-v")
        with self.assertRaises(DuplicateArgumentError):
            builder.key("quiet")
        self.assertEqual(len(self.grammar.arguments), 1)

    def testInvalidNameRejectedAtKey(self):
        with self.assertRaises(ValueError):
            self.grammar.option("-f").name("").key("foo")


class TestPositionalBuilder(TestCase):
    """Positional declarations."""

    def setUp(self):
        self.grammar = Grammar()

    def testRequiredPositional(self):
        positional = self.grammar.positional("infile").required().description("input filename").key("infile")
        self.assertEqual(positional, self.grammar.arguments[0])
        self.assertIsInstance(positional, Positional)
        self.assertEqual(positional.descr, "input filename")
        self.assertFalse(positional.optional)
        self.assertFalse(positional.repeated)

    def testRequiredByDefault(self):
        self.assertFalse(self.grammar.positional("infile").key("infile").optional)

    def testOptionalPositional(self):
        self.assertTrue(self.grammar.positional("outfile").optional().key("outfile").optional)

    def testRepeatedPositional(self):
        positional = self.grammar.positional("files").optional().repeated("files")
        self.assertTrue(positional.repeated)
        self.assertTrue(positional.optional)
        self.assertEqual(positional.key, "files")

    def testKeyWithRepeatedFlag(self):
        self.assertTrue(self.grammar.positional("files").key("files", repeated=True).repeated)

    def testOrderingRejectedAtKey(self):
        self.grammar.positional("outfile").optional().key("outfile")
        with self.assertRaises(InvalidOrderingError):
            self.grammar.positional("infile").required().key("infile")

    def testPositionalBuilderType(self):
        self.assertIsInstance(self.grammar.positional("infile"), PositionalBuilder)


class TestSeparatorBuilder(TestCase):
    """Separator declarations."""

    def setUp(self):
        self.grammar = Grammar()

    def testSeparatorRepeatsText(self):
        separator = self.grammar.separator("-", 5)
        self.assertIsInstance(separator, Separator)
        self.assertEqual(separator.text, "-----")

    def testSingleSeparator(self):
        self.assertEqual(self.grammar.separator("--").text, "--")

    def testMultilineSeparator(self):
        self.assertEqual(self.grammar.separator("=", 3, multiline=True).text, "\n===\n")

    def testBuilderForms(self):
        self.assertEqual(SeparatorBuilder(self.grammar, "*").add(2).text, "**")
        self.assertEqual(SeparatorBuilder(self.grammar, "*").block().text, "\n*\n")
        self.assertEqual(len(self.grammar.arguments), 2)

    def testNumberValidation(self):
        with self.assertRaises(ValueError):
            self.grammar.separator("-", 0)
        with self.assertRaises(TypeError):
            self.grammar.separator("-", 2.5)
        with self.assertRaises(TypeError):
            self.grammar.separator("-", True)
        with self.assertRaises(TypeError):
            self.grammar.separator(None)


class TestSingleUse(TestCase):
    """Builders add exactly one argument."""

    def testOptionBuilderFinishesOnce(self):
        grammar = Grammar()
        builder = grammar.option("-v")
        builder.key("verbose")
        with self.assertRaises(TypeError):
            builder.key("verbose")
        self.assertEqual(len(grammar.arguments), 1)

    def testPositionalBuilderFinishesOnce(self):
        grammar = Grammar()
        builder = grammar.positional("files").optional()
        builder.repeated("files")
        with self.assertRaises(TypeError):
            builder.key("files")


if __name__ == "__main__":
    unittest.main()
