# python
"""
Configs module behavioral tests (ValueMap materialization).

Scope
- Validate ConfigMap.get/getall conversion, defaults and last-occurrence semantics.
- Validate boolean() literals.
- Validate setting() descriptors: type inference, eager resolution, read-only access.
- Validate ConversionError reporting.

Conventions
- Test method names follow CamelCase per project convention.
- ValueMaps are plain dicts of tuples, like the scanner produces.
"""

from __future__ import annotations

import pathlib
import unittest
from unittest import TestCase

from argrammar import ConfigMap, Setting, setting, boolean, ConversionError


class TestBoolean(TestCase):
    """Flag and bool literal conversion."""

    def testTruths(self):
        for literal in ("true", "True", "YES", "on", "1", " true "):
            with self.subTest(literal=literal):
                self.assertIs(boolean(literal), True)

    def testFalsities(self):
        for literal in ("false", "No", "OFF", "0"):
            with self.subTest(literal=literal):
                self.assertIs(boolean(literal), False)

    def testInvalidLiteral(self):
        with self.assertRaises(ValueError):
            boolean("maybe")
        with self.assertRaises(TypeError):
            boolean(1)


class TestConfigMap(TestCase):
    """Direct ConfigMap access."""

    def setUp(self):
        self.config = ConfigMap({
            "verbose": ("true",),
            "count": ("1", "2", "3"),
            "outfile": ("-",),
            "files": (),
        })

    def testGetDefaultsToString(self):
        self.assertEqual(self.config.get("outfile"), "-")

    def testGetLastOccurrenceWins(self):
        self.assertEqual(self.config.get("count", int), 3)

    def testGetAll(self):
        self.assertEqual(self.config.getall("count", int), (1, 2, 3))
        self.assertEqual(self.config.getall("missing"), ())

    def testGetBool(self):
        self.assertIs(self.config.get("verbose", bool), True)

    def testGetCallable(self):
        self.assertEqual(self.config.get("outfile", pathlib.Path), pathlib.Path("-"))

    def testGetMissingWithDefault(self):
        self.assertEqual(self.config.get("missing", default=7), 7)
        self.assertIsNone(self.config.get("missing", default=None))

    def testGetEmptyUsesDefault(self):
        self.assertEqual(self.config.get("files", default="none"), "none")

    def testGetEmptyWithoutDefault(self):
        self.assertIsNone(self.config.get("files"))
        self.assertIsNone(self.config.get("files", int))

    def testGetMissingWithoutDefault(self):
        with self.assertRaises(KeyError):
            self.config.get("missing")

    def testConversionError(self):
        with self.assertRaises(ConversionError) as context:
            self.config.get("outfile", int)
        self.assertEqual(context.exception, ConversionError("outfile", "-", int))

    def testContains(self):
        self.assertIn("verbose", self.config)
        self.assertNotIn("missing", self.config)

    def testValuesAreReadOnly(self):
        with self.assertRaises(TypeError):
            self.config.values["verbose"] = ("false",)  # type: ignore[index]

    def testEquality(self):
        self.assertEqual(ConfigMap({"a": ("1",)}), ConfigMap({"a": ("1",)}))
        self.assertNotEqual(ConfigMap({"a": ("1",)}), ConfigMap({"a": ("2",)}))


class Configuration(ConfigMap):
    verbose = setting("verbose", False)
    level = setting("level", 1)
    ratio = setting("ratio", 0.5)
    outfile = setting("outfile", "-")
    infile = setting("infile")
    files = setting("files", many=True)


class TestSettings(TestCase):
    """Declarative settings."""

    def testTypesInferredFromDefaults(self):
        self.assertIs(Configuration.verbose.type, bool)
        self.assertIs(Configuration.level.type, int)
        self.assertIs(Configuration.ratio.type, float)
        self.assertIs(Configuration.infile.type, str)

    def testExplicitType(self):
        self.assertIs(setting("path", type=pathlib.Path).type, pathlib.Path)
        self.assertIs(setting("count", None, int).type, int)

    def testDescriptorOnClass(self):
        self.assertIsInstance(Configuration.verbose, Setting)

    def testResolution(self):
        config = Configuration({
            "verbose": ("false", "true"),
            "level": ("3",),
            "infile": ("in.txt",),
            "files": ("a", "b"),
        })
        self.assertIs(config.verbose, True)
        self.assertEqual(config.level, 3)
        self.assertEqual(config.ratio, 0.5)
        self.assertEqual(config.outfile, "-")
        self.assertEqual(config.infile, "in.txt")
        self.assertEqual(config.files, ("a", "b"))

    def testEagerConversionFailure(self):
        with self.assertRaises(ConversionError) as context:
            Configuration({"level": ("high",), "infile": ("in.txt",)})
        self.assertEqual(context.exception.subject, "level")
        self.assertEqual(context.exception.value, "high")
        self.assertIs(context.exception.type, int)

    def testSingleSettingOnEmptyKey(self):
        class Files(ConfigMap):
            files = setting("files")

        self.assertIsNone(Files({"files": ()}).files)

    def testRequiredSettingMissing(self):
        with self.assertRaises(KeyError):
            Configuration({})

    def testSettingsAreReadOnly(self):
        config = Configuration({"infile": ("in.txt",)})
        with self.assertRaises(AttributeError):
            config.infile = "other"

    def testInheritedSettings(self):
        class Extended(Configuration):
            extra = setting("extra", "x")

        config = Extended({"infile": ("in.txt",), "extra": ("y",)})
        self.assertEqual((config.infile, config.extra), ("in.txt", "y"))

    def testRepr(self):
        class Small(ConfigMap):
            verbose = setting("verbose", False)

        self.assertEqual(repr(Small({"verbose": ("true",)})), "Small(verbose=True)")

    def testSettingValidation(self):
        with self.assertRaises(TypeError):
            setting(1)
        with self.assertRaises(ValueError):
            setting("")
        with self.assertRaises(TypeError):
            setting("key", type="int")


if __name__ == "__main__":
    unittest.main()
