"""
Selector behavioral tests (last occurrence wins, counting, positionals).

Conventions
- Test method names follow CamelCase per project convention.
- Sequences are built directly from the parsed variants (no parser involved).
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argspan import ArgSelector, Flag, OptionalValue, Positional, Value


class TestArgSelector(TestCase):
    """Queries over a produced sequence."""

    def setUp(self):
        self.args = [
            Positional("a"),
            Flag("foo", True),
            Flag("foo", False),
            Flag("foo", True),
            Value("bar", "123"),
            Positional("b"),
            Flag("verbose", True),
            Flag("verbose", True),
            Flag("verbose", False),
            Flag("verbose", True),
            Value("bar", "456"),
            OptionalValue("color", "red"),
            OptionalValue("color", None),
            Positional("c"),
        ]
        self.selector = ArgSelector(self.args)

    def testGetFlagLastOccurrenceWins(self):
        self.assertTrue(self.selector.get_flag("foo", False))
        self.assertFalse(ArgSelector([Flag("foo", True), Flag("foo", False)]).get_flag("foo", True))

    def testGetFlagDefault(self):
        self.assertFalse(self.selector.get_flag("bar", False))
        self.assertTrue(self.selector.get_flag("bar", True))
        self.assertFalse(self.selector.get_flag("missing"))

    def testCountFlag(self):
        self.assertEqual(self.selector.count_flag("verbose"), 3)
        self.assertEqual(self.selector.count_flag("foo"), 2)
        self.assertEqual(self.selector.count_flag("missing"), 0)
        self.assertEqual(self.selector.count_flag("bar"), 0)

    def testGetValueLastOccurrenceWins(self):
        self.assertEqual(self.selector.get_value("bar"), "456")
        self.assertIsNone(self.selector.get_value("missing"))
        self.assertIsNone(self.selector.get_value("foo"))

    def testGetValueSkipsValuelessOptional(self):
        self.assertEqual(self.selector.get_value("color"), "red")
        self.assertIsNone(ArgSelector([OptionalValue("color")]).get_value("color"))

    def testGetValues(self):
        self.assertEqual(self.selector.get_values("bar"), ["123", "456"])
        self.assertEqual(self.selector.get_values("color"), ["red"])
        self.assertEqual(self.selector.get_values("missing"), [])

    def testGetPositionalKeepsOrder(self):
        self.assertEqual(self.selector.get_positional(), ["a", "b", "c"])
        self.assertEqual(
            self.selector.get_positional(),
            [arg.value for arg in self.args if isinstance(arg, Positional)],
        )

    def testHas(self):
        self.assertTrue(self.selector.has("color"))
        self.assertTrue(self.selector.has("foo"))
        self.assertFalse(self.selector.has("a"))

    def testSnapshotIsIndependentOfSource(self):
        self.args.append(Positional("d"))
        self.assertEqual(self.selector.get_positional(), ["a", "b", "c"])
        self.assertEqual(len(self.selector), 14)
        self.assertEqual(list(self.selector), self.args[:-1])

    def testEmpty(self):
        selector = ArgSelector([])
        self.assertEqual(selector.get_positional(), [])
        self.assertTrue(selector.get_flag("x", True))
        self.assertIsNone(selector.get_value("x"))
        self.assertEqual(selector.count_flag("x"), 0)

    def testRejectsForeignItems(self):
        with self.assertRaises(TypeError):
            ArgSelector(["a"])


if __name__ == "__main__":
    unittest.main()
