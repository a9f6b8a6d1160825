"""
Utility tests (sentinel, coalesce, rename, mirror, ordinal).
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argot.utils import Unset, UnsetType, coalesce, rename, mirror, ordinal


class TestUnset(TestCase):
    """Unset is a falsey singleton."""

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)
        self.assertFalse(Unset)
        self.assertEqual(repr(Unset), "Unset")

    def testUnion(self):
        self.assertIsInstance(Unset, str | Unset)
        self.assertIsInstance("x", Unset | str)

    def testSealed(self):
        with self.assertRaises(TypeError):
            type("Derived", (UnsetType,), {})

    def testCoalesce(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)
        self.assertIsNone(coalesce(Unset))


class TestHelpers(TestCase):
    """rename() and mirror()."""

    def testRename(self):
        @rename("renamed")
        def function():
            pass
        self.assertEqual(function.__name__, "renamed")
        self.assertEqual(function.__qualname__, "renamed")
        with self.assertRaises(TypeError):
            rename(1, "name")

    def testMirrorCopiesContainers(self):
        class Holder:
            items = mirror("items")

            def __init__(self):
                self._items = [1, [2, 3]]

        holder = Holder()
        self.assertEqual(holder.items, (1, (2, 3)))
        with self.assertRaises(AttributeError):
            holder.items = ()


class TestOrdinal(TestCase):
    """Position labels used by usage faults."""

    def testWords(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(3), "third")
        self.assertEqual(ordinal(10), "tenth")

    def testNumbers(self):
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(12), "12th")
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(111), "111th")

    def testInvalid(self):
        with self.assertRaises(ValueError):
            ordinal(0)
        with self.assertRaises(TypeError):
            ordinal("1")


if __name__ == "__main__":
    unittest.main()
