"""
Parse result tests (ordering, insert-if-absent, typed accessors).
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from argot import ParseResult


def populated():
    result = ParseResult()
    result._insert("/", "patch")
    result._insert("/range/0", "0x00")
    result._insert("/range/1", "0xFF")
    result._insert("/force", "")
    return result


class TestParseResult(TestCase):
    """ParseResult is a read-only, insertion-ordered mapping."""

    def testInsertIfAbsent(self):
        result = ParseResult()
        self.assertTrue(result._insert("/", "list"))
        self.assertFalse(result._insert("/", "program"))
        self.assertEqual(result["/"], "list")

    def testOrderIsInsertionOrder(self):
        self.assertEqual(list(populated()), ["/", "/range/0", "/range/1", "/force"])

    def testIterationIsRestartable(self):
        result = populated()
        self.assertEqual(list(result.items()), list(result.items()))

    def testAccessors(self):
        result = populated()
        self.assertEqual(result.command, "patch")
        self.assertIsNone(result.topic)
        self.assertTrue(result.has("range"))
        self.assertTrue(result.has("force"))
        self.assertFalse(result.has("device-name"))
        self.assertEqual(result.value("force"), "")
        self.assertIsNone(result.value("range"))
        self.assertEqual(result.value("device-name", "dev0"), "dev0")
        self.assertEqual(result.values_of("range"), ("0x00", "0xFF"))
        self.assertEqual(result.values_of("force"), ())

    def testMissingKey(self):
        with self.assertRaises(KeyError):
            ParseResult()["/"]

    def testIsReadOnly(self):
        with self.assertRaises(TypeError):
            populated()["/"] = "list"

    def testClear(self):
        result = populated()
        result._clear()
        self.assertEqual(len(result), 0)


if __name__ == "__main__":
    unittest.main()
