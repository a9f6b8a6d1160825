"""
Argument source tests (inputs, bounds-checked access, program name).
"""

from __future__ import annotations

import sys
import unittest
from unittest import TestCase, mock

from argot import Arguments


class TestArguments(TestCase):
    """Arguments accepts argv, shell strings and token iterables."""

    def testIterable(self):
        arguments = Arguments(["prog", "a", "b"])
        self.assertEqual(len(arguments), 3)
        self.assertEqual(list(arguments), ["prog", "a", "b"])
        self.assertEqual(arguments[1], "a")

    def testShellString(self):
        self.assertEqual(list(Arguments("prog a 'b c'")), ["prog", "a", "b c"])

    def testDefaultsToProcessArgv(self):
        with mock.patch.object(sys, "argv", ["/opt/loro", "list"]):
            arguments = Arguments()
        self.assertEqual(list(arguments), ["/opt/loro", "list"])

    def testPastTheEndIsNone(self):
        arguments = Arguments(["prog"])
        self.assertIsNone(arguments[1])
        self.assertIsNone(arguments[100])

    def testNegativeIndex(self):
        with self.assertRaises(IndexError):
            Arguments(["prog"])[-1]

    def testSlice(self):
        self.assertEqual(Arguments(["prog", "-r", "a", "b"])[2:4], ("a", "b"))

    def testRejectsNonStrings(self):
        with self.assertRaises(TypeError):
            Arguments(["prog", 1])
        with self.assertRaises(TypeError):
            Arguments(5)

    def testIsNotAffectedByLaterChanges(self):
        argv = ["prog", "a"]
        arguments = Arguments(argv)
        argv.append("b")
        self.assertEqual(len(arguments), 2)

    def testProgram(self):
        self.assertEqual(Arguments(["/usr/local/bin/loro"]).program, "loro")
        self.assertEqual(Arguments(["C:\\tools\\loro.exe"]).program, "loro.exe")
        self.assertEqual(Arguments(["loro"]).program, "loro")
        self.assertEqual(Arguments([]).program, "")

    def testRepr(self):
        self.assertEqual(repr(Arguments(["prog", "a"])), "arguments(('prog', 'a'))")


if __name__ == "__main__":
    unittest.main()
