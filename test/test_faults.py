"""
Fault tests (codes, host overrides, rendering and trigger dispatch).
"""

from __future__ import annotations

import copy
import io
import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console

from argot.faults import (
    FaultCode,
    UsageFault,
    UnknownParameterError,
    GrammarError,
    GrammarWarning,
    trigger,
    getdoc,
)


def render(fault):
    console = Console(file=io.StringIO(), width=200, highlight=False, soft_wrap=True, emoji=False)
    console.print(fault)
    return console.file.getvalue()


class TestFaultCode(TestCase):
    """Codes are stable and can be relabeled by the host."""

    def testNormalize(self):
        self.assertEqual(FaultCode.UNKNOWN_COMMAND.normalize(), "11101")

    def testHostLabels(self):
        codes = {FaultCode.UNKNOWN_COMMAND: "E-ROUTE"}
        with mock.patch.object(sys.modules["__main__"], "__codes__", codes, create=True):
            self.assertEqual(FaultCode.UNKNOWN_COMMAND.normalize(), "E-ROUTE")
            self.assertEqual(FaultCode.MISSING_COMMAND.normalize(), "11102")

    def testGetDoc(self):
        self.assertIsNone(getdoc(FaultCode.MALFORMED_REQUEST))
        docs = {FaultCode.MALFORMED_REQUEST: "help and version take at most one argument"}
        with mock.patch.object(sys.modules["__main__"], "__docs__", docs, create=True):
            self.assertEqual(getdoc(FaultCode.MALFORMED_REQUEST), "help and version take at most one argument")
        with self.assertRaises(TypeError):
            getdoc(11141)


class TestUsageFault(TestCase):
    """Usage faults are plain exceptions with a rich rendering."""

    def fault(self):
        return UnknownParameterError(
            "unknown parameter '-x' at second position",
            code=FaultCode.UNKNOWN_PARAMETER,
            title="unknown parameter",
            program="loro",
            hint="run 'loro help program' to see the expected usage",
        )

    def testMessageAndOptions(self):
        fault = self.fault()
        self.assertIsInstance(fault, UsageFault)
        self.assertEqual(str(fault), "unknown parameter '-x' at second position")
        self.assertEqual(fault.code, FaultCode.UNKNOWN_PARAMETER)
        with self.assertRaises(TypeError):
            fault.options["code"] = FaultCode.UNKNOWN_COMMAND

    def testRendering(self):
        output = render(self.fault())
        self.assertIn("[ loro — 11112 | Unknown Parameter ]", output)
        self.assertIn("unknown parameter '-x' at second position", output)
        self.assertIn("run 'loro help program' to see the expected usage", output)

    def testReplace(self):
        fault = copy.replace(self.fault(), colorful=True)
        self.assertIsInstance(fault, UnknownParameterError)
        self.assertTrue(fault.options["colorful"])
        self.assertEqual(fault.message, self.fault().message)


class TestTrigger(TestCase):
    """trigger() raises errors and emits warnings."""

    def testError(self):
        with self.assertRaises(GrammarError):
            trigger(GrammarError("bad grammar"))

    def testWarning(self):
        with self.assertWarns(GrammarWarning):
            trigger(GrammarWarning("odd grammar"))

    def testRejectsOtherObjects(self):
        with self.assertRaises(TypeError):
            trigger(ValueError("not a grammar fault"))


if __name__ == "__main__":
    unittest.main()
