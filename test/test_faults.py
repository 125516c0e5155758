"""
Faults behavioral tests (codes, hierarchy, rendering).

Scope
- Validate the closed FaultCode set and the phase hierarchy.
- Validate the single-line render() output and host code relabelling.
- Validate rich rendering (plain and fancy) and the sealed hierarchy.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import sys
import unittest
from unittest import TestCase, mock

from rich.console import Console

from argspan import OptionRegistry, parse
from argspan.faults import (
    AmbiguousValueError,
    ArgParserError,
    ConfigurationError,
    DuplicateAliasError,
    DuplicateNameError,
    DuplicateOptionError,
    FaultCode,
    InvalidAliasError,
    InvalidFlagValueError,
    InvalidNameError,
    MissingValueError,
    ParseError,
    UnknownOptionError,
    render,
    report,
)


class TestFaultModel(TestCase):
    """Codes, hierarchy and plain rendering."""

    def testClosedCodeSet(self):
        self.assertEqual({code.name for code in FaultCode}, {
            "INVALID_NAME",
            "INVALID_ALIAS",
            "DUPLICATE_NAME",
            "DUPLICATE_ALIAS",
            "UNKNOWN_OPTION",
            "MISSING_VALUE",
            "AMBIGUOUS_VALUE",
            "INVALID_FLAG_VALUE",
            "DUPLICATE_OPTION",
        })

    def testPhases(self):
        for cls in (InvalidNameError, InvalidAliasError, DuplicateNameError, DuplicateAliasError):
            with self.subTest(cls=cls):
                self.assertTrue(issubclass(cls, ConfigurationError))
                self.assertFalse(issubclass(cls, ParseError))
        for cls in (
                UnknownOptionError,
                MissingValueError,
                AmbiguousValueError,
                InvalidFlagValueError,
                DuplicateOptionError,
        ):
            with self.subTest(cls=cls):
                self.assertTrue(issubclass(cls, ParseError))
                self.assertTrue(issubclass(cls, ArgParserError))
                self.assertTrue(issubclass(cls, Exception))

    def testEachClassHasItsOwnCode(self):
        codes = [
            cls.code for cls in (
                InvalidNameError,
                InvalidAliasError,
                DuplicateNameError,
                DuplicateAliasError,
                UnknownOptionError,
                MissingValueError,
                AmbiguousValueError,
                InvalidFlagValueError,
                DuplicateOptionError,
            )
        ]
        self.assertEqual(sorted(codes), sorted(FaultCode))

    def testStrIsTheMessage(self):
        fault = UnknownOptionError("unknown option '--x' at first position", hint="check it")
        self.assertEqual(str(fault), "unknown option '--x' at first position")
        self.assertEqual(fault.options["hint"], "check it")
        self.assertIs(fault.code, FaultCode.UNKNOWN_OPTION)
        self.assertEqual(fault.title, "unknown option")

    def testOptionsAreReadOnly(self):
        fault = MissingValueError("missing")
        with self.assertRaises(TypeError):
            fault.options["hint"] = "x"

    def testMessageMustBeString(self):
        with self.assertRaises(TypeError):
            MissingValueError(42)

    def testRender(self):
        self.assertEqual(
            render(UnknownOptionError("unknown option '--x' at first position")),
            "error 21201: unknown option '--x' at first position",
        )

    def testRenderIsSingleLine(self):
        registry = OptionRegistry()
        registry.required_value("user", "u")
        with self.assertRaises(ParseError) as context:
            parse(registry, ["--user", "--nope"])
        self.assertNotIn("\n", render(context.exception))

    def testRenderHonoursHostCodes(self):
        main = sys.modules["__main__"]
        with mock.patch.object(main, "__codes__", {FaultCode.MISSING_VALUE: "E-MISSING"}, create=True):
            self.assertEqual(render(MissingValueError("value needed")), "error E-MISSING: value needed")
            self.assertEqual(FaultCode.MISSING_VALUE.normalize(), "E-MISSING")
            self.assertEqual(FaultCode.UNKNOWN_OPTION.normalize(), "21201")

    def testRenderRejectsForeignObjects(self):
        with self.assertRaises(TypeError):
            render(ValueError("nope"))

    def testReplaceKeepsMessageAndMergesOptions(self):
        fault = DuplicateOptionError("again", name="user")
        replaced = fault.__replace__(colorful=False)
        self.assertIsInstance(replaced, DuplicateOptionError)
        self.assertEqual(replaced.message, "again")
        self.assertEqual(replaced.options["name"], "user")
        self.assertFalse(replaced.options["colorful"])
        self.assertNotIn("colorful", fault.options)

    def testHierarchyIsSealed(self):
        with self.assertRaises(TypeError):
            type("CustomError", (ParseError,), {})
        with self.assertRaises(TypeError):
            type("CustomError", (UnknownOptionError,), {})


class TestFaultRendering(TestCase):
    """Rich integration."""

    def capture(self, fault):
        console = Console(color_system=None, force_terminal=False, width=200)
        with console.capture() as capture:
            console.print(fault)
        return capture.get()

    def testPlainBlock(self):
        output = self.capture(InvalidFlagValueError(
            "flag '--x' at first position only accepts 'true' or 'false', not 'y'",
            hint="write --x=true",
            colorful=False,
        ))
        self.assertIn("21204", output)
        self.assertIn("Invalid Flag Value", output)
        self.assertIn("only accepts 'true' or 'false'", output)
        self.assertIn("→ write --x=true", output)

    def testFancyPanel(self):
        output = self.capture(InvalidNameError("option name 'A' is not valid", fancy=True))
        self.assertIn("option name 'A' is not valid", output)
        self.assertIn("Invalid Option Name", output)

    def testWithoutHint(self):
        output = self.capture(MissingValueError("option '--user' at first position requires a value"))
        self.assertIn("requires a value", output)
        self.assertNotIn("→", output)

    def testHostProgramName(self):
        main = sys.modules["__main__"]
        with mock.patch.object(main, "__prog__", "mytool", create=True):
            output = self.capture(MissingValueError("value needed"))
        self.assertIn("mytool", output)

    def testReportPrintsToConsole(self):
        with mock.patch("argspan.faults.console") as console:
            report(MissingValueError("value needed"), colorful=False)
        printed, = console.print.call_args.args
        self.assertIsInstance(printed, MissingValueError)
        self.assertFalse(printed.options["colorful"])


if __name__ == "__main__":
    unittest.main()
