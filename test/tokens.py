"""
Tokenizer behavioral tests (parse_options and Arguments).

Scope
- Validate long/short/inline/negated forms and the "--" terminator.
- Validate booleans, strings, number inference and repeated options.
- Validate alias propagation and defaults.
- Validate that positionals keep their original text.

Conventions
- Test method names follow CamelCase per project convention.
"""

from __future__ import annotations

import unittest
from unittest import TestCase

from cmdrunner import Arguments, OptionConfiguration, parse_options


def parse(argv, **declarations):
    return parse_options(argv, OptionConfiguration(**declarations))


class TestLongOptions(TestCase):

    def testInlineValue(self):
        args = parse(["--name=ada"])
        self.assertEqual(args["name"], "ada")

    def testInlineEmptyValue(self):
        args = parse(["--name="])
        self.assertEqual(args["name"], "")

    def testSpacedValue(self):
        args = parse(["--name", "ada", "rest"])
        self.assertEqual(args["name"], "ada")
        self.assertEqual(args.positionals, ["rest"])

    def testBareUndeclaredIsTrue(self):
        args = parse(["--force", "--name", "ada"])
        self.assertIs(args["force"], True)

    def testBareStringIsEmpty(self):
        args = parse(["--out"], string="out")
        self.assertEqual(args["out"], "")

    def testNegated(self):
        args = parse(["--no-color"])
        self.assertIs(args["color"], False)

    def testBooleanDoesNotSwallowPositional(self):
        args = parse(["--verbose", "file.txt"], boolean="verbose")
        self.assertIs(args["verbose"], True)
        self.assertEqual(args.positionals, ["file.txt"])

    def testBooleanTakesExplicitTruthValue(self):
        args = parse(["--verbose", "false", "x"], boolean="verbose")
        self.assertIs(args["verbose"], False)
        self.assertEqual(args.positionals, ["x"])

    def testBooleanInlineValue(self):
        self.assertIs(parse(["--verbose=false"], boolean="verbose")["verbose"], False)
        self.assertIs(parse(["--verbose=1"], boolean="verbose")["verbose"], True)

    def testValueStartingWithDashIsNotTaken(self):
        args = parse(["--name", "--other"])
        self.assertIs(args["name"], True)
        self.assertIs(args["other"], True)

    def testLoneDashIsAValue(self):
        args = parse(["--out", "-"])
        self.assertEqual(args["out"], "-")


class TestShortOptions(TestCase):

    def testCluster(self):
        args = parse(["-abc"])
        self.assertIs(args["a"], True)
        self.assertIs(args["b"], True)
        self.assertIs(args["c"], True)

    def testLastOfClusterTakesValue(self):
        args = parse(["-vo", "out.txt"], boolean="v")
        self.assertIs(args["v"], True)
        self.assertEqual(args["o"], "out.txt")

    def testAttachedNumber(self):
        args = parse(["-n5"])
        self.assertEqual(args["n"], 5)

    def testAttachedInline(self):
        args = parse(["-o=out.txt"])
        self.assertEqual(args["o"], "out.txt")

    def testLoneDashIsPositional(self):
        args = parse(["-"])
        self.assertEqual(args.positionals, ["-"])


class TestValues(TestCase):

    def testNumbersInferred(self):
        args = parse(["--count=3", "--ratio", "0.5", "--mask=0x1f", "--exp=1e3"])
        self.assertEqual(args["count"], 3)
        self.assertEqual(args["ratio"], 0.5)
        self.assertEqual(args["mask"], 31)
        self.assertEqual(args["exp"], 1000.0)

    def testStringsNotConverted(self):
        args = parse(["--zip", "02134"], string="zip")
        self.assertEqual(args["zip"], "02134")

    def testPositionalsKeepText(self):
        args = parse(["007", "1.50", "true"])
        self.assertEqual(args.positionals, ["007", "1.50", "true"])

    def testRepeatedValuesCollected(self):
        args = parse(["--tag", "a", "--tag=b", "--tag", "c"])
        self.assertEqual(args["tag"], ["a", "b", "c"])

    def testRepeatedBooleanKeepsLast(self):
        args = parse(["-v", "--no-v"], boolean="v")
        self.assertIs(args["v"], False)

    def testTerminator(self):
        args = parse(["--a", "1", "--", "--b", "-c"])
        self.assertEqual(args["a"], 1)
        self.assertNotIn("b", args)
        self.assertEqual(args.positionals, ["--b", "-c"])


class TestDeclarations(TestCase):

    def testBooleansDefaultFalse(self):
        args = parse([], boolean=["v", "q"], alias={"v": "verbose"})
        self.assertIs(args["v"], False)
        self.assertIs(args["verbose"], False)
        self.assertIs(args["q"], False)

    def testAliasesShareValue(self):
        args = parse(["--output", "x"], alias={"o": ["output", "out"]})
        self.assertEqual(args["o"], "x")
        self.assertEqual(args["out"], "x")
        self.assertEqual(args["output"], "x")

    def testAliasOfBooleanIsBoolean(self):
        args = parse(["--help", "topic"], boolean="h", alias={"h": "help"})
        self.assertIs(args["h"], True)
        self.assertEqual(args.positionals, ["topic"])

    def testDefaultsFillUnset(self):
        args = parse(["--level=2"], default={"level": 1, "mode": "fast"}, alias={"m": "mode"})
        self.assertEqual(args["level"], 2)
        self.assertEqual(args["mode"], "fast")
        self.assertEqual(args["m"], "fast")

    def testBooleanDefaultHonoured(self):
        args = parse([], boolean="color", default={"color": True})
        self.assertIs(args["color"], True)

    def testUndeclaredNotPresent(self):
        self.assertNotIn("verbose", parse(["x"]))


class TestArguments(TestCase):

    def testNextPositionalDepletes(self):
        args = Arguments(positionals=["a", "b"])
        self.assertEqual(args.next_positional(), "a")
        self.assertEqual(args.next_positional(), "b")
        self.assertIsNone(args.next_positional())
        self.assertEqual(args.positionals, [])

    def testMapping(self):
        args = Arguments({"a": 1})
        args["b"] = 2
        del args["a"]
        self.assertEqual(dict(args), {"b": 2})
        self.assertEqual(len(args), 1)
        self.assertEqual(Arguments({"b": 2}), args)
        self.assertNotEqual(Arguments({"b": 2}, positionals=["x"]), args)

    def testBadInputRejected(self):
        with self.assertRaises(TypeError):
            parse_options(["ok"], {"boolean": ["v"]})
        with self.assertRaises(TypeError):
            parse_options("--v", OptionConfiguration())
        with self.assertRaises(TypeError):
            parse_options(["--v", 3], OptionConfiguration())


if __name__ == "__main__":
    unittest.main()
