"""
Tests for the shared utilities.

This module verifies:
- Unset sentinel guarantees (singleton, falsy, repr, copy/pickle identity, finality).
- coalesce() and rename() behavior.
- wrap() line wrapping with preserved indentation.
- next_positional() depletion.
- confirm() answers, with the terminal prompt patched out.
"""
import copy
import pickle
import unittest
from unittest import TestCase
from unittest.mock import patch

from cmdrunner import Arguments
from cmdrunner.utils import Unset, UnsetType, coalesce, confirm, next_positional, rename, wrap


class TestUnset(TestCase):
    """
    Test suite for the `Unset` singleton.
    """

    def testSingleton(self) -> None:
        """
        The constructor returns the same object reference on every call.
        """
        self.assertIs(Unset, UnsetType())

    def testFalsy(self) -> None:
        self.assertFalse(bool(Unset))
        self.assertNotEqual(Unset, None)

    def testRepr(self) -> None:
        self.assertEqual(repr(Unset), "Unset")

    def testCopyPickleIdentity(self) -> None:
        """
        copy(), deepcopy() and pickle round-trips preserve the identity of the singleton.
        """
        self.assertIs(copy.copy(Unset), Unset)
        self.assertIs(copy.deepcopy(Unset), Unset)
        self.assertIs(pickle.loads(pickle.dumps(Unset)), Unset)

    def testFinalClass(self) -> None:
        with self.assertRaises(TypeError):
            type("UnsetType", (UnsetType,), {})

    def testCoalesce(self) -> None:
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")
        self.assertIsNone(coalesce(None, "fallback"))
        self.assertEqual(coalesce(0, 1), 0)


class TestRename(TestCase):

    def testFunctionForm(self):
        def f():
            pass

        self.assertIs(rename(f, "g"), f)
        self.assertEqual((f.__name__, f.__qualname__), ("g", "g"))

    def testDecoratorForm(self):
        @rename("complete")
        def f():
            pass

        self.assertEqual(f.__name__, "complete")

    def testBadArguments(self):
        with self.assertRaises(TypeError):
            rename()
        with self.assertRaises(TypeError):
            rename(1, "x")
        with self.assertRaises(TypeError):
            rename(len, 1)


class TestWrap(TestCase):

    def testShortTextUnchanged(self):
        self.assertEqual(wrap("HELLO\n  Says hello\n", 80), "HELLO\n  Says hello\n")

    def testIndentationPreserved(self):
        self.assertEqual(
            wrap("  alpha beta gamma delta", 14),
            "  alpha beta\n  gamma delta"
        )

    def testBlankLinesKept(self):
        self.assertEqual(wrap("a\n\n   \nb", 10), "a\n\n\nb")

    def testLongWordsNotSplit(self):
        self.assertEqual(wrap("supercalifragilistic word", 10), "supercalifragilistic\nword")

    def testBadWidth(self):
        with self.assertRaises(ValueError):
            wrap("text", 0)
        with self.assertRaises(TypeError):
            wrap("text", "80")
        with self.assertRaises(TypeError):
            wrap(None, 80)


class TestNextPositional(TestCase):

    def testDepletes(self):
        args = Arguments(positionals=["one", "two"])
        self.assertEqual(next_positional(args), "one")
        self.assertEqual(next_positional(args), "two")
        self.assertIsNone(next_positional(args))


class TestConfirm(TestCase):

    def testYesAnswers(self):
        for answer in ("y", "Y", "yes", "YES", " Yes "):
            with patch("cmdrunner.utils.Prompt.ask", return_value=answer) as ask:
                self.assertTrue(confirm("Proceed?"))
            self.assertEqual(ask.call_args.args[0], "Proceed? (y/n)")

    def testOtherAnswers(self):
        for answer in ("n", "", "no", "yep", "ok"):
            with patch("cmdrunner.utils.Prompt.ask", return_value=answer):
                self.assertFalse(confirm("Proceed?"))

    def testDefaultsToNo(self):
        with patch("cmdrunner.utils.Prompt.ask", return_value="n") as ask:
            confirm("Proceed?")
        self.assertEqual(ask.call_args.kwargs["default"], "n")


if __name__ == '__main__':
    unittest.main()
