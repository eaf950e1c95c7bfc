"""
Utilities behavioral tests.

Scope
- Unset sentinel: singleton identity, falsiness, representation, sealing.
- coalesce(): only Unset is replaced.
- rename()/mirror(): naming and read-only accessors.
- ordinal(): word forms, numeric suffixes, teens.

Conventions
- Test method names follow CamelCase per project convention.
"""
import unittest
from unittest import TestCase

from sceneopts.utils import Unset, UnsetType, coalesce, rename, mirror, ordinal


class TestUnset(TestCase):

    def testSingleton(self):
        self.assertIs(UnsetType(), Unset)

    def testFalsy(self):
        self.assertFalse(Unset)
        self.assertIsNot(Unset, None)

    def testRepr(self):
        self.assertEqual(repr(Unset), "Unset")

    def testSealed(self):
        with self.assertRaises(TypeError):
            class Sub(UnsetType):  # NOQA: F-841
                pass


class TestCoalesce(TestCase):

    def testUnsetReplaced(self):
        self.assertEqual(coalesce(Unset, "fallback"), "fallback")

    def testFalseyValuesPreserved(self):
        self.assertEqual(coalesce("", "fallback"), "")
        self.assertEqual(coalesce(0, 5), 0)
        self.assertIsNone(coalesce(None, "fallback"))


class TestRenameAndMirror(TestCase):

    def testRenameFunctionForm(self):
        def f():
            pass

        rename(f, "do_work")
        self.assertEqual(f.__name__, "do_work")
        self.assertEqual(f.__qualname__, "do_work")

    def testRenameDecoratorForm(self):
        @rename("do_work")
        def f():
            pass

        self.assertEqual(f.__name__, "do_work")

    def testRenameArity(self):
        with self.assertRaises(TypeError):
            rename()

    def testMirrorIsReadOnly(self):
        class Box:
            value = mirror("value")

            def __init__(self):
                self._value = 3

        box = Box()
        self.assertEqual(box.value, 3)
        with self.assertRaises(AttributeError):
            box.value = 4

    def testMirrorRejectsNonString(self):
        with self.assertRaises(TypeError):
            mirror(1)


class TestOrdinal(TestCase):

    def testWords(self):
        self.assertEqual(ordinal(1), "first")
        self.assertEqual(ordinal(3), "third")
        self.assertEqual(ordinal(10), "tenth")

    def testSuffixes(self):
        self.assertEqual(ordinal(21), "21st")
        self.assertEqual(ordinal(22), "22nd")
        self.assertEqual(ordinal(23), "23rd")
        self.assertEqual(ordinal(24), "24th")

    def testTeens(self):
        self.assertEqual(ordinal(11), "11th")
        self.assertEqual(ordinal(112), "112th")

    def testRejectsZero(self):
        with self.assertRaises(ValueError):
            ordinal(0)


if __name__ == "__main__":
    unittest.main()
