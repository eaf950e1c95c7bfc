"""
Option registry and configuration record tests.

Scope
- Descriptor: validation, immutability, spelling.
- REGISTRY: every documented name and alias, exact matching only, unique names.
- Configuration: defaults, read-only fields, replace, rendering.

Conventions
- Test method names follow CamelCase per project convention.
"""
import copy
import unittest
from unittest import TestCase

from sceneopts.options import (
    INT_MAX,
    Kind,
    Descriptor,
    DESCRIPTORS,
    DEFAULTS,
    REGISTRY,
    build_registry,
    lookup,
    Configuration,
)
from sceneopts.utils import Unset


class TestDescriptor(TestCase):

    def testIntegerMaximumDefaultsTo32Bit(self):
        d = Descriptor("spp", Kind.NONNEGATIVE_INT, "spp")
        self.assertEqual(d.maximum, INT_MAX)
        self.assertEqual(INT_MAX, 2147483647)

    def testMaximumOnlyForIntegers(self):
        with self.assertRaises(TypeError):
            Descriptor("quiet", Kind.BOOL, "quiet", maximum=1)

    def testNameValidation(self):
        with self.assertRaises(ValueError):
            Descriptor("", Kind.BOOL, "quiet")
        with self.assertRaises(ValueError):
            Descriptor("--quiet", Kind.BOOL, "quiet")
        with self.assertRaises(ValueError):
            Descriptor("a=b", Kind.BOOL, "quiet")

    def testKindValidation(self):
        with self.assertRaises(TypeError):
            Descriptor("quiet", bool, "quiet")

    def testImmutable(self):
        d = Descriptor("quiet", Kind.BOOL, "quiet")
        with self.assertRaises(AttributeError):
            d.kind = Kind.TEXT

    def testSpelling(self):
        self.assertEqual(Descriptor("q", Kind.BOOL, "quiet").spelling, "-q")
        self.assertEqual(Descriptor("quiet", Kind.BOOL, "quiet").spelling, "--quiet")

    def testRepr(self):
        self.assertEqual(
            repr(Descriptor("q", Kind.BOOL, "quiet")),
            "descriptor(name='q', kind=Kind.BOOL, slot='quiet')",
        )


class TestRegistry(TestCase):

    def testEveryDocumentedName(self):
        expected = {
            "nthreads": (Kind.NONNEGATIVE_INT, "nthreads"),
            "n": (Kind.NONNEGATIVE_INT, "nthreads"),
            "spp": (Kind.NONNEGATIVE_INT, "spp"),
            "seed": (Kind.NONNEGATIVE_INT, "seed"),
            "s": (Kind.NONNEGATIVE_INT, "seed"),
            "imagefile": (Kind.TEXT, "image_file"),
            "input": (Kind.TEXT, "input_file"),
            "quiet": (Kind.BOOL, "quiet"),
            "q": (Kind.BOOL, "quiet"),
            "logutil": (Kind.BOOL, "log_util"),
            "l": (Kind.BOOL, "log_util"),
            "partial": (Kind.BOOL, "partial"),
            "p": (Kind.BOOL, "partial"),
        }
        self.assertEqual(
            {name: (d.kind, d.slot) for name, d in REGISTRY.items()},
            expected,
        )

    def testEverySlotHasDefault(self):
        self.assertEqual({d.slot for d in DESCRIPTORS}, set(DEFAULTS))

    def testExactMatchOnly(self):
        self.assertIs(lookup("nthread"), Unset)
        self.assertIs(lookup("NTHREADS"), Unset)
        self.assertIs(lookup("sp"), Unset)
        self.assertEqual(lookup("spp").slot, "spp")

    def testDuplicateNamesRejected(self):
        with self.assertRaises(ValueError):
            build_registry([
                Descriptor("q", Kind.BOOL, "quiet"),
                Descriptor("q", Kind.BOOL, "partial"),
            ])

    def testRegistryReadOnly(self):
        with self.assertRaises(TypeError):
            REGISTRY["x"] = Descriptor("x", Kind.BOOL, "quiet")


class TestConfiguration(TestCase):

    def testDefaults(self):
        c = Configuration()
        self.assertEqual(c.nthreads, 0)
        self.assertEqual(c.spp, 0)
        self.assertEqual(c.seed, 0)
        self.assertEqual(c.image_file, "image.ppm")
        self.assertEqual(c.input_file, "scene.txt")
        self.assertIs(c.quiet, False)
        self.assertIs(c.log_util, False)
        self.assertIs(c.partial, False)

    def testUnknownFieldRejected(self):
        with self.assertRaises(TypeError):
            Configuration(threads=4)

    def testReadOnly(self):
        c = Configuration()
        with self.assertRaises(AttributeError):
            c.spp = 3

    def testReplace(self):
        c = copy.replace(Configuration(), spp=16)
        self.assertEqual(c.spp, 16)
        self.assertEqual(c, Configuration(spp=16))

    def testEquality(self):
        self.assertEqual(Configuration(quiet=True), Configuration(quiet=True))
        self.assertNotEqual(Configuration(quiet=True), Configuration())

    def testStrRendering(self):
        self.assertEqual(
            str(Configuration(nthreads=4, quiet=True)),
            "{\n"
            "    nthreads: 4,\n"
            "    spp: 0,\n"
            "    seed: 0,\n"
            "    image_file: image.ppm,\n"
            "    input_file: scene.txt,\n"
            "    quiet: true,\n"
            "    log_util: false,\n"
            "    partial: false\n"
            "}\n",
        )

    def testRichRepr(self):
        self.assertEqual(dict(Configuration().__rich_repr__()), dict(DEFAULTS))


if __name__ == "__main__":
    unittest.main()
