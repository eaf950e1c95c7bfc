"""
Sceneopts option registry and configuration record.

Overview
- Kind: the closed set of destination types (text, char, bool, non-negative integer).
- Descriptor: one static, immutable entry of the option table (name → kind → slot).
- DESCRIPTORS / REGISTRY: the fixed option table, and its exact-match name index.
- DEFAULTS: the documented initial value of every slot.
- lookup(name): exact-match resolution (no prefixes, no fuzzy matching).
- Configuration: the parsed record, read-only once built.

Option table
    name        alias  kind             slot         default
    nthreads    n      non-negative int nthreads     0
    spp                non-negative int spp          0
    seed        s      non-negative int seed         0
    imagefile          text             image_file   "image.ppm"
    input              text             input_file   "scene.txt"
    quiet       q      bool             quiet        False
    logutil     l      bool             log_util     False
    partial     p      bool             partial      False

Adding an option means adding one Descriptor per spelling, one DEFAULTS entry,
and one slot on Configuration.
"""
import functools
import operator
from enum import Enum
from types import MappingProxyType

from .utils import *

# Destinations are 32-bit signed integers.
INT_MAX = 2 ** 31 - 1


class Kind(Enum):
    """
    destination type of an option; every kind has exactly one coercer.
    """
    TEXT = "text"
    CHAR = "char"
    BOOL = "boolean"
    NONNEGATIVE_INT = "integer"

    def __repr__(self):
        return f"{type(self).__name__}.{self.name}"


class Descriptor:
    """
    Static description of one option spelling.

    Fields (read-only)
    - name: the spelling matched after dash-stripping ("nthreads", "n", ...).
    - kind: Kind of the destination slot.
    - slot: name of the Configuration field written to.
    - maximum: largest accepted value for NONNEGATIVE_INT, Unset otherwise.
    """
    __slots__ = ("_name", "_kind", "_slot", "_maximum")

    name = mirror("name")
    kind = mirror("kind")
    slot = mirror("slot")
    maximum = mirror("maximum")

    def __init__(self, name, kind, slot, /, *, maximum=Unset):
        if not isinstance(name, str):
            raise TypeError("descriptor name must be a string")
        if not name or name.startswith("-") or "=" in name:
            raise ValueError(f"invalid descriptor name {name!r}")
        if not isinstance(kind, Kind):
            raise TypeError("descriptor kind must be a Kind")
        if not isinstance(slot, str) or not slot.isidentifier():
            raise ValueError(f"invalid descriptor slot {slot!r}")
        if kind is Kind.NONNEGATIVE_INT:
            maximum = coalesce(maximum, INT_MAX)
            if not isinstance(maximum, int) or maximum < 0:
                raise ValueError("descriptor maximum must be a non-negative integer")
        elif maximum is not Unset:
            raise TypeError("maximum is only allowed for integer descriptors")
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_kind", kind)
        object.__setattr__(self, "_slot", slot)
        object.__setattr__(self, "_maximum", maximum)

    @property
    def spelling(self):
        """
        command-line spelling: "-n" for one-character names, "--nthreads" otherwise.
        """
        return ("-" if len(self._name) == 1 else "--") + self._name

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__!r} object is immutable")

    def __eq__(self, other):
        if not isinstance(other, Descriptor):
            return NotImplemented
        return tuple(self.__rich_repr__()) == tuple(other.__rich_repr__())

    def __hash__(self):
        return hash(tuple(self.__rich_repr__()))

    def __rich_repr__(self):
        yield "name", self._name
        yield "kind", self._kind
        yield "slot", self._slot
        if self._maximum is not Unset:
            yield "maximum", self._maximum

    def __repr__(self):
        return f"descriptor({
            ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
        })"


DESCRIPTORS = (
    Descriptor("nthreads", Kind.NONNEGATIVE_INT, "nthreads"),
    Descriptor("n", Kind.NONNEGATIVE_INT, "nthreads"),
    Descriptor("spp", Kind.NONNEGATIVE_INT, "spp"),
    Descriptor("seed", Kind.NONNEGATIVE_INT, "seed"),
    Descriptor("s", Kind.NONNEGATIVE_INT, "seed"),
    Descriptor("imagefile", Kind.TEXT, "image_file"),
    Descriptor("input", Kind.TEXT, "input_file"),
    Descriptor("quiet", Kind.BOOL, "quiet"),
    Descriptor("q", Kind.BOOL, "quiet"),
    Descriptor("logutil", Kind.BOOL, "log_util"),
    Descriptor("l", Kind.BOOL, "log_util"),
    Descriptor("partial", Kind.BOOL, "partial"),
    Descriptor("p", Kind.BOOL, "partial"),
)

DEFAULTS = MappingProxyType({
    "nthreads": 0,
    "spp": 0,
    "seed": 0,
    "image_file": "image.ppm",
    "input_file": "scene.txt",
    "quiet": False,
    "log_util": False,
    "partial": False,
})


def build_registry(descriptors, /):
    """
    Index descriptors by name; a name may appear only once.
    """
    registry = {}
    for descriptor in descriptors:
        if descriptor.name in registry:
            raise ValueError(f"option name {descriptor.name!r} is already in use")
        registry[descriptor.name] = descriptor
    return MappingProxyType(registry)


REGISTRY = build_registry(DESCRIPTORS)


def lookup(name, /):
    """
    Exact-match lookup; returns the Descriptor for name, or Unset on a miss.
    """
    return REGISTRY.get(name, Unset)


class Configuration:
    """
    Parsed program options; one read-only attribute per slot.

    Built from DEFAULTS overlaid with the given keyword values. Once built
    nothing can be assigned; use copy.replace() to derive a modified record.
    """
    __slots__ = tuple("_" + slot for slot in DEFAULTS)

    nthreads = mirror("nthreads")
    spp = mirror("spp")
    seed = mirror("seed")
    image_file = mirror("image_file")
    input_file = mirror("input_file")
    quiet = mirror("quiet")
    log_util = mirror("log_util")
    partial = mirror("partial")

    def __init__(self, **fields):
        if unknown := fields.keys() - DEFAULTS.keys():
            raise TypeError(f"Configuration() got unexpected fields {", ".join(map(repr, sorted(unknown)))}")
        for slot, default in DEFAULTS.items():
            object.__setattr__(self, "_" + slot, fields.get(slot, default))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__!r} object is read-only")

    def __replace__(self, **overrides):
        return type(self)(**dict(self.__rich_repr__()) | overrides)

    def __eq__(self, other):
        if not isinstance(other, Configuration):
            return NotImplemented
        return tuple(self.__rich_repr__()) == tuple(other.__rich_repr__())

    def __hash__(self):
        return hash(tuple(self.__rich_repr__()))

    def __rich_repr__(self):
        for slot in DEFAULTS:
            yield slot, getattr(self, "_" + slot)

    def __repr__(self):
        return f"Configuration({
            ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
        })"

    def __str__(self):
        def show(value):
            if isinstance(value, bool):
                return str(value).lower()
            return str(value)

        lines = ("    %s: %s" % (slot, show(value)) for slot, value in self.__rich_repr__())
        return "{\n%s\n}\n" % ",\n".join(lines)


__all__ = (
    "INT_MAX",
    "Kind",
    "Descriptor",
    "DESCRIPTORS",
    "DEFAULTS",
    "REGISTRY",
    "build_registry",
    "lookup",
    "Configuration",
)
