"""
Sceneopts faults (option errors) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing error.
  Codes are grouped by domain so logs and searches stay predictable.
- OptionError: base type that carries message + options and knows how to render
  itself in a friendly, lowercased, and actionable way.
- trigger(): central entry point to surface a fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

UX goals
- Position-first messages: every message names the ordinal position of the
  offending token (“at third position”).
- Every message names the offending option and/or literal value.
- Soft but technical language: short titles, one-sentence bodies, a single clear hint.

Integration
- The parser raises faults at the point of detection and never catches them.
- parse_options() is the only caller of trigger(): in non-shell mode the fault is
  raised again; in shell mode it is rendered via rich and the process exits with 1.
"""
import copy
import os.path
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the parser (stable identifiers).

    grouping
    - tokens (1110x): MALFORMED_INTRODUCER, INVALID_SHORT_CLUSTER_SYNTAX
    - names (1111x): UNKNOWN_OPTION, NON_BOOLEAN_IN_CLUSTER
    - values (1112x): MISSING_VALUE, TYPE_MISMATCH, INTEGER_OVERFLOW

    normalize() allows host remapping to custom labels while keeping code-stability.
    """
    # --- token shape errors (1110x) ---
    MALFORMED_INTRODUCER         = 11101
    INVALID_SHORT_CLUSTER_SYNTAX = 11102

    # --- name resolution errors (1111x) ---
    UNKNOWN_OPTION               = 11111
    NON_BOOLEAN_IN_CLUSTER       = 11112

    # --- value errors (1112x) ---
    MISSING_VALUE                = 11121
    TYPE_MISMATCH                = 11122
    INTEGER_OVERFLOW             = 11123

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class OptionError(Exception):
    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message)

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        def styler(style):
            return styles[style] if colorful else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            if isinstance(fragment, Text):
                return fragment
            return Text(str(fragment), style)

        prog = text(
            getattr(main, "__prog__", os.path.basename(sys.argv[0]) or "sceneopts"),
            styler("prog-name"),
        )

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.options["code"].normalize(), styler("code")),
            " | ",
            text(self.options["title"].title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options["hint"], styler("hint")))

        if fancy:
            return Panel(Group(message, hint), title=header, title_align="left", width=console.width - 4)

        return Group(header, message, hint)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MalformedIntroducerError(OptionError): ...
class InvalidShortClusterSyntaxError(OptionError): ...
class UnknownOptionError(OptionError): ...
class NonBooleanInClusterError(OptionError): ...
class MissingValueError(OptionError): ...
class TypeMismatchError(OptionError): ...
class IntegerOverflowError(OptionError): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see OptionError).
    - options are merged into the fault via copy.replace() before triggering.
    - in shell mode, rendering happens via rich console and the process exits
      with status 1; otherwise, the fault is raised.

    typical options
    - shell, fancy, colorful, plus any context the reporter may want to show.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "OptionError",
    "MalformedIntroducerError",
    "InvalidShortClusterSyntaxError",
    "UnknownOptionError",
    "NonBooleanInClusterError",
    "MissingValueError",
    "TypeMismatchError",
    "IntegerOverflowError",
    "FaultCode",
    "trigger",
    "getdoc",
)
