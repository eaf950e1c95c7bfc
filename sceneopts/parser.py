"""
Sceneopts parser: classify command-line tokens and resolve them into a Configuration.

What this module provides
- classify(token): the dash classifier. Decides which grammar form a token has:
  • Form.CLUSTER: '-abc', a run of single-character boolean options.
  • Form.NAMED: '--name', '--name=value', '-n', '-n=value'.
  • anything without a leading dash is rejected (MalformedIntroducerError), and so is a
    single-dash multi-character token carrying '=' (InvalidShortClusterSyntaxError).
- parse(tokens): the resolution driver. Walks the tokens once, resolves each name
  against the option registry, coerces values, and returns a Configuration.
  Faults are raised where they are detected and never caught here.
- parse_options(tokens, *, shell, fancy, colorful): run-level entry point; the only
  place a fault turns into a rendered diagnostic and process exit.
- main(): console-script entry; prints the parsed record.

Grammar
    --name=V   -x=V     inline value (short form for one-character names only)
    --name V   -x V     value from the following token
    --name     -x       boolean options only, implicit true
    -abc                cluster of one-character boolean options, each set true

Cursor
- Every top-level iteration starts on a token that must introduce an option.
- A named option advances the cursor by 1 + taken, where taken (0 or 1) is reported
  by the coercer; a cluster always advances by 1.

Quick example
    >>> from sceneopts import parse
    >>> parse(["--quiet", "--nthreads=4"]).nthreads
    4
"""
import difflib
import sys
from enum import Enum

from rich.console import Console

from .coercers import *
from .faults import *
from .options import *
from .utils import *

stdout = Console(highlight=False, emoji=False)


class Form(Enum):
    """
    grammar forms a leading-dash token may take.
    """
    CLUSTER = "cluster"
    NAMED = "named"


class ParsedToken:
    """
    Transient view over one token: dash count, name, inline value and form.

    value is Unset when the token carries no '='; for clusters, name is the whole
    run of option characters.
    """
    __slots__ = ("_token", "_dashes", "_name", "_value", "_form")

    token = mirror("token")
    dashes = mirror("dashes")
    name = mirror("name")
    value = mirror("value")
    form = mirror("form")

    def __init__(self, token, dashes, name, value, form):
        object.__setattr__(self, "_token", token)
        object.__setattr__(self, "_dashes", dashes)
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_value", value)
        object.__setattr__(self, "_form", form)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__!r} object is immutable")

    def __rich_repr__(self):
        yield "token", self._token
        yield "dashes", self._dashes
        yield "name", self._name
        yield "value", self._value
        yield "form", self._form

    def __repr__(self):
        return "ParsedToken(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    @property
    def inline(self):
        return self._value is not Unset


def classify(token, /, *, index=1):
    r"""
    split a raw token into (dashes, name, value) and decide its grammar form.

    rules (after stripping every leading dash into `rest`)
    - no leading dash: MalformedIntroducerError.
    - one dash, len(rest) > 1, and no '=' at index 0 or 1 of rest:
      • '=' further in (e.g. '-ab=1'): InvalidShortClusterSyntaxError.
      • no '=' at all (e.g. '-ql'): Form.CLUSTER.
    - otherwise Form.NAMED, with name/value split on the first '='.

    '-n=5' is named ('=' at index 1); '-ab=1' is rejected whether or not 'a'
    and 'b' are registered.
    """
    if not isinstance(token, str):
        raise TypeError("classify() argument must be a string")

    rest = token.lstrip("-")
    dashes = len(token) - len(rest)
    equals = rest.find("=")

    if dashes == 0:
        raise MalformedIntroducerError(
            "expected -[option] or --[option] at %s position, got %r" % (ordinal(index), token),
            title="malformed option",
            code=FaultCode.MALFORMED_INTRODUCER,
            hint="every argument must start with '-' or '--' (for example: --input %s)" % (token or "<value>"),
            option=Unset,
            literal=token,
            token=token,
            index=index,
            docs=getdoc(FaultCode.MALFORMED_INTRODUCER),
        )

    if dashes == 1 and len(rest) > 1 and (equals == -1 or equals > 1):
        if equals != -1:
            raise InvalidShortClusterSyntaxError(
                "unrecognized option %r in %r at %s position" % (rest[:equals], token, ordinal(index)),
                title="invalid short option",
                code=FaultCode.INVALID_SHORT_CLUSTER_SYNTAX,
                hint=(
                    "single dashes are used for either one single-character option (for example: -n 5) "
                    "or for multiple single-character boolean options; did you mean --%s?"
                ) % rest,
                option=rest[:equals],
                literal=rest[equals + 1:],
                token=token,
                index=index,
                docs=getdoc(FaultCode.INVALID_SHORT_CLUSTER_SYNTAX),
            )
        return ParsedToken(token, dashes, rest, Unset, Form.CLUSTER)

    if equals != -1:
        return ParsedToken(token, dashes, rest[:equals], rest[equals + 1:], Form.NAMED)
    return ParsedToken(token, dashes, rest, Unset, Form.NAMED)


def _unknown(name, token, index, /):
    spellings = {descriptor.spelling: descriptor for descriptor in DESCRIPTORS}
    suggestions = difflib.get_close_matches(("-" if len(name) == 1 else "--") + name, spellings.keys(), 5)
    try:
        hint = "did you mean %r?" % suggestions[0]
    except IndexError:
        hint = "known options are %s" % ", ".join(spellings)
    return UnknownOptionError(
        "unrecognized option %r at %s position" % (name, ordinal(index)),
        title="unknown option",
        code=FaultCode.UNKNOWN_OPTION,
        hint=hint,
        option=name,
        literal=token,
        token=token,
        index=index,
        suggestions=suggestions,
        docs=getdoc(FaultCode.UNKNOWN_OPTION),
    )


def _resolve_cluster(parsed, namespace, index, /):
    """
    set every character of a cluster to True; each must name a boolean option.
    """
    for character in parsed.name:
        descriptor = lookup(character)
        if descriptor is Unset:
            raise UnknownOptionError(
                "unrecognized option %r in %r at %s position" % (character, parsed.token, ordinal(index)),
                title="unknown option",
                code=FaultCode.UNKNOWN_OPTION,
                hint="every character after a single dash must be a one-character boolean option",
                option=character,
                literal=parsed.token,
                token=parsed.token,
                index=index,
                suggestions=[],
                docs=getdoc(FaultCode.UNKNOWN_OPTION),
            )
        if descriptor.kind is not Kind.BOOL:
            raise NonBooleanInClusterError(
                "non-boolean option %r in %r at %s position" % (character, parsed.token, ordinal(index)),
                title="non-boolean option in cluster",
                code=FaultCode.NON_BOOLEAN_IN_CLUSTER,
                hint=(
                    "single dashes are used for either one single-character option (for example: -n 5) "
                    "or for multiple single-character boolean options; try separating %s out"
                ) % descriptor.spelling,
                option=character,
                literal=parsed.token,
                token=parsed.token,
                index=index,
                docs=getdoc(FaultCode.NON_BOOLEAN_IN_CLUSTER),
            )
        namespace[descriptor.slot], _ = coerce(descriptor, "", Origin.CLUSTER, token=parsed.token, index=index)


def _resolve_named(parsed, namespace, tokens, cursor, /):
    """
    resolve one named option; returns how many tokens it consumed (1 or 2).
    """
    index = cursor + 1
    descriptor = lookup(parsed.name)
    if descriptor is Unset:
        raise _unknown(parsed.name, parsed.token, index)

    if parsed.inline:
        value, origin = parsed.value, Origin.INLINE
    elif cursor + 1 < len(tokens):
        value, origin = tokens[cursor + 1], Origin.LOOKAHEAD
    else:
        value, origin = "", Origin.ABSENT

    namespace[descriptor.slot], taken = coerce(descriptor, value, origin, token=parsed.token, index=index)
    return 1 + taken


def parse(tokens, /):
    """
    resolve command-line tokens (program name excluded) into a Configuration.

    states
    - expect an option token → classify → resolve a cluster or a named option
      → coerce → advance → expect an option token again.
    - tokens exhausted while expecting an option: done.

    slots not mentioned keep their DEFAULTS; later occurrences overwrite
    earlier ones. The first fault found is raised as-is.
    """
    if isinstance(tokens, str):
        raise TypeError("parse() argument must be a sequence of tokens, not a string")
    tokens = tuple(tokens)
    if not all(isinstance(token, str) for token in tokens):
        raise TypeError("parse() tokens must be strings")

    namespace = dict(DEFAULTS)
    cursor = 0
    while cursor < len(tokens):
        parsed = classify(tokens[cursor], index=cursor + 1)
        if parsed.form is Form.CLUSTER:
            _resolve_cluster(parsed, namespace, cursor + 1)
            cursor += 1
        else:
            cursor += _resolve_named(parsed, namespace, tokens, cursor)

    return Configuration(**namespace)


def parse_options(tokens=Unset, /, *, shell=True, fancy=False, colorful=True):
    """
    parse tokens (default: sys.argv[1:]) and surface the first fault.

    modes
    - shell=True: the fault is rendered on stderr via rich and the process exits with 1.
    - shell=False: the fault is raised to the caller unchanged.
    """
    tokens = coalesce(tokens, sys.argv[1:])
    try:
        return parse(tokens)
    except OptionError as fault:
        trigger(fault, shell=shell, fancy=fancy, colorful=colorful)
        raise


def main():
    configuration = parse_options()
    stdout.print("Parsed options: %s" % configuration, markup=False, soft_wrap=True, end="")
    return 0


__all__ = (
    "Form",
    "ParsedToken",
    "classify",
    "parse",
    "parse_options",
    "main",
)
