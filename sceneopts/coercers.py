"""
Sceneopts value coercion: textual values into typed slot values.

Every coercer has the same shape

    coercer(descriptor, value, origin, /, *, token, index) -> (converted, taken)

where `taken` is the number of lookahead tokens consumed by the option (0 or 1).
The driver advances its cursor by 1 + taken; this is the only place where a
peeked token can be handed back (a boolean option followed by another option).

Origins
- INLINE: value came after '=' in the same token.
- LOOKAHEAD: value is the following token.
- ABSENT: there is no following token; value is "".
- CLUSTER: the option is one character of a boolean cluster; value is "".
"""
from enum import Enum

from .faults import *
from .options import Kind
from .utils import *


class Origin(Enum):
    INLINE = "inline"
    LOOKAHEAD = "lookahead"
    ABSENT = "absent"
    CLUSTER = "cluster"


def _taken(origin, value):
    return int(origin is Origin.LOOKAHEAD and bool(value))


def coerce_text(descriptor, value, origin, /, *, token, index):
    return value, _taken(origin, value)


def coerce_char(descriptor, value, origin, /, *, token, index):
    if len(value) != 1:
        raise TypeMismatchError(
            "unexpected argument %r for char option %r at %s position" % (value, descriptor.name, ordinal(index)),
            title="type mismatch",
            code=FaultCode.TYPE_MISMATCH,
            hint="pass exactly one character (for example: %s=x)" % descriptor.spelling,
            option=descriptor.name,
            literal=value,
            token=token,
            index=index,
            docs=getdoc(FaultCode.TYPE_MISMATCH),
        )
    return value, _taken(origin, value)


def coerce_bool(descriptor, value, origin, /, *, token, index):
    """
    "", "1", "true" → True; "0", "false" → False.

    A following token that starts with '-' is the next option, not a value:
    the option becomes True and the token is released (taken == 0).
    """
    if value in ("", "1", "true"):
        return True, _taken(origin, value)
    if value in ("0", "false"):
        return False, _taken(origin, value)
    if value.startswith("-") and origin is Origin.LOOKAHEAD:
        return True, 0
    raise TypeMismatchError(
        "unexpected argument %r for boolean option %r at %s position" % (value, descriptor.name, ordinal(index)),
        title="type mismatch",
        code=FaultCode.TYPE_MISMATCH,
        hint="boolean options take no value, or one of 1, true, 0, false (for example: %s=false)" % descriptor.spelling,
        option=descriptor.name,
        literal=value,
        token=token,
        index=index,
        docs=getdoc(FaultCode.TYPE_MISMATCH),
    )


def coerce_integer(descriptor, value, origin, /, *, token, index):
    """
    Decimal digits only; folds digit by digit and refuses to exceed descriptor.maximum.
    """
    result = 0
    for character in value:
        # str.isdigit() also accepts non-ASCII digits such as '²'
        if not "0" <= character <= "9":
            raise TypeMismatchError(
                "expected integer argument for integer option %r at %s position, got %r" % (
                    descriptor.name, ordinal(index), value
                ),
                title="type mismatch",
                code=FaultCode.TYPE_MISMATCH,
                hint="pass a non-negative decimal number (for example: %s=4)" % descriptor.spelling,
                option=descriptor.name,
                literal=value,
                token=token,
                index=index,
                docs=getdoc(FaultCode.TYPE_MISMATCH),
            )

        digit = ord(character) - ord("0")
        if (descriptor.maximum - digit) // 10 < result:
            raise IntegerOverflowError(
                "argument %r overflows integer option %r at %s position" % (value, descriptor.name, ordinal(index)),
                title="integer overflow",
                code=FaultCode.INTEGER_OVERFLOW,
                hint="pass a number no greater than %d" % descriptor.maximum,
                option=descriptor.name,
                literal=value,
                token=token,
                index=index,
                docs=getdoc(FaultCode.INTEGER_OVERFLOW),
            )

        result = 10 * result + digit
    return result, _taken(origin, value)


COERCERS = {
    Kind.TEXT: coerce_text,
    Kind.CHAR: coerce_char,
    Kind.BOOL: coerce_bool,
    Kind.NONNEGATIVE_INT: coerce_integer,
}

if missing := set(Kind) - COERCERS.keys():
    raise TypeError(f"no coercer for {", ".join(sorted(kind.name for kind in missing))}")


def coerce(descriptor, value, origin, /, *, token, index):
    """
    Convert value for descriptor's kind; returns (converted, taken).

    Non-boolean options require a non-empty value; the check happens before
    any conversion is attempted.
    """
    if not isinstance(origin, Origin):
        raise TypeError("coerce() origin must be an Origin")
    if descriptor.kind is not Kind.BOOL and not value:
        raise MissingValueError(
            "missing value for %s option %r at %s position" % (descriptor.kind.value, descriptor.name, ordinal(index)),
            title="missing value",
            code=FaultCode.MISSING_VALUE,
            hint="pass a value inline or after a space (for example: %s=<value> or %s <value>)" % (
                descriptor.spelling, descriptor.spelling
            ),
            option=descriptor.name,
            literal=value,
            token=token,
            index=index,
            docs=getdoc(FaultCode.MISSING_VALUE),
        )
    return COERCERS[descriptor.kind](descriptor, value, origin, token=token, index=index)


__all__ = (
    "Origin",
    "COERCERS",
    "coerce",
    "coerce_text",
    "coerce_char",
    "coerce_bool",
    "coerce_integer",
)
