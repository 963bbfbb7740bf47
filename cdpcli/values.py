"""
Typed option values and the coercion table.

Option types form a closed enumeration; each variant owns exactly one coercion
function (see COERCIONS). A coerced value is one of four frozen records, so
consumers can pattern-match on the variant instead of guessing at raw strings:

    match result.options["port"]:
        case NumberValue(port): ...
        case _: ...

Positional arguments stay raw strings after parsing; their declared type is
checked later by the validator through CHECKS, again one function per variant.

Coercion failures raise ValueError carrying the user-facing message, e.g.
"Option --port must be a number, got: abc". Callers turn those into faults.
"""
import math
from dataclasses import dataclass
from enum import StrEnum
from typing import ClassVar
from urllib.parse import urlsplit


class OptionType(StrEnum):
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"


class ArgumentType(StrEnum):
    STRING = "string"
    NUMBER = "number"
    FILE = "file"
    URL = "url"


@dataclass(frozen=True, slots=True)
class StringValue:
    value: str
    kind: ClassVar[OptionType] = OptionType.STRING


@dataclass(frozen=True, slots=True)
class NumberValue:
    value: int | float
    kind: ClassVar[OptionType] = OptionType.NUMBER


@dataclass(frozen=True, slots=True)
class BoolValue:
    value: bool
    kind: ClassVar[OptionType] = OptionType.BOOLEAN

    def __invert__(self):
        return BoolValue(not self.value)


@dataclass(frozen=True, slots=True)
class ArrayValue:
    value: tuple[str, ...]
    kind: ClassVar[OptionType] = OptionType.ARRAY


OptionValue = StringValue | NumberValue | BoolValue | ArrayValue

TRUTHY = frozenset(("true", "1", "yes"))
FALSY = frozenset(("false", "0", "no"))


def parse_number(raw, /):
    """
    Parse a number the way the command line spells it.

    Integral text yields an int ("42" -> 42); anything else float() accepts
    yields a float. Empty text, booleans, NaN and infinities are rejected with
    ValueError.
    """
    if isinstance(raw, bool):
        raise ValueError(raw)
    if isinstance(raw, int | float):
        number = raw
    else:
        text = str(raw).strip()
        if not text:
            raise ValueError(raw)
        try:
            number = int(text)
        except ValueError:
            number = float(text)
    if isinstance(number, float) and not math.isfinite(number):
        raise ValueError(raw)
    return number


def _string(name, raw):
    return StringValue(str(raw))


def _number(name, raw):
    try:
        return NumberValue(parse_number(raw))
    except ValueError:
        raise ValueError(f"Option --{name} must be a number, got: {raw}") from None


def _boolean(name, raw):
    if isinstance(raw, bool):
        return BoolValue(raw)
    text = str(raw).strip().lower()
    if text in TRUTHY:
        return BoolValue(True)
    if text in FALSY:
        return BoolValue(False)
    raise ValueError(f"Option --{name} must be a boolean, got: {raw}")


def _array(name, raw):
    if isinstance(raw, list | tuple):
        return ArrayValue(tuple(str(item).strip() for item in raw))
    return ArrayValue(tuple(item.strip() for item in str(raw).split(",")))


COERCIONS = {
    OptionType.STRING: _string,
    OptionType.NUMBER: _number,
    OptionType.BOOLEAN: _boolean,
    OptionType.ARRAY: _array,
}


def coerce(definition, raw=None, /):
    """
    Convert a raw token into the tagged value for an OptionDefinition.

    A raw value of None means "absent": the declared default is coerced
    instead, and None is returned when there is no default either.
    """
    if raw is None:
        raw = definition.default
        if raw is None:
            return None
    return COERCIONS[OptionType(definition.type)](definition.name, raw)


def unwrap(value, /):
    """Plain python value of a tagged option value (arrays become lists)."""
    match value:
        case ArrayValue(items):
            return list(items)
        case StringValue(item) | NumberValue(item) | BoolValue(item):
            return item
        case _:
            return value


def _check_string(name, raw):
    pass


def _check_number(name, raw):
    try:
        parse_number(raw)
    except ValueError:
        raise ValueError(f"Argument {name} must be a number, got: {raw}") from None


def _check_file(name, raw):
    if not isinstance(raw, str) or not raw.strip():
        raise ValueError(f"Argument {name} must be a valid file path")


def _check_url(name, raw):
    try:
        parts = urlsplit(raw)
    except ValueError:
        parts = None
    if not parts or not parts.scheme or not (parts.netloc or parts.path):
        raise ValueError(f"Argument {name} must be a valid URL, got: {raw}")


CHECKS = {
    ArgumentType.STRING: _check_string,
    ArgumentType.NUMBER: _check_number,
    ArgumentType.FILE: _check_file,
    ArgumentType.URL: _check_url,
}


def check(definition, raw, /):
    """Raise ValueError when a positional does not fit its ArgumentDefinition type."""
    CHECKS[ArgumentType(definition.type)](definition.name, raw)


__all__ = (
    "OptionType",
    "ArgumentType",
    "StringValue",
    "NumberValue",
    "BoolValue",
    "ArrayValue",
    "OptionValue",
    "parse_number",
    "coerce",
    "unwrap",
    "check",
)
