"""
Option and positional-argument definitions.

Overview
- OptionDefinition: a named option of a command (or of the global table):
  kebab-case name, optional one-character short flag, OptionType, required,
  default, choices (string options only), optional custom validator.
- ArgumentDefinition: a positional argument: name, ArgumentType, required,
  variadic (only meaningful on the trailing argument), optional validator.
- CommandExample: one (command, description) pair shown in help.
- GLOBAL_OPTIONS: the fixed option table accepted before any command name.

Definitions are records, not checkers: construction normalizes what it can
(enum coercion for known types, tuples for sequences) and keeps everything
else verbatim. Structural checks happen when a command is registered with
the parser, so every violation can be reported in one go.

Introspection
- DefinitionType exposes the names listed in __introspectable__ as read-only
  properties (mirror()) and provides stable __repr__/__rich_repr__.
"""
import functools
import operator
import re
from collections.abc import Iterable
from typing import NamedTuple

from .utils import Unset, coalesce, mirror, rename
from .values import ArgumentType, OptionType


class DefinitionType(type):
    """
    Metaclass for schema records.

    - __typename__ is derived from the class name ("OptionDefinition" ->
      "option-definition") and used in repr output.
    - Every name in __introspectable__ becomes a read-only property over the
      matching "_name" field.
    - __displayable__ narrows what __rich_repr__ shows (defaults to all).
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _enumerate(enum, value):
    # known spellings become enum members; anything else is kept for registration to reject
    try:
        return enum(value)
    except ValueError:
        return value


def _sequence(value):
    # non-string iterables are frozen into tuples; other values are kept for registration to reject
    if isinstance(value, Iterable) and not isinstance(value, str | bytes):
        return tuple(value)
    return value


class OptionDefinition(metaclass=DefinitionType):
    """
    A named option: --name / -s.

    Parameters
    - name: str, kebab-case key without dashes ("full-page").
    - type: OptionType or its string spelling ("number"); defaults to string.
    - short: single character without the dash, or None.
    - description: help text.
    - required: the validator reports "Required option --name is missing" when absent.
    - default: value used when the option is absent (raw, coerced on demand).
    - choices: allow-list for string options.
    - validator: callable(value) -> ValidationResult | bool | None, called with the
      plain (unwrapped) value.
    """

    __introspectable__ = (
        "name",
        "type",
        "short",
        "description",
        "required",
        "default",
        "choices",
        "validator",
    )
    __displayable__ = ("name", "type", "short", "required", "default", "choices")

    def __init__(
            self,
            name,
            type=OptionType.STRING,
            *,
            short=None,
            description="",
            required=False,
            default=None,
            choices=(),
            validator=None
    ):
        self._name = name
        self._type = _enumerate(OptionType, type)
        self._short = short
        self._description = description
        self._required = bool(required)
        self._default = default
        self._choices = _sequence(choices)
        self._validator = validator

    @property
    def flags(self):
        """Spellings accepted on the command line, short first ("-o", "--output")."""
        flags = []
        if self._short:
            flags.append("-" + self._short)
        flags.append("--" + self._name)
        if self._type is OptionType.BOOLEAN:
            flags.append("--no-" + self._name)
        return flags


class ArgumentDefinition(metaclass=DefinitionType):
    """
    A positional argument, matched by position in command-line order.

    A variadic argument swallows every remaining positional; only the last
    argument of a command may be variadic.
    """

    __introspectable__ = (
        "name",
        "type",
        "description",
        "required",
        "variadic",
        "validator",
    )
    __displayable__ = ("name", "type", "required", "variadic")

    def __init__(
            self,
            name,
            type=ArgumentType.STRING,
            *,
            description="",
            required=False,
            variadic=False,
            validator=None
    ):
        self._name = name
        self._type = _enumerate(ArgumentType, type)
        self._description = description
        self._required = bool(required)
        self._variadic = bool(variadic)
        self._validator = validator


class CommandExample(NamedTuple):
    command: str
    description: str


# options accepted before the command name: name, short, type, default
GLOBAL_OPTIONS = (
    OptionDefinition("host", OptionType.STRING, short="h", default="localhost",
                     description="Chrome host address"),
    OptionDefinition("port", OptionType.NUMBER, short="p", default=9222,
                     description="Chrome DevTools port"),
    OptionDefinition("format", OptionType.STRING, short="f", default="text", choices=("json", "text"),
                     description="Output format"),
    OptionDefinition("verbose", OptionType.BOOLEAN, short="v", default=False,
                     description="Enable verbose logging"),
    OptionDefinition("quiet", OptionType.BOOLEAN, short="q", default=False,
                     description="Suppress output of successful commands"),
    OptionDefinition("timeout", OptionType.NUMBER, short="t", default=30000,
                     description="Command timeout in milliseconds"),
    OptionDefinition("debug", OptionType.BOOLEAN, short="d", default=False,
                     description="Enable debug logging"),
    OptionDefinition("config", OptionType.STRING, short="c",
                     description="Configuration file path"),
)


__all__ = (
    "DefinitionType",
    "OptionDefinition",
    "ArgumentDefinition",
    "CommandExample",
    "GLOBAL_OPTIONS",
)
