"""
cdpcli utilities (small helpers shared by every layer)

Overview
- UnsetType / Unset
  • Sentinel for "value not provided", distinct from None (an option may default to None).
  • Falsey, printable as "Unset", sealed against subclassing, one instance per process.

- coalesce(value, default=None)
  • Materialize Unset into a default while preserving None/0/""/[].

- rename(callable, name) / @rename("name")
  • Give generated callables a readable __name__/__qualname__ for tracebacks and logs.

- mirror("attr")
  • Read-only property over a private "_attr" field; containers are handed out as copies
    so schema definitions stay immutable after registration.

- progname()
  • Program name shown in help and faults; hosts override it with __prog__ in __main__.

- palette(defaults)
  • Style table merged with the host's __styles__ mapping (missing keys render unstyled).
"""
import builtins
import functools
from collections import defaultdict
from collections.abc import Mapping, Sequence, Set
from typing import final


@final
class UnsetType:
    """
    Sentinel type for parameters that were not supplied.

    Unset is used where None is a meaningful value (an option default of None,
    a definition without a short flag), so "absent" needs its own marker.
    """

    def __or__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    def __ror__(self, other, /):
        try:
            return other | type(self)
        except TypeError:
            return NotImplemented

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


Unset = UnsetType()


def coalesce(object, default=None, /):
    """
    Return object unless it is Unset, in which case return default.

    Falsey values are kept as they are:
    - coalesce(0, 9222)      -> 0
    - coalesce(None, "text") -> None
    - coalesce(Unset, "text") -> "text"
    """
    return object if object is not Unset else default


def rename(*parameters):
    """
    Assign a stable __name__/__qualname__ to a callable.

    Two forms are accepted:
    - rename(callable, name) renames in place and returns the callable.
    - rename(name) returns a decorator doing the same later.
    """
    match len(parameters):
        case 2:
            callable, name = parameters
            if not builtins.callable(callable):
                raise TypeError("rename() first argument must be callable")
            if not isinstance(name, str):
                raise TypeError("rename() second argument must be a string")
            try:
                callable.__qualname__ = name
                callable.__name__ = name
            except (AttributeError, TypeError):
                raise TypeError("rename() first argument must be a updatable callable") from None
            return callable
        case 1:
            name, = parameters
            if not isinstance(name, str):
                raise TypeError("@rename() argument must be a string")

            def wrapper(callable):
                if not builtins.callable(callable):
                    raise TypeError("@rename() must be applied to a callable")
                return rename(callable, name)

            return rename(wrapper, "rename")
        case _:
            raise TypeError("rename takes 1 to 2 arguments but %d were given" % len(parameters))


def _detach(object):
    # fresh containers all the way down; scalars, callables and records pass through
    if isinstance(object, tuple) and hasattr(object, "_fields"):
        return object
    elif isinstance(object, Sequence) and not isinstance(object, str):
        return list(map(_detach, object))
    elif isinstance(object, Mapping):
        return dict(zip(object.keys(), map(_detach, object.values())))
    elif isinstance(object, Set):
        return set(map(_detach, object))
    return object


def mirror(name, /):
    """
    Build a read-only property that exposes self._{name}.

    Container values are returned as detached copies, so callers can sort or
    extend what they get back without touching the registered definition.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _detach(getattr(self, "_" + name))

    return property(getter)


def progname():
    """Program name used in usage lines, fault headers and hints."""
    return getattr(__import__("__main__"), "__prog__", "cdpcli")


def palette(defaults, /):
    """
    Merge a default style table with the host's __styles__ overrides.

    The result is a defaultdict so unknown style keys resolve to "" (no style).
    """
    return defaultdict(str, dict(defaults) | getattr(__import__("__main__"), "__styles__", {}))


__all__ = (
    "UnsetType",
    "Unset",
    "coalesce",
    "rename",
    "mirror",
    "progname",
    "palette",
)
