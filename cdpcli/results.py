"""
Result records produced by parsing and validation.

- ValidationResult: valid flag plus error and warning messages. Results
  compose with "+" (errors and warnings concatenate; valid only if both are).
- ParseResult: outcome of ArgumentParser.parse_arguments. Options hold tagged
  values (see cdpcli.values), positionals stay raw strings, and every error
  message is backed by the fault object that produced it. global_options and
  command_options keep the two scopes apart; options is their merge.
"""
from dataclasses import dataclass, field
from types import MappingProxyType

from .values import unwrap


@dataclass(frozen=True, slots=True)
class ValidationResult:
    valid: bool = True
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    faults: tuple = field(default=(), compare=False, repr=False)

    @classmethod
    def success(cls, *warnings):
        return cls(True, (), tuple(map(str, warnings)), tuple(w for w in warnings if not isinstance(w, str)))

    @classmethod
    def failure(cls, *faults):
        """Failed result from fault objects or plain messages."""
        return cls(False, tuple(map(str, faults)), (), tuple(f for f in faults if not isinstance(f, str)))

    def __add__(self, other):
        if not isinstance(other, ValidationResult):
            return NotImplemented
        return ValidationResult(
            self.valid and other.valid,
            self.errors + other.errors,
            self.warnings + other.warnings,
            self.faults + other.faults,
        )

    def __bool__(self):
        return self.valid


@dataclass(frozen=True, slots=True)
class ParseResult:
    success: bool
    command: str
    options: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))
    arguments: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()
    faults: tuple = field(default=(), compare=False, repr=False)
    global_options: MappingProxyType = field(default_factory=lambda: MappingProxyType({}), repr=False)
    command_options: MappingProxyType = field(default_factory=lambda: MappingProxyType({}), repr=False)

    @classmethod
    def build(cls, command, options=None, arguments=(), faults=(), warnings=(), scoped=None):
        """
        Assemble a result; success follows from the absence of faults.

        options are the global options, scoped the command's own. The merged
        options let a command option win over a global one of the same name.
        """
        options = dict(options or {})
        scoped = dict(scoped or {})
        return cls(
            not faults,
            command,
            MappingProxyType(options | scoped),
            tuple(arguments),
            tuple(map(str, faults)),
            tuple(map(str, warnings)),
            tuple(faults),
            MappingProxyType(options),
            MappingProxyType(scoped),
        )

    def value(self, name, default=None, /):
        """Plain value of an option, or default when the option was not given."""
        try:
            return unwrap(self.options[name])
        except KeyError:
            return default

    def namespace(self):
        """Options as a plain dict (tagged values unwrapped)."""
        return {name: unwrap(value) for name, value in self.options.items()}


__all__ = (
    "ValidationResult",
    "ParseResult",
)
