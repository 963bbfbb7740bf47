"""
Runtime configuration assembled from global options and the environment.

Precedence, first match wins:
1. global options given on the command line;
2. CDP_<NAME> environment variables (CDP_HOST, CDP_PORT, ...), converted
   with the same rules as the matching option;
3. the defaults declared in GLOBAL_OPTIONS.

Configuration files are not read; --config is carried through untouched for
the commands that want it.
"""
import logging
import os
from typing import NamedTuple

from .arguments import GLOBAL_OPTIONS
from .faults import InvalidChoiceError, InvalidEnvironmentError
from .values import coerce, unwrap

PREFIX = "CDP_"


class CLIConfig(NamedTuple):
    host: str = "localhost"
    port: int = 9222
    format: str = "text"
    verbose: bool = False
    quiet: bool = False
    timeout: int | float = 30000
    debug: bool = False
    config: str | None = None

    @property
    def level(self):
        """Logging level implied by --debug / --verbose / --quiet."""
        if self.debug:
            return logging.DEBUG
        if self.verbose:
            return logging.INFO
        if self.quiet:
            return logging.ERROR
        return logging.WARNING


def variable(name, /):
    """Environment variable that overrides a global option ("full-page" -> "CDP_FULL_PAGE")."""
    return PREFIX + name.replace("-", "_").upper()


def load_config(options=None, environ=os.environ):
    """
    Build a CLIConfig from parsed global options and environment overrides.

    options maps option names to tagged or plain values
    (ParseResult.global_options works as is); names that are not global
    options are ignored.

    Raises
    - InvalidEnvironmentError: an override does not convert to the option's type.
    - InvalidChoiceError: an override is not one of the option's choices.
    """
    options = options or {}
    settings = {}

    for option in GLOBAL_OPTIONS:
        if option.name in options:
            settings[option.name] = unwrap(options[option.name])
            continue

        key = variable(option.name)
        if key in environ:
            try:
                value = unwrap(coerce(option, environ[key]))
            except ValueError as error:
                raise InvalidEnvironmentError(
                    f"Invalid value in {key}: {error}",
                    hint="unset %s or give it a %s value" % (key, option.type),
                    variable=key,
                ) from None
            if option.choices and value not in option.choices:
                raise InvalidChoiceError(
                    f"Option --{option.name} must be one of: {", ".join(option.choices)}",
                    hint="%s is set to %r" % (key, value),
                    variable=key,
                )
            settings[option.name] = value
            continue

        settings[option.name] = unwrap(coerce(option))

    return CLIConfig(**settings)


__all__ = (
    "CLIConfig",
    "variable",
    "load_config",
)
