"""
Semantic validation of a parsed command line.

Parsing answers "is this well-formed?"; the Validator answers "does it make
sense for this command?". It checks, in order:

1. required options are present;
2. the provided positionals cover the required arguments; the missing ones
   are named as required[len(provided):];
3. present options respect their choices: command options against the
   command definition, global options against the global option table;
4. positionals fit their declared ArgumentType (number, file, url);
5. custom validators on options and positionals pass.

Custom validators receive plain values. They may return a ValidationResult,
a bool, or None (accepted). Exceptions they raise become errors and warnings
they emit become result warnings; nothing escapes validate().
"""
import logging
import warnings

from .faults import (
    DelegatedValidationError,
    DelegatedValidationWarning,
    InvalidArgumentError,
    InvalidChoiceError,
    MissingArgumentsError,
    MissingRequiredOptionError,
    UnknownCommandError,
)
from .results import ValidationResult
from .utils import progname
from .values import check, unwrap

logger = logging.getLogger(__name__)


class Validator:
    """
    Checks a ParseResult against a command schema.

    Parameters
    - lookup: callable(name) -> CommandDefinition | None (aliases included).
    - global_options: the global OptionDefinition table, consulted for choices.
    """

    def __init__(self, lookup, global_options=()):
        self._lookup = lookup
        self._globals = {option.name: option for option in global_options}

    def validate(self, command, parsed, /):
        definition = self._lookup(command)
        if definition is None:
            return ValidationResult.failure(UnknownCommandError(
                f"Unknown command: {command}",
                hint="run '%s help' to list the available commands" % progname(),
            ))

        options = parsed.command_options
        provided = list(parsed.arguments)
        result = ValidationResult()

        for option in definition.options:
            if option.required and option.name not in options:
                result += ValidationResult.failure(MissingRequiredOptionError(
                    f"Required option --{option.name} is missing",
                    hint="pass --%s <%s>" % (option.name, option.type),
                ))

        required = [argument.name for argument in definition.arguments if argument.required]
        if len(provided) < len(required):
            missing = required[len(provided):]
            result += ValidationResult.failure(MissingArgumentsError(
                f"Missing required arguments: {", ".join(missing)}",
                hint="usage: %s %s" % (progname(), definition.synopsis),
            ))

        for scoped, lookup in ((options, definition.option), (parsed.global_options, self._globals.get)):
            for name, value in scoped.items():
                option = lookup(name)
                if option is None or not option.choices:
                    continue
                if unwrap(value) not in option.choices:
                    result += ValidationResult.failure(InvalidChoiceError(
                        f"Option --{name} must be one of: {", ".join(option.choices)}",
                        hint="got %r" % unwrap(value),
                    ))

        for index, raw in enumerate(provided):
            argument = definition.argument(index)
            if argument is None:
                continue
            try:
                check(argument, raw)
            except ValueError as error:
                result += ValidationResult.failure(InvalidArgumentError(str(error)))

        for option in definition.options:
            if option.validator is not None and option.name in options:
                result += self._delegate(option.validator, unwrap(options[option.name]), "option --%s" % option.name)

        for index, raw in enumerate(provided):
            argument = definition.argument(index)
            if argument is not None and argument.validator is not None:
                result += self._delegate(argument.validator, raw, "argument %s" % argument.name)

        logger.debug("validated %r: %d error(s), %d warning(s)", definition.name, len(result.errors), len(result.warnings))
        return result

    def _delegate(self, validator, value, label):
        """
        run one custom validator and normalize whatever it produces.
        """
        try:
            with warnings.catch_warnings(record=True) as caught:
                warnings.simplefilter("always")
                outcome = validator(value)
        except Exception as exception:
            logger.debug("validator for %s raised", label, exc_info=True)
            return ValidationResult.failure(DelegatedValidationError(
                f"Validation failed for {label}: {exception}",
                hint="check the value passed to %s" % label,
                exception=exception,
            ))

        notes = ValidationResult.success(*(
            DelegatedValidationWarning(str(warning.message), label=label) for warning in caught
        ))

        match outcome:
            case ValidationResult():
                return outcome + notes
            case None | True:
                return notes
            case False:
                return ValidationResult.failure(DelegatedValidationError(f"Invalid value for {label}: {value}")) + notes
            case _:
                return ValidationResult.failure(DelegatedValidationError(
                    f"Validator for {label} returned {type(outcome).__name__}, expected a ValidationResult or a bool"
                )) + notes


__all__ = (
    "Validator",
)
