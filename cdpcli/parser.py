"""
cdpcli argument parser.

Overview
- ArgumentParser keeps the live set of registered commands (name -> definition,
  alias -> name), checks definitions when they are registered, turns argv
  tokens into a ParseResult and hands semantic checks to the Validator.
- GLOBAL_OPTIONS (defined with the other definitions) is the fixed table of
  options accepted before the command name.

Token consumption (parse_arguments)
1. drop the leading `skip` tokens (interpreter and script by default);
2. nothing left, or "--help" anywhere: the "help" command;
3. "--version" or "-V" anywhere: the "version" command;
4. consume global options until the first token that is not one; that token
   is the command name. An unrecognised "--flag"/"-f" becomes the command name
   with its dashes removed, so a typo surfaces as an unknown command;
5. resolve aliases; "help" always succeeds and keeps the rest as arguments;
6. unknown command: failed result;
7. consume the rest against the command schema: "--name", "--name=value",
   "--no-name" (booleans), "-s value", "-s" (booleans); every other token is
   a positional. Each bad token records one fault and scanning continues;
8. global and command options are kept apart; in the merged view the
   command option wins on a clash.

Faults
- Steps 4 and earlier raise; the top level turns any exception into a single
  "Parse error: ..." result for the "help" command. parse_arguments() never
  raises.
- register_command() raises InvalidDefinitionError / DuplicateAliasError and
  leaves the parser untouched when it does.
"""
import logging
import re
import threading
from collections import deque
from collections.abc import Sequence

from .arguments import GLOBAL_OPTIONS, ArgumentDefinition, OptionDefinition
from .commands import CommandDefinition, CommandSchemaRegistry
from .faults import (
    CommandException,
    DuplicateAliasError,
    InternalParseError,
    InvalidDefinitionError,
    MissingOptionValueError,
    UnconvertibleValueError,
    UnknownCommandError,
    UnknownOptionError,
)
from .helps import HelpSystem
from .results import ParseResult
from .utils import Unset, progname
from .validator import Validator
from .values import ArgumentType, BoolValue, OptionType, coerce

logger = logging.getLogger(__name__)

# --name or --name=value (value may be empty)
_LONG = re.compile(r"--(?P<name>[^=\s]+)(=(?P<value>.*))?", re.DOTALL)


class ArgumentParser:
    """
    Schema-driven parser for "<prog> [global-options] <command> [options] [arguments]".

    Parameters
    - registry: CommandSchemaRegistry that registered definitions are mirrored
      into (the help system falls back to it); a fresh one when omitted.
    - help_system: HelpSystem used by generate_help()/generate_contextual_help();
      built lazily over this parser and the registry when omitted.
    """

    global_options = GLOBAL_OPTIONS

    def __init__(self, registry=Unset, help_system=Unset):
        self._lock = threading.Lock()
        self._commands = {}
        self._aliases = {}
        self._registry = CommandSchemaRegistry() if registry is Unset else registry
        self._help_system = help_system
        self._validator = Validator(self.get_command, GLOBAL_OPTIONS)

    @property
    def registry(self):
        return self._registry

    @property
    def help_system(self):
        if self._help_system is Unset:
            self._help_system = HelpSystem(self._registry, self)
        return self._help_system

    # --- registration -------------------------------------------------------

    def register_command(self, definition, /):
        """
        Check and register a command definition.

        Raises
        - InvalidDefinitionError: the definition is malformed (every violation
          listed in one message).
        - DuplicateAliasError: an alias (or the name) is already claimed by
          another command.
        """
        if errors := _inspect(definition):
            raise InvalidDefinitionError(
                "Invalid command definition: %s" % ", ".join(errors),
                hint="fix the listed fields before registering the command",
                errors=tuple(errors),
            )

        with self._lock:
            conflicts = []
            for alias in definition.aliases:
                owner = self._aliases.get(alias)
                if owner is not None and owner != definition.name:
                    conflicts.append(f"Alias '{alias}' is already registered for command '{owner}'")
                elif alias in self._commands and alias != definition.name:
                    conflicts.append(f"Alias '{alias}' is already registered for command '{alias}'")
            if (owner := self._aliases.get(definition.name)) is not None and owner != definition.name:
                conflicts.append(f"Command name '{definition.name}' is already registered as an alias for command '{owner}'")
            if conflicts:
                raise DuplicateAliasError(
                    "; ".join(conflicts),
                    hint="aliases must be unique across every registered command",
                    conflicts=tuple(conflicts),
                )

            if previous := self._commands.get(definition.name):
                for alias in previous.aliases:
                    self._aliases.pop(alias, None)
            self._commands[definition.name] = definition
            for alias in definition.aliases:
                self._aliases[alias] = definition.name

        self._registry.register(definition)
        logger.debug("registered command %r (aliases: %s)", definition.name, ", ".join(definition.aliases) or "none")

    # --- lookup ---------------------------------------------------------------

    def resolve(self, name, /):
        """Canonical name for name (aliases resolved; unknown names unchanged)."""
        return self._aliases.get(name, name)

    def get_command(self, name, /):
        return self._commands.get(self.resolve(name))

    def has_command(self, name, /):
        return self.resolve(name) in self._commands

    def get_commands(self):
        return list(self._commands.copy().values())

    # --- parsing --------------------------------------------------------------

    def parse_arguments(self, argv, /, *, skip=2):
        """
        Turn argv into a ParseResult. Never raises.

        argv keeps the interpreter/script convention by default; pass skip=0
        for user tokens only.
        """
        try:
            tokens = list(argv)[skip:]
        except TypeError:
            logger.debug("argv is not a sequence of tokens: %r", argv)
            return ParseResult.build("help")
        logger.debug("parsing %r", tokens)

        if not tokens or "--help" in tokens:
            return ParseResult.build("help")
        if "--version" in tokens or "-V" in tokens:
            return ParseResult.build("version")

        try:
            return self._parse(deque(tokens))
        except Exception as exception:
            if "help" in tokens:
                return ParseResult.build("help")
            if isinstance(exception, CommandException):
                message = exception.message
            else:
                logger.debug("unexpected failure while parsing %r", tokens, exc_info=True)
                message = str(exception) or type(exception).__name__
            return ParseResult.build("help", faults=[InternalParseError(
                f"Parse error: {message}",
                hint="run '%s help' to see the expected syntax" % progname(),
                exception=exception,
            )])

    def _parse(self, tokens):
        options = self._parse_globals(tokens)

        if not tokens:
            return ParseResult.build("help", options)

        token = tokens.popleft()
        name = self.resolve(token.lstrip("-") if token.startswith("-") else token)

        if name == "help":
            return ParseResult.build("help", options, tokens)

        definition = self._commands.get(name)
        if definition is None:
            return ParseResult.build(name, options, faults=[UnknownCommandError(
                f"Unknown command: {name}. Use 'help' to see available commands.",
                hint="run '%s help' to list the available commands" % progname(),
                command=name,
            )])

        scoped, arguments, faults = self._parse_command(definition, tokens)
        logger.debug("parsed %r: options=%r arguments=%r faults=%d", name, scoped, arguments, len(faults))
        return ParseResult.build(definition.name, options, arguments, faults, scoped=scoped)

    def _parse_globals(self, tokens):
        """
        consume leading global options; stop at the first token that is not one.

        raises MissingOptionValueError / UnconvertibleValueError.
        """
        options = {}
        while tokens:
            token = tokens[0]
            option, value, negated = _lookup_global(token)
            if option is None:
                break
            tokens.popleft()

            if option.type is OptionType.BOOLEAN:
                parsed = BoolValue(True) if value is None else _convert(option, value)
                options[option.name] = ~parsed if negated else parsed
                continue

            if value is None:
                if not tokens or tokens[0].startswith("-"):
                    raise MissingOptionValueError(f"Option {token} requires a value")
                value = tokens.popleft()
            options[option.name] = _convert(option, value)
        return options

    def _parse_command(self, definition, tokens):
        options = {}
        arguments = []
        faults = []

        while tokens:
            token = tokens.popleft()

            if match := _LONG.fullmatch(token):
                name, value = match["name"], match["value"]
                option = definition.option(name)
                negated = False
                if option is None and name.startswith("no-"):
                    candidate = definition.option(name[3:])
                    if candidate is not None and candidate.type is OptionType.BOOLEAN:
                        option, negated = candidate, True

                if option is None:
                    faults.append(UnknownOptionError(
                        f"Unknown option: --{name}",
                        hint="run '%s help %s' to see its options" % (progname(), definition.name),
                        option=name,
                    ))
                    continue

                if option.type is OptionType.BOOLEAN:
                    try:
                        parsed = BoolValue(True) if value is None else _convert(option, value)
                    except UnconvertibleValueError as fault:
                        faults.append(fault)
                        continue
                    options[option.name] = ~parsed if negated else parsed
                    continue

                if value is None:
                    if not tokens or tokens[0].startswith("-"):
                        faults.append(MissingOptionValueError(
                            f"Option --{name} requires a value",
                            hint="pass --%s <%s> or --%s=<%s>" % (name, option.type, name, option.type),
                            option=name,
                        ))
                        continue
                    value = tokens.popleft()

                try:
                    options[option.name] = _convert(option, value)
                except UnconvertibleValueError as fault:
                    faults.append(fault)

            elif token.startswith("-") and len(token) > 1:
                letter = token[1:]
                option = definition.short(letter) if len(letter) == 1 else None

                if option is None:
                    faults.append(UnknownOptionError(
                        f"Unknown option: {token}",
                        hint="short options take one letter and cannot be combined",
                        option=token,
                    ))
                    continue

                if option.type is OptionType.BOOLEAN:
                    options[option.name] = BoolValue(True)
                    continue

                if not tokens or tokens[0].startswith("-"):
                    faults.append(MissingOptionValueError(
                        f"Option {token} requires a value",
                        hint="pass %s <%s>" % (token, option.type),
                        option=option.name,
                    ))
                    continue

                value = tokens.popleft()
                try:
                    options[option.name] = _convert(option, value)
                except UnconvertibleValueError as fault:
                    faults.append(UnconvertibleValueError(
                        f"Invalid value for option {token}: {fault.message}",
                        hint=fault.hint,
                        option=option.name,
                    ))
            else:
                arguments.append(token)

        return options, arguments, faults

    # --- validation and help ----------------------------------------------------

    def validate_arguments(self, command, parsed, /):
        """Semantic checks for a parsed command line; see cdpcli.validator."""
        return self._validator.validate(command, parsed)

    def generate_help(self, command=None, /):
        """
        General help, command help, or topic help for "topic <name>".
        """
        if not command:
            return self.help_system.generate_general_help()
        match command.split():
            case ["topic", topic, *_]:
                return self.help_system.generate_topic_help(topic)
            case ["topic"]:
                return self.help_system.generate_topic_help("")
            case [name, *_]:
                return self.help_system.generate_command_help(name)
            case _:
                return self.help_system.generate_general_help()

    def generate_contextual_help(self, error, command=None, /):
        return self.help_system.generate_contextual_help(error, command)


def _lookup_global(token):
    """
    match a token against GLOBAL_OPTIONS.

    returns (option, inline value or None, negated) or (None, None, False).
    """
    if match := _LONG.fullmatch(token):
        name, value = match["name"], match["value"]
        for option in GLOBAL_OPTIONS:
            if option.name == name:
                return option, value, False
        if name.startswith("no-"):
            for option in GLOBAL_OPTIONS:
                if option.name == name[3:] and option.type is OptionType.BOOLEAN:
                    return option, value, True
    elif len(token) == 2 and token.startswith("-"):
        for option in GLOBAL_OPTIONS:
            if option.short == token[1]:
                return option, None, False
    return None, None, False


def _convert(option, value):
    try:
        return coerce(option, value)
    except ValueError as error:
        raise UnconvertibleValueError(
            str(error),
            hint="expected a %s value for --%s" % (option.type, option.name),
            option=option.name,
        ) from None


def _inspect(definition):
    """
    collect every structural problem of a command definition.

    returns a list of short messages (empty when the definition is sound).
    """
    if not isinstance(definition, CommandDefinition):
        return ["definition must be a CommandDefinition, not %s" % type(definition).__name__]

    errors = []

    if not isinstance(definition.name, str) or not definition.name.strip():
        errors.append("name must be a non-empty string")
    elif definition.name.startswith("-") or any(char.isspace() for char in definition.name):
        errors.append("name must not start with '-' or contain whitespace")
    if not isinstance(definition.description, str) or not definition.description.strip():
        errors.append("description must be a non-empty string")
    if not isinstance(definition.usage, str):
        errors.append("usage must be a string")

    aliases = definition.aliases
    if not _listing(aliases):
        errors.append("aliases must be a list of strings")
    else:
        for alias in aliases:
            if not isinstance(alias, str) or not alias.strip():
                errors.append("aliases must be non-empty strings")
                break

    if not _listing(definition.examples):
        errors.append("examples must be a list")

    options = definition.options
    if not _listing(options):
        errors.append("options must be a list")
    else:
        names = set()
        shorts = set()
        for index, option in enumerate(options):
            if not isinstance(option, OptionDefinition):
                errors.append("option %d must be an OptionDefinition" % index)
                continue
            if not isinstance(option.name, str) or not option.name.strip():
                errors.append("option %d name must be a non-empty string" % index)
                continue
            if option.name in names:
                errors.append("option --%s is defined twice" % option.name)
            names.add(option.name)
            if not isinstance(option.type, OptionType):
                errors.append("option --%s has invalid type %r" % (option.name, option.type))
            if option.short is not None:
                if not isinstance(option.short, str) or len(option.short) != 1:
                    errors.append("option --%s short flag must be a single character" % option.name)
                elif option.short in shorts:
                    errors.append("option --%s short flag -%s is already in use" % (option.name, option.short))
                else:
                    shorts.add(option.short)
            if option.choices:
                if not _listing(option.choices) or not all(isinstance(choice, str) for choice in option.choices):
                    errors.append("option --%s choices must be a list of strings" % option.name)
                elif option.type is not OptionType.STRING:
                    errors.append("option --%s choices are only allowed on string options" % option.name)
            if option.validator is not None and not callable(option.validator):
                errors.append("option --%s validator must be callable" % option.name)

    arguments = definition.arguments
    if not _listing(arguments):
        errors.append("arguments must be a list")
    else:
        for index, argument in enumerate(arguments):
            if not isinstance(argument, ArgumentDefinition):
                errors.append("argument %d must be an ArgumentDefinition" % index)
                continue
            if not isinstance(argument.name, str) or not argument.name.strip():
                errors.append("argument %d name must be a non-empty string" % index)
                continue
            if not isinstance(argument.type, ArgumentType):
                errors.append("argument %s has invalid type %r" % (argument.name, argument.type))
            if argument.variadic and index != len(arguments) - 1:
                errors.append("argument %s is variadic but not the last argument" % argument.name)
            if argument.validator is not None and not callable(argument.validator):
                errors.append("argument %s validator must be callable" % argument.name)

    return errors


def _listing(value):
    return isinstance(value, Sequence) and not isinstance(value, str)


__all__ = (
    "GLOBAL_OPTIONS",
    "ArgumentParser",
)
