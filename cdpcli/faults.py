"""
cdpcli faults (errors and warnings), exit codes and rendering.

Scope
- FaultCode: stable numeric identifiers grouped by domain, so logs and docs can
  refer to a fault without quoting its message.
- ExitCode: the process exit-code taxonomy the surrounding CLI reports, plus a
  best-effort classifier for free-text errors coming back from executors.
- CommandException / CommandWarning: carry a message and keyword options
  (title, code, hint, ...) and render themselves through rich.
- report(): print any fault to the error console.

Messages
- The message is the exact, user-facing sentence ("Unknown option: --foo").
  Parse results and validation results expose these strings verbatim.
- Titles and hints use a lowercased, soft tone and show up only in rendered output.

Styling
- Palette keys can be overridden with a __styles__ mapping in __main__, the
  program name with __prog__ and the code labels with __codes__.
"""
import copy
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, palette, progname

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - definitions (101xx): registration-time schema problems.
    - parsing (111xx): unknown command/option, missing values, bad conversions.
    - warnings (121xx): delegated warnings from custom validators.
    - validation (131xx): required options/arguments, choices, argument types.
    - configuration (141xx): environment overrides that do not convert.
    """
    # --- definition errors (10xxx) ---
    INVALID_DEFINITION = 10101
    DUPLICATE_ALIAS = 10102

    # --- parse errors (11xxx) ---
    UNKNOWN_COMMAND = 11101
    UNKNOWN_OPTION = 11111
    MISSING_OPTION_VALUE = 11112
    UNCONVERTIBLE_VALUE = 11113
    PARSE_FAILURE = 11199

    # --- warnings (12xxx) ---
    DELEGATED_WARNING = 12131

    # --- validation errors (13xxx) ---
    MISSING_REQUIRED_OPTION = 13101
    MISSING_ARGUMENTS = 13102
    INVALID_CHOICE = 13103
    INVALID_ARGUMENT = 13104
    DELEGATED_ERROR = 13131

    # --- configuration errors (14xxx) ---
    INVALID_ENVIRONMENT = 14101

    def normalize(self):
        """
        return the label shown in rendered faults.

        a __codes__ mapping in __main__ may remap codes to friendlier labels;
        otherwise the numeric value is used.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ExitCode(IntEnum):
    """
    process exit codes reported by the cli.

    the core never exits by itself; it only decides which of these kinds an
    error belongs to.
    """
    SUCCESS = 0
    GENERAL_ERROR = 1
    CONNECTION_ERROR = 2
    COMMAND_ERROR = 3
    TIMEOUT_ERROR = 4
    INVALID_ARGUMENTS = 5

    @classmethod
    def classify(cls, error, /):
        """
        map an error (exception, fault or text) to an exit code.

        faults know their own exit code; anything else is matched by keywords
        in its lowercased text, first match wins:
        - "timeout"                  -> TIMEOUT_ERROR
        - "connection" / "connect"   -> CONNECTION_ERROR
        - "file" / "path"            -> COMMAND_ERROR
        - "invalid" / "validation"   -> INVALID_ARGUMENTS
        - otherwise                  -> GENERAL_ERROR
        """
        if isinstance(error, CommandException):
            return error.exit_code
        text = str(error).lower()
        if "timeout" in text:
            return cls.TIMEOUT_ERROR
        if "connection" in text or "connect" in text:
            return cls.CONNECTION_ERROR
        if "file" in text or "path" in text:
            return cls.COMMAND_ERROR
        if "invalid" in text or "validation" in text:
            return cls.INVALID_ARGUMENTS
        return cls.GENERAL_ERROR


class _Renderable:
    """
    shared rich rendering for errors and warnings.

    header: "[ prog — code | title ]", then the message, then "→ hint".
    options consulted: colorful (default True), fancy (panel, default False),
    ratio (panel width ratio when fancy).
    """
    __palette__ = {}
    __kind__ = "error"

    def __rich__(self):
        styles = palette(type(self).__palette__)
        colorful = self.options.get("colorful", True)

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

        header = Text.assemble(
            "[ ",
            text(progname(), styler("prog-name")),
            " — ",
            text(self.code.normalize(), styler("code")),
            " | ",
            text(self.title.title(), styler(self.__kind__ + "-title")),
            " ]"
        )
        message = text(self.message, styler(self.__kind__ + "-message"))
        parts = [message]
        if self.hint:
            parts.append(Text.assemble(text(" → ", styler("hint-arrow")), text(self.hint, styler("hint"))))

        if self.options.get("fancy", False):
            try:
                width = int((console.width - 4) * self.options["ratio"])
            except KeyError:
                width = None
            return Panel(Group(*parts), title=header, title_align="left", width=width)

        return Group(header, *parts)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})

    @property
    def code(self):
        return self.options.get("code", type(self).__code__)

    @property
    def title(self):
        return self.options.get("title", type(self).__title__)

    @property
    def hint(self):
        return self.options.get("hint")


class CommandException(_Renderable, Exception):
    """
    base class for every cdpcli error.

    class attributes give the defaults a subclass stands for:
    - __code__: FaultCode
    - __title__: short lowercased title
    - __exitcode__: ExitCode the fault maps to
    each of them except __exitcode__ can be overridden per instance through options.
    """
    __code__ = FaultCode.PARSE_FAILURE
    __title__ = "command error"
    __exitcode__ = ExitCode.GENERAL_ERROR
    __palette__ = {
        "prog-name": "bold #E6E6F0",
        "code": "bold #00E5FF",
        "error-title": "bold #FF4DA6",
        "error-message": "#C8C8D0",
        "hint-arrow": "#9CE19C dim",
        "hint": "italic #9CE19C",
    }

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message)

    @property
    def exit_code(self):
        return type(self).__exitcode__


class CommandWarning(_Renderable, Warning):
    """base class for warnings surfaced next to an otherwise valid result."""
    __code__ = FaultCode.DELEGATED_WARNING
    __title__ = "command warning"
    __kind__ = "warning"
    __palette__ = {
        "prog-name": "bold #E6E6F0",
        "code": "bold #FFB400",
        "warning-title": "bold #FFC2E0",
        "warning-message": "#D6D6DE",
        "hint-arrow": "#B8EFAF dim",
        "hint": "italic #B8EFAF",
    }

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message)


# definition faults: raised by ArgumentParser.register_command
class InvalidDefinitionError(CommandException, ValueError):
    __code__ = FaultCode.INVALID_DEFINITION
    __title__ = "invalid command definition"


class DuplicateAliasError(CommandException, ValueError):
    __code__ = FaultCode.DUPLICATE_ALIAS
    __title__ = "duplicate alias"


# parse faults: collected into ParseResult, never raised past parse_arguments
class UnknownCommandError(CommandException):
    __code__ = FaultCode.UNKNOWN_COMMAND
    __title__ = "unknown command"
    __exitcode__ = ExitCode.INVALID_ARGUMENTS


class UnknownOptionError(CommandException):
    __code__ = FaultCode.UNKNOWN_OPTION
    __title__ = "unknown option"
    __exitcode__ = ExitCode.INVALID_ARGUMENTS


class MissingOptionValueError(CommandException):
    __code__ = FaultCode.MISSING_OPTION_VALUE
    __title__ = "missing option value"
    __exitcode__ = ExitCode.INVALID_ARGUMENTS


class UnconvertibleValueError(CommandException):
    __code__ = FaultCode.UNCONVERTIBLE_VALUE
    __title__ = "invalid option value"
    __exitcode__ = ExitCode.INVALID_ARGUMENTS


class InternalParseError(CommandException):
    __code__ = FaultCode.PARSE_FAILURE
    __title__ = "parse error"
    __exitcode__ = ExitCode.INVALID_ARGUMENTS


# validation faults: collected into ValidationResult
class MissingRequiredOptionError(CommandException):
    __code__ = FaultCode.MISSING_REQUIRED_OPTION
    __title__ = "missing required option"
    __exitcode__ = ExitCode.INVALID_ARGUMENTS


class MissingArgumentsError(CommandException):
    __code__ = FaultCode.MISSING_ARGUMENTS
    __title__ = "missing arguments"
    __exitcode__ = ExitCode.INVALID_ARGUMENTS


class InvalidChoiceError(CommandException):
    __code__ = FaultCode.INVALID_CHOICE
    __title__ = "invalid choice"
    __exitcode__ = ExitCode.INVALID_ARGUMENTS


class InvalidArgumentError(CommandException):
    __code__ = FaultCode.INVALID_ARGUMENT
    __title__ = "invalid argument"
    __exitcode__ = ExitCode.INVALID_ARGUMENTS


class DelegatedValidationError(CommandException):
    __code__ = FaultCode.DELEGATED_ERROR
    __title__ = "delegated validation error"
    __exitcode__ = ExitCode.INVALID_ARGUMENTS


class DelegatedValidationWarning(CommandWarning):
    __code__ = FaultCode.DELEGATED_WARNING
    __title__ = "delegated validation warning"


class InvalidEnvironmentError(CommandException):
    __code__ = FaultCode.INVALID_ENVIRONMENT
    __title__ = "invalid environment value"
    __exitcode__ = ExitCode.INVALID_ARGUMENTS


def report(fault, /, *, console=console, **options):
    """
    print a fault with extra rendering options (colorful, fancy, ratio, hint...).

    the fault itself is left untouched; options apply to a replaced copy.
    """
    if not hasattr(fault, "__rich__") or not hasattr(fault, "__replace__"):
        raise TypeError("report() argument must be a cdpcli fault")
    console.print(copy.replace(fault, **options) if options else fault)


__all__ = (
    "FaultCode",
    "ExitCode",
    "CommandException",
    "CommandWarning",
    "InvalidDefinitionError",
    "DuplicateAliasError",
    "UnknownCommandError",
    "UnknownOptionError",
    "MissingOptionValueError",
    "UnconvertibleValueError",
    "InternalParseError",
    "MissingRequiredOptionError",
    "MissingArgumentsError",
    "InvalidChoiceError",
    "InvalidArgumentError",
    "DelegatedValidationError",
    "DelegatedValidationWarning",
    "InvalidEnvironmentError",
    "report",
)
