"""
Command dispatch: from a validated ParseResult to an executor call.

- Invocation: command name, the command's own options (plain values) and the
  positionals, also available by argument name.
- CommandResult: what an executor produced; success flag, data or error,
  and the exit code the process should report.
- Dispatcher: executors keyed by canonical command name.

An executor is any callable (invocation, config) -> CommandResult | data.
Plain data is wrapped into a successful result; exceptions become failed
results classified through ExitCode.classify(). Nothing escapes dispatch().
"""
import logging
import threading
from dataclasses import dataclass, field
from types import MappingProxyType

from .faults import ExitCode
from .utils import Unset, rename
from .values import unwrap

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Invocation:
    command: str
    options: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))
    arguments: tuple[str, ...] = ()
    named: MappingProxyType = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_result(cls, result, definition=None, /):
        """
        Build an invocation from a ParseResult.

        Only the command's own options are kept; global options reach
        executors through the CLIConfig. With a definition, positionals are
        also named after their ArgumentDefinition; a trailing variadic argument collects a list.
        """
        options = {name: unwrap(value) for name, value in result.command_options.items()}

        named = {}
        if definition is not None:
            for index, raw in enumerate(result.arguments):
                argument = definition.argument(index)
                if argument is None:
                    continue
                if argument.variadic:
                    named.setdefault(argument.name, []).append(raw)
                else:
                    named.setdefault(argument.name, raw)

        return cls(
            result.command,
            MappingProxyType(options),
            tuple(result.arguments),
            MappingProxyType(named),
        )

    @property
    def args(self):
        """Named positionals and options in one dict; an option beats a positional of the same name."""
        return dict(self.named) | dict(self.options)


@dataclass(frozen=True, slots=True)
class CommandResult:
    success: bool
    data: object = None
    error: str | None = None
    exit_code: ExitCode = ExitCode.SUCCESS

    @classmethod
    def ok(cls, data=None, /):
        return cls(True, data)

    @classmethod
    def fail(cls, error, exit_code=ExitCode.GENERAL_ERROR, /):
        return cls(False, error=str(error), exit_code=ExitCode(exit_code))

    def to_dict(self):
        document = {"success": self.success}
        if self.data is not None:
            document["data"] = self.data
        if self.error is not None:
            document["error"] = self.error
        if not self.success:
            document["exitCode"] = int(self.exit_code)
        return document


class Dispatcher:
    """
    Executor table.

    >>> dispatcher = Dispatcher()
    >>> @dispatcher.register("version")
    ... def version(invocation, config):
    ...     return "1.0.0"
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._executors = {}

    def register(self, name, executor=Unset, /):
        """Register executor for name; without an executor, return a decorator doing so."""
        if executor is Unset:
            @rename("register")
            def decorator(executor):
                self.register(name, executor)
                return executor
            return decorator

        if not callable(executor):
            raise TypeError("executor for %r must be callable" % name)
        with self._lock:
            self._executors[name] = executor
        return executor

    def has(self, name, /):
        return name in self._executors

    def dispatch(self, invocation, config, /):
        executor = self._executors.get(invocation.command)
        if executor is None:
            return CommandResult.fail(
                f"No executor registered for command: {invocation.command}",
                ExitCode.COMMAND_ERROR,
            )

        logger.info("executing %s", invocation.command)
        logger.debug("arguments for %s: %r", invocation.command, invocation.args)
        try:
            outcome = executor(invocation, config)
        except Exception as exception:
            logger.debug("%s failed", invocation.command, exc_info=True)
            return CommandResult.fail(str(exception) or type(exception).__name__, ExitCode.classify(exception))

        if isinstance(outcome, CommandResult):
            return outcome
        return CommandResult.ok(outcome)


__all__ = (
    "Invocation",
    "CommandResult",
    "Dispatcher",
)
