"""
cdpcli entry point.

    cdpcli [global-options] <command> [command-options] [arguments]

main() wires the pieces together: the built-in schema registry, the parser
(and through it the help system), the configuration, logging and the
dispatcher. It prints help and version itself, reports parse and validation
faults with contextual suggestions, dispatches everything else and returns
the exit code. Executors are supplied by the host through a Dispatcher;
commands without one fail with COMMAND_ERROR.

Presentation settings read from this module:
- __prog__: program name shown in help and faults.
- __styles__: palette overrides (see cdpcli.faults and cdpcli.helps).
- __codes__: FaultCode -> label overrides.
"""
import logging
import os
import shlex
import sys

from rich.logging import RichHandler

from . import __version__
from .catalog import builtin_registry, register_builtins
from .config import load_config
from .dispatch import Dispatcher, Invocation
from .faults import CommandException, ExitCode, report
from .output import emit, stderr, stdout
from .parser import ArgumentParser
from .utils import Unset, coalesce

__prog__ = "cdpcli"

logger = logging.getLogger(__package__ or "cdpcli")


def _tokens(prompt):
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    return list(prompt)


def _configure(config, console):
    # one handler on the package logger, replaced on every run
    root = logging.getLogger("cdpcli")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.addHandler(RichHandler(
        console=console,
        show_path=config.debug,
        rich_tracebacks=config.debug,
        markup=False,
    ))
    root.setLevel(config.level)
    root.propagate = False


def main(prompt=Unset, /, *, parser=Unset, dispatcher=Unset, environ=os.environ, out=stdout, err=stderr):
    """
    Run one command line and return its exit code.

    prompt is a shell-like string (split with shlex), an iterable of tokens,
    or omitted for sys.argv[1:].
    """
    parser = coalesce(parser, None) or register_builtins(ArgumentParser(builtin_registry()))
    dispatcher = coalesce(dispatcher, None) or Dispatcher()

    result = parser.parse_arguments(_tokens(prompt), skip=0)

    try:
        config = load_config(result.global_options, environ)
    except CommandException as fault:
        report(fault, console=err)
        return int(fault.exit_code)
    _configure(config, err)

    if not result.success:
        for fault in result.faults:
            report(fault, console=err)
        if not config.quiet:
            err.print(parser.generate_contextual_help(result.errors[0], result.command))
        return int(ExitCode.classify(result.faults[0]))

    match result.command:
        case "help":
            out.print(parser.generate_help(" ".join(result.arguments)))
            return int(ExitCode.SUCCESS)
        case "version":
            out.out(f"{__prog__} {__version__}", highlight=False)
            return int(ExitCode.SUCCESS)

    validation = parser.validate_arguments(result.command, result)
    for fault in validation.faults:
        report(fault, console=err)
    if not validation:
        if not config.quiet:
            err.print(parser.generate_contextual_help(
                "Validation failed: " + "; ".join(validation.errors),
                result.command,
            ))
        return int(ExitCode.INVALID_ARGUMENTS)

    invocation = Invocation.from_result(result, parser.get_command(result.command))
    outcome = dispatcher.dispatch(invocation, config)
    emit(outcome, config, out=out, err=err)
    if not outcome.success and not config.quiet:
        err.print(parser.generate_contextual_help(outcome.error, result.command))
    logger.debug("%s finished with exit code %d", result.command, outcome.exit_code)
    return int(outcome.exit_code)


if __name__ == "__main__":
    sys.exit(main())
