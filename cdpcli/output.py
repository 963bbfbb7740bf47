"""
Rendering of command results.

format_result() turns a CommandResult into text:
- "json": the whole result (success, data / error, exitCode) as indented JSON;
- "text": "Error: <message>" for failures, "Success" when there is no data,
  strings verbatim and anything else as indented JSON.

emit() prints the rendered result: successes on standard output (nothing at
all in quiet mode), failures on standard error.
"""
import json

from rich.console import Console

stdout = Console(soft_wrap=True)
stderr = Console(stderr=True, soft_wrap=True)


def _dump(data):
    return json.dumps(data, indent=2, default=str, ensure_ascii=False)


def format_result(result, format="text", /):
    if format == "json":
        return _dump(result.to_dict())
    if not result.success:
        return f"Error: {result.error or "Unknown error"}"
    match result.data:
        case None:
            return "Success"
        case str() as data:
            return data
        case data:
            return _dump(data)


def emit(result, config, /, *, out=stdout, err=stderr):
    """Print result according to config.format and config.quiet."""
    if result.success and config.quiet:
        return
    console = out if result.success else err
    console.out(format_result(result, config.format), highlight=False)


__all__ = (
    "format_result",
    "emit",
)
