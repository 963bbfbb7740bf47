"""
Dispatch and output behavioral tests (invocations, executors, rendering).

Scope
- Validate Invocation.from_result(): global options stay out, positionals get names.
- Validate Dispatcher: registration forms, missing executors, exception classification.
- Validate format_result() and emit() for text and json.

Conventions
- Test method names follow CamelCase per project convention.
"""

import json
import unittest
from unittest import TestCase

from rich.console import Console

from cdpcli import (
    ArgumentDefinition,
    ArgumentParser,
    CLIConfig,
    CommandDefinition,
    CommandResult,
    Dispatcher,
    Invocation,
    OptionDefinition,
    emit,
    format_result,
    register_builtins,
)
from cdpcli.faults import ExitCode


def copy_command():
    return CommandDefinition(
        "copy",
        "Copy files",
        options=(OptionDefinition("force", "boolean"),),
        arguments=(
            ArgumentDefinition("target", required=True),
            ArgumentDefinition("sources", variadic=True),
        ),
    )


class TestInvocation(TestCase):
    """Invocation.from_result()."""

    def setUp(self):
        self.parser = ArgumentParser()
        self.parser.register_command(copy_command())

    def testGlobalsStayOut(self):
        result = self.parser.parse_arguments(["node", "cli", "--port", "9223", "copy", "--force", "dest", "a", "b"])
        invocation = Invocation.from_result(result, self.parser.get_command("copy"))
        self.assertEqual(dict(invocation.options), {"force": True})
        self.assertEqual(invocation.arguments, ("dest", "a", "b"))
        self.assertEqual(dict(invocation.named), {"target": "dest", "sources": ["a", "b"]})
        self.assertEqual(invocation.args, {"target": "dest", "sources": ["a", "b"], "force": True})

    def testCommandOptionSharingGlobalName(self):
        parser = register_builtins(ArgumentParser())
        result = parser.parse_arguments(["node", "cli", "screenshot", "--format", "jpeg"])
        invocation = Invocation.from_result(result, parser.get_command("screenshot"))
        self.assertEqual(invocation.options["format"], "jpeg")

    def testGlobalOptionSharingCommandNameStaysOut(self):
        parser = register_builtins(ArgumentParser())
        result = parser.parse_arguments(["node", "cli", "--format", "json", "screenshot"])
        invocation = Invocation.from_result(result, parser.get_command("screenshot"))
        self.assertNotIn("format", invocation.options)

    def testOptionBeatsPositionalOfSameName(self):
        parser = register_builtins(ArgumentParser())
        result = parser.parse_arguments(["node", "cli", "eval", "--expression", "1 + 1", "2 + 2"])
        invocation = Invocation.from_result(result, parser.get_command("eval"))
        self.assertEqual(invocation.args["expression"], "1 + 1")

    def testWithoutDefinition(self):
        result = self.parser.parse_arguments(["node", "cli", "--port", "1", "copy", "dest"])
        invocation = Invocation.from_result(result)
        self.assertEqual(dict(invocation.options), {})
        self.assertEqual(dict(invocation.named), {})


class TestDispatcher(TestCase):
    """Dispatcher.dispatch()."""

    def setUp(self):
        self.dispatcher = Dispatcher()
        self.config = CLIConfig()

    def testDecoratorRegistration(self):
        @self.dispatcher.register("echo")
        def echo(invocation, config):
            return {"echo": list(invocation.arguments), "port": config.port}

        self.assertTrue(self.dispatcher.has("echo"))
        result = self.dispatcher.dispatch(Invocation("echo", arguments=("hi",)), self.config)
        self.assertEqual(result, CommandResult(True, {"echo": ["hi"], "port": 9222}))

    def testCommandResultsPassThrough(self):
        self.dispatcher.register("fail", lambda invocation, config: CommandResult.fail("nope", ExitCode.COMMAND_ERROR))
        result = self.dispatcher.dispatch(Invocation("fail"), self.config)
        self.assertFalse(result.success)
        self.assertIs(result.exit_code, ExitCode.COMMAND_ERROR)

    def testMissingExecutor(self):
        result = self.dispatcher.dispatch(Invocation("click"), self.config)
        self.assertFalse(result.success)
        self.assertEqual(result.error, "No executor registered for command: click")
        self.assertIs(result.exit_code, ExitCode.COMMAND_ERROR)

    def testExceptionsAreClassified(self):
        def timeout(invocation, config):
            raise TimeoutError("Navigation timeout of 30000 ms exceeded")

        def refused(invocation, config):
            raise ConnectionRefusedError("connect ECONNREFUSED 127.0.0.1:9222")

        self.dispatcher.register("slow", timeout)
        self.dispatcher.register("down", refused)
        self.assertIs(self.dispatcher.dispatch(Invocation("slow"), self.config).exit_code, ExitCode.TIMEOUT_ERROR)
        self.assertIs(self.dispatcher.dispatch(Invocation("down"), self.config).exit_code, ExitCode.CONNECTION_ERROR)

    def testNonCallableRejected(self):
        with self.assertRaises(TypeError):
            self.dispatcher.register("bad", "not callable")


class TestOutput(TestCase):
    """format_result() and emit()."""

    def testTextFormats(self):
        self.assertEqual(format_result(CommandResult.ok()), "Success")
        self.assertEqual(format_result(CommandResult.ok("Example Domain")), "Example Domain")
        self.assertEqual(format_result(CommandResult.ok({"a": 1})), '{\n  "a": 1\n}')
        self.assertEqual(format_result(CommandResult.fail("boom")), "Error: boom")

    def testJsonFormat(self):
        document = json.loads(format_result(CommandResult.fail("boom", ExitCode.TIMEOUT_ERROR), "json"))
        self.assertEqual(document, {"success": False, "error": "boom", "exitCode": 4})
        self.assertEqual(json.loads(format_result(CommandResult.ok(42), "json")), {"success": True, "data": 42})

    def testEmitRoutesAndQuiet(self):
        out = Console(color_system=None, force_terminal=False, width=120)
        err = Console(color_system=None, force_terminal=False, width=120)
        with out.capture() as captured, err.capture() as failed:
            emit(CommandResult.ok("done"), CLIConfig(), out=out, err=err)
            emit(CommandResult.ok("hidden"), CLIConfig(quiet=True), out=out, err=err)
            emit(CommandResult.fail("boom"), CLIConfig(quiet=True), out=out, err=err)
        self.assertEqual(captured.get(), "done\n")
        self.assertEqual(failed.get(), "Error: boom\n")


if __name__ == "__main__":
    unittest.main()
