"""
Help module behavioral tests (command, general, topic and contextual help).

Scope
- Validate command help sections, alias lookup and registry fallback.
- Validate "did you mean" suggestions for unknown commands.
- Validate general help layout and category order.
- Validate topic pages and runtime topic registration.
- Validate contextual suggestions, command rules and the generic fallback.

Conventions
- Test method names follow CamelCase per project convention.
- Pages are compared through str(), which drops styling.
"""

import unittest
from unittest import TestCase

from cdpcli import (
    ArgumentDefinition,
    ArgumentParser,
    CommandDefinition,
    CommandSchemaRegistry,
    ContextualHelp,
    HelpSystem,
    HelpTopic,
    OptionDefinition,
    register_builtins,
)


def deploy():
    return CommandDefinition(
        "deploy",
        "Deploy the application",
        aliases=("d",),
        options=(OptionDefinition("target", short="t", required=True, description="Deployment target"),),
        arguments=(ArgumentDefinition("env", required=True, description="Environment name"),),
    )


def ordered(test, page, *fragments):
    positions = [page.index(fragment) for fragment in fragments]
    test.assertEqual(positions, sorted(positions), fragments)


class TestCommandHelp(TestCase):
    """generate_command_help()."""

    def setUp(self):
        self.parser = register_builtins(ArgumentParser())
        self.parser.register_command(deploy())
        self.helps = self.parser.help_system

    def testSectionsInOrder(self):
        page = str(self.helps.generate_command_help("screenshot"))
        ordered(self, page, "SCREENSHOT", "Capture page screenshot", "USAGE", "OPTIONS", "EXAMPLES", "ALIASES", "SEE ALSO")
        self.assertIn("cdpcli screenshot [options]", page)
        self.assertIn("-o, --filename", page)
        self.assertIn("--full-page, --no-full-page", page)
        self.assertIn("Choices: png, jpeg, webp", page)
        self.assertIn("Default: png", page)
        self.assertIn("ss, capture", page)
        self.assertIn("Help topics: configuration, output-formats", page)

    def testArgumentsSection(self):
        page = str(self.helps.generate_command_help("deploy"))
        ordered(self, page, "USAGE", "ARGUMENTS", "OPTIONS", "ALIASES")
        self.assertIn("cdpcli deploy [options] <env>", page)
        self.assertIn("env (required)", page)
        self.assertIn("Environment name", page)
        self.assertIn("Required: yes", page)
        self.assertNotIn("SEE ALSO", page)

    def testExamplesAreNumbered(self):
        page = str(self.helps.generate_command_help("eval"))
        self.assertIn("1. Get page title", page)
        self.assertIn("$ cdpcli eval \"document.title\"", page)

    def testAliasLookup(self):
        self.assertTrue(str(self.helps.generate_command_help("ss")).startswith("SCREENSHOT"))

    def testUnknownCommandSuggests(self):
        page = str(self.helps.generate_command_help("depoy"))
        ordered(self, page, "ERROR: Unknown command 'depoy'", "Did you mean:", "deploy", "Available commands:")
        self.assertIn("For more information:", page)

    def testSuggestionsAreLimitedAndUnique(self):
        suggestions = self.helps.suggest("install")
        self.assertEqual(len(suggestions), len(set(suggestions)))
        self.assertLessEqual(len(suggestions), 5)
        self.assertIn("install_cursor_command", suggestions)
        self.assertEqual(self.helps.suggest("zzzzzz"), [])

    def testRegistryFallback(self):
        helps = HelpSystem(CommandSchemaRegistry([deploy()]))
        self.assertTrue(str(helps.generate_command_help("deploy")).startswith("DEPLOY"))
        self.assertTrue(str(helps.generate_command_help("d")).startswith("DEPLOY"))


class TestGeneralHelp(TestCase):
    """generate_general_help() and parser routing."""

    def setUp(self):
        self.parser = register_builtins(ArgumentParser())
        self.parser.register_command(deploy())

    def testLayout(self):
        page = str(self.parser.generate_help())
        ordered(self, page, "CDPCLI HELP", "USAGE", "GLOBAL OPTIONS", "AVAILABLE COMMANDS", "GETTING MORE HELP")
        self.assertIn("-p, --port <port>", page)
        self.assertIn("(default: 9222)", page)
        self.assertIn("-V, --version", page)

    def testCategoryOrder(self):
        page = str(self.parser.generate_help())
        ordered(
            self,
            page,
            "JavaScript Execution:",
            "Page Capture:",
            "User Interaction:",
            "Monitoring & Debugging:",
            "Navigation & Timing:",
            "Installation & Setup:",
            "Help & Information:",
            "General:",
        )
        self.assertGreater(page.index("deploy"), page.index("General:"))

    def testRouting(self):
        self.assertTrue(str(self.parser.generate_help("eval")).startswith("EVAL"))
        self.assertTrue(str(self.parser.generate_help("topic selectors")).startswith("CSS SELECTORS GUIDE"))
        self.assertTrue(str(self.parser.generate_help("topic")).startswith("ERROR: Unknown help topic"))


class TestTopics(TestCase):
    """Topic pages and runtime registration."""

    def setUp(self):
        self.helps = HelpSystem()

    def testTopicPage(self):
        page = str(self.helps.generate_topic_help("selectors"))
        ordered(self, page, "CSS SELECTORS GUIDE", "Supported selector types:", "EXAMPLES", "SEE ALSO")
        self.assertIn("1. cdpcli click \"#submit-button\"", page)
        self.assertIn("automation, debugging", page)

    def testUnknownTopic(self):
        page = str(self.helps.generate_topic_help("nope"))
        self.assertTrue(page.startswith("ERROR: Unknown help topic 'nope'"))
        ordered(self, page, "automation", "configuration", "debugging", "selectors")

    def testAddTopic(self):
        self.assertFalse(self.helps.has_help_topic("proxies"))
        self.helps.add_help_topic(HelpTopic("proxies", "Proxies", "Proxy setup", "Use a proxy."))
        self.assertTrue(self.helps.has_help_topic("proxies"))
        self.assertIn("proxies", self.helps.available_topics())
        self.assertEqual(self.helps.available_topics(), sorted(self.helps.available_topics()))
        self.assertTrue(str(self.helps.generate_topic_help("proxies")).startswith("PROXIES"))


class TestContextualHelp(TestCase):
    """generate_contextual_help() and add_contextual_help()."""

    def setUp(self):
        self.helps = HelpSystem()

    def testPatternMatchIsCaseInsensitive(self):
        page = str(self.helps.generate_contextual_help("connect ECONNREFUSED: Connection Refused"))
        self.assertIn("HELP SUGGESTIONS", page)
        self.assertIn("1. Make sure Chrome is running with remote debugging enabled", page)
        self.assertIn("Example: chrome --remote-debugging-port=9222", page)

    def testCommandRulesFollowPatternRules(self):
        page = str(self.helps.generate_contextual_help("Timeout waiting for result", "eval"))
        ordered(self, page, "Increase the timeout value", "Use proper JavaScript syntax", "For detailed help on 'eval' command:")
        self.assertIn("cdpcli help eval", page)

    def testFallback(self):
        page = str(self.helps.generate_contextual_help("something odd"))
        self.assertIn("No specific suggestions available for this error.", page)
        self.assertIn("--remote-debugging-port=9222", page)
        self.assertIn("--debug", page)

    def testExceptionsAreAccepted(self):
        page = str(self.helps.generate_contextual_help(RuntimeError("Element not found: #missing"), "click"))
        self.assertIn("Verify the CSS selector in browser DevTools", page)
        self.assertIn("For detailed help on 'click' command:", page)

    def testAddContextualHelp(self):
        self.helps.add_contextual_help("quota exceeded", ContextualHelp("Free some disk space", "df -h"))
        suggestions = self.helps.contextual_suggestions("Quota exceeded while saving")
        self.assertEqual(suggestions, [ContextualHelp("Free some disk space", "df -h")])


if __name__ == "__main__":
    unittest.main()
