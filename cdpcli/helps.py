"""
Help and contextual-assistance generator.

HelpSystem renders four kinds of pages, each as rich Text (str() gives the
plain text, printing on a color console gives the styled one):

- generate_command_help(name): header, USAGE, ARGUMENTS, OPTIONS, EXAMPLES,
  ALIASES, SEE ALSO. Unknown names get an error page with "Did you mean:"
  suggestions and the list of available commands.
- generate_general_help(): usage, global options, commands grouped by category.
- generate_topic_help(name): one HelpTopic page, or the list of topics.
- generate_contextual_help(error, command=None): remediation suggestions whose
  pattern occurs in the error text, then the "command:<name>" suggestions, or
  a generic fallback. It never fails and always returns something.

Commands are looked up on the parser first (aliases included) and on the
schema registry second. Topics and contextual rules start from the tables in
cdpcli.topics and can be extended at runtime with add_help_topic() and
add_contextual_help().

Palette keys (override through __styles__ in __main__):
title, title-rule, section, section-rule, command, option, alias, metavar,
category, error, suggestion, example, muted.
"""
import difflib
import threading

from rich.text import Text

from .arguments import GLOBAL_OPTIONS
from .commands import CommandSchemaRegistry
from .topics import CATEGORIES, COMMAND_TOPICS, CONTEXTUAL_RULES, TOPICS, ContextualHelp, HelpTopic, categorize
from .utils import Unset, palette, progname
from .values import ArgumentType, OptionType

_PALETTE = {
    "title": "bold #00E6FF",
    "title-rule": "#00E6FF dim",
    "section": "bold #36C5F0",
    "section-rule": "#36C5F0 dim",
    "command": "bold #22C55E",
    "option": "bold #FFD600",
    "alias": "italic #9CA3AF",
    "metavar": "#FFD600",
    "category": "bold #FF4D94",
    "error": "bold #EF4444",
    "suggestion": "#E5E7EB",
    "example": "#9CE19C",
    "muted": "#9CA3AF",
}


class _Page:
    """
    line-oriented Text builder.

    fragments are plain strings or (string, palette-key) pairs; "{prog}" in any
    fragment is replaced by the program name.
    """

    def __init__(self, colorful=True):
        self._styles = palette(_PALETTE)
        self._colorful = colorful
        self._prog = progname()
        self._lines = []

    def add(self, *fragments):
        line = Text()
        for fragment in fragments:
            match fragment:
                case (str() as text, str() as key):
                    line.append(text.replace("{prog}", self._prog), self._styles[key] if self._colorful else "")
                case str() as text:
                    line.append(text.replace("{prog}", self._prog))
        self._lines.append(line)
        return self

    def blank(self):
        self._lines.append(Text())
        return self

    def heading(self, title, rule="-", key="section"):
        self.add((title, key))
        return self.add((rule * len(title), key + "-rule"))

    def block(self, text, indent=""):
        for line in text.splitlines() or [""]:
            self.add(indent + line if line else "")
        return self

    def render(self):
        text = Text("\n").join(self._lines)
        text.rstrip()
        return text


def _show(value):
    # defaults as they are typed on the command line
    match value:
        case bool():
            return "true" if value else "false"
        case list() | tuple():
            return ", ".join(map(str, value))
        case _:
            return str(value)


class HelpSystem:
    """
    Help pages and error assistance for a set of commands.

    Parameters
    - registry: CommandSchemaRegistry used when the parser does not know a command.
    - parser: ArgumentParser (or anything with get_command/get_commands); optional.
    - colorful: style the rendered Text; plain Text when False.
    """

    def __init__(self, registry=Unset, parser=None, *, colorful=True):
        self._registry = CommandSchemaRegistry() if registry is Unset else registry
        self._parser = parser
        self._colorful = colorful
        self._lock = threading.Lock()
        self._topics = {topic.name: topic for topic in TOPICS}
        self._rules = {pattern: list(helps) for pattern, helps in CONTEXTUAL_RULES}

    # --- lookup ------------------------------------------------------------------

    def _command(self, name):
        if self._parser is not None and (definition := self._parser.get_command(name)) is not None:
            return definition
        if (definition := self._registry.get(name)) is not None:
            return definition
        for definition in self._registry.all():
            if name in definition.aliases:
                return definition
        return None

    def _commands(self):
        if self._parser is not None:
            return self._parser.get_commands()
        return self._registry.all()

    def _global_options(self):
        return getattr(self._parser, "global_options", GLOBAL_OPTIONS)

    def suggest(self, name, /, limit=5):
        """
        Command names resembling name ("did you mean").

        Close matches (difflib) over names and aliases come first, then
        commands whose name or alias contains name or is contained in it.
        Duplicates are dropped; at most limit names are returned.
        """
        owners = {}
        for definition in self._commands():
            owners.setdefault(definition.name, definition.name)
            for alias in definition.aliases:
                owners.setdefault(alias, definition.name)

        suggestions = [owners[match] for match in difflib.get_close_matches(name, owners.keys(), limit)]
        if name:
            suggestions += [owner for spelling, owner in owners.items() if name in spelling or spelling in name]
        return list(dict.fromkeys(suggestions))[:limit]

    # --- command help ------------------------------------------------------------

    def generate_command_help(self, name, /):
        definition = self._command(name)
        if definition is None:
            return self._command_not_found(name)

        page = _Page(self._colorful)
        page.heading(definition.name.upper(), "=", "title")
        page.add(definition.description).blank()

        page.heading("USAGE")
        page.add("  ", ("{prog} " + definition.synopsis, "command")).blank()

        if definition.arguments:
            page.heading("ARGUMENTS")
            for argument in definition.arguments:
                label = argument.name + ("..." if argument.variadic else "")
                page.add("  ", (label, "metavar"), " ", ("(required)" if argument.required else "(optional)", "muted"))
                if argument.description:
                    page.add("    ", argument.description)
                if argument.type is not ArgumentType.STRING:
                    page.add("    Type: ", (str(argument.type), "muted"))
                page.blank()

        if definition.options:
            page.heading("OPTIONS")
            for option in definition.options:
                page.add("  ", (", ".join(option.flags), "option"))
                if option.description:
                    page.add("    ", option.description)
                if option.type is not OptionType.STRING:
                    page.add("    Type: ", (str(option.type), "muted"))
                if option.required:
                    page.add("    Required: yes")
                if option.default is not None:
                    page.add("    Default: ", (_show(option.default), "muted"))
                if option.choices:
                    page.add("    Choices: ", (", ".join(option.choices), "metavar"))
                page.blank()

        if definition.examples:
            page.heading("EXAMPLES")
            for index, example in enumerate(definition.examples, 1):
                page.add(f"  {index}. ", example.description or "Example usage")
                page.add("     $ ", (example.command, "example")).blank()

        if definition.aliases:
            page.heading("ALIASES")
            page.add("  ", (", ".join(definition.aliases), "alias")).blank()

        if topics := self.related_topics(definition.name):
            page.heading("SEE ALSO")
            page.add("  Help topics: ", (", ".join(topics), "command"))
            page.add("  Use '{prog} help topic <topic-name>' for more information")

        return page.render()

    def related_topics(self, name, /):
        """Registered topics listed under SEE ALSO for a command."""
        return [topic for topic in COMMAND_TOPICS.get(name, ()) if self.has_help_topic(topic)]

    def _command_not_found(self, name):
        page = _Page(self._colorful)
        page.add(("ERROR: Unknown command '%s'" % name, "error")).blank()

        if suggestions := self.suggest(name):
            page.add(("Did you mean:", "section"))
            for suggestion in suggestions:
                page.add("  ", (suggestion, "command"))
            page.blank()

        page.add(("Available commands:", "section"))
        for definition in sorted(self._commands(), key=lambda definition: definition.name):
            page.add("  ", (definition.name.ljust(20), "command"), " ", definition.description)

        page.blank().add(("For more information:", "section"))
        page.add("  ", ("{prog} help", "command"))
        return page.render()

    # --- general help ------------------------------------------------------------

    def generate_general_help(self):
        page = _Page(self._colorful)
        page.heading(progname().upper() + " HELP", "=", "title")
        page.add("Command-line interface for Chrome DevTools Protocol browser automation.").blank()

        page.heading("USAGE")
        page.add("  ", ("{prog}", "command"), " [global-options] <command> [command-options] [arguments]").blank()

        page.heading("GLOBAL OPTIONS")
        for option in self._global_options():
            flags = ", ".join(option.flags)
            if option.type is not OptionType.BOOLEAN:
                flags += " <%s>" % option.name
            details = option.description
            if option.choices:
                details += " (%s)" % "|".join(option.choices)
            if option.default is not None and option.type is not OptionType.BOOLEAN:
                details += " (default: %s)" % _show(option.default)
            page.add("  ", (flags.ljust(36), "option"), " ", details)
        page.add("  ", ("-V, --version".ljust(36), "option"), " ", "Show version number")
        page.add("  ", ("--help".ljust(36), "option"), " ", "Show this help").blank()

        page.heading("AVAILABLE COMMANDS")
        grouped = {}
        for definition in self._commands():
            grouped.setdefault(categorize(definition.name), []).append(definition)
        for title, _ in CATEGORIES:
            if title not in grouped:
                continue
            page.blank().add((title + ":", "category"))
            for definition in sorted(grouped[title], key=lambda definition: definition.name):
                aliases = "(%s)" % ", ".join(definition.aliases) if definition.aliases else ""
                page.add(
                    "  ",
                    (definition.name.ljust(24), "command"),
                    (aliases.ljust(16), "alias"),
                    " ",
                    definition.description,
                )

        page.blank().heading("GETTING MORE HELP")
        page.add("For detailed help on a specific command:")
        page.add("  ", ("{prog} help <command>", "command")).blank()
        page.add("For a help topic:")
        page.add("  ", ("{prog} help topic <topic-name>", "command"))
        page.add("  Topics: ", (", ".join(self.available_topics()), "muted")).blank()
        page.add("Failing commands show contextual suggestions automatically.")
        return page.render()

    # --- topics ------------------------------------------------------------------

    def generate_topic_help(self, name, /):
        topic = self._topics.get(name)
        if topic is None:
            return self._topic_not_found(name)

        page = _Page(self._colorful)
        page.heading(topic.title.upper(), "=", "title")
        page.block(topic.content).blank()

        if topic.examples:
            page.heading("EXAMPLES")
            for index, example in enumerate(topic.examples, 1):
                page.add(f"{index}. ", (example, "example"))
            page.blank()

        if topic.see_also:
            page.heading("SEE ALSO")
            page.add((", ".join(topic.see_also), "command"))

        return page.render()

    def _topic_not_found(self, name):
        page = _Page(self._colorful)
        page.add(("ERROR: Unknown help topic '%s'" % name, "error")).blank()
        page.add(("Available help topics:", "section"))
        for topic in sorted(self._topics.copy().values(), key=lambda topic: topic.name):
            page.add("  ", (topic.name.ljust(20), "command"), " ", topic.description)
        page.blank().add(("Usage:", "section"))
        page.add("  ", ("{prog} help topic <topic-name>", "command"))
        return page.render()

    def add_help_topic(self, topic, /):
        with self._lock:
            self._topics[topic.name] = topic

    def available_topics(self):
        return sorted(self._topics.copy())

    def has_help_topic(self, name, /):
        return name in self._topics

    # --- contextual help -----------------------------------------------------------

    def contextual_suggestions(self, error, command=None, /):
        """
        ContextualHelp entries for an error text, in rule registration order.

        Plain patterns match as case-insensitive substrings; the
        "command:<name>" entries of the given command follow.
        """
        text = str(error).lower()
        suggestions = []
        for pattern, helps in list(self._rules.items()):
            if not pattern.startswith("command:") and pattern.lower() in text:
                suggestions.extend(helps)
        if command:
            suggestions.extend(self._rules.get("command:" + command, ()))
        return suggestions

    def generate_contextual_help(self, error, command=None, /):
        page = _Page(self._colorful)
        page.heading("HELP SUGGESTIONS")

        if suggestions := self.contextual_suggestions(error, command):
            for index, entry in enumerate(suggestions, 1):
                page.add(f"{index}. ", (entry.suggestion, "suggestion"))
                if entry.example:
                    page.add("   Example: ", (entry.example, "example"))
                if entry.related_commands:
                    page.add("   Related commands: ", (", ".join(entry.related_commands), "command"))
                page.blank()
        else:
            page.add("No specific suggestions available for this error.").blank()
            page.add(("Try:", "section"))
            page.add("  - Check command syntax with: ", ("{prog} help <command>", "command"))
            page.add("  - Verify Chrome is running with --remote-debugging-port=9222")
            page.add("  - Use the --debug flag for detailed error information").blank()

        if command:
            page.add("For detailed help on '%s' command:" % command)
            page.add("  ", ("{prog} help " + command, "command"))

        return page.render()

    def add_contextual_help(self, pattern, entry, /):
        with self._lock:
            self._rules.setdefault(pattern, []).append(entry)


__all__ = (
    "HelpSystem",
    "HelpTopic",
    "ContextualHelp",
)
