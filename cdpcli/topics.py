"""
Help knowledge base: topic records, contextual-help records and the built-in tables.

- HelpTopic: a long-form help page ("cdpcli help topic selectors").
- ContextualHelp: one remediation suggestion attached to an error pattern.
- TOPICS / CONTEXTUAL_RULES: the tables a HelpSystem starts from.
- COMMAND_TOPICS: topics listed under SEE ALSO in command help.
- CATEGORIES: fixed order of command categories in general help.

Text may contain "{prog}", replaced by the program name when rendered.
"""
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class HelpTopic:
    name: str
    title: str
    description: str
    content: str
    examples: tuple[str, ...] = ()
    see_also: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ContextualHelp:
    suggestion: str
    example: str | None = None
    related_commands: tuple[str, ...] = ()


TOPICS = (
    HelpTopic(
        "configuration",
        "Configuration Management",
        "Configuration sources and their precedence",
        """\
Settings are resolved from several sources, first match wins:

1. Command-line options (highest priority)
2. Environment variables
3. Default values (lowest priority)

Environment variables follow the pattern CDP_<OPTION_NAME> (e.g., CDP_HOST, CDP_PORT)
and are converted with the same rules as the matching command-line option.

The --config option carries a configuration file path through to commands;
{prog} itself does not read configuration files.""",
        examples=(
            "{prog} --host remote-chrome --port 9223 eval \"document.title\"",
            "CDP_HOST=remote-chrome CDP_PORT=9223 {prog} screenshot",
            "CDP_FORMAT=json {prog} snapshot",
        ),
        see_also=("output-formats", "scripting"),
    ),
    HelpTopic(
        "selectors",
        "CSS Selectors Guide",
        "Guide to using CSS selectors effectively",
        """\
CSS selectors target elements for interaction commands like click, fill and hover.

Supported selector types:
- ID selectors: #element-id
- Class selectors: .class-name
- Attribute selectors: [data-testid="value"]
- Pseudo-selectors: :first-child, :nth-of-type(2)
- Complex selectors: .parent > .child, .item:not(.disabled)

Best practices:
- Use data-testid attributes for reliable automation
- Prefer specific selectors over generic ones
- Test selectors in browser DevTools first""",
        examples=(
            "{prog} click \"#submit-button\"",
            "{prog} fill \"[data-testid=username]\" \"user@example.com\"",
            "{prog} hover \".dropdown-menu > .first-item\"",
        ),
        see_also=("automation", "debugging"),
    ),
    HelpTopic(
        "automation",
        "Browser Automation Best Practices",
        "Guidelines for effective browser automation",
        """\
Effective browser automation requires careful planning and robust selectors.

Key principles:
- Wait for elements to be ready before interaction
- Use explicit waits instead of arbitrary delays
- Handle dynamic content and loading states
- Check exit codes and retry where it makes sense

Common patterns:
- Navigate, wait, interact, verify
- Fill forms step by step with validation
- Take screenshots for debugging failed runs
- Monitor console and network for errors""",
        examples=(
            "{prog} navigate \"https://example.com\" && {prog} wait_for \"#content\" && {prog} click \".login\"",
            "{prog} fill \"#username\" \"user\" && {prog} fill \"#password\" \"pass\" && {prog} click \"#login\"",
        ),
        see_also=("selectors", "debugging", "scripting"),
    ),
    HelpTopic(
        "output-formats",
        "Output Formats and Processing",
        "Understanding the output formats and output modes",
        """\
Results can be printed in two formats:

Text format (default):
- Human-readable output
- "Success" when a command returns nothing

JSON format (--format json):
- Machine-parseable, the whole result is printed
- Suitable for scripting and automation

Quiet mode (--quiet):
- Suppresses output of successful commands
- Errors are still reported

Verbose mode (--verbose):
- Includes informational log records
- Combine with --debug for full traces""",
        examples=(
            "{prog} --format json eval \"document.title\"",
            "{prog} --quiet screenshot --filename result.png",
            "{prog} --verbose --debug console",
        ),
        see_also=("configuration", "scripting"),
    ),
    HelpTopic(
        "debugging",
        "Debugging and Troubleshooting",
        "Tools and techniques for debugging CLI issues",
        """\
When commands don't work as expected, use these techniques:

Debug mode (--debug):
- Shows detailed execution logs
- Includes tracebacks for errors

Verbose mode (--verbose):
- Shows informational progress records

Common issues and solutions:
- Connection refused: check Chrome is running with --remote-debugging-port=9222
- Element not found: verify selectors in browser DevTools
- Timeout errors: increase --timeout or wait for page load
- Permission denied: check file paths and permissions

Monitoring commands:
- Use console to check for JavaScript errors
- Use network to verify API calls
- Take screenshots to see the current page state""",
        examples=(
            "{prog} --debug --verbose click \"#button\"",
            "{prog} console --types error",
            "{prog} screenshot --filename debug.png",
        ),
        see_also=("automation", "scripting"),
    ),
    HelpTopic(
        "scripting",
        "Scripting and Integration",
        "Using the CLI in scripts and automation workflows",
        """\
{prog} is meant to be driven from shell scripts and CI pipelines.

Shell scripting tips:
- Check exit codes for error handling
- Use --format json for parsing results
- Combine commands with && for sequential execution
- Use --quiet to reduce noise

Exit codes:
- 0: Success
- 1: General error
- 2: Connection error
- 3: Command error
- 4: Timeout
- 5: Invalid arguments or validation failure

CI integration:
- Set CDP_HOST and CDP_PORT environment variables
- Capture screenshots on test failures
- Monitor console errors in automated tests""",
        examples=(
            "{prog} eval \"document.readyState === 'complete'\" && {prog} screenshot",
            "{prog} --format json eval \"performance.timing\" | jq .data.loadEventEnd",
        ),
        see_also=("configuration", "output-formats"),
    ),
    HelpTopic(
        "installation",
        "Installation and Setup",
        "Setting up Chrome and editor integrations",
        """\
Chrome setup:
- Start Chrome with: --remote-debugging-port=9222
- For headless mode: --headless --disable-gpu
- For containers: --no-sandbox --disable-dev-shm-usage

Editor integrations:
- Cursor: use install_cursor_command to install custom commands
- Claude: use install_claude_skill to install a skill definition""",
        examples=(
            "chrome --remote-debugging-port=9222 --headless",
            "{prog} install_cursor_command --target-directory ./commands",
            "{prog} install_claude_skill --skill-type automation",
        ),
        see_also=("configuration",),
    ),
)

CONTEXTUAL_RULES = (
    ("connection refused", (
        ContextualHelp(
            "Make sure Chrome is running with remote debugging enabled",
            "chrome --remote-debugging-port=9222",
            ("help",),
        ),
        ContextualHelp(
            "Check if the host and port are correct",
            "{prog} --host localhost --port 9222 <command>",
            ("help",),
        ),
    )),
    ("element not found", (
        ContextualHelp(
            "Verify the CSS selector in browser DevTools",
            "Open DevTools, then run document.querySelector(\"#your-selector\") in the console",
            ("help topic selectors",),
        ),
        ContextualHelp(
            "Wait for the page to load completely before interacting",
            "{prog} wait_for \"#element\" && {prog} click \"#element\"",
            ("wait_for",),
        ),
    )),
    ("timeout", (
        ContextualHelp(
            "Increase the timeout value for slow operations",
            "{prog} --timeout 60000 <command>",
            ("help",),
        ),
        ContextualHelp(
            "Check if the page is loading or if there are network issues",
            "{prog} console --types error",
            ("console", "network"),
        ),
    )),
    ("parse error", (
        ContextualHelp(
            "Check command syntax and argument order",
            "{prog} help <command-name>",
            ("help",),
        ),
        ContextualHelp(
            "Use quotes around arguments containing spaces or special characters",
            "{prog} eval \"document.querySelector('.my-class')\"",
            ("help topic scripting",),
        ),
    )),
    ("unknown command", (
        ContextualHelp(
            "List the available commands and their aliases",
            "{prog} help",
            ("help",),
        ),
    )),
    ("unknown option", (
        ContextualHelp(
            "Check the options the command accepts",
            "{prog} help <command-name>",
            ("help",),
        ),
        ContextualHelp(
            "Global options go before the command name",
            "{prog} --port 9223 <command>",
            ("help",),
        ),
    )),
    ("requires a value", (
        ContextualHelp(
            "Pass a value after the option, or attach it with '='",
            "{prog} screenshot --filename page.png",
            ("help",),
        ),
    )),
    ("must be a number", (
        ContextualHelp(
            "Numeric options take plain numbers",
            "{prog} --timeout 60000 <command>",
            ("help",),
        ),
    )),
    ("validation failed", (
        ContextualHelp(
            "Check required arguments and option types",
            "{prog} help <command-name>",
            ("help",),
        ),
        ContextualHelp(
            "Ensure file paths exist and URLs are valid",
            "ls -la /path/to/file.js",
            ("help topic debugging",),
        ),
    )),
    ("missing required", (
        ContextualHelp(
            "Check required arguments and options",
            "{prog} help <command-name>",
            ("help",),
        ),
    )),
    ("permission denied", (
        ContextualHelp(
            "Check file permissions and directory access",
            "chmod +r /path/to/file",
            ("help topic debugging",),
        ),
        ContextualHelp(
            "Ensure the target directory exists and is writable",
            "mkdir -p /path/to/directory && chmod +w /path/to/directory",
            ("help topic installation",),
        ),
    )),
    ("command:eval", (
        ContextualHelp(
            "Use proper JavaScript syntax and escape quotes",
            "{prog} eval \"document.querySelector('#id').textContent\"",
            ("help eval", "help topic scripting"),
        ),
    )),
    ("command:screenshot", (
        ContextualHelp(
            "Ensure the output directory exists and is writable",
            "mkdir -p screenshots && {prog} screenshot --filename screenshots/page.png",
            ("help screenshot",),
        ),
    )),
)

COMMAND_TOPICS = {
    "eval": ("configuration", "scripting"),
    "screenshot": ("configuration", "output-formats"),
    "snapshot": ("output-formats",),
    "click": ("selectors", "automation"),
    "fill": ("selectors", "automation"),
    "fill_form": ("selectors", "automation"),
    "hover": ("selectors", "automation"),
    "drag": ("selectors", "automation"),
    "upload_file": ("selectors", "automation"),
    "wait_for": ("selectors", "automation"),
    "console": ("debugging",),
    "network": ("debugging",),
    "install_cursor_command": ("installation",),
    "install_claude_skill": ("installation",),
}

CATEGORIES = (
    ("JavaScript Execution", ("eval", "execute", "js")),
    ("Page Capture", ("screenshot", "capture", "snapshot", "dom")),
    ("User Interaction", (
        "click", "hover", "fill", "fill_form", "type", "drag", "press", "press_key",
        "upload", "upload_file", "handle_dialog",
    )),
    ("Monitoring & Debugging", ("console", "network", "logs", "requests")),
    ("Navigation & Timing", ("navigate", "goto", "open", "wait", "wait_for")),
    ("Installation & Setup", ()),
    ("Help & Information", ("help", "version")),
    ("General", ()),
)


def categorize(name, /):
    """Category title for a command name (General when nothing matches)."""
    for title, names in CATEGORIES:
        if name in names:
            return title
    if "console" in name or "network" in name:
        return "Monitoring & Debugging"
    if "install" in name:
        return "Installation & Setup"
    return "General"


__all__ = (
    "HelpTopic",
    "ContextualHelp",
    "TOPICS",
    "CONTEXTUAL_RULES",
    "COMMAND_TOPICS",
    "CATEGORIES",
    "categorize",
)
