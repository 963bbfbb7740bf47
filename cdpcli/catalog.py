"""
Built-in browser command schemas.

BUILTIN_COMMANDS lists the definitions of the commands cdpcli ships with.
They describe the command line only; executing them is the job of whatever
executors are registered with the Dispatcher.

- builtin_registry(): a CommandSchemaRegistry holding every built-in command.
- register_builtins(parser): register every built-in command with a parser.
"""
from .arguments import ArgumentDefinition as Argument
from .arguments import CommandExample as Example
from .arguments import OptionDefinition as Option
from .commands import CommandDefinition, CommandSchemaRegistry

BUILTIN_COMMANDS = (
    CommandDefinition(
        "help",
        "Show help information for commands",
        usage="help [command | topic <topic-name>]",
        aliases=("h",),
        examples=(
            Example("{prog} help", "Show general help"),
            Example("{prog} help eval", "Show help for eval command"),
            Example("{prog} help topic selectors", "Show the selectors help topic"),
        ),
        arguments=(
            Argument("command", description="Command (or 'topic <name>') to show help for"),
        ),
    ),
    CommandDefinition(
        "version",
        "Show version information",
        usage="version",
        aliases=("v",),
        examples=(
            Example("{prog} version", "Display version number"),
        ),
    ),
    CommandDefinition(
        "eval",
        "Execute JavaScript code in the browser",
        usage="eval [options] <expression>",
        aliases=("js", "execute"),
        examples=(
            Example("{prog} eval \"document.title\"", "Get page title"),
            Example("{prog} eval --file script.js", "Execute JavaScript file"),
            Example("{prog} --format json eval \"performance.timing\"", "Get performance data as JSON"),
            Example("{prog} eval --no-await-promise \"Promise.resolve(42)\"", "Execute without awaiting promises"),
        ),
        options=(
            Option("expression", short="e", description="JavaScript expression to execute"),
            Option("file", short="f", description="JavaScript file to execute"),
            Option("await-promise", "boolean", default=True, description="Await promise results"),
            Option("return-by-value", "boolean", default=True,
                   description="Return result by value instead of object reference"),
        ),
        arguments=(
            Argument("expression", description="JavaScript expression to execute (alternative to --expression)"),
        ),
    ),
    CommandDefinition(
        "screenshot",
        "Capture page screenshot",
        usage="screenshot [options]",
        aliases=("ss", "capture"),
        examples=(
            Example("{prog} screenshot", "Take basic screenshot"),
            Example("{prog} screenshot --filename page.png --full-page", "Full page screenshot"),
            Example("{prog} screenshot --width 800 --height 600 --format jpeg --quality 90", "Custom size and quality"),
            Example("{prog} screenshot --clip-x 100 --clip-y 100 --clip-width 400 --clip-height 300",
                    "Screenshot specific region"),
        ),
        options=(
            Option("filename", short="o", description="Output filename"),
            Option("width", "number", short="w", description="Viewport width"),
            Option("height", "number", short="h", description="Viewport height"),
            Option("format", choices=("png", "jpeg", "webp"), default="png", description="Image format"),
            Option("quality", "number", description="Image quality (0-100, JPEG/WebP only)",
                   validator=lambda quality: 0 <= quality <= 100),
            Option("full-page", "boolean", default=False, description="Capture full page"),
            Option("clip-x", "number", description="Clip rectangle X coordinate"),
            Option("clip-y", "number", description="Clip rectangle Y coordinate"),
            Option("clip-width", "number", description="Clip rectangle width"),
            Option("clip-height", "number", description="Clip rectangle height"),
            Option("clip-scale", "number", default=1, description="Clip rectangle scale"),
        ),
    ),
    CommandDefinition(
        "click",
        "Click on an element",
        usage="click [options] <selector>",
        examples=(
            Example("{prog} click \"#submit-button\"", "Click element by ID"),
            Example("{prog} click \".nav-link:first-child\"", "Click first navigation link"),
            Example("{prog} --timeout 10000 click \".slow-loading-button\"", "Click with extended timeout"),
        ),
        arguments=(
            Argument("selector", required=True, description="CSS selector for element to click"),
        ),
    ),
    CommandDefinition(
        "fill",
        "Fill a form field with text",
        usage="fill [options] <selector> <text>",
        aliases=("type",),
        examples=(
            Example("{prog} fill \"#username\" \"john@example.com\"", "Fill username field"),
            Example("{prog} fill \"#country\" \"United States\"", "Select dropdown option by text"),
        ),
        arguments=(
            Argument("selector", required=True, description="CSS selector for form field"),
            Argument("text", required=True, description="Text to fill in the field"),
        ),
    ),
    CommandDefinition(
        "fill_form",
        "Fill multiple form fields in batch",
        usage="fill_form --fields <json>",
        examples=(
            Example("{prog} fill_form --fields '[{\"selector\":\"#name\",\"value\":\"John\"}]'", "Fill multiple fields"),
        ),
        options=(
            Option("fields", required=True, description="JSON array of field objects with selector and value"),
        ),
    ),
    CommandDefinition(
        "hover",
        "Hover over an element",
        usage="hover <selector>",
        aliases=("mouseover",),
        examples=(
            Example("{prog} hover \".dropdown-trigger\"", "Hover over dropdown trigger"),
        ),
        arguments=(
            Argument("selector", required=True, description="CSS selector for element to hover over"),
        ),
    ),
    CommandDefinition(
        "drag",
        "Perform drag and drop operations",
        usage="drag <from-selector> <to-selector>",
        examples=(
            Example("{prog} drag \"#item1\" \"#dropzone\"", "Drag item1 to dropzone"),
        ),
        arguments=(
            Argument("from-selector", required=True, description="CSS selector for element to drag from"),
            Argument("to-selector", required=True, description="CSS selector for element to drag to"),
        ),
    ),
    CommandDefinition(
        "press_key",
        "Simulate keyboard input with modifiers",
        usage="press_key <key> [options]",
        examples=(
            Example("{prog} press_key \"Enter\"", "Press Enter key"),
            Example("{prog} press_key \"s\" --modifiers ctrl", "Press Ctrl+S"),
        ),
        options=(
            Option("modifiers", "array", description="Key modifiers (ctrl, alt, shift, meta)"),
        ),
        arguments=(
            Argument("key", required=True, description="Key to press"),
        ),
    ),
    CommandDefinition(
        "upload_file",
        "Upload files to file input elements",
        usage="upload_file <selector> <file-path>",
        examples=(
            Example("{prog} upload_file \"input[type=file]\" \"/path/to/file.txt\"", "Upload file to input"),
        ),
        arguments=(
            Argument("selector", required=True, description="CSS selector for file input element"),
            Argument("file-path", "file", required=True, description="Path to file to upload"),
        ),
    ),
    CommandDefinition(
        "wait_for",
        "Wait for elements to appear or meet conditions",
        usage="wait_for <selector> [options]",
        examples=(
            Example("{prog} wait_for \"#loading\"", "Wait for loading element to appear"),
            Example("{prog} wait_for \".content\" --timeout 10000", "Wait up to 10 seconds"),
        ),
        options=(
            Option("timeout", "number", default=30000, description="Maximum wait time in milliseconds"),
        ),
        arguments=(
            Argument("selector", required=True, description="CSS selector for element to wait for"),
        ),
    ),
    CommandDefinition(
        "handle_dialog",
        "Handle browser dialogs (alert, confirm, prompt)",
        usage="handle_dialog <action> [options]",
        examples=(
            Example("{prog} handle_dialog accept", "Accept dialog"),
            Example("{prog} handle_dialog dismiss", "Dismiss dialog"),
            Example("{prog} handle_dialog accept --text \"Hello\"", "Accept prompt with text"),
        ),
        options=(
            Option("text", description="Text to enter in prompt dialog"),
        ),
        arguments=(
            Argument("action", required=True, description="Action to take (accept, dismiss)",
                     validator=lambda action: action in ("accept", "dismiss")),
        ),
    ),
    CommandDefinition(
        "navigate",
        "Navigate to a URL",
        usage="navigate <url>",
        aliases=("goto", "open"),
        examples=(
            Example("{prog} navigate \"https://example.com\"", "Navigate to example.com"),
        ),
        arguments=(
            Argument("url", "url", required=True, description="URL to navigate to"),
        ),
    ),
    CommandDefinition(
        "snapshot",
        "Capture DOM snapshot",
        usage="snapshot [options]",
        aliases=("dom",),
        examples=(
            Example("{prog} snapshot", "Basic DOM snapshot"),
            Example("{prog} snapshot --format html --filename dom.html", "Save as HTML file"),
        ),
        options=(
            Option("filename", short="o", description="Output filename"),
            Option("format", choices=("text", "html", "json"), default="text", description="Output format"),
            Option("include-styles", "boolean", default=True, description="Include computed styles"),
            Option("include-attributes", "boolean", default=True, description="Include element attributes"),
            Option("include-paint-order", "boolean", default=False, description="Include paint order information"),
            Option("include-text-index", "boolean", default=False, description="Include text index information"),
        ),
    ),
    CommandDefinition(
        "console",
        "List console messages",
        usage="console [options]",
        examples=(
            Example("{prog} console", "Get all console messages"),
            Example("{prog} console --latest", "Get the latest console message"),
            Example("{prog} console --types error,warn", "Get only error and warning messages"),
        ),
        options=(
            Option("latest", "boolean", description="Get only the latest message"),
            Option("types", "array", description="Filter by message types (comma-separated: log,info,warn,error,debug)"),
            Option("text-pattern", description="Filter by text pattern (regex)"),
            Option("max-messages", "number", description="Maximum number of messages to return"),
            Option("start-time", "number", description="Filter messages after this timestamp"),
            Option("end-time", "number", description="Filter messages before this timestamp"),
            Option("start-monitoring", "boolean", description="Start monitoring if not already active"),
        ),
    ),
    CommandDefinition(
        "network",
        "List network requests",
        usage="network [options]",
        examples=(
            Example("{prog} network", "Get all network requests"),
            Example("{prog} network --latest", "Get the latest network request"),
            Example("{prog} network --filter methods=POST", "Get only POST requests"),
        ),
        options=(
            Option("latest", "boolean", description="Get only the latest request"),
            Option("filter", description="Filter requests (JSON string with methods, urlPattern, statusCodes, etc.)"),
        ),
    ),
    CommandDefinition(
        "install_cursor_command",
        "Install Cursor IDE commands for Chrome automation",
        usage="install_cursor_command [options]",
        aliases=("install-cursor",),
        examples=(
            Example("{prog} install_cursor_command", "Install with default settings"),
            Example("{prog} install_cursor_command --target-directory ./commands --force", "Install to custom directory"),
        ),
        options=(
            Option("target-directory", description="Target directory for installation"),
            Option("include-examples", "boolean", default=True, description="Include example files"),
            Option("force", "boolean", default=False, description="Force overwrite existing files"),
        ),
    ),
    CommandDefinition(
        "install_claude_skill",
        "Install Claude skill for Chrome automation",
        usage="install_claude_skill [options]",
        aliases=("install-claude",),
        examples=(
            Example("{prog} install_claude_skill", "Install with default settings"),
            Example("{prog} install_claude_skill --skill-type browser --include-references",
                    "Install browser skill with references"),
        ),
        options=(
            Option("skill-type", choices=("browser", "automation", "testing"), default="browser",
                   description="Type of skill to install"),
            Option("target-directory", description="Target directory for installation"),
            Option("include-examples", "boolean", default=True, description="Include example files"),
            Option("include-references", "boolean", default=False, description="Include reference documentation"),
            Option("force", "boolean", default=False, description="Force overwrite existing files"),
        ),
    ),
)


def builtin_registry():
    """Fresh CommandSchemaRegistry holding every built-in command."""
    return CommandSchemaRegistry(BUILTIN_COMMANDS)


def register_builtins(parser, /):
    """Register every built-in command with parser; returns the parser."""
    for definition in BUILTIN_COMMANDS:
        parser.register_command(definition)
    return parser


__all__ = (
    "BUILTIN_COMMANDS",
    "builtin_registry",
    "register_builtins",
)
