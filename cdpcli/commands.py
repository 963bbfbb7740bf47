"""
Command definitions and the command schema registry.

CommandDefinition
- Immutable record of one command: name, aliases, description, usage,
  examples, options and positional arguments. Sequences are frozen into
  tuples at construction and handed out as copies through read-only
  properties.
- Lookup helpers (option(), short(), argument()) serve the parser, the
  validator and the help renderer.

CommandSchemaRegistry
- Plain keyed store: register() (last registration wins), get(), has(),
  all(). No schema checks here; the parser checks definitions when they are
  registered with it.
- Registries are constructed explicitly and handed to the parser and the
  help system by the composition root (see cdpcli.__main__).
- Mutation holds a lock; reads work on snapshots.
"""
import threading

from .arguments import CommandExample, DefinitionType, _sequence


class CommandDefinition(metaclass=DefinitionType):
    """
    Schema of one command.

    Parameters
    - name: canonical command name (unique).
    - description: one-line summary used in listings and help headers.
    - usage: usage line without the program name ("eval [options] <expression>");
      synthesized from the arguments when empty.
    - aliases: alternative names, unique across every registered command.
    - examples: CommandExample records or (command, description) pairs.
    - options: OptionDefinition records, in help order.
    - arguments: ArgumentDefinition records, in command-line order.
    """

    __introspectable__ = (
        "name",
        "description",
        "usage",
        "aliases",
        "examples",
        "options",
        "arguments",
    )
    __displayable__ = ("name", "aliases", "description")

    def __init__(
            self,
            name,
            description="",
            *,
            usage="",
            aliases=(),
            examples=(),
            options=(),
            arguments=()
    ):
        self._name = name
        self._description = description
        self._usage = usage
        self._aliases = _sequence(aliases)
        examples = _sequence(examples)
        if isinstance(examples, tuple):
            examples = tuple(
                CommandExample(*example) if isinstance(example, tuple) and not isinstance(example, CommandExample) else example
                for example in examples
            )
        self._examples = examples
        self._options = _sequence(options)
        self._arguments = _sequence(arguments)

    @property
    def synopsis(self):
        """Usage line without the program name."""
        if self._usage:
            return self._usage
        parts = [self._name]
        if self._options:
            parts.append("[options]")
        for argument in self._arguments:
            label = argument.name + ("..." if argument.variadic else "")
            parts.append(f"<{label}>" if argument.required else f"[{label}]")
        return " ".join(parts)

    def option(self, name, /):
        """OptionDefinition named name, or None."""
        for option in self._options:
            if option.name == name:
                return option
        return None

    def short(self, letter, /):
        """OptionDefinition whose short flag is letter, or None."""
        for option in self._options:
            if option.short and option.short == letter:
                return option
        return None

    def argument(self, index, /):
        """
        ArgumentDefinition for the positional at index.

        Positionals past the declared ones fall to a trailing variadic
        argument; otherwise None.
        """
        if index < len(self._arguments):
            return self._arguments[index]
        if self._arguments and self._arguments[-1].variadic:
            return self._arguments[-1]
        return None


class CommandSchemaRegistry:
    """
    Keyed catalogue of CommandDefinition records.

    >>> registry = CommandSchemaRegistry()
    >>> registry.register(CommandDefinition("click", "Click an element"))
    >>> registry.has("click")
    True
    """

    def __init__(self, definitions=()):
        self._lock = threading.Lock()
        self._commands = {}
        for definition in definitions:
            self.register(definition)

    def register(self, definition, /):
        with self._lock:
            self._commands[definition.name] = definition

    def get(self, name, /):
        return self._commands.get(name)

    def has(self, name, /):
        return name in self._commands

    def all(self):
        return list(self._commands.copy().values())

    def __contains__(self, name):
        return self.has(name)

    def __iter__(self):
        return iter(self.all())

    def __len__(self):
        return len(self._commands)


__all__ = (
    "CommandDefinition",
    "CommandSchemaRegistry",
)
