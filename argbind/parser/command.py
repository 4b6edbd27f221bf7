# Argbind CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the command tree: `CommandSpec` (what the caller declares) and
`CommandNode` (the validated, read-only tree the parser walks).

`CommandNode.build()` turns a root spec into a tree:
- Specs are visited depth first with an on-path identity set. Meeting a spec that is
  already on the path raises `CommandCycleError` instead of recursing forever. The
  same spec may still appear in two unrelated branches.
- Each spec's arguments are validated once, before any built-ins are added.
- Every command gets `-h`/`--help`. The root also gets `--version` (when a version
  is configured) and the private `---completion` option.
- A root with subcommands gets a built-in `help` subcommand.

Example:
    build = CommandSpec("build", arguments=build_args)
    root = CommandSpec("tool", subcommands=[build], version="1.2.0")
    tree = CommandNode.build(root)
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from argbind.exceptions import ArgumentDefinitionError, CommandCycleError
from argbind.logger import logger
from argbind.parser.argument import ArgumentDefinition
from argbind.parser.argument_action import (
    ArgumentAction,
    ArgumentVisibility,
    ParsingStrategy,
)
from argbind.parser.argument_set import ArgumentSet
from argbind.parser.name import Name
from argbind.parser.validators import validate_argument_set

COMPLETION_FLAG = "---completion"
HELP_COMMAND_NAME = "help"


@dataclass(eq=False)
class CommandSpec:
    """
    A declared command.

    Attributes:
        name (str): The command name as typed on the command line.
        arguments (ArgumentSet): The command's own arguments.
        subcommands (list[CommandSpec]): Child commands, in declaration order.
        default_subcommand (str | None): Child used when no child name is given.
        version (str | None): Version reported by `--version` (root only).
        aliases (list[str]): Other names that select this command.
        help_text (str): One-line description.
        help_names (tuple[str, ...]): Flags that request help.
        is_help_command (bool): True only for the built-in `help` subcommand.
    """

    name: str
    arguments: ArgumentSet = field(default_factory=ArgumentSet)
    subcommands: list[CommandSpec] = field(default_factory=list)
    default_subcommand: str | None = None
    version: str | None = None
    aliases: list[str] = field(default_factory=list)
    help_text: str = ""
    help_names: tuple[str, ...] = ("-h", "--help")
    is_help_command: bool = False

    def __repr__(self) -> str:
        return f"CommandSpec(name={self.name!r}, subcommands={[s.name for s in self.subcommands]})"


def help_command_spec() -> CommandSpec:
    """The built-in `help` subcommand: `tool help build` shows help for `build`."""
    arguments = ArgumentSet()
    arguments.add_argument(
        "subcommands",
        action="append",
        help="The subcommand to show help for.",
        value_name="subcommand",
    )
    return CommandSpec(
        HELP_COMMAND_NAME,
        arguments=arguments,
        help_text="Show subcommand help information.",
        is_help_command=True,
    )


class CommandNode:
    """
    A node of the validated command tree.

    Attributes:
        spec (CommandSpec): The declared command.
        arguments (ArgumentSet): The effective arguments, built-ins included.
        children (list[CommandNode]): Child nodes in declaration order.
        parent (CommandNode | None): The parent node, None for the root.
    """

    def __init__(self, spec: CommandSpec, parent: CommandNode | None = None) -> None:
        self.spec = spec
        self.parent = parent
        self.children: list[CommandNode] = []
        self.arguments = spec.arguments.copy()

    def __repr__(self) -> str:
        return f"CommandNode({' '.join(self.path)})"

    def __iter__(self) -> Iterator[CommandNode]:
        return iter(self.children)

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def path(self) -> list[str]:
        names = []
        node: CommandNode | None = self
        while node is not None:
            names.append(node.name)
            node = node.parent
        return list(reversed(names))

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def help_names(self) -> list[Name]:
        """The help names this command actually answers to."""
        return [
            name
            for definition in self.arguments
            if definition.action == ArgumentAction.HELP
            for name in definition.names
        ]

    @property
    def default_child(self) -> CommandNode | None:
        if self.spec.default_subcommand is None:
            return None
        return self.child_named(self.spec.default_subcommand)

    def child_named(self, text: str) -> CommandNode | None:
        """The first child whose name or alias is `text`."""
        for child in self.children:
            if child.name == text or text in child.spec.aliases:
                return child
        return None

    def find(self, names: list[str]) -> CommandNode:
        """Follow `names` down the tree as far as they match."""
        node = self
        for name in names:
            child = node.child_named(name)
            if child is None:
                break
            node = child
        return node

    def walk(self) -> Iterator[CommandNode]:
        yield self
        for child in self.children:
            yield from child.walk()

    def _add_builtin(self, definition: ArgumentDefinition) -> None:
        names = tuple(
            name for name in definition.names if not self.arguments.contains_name(name)
        )
        if not names:
            return
        self.arguments.append(
            ArgumentDefinition(
                names=names,
                dest=definition.dest,
                action=definition.action,
                help=definition.help,
                strategy=definition.strategy,
                visibility=definition.visibility,
                const=definition.const,
            )
        )

    def _add_builtins(self) -> None:
        self._add_builtin(
            ArgumentDefinition(
                names=tuple(Name.from_flag(flag) for flag in self.spec.help_names),
                dest="help",
                action=ArgumentAction.HELP,
                help="Show help information.",
            )
        )
        if not self.is_root:
            return
        if self.spec.version is not None:
            self._add_builtin(
                ArgumentDefinition(
                    names=(Name.long("version"),),
                    dest="version",
                    action=ArgumentAction.VERSION,
                    help="Show the version.",
                    const=self.spec.version,
                )
            )
        self._add_builtin(
            ArgumentDefinition(
                names=(Name.from_flag(COMPLETION_FLAG),),
                dest="completion",
                action=ArgumentAction.COMPLETION,
                strategy=ParsingStrategy.REMAINING,
                visibility=ArgumentVisibility.PRIVATE,
            )
        )

    @classmethod
    def build(cls, root_spec: CommandSpec) -> CommandNode:
        """
        Build and validate the tree rooted at `root_spec`.

        Raises:
            CommandCycleError: If a command is its own transitive subcommand.
            ArgumentSetValidationError: If a command's arguments are malformed.
            ArgumentDefinitionError: If a default subcommand does not exist.
        """
        root = cls._build(root_spec, None, [], set(), set())
        if not root.is_leaf and root.child_named(HELP_COMMAND_NAME) is None:
            help_node = cls._build(help_command_spec(), root, [], set(), set())
            root.children.append(help_node)
        logger.debug("Built command tree with %d node(s)", len(list(root.walk())))
        return root

    @classmethod
    def _build(
        cls,
        spec: CommandSpec,
        parent: CommandNode | None,
        path: list[CommandSpec],
        on_path: set[int],
        validated: set[int],
    ) -> CommandNode:
        if id(spec) in on_path:
            raise CommandCycleError([s.name for s in path] + [spec.name])
        if id(spec) not in validated:
            validate_argument_set(spec.arguments, spec.name)
            validated.add(id(spec))

        node = cls(spec, parent)
        node._add_builtins()
        path.append(spec)
        on_path.add(id(spec))
        for child_spec in spec.subcommands:
            node.children.append(cls._build(child_spec, node, path, on_path, validated))
        path.pop()
        on_path.discard(id(spec))

        if spec.default_subcommand is not None and node.default_child is None:
            raise ArgumentDefinitionError(
                f"Default subcommand '{spec.default_subcommand}' of '{spec.name}' "
                "is not one of its subcommands"
            )
        return node
