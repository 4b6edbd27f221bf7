# Argbind CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `CommandParser`, which resolves an argument vector against a
command tree and reports a single `ParseResult`.

Resolution is a small state machine over the tree:

1. Tokenize argv once.
2. Bind the current command's arguments, removing what they consumed.
3. If the first remaining element is a bare value naming a child (or one of its
   aliases), descend into it and repeat from 2.
4. If a help name is still in the input, stop with a help result.
5. If the command has a default subcommand, descend into it and repeat from 2.
6. Otherwise, any leftover input is an error: the first leftover option is reported
   as unknown, or else every leftover value is reported together.

A parse error at any level is reported as a help request instead when the input
still contains a help name. Help, version and completion requests unwind the whole
resolution immediately.

Example Usage:
    parser = CommandParser(CommandSpec("tool", arguments=arguments))
    result = parser.parse(["--format", "json", "README.md"])
    if result.ok:
        print(result.values["format"])
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from argbind.exceptions import ParseError, ParseErrorKind
from argbind.exit_codes import ExitCode
from argbind.logger import logger
from argbind.parser.command import CommandNode, CommandSpec
from argbind.parser.completion import complete
from argbind.parser.diagnostics import (
    unexpected_values_message,
    unknown_option_message,
    usage_line,
)
from argbind.parser.matcher import parse_arguments
from argbind.parser.origin import BoundValues, InputOrigin
from argbind.parser.token_stream import TokenStream, tokenize
from argbind.parser.tokens import TokenKind
from argbind.signals import CompletionSignal, HelpSignal, VersionSignal


class ParseOutcome(Enum):
    OK = "ok"
    ERROR = "error"
    HELP = "help"
    VERSION = "version"
    COMPLETION = "completion"

    def __str__(self) -> str:
        return self.value


@dataclass
class ParseResult:
    """
    The result of one parse.

    Attributes:
        outcome (ParseOutcome): What happened.
        command_path (list[str]): The resolved command names, root first. For help
            requests, the command help was asked for.
        levels (list[tuple[CommandNode, BoundValues]]): Bound values per resolved
            command, root first.
        error (ParseError | None): Set when `outcome` is ERROR.
        version (str | None): Set when `outcome` is VERSION.
        completions (list[str]): Set when `outcome` is COMPLETION.
        usage (str): Usage synopsis of the last resolved command.
    """

    outcome: ParseOutcome
    command_path: list[str] = field(default_factory=list)
    levels: list[tuple[CommandNode, BoundValues]] = field(default_factory=list)
    error: ParseError | None = None
    version: str | None = None
    completions: list[str] = field(default_factory=list)
    usage: str = ""

    @property
    def ok(self) -> bool:
        return self.outcome == ParseOutcome.OK

    @property
    def values(self) -> BoundValues | None:
        return self.levels[-1][1] if self.levels else None

    @property
    def exit_code(self) -> ExitCode:
        return ExitCode.for_outcome(self.outcome)


@dataclass
class _Resolution:
    node: CommandNode
    levels: list[tuple[CommandNode, BoundValues]] = field(default_factory=list)


class CommandParser:
    """
    Parses argument vectors against a command tree.

    The tree is built (and validated) once, in the constructor, and is only read
    afterwards, so one parser can serve any number of parses.
    """

    def __init__(self, root: CommandSpec | CommandNode) -> None:
        self.root = root if isinstance(root, CommandNode) else CommandNode.build(root)

    def usage(self, command_path: Sequence[str] | None = None) -> str:
        """Usage synopsis of the command at `command_path` (names after the root)."""
        node = self.root.find(list(command_path or []))
        return usage_line(node.path, node.arguments, not node.is_leaf)

    def node_for(self, command_path: Sequence[str]) -> CommandNode:
        names = list(command_path)
        if names and names[0] == self.root.name:
            names = names[1:]
        return self.root.find(names)

    def parse(self, argv: Sequence[str]) -> ParseResult:
        """
        Parse `argv` (without the program name).

        Never raises for bad user input; configuration errors surface when the
        parser is constructed.
        """
        stream = tokenize(argv)
        state = _Resolution(self.root)
        try:
            self._descending_parse(state, stream)
            self._check_leftovers(state.node, stream)
        except HelpSignal as signal:
            return self._help_result(state, signal.command_path)
        except VersionSignal as signal:
            logger.debug("Version requested: %s", signal.version)
            return ParseResult(
                ParseOutcome.VERSION,
                command_path=state.node.path,
                levels=state.levels,
                version=signal.version,
            )
        except CompletionSignal as signal:
            completions = complete(self.root, signal.words)
            logger.debug("Completions for %s: %s", signal.words, completions)
            return ParseResult(
                ParseOutcome.COMPLETION,
                command_path=state.node.path,
                completions=completions,
            )
        except ParseError as error:
            node = state.node
            error.command_path = node.path
            error.usage = usage_line(node.path, node.arguments, not node.is_leaf)
            logger.debug("Parse failed at '%s': %s", " ".join(node.path), error)
            return ParseResult(
                ParseOutcome.ERROR,
                command_path=node.path,
                levels=state.levels,
                error=error,
                usage=error.usage,
            )

        node = state.node
        if node.spec.is_help_command:
            return self._help_for_help_command(state)
        return ParseResult(
            ParseOutcome.OK,
            command_path=node.path,
            levels=state.levels,
            usage=usage_line(node.path, node.arguments, not node.is_leaf),
        )

    def _help_result(self, state: _Resolution, command_path: Sequence[str]) -> ParseResult:
        node = self.node_for(command_path or state.node.path)
        logger.debug("Help requested for '%s'", " ".join(node.path))
        return ParseResult(
            ParseOutcome.HELP,
            command_path=node.path,
            levels=state.levels,
            usage=usage_line(node.path, node.arguments, not node.is_leaf),
        )

    def _help_for_help_command(self, state: _Resolution) -> ParseResult:
        values = state.levels[-1][1]
        target = self.root.find(values.get("subcommands") or [])
        return self._help_result(state, target.path)

    def _descending_parse(self, state: _Resolution, stream: TokenStream) -> None:
        while True:
            self._parse_current(state, stream)

            child = self._consume_next_command(state.node, stream)
            if child is not None:
                state.node = child
                continue

            self._check_for_help(state.node, stream)

            default_child = state.node.default_child
            if default_child is not None:
                state.node = default_child
                continue
            return

    def _parse_current(self, state: _Resolution, stream: TokenStream) -> None:
        node = state.node
        try:
            result = parse_arguments(node.arguments, stream, node.path)
        except ParseError:
            self._check_for_help(node, stream)
            raise
        state.levels.append((node, result.values))

    def _consume_next_command(
        self, node: CommandNode, stream: TokenStream
    ) -> CommandNode | None:
        element = stream.peek_next()
        if element is None or not element.token.is_value:
            return None
        child = node.child_named(stream.original(element.index))
        if child is not None:
            stream.remove(element.index)
        return child

    def _check_for_help(self, node: CommandNode, stream: TokenStream) -> None:
        if stream.contains_any_name(node.help_names):
            raise HelpSignal(node.path)

    def _check_leftovers(self, node: CommandNode, stream: TokenStream) -> None:
        self._check_for_help(node, stream)
        for element in stream.visible_elements():
            if element.token.kind == TokenKind.OPTION:
                assert element.token.option is not None
                raise ParseError(
                    ParseErrorKind.UNKNOWN_OPTION,
                    unknown_option_message(element.token.option.name, node.arguments),
                    origins=[InputOrigin.of(element.index)],
                )
        extras = stream.coalesced_extra_elements()
        if extras:
            raise ParseError(
                ParseErrorKind.UNEXPECTED_VALUE,
                unexpected_values_message([text for _, text in extras]),
                origins=[InputOrigin.of(index) for index, _ in extras],
            )
