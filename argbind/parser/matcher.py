# Argbind CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
The name/value matching engine.

`parse_arguments()` binds one command's `ArgumentSet` against a `TokenStream`:

1. Every `dest` is seeded with its initial value (origin: default).
2. Option pass: the stream is walked in order and each option-like element is looked
   up by name. Names nobody declared are left in place for subcommands or for the
   final "unknown option" report. Value-taking arguments read their values according
   to their `ParsingStrategy`.
3. The consumed elements are removed from the stream.
4. Positional pass: the remaining complete elements are bound to positionals in
   declaration order.
5. Required arguments that were not supplied raise `missing_argument`.

Help names are never consumed here. `CommandParser` checks for them after each
command level, so `tool sub --help` asks for the help of `sub`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from argbind.exceptions import ParseError, ParseErrorKind
from argbind.logger import logger
from argbind.parser.argument import ArgumentDefinition
from argbind.parser.argument_action import (
    ArgumentAction,
    FlagExclusivity,
    ParsingStrategy,
)
from argbind.parser.argument_set import ArgumentSet
from argbind.parser.diagnostics import (
    BUILTIN_ACTIONS,
    duplicate_exclusive_message,
    invalid_value_message,
    missing_argument_message,
    missing_value_message,
    unexpected_value_for_option_message,
)
from argbind.parser.name import Name
from argbind.parser.origin import BoundValues, InputOrigin
from argbind.parser.token_stream import TokenStream
from argbind.parser.tokens import Element, Index, ParsedOption, Token
from argbind.parser.utils import coerce_value
from argbind.signals import CompletionSignal, VersionSignal


@dataclass
class MatchResult:
    """Bound values for one command, and every index they consumed."""

    values: BoundValues
    used: set[Index] = field(default_factory=set)


class ArgumentMatcher:
    """
    Matches one `ArgumentSet` against a stream. Single use: create one per parse.
    """

    def __init__(
        self,
        arguments: ArgumentSet,
        stream: TokenStream,
        command_path: Sequence[str] = (),
    ) -> None:
        self.arguments = arguments
        self.stream = stream
        self.command_path = list(command_path)
        self.values = BoundValues(stream.original_input)
        self.used: set[Index] = set()
        self._work = stream.copy()
        self._flag_origins: dict[str, InputOrigin] = {}

    def match(self) -> MatchResult:
        self._seed()
        self._option_pass()
        self.stream.remove_all(self.used)
        self._positional_pass()
        self._check_required()
        logger.debug(
            "[%s] Bound %s, remaining: %s",
            " ".join(self.command_path),
            self.values.as_dict(),
            self.stream,
        )
        return MatchResult(self.values, self.used)

    def _error(
        self, kind: ParseErrorKind, message: str, *origins: InputOrigin
    ) -> ParseError:
        return ParseError(kind, message, origins=origins, command_path=self.command_path)

    def _seed(self) -> None:
        for definition in self.arguments:
            if definition.action in BUILTIN_ACTIONS:
                continue
            if definition.dest in self.values:
                continue
            self.values.seed(definition.dest, definition.initial_value())

    def _accepts_negative(self, token: Token) -> bool:
        """A dash-prefixed number is a value only if none of its names is declared."""
        if token.option is None:
            return True
        if self.arguments.contains_name(token.option.name):
            return False
        return not any(
            self.arguments.contains_name(sub_option.name)
            for _, sub_option in token.option.subarguments
        )

    # Option pass

    def _option_pass(self) -> None:
        captures_all = self.arguments.captures_all
        while (element := self._work.pop_next()) is not None:
            token = element.token
            if token.is_value:
                if captures_all:
                    break
                continue
            if token.is_terminator:
                continue
            option = token.option
            assert option is not None
            definition = self.arguments.first_matching(option.name)
            if definition is None:
                if captures_all and not option.subarguments:
                    break
                continue
            if definition.action == ArgumentAction.HELP:
                continue
            used = self._apply(definition, option, element)
            self.used |= used
            self._work.remove_all(used)

    def _apply(
        self, definition: ArgumentDefinition, option: ParsedOption, element: Element
    ) -> set[Index]:
        index = element.index
        origin = InputOrigin.of(index)
        if definition.action.takes_value:
            used = self._parse_value(definition, option, index)
            if definition.action == ArgumentAction.COMPLETION:
                raise CompletionSignal(self.values.get(definition.dest) or [])
            return used
        if option.value is not None:
            raise self._error(
                ParseErrorKind.UNEXPECTED_VALUE_FOR_OPTION,
                unexpected_value_for_option_message(option.name, option.value),
                origin,
            )
        if definition.action == ArgumentAction.VERSION:
            raise VersionSignal(definition.const)
        if definition.action == ArgumentAction.COUNT:
            self.values.set(
                definition.dest, (self.values.get(definition.dest) or 0) + 1, origin
            )
        else:
            self._update_flag(definition, origin)
        return {index}

    def _update_flag(self, definition: ArgumentDefinition, origin: InputOrigin) -> None:
        dest = definition.dest
        value = definition.flag_value()
        previous = self._flag_origins.get(dest)
        if previous is None or definition.exclusivity == FlagExclusivity.CHOOSE_LAST:
            self.values.set(dest, value, origin)
        elif definition.exclusivity == FlagExclusivity.CHOOSE_FIRST:
            self.values.set(dest, self.values.get(dest), origin)
        elif self.values.get(dest) == value:
            self.values.set(dest, value, origin)
        else:
            raise self._error(
                ParseErrorKind.DUPLICATE_EXCLUSIVE,
                duplicate_exclusive_message(
                    previous, origin, self.stream.original_input
                ),
                previous,
                origin,
            )
        self._flag_origins[dest] = origin

    def _declared_name(self, definition: ArgumentDefinition, name: Name) -> Name:
        return next((declared for declared in definition.names if declared == name), name)

    def _joined_value(
        self, definition: ArgumentDefinition, name: Name, index: Index
    ) -> tuple[Index, str] | None:
        if not self._declared_name(definition, name).allows_joined:
            return None
        return self._work.extract_joined_value(index)

    def _parse_value(
        self, definition: ArgumentDefinition, option: ParsedOption, index: Index
    ) -> set[Index]:
        name = option.name
        origin = InputOrigin.of(index)
        used = {index}
        strategy = definition.strategy

        attached = False
        if option.value is not None:
            self._update(definition, name, option.value, origin)
            attached = True
        elif (joined := self._joined_value(definition, name, index)) is not None:
            joined_index, value = joined
            self._update(definition, name, value, origin.inserting(joined_index))
            used.add(joined_index)
            self._work.remove_all(used)
            attached = True

        if strategy == ParsingStrategy.REMAINING:
            while (popped := self._work.pop_next_element_as_value(index)) is not None:
                popped_index, value = popped
                self._update(definition, name, value, origin.inserting(popped_index))
                used.add(popped_index)
            return used

        if strategy == ParsingStrategy.UP_TO_NEXT_OPTION:
            while (
                popped := self._work.pop_front_if_value(self._accepts_negative)
            ) is not None:
                popped_index, value = popped
                self._update(definition, name, value, origin.inserting(popped_index))
                used.add(popped_index)
            return used

        if attached:
            return used

        if strategy == ParsingStrategy.SCANNING_FOR_VALUE:
            popped = self._work.pop_next_value(index, self._accepts_negative)
        elif strategy == ParsingStrategy.UNCONDITIONAL:
            popped = self._work.pop_next_element_as_value(index)
        else:
            popped = self._work.pop_next_element_if_value(index, self._accepts_negative)
        if popped is None:
            raise self._error(
                ParseErrorKind.MISSING_VALUE,
                missing_value_message(name, self.arguments),
                origin,
            )
        popped_index, value = popped
        self._update(definition, name, value, origin.inserting(popped_index))
        used.add(popped_index)
        return used

    def _update(
        self,
        definition: ArgumentDefinition,
        name: Name | None,
        value: str,
        origin: InputOrigin,
    ) -> None:
        if definition.action == ArgumentAction.COMPLETION:
            self.values.append(definition.dest, value, origin)
            return
        try:
            converted = coerce_value(value, definition.type)
        except (ValueError, TypeError) as error:
            raise self._error(
                ParseErrorKind.INVALID_VALUE,
                invalid_value_message(value, definition, name, str(error)),
                origin,
            ) from error
        if definition.choices and converted not in definition.choices:
            raise self._error(
                ParseErrorKind.INVALID_VALUE,
                invalid_value_message(value, definition, name),
                origin,
            )
        if definition.is_repeating:
            self.values.append(definition.dest, converted, origin)
        else:
            self.values.set(definition.dest, converted, origin)

    # Positional pass

    def _positional_candidates(self, allow_options: bool) -> list[Element]:
        candidates = []
        for element in self.stream:
            index, token = element.index, element.token
            if not index.is_complete or token.is_terminator:
                continue
            if allow_options:
                candidates.append(element)
            elif token.is_value or (
                token.is_possible_negative and not self.stream.is_split(index.position)
            ):
                candidates.append(element)
        return candidates

    def _positional_pass(self) -> None:
        for definition in self.arguments.positionals:
            allow_options = definition.strategy == ParsingStrategy.REMAINING
            while True:
                candidates = self._positional_candidates(allow_options)
                if not candidates:
                    return
                index = candidates[0].index
                value = self.stream.original(index)
                self.stream.remove(index)
                self.used.add(index)
                self._update(definition, None, value, InputOrigin.of(index))
                if not definition.is_repeating:
                    break

    # Required check

    def _check_required(self) -> None:
        for dest in self.arguments.dests:
            definitions = [
                definition
                for definition in self.arguments.definitions_for(dest)
                if definition.action not in BUILTIN_ACTIONS
            ]
            if not any(definition.required for definition in definitions):
                continue
            if self.values.is_from_input(dest):
                continue
            raise self._error(
                ParseErrorKind.MISSING_ARGUMENT,
                missing_argument_message(definitions),
            )


def parse_arguments(
    arguments: ArgumentSet,
    stream: TokenStream,
    command_path: Sequence[str] = (),
) -> MatchResult:
    """
    Bind `arguments` against `stream`, removing every consumed element from it.

    Raises:
        ParseError: If the input does not fit the declared arguments.
        VersionSignal: If the version flag was matched.
        CompletionSignal: If the completion option was matched.
    """
    return ArgumentMatcher(arguments, stream, command_path).match()
