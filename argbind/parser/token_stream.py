# Argbind CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Splits a raw argument vector into an addressable `TokenStream`.

`tokenize()` never fails: anything that looks odd is kept as a token so the matching
engine can report it with full context (e.g. as an unknown option).

Classification, in order:
1. `--` is a terminator; everything after it is a plain value.
2. `--name=value` / `--name` are long options.
3. `-x=value` is a short option with a value, `-name=value` a single-dash long option.
4. `-x` is a short option, or a possible negative number when `x` is a digit.
5. `-abc` is a single-dash long option *and* the cluster `-a`, `-b`, `-c`; numeric
   clusters like `-12` are tagged as possible negative numbers.
6. Anything else is a value.

The stream is keyed by `Index`. Removing an entry deletes its key and never shifts
another index, so origins recorded during matching stay valid for the whole parse.
"""
from __future__ import annotations

import re
from typing import Callable, Iterable, Iterator, Sequence

from argbind.logger import logger
from argbind.parser.name import Name
from argbind.parser.tokens import Element, Index, ParsedOption, Token

NUMERIC_PATTERN = re.compile(r"\d+(\.\d+)?([eE][-+]?\d+)?")


def _classify_long(arg: str) -> Token:
    remainder = arg[2:]
    name, equals, value = remainder.partition("=")
    if equals and name:
        return Token.for_option(ParsedOption(Name.long(name), value))
    return Token.for_option(ParsedOption(Name.long(remainder)))


def _classify_single_dash(arg: str, position: int) -> list[Element]:
    index = Index(position)
    remainder = arg[1:]
    name, equals, value = remainder.partition("=")
    if equals:
        if not name:
            option = ParsedOption(Name.long_with_single_dash(remainder))
        elif len(name) == 1:
            option = ParsedOption(Name.short(name), value)
        else:
            option = ParsedOption(Name.long_with_single_dash(name), value)
        return [Element(index, Token.for_option(option))]

    if len(remainder) == 1:
        option = ParsedOption(Name.short(remainder))
        if remainder.isdigit():
            return [Element(index, Token.possible_negative(arg, option))]
        return [Element(index, Token.for_option(option))]

    option = ParsedOption(Name.long_with_single_dash(remainder))
    if NUMERIC_PATTERN.fullmatch(remainder):
        elements = [Element(index, Token.possible_negative(arg, option))]
    else:
        elements = [Element(index, Token.for_option(option))]
    for offset, sub_option in option.subarguments:
        elements.append(Element(Index(position, offset), Token.for_option(sub_option)))
    return elements


def classify(arg: str, position: int) -> list[Element]:
    """Classify one raw argument into its element(s)."""
    if arg == "--":
        return [Element(Index(position), Token.terminator())]
    if arg.startswith("--"):
        return [Element(Index(position), _classify_long(arg))]
    if arg.startswith("-") and len(arg) > 1:
        return _classify_single_dash(arg, position)
    return [Element(Index(position), Token.value(arg))]


def tokenize(argv: Sequence[str]) -> TokenStream:
    """
    Convert raw arguments (excluding the program name) into a `TokenStream`.

    Args:
        argv (Sequence[str]): The raw command-line arguments.

    Returns:
        TokenStream: The classified, addressable tokens.
    """
    elements: list[Element] = []
    terminated = False
    for position, arg in enumerate(argv):
        if terminated:
            elements.append(Element(Index(position), Token.value(arg)))
            continue
        classified = classify(arg, position)
        elements.extend(classified)
        if classified[0].token.is_terminator:
            terminated = True
    stream = TokenStream(elements, argv)
    logger.debug("Tokenized %d argument(s): %s", len(argv), stream)
    return stream


class TokenStream:
    """
    An ordered, mutable view over the elements of one parse attempt.

    Elements are stored in a dict keyed by `Index`. Removal deletes keys only, so
    indices are never renumbered. Removing a complete index also removes its
    cluster members; removing a cluster member leaves the rest of the cluster,
    including the complete entry, in place. Such a cluster is "split".
    """

    def __init__(self, elements: Iterable[Element], original_input: Sequence[str]):
        self.original_input: tuple[str, ...] = tuple(original_input)
        self._tokens: dict[Index, Token] = {
            element.index: element.token for element in elements
        }
        self._split_positions: set[int] = set()

    def copy(self) -> TokenStream:
        clone = TokenStream([], self.original_input)
        clone._tokens = dict(self._tokens)
        clone._split_positions = set(self._split_positions)
        return clone

    def __iter__(self) -> Iterator[Element]:
        return (Element(index, token) for index, token in self._tokens.items())

    def __len__(self) -> int:
        return len(self._tokens)

    def __bool__(self) -> bool:
        return bool(self._tokens)

    def __contains__(self, index: object) -> bool:
        return index in self._tokens

    def __str__(self) -> str:
        if not self._tokens:
            return "<empty>"
        return " ".join(str(element) for element in self)

    def __repr__(self) -> str:
        return f"TokenStream({self})"

    @property
    def elements(self) -> list[Element]:
        return list(self)

    def get(self, index: Index) -> Token | None:
        return self._tokens.get(index)

    def visible_elements(self) -> list[Element]:
        """Remaining elements, without the complete entries of split clusters."""
        return [
            element
            for element in self
            if not (element.index.is_complete and self.is_split(element.index.position))
        ]

    def is_split(self, position: int) -> bool:
        """True if a member of the cluster at `position` has been removed."""
        return position in self._split_positions

    def original(self, index: Index) -> str:
        """The raw input string an index points into."""
        return self.original_input[index.position]

    # Removal

    def _discard(self, index: Index) -> None:
        self._tokens.pop(index, None)

    def remove(self, index: Index) -> None:
        """
        Remove the element(s) at `index`.

        A complete index takes its cluster members with it. A sub index removes
        only that cluster member and marks the cluster as split.
        """
        if index.is_complete:
            for key in [key for key in self._tokens if key.position == index.position]:
                del self._tokens[key]
        elif index in self._tokens:
            del self._tokens[index]
            self._split_positions.add(index.position)

    def remove_all(self, indices: Iterable[Index]) -> None:
        for index in sorted(indices):
            self.remove(index)

    # Peeking and popping

    def peek_next(self) -> Element | None:
        return next(iter(self), None)

    def pop_next(self) -> Element | None:
        """Pop the first remaining element without touching its cluster."""
        element = self.peek_next()
        if element is not None:
            self._discard(element.index)
        return element

    def _first_complete_after(self, after: Index) -> Element | None:
        for element in self:
            if element.index > after and element.index.is_complete:
                return element
        return None

    def pop_next_element_if_value(
        self,
        after: Index,
        accept: Callable[[Token], bool] | None = None,
    ) -> tuple[Index, str] | None:
        """
        Pop the complete element right after `after` if it is a value.

        Used for `--name value` and for clusters like `-fn f-value n-value`. A
        possible negative number only qualifies when `accept` says so; otherwise
        it is treated as an option and nothing is popped.
        """
        element = self._first_complete_after(after)
        if element is None:
            return None
        token = element.token
        if token.is_value:
            value = token.text
        elif token.is_possible_negative and accept is not None and accept(token):
            value = token.text
        else:
            return None
        self.remove(element.index)
        assert value is not None
        return element.index, value

    def pop_next_value(
        self,
        after: Index,
        accept: Callable[[Token], bool] | None = None,
    ) -> tuple[Index, str] | None:
        """Pop the first value anywhere after `after`, skipping options."""
        for element in self:
            if element.index <= after:
                continue
            token = element.token
            if token.is_value or (
                token.is_possible_negative
                and element.index.is_complete
                and accept is not None
                and accept(token)
            ):
                self.remove(element.index)
                assert token.text is not None
                return element.index, token.text
        return None

    def pop_next_element_as_value(self, after: Index) -> tuple[Index, str] | None:
        """
        Pop the next complete element after `after`, whatever it is, and return
        its raw input text. `--a --b foo` popped after `--a` yields `--b`.
        """
        element = self._first_complete_after(after)
        if element is None:
            return None
        self.remove(element.index)
        return element.index, self.original(element.index)

    def pop_front_if_value(
        self, accept: Callable[[Token], bool] | None = None
    ) -> tuple[Index, str] | None:
        """Pop the first remaining element if it is a value."""
        element = self.peek_next()
        if element is None:
            return None
        token = element.token
        if not (
            token.is_value
            or (token.is_possible_negative and accept is not None and accept(token))
        ):
            return None
        self.remove(element.index)
        assert token.text is not None
        return element.index, token.text

    def extract_joined_value(self, index: Index) -> tuple[Index, str] | None:
        """
        Read a value joined to the first short option of a cluster.

        For `-Ddebug`, the element `-D` at sub index 0 yields the complete index
        and the value `debug`. Any other index yields None.
        """
        if index.sub != 0:
            return None
        return index.complete, self.original(index)[2:]

    # Leftovers

    def coalesced_extra_elements(self) -> list[tuple[Index, str]]:
        """
        The leftover input, one entry per user-visible argument.

        Complete entries are reported with their raw text. Cluster members are
        reported only when their cluster was split. Terminators are skipped.
        """
        extras: list[tuple[Index, str]] = []
        for element in self:
            if element.token.is_terminator:
                continue
            if element.index.is_complete:
                if self.is_split(element.index.position):
                    continue
                extras.append((element.index, self.original(element.index)))
            elif self.is_split(element.index.position) or (
                element.index.complete not in self
            ):
                extras.append((element.index, str(element.token.option)))
        return extras

    def contains_any_name(self, names: Iterable[Name]) -> bool:
        wanted = set(names)
        return any(
            element.token.option is not None and element.token.option.name in wanted
            for element in self
        )
