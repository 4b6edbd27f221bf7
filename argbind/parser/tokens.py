# Argbind CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Token model for the argbind tokenizer.

Each raw argument is split into one or more `Element`s. An element pairs a stable
`Index` with a classified `Token`:

- `value`: plain text, e.g. `README.md`
- `option`: a `ParsedOption`, e.g. `--name` or `--name=value`
- `terminator`: the literal `--`
- `possible_negative`: a dash-prefixed number such as `-5`, which is either a short
  option name or a negative number depending on what the command declares

Combined short options are addressed with sub-indices. The input `-vh` at position 1
yields three elements: `1` (the whole cluster), `1.0` (`-v`) and `1.1` (`-h`).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from argbind.parser.name import Name, NameKind


@dataclass(frozen=True)
class Index:
    """
    Position of an element in the original input.

    Attributes:
        position (int): Index of the raw argument string.
        sub (int | None): None for the complete argument, otherwise the offset of a
            synthesized short option inside a cluster.
    """

    position: int
    sub: int | None = None

    @property
    def is_complete(self) -> bool:
        return self.sub is None

    @property
    def complete(self) -> Index:
        """The complete index for the same raw argument."""
        return Index(self.position)

    def _sort_key(self) -> tuple[int, int]:
        return (self.position, -1 if self.sub is None else self.sub)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Index):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Index):
            return NotImplemented
        return self._sort_key() <= other._sort_key()

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Index):
            return NotImplemented
        return self._sort_key() > other._sort_key()

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Index):
            return NotImplemented
        return self._sort_key() >= other._sort_key()

    def __str__(self) -> str:
        if self.sub is None:
            return str(self.position)
        return f"{self.position}.{self.sub}"


@dataclass(frozen=True)
class ParsedOption:
    """An option as typed: `--foo` (value is None) or `--foo=bar`."""

    name: Name
    value: str | None = None

    @property
    def subarguments(self) -> list[tuple[int, ParsedOption]]:
        """
        The short options packed into this option, with their offsets.

        Only a bare single-dash name with more than one character is a cluster;
        `-foo=bar` and `--foo` never are.
        """
        if self.value is not None or self.name.kind != NameKind.LONG_WITH_SINGLE_DASH:
            return []
        return [
            (offset, ParsedOption(Name.short(char)))
            for offset, char in enumerate(self.name.value)
        ]

    def __str__(self) -> str:
        if self.value is None:
            return self.name.synopsis
        return f"{self.name.synopsis}={self.value}"


class TokenKind(Enum):
    """Classification of a token."""

    VALUE = "value"
    OPTION = "option"
    TERMINATOR = "terminator"
    POSSIBLE_NEGATIVE = "possible_negative"


@dataclass(frozen=True)
class Token:
    """
    A classified unit of input.

    Attributes:
        kind (TokenKind): Which variant this token is.
        text (str | None): The value text, or the raw text of a possible negative.
        option (ParsedOption | None): The option interpretation, if any.
    """

    kind: TokenKind
    text: str | None = None
    option: ParsedOption | None = None

    @classmethod
    def value(cls, text: str) -> Token:
        return cls(TokenKind.VALUE, text=text)

    @classmethod
    def for_option(cls, option: ParsedOption) -> Token:
        return cls(TokenKind.OPTION, option=option)

    @classmethod
    def terminator(cls) -> Token:
        return cls(TokenKind.TERMINATOR)

    @classmethod
    def possible_negative(cls, raw: str, option: ParsedOption) -> Token:
        return cls(TokenKind.POSSIBLE_NEGATIVE, text=raw, option=option)

    @property
    def is_value(self) -> bool:
        return self.kind == TokenKind.VALUE

    @property
    def is_terminator(self) -> bool:
        return self.kind == TokenKind.TERMINATOR

    @property
    def is_possible_negative(self) -> bool:
        return self.kind == TokenKind.POSSIBLE_NEGATIVE

    @property
    def is_option_like(self) -> bool:
        """True for options and possible negatives."""
        return self.kind in (TokenKind.OPTION, TokenKind.POSSIBLE_NEGATIVE)

    def __str__(self) -> str:
        if self.kind == TokenKind.VALUE:
            return f"'{self.text}'"
        if self.kind == TokenKind.TERMINATOR:
            return "--"
        if self.kind == TokenKind.POSSIBLE_NEGATIVE:
            return f"{self.option} (or '{self.text}')"
        return str(self.option)


@dataclass(frozen=True)
class Element:
    """A token together with its index in the input."""

    index: Index
    token: Token

    def __str__(self) -> str:
        return f"[{self.index}] {self.token}"
