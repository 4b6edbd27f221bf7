# Argbind CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ArgumentDefinition`, the immutable description of one declared
command-line argument.

A definition with no names is positional. A named definition whose action takes a
value is an option; any other named definition is a flag. Several definitions may
share a `dest`: an on/off pair (`--color` / `--no-color`) or an enumerable flag
group (`--small` / `--large`) bind to the same key.

Key Attributes:
- `names`: Zero or more `Name`s (e.g. `-v`, `--verbose`)
- `dest`: Key used in the bound values
- `action`: `ArgumentAction` describing behavior (store, append, count, ...)
- `type`: Caller-supplied transform applied to raw strings
- `strategy`: `ParsingStrategy` deciding where values are read from
- `const`: Value stored by flag actions such as `store_const`
- `exclusivity`: How repeated flag settings for `dest` are resolved
- `inversion_group`: Set on both halves of an on/off flag pair
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from argbind.parser.argument_action import (
    ArgumentAction,
    ArgumentVisibility,
    FlagExclusivity,
    ParsingStrategy,
)
from argbind.parser.name import Name, NameKind


class ArgumentKind(Enum):
    POSITIONAL = "positional"
    OPTION = "option"
    FLAG = "flag"


class Arity(Enum):
    SCALAR = "scalar"
    ARRAY = "array"


@dataclass(frozen=True, eq=False)
class ArgumentDefinition:
    """
    Represents a declared command-line argument.

    Attributes:
        names (tuple[Name, ...]): Names for the argument; empty for positionals.
        dest (str): The destination key for the bound value.
        action (ArgumentAction): What happens when the argument is matched.
        type (Any): Callable that converts a raw string into the bound value.
        default (Any): The value bound when the argument is absent.
        choices (tuple[Any, ...]): Allowed values after conversion, if restricted.
        required (bool): True if the argument must be supplied.
        help (str): Help text for the argument.
        strategy (ParsingStrategy): Where the argument reads its value(s) from.
        visibility (ArgumentVisibility): Where the argument is shown.
        value_name (str | None): Placeholder used in synopses, e.g. `<path>`.
        const (Any): Value stored by flags (and the version string for `version`).
        exclusivity (FlagExclusivity): Resolution of repeated flag settings.
        inversion_group (str | None): Shared by both halves of an on/off pair.
    """

    names: tuple[Name, ...]
    dest: str
    action: ArgumentAction = ArgumentAction.STORE
    type: Any = str
    default: Any = None
    choices: tuple[Any, ...] = ()
    required: bool = False
    help: str = ""
    strategy: ParsingStrategy = ParsingStrategy.NEXT
    visibility: ArgumentVisibility = ArgumentVisibility.DEFAULT
    value_name: str | None = None
    const: Any = None
    exclusivity: FlagExclusivity = FlagExclusivity.CHOOSE_LAST
    inversion_group: str | None = field(default=None)

    @property
    def kind(self) -> ArgumentKind:
        if not self.names:
            return ArgumentKind.POSITIONAL
        if self.action.takes_value:
            return ArgumentKind.OPTION
        return ArgumentKind.FLAG

    @property
    def arity(self) -> Arity:
        if self.action in (ArgumentAction.APPEND, ArgumentAction.COMPLETION):
            return Arity.ARRAY
        return Arity.SCALAR

    @property
    def is_positional(self) -> bool:
        return self.kind == ArgumentKind.POSITIONAL

    @property
    def is_repeating(self) -> bool:
        return self.arity == Arity.ARRAY

    @property
    def is_repeating_positional(self) -> bool:
        return self.is_positional and self.is_repeating

    @property
    def captures_all(self) -> bool:
        """A repeating positional that takes everything after the first value."""
        return (
            self.is_repeating_positional and self.strategy == ParsingStrategy.REMAINING
        )

    @property
    def preferred_name(self) -> Name | None:
        """Long names win over single-dash long names, which win over short ones."""
        for kind in (NameKind.LONG, NameKind.LONG_WITH_SINGLE_DASH, NameKind.SHORT):
            for name in self.names:
                if name.kind == kind:
                    return name
        return None

    @property
    def display_value_name(self) -> str:
        return self.value_name or self.dest.replace("_", "-")

    @property
    def synopsis(self) -> str:
        """
        The argument as shown in messages: `<path>`, `<files> ...`,
        `--format <format>` or `--verbose`.
        """
        if self.is_positional:
            text = f"<{self.display_value_name}>"
            return f"{text} ..." if self.is_repeating else text
        name = self.preferred_name
        assert name is not None
        if self.kind == ArgumentKind.OPTION:
            return f"{name.synopsis} <{self.display_value_name}>"
        return name.synopsis

    @property
    def is_hidden(self) -> bool:
        return self.visibility != ArgumentVisibility.DEFAULT

    @property
    def is_private(self) -> bool:
        return self.visibility == ArgumentVisibility.PRIVATE

    def flag_value(self) -> Any:
        """The value a flag binds each time it is matched."""
        if self.action == ArgumentAction.STORE_TRUE:
            return True
        if self.action == ArgumentAction.STORE_FALSE:
            return False
        return self.const

    def initial_value(self) -> Any:
        if self.action == ArgumentAction.COUNT:
            return self.default if self.default is not None else 0
        if self.action == ArgumentAction.APPEND:
            return list(self.default) if self.default is not None else []
        return self.default

    def __str__(self) -> str:
        return (
            f"ArgumentDefinition(dest={self.dest!r}, names={[str(n) for n in self.names]}, "
            f"action={self.action}, strategy={self.strategy})"
        )
