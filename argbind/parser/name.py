# Argbind CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `Name`, the concrete spelling of an option or flag as it appears on the
command line.

Three shapes are supported:
- `long`: `--verbose`
- `short`: `-v` (may be combined into clusters like `-vh`)
- `long_with_single_dash`: `-verbose`

Names compare and hash by kind and text only. The `allows_joined` marker on short
names (used for `-Dvalue` style options) is ignored for matching, so a name parsed
from user input always finds its declared counterpart.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from argbind.exceptions import ArgumentDefinitionError


class NameKind(Enum):
    """The prefix style of a `Name`."""

    LONG = "long"
    SHORT = "short"
    LONG_WITH_SINGLE_DASH = "long_with_single_dash"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Name:
    """
    A single option or flag name.

    Attributes:
        kind (NameKind): Prefix style of the name.
        value (str): The name without its dashes.
        allows_joined (bool): Short names only. If True, `-Dvalue` passes `value`
            to the option. Not part of equality.
    """

    kind: NameKind
    value: str
    allows_joined: bool = field(default=False, compare=False)

    @classmethod
    def long(cls, value: str) -> Name:
        return cls(NameKind.LONG, value)

    @classmethod
    def short(cls, char: str, allows_joined: bool = False) -> Name:
        if len(char) != 1:
            raise ArgumentDefinitionError(
                f"Short names must be a single character, got {char!r}"
            )
        return cls(NameKind.SHORT, char, allows_joined)

    @classmethod
    def long_with_single_dash(cls, value: str) -> Name:
        return cls(NameKind.LONG_WITH_SINGLE_DASH, value)

    @classmethod
    def from_flag(cls, flag: str, allows_joined: bool = False) -> Name:
        """
        Build a `Name` from a declared flag string.

        `--name` is long, `-n` is short and `-name` is long with a single dash.
        """
        if not isinstance(flag, str):
            raise ArgumentDefinitionError(f"Flag '{flag}' must be a string")
        if flag.startswith("--"):
            if len(flag) < 3:
                raise ArgumentDefinitionError(
                    f"Flag '{flag}' must be at least 3 characters long"
                )
            if allows_joined:
                raise ArgumentDefinitionError(
                    f"Only short flags can allow joined values, got '{flag}'"
                )
            return cls.long(flag[2:])
        if flag.startswith("-") and len(flag) > 1:
            if len(flag) == 2:
                return cls.short(flag[1], allows_joined)
            if allows_joined:
                raise ArgumentDefinitionError(
                    f"Only short flags can allow joined values, got '{flag}'"
                )
            return cls.long_with_single_dash(flag[1:])
        raise ArgumentDefinitionError(f"Flag '{flag}' must start with '-' or '--'")

    @property
    def synopsis(self) -> str:
        """The name as typed by a user, including its dashes."""
        if self.kind == NameKind.LONG:
            return f"--{self.value}"
        return f"-{self.value}"

    @property
    def is_short(self) -> bool:
        return self.kind == NameKind.SHORT

    def __str__(self) -> str:
        return self.synopsis
