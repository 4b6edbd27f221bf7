# Argbind CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the enums that describe how a declared argument behaves.

- `ArgumentAction`: what happens when the argument is matched (store a value, set a
  flag, count, request help, ...). The action also decides the argument's kind and
  arity.
- `ParsingStrategy`: where a value-taking argument looks for its value(s).
- `FlagExclusivity`: how repeated or conflicting flag settings are resolved.
- `FlagInversion`: the naming scheme of an on/off flag pair.
- `ArgumentVisibility`: whether an argument is shown in completions and suggestions.

Supports alias coercion for shorthand or config-friendly values.

Example:
    ArgumentAction("store_true") → ArgumentAction.STORE_TRUE
    ArgumentAction("true")       → ArgumentAction.STORE_TRUE (via alias)
    ArgumentAction("optional")   → ArgumentAction.STORE_BOOL_OPTIONAL
"""
from __future__ import annotations

from enum import Enum


class _AliasedEnum(Enum):
    """Enum base that accepts case-insensitive values and a table of aliases."""

    @classmethod
    def choices(cls) -> list:
        """Return a list of all members."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        return value

    @classmethod
    def _missing_(cls, value: object):
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower().replace("-", "_")
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    def __str__(self) -> str:
        return self.value


class ArgumentAction(_AliasedEnum):
    """
    Defines the action to be taken when the argument is encountered.

    Members:
        STORE: Store the provided value (default).
        APPEND: Append each provided value to a list.
        STORE_TRUE: Store `True` if the flag is present.
        STORE_FALSE: Store `False` if the flag is present.
        STORE_CONST: Store the argument's `const` if the flag is present.
        STORE_BOOL_OPTIONAL: An on/off pair (e.g., `--debug` and `--no-debug`).
        COUNT: Count the number of occurrences.
        HELP: Request help and stop parsing.
        VERSION: Request the version and stop parsing.
        COMPLETION: Request completion candidates and stop parsing.

    Aliases:
        - "true" → "store_true"
        - "false" → "store_false"
        - "const" → "store_const"
        - "optional" → "store_bool_optional"
    """

    STORE = "store"
    APPEND = "append"
    STORE_TRUE = "store_true"
    STORE_FALSE = "store_false"
    STORE_CONST = "store_const"
    STORE_BOOL_OPTIONAL = "store_bool_optional"
    COUNT = "count"
    HELP = "help"
    VERSION = "version"
    COMPLETION = "completion"

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "optional": "store_bool_optional",
            "true": "store_true",
            "false": "store_false",
            "const": "store_const",
        }
        return aliases.get(value, value)

    @property
    def takes_value(self) -> bool:
        return self in (
            ArgumentAction.STORE,
            ArgumentAction.APPEND,
            ArgumentAction.COMPLETION,
        )


class ParsingStrategy(_AliasedEnum):
    """
    Where a value-taking argument finds its value(s).

    Members:
        NEXT: The attached value, a joined value, or the element right after the name.
        SCANNING_FOR_VALUE: The first bare value anywhere after the name.
        UNCONDITIONAL: The element right after the name, even if it looks like an option.
        UP_TO_NEXT_OPTION: Every bare value up to the next option.
        REMAINING: Every element after the name, options included.
    """

    NEXT = "next"
    SCANNING_FOR_VALUE = "scanning_for_value"
    UNCONDITIONAL = "unconditional"
    UP_TO_NEXT_OPTION = "up_to_next_option"
    REMAINING = "remaining"

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "scanning": "scanning_for_value",
            "all_remaining": "remaining",
        }
        return aliases.get(value, value)


class FlagExclusivity(_AliasedEnum):
    """How a flag `dest` that is set more than once is resolved."""

    EXCLUSIVE = "exclusive"
    CHOOSE_FIRST = "choose_first"
    CHOOSE_LAST = "choose_last"


class FlagInversion(_AliasedEnum):
    """
    Naming scheme for on/off flag pairs.

    Members:
        PREFIXED_NO: `--name` / `--no-name`.
        PREFIXED_ENABLE_DISABLE: `--enable-name` / `--disable-name`.
    """

    PREFIXED_NO = "prefixed_no"
    PREFIXED_ENABLE_DISABLE = "prefixed_enable_disable"

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {"no": "prefixed_no", "enable_disable": "prefixed_enable_disable"}
        return aliases.get(value, value)

    def names(self, base: str) -> tuple[str, str]:
        """The (enable, disable) long flags for `base`."""
        if self == FlagInversion.PREFIXED_NO:
            return f"--{base}", f"--no-{base}"
        return f"--enable-{base}", f"--disable-{base}"


class ArgumentVisibility(_AliasedEnum):
    """
    Members:
        DEFAULT: Shown everywhere.
        HIDDEN: Left out of completions.
        PRIVATE: Also left out of usage and "did you mean" suggestions.
    """

    DEFAULT = "default"
    HIDDEN = "hidden"
    PRIVATE = "private"
