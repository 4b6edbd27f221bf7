# Argbind CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by argbind.

Two families exist. Usage errors (`ParseError`) are caused by what the user typed
and carry everything needed to report them. Configuration errors are caused by how
a command tree was declared and are never produced by user input.

Exception Hierarchy:
- ArgbindError
    ├── ParseError
    ├── ArgumentDefinitionError
    ├── ArgumentSetValidationError
    ├── CommandCycleError
    └── ConfigError
"""
from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from argbind.parser.origin import InputOrigin


class ArgbindError(Exception):
    """Base exception for argbind."""


class ParseErrorKind(Enum):
    """The kinds of usage errors the parser reports."""

    UNKNOWN_OPTION = "unknown_option"
    MISSING_VALUE = "missing_value"
    MISSING_ARGUMENT = "missing_argument"
    UNEXPECTED_VALUE = "unexpected_value"
    UNEXPECTED_VALUE_FOR_OPTION = "unexpected_value_for_option"
    DUPLICATE_EXCLUSIVE = "duplicate_exclusive"
    INVALID_VALUE = "invalid_value"

    def __str__(self) -> str:
        return self.value


class ParseError(ArgbindError):
    """
    Raised when user input does not match the declared arguments.

    Attributes:
        kind (ParseErrorKind): What went wrong.
        message (str): The user-facing message.
        command_path (list[str]): Names of the commands resolved so far.
        origins (list[InputOrigin]): Where in the input the problem was found.
        usage (str): Usage synopsis of the failing command.
    """

    def __init__(
        self,
        kind: ParseErrorKind,
        message: str,
        origins: Sequence[InputOrigin] | None = None,
        command_path: Sequence[str] | None = None,
        usage: str = "",
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.origins = list(origins or [])
        self.command_path = list(command_path or [])
        self.usage = usage

    def __str__(self) -> str:
        return self.message


class ArgumentDefinitionError(ArgbindError):
    """Raised when a single argument is declared with invalid settings."""


class ArgumentSetValidationError(ArgbindError):
    """
    Raised when the static validators find problems in a command's arguments.

    Attributes:
        command_name (str): The command whose arguments failed validation.
        issues (list[str]): One message per problem found.
    """

    def __init__(self, command_name: str, issues: Sequence[str]):
        self.command_name = command_name
        self.issues = list(issues)
        lines = [f"Validation failed for `{command_name}`:"]
        lines.extend(f"- {issue}" for issue in self.issues)
        super().__init__("\n".join(lines))


class CommandCycleError(ArgbindError):
    """Raised when a command is its own transitive subcommand."""

    def __init__(self, path: Sequence[str]):
        self.path = list(path)
        super().__init__(
            "The command configuration contains a cycle: " + " -> ".join(self.path)
        )


class ConfigError(ArgbindError):
    """Raised when a command configuration file cannot be loaded."""
