# Argbind CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines the flow control signals raised while parsing.

Some inputs end a parse successfully without producing bound values: asking for help,
asking for the version, or asking for completion candidates. These are raised as
signals from deep inside the matching engine and caught by `CommandParser`.

All signals inherit from `FlowSignal`, which is a subclass of `BaseException`
to ensure they bypass standard `except Exception` blocks.

Signals:
- HelpSignal: Help was requested for a command.
- VersionSignal: The root command's version was requested.
- CompletionSignal: Completion candidates were requested.
"""
from __future__ import annotations

from typing import Sequence


class FlowSignal(BaseException):
    """Base class for all flow control signals in argbind.

    These are not errors. They short-circuit parsing when the user asked for
    something other than running the command.
    """


class HelpSignal(FlowSignal):
    """Raised to request help for a command."""

    def __init__(self, command_path: Sequence[str] | None = None):
        self.command_path = list(command_path or [])
        super().__init__("Help signal received.")


class VersionSignal(FlowSignal):
    """Raised to request the version of the root command."""

    def __init__(self, version: str):
        self.version = version
        super().__init__("Version signal received.")


class CompletionSignal(FlowSignal):
    """Raised when the hidden completion option is found."""

    def __init__(self, words: Sequence[str]):
        self.words = list(words)
        super().__init__("Completion signal received.")
