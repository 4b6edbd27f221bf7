# Argbind CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ExitCode`, the process exit status for each parse outcome.

Help, version and completion requests are successful outcomes. Usage errors exit
with the BSD `EX_USAGE` value.
"""
from __future__ import annotations

from enum import IntEnum


class ExitCode(IntEnum):
    """Exit codes returned by the argbind driver."""

    SUCCESS = 0
    FAILURE = 1
    VALIDATION_FAILURE = 64

    @classmethod
    def for_outcome(cls, outcome: object) -> ExitCode:
        """Map a `ParseOutcome` (or its value) to an exit code."""
        value = getattr(outcome, "value", outcome)
        if value == "error":
            return cls.VALIDATION_FAILURE
        if value in ("ok", "help", "version", "completion"):
            return cls.SUCCESS
        return cls.FAILURE
