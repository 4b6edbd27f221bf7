"""
Argbind CLI Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .exceptions import ArgbindError, ParseError, ParseErrorKind
from .parser import ArgumentSet, CommandParser, CommandSpec, ParseOutcome, ParseResult

logger = logging.getLogger("argbind")


__all__ = [
    "ArgbindError",
    "ArgumentSet",
    "CommandParser",
    "CommandSpec",
    "ParseError",
    "ParseErrorKind",
    "ParseOutcome",
    "ParseResult",
]
