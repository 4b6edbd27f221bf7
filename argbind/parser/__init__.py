"""
Argbind CLI Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .argument import ArgumentDefinition, ArgumentKind, Arity
from .argument_action import (
    ArgumentAction,
    ArgumentVisibility,
    FlagExclusivity,
    FlagInversion,
    ParsingStrategy,
)
from .argument_set import ArgumentSet
from .command import CommandNode, CommandSpec
from .command_parser import CommandParser, ParseOutcome, ParseResult
from .completion import complete
from .matcher import parse_arguments
from .name import Name, NameKind
from .origin import BoundValue, BoundValues, InputOrigin
from .token_stream import TokenStream, tokenize
from .tokens import Element, Index, ParsedOption, Token, TokenKind

__all__ = [
    "ArgumentAction",
    "ArgumentDefinition",
    "ArgumentKind",
    "ArgumentSet",
    "ArgumentVisibility",
    "Arity",
    "BoundValue",
    "BoundValues",
    "CommandNode",
    "CommandParser",
    "CommandSpec",
    "Element",
    "FlagExclusivity",
    "FlagInversion",
    "Index",
    "InputOrigin",
    "Name",
    "NameKind",
    "ParseOutcome",
    "ParseResult",
    "ParsedOption",
    "ParsingStrategy",
    "Token",
    "TokenKind",
    "TokenStream",
    "complete",
    "parse_arguments",
    "tokenize",
]
