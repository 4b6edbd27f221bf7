# Argbind CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Builds the user-facing text of parse errors.

- `edit_distance()` powers "Did you mean ...?" suggestions for unknown long options.
- `*_message()` helpers produce one message per `ParseErrorKind`.
- `usage_line()` renders a one-line synopsis of a command for error output.

Messages only depend on their inputs, so the same argv always yields the same text.
"""
from __future__ import annotations

from typing import Any, Iterable, Sequence

from argbind.parser.argument import ArgumentDefinition
from argbind.parser.argument_action import ArgumentAction
from argbind.parser.argument_set import ArgumentSet
from argbind.parser.name import Name
from argbind.parser.origin import InputOrigin

# Empirically derived; anything further away is not worth suggesting.
SIMILARITY_FLOOR = 4

BUILTIN_ACTIONS = (
    ArgumentAction.HELP,
    ArgumentAction.VERSION,
    ArgumentAction.COMPLETION,
)


def edit_distance(source: str, target: str) -> int:
    """Levenshtein distance between two strings."""
    if source == target:
        return 0
    if not source:
        return len(target)
    if not target:
        return len(source)
    previous = list(range(len(target) + 1))
    for i, source_char in enumerate(source, start=1):
        current = [i]
        for j, target_char in enumerate(target, start=1):
            cost = 0 if source_char == target_char else 1
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + cost,
                )
            )
        previous = current
    return previous[-1]


def suggest_name(name: Name, arguments: ArgumentSet) -> Name | None:
    """
    The closest declared non-short name to `name`, if it is close enough.

    Short unknown names never get a suggestion. Private arguments are never
    suggested. Ties go to the name declared first.
    """
    if name.is_short:
        return None
    typed = name.synopsis
    best: tuple[int, Name] | None = None
    for definition in arguments:
        if definition.is_private:
            continue
        for candidate in definition.names:
            if candidate.is_short:
                continue
            distance = edit_distance(candidate.synopsis, typed)
            if distance >= SIMILARITY_FLOOR:
                continue
            if best is None or distance < best[0]:
                best = (distance, candidate)
    return best[1] if best else None


def unknown_option_message(name: Name, arguments: ArgumentSet) -> str:
    suggestion = suggest_name(name, arguments)
    if suggestion is not None:
        return f"Unknown option '{name.synopsis}'. Did you mean '{suggestion.synopsis}'?"
    return f"Unknown option '{name.synopsis}'"


def _value_name_for(name: Name, arguments: ArgumentSet) -> str | None:
    for definition in arguments:
        if name in definition.names and definition.action.takes_value:
            return definition.display_value_name
    return None


def missing_value_message(name: Name, arguments: ArgumentSet) -> str:
    value_name = _value_name_for(name, arguments)
    if value_name:
        return f"Missing value for '{name.synopsis} <{value_name}>'"
    return f"Missing value for '{name.synopsis}'"


def unexpected_value_for_option_message(name: Name, value: str) -> str:
    return (
        f"The option '{name.synopsis}' does not take any value, "
        f"but '{value}' was specified."
    )


def unexpected_values_message(values: Sequence[str]) -> str:
    if len(values) == 1:
        return f"Unexpected argument '{values[0]}'"
    joined = "', '".join(values)
    return f"{len(values)} unexpected arguments: '{joined}'"


def missing_argument_message(definitions: Sequence[ArgumentDefinition]) -> str:
    possibilities = [definition.synopsis for definition in definitions]
    if not possibilities:
        return "Missing expected argument"
    if len(possibilities) == 1:
        return f"Missing expected argument '{possibilities[0]}'"
    joined = "', '".join(possibilities)
    return f"Missing one of: '{joined}'"


def describe_origin(origin: InputOrigin, original_input: Sequence[str]) -> str:
    """
    Describe where a flag was typed: `flag '--list'`, or `flag 'c' in '-lc'` for
    a member of a short option cluster.
    """
    index = origin.first
    if index is None:
        return f"position {origin}"
    raw = original_input[index.position]
    if index.sub is None:
        return f"flag '{raw}'"
    return f"flag '{raw[index.sub + 1]}' in '{raw}'"


def duplicate_exclusive_message(
    previous: InputOrigin,
    duplicate: InputOrigin,
    original_input: Sequence[str],
) -> str:
    return (
        f"Value to be set with {describe_origin(duplicate, original_input)} "
        f"had already been set with {describe_origin(previous, original_input)}"
    )


def _format_choices(choices: Iterable[Any]) -> str:
    return ", ".join(f"'{choice}'" for choice in choices)


def invalid_value_message(
    value: str,
    definition: ArgumentDefinition,
    name: Name | None = None,
    reason: str | None = None,
) -> str:
    value_name = definition.display_value_name
    if name is not None:
        target = f"{name.synopsis} <{value_name}>"
    else:
        target = f"<{value_name}>"
    message = f"The value '{value}' is invalid for '{target}'"
    if reason:
        message += f": {reason}"
    if definition.choices:
        message += f". Please provide one of {_format_choices(definition.choices)}."
    return message


def _usage_for_dest(definitions: Sequence[ArgumentDefinition]) -> str:
    first = definitions[0]
    if len(definitions) > 1:
        text = " | ".join(definition.synopsis for definition in definitions)
        return text if first.required else f"[{text}]"
    return first.synopsis if first.required else f"[{first.synopsis}]"


def usage_line(
    command_path: Sequence[str],
    arguments: ArgumentSet,
    has_subcommands: bool = False,
) -> str:
    """
    One-line synopsis such as `Usage: tool build [--jobs <jobs>] <target>`.

    Private arguments and the built-in help, version and completion arguments are
    left out. Named arguments come first, positionals after, in declaration order.
    """
    named: dict[str, list[ArgumentDefinition]] = {}
    positional: list[ArgumentDefinition] = []
    for definition in arguments:
        if definition.is_private or definition.action in BUILTIN_ACTIONS:
            continue
        if definition.is_positional:
            positional.append(definition)
        else:
            named.setdefault(definition.dest, []).append(definition)
    parts = [" ".join(command_path)] if command_path else []
    parts.extend(_usage_for_dest(definitions) for definitions in named.values())
    parts.extend(_usage_for_dest([definition]) for definition in positional)
    if has_subcommands:
        parts.append("<subcommand>")
    return "Usage: " + " ".join(part for part in parts if part)
