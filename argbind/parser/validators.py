# Argbind CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Static checks over a declared `ArgumentSet`.

These run once per command when the command tree is built, never per parse. Every
problem they find is a mistake in how the command was declared, so they are
reported together as one `ArgumentSetValidationError`.

Validators:
- validate_unique_names: No two arguments may share a name.
- validate_positional_order: A repeating positional must be the last positional.
- validate_coding_keys: Every `dest` must be one of the declared coding keys.
- validate_nonsense_flags: A `store_true` flag defaulting to True can never be unset.
"""
from __future__ import annotations

from collections import Counter
from typing import Callable

from argbind.exceptions import ArgumentSetValidationError
from argbind.logger import logger
from argbind.parser.argument_action import ArgumentAction
from argbind.parser.argument_set import ArgumentSet


def validate_unique_names(arguments: ArgumentSet) -> list[str]:
    counts = Counter(name.synopsis for name in arguments.names)
    return [
        f'Multiple ({count}) `Option` or `Flag` arguments are named "{synopsis}".'
        for synopsis, count in counts.items()
        if count > 1
    ]


def validate_positional_order(arguments: ArgumentSet) -> list[str]:
    positionals = arguments.positionals
    for position, definition in enumerate(positionals):
        if not definition.is_repeating:
            continue
        following = positionals[position + 1 :]
        if following:
            return [
                f"Can't have a positional argument `{following[0].dest}` following "
                f"an array of positional arguments `{definition.dest}`."
            ]
        return []
    return []


def validate_coding_keys(arguments: ArgumentSet) -> list[str]:
    if arguments.coding_keys is None:
        return []
    missing = [
        dest
        for dest in arguments.dests
        if dest not in arguments.coding_keys
        and not any(
            definition.action
            in (ArgumentAction.HELP, ArgumentAction.VERSION, ArgumentAction.COMPLETION)
            for definition in arguments.definitions_for(dest)
        )
    ]
    if not missing:
        return []
    if len(missing) == 1:
        return [f"Argument `{missing[0]}` is defined without a corresponding `CodingKey`."]
    keys = ",".join(f"`{dest}`" for dest in missing)
    return [f"Arguments {keys} are defined without corresponding `CodingKey`s."]


def validate_nonsense_flags(arguments: ArgumentSet) -> list[str]:
    affected = [
        definition.synopsis
        for definition in arguments
        if definition.action == ArgumentAction.STORE_TRUE
        and definition.default is True
        and definition.inversion_group is None
    ]
    if not affected:
        return []
    return [
        "One or more Boolean flags is declared with an initial value of `true`. "
        "This results in the flag always being `true`, no matter whether the user "
        "specifies the flag or not.\n\n"
        "To resolve this error, change the default to `false`, use the "
        "`store_bool_optional` action, or remove the flag altogether.\n\n"
        "Affected flag(s):\n" + "\n".join(affected)
    ]


VALIDATORS: list[Callable[[ArgumentSet], list[str]]] = [
    validate_positional_order,
    validate_coding_keys,
    validate_unique_names,
    validate_nonsense_flags,
]


def validate_argument_set(arguments: ArgumentSet, command_name: str) -> None:
    """
    Run every validator over `arguments`.

    Raises:
        ArgumentSetValidationError: With one issue per problem found.
    """
    issues: list[str] = []
    for validator in VALIDATORS:
        issues.extend(validator(arguments))
    if issues:
        logger.error("Validation failed for '%s': %d issue(s)", command_name, len(issues))
        raise ArgumentSetValidationError(command_name, issues)
