# Argbind CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Computes completion candidates for a partially typed command line.

`complete()` answers the `---completion` request and backs `ArgbindCompleter`.
The words before the last one are walked to find the current command and
whether the last word is the value of an option. The last word is the partial
text being completed:

- After a value-taking option, the option's choices are offered.
- A partial starting with `-` is completed against the visible names of the
  current command's arguments.
- Anything else is completed against subcommand names and positional choices.

Hidden and private arguments are never offered. Results are sorted and unique.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from argbind.parser.argument import ArgumentDefinition
from argbind.parser.token_stream import classify

if TYPE_CHECKING:
    from argbind.parser.command import CommandNode


def _option_expecting_value(
    node: CommandNode, word: str
) -> ArgumentDefinition | None:
    token = classify(word, 0)[0].token
    if not token.is_option_like or token.option is None:
        return None
    definition = node.arguments.first_matching(token.option.name)
    if definition is None or not definition.action.takes_value:
        return None
    if token.option.value is not None:
        return None
    return definition


def _flag_candidates(node: CommandNode) -> list[str]:
    return [
        name.synopsis
        for definition in node.arguments
        if not definition.is_hidden
        for name in definition.names
    ]


def _word_candidates(node: CommandNode) -> list[str]:
    candidates = [child.name for child in node.children]
    for definition in node.arguments.positionals:
        if not definition.is_hidden:
            candidates.extend(str(choice) for choice in definition.choices)
    return candidates


def complete(root: CommandNode, words: Sequence[str]) -> list[str]:
    """
    Completion candidates for the last of `words`.

    Args:
        root (CommandNode): The root of the command tree.
        words (Sequence[str]): The words typed after the program name. The last
            word is the (possibly empty) partial text being completed.

    Returns:
        list[str]: Sorted, unique candidates starting with the partial text.
    """
    words = list(words)
    if words and words[0] == "--":
        words = words[1:]
    partial = words[-1] if words else ""

    node = root
    pending: ArgumentDefinition | None = None
    for word in words[:-1]:
        if pending is not None:
            pending = None
            continue
        if word == "--":
            break
        if word.startswith("-"):
            pending = _option_expecting_value(node, word)
            continue
        child = node.child_named(word)
        if child is not None:
            node = child

    if pending is not None:
        candidates = [str(choice) for choice in pending.choices]
    elif partial.startswith("-"):
        candidates = _flag_candidates(node)
    else:
        candidates = _word_candidates(node)
    return sorted({candidate for candidate in candidates if candidate.startswith(partial)})
