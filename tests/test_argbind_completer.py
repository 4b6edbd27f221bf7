import pytest
from prompt_toolkit.document import Document

from argbind.completer import ArgbindCompleter
from argbind.parser import ArgumentSet, CommandParser, CommandSpec


@pytest.fixture
def completer():
    build_args = ArgumentSet()
    build_args.add_argument("--format", choices=["json", "plain text"])
    root = CommandSpec(
        "tool",
        subcommands=[
            CommandSpec("build", arguments=build_args),
            CommandSpec("builder"),
            CommandSpec("clean"),
        ],
    )
    return ArgbindCompleter(CommandParser(root))


def texts(completer, text):
    return [completion.text for completion in completer.get_completions(Document(text), None)]


def test_empty_input_lists_subcommands(completer):
    assert texts(completer, "") == ["build", "builder", "clean", "help"]


def test_single_match(completer):
    completions = list(completer.get_completions(Document("cl"), None))
    assert [c.text for c in completions] == ["clean"]
    assert completions[0].start_position == -2


def test_longest_common_prefix_first(completer):
    assert texts(completer, "b") == ["build", "build", "builder"]


def test_flag_completion(completer):
    assert texts(completer, "build --f") == ["--format"]


def test_choices_with_spaces_are_quoted(completer):
    assert texts(completer, "build --format ") == ["json", '"plain text"']


def test_no_match(completer):
    assert texts(completer, "zzz") == []


def test_unclosed_quote(completer):
    assert texts(completer, 'build "unclosed') == []
