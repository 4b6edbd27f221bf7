import pytest

from argbind.parser import ArgumentSet, CommandNode, CommandSpec, complete


@pytest.fixture
def tree():
    build_args = ArgumentSet()
    build_args.add_argument("target", choices=["app", "lib"])
    build_args.add_argument("--format", "-f", choices=["json", "text"])
    build_args.add_argument("--trace", visibility="hidden", action="store_true")
    build_args.add_argument("--jobs", type=int)
    root_args = ArgumentSet()
    root_args.add_argument("--verbose", action="store_true")
    root = CommandSpec(
        "tool",
        arguments=root_args,
        subcommands=[CommandSpec("build", arguments=build_args), CommandSpec("bench")],
        version="1.0",
    )
    return CommandNode.build(root)


def test_subcommand_names(tree):
    assert complete(tree, [""]) == ["bench", "build", "help"]
    assert complete(tree, ["bu"]) == ["build"]


def test_leading_terminator_is_ignored(tree):
    assert complete(tree, ["--", "be"]) == ["bench"]


def test_no_words(tree):
    assert complete(tree, []) == ["bench", "build", "help"]


def test_root_flags(tree):
    assert complete(tree, ["--ver"]) == ["--verbose", "--version"]


def test_private_completion_flag_is_not_offered(tree):
    assert "---completion" not in complete(tree, ["-"])


def test_subcommand_flags_skip_hidden(tree):
    assert complete(tree, ["build", "--"]) == ["--format", "--help", "--jobs"]
    assert complete(tree, ["build", "-"]) == ["--format", "--help", "--jobs", "-f", "-h"]


def test_option_value_choices(tree):
    assert complete(tree, ["build", "--format", ""]) == ["json", "text"]
    assert complete(tree, ["build", "-f", "j"]) == ["json"]


def test_option_without_choices_has_no_candidates(tree):
    assert complete(tree, ["build", "--jobs", ""]) == []


def test_attached_value_does_not_expect_another(tree):
    assert complete(tree, ["build", "--format=json", ""]) == ["app", "lib"]


def test_positional_choices(tree):
    assert complete(tree, ["build", ""]) == ["app", "lib"]
    assert complete(tree, ["build", "--format", "json", "l"]) == ["lib"]


def test_results_are_unique_and_sorted(tree):
    result = complete(tree, ["build", "-"])
    assert result == sorted(set(result))
