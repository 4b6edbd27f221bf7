import pytest

from argbind.exceptions import ArgumentSetValidationError
from argbind.parser import ArgumentSet, CommandParser, CommandSpec
from argbind.parser.validators import (
    validate_argument_set,
    validate_coding_keys,
    validate_nonsense_flags,
    validate_positional_order,
    validate_unique_names,
)


def test_valid_set_passes():
    arguments = ArgumentSet()
    arguments.add_argument("--name")
    arguments.add_argument("path")
    validate_argument_set(arguments, "tool")


def test_misplaced_repeating_positional():
    arguments = ArgumentSet()
    arguments.add_argument("files", action="append")
    arguments.add_argument("out")
    assert validate_positional_order(arguments) == [
        "Can't have a positional argument `out` following an array of positional "
        "arguments `files`."
    ]


def test_misplaced_repeating_positional_fails_tree_build():
    arguments = ArgumentSet()
    arguments.add_argument("files", action="append")
    arguments.add_argument("out")
    with pytest.raises(ArgumentSetValidationError) as excinfo:
        CommandParser(CommandSpec("tool", arguments=arguments))
    assert excinfo.value.command_name == "tool"
    assert "`files`" in str(excinfo.value)


def test_nonsense_flag_default():
    arguments = ArgumentSet()
    arguments.add_argument("--verbose", action="store_true", default=True)
    issues = validate_nonsense_flags(arguments)
    assert len(issues) == 1
    assert issues[0].endswith("Affected flag(s):\n--verbose")


def test_nonsense_flag_fails_tree_build():
    arguments = ArgumentSet()
    arguments.add_argument("--verbose", action="store_true", default=True)
    with pytest.raises(ArgumentSetValidationError):
        CommandParser(CommandSpec("tool", arguments=arguments))


def test_bool_optional_with_true_default_is_fine():
    arguments = ArgumentSet()
    arguments.add_argument("--color", action="store_bool_optional", default=True)
    assert validate_nonsense_flags(arguments) == []


def test_duplicate_names():
    arguments = ArgumentSet()
    arguments.add_argument("-n", "--name")
    arguments.add_argument("-n", "--number", dest="number")
    arguments.add_argument("--name", dest="other")
    issues = validate_unique_names(arguments)
    assert issues == [
        'Multiple (2) `Option` or `Flag` arguments are named "-n".',
        'Multiple (2) `Option` or `Flag` arguments are named "--name".',
    ]


def test_coding_keys():
    arguments = ArgumentSet(coding_keys=["name"])
    arguments.add_argument("--name")
    arguments.add_argument("--jobs")
    assert validate_coding_keys(arguments) == [
        "Argument `jobs` is defined without a corresponding `CodingKey`."
    ]
    arguments.add_argument("--tag")
    assert validate_coding_keys(arguments) == [
        "Arguments `jobs`,`tag` are defined without corresponding `CodingKey`s."
    ]


def test_coding_keys_ignore_builtins():
    arguments = ArgumentSet(coding_keys=["name"])
    arguments.add_argument("--name")
    CommandParser(CommandSpec("tool", arguments=arguments, version="1.0"))


def test_all_issues_reported_together():
    arguments = ArgumentSet()
    arguments.add_argument("files", action="append")
    arguments.add_argument("out")
    arguments.add_argument("--verbose", action="store_true", default=True)
    arguments.add_argument("--verbose", action="count", dest="level")
    with pytest.raises(ArgumentSetValidationError) as excinfo:
        validate_argument_set(arguments, "tool")
    assert len(excinfo.value.issues) == 3
    assert str(excinfo.value).startswith("Validation failed for `tool`:\n- ")
