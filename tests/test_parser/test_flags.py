import pytest

from argbind.exceptions import ParseErrorKind
from argbind.parser import ArgumentSet, CommandParser, CommandSpec


def parse(arguments, argv):
    return CommandParser(CommandSpec("tool", arguments=arguments)).parse(argv)


@pytest.fixture
def modes():
    arguments = ArgumentSet()
    arguments.add_flag_group(
        "mode",
        {("--list", "-l"): "list", ("--count", "-c"): "count"},
    )
    return arguments


def test_flag_group_binds_case_value(modes):
    assert parse(modes, ["-c"]).values["mode"] == "count"


def test_flag_group_without_default_is_required(modes):
    result = parse(modes, [])
    assert result.error.kind == ParseErrorKind.MISSING_ARGUMENT
    assert result.error.message == "Missing one of: '--list', '--count'"


def test_exclusive_flags_name_both_origins(modes):
    result = parse(modes, ["--list", "-c"])
    assert result.error.kind == ParseErrorKind.DUPLICATE_EXCLUSIVE
    assert result.error.message == (
        "Value to be set with flag '-c' had already been set with flag '--list'"
    )
    assert len(result.error.origins) == 2


def test_exclusive_flags_in_cluster(modes):
    result = parse(modes, ["-lc"])
    assert result.error.message == (
        "Value to be set with flag 'c' in '-lc' had already been set with flag 'l' in '-lc'"
    )


def test_exclusive_flags_allow_repeating_same_value(modes):
    result = parse(modes, ["--list", "-l"])
    assert result.ok
    assert result.values["mode"] == "list"


def test_choose_first_and_choose_last():
    arguments = ArgumentSet()
    arguments.add_flag_group(
        "first", {"--a": "a", "--b": "b"}, default="none", exclusivity="choose_first"
    )
    arguments.add_flag_group(
        "last", {"--x": "x", "--y": "y"}, default="none", exclusivity="choose_last"
    )
    result = parse(arguments, ["--a", "--b", "--x", "--y"])
    assert result.values["first"] == "a"
    assert result.values["last"] == "y"
    assert len(list(result.values.origin("first"))) == 2


def test_flag_group_default():
    arguments = ArgumentSet()
    arguments.add_flag_group("size", {"--small": "s", "--large": "l"}, default="s")
    result = parse(arguments, [])
    assert result.values["size"] == "s"
    assert result.values.origin("size").is_default


def test_store_bool_optional_pair():
    arguments = ArgumentSet()
    arguments.add_argument("--color", action="store_bool_optional", default=True)
    assert parse(arguments, []).values["color"] is True
    assert parse(arguments, ["--no-color"]).values["color"] is False
    assert parse(arguments, ["--color"]).values["color"] is True


def test_store_bool_optional_conflict():
    arguments = ArgumentSet()
    arguments.add_argument("--color", action="store_bool_optional")
    result = parse(arguments, ["--color", "--no-color"])
    assert result.error.kind == ParseErrorKind.DUPLICATE_EXCLUSIVE


def test_store_bool_optional_choose_last():
    arguments = ArgumentSet()
    arguments.add_argument(
        "--color", action="optional", default=False, exclusivity="choose_last"
    )
    assert parse(arguments, ["--color", "--no-color"]).values["color"] is False


def test_store_bool_optional_enable_disable():
    arguments = ArgumentSet()
    arguments.add_argument(
        "--cache", action="store_bool_optional", inversion="prefixed_enable_disable"
    )
    assert parse(arguments, ["--disable-cache"]).values["cache"] is False
    assert parse(arguments, ["--enable-cache"]).values["cache"] is True
    assert parse(arguments, []).values["cache"] is None


def test_store_bool_optional_required():
    arguments = ArgumentSet()
    arguments.add_argument("--color", action="store_bool_optional", required=True)
    result = parse(arguments, [])
    assert result.error.message == "Missing one of: '--color', '--no-color'"


def test_store_true_repeats_freely():
    arguments = ArgumentSet()
    arguments.add_argument("-v", "--verbose", action="store_true")
    assert parse(arguments, ["-v", "--verbose"]).values["verbose"] is True
