import pytest

from argbind.exceptions import (
    ArgumentDefinitionError,
    CommandCycleError,
    ParseErrorKind,
)
from argbind.exit_codes import ExitCode
from argbind.parser import ArgumentSet, CommandNode, CommandParser, CommandSpec, ParseOutcome


@pytest.fixture
def parser():
    build_args = ArgumentSet()
    build_args.add_argument("target")
    build_args.add_argument("-j", "--jobs", type=int, default=1)
    build_args.add_argument("-v", "--verbose", action="count")

    clean_args = ArgumentSet()
    clean_args.add_argument("--all", action="store_true")

    root_args = ArgumentSet()
    root_args.add_argument("--config")

    root = CommandSpec(
        "tool",
        arguments=root_args,
        subcommands=[
            CommandSpec("build", arguments=build_args, aliases=["b"], help_text="Build."),
            CommandSpec("clean", arguments=clean_args),
        ],
        version="1.2.0",
    )
    return CommandParser(root)


def test_descends_into_subcommand(parser):
    result = parser.parse(["--config", "c.toml", "build", "-vv", "app", "-j", "3"])
    assert result.outcome == ParseOutcome.OK
    assert result.command_path == ["tool", "build"]
    assert result.values.as_dict() == {"target": "app", "jobs": 3, "verbose": 2}
    assert result.levels[0][1]["config"] == "c.toml"
    assert result.exit_code == ExitCode.SUCCESS


def test_parent_options_after_subcommand_name(parser):
    result = parser.parse(["build", "app", "--config", "c.toml"])
    assert result.ok
    assert result.levels[0][1]["config"] == "c.toml"


def test_alias_selects_subcommand(parser):
    assert parser.parse(["b", "app"]).command_path == ["tool", "build"]


def test_root_without_subcommand(parser):
    result = parser.parse([])
    assert result.ok
    assert result.command_path == ["tool"]


def test_unknown_subcommand_is_unexpected_value(parser):
    result = parser.parse(["deploy"])
    assert result.error.kind == ParseErrorKind.UNEXPECTED_VALUE
    assert result.error.message == "Unexpected argument 'deploy'"
    assert result.exit_code == ExitCode.VALIDATION_FAILURE
    assert result.error.usage == "Usage: tool [--config <config>] <subcommand>"


def test_unknown_option_reported_at_resolved_command(parser):
    result = parser.parse(["clean", "--al"])
    assert result.error.kind == ParseErrorKind.UNKNOWN_OPTION
    assert result.error.message == "Unknown option '--al'. Did you mean '--all'?"
    assert result.error.command_path == ["tool", "clean"]


def test_missing_argument_in_subcommand(parser):
    result = parser.parse(["build"])
    assert result.error.kind == ParseErrorKind.MISSING_ARGUMENT
    assert result.command_path == ["tool", "build"]
    assert result.error.usage == "Usage: tool build [--jobs <jobs>] [--verbose] <target>"


@pytest.mark.parametrize("flag", ["-h", "--help"])
def test_help_flag_at_root(parser, flag):
    result = parser.parse([flag])
    assert result.outcome == ParseOutcome.HELP
    assert result.command_path == ["tool"]
    assert result.exit_code == ExitCode.SUCCESS


def test_help_flag_for_subcommand(parser):
    result = parser.parse(["build", "--help"])
    assert result.outcome == ParseOutcome.HELP
    assert result.command_path == ["tool", "build"]


def test_help_wins_over_parse_error(parser):
    result = parser.parse(["build", "-j", "many", "-h"])
    assert result.outcome == ParseOutcome.HELP
    assert result.command_path == ["tool", "build"]


def test_help_subcommand(parser):
    result = parser.parse(["help", "build"])
    assert result.outcome == ParseOutcome.HELP
    assert result.command_path == ["tool", "build"]
    assert parser.parse(["help"]).command_path == ["tool"]


def test_help_subcommand_only_added_when_there_are_children():
    tree = CommandNode.build(CommandSpec("leaf"))
    assert tree.children == []
    assert tree.arguments.get_argument("help") is not None


def test_version(parser):
    result = parser.parse(["--version"])
    assert result.outcome == ParseOutcome.VERSION
    assert result.version == "1.2.0"


def test_no_version_flag_without_version():
    parser = CommandParser(CommandSpec("tool"))
    result = parser.parse(["--version"])
    assert result.error.kind == ParseErrorKind.UNKNOWN_OPTION


def test_user_declared_help_name_is_kept():
    arguments = ArgumentSet()
    arguments.add_argument("-h", "--host")
    parser = CommandParser(CommandSpec("tool", arguments=arguments))
    result = parser.parse(["-h", "localhost"])
    assert result.ok
    assert result.values["host"] == "localhost"
    assert parser.parse(["--help"]).outcome == ParseOutcome.HELP


def test_default_subcommand():
    run_args = ArgumentSet()
    run_args.add_argument("--fast", action="store_true")
    root = CommandSpec(
        "tool",
        subcommands=[CommandSpec("run", arguments=run_args), CommandSpec("stop")],
        default_subcommand="run",
    )
    parser = CommandParser(root)
    result = parser.parse(["--fast"])
    assert result.ok
    assert result.command_path == ["tool", "run"]
    assert result.values["fast"] is True
    assert parser.parse(["stop"]).command_path == ["tool", "stop"]


def test_unknown_default_subcommand():
    with pytest.raises(ArgumentDefinitionError):
        CommandParser(CommandSpec("tool", subcommands=[CommandSpec("a")], default_subcommand="b"))


def test_cycle_is_detected():
    a = CommandSpec("a")
    b = CommandSpec("b", subcommands=[a])
    a.subcommands.append(b)
    with pytest.raises(CommandCycleError) as excinfo:
        CommandParser(a)
    assert excinfo.value.path == ["a", "b", "a"]
    assert str(excinfo.value) == "The command configuration contains a cycle: a -> b -> a"


def test_self_cycle_is_detected():
    a = CommandSpec("a")
    a.subcommands.append(a)
    with pytest.raises(CommandCycleError):
        CommandNode.build(a)


def test_shared_subcommand_is_not_a_cycle():
    shared = CommandSpec("status")
    root = CommandSpec(
        "tool",
        subcommands=[
            CommandSpec("x", subcommands=[shared]),
            CommandSpec("y", subcommands=[shared]),
        ],
    )
    parser = CommandParser(root)
    assert parser.parse(["y", "status"]).command_path == ["tool", "y", "status"]


def test_completion_request(parser):
    result = parser.parse(["---completion", "--", "b"])
    assert result.outcome == ParseOutcome.COMPLETION
    assert result.completions == ["build"]
    assert result.exit_code == ExitCode.SUCCESS


def test_completion_option_is_private(parser):
    assert "completion" not in parser.usage()
    result = parser.parse(["--completion"])
    assert result.error.message == "Unknown option '--completion'"


def test_usage_for_path(parser):
    assert parser.usage(["clean"]) == "Usage: tool clean [--all]"
    assert parser.node_for(["tool", "build"]).name == "build"
