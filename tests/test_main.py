from pathlib import Path

import pytest

import argbind.__main__ as argbind_main
from argbind.__main__ import find_argbind_config, main, result_payload, split_argv
from argbind.exit_codes import ExitCode
from argbind.parser import ArgumentSet, CommandParser, CommandSpec, ParseOutcome

CONFIG = """
name: tool
version: "2.0.0"
subcommands:
  - name: build
    help_text: Build a target.
    arguments:
      - flags: [target]
      - flags: ["--jobs", "-j"]
        type: int
        default: 1
"""


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    monkeypatch.setattr(argbind_main, "setup_logging", lambda **kwargs: None)


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ARGBIND_CONFIG", raising=False)
    path = tmp_path / "argbind.yaml"
    path.write_text(CONFIG, encoding="UTF-8")
    return path


def test_split_argv():
    assert split_argv(["--config", "x.yaml", "--debug", "build", "--debug"]) == (
        ["--config", "x.yaml", "--debug"],
        ["build", "--debug"],
    )
    assert split_argv(["--config=x.yaml", "build"]) == (["--config=x.yaml"], ["build"])
    assert split_argv(["build", "--config", "x"]) == ([], ["build", "--config", "x"])


def test_find_config_in_cwd(config_file):
    assert find_argbind_config() == Path("argbind.yaml").resolve()


def test_find_config_from_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    other = tmp_path / "other.toml"
    other.write_text('name = "x"\n', encoding="UTF-8")
    monkeypatch.setenv("ARGBIND_CONFIG", str(other))
    assert find_argbind_config() == other


def test_no_config(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("ARGBIND_CONFIG", raising=False)
    assert find_argbind_config() is None
    assert main([]) == ExitCode.FAILURE


def test_main_ok(config_file, capsys):
    assert main(["build", "app", "-j", "3"]) == ExitCode.SUCCESS
    out = capsys.readouterr().out
    assert '"app"' in out
    assert '"jobs"' in out


def test_main_with_explicit_config(config_file, capsys):
    assert main(["--config", str(config_file), "build", "app"]) == ExitCode.SUCCESS


def test_main_error(config_file, capsys):
    assert main(["bogus"]) == ExitCode.VALIDATION_FAILURE
    err = capsys.readouterr().err
    assert "Unexpected argument" in err
    assert "Usage: tool" in err


def test_main_help(config_file, capsys):
    assert main(["build", "--help"]) == ExitCode.SUCCESS
    out = capsys.readouterr().out
    assert "Usage: tool build" in out
    assert "Build a target." in out


def test_main_version(config_file, capsys):
    assert main(["--version"]) == ExitCode.SUCCESS
    assert "2.0.0" in capsys.readouterr().out


def test_main_completion(config_file, capsys):
    assert main(["---completion", "--", "bu"]) == ExitCode.SUCCESS
    assert capsys.readouterr().out.split() == ["build"]


def test_main_bad_config(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "broken.yaml"
    path.write_text("subcommands:\n  - ref: missing\n", encoding="UTF-8")
    assert main(["--config", str(path)]) == ExitCode.FAILURE
    assert "missing" in capsys.readouterr().err


def test_result_payload():
    arguments = ArgumentSet()
    arguments.add_argument("--name")
    result = CommandParser(CommandSpec("tool", arguments=arguments)).parse(["--name", "x"])
    assert result.outcome == ParseOutcome.OK
    assert result_payload(result) == {
        "command": ["tool"],
        "values": {"name": "x"},
        "levels": [{"command": "tool", "values": {"name": "x"}}],
    }


def test_exit_code_for_outcome():
    assert ExitCode.for_outcome(ParseOutcome.ERROR) == ExitCode.VALIDATION_FAILURE
    assert ExitCode.for_outcome("help") == ExitCode.SUCCESS
    assert ExitCode.for_outcome("bogus") == ExitCode.FAILURE
