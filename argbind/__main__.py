"""
Argbind CLI Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import json
import logging
import os
import sys
from argparse import ArgumentParser, Namespace
from pathlib import Path
from typing import Any, Sequence

from rich.markup import escape

from argbind.config import loader
from argbind.console import console, error_console
from argbind.exceptions import ArgbindError
from argbind.exit_codes import ExitCode
from argbind.logger import logger
from argbind.parser import CommandParser, ParseOutcome, ParseResult
from argbind.utils import get_program_invocation, setup_logging

# Driver options are only recognized before the first argument of the tree.
DRIVER_OPTIONS = {"--config": True, "--log-mode": True, "--debug": False}


def find_argbind_config() -> Path | None:
    candidates = [
        Path(os.environ["ARGBIND_CONFIG"]) if os.environ.get("ARGBIND_CONFIG") else None,
        Path.cwd() / "argbind.yaml",
        Path.cwd() / "argbind.toml",
    ]
    return next((p for p in candidates if p is not None and p.exists()), None)


def get_root_parser(prog: str | None = "argbind") -> ArgumentParser:
    """
    Parser for the driver's own options. The rest of argv is parsed by the
    configured command tree.
    """
    parser = ArgumentParser(
        prog=prog,
        description="Argbind CLI - Parse arguments against a declared command tree.",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument("--config", help="Path to a YAML or TOML command tree.")
    parser.add_argument(
        "--log-mode", choices=["cli", "json"], help="Logging output format."
    )
    parser.add_argument(
        "--debug", action="store_true", help=f"Enable debug logging for {prog}."
    )
    return parser


def split_argv(argv: Sequence[str]) -> tuple[list[str], list[str]]:
    """Split leading driver options from the arguments meant for the tree."""
    position = 0
    while position < len(argv):
        arg = argv[position]
        name, equals, _ = arg.partition("=")
        if name not in DRIVER_OPTIONS:
            break
        takes_value = DRIVER_OPTIONS[name]
        position += 2 if takes_value and not equals else 1
    return list(argv[:position]), list(argv[position:])


def result_payload(result: ParseResult) -> dict[str, Any]:
    return {
        "command": result.command_path,
        "values": result.values.as_dict() if result.values else {},
        "levels": [
            {"command": node.name, "values": values.as_dict()}
            for node, values in result.levels
        ],
    }


def render(parser: CommandParser, result: ParseResult) -> None:
    if result.outcome == ParseOutcome.OK:
        console.print_json(json.dumps(result_payload(result), default=str))
    elif result.outcome == ParseOutcome.HELP:
        node = parser.node_for(result.command_path)
        console.print(f"[usage]{escape(result.usage)}[/]")
        if node.spec.help_text:
            console.print(f"\n{escape(node.spec.help_text)}")
        if node.children:
            console.print("\n[hint]Subcommands:[/]")
            for child in node.children:
                console.print(f"  [command]{child.name}[/]  {escape(child.spec.help_text)}")
    elif result.outcome == ParseOutcome.VERSION:
        console.print(result.version, markup=False, highlight=False)
    elif result.outcome == ParseOutcome.COMPLETION:
        for completion in result.completions:
            console.print(completion, markup=False, highlight=False)
    else:
        assert result.error is not None
        error_console.print(f"[error]Error:[/] {escape(result.error.message)}")
        error_console.print(f"[usage]{escape(result.usage)}[/]")
        command = " ".join([get_program_invocation(), *result.command_path[1:]])
        error_console.print(f"[hint]See '{escape(command)} --help' for more information.[/]")


def bootstrap(args: Namespace) -> CommandParser | None:
    config_path = Path(args.config) if args.config else find_argbind_config()
    if config_path is None:
        error_console.print(
            "[error]No command tree configured.[/] Pass --config, set ARGBIND_CONFIG, "
            "or add argbind.yaml to the current directory."
        )
        return None
    try:
        return CommandParser(loader(config_path))
    except ArgbindError as error:
        logger.error("Failed to load '%s': %s", config_path, error)
        error_console.print(f"[error]{escape(str(error))}[/]")
        return None


def main(argv: Sequence[str] | None = None) -> int:
    driver_argv, tree_argv = split_argv(sys.argv[1:] if argv is None else argv)
    args = get_root_parser().parse_args(driver_argv)
    setup_logging(
        mode=args.log_mode,
        console_log_level=logging.DEBUG if args.debug else logging.WARNING,
    )

    parser = bootstrap(args)
    if parser is None:
        return ExitCode.FAILURE

    result = parser.parse(tree_argv)
    render(parser, result)
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
