# Argbind CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Declarative command-tree loading for argbind.

A config file (YAML or TOML) describes the root command. Subcommands are either
written inline or reference an entry of the top-level `commands` table by name:

    name: tool
    version: "1.2.0"
    arguments:
      - flags: ["--format", "-f"]
        choices: [json, text]
        default: text
    subcommands:
      - ref: build
    commands:
      build:
        help_text: Build a target.
        arguments:
          - flags: [target]
          - flags: ["--jobs", "-j"]
            type: int

Every reference to the same table entry yields the same `CommandSpec`, so a
command can appear in several places. An entry that (transitively) references
itself is reported as a `CommandCycleError` when the tree is built.
"""
from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any, Callable

import toml
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from argbind.exceptions import ArgumentDefinitionError, ConfigError
from argbind.logger import logger
from argbind.parser.argument_set import ArgumentSet
from argbind.parser.command import CommandSpec

TYPE_NAMES: dict[str, Callable[[str], Any]] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "datetime": datetime,
    "path": Path,
}


class RawArgument(BaseModel):
    """One entry of a command's `arguments` list."""

    flags: list[str]
    action: str = "store"
    type: str = "str"
    default: Any = None
    choices: list[Any] | None = None
    required: bool = False
    help: str = ""
    dest: str | None = None
    strategy: str | None = None
    visibility: str = "default"
    value_name: str | None = None
    const: Any = None
    exclusivity: str | None = None
    inversion: str = "prefixed_no"
    allow_joined: bool = False

    @field_validator("flags")
    @classmethod
    def validate_flags(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("flags must contain at least one flag or name")
        return value

    @field_validator("type")
    @classmethod
    def validate_type(cls, value: str) -> str:
        if value not in TYPE_NAMES:
            raise ValueError(
                f"Unknown type '{value}', expected one of {', '.join(TYPE_NAMES)}"
            )
        return value

    def register(self, arguments: ArgumentSet) -> None:
        arguments.add_argument(
            *self.flags,
            action=self.action,
            default=self.default,
            type=TYPE_NAMES[self.type],
            choices=self.choices,
            required=self.required,
            help=self.help,
            dest=self.dest,
            strategy=self.strategy,
            visibility=self.visibility,
            value_name=self.value_name,
            const=self.const,
            exclusivity=self.exclusivity,
            inversion=self.inversion,
            allow_joined=self.allow_joined,
        )


class RawFlagGroup(BaseModel):
    """Several flags storing one value each into the same `dest`."""

    dest: str
    cases: dict[str, Any]
    default: Any = None
    required: bool | None = None
    exclusivity: str = "exclusive"
    help: str = ""
    visibility: str = "default"

    def register(self, arguments: ArgumentSet) -> None:
        arguments.add_flag_group(
            self.dest,
            self.cases,
            default=self.default,
            required=self.required,
            exclusivity=self.exclusivity,
            help=self.help,
            visibility=self.visibility,
        )


class RawCommand(BaseModel):
    """An inline command, or a reference to an entry of the `commands` table."""

    name: str | None = None
    ref: str | None = None
    help_text: str = ""
    aliases: list[str] = Field(default_factory=list)
    arguments: list[RawArgument] = Field(default_factory=list)
    flag_groups: list[RawFlagGroup] = Field(default_factory=list)
    subcommands: list[RawCommand] = Field(default_factory=list)
    default_subcommand: str | None = None
    coding_keys: list[str] | None = None

    @model_validator(mode="after")
    def validate_name_or_ref(self) -> RawCommand:
        if self.ref is not None and (self.arguments or self.subcommands):
            raise ValueError(
                f"Reference '{self.ref}' cannot also declare arguments or subcommands"
            )
        return self

    def build_arguments(self) -> ArgumentSet:
        arguments = ArgumentSet(coding_keys=self.coding_keys)
        for raw_argument in self.arguments:
            raw_argument.register(arguments)
        for raw_group in self.flag_groups:
            raw_group.register(arguments)
        return arguments


class RawConfig(RawCommand):
    """The root command plus the table of named, reusable commands."""

    name: str | None = "argbind"
    version: str | None = None
    commands: dict[str, RawCommand] = Field(default_factory=dict)

    @model_validator(mode="after")
    def validate_root(self) -> RawConfig:
        if self.ref is not None:
            raise ValueError("The root command cannot be a reference")
        return self


class _TreeBuilder:
    def __init__(self, config: RawConfig):
        self.config = config
        self.shared: dict[str, CommandSpec] = {}

    def build_root(self) -> CommandSpec:
        spec = CommandSpec(self.config.name or "argbind", version=self.config.version)
        self._populate(spec, self.config)
        return spec

    def _resolve(self, raw: RawCommand) -> CommandSpec:
        if raw.ref is None:
            if not raw.name:
                raise ConfigError("Inline subcommands must have a name")
            spec = CommandSpec(raw.name)
            self._populate(spec, raw)
            return spec
        if raw.ref in self.shared:
            return self.shared[raw.ref]
        target = self.config.commands.get(raw.ref)
        if target is None:
            raise ConfigError(f"Unknown command reference '{raw.ref}'")
        spec = CommandSpec(target.name or raw.ref)
        self.shared[raw.ref] = spec
        self._populate(spec, target)
        return spec

    def _populate(self, spec: CommandSpec, raw: RawCommand) -> None:
        try:
            spec.arguments = raw.build_arguments()
        except ArgumentDefinitionError as error:
            logger.error("Invalid argument in command '%s': %s", spec.name, error)
            raise ConfigError(f"Invalid argument in command '{spec.name}': {error}") from error
        spec.help_text = raw.help_text
        spec.aliases = list(raw.aliases)
        spec.default_subcommand = raw.default_subcommand
        spec.subcommands = [self._resolve(child) for child in raw.subcommands]


def build_spec(raw_config: dict[str, Any]) -> CommandSpec:
    """Validate a raw config mapping and build its root `CommandSpec`."""
    try:
        config = RawConfig.model_validate(raw_config)
    except ValidationError as error:
        logger.error("Invalid command configuration: %s", error)
        raise ConfigError(f"Invalid command configuration:\n{error}") from error
    return _TreeBuilder(config).build_root()


def loader(file_path: Path | str) -> CommandSpec:
    """
    Load a command tree from a YAML or TOML file.

    Args:
        file_path (Path | str): Path to the config file.

    Returns:
        CommandSpec: The root command. Build a `CommandParser` from it to validate
            the tree and parse input.

    Raises:
        ConfigError: If the file is missing, unreadable or malformed.
    """
    if isinstance(file_path, (str, Path)):
        path = Path(file_path)
    else:
        raise TypeError("file_path must be a string or Path object.")

    if not path.is_file():
        logger.error("Config file not found: %s", path)
        raise ConfigError(f"No such config file: {file_path}")

    suffix = path.suffix
    try:
        with path.open("r", encoding="UTF-8") as config_file:
            if suffix in (".yaml", ".yml"):
                raw_config = yaml.safe_load(config_file)
            elif suffix == ".toml":
                raw_config = toml.load(config_file)
            else:
                raise ConfigError(f"Unsupported config format: {suffix}")
    except (yaml.YAMLError, toml.TomlDecodeError) as error:
        logger.error("Failed to parse config file '%s': %s", path, error)
        raise ConfigError(f"Failed to parse config file '{path}': {error}") from error

    if not isinstance(raw_config, dict):
        raise ConfigError(
            "Configuration file must contain a mapping describing the root command.\n"
            "Example:\n"
            "name: tool\n"
            "arguments:\n"
            "  - flags: ['--verbose', '-v']\n"
            "    action: store_true"
        )

    spec = build_spec(raw_config)
    logger.info("Loaded command '%s' from %s", spec.name, path)
    return spec
