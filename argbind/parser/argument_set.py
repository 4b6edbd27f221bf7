# Argbind CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ArgumentSet`, the ordered list of argument definitions that belongs to one
command, together with the builder used to declare them.

Arguments are registered explicitly:

    arguments = ArgumentSet()
    arguments.add_argument("--format", "-f", choices=["json", "text"])
    arguments.add_argument("-v", "--verbose", action="count")
    arguments.add_argument("--color", action="store_bool_optional", default=True)
    arguments.add_flag_group("size", {"--small": "s", "--large": "l"}, default="s")
    arguments.add_argument("paths", action="append")

Registration checks each declaration on its own and raises
`ArgumentDefinitionError` for settings that can never work. Problems that involve
several declarations (duplicate names, misplaced repeating positionals, ...) are
left to `argbind.parser.validators`, which reports all of them at once.

Name lookup always returns the first definition declaring a name.
"""
from __future__ import annotations

from typing import Any, Iterable, Iterator, Mapping, Sequence

from argbind.exceptions import ArgumentDefinitionError
from argbind.parser.argument import ArgumentDefinition
from argbind.parser.argument_action import (
    ArgumentAction,
    ArgumentVisibility,
    FlagExclusivity,
    FlagInversion,
    ParsingStrategy,
)
from argbind.parser.name import Name


class ArgumentSet:
    """
    An ordered collection of `ArgumentDefinition`s.

    Attributes:
        coding_keys (set[str] | None): If set, the keys the caller will decode the
            bound values into. Every `dest` must appear in it.
    """

    def __init__(
        self,
        definitions: Iterable[ArgumentDefinition] | None = None,
        coding_keys: Iterable[str] | None = None,
    ) -> None:
        self._definitions: list[ArgumentDefinition] = []
        self._name_map: dict[Name, ArgumentDefinition] = {}
        self.coding_keys: set[str] | None = (
            set(coding_keys) if coding_keys is not None else None
        )
        for definition in definitions or []:
            self.append(definition)

    def __iter__(self) -> Iterator[ArgumentDefinition]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    def __bool__(self) -> bool:
        return bool(self._definitions)

    def __repr__(self) -> str:
        return f"ArgumentSet({[definition.dest for definition in self._definitions]})"

    def copy(self) -> ArgumentSet:
        clone = ArgumentSet(self._definitions)
        clone.coding_keys = set(self.coding_keys) if self.coding_keys is not None else None
        return clone

    def append(self, definition: ArgumentDefinition) -> None:
        self._definitions.append(definition)
        for name in definition.names:
            self._name_map.setdefault(name, definition)

    def include(self, group: ArgumentSet) -> None:
        """Merge a reusable group of arguments into this set."""
        for definition in group:
            self.append(definition)
        if group.coding_keys is not None:
            self.coding_keys = (self.coding_keys or set()) | group.coding_keys

    # Lookup

    def first_matching(self, name: Name) -> ArgumentDefinition | None:
        return self._name_map.get(name)

    def contains_name(self, name: Name) -> bool:
        return name in self._name_map

    @property
    def names(self) -> list[Name]:
        return [name for definition in self._definitions for name in definition.names]

    @property
    def positionals(self) -> list[ArgumentDefinition]:
        return [definition for definition in self._definitions if definition.is_positional]

    @property
    def dests(self) -> list[str]:
        seen: list[str] = []
        for definition in self._definitions:
            if definition.dest not in seen:
                seen.append(definition.dest)
        return seen

    def definitions_for(self, dest: str) -> list[ArgumentDefinition]:
        return [definition for definition in self._definitions if definition.dest == dest]

    def get_argument(self, dest: str) -> ArgumentDefinition | None:
        return next((a for a in self._definitions if a.dest == dest), None)

    @property
    def captures_all(self) -> bool:
        return any(definition.captures_all for definition in self._definitions)

    # Registration

    def _is_positional(self, flags: tuple[str, ...]) -> bool:
        """Check if the flags are positional."""
        positional = any(not flag.startswith("-") for flag in flags)
        if positional and len(flags) > 1:
            raise ArgumentDefinitionError(
                "Positional arguments cannot have multiple flags"
            )
        return positional

    def _get_dest_from_flags(self, flags: tuple[str, ...], dest: str | None) -> str:
        """Convert flags to a destination name."""
        if not dest:
            for flag in flags:
                dest = flag.lstrip("-").replace("-", "_").lower()
                if flag.startswith("--"):
                    break
        assert dest is not None, "dest should not be None"
        if not dest.replace("_", "").isalnum():
            raise ArgumentDefinitionError(
                f"dest '{dest}' must be a valid identifier "
                "(letters, digits, and underscores only)"
            )
        if dest[0].isdigit():
            raise ArgumentDefinitionError(f"dest '{dest}' must not start with a digit")
        return dest

    def _validate_action(
        self, action: ArgumentAction | str, positional: bool
    ) -> ArgumentAction:
        if not isinstance(action, ArgumentAction):
            try:
                action = ArgumentAction(action)
            except ValueError as error:
                raise ArgumentDefinitionError(
                    f"Invalid action '{action}' is not a valid ArgumentAction"
                ) from error
        if positional and action not in (ArgumentAction.STORE, ArgumentAction.APPEND):
            raise ArgumentDefinitionError(
                f"Action '{action}' cannot be used with positional arguments"
            )
        return action

    def _validate_strategy(
        self,
        strategy: ParsingStrategy | str | None,
        action: ArgumentAction,
        positional: bool,
    ) -> ParsingStrategy:
        if strategy is None:
            if action == ArgumentAction.COMPLETION:
                return ParsingStrategy.REMAINING
            return ParsingStrategy.NEXT
        if not isinstance(strategy, ParsingStrategy):
            try:
                strategy = ParsingStrategy(strategy)
            except ValueError as error:
                raise ArgumentDefinitionError(str(error)) from error
        if not action.takes_value and strategy != ParsingStrategy.NEXT:
            raise ArgumentDefinitionError(
                f"A parsing strategy cannot be set for {action} actions"
            )
        if positional and strategy not in (ParsingStrategy.NEXT, ParsingStrategy.REMAINING):
            raise ArgumentDefinitionError(
                f"Positional arguments only support the 'next' and 'remaining' "
                f"strategies, got '{strategy}'"
            )
        if strategy == ParsingStrategy.UP_TO_NEXT_OPTION and action != ArgumentAction.APPEND:
            raise ArgumentDefinitionError(
                "The 'up_to_next_option' strategy requires the 'append' action"
            )
        if (
            strategy == ParsingStrategy.REMAINING
            and action == ArgumentAction.STORE
        ):
            raise ArgumentDefinitionError(
                "The 'remaining' strategy requires the 'append' action"
            )
        return strategy

    def _normalize_choices(
        self, choices: Iterable | None, action: ArgumentAction
    ) -> tuple[Any, ...]:
        if choices is None:
            return ()
        if not action.takes_value:
            raise ArgumentDefinitionError(f"choices cannot be specified for {action} actions")
        if isinstance(choices, (dict, str)):
            raise ArgumentDefinitionError("choices must be a list, tuple, or set")
        try:
            return tuple(choices)
        except TypeError as error:
            raise ArgumentDefinitionError(
                "choices must be iterable (like list, tuple, or set)"
            ) from error

    def _determine_required(
        self,
        required: bool,
        positional: bool,
        action: ArgumentAction,
        default: Any,
    ) -> bool:
        """Positionals are required unless they have a default or repeat."""
        if required:
            if action in (
                ArgumentAction.STORE_TRUE,
                ArgumentAction.STORE_FALSE,
                ArgumentAction.STORE_CONST,
                ArgumentAction.COUNT,
                ArgumentAction.HELP,
                ArgumentAction.VERSION,
                ArgumentAction.COMPLETION,
            ):
                raise ArgumentDefinitionError(
                    f"Argument with action {action} cannot be required"
                )
            return True
        if positional:
            return default is None and action != ArgumentAction.APPEND
        return False

    def _names_from_flags(
        self, flags: Sequence[str], allow_joined: bool
    ) -> tuple[Name, ...]:
        if allow_joined and not any(len(flag) == 2 for flag in flags):
            raise ArgumentDefinitionError(
                f"Joined values need a short flag (e.g. -D), got {list(flags)}"
            )
        return tuple(
            Name.from_flag(flag, allows_joined=allow_joined and len(flag) == 2)
            for flag in flags
        )

    def add_argument(
        self,
        *flags: str,
        action: str | ArgumentAction = "store",
        default: Any = None,
        type: Any = str,
        choices: Iterable | None = None,
        required: bool = False,
        help: str = "",
        dest: str | None = None,
        strategy: str | ParsingStrategy | None = None,
        visibility: str | ArgumentVisibility = "default",
        value_name: str | None = None,
        const: Any = None,
        exclusivity: str | FlagExclusivity | None = None,
        inversion: str | FlagInversion = FlagInversion.PREFIXED_NO,
        allow_joined: bool = False,
    ) -> ArgumentDefinition:
        """
        Define a new argument.

        Args:
            *flags (str): The flag(s) or name identifying the argument
                (e.g., "-v", "--verbose", or "path" for a positional).
            action (str | ArgumentAction): The argument action type (default: "store").
            default (Any): Default value if the argument is not provided.
            type (Any): Transform applied to each raw value.
            choices (Iterable | None): Optional set of allowed values.
            required (bool): Whether this argument is mandatory.
            help (str): Help text for the argument.
            dest (str | None): Custom destination key in the bound values.
            strategy (str | ParsingStrategy | None): Where values are read from.
            visibility (str | ArgumentVisibility): Default, hidden or private.
            value_name (str | None): Placeholder shown in synopses.
            const (Any): Value stored by `store_const`, or the version string.
            exclusivity (str | FlagExclusivity | None): Resolution of repeated flags.
            inversion (str | FlagInversion): Naming of `store_bool_optional` pairs.
            allow_joined (bool): Short names also accept `-Dvalue`.

        Returns:
            ArgumentDefinition: The (first) definition that was registered.
        """
        if not flags:
            raise ArgumentDefinitionError("No flags provided")
        positional = self._is_positional(flags)
        dest = self._get_dest_from_flags(flags, dest)
        action = self._validate_action(action, positional)
        strategy = self._validate_strategy(strategy, action, positional)
        choices = self._normalize_choices(choices, action)
        try:
            visibility = ArgumentVisibility(visibility)
            exclusivity = FlagExclusivity(
                exclusivity
                or (
                    FlagExclusivity.EXCLUSIVE
                    if action == ArgumentAction.STORE_BOOL_OPTIONAL
                    else FlagExclusivity.CHOOSE_LAST
                )
            )
            inversion = FlagInversion(inversion)
        except ValueError as error:
            raise ArgumentDefinitionError(str(error)) from error
        if default is not None and choices and action == ArgumentAction.STORE:
            if default not in choices:
                raise ArgumentDefinitionError(
                    f"Default value '{default}' not in allowed choices: {list(choices)}"
                )
        if action == ArgumentAction.STORE_BOOL_OPTIONAL:
            return self._register_store_bool_optional(
                flags,
                dest,
                default=default,
                required=required,
                help=help,
                inversion=inversion,
                exclusivity=exclusivity,
                visibility=visibility,
            )
        if action == ArgumentAction.STORE_TRUE and default is None:
            default = False
        elif action == ArgumentAction.STORE_FALSE and default is None:
            default = True
        required = self._determine_required(required, positional, action, default)
        definition = ArgumentDefinition(
            names=() if positional else self._names_from_flags(flags, allow_joined),
            dest=dest,
            action=action,
            type=type,
            default=default,
            choices=choices,
            required=required,
            help=help,
            strategy=strategy,
            visibility=visibility,
            value_name=value_name,
            const=const,
            exclusivity=exclusivity,
        )
        self.append(definition)
        return definition

    def _register_store_bool_optional(
        self,
        flags: tuple[str, ...],
        dest: str,
        *,
        default: Any,
        required: bool,
        help: str,
        inversion: FlagInversion,
        exclusivity: FlagExclusivity,
        visibility: ArgumentVisibility,
    ) -> ArgumentDefinition:
        if len(flags) != 1 or not flags[0].startswith("--"):
            raise ArgumentDefinitionError(
                "store_bool_optional action must use a single long flag (e.g. --flag)"
            )
        if default is not None and not isinstance(default, bool):
            raise ArgumentDefinitionError(
                f"Default value for '{flags[0]}' must be a boolean, got {default!r}"
            )
        enable_flag, disable_flag = inversion.names(flags[0][2:])
        enable = ArgumentDefinition(
            names=(Name.from_flag(enable_flag),),
            dest=dest,
            action=ArgumentAction.STORE_BOOL_OPTIONAL,
            default=default,
            required=required,
            help=help,
            visibility=visibility,
            const=True,
            exclusivity=exclusivity,
            inversion_group=dest,
        )
        disable = ArgumentDefinition(
            names=(Name.from_flag(disable_flag),),
            dest=dest,
            action=ArgumentAction.STORE_BOOL_OPTIONAL,
            default=default,
            required=required,
            help=help,
            visibility=visibility,
            const=False,
            exclusivity=exclusivity,
            inversion_group=dest,
        )
        self.append(enable)
        self.append(disable)
        return enable

    def add_flag_group(
        self,
        dest: str,
        cases: Mapping[str | tuple[str, ...], Any],
        *,
        default: Any = None,
        required: bool | None = None,
        exclusivity: str | FlagExclusivity = FlagExclusivity.EXCLUSIVE,
        help: str = "",
        visibility: str | ArgumentVisibility = "default",
    ) -> list[ArgumentDefinition]:
        """
        Define an enumerable flag group: several flags that each store one value
        into the same `dest`.

        Args:
            dest (str): The shared destination key.
            cases (Mapping): Flag (or tuple of flags) to the value it stores.
            default (Any): Value bound when no flag of the group is given.
            required (bool | None): Defaults to True when there is no default.
            exclusivity (str | FlagExclusivity): Resolution of repeated flags.
            help (str): Help text shared by the group.
            visibility (str | ArgumentVisibility): Default, hidden or private.

        Returns:
            list[ArgumentDefinition]: One definition per case.
        """
        if not cases:
            raise ArgumentDefinitionError(f"Flag group '{dest}' has no cases")
        dest = self._get_dest_from_flags((), dest)
        try:
            exclusivity = FlagExclusivity(exclusivity)
            visibility = ArgumentVisibility(visibility)
        except ValueError as error:
            raise ArgumentDefinitionError(str(error)) from error
        if required is None:
            required = default is None
        definitions = []
        for flags, value in cases.items():
            flag_tuple = (flags,) if isinstance(flags, str) else tuple(flags)
            if self._is_positional(flag_tuple):
                raise ArgumentDefinitionError(
                    f"Flag group '{dest}' cases must be flags, got {flag_tuple}"
                )
            definition = ArgumentDefinition(
                names=self._names_from_flags(flag_tuple, allow_joined=False),
                dest=dest,
                action=ArgumentAction.STORE_CONST,
                default=default,
                required=required,
                help=help,
                visibility=visibility,
                const=value,
                exclusivity=exclusivity,
            )
            self.append(definition)
            definitions.append(definition)
        return definitions
