# Argbind CLI Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Provenance-tagged values produced by the matching engine.

Every bound value records where it came from: either the declared default, or the
set of token indices it was read from. Origins drive the "already set by"
diagnostics and let the command parser remove exactly the consumed input.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator

from argbind.parser.tokens import Index


@dataclass(frozen=True)
class InputOrigin:
    """Where a value came from. An empty, non-default origin means "nowhere yet"."""

    indices: frozenset[Index] = field(default_factory=frozenset)
    is_default: bool = False

    @classmethod
    def default(cls) -> InputOrigin:
        return cls(is_default=True)

    @classmethod
    def of(cls, *indices: Index) -> InputOrigin:
        return cls(frozenset(indices))

    def union(self, other: InputOrigin) -> InputOrigin:
        return InputOrigin(self.indices | other.indices, self.is_default and other.is_default)

    def inserting(self, index: Index) -> InputOrigin:
        return InputOrigin(self.indices | {index})

    @property
    def is_from_input(self) -> bool:
        return bool(self.indices)

    @property
    def first(self) -> Index | None:
        return min(self.indices) if self.indices else None

    def __iter__(self) -> Iterator[Index]:
        return iter(sorted(self.indices))

    def __str__(self) -> str:
        if self.is_default:
            return "default"
        return ", ".join(str(index) for index in self)


@dataclass
class BoundValue:
    """A value bound to a `dest`, with its origin."""

    dest: str
    value: Any
    origin: InputOrigin


class BoundValues:
    """
    The result of matching one command's arguments.

    Values are keyed by `dest`. Setting a value again merges the new origin with the
    previous one, so an argument always knows every index it consumed.
    """

    def __init__(self, original_input: Iterable[str] = ()):
        self.original_input: tuple[str, ...] = tuple(original_input)
        self._values: dict[str, BoundValue] = {}

    def __contains__(self, dest: object) -> bool:
        return dest in self._values

    def __iter__(self) -> Iterator[BoundValue]:
        return iter(self._values.values())

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, dest: str) -> Any:
        return self._values[dest].value

    def __repr__(self) -> str:
        return f"BoundValues({self.as_dict()})"

    def get(self, dest: str, default: Any = None) -> Any:
        bound = self._values.get(dest)
        return default if bound is None else bound.value

    def origin(self, dest: str) -> InputOrigin | None:
        bound = self._values.get(dest)
        return None if bound is None else bound.origin

    def seed(self, dest: str, value: Any) -> None:
        """Bind an initial value with a default origin, replacing any previous one."""
        self._values[dest] = BoundValue(dest, value, InputOrigin.default())

    def set(self, dest: str, value: Any, origin: InputOrigin) -> None:
        previous = self._values.get(dest)
        if previous is not None and not previous.origin.is_default:
            origin = origin.union(previous.origin)
        self._values[dest] = BoundValue(dest, value, origin)

    def append(self, dest: str, value: Any, origin: InputOrigin) -> None:
        """Add one item to an array value, dropping a default-origin initial list."""
        previous = self._values.get(dest)
        if previous is None or previous.origin.is_default or previous.value is None:
            self._values[dest] = BoundValue(dest, [value], origin)
            return
        previous.value.append(value)
        previous.origin = previous.origin.union(origin)

    def is_from_input(self, dest: str) -> bool:
        bound = self._values.get(dest)
        return bound is not None and bound.origin.is_from_input

    def as_dict(self) -> dict[str, Any]:
        return {dest: bound.value for dest, bound in self._values.items()}
