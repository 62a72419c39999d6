"""Insertion-ordered property container for object schemas."""

from __future__ import annotations

from collections.abc import ItemsView, Iterable, Iterator, KeysView, ValuesView
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .schema_nodes import Schema


class Properties:
    """Name to schema mapping that iterates in insertion order.

    Overwriting a key keeps its original position; deleting a key keeps the
    relative order of the remaining entries.
    """

    __slots__ = ("_values", "capacity_hint")

    def __init__(self, capacity: int = 0) -> None:
        # advisory only, dicts grow on demand
        self.capacity_hint = capacity
        self._values: dict[str, Schema] = {}

    @classmethod
    def from_items(cls, items: Iterable[tuple[str, Schema]]) -> Properties:
        """Build a container from ``(name, schema)`` pairs."""
        properties = cls()
        for key, value in items:
            properties.set(key, value)
        return properties

    def set(self, key: str, value: Schema) -> None:
        self._values[key] = value

    def get(self, key: str) -> Schema | None:
        return self._values.get(key)

    def delete(self, key: str) -> None:
        self._values.pop(key, None)

    def keys(self) -> KeysView[str]:
        return self._values.keys()

    def values(self) -> ValuesView[Schema]:
        return self._values.values()

    def items(self) -> ItemsView[str, Schema]:
        return self._values.items()

    def clone(self) -> Properties:
        """Return an independent copy with every contained schema cloned."""
        cloned = Properties(len(self._values))
        for key, value in self._values.items():
            cloned.set(key, value.clone())
        return cloned

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Properties):
            return NotImplemented
        return list(self._values.items()) == list(other._values.items())

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Properties({list(self._values)!r})"
