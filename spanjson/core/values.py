"""
JSON value tree produced by the parser.

The variants form a closed set: JsonObject, JsonArray, JsonString, JsonNumber,
JsonBoolean and JsonNull. All of them are frozen; objects keep their members
in first-insertion order.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any


class JsonValue:
    """Base class of every parsed JSON node."""

    __slots__ = ()

    def to_python(self) -> Any:
        """Convert this node into plain dict/list/str/float/bool/None."""
        raise NotImplementedError


@dataclass(frozen=True)
class JsonObject(JsonValue):
    """Ordered mapping from string keys to values.

    Equality ignores member order, like dict equality, and so does the hash.
    ``members`` must not be mutated once the object is built.
    """

    members: dict[str, JsonValue] = field(default_factory=dict)

    def __hash__(self) -> int:
        return hash(frozenset(self.members.items()))

    def __getitem__(self, key: str) -> JsonValue:
        return self.members[key]

    def __contains__(self, key: object) -> bool:
        return key in self.members

    def __iter__(self) -> Iterator[str]:
        return iter(self.members)

    def __len__(self) -> int:
        return len(self.members)

    def keys(self) -> list[str]:
        """Keys in insertion order."""
        return list(self.members)

    def items(self) -> list[tuple[str, JsonValue]]:
        return list(self.members.items())

    def get(self, key: str, default: Any = None) -> Any:
        return self.members.get(key, default)

    def to_python(self) -> dict[str, Any]:
        return {key: value.to_python() for key, value in self.members.items()}


@dataclass(frozen=True)
class JsonArray(JsonValue):
    """Ordered sequence of values."""

    items: tuple[JsonValue, ...] = ()

    def __getitem__(self, index: int) -> JsonValue:
        return self.items[index]

    def __iter__(self) -> Iterator[JsonValue]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def to_python(self) -> list[Any]:
        return [item.to_python() for item in self.items]


@dataclass(frozen=True)
class JsonString(JsonValue):
    """String with its surrounding quotes stripped; escapes are kept verbatim."""

    value: str

    def to_python(self) -> str:
        return self.value


@dataclass(frozen=True)
class JsonNumber(JsonValue):
    value: float

    def to_python(self) -> float:
        return self.value


@dataclass(frozen=True)
class JsonBoolean(JsonValue):
    value: bool

    def to_python(self) -> bool:
        return self.value


@dataclass(frozen=True)
class JsonNull(JsonValue):
    def to_python(self) -> None:
        return None

