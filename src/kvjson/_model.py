"""
Canonical value model produced by the parser and consumed by the serializer.

Objects and arrays are thin dict/list subclasses so downstream code can use
them as ordinary ordered containers. Scalars are plain Python values:
None, bool, int (64-bit range), decimal.Decimal and str.
"""

import re
from decimal import Decimal
from enum import Enum
from typing import Any

type CanonicalValue = (
    None | bool | int | Decimal | str | JsonObject | JsonArray
)

PATH_SEPARATOR = "/"

_SIMPLE_SEGMENT = re.compile(r"[a-zA-Z][a-zA-Z0-9_]*")
_ARRAY_SEGMENT = re.compile(
    r"(?P<name>[a-zA-Z][a-zA-Z0-9_]*)\[(?P<index>[0-9]+)\]"
)


class Literal(Enum):
    """The three bare JSON literals."""

    TRUE = "true"
    FALSE = "false"
    NULL = "null"

    @classmethod
    def from_string(cls, text: str) -> "Literal":
        """Resolves a bare word case-insensitively."""
        try:
            return cls(text.lower())
        except ValueError:
            raise ValueError(f"Unknown literal value [{text}]") from None

    def as_value(self) -> bool | None:
        return _LITERAL_VALUES[self]

    def to_json(self) -> str:
        return self.value


_LITERAL_VALUES: dict[Literal, bool | None] = {
    Literal.TRUE: True,
    Literal.FALSE: False,
    Literal.NULL: None,
}


def is_valid_path(path: str) -> bool:
    """A path has at least one segment and every segment is well formed."""
    if not path or not path.strip():
        return False
    return all(
        _SIMPLE_SEGMENT.fullmatch(segment)
        or _ARRAY_SEGMENT.fullmatch(segment)
        for segment in path.split(PATH_SEPARATOR)
    )


class JsonObject(dict[str, Any]):
    """
    Ordered mapping of property names to canonical values.

    Insertion order is preserved and significant for serialization. Setting
    an existing key replaces its value in place.
    """

    @classmethod
    def from_json(cls, text: str, **kwargs: Any) -> "JsonObject":
        """Parses text whose root must be an object."""
        from ._parser import deserialize

        parsed = deserialize(text, **kwargs)
        if not isinstance(parsed, JsonObject):
            raise TypeError(
                f"expected a JSON object, got {type(parsed).__name__}"
            )
        return cls(parsed)

    def has_property(self, name: str) -> bool:
        return name in self

    @property
    def property_names(self) -> list[str]:
        return list(self.keys())

    def accumulate(self, key: str, value: CanonicalValue) -> None:
        """
        Stores value under key, gathering repeated keys into an array.

        The first value is stored as is; a second value turns the entry
        into a JsonArray of both, and later values are appended to it.
        """
        if key not in self:
            self[key] = value
            return

        current = self[key]
        if isinstance(current, JsonArray):
            current.append(value)
        else:
            self[key] = JsonArray([current, value])

    def query(self, path: str) -> CanonicalValue:
        """
        Navigates a '/'-separated path such as "owner/phones[1]/number".

        Each segment names a property; a segment of the form name[i]
        additionally indexes into the array held by that property.
        """
        if not is_valid_path(path):
            raise ValueError(f"invalid query path '{path}'")

        current: CanonicalValue = self
        for segment in path.split(PATH_SEPARATOR):
            if not isinstance(current, JsonObject):
                raise ValueError(
                    f"invalid query because '{segment}' in '{path}' is not "
                    f"navigable from {type(current).__name__}"
                )

            array_match = _ARRAY_SEGMENT.fullmatch(segment)
            name = array_match.group("name") if array_match else segment
            if name not in current:
                raise KeyError(
                    f"invalid query because '{name}' in '{path}' does not "
                    f"exist. Available properties are {current.property_names}"
                )
            current = current[name]

            if array_match:
                if not isinstance(current, JsonArray):
                    raise ValueError(
                        f"invalid query because '{name}' in '{path}' is not "
                        "an array"
                    )
                current = current.element_at(int(array_match.group("index")))

        return current

    def to_json(self, **kwargs: Any) -> str:
        from ._encoder import serialize

        return serialize(self, **kwargs)

    def __str__(self) -> str:
        return self.to_json()


class JsonArray(list[Any]):
    """Ordered sequence of canonical values."""

    def element_at(self, index: int) -> CanonicalValue:
        """Returns the element at a non-negative index, range checked."""
        if not 0 <= index < len(self):
            raise IndexError(
                f"Can not get element at index {index} from array of "
                f"length {len(self)}"
            )
        return self[index]

    def to_json(self, **kwargs: Any) -> str:
        from ._encoder import serialize

        return serialize(self, **kwargs)

    def __str__(self) -> str:
        return self.to_json()
