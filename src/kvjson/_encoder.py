"""
Serializer rendering the canonical value model as JSON text.

Objects keep their insertion order unless sort_keys is set. Output is
compact by default ("," and ":" separators); an indent switches to one
member per line.
"""

import logging
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from ._errors import UnsupportedValueError
from ._model import Literal
from ._profile import ProfileContext

logger = logging.getLogger(__name__)

_ASCII_LIMIT = 127
_BMP_LIMIT = 0xFFFF

_SIMPLE_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


@dataclass(frozen=True)
class EncodeConfig:
    """
    Configures JSON encoding behavior with immutable settings.

    Centralized configuration for serialization options including key
    ordering, ASCII escaping and indentation.
    """

    ensure_ascii: bool = False
    sort_keys: bool = False
    indent: str | int | None = None
    separators: tuple[str, str] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.ensure_ascii, bool):
            raise TypeError("ensure_ascii must be a boolean")
        if not isinstance(self.sort_keys, bool):
            raise TypeError("sort_keys must be a boolean")
        if self.indent is not None and (
            isinstance(self.indent, bool)
            or not isinstance(self.indent, int | str)
        ):
            raise TypeError("indent must be an int, a str or None")
        if isinstance(self.indent, int) and self.indent < 0:
            raise ValueError("indent must be non-negative")
        if self.separators is not None and (
            len(self.separators) != 2  # noqa: PLR2004
            or not all(isinstance(s, str) for s in self.separators)
        ):
            raise TypeError("separators must be a (item, key) pair of str")

    @property
    def item_separator(self) -> str:
        return self.separators[0] if self.separators else ","

    @property
    def key_separator(self) -> str:
        if self.separators:
            return self.separators[1]
        return ": " if self.indent is not None else ":"


def _encode_string(s: str, ensure_ascii: bool) -> str:
    """Encode string with proper escape sequences."""
    result = ['"']
    for char in s:
        if char in _SIMPLE_ESCAPES:
            result.append(_SIMPLE_ESCAPES[char])
        elif char < " ":
            result.append(f"\\u{ord(char):04x}")
        elif ensure_ascii and ord(char) > _ASCII_LIMIT:
            code_point = ord(char)
            if code_point > _BMP_LIMIT:
                code_point -= 0x10000
                high = 0xD800 | (code_point >> 10)
                low = 0xDC00 | (code_point & 0x3FF)
                result.append(f"\\u{high:04x}\\u{low:04x}")
            else:
                result.append(f"\\u{code_point:04x}")
        else:
            result.append(char)
    result.append('"')
    return "".join(result)


def _encode_number(n: int | float | Decimal) -> str:
    """
    Encode numeric values with JSON compliance.

    Ints outside the signed 64-bit range and finite floats are written
    as-is and read back as Decimal.
    """
    if isinstance(n, int):
        return int.__repr__(n)
    if isinstance(n, float):
        if math.isnan(n) or math.isinf(n):
            raise UnsupportedValueError(
                f"Out of range float values are not JSON compliant: {n!r}"
            )
        return float.__repr__(n)
    if not n.is_finite():
        raise UnsupportedValueError(
            f"Non-finite Decimal values are not JSON compliant: {n}"
        )
    return str(n)


def _get_indent_string(indent: str | int | None, level: int) -> str:
    """Generate indentation string for given level."""
    if indent is None:
        return ""
    elif isinstance(indent, int):
        return " " * (indent * level)
    else:
        return indent * level


def _join_members(
    members: list[str], brackets: str, config: EncodeConfig, level: int
) -> str:
    """Wraps encoded members in brackets, one per line when indenting."""
    opening, closing = brackets
    if not members:
        return opening + closing
    if config.indent is None:
        return opening + config.item_separator.join(members) + closing

    inner = "\n" + _get_indent_string(config.indent, level + 1)
    outer = "\n" + _get_indent_string(config.indent, level)
    separator = config.item_separator.rstrip() + inner
    return opening + inner + separator.join(members) + outer + closing


def _encode_array(
    arr: list[Any] | tuple[Any, ...], config: EncodeConfig, level: int
) -> str:
    """Encode array with optional formatting."""
    members = []
    for index, item in enumerate(arr):
        try:
            members.append(_encode_value(item, config, level + 1))
        except UnsupportedValueError as e:
            e.add_note(f"when serializing {type(arr).__name__} item {index}")
            raise
    return _join_members(members, "[]", config, level)


def _encode_dict(d: dict[Any, Any], config: EncodeConfig, level: int) -> str:
    """Encode dictionary, keeping insertion order unless sort_keys is set."""
    items = []
    for key, value in d.items():
        if not isinstance(key, str):
            raise UnsupportedValueError(
                f"keys must be str, not {type(key).__name__}"
            )
        try:
            encoded_value = _encode_value(value, config, level + 1)
        except UnsupportedValueError as e:
            e.add_note(f"when serializing {type(d).__name__} item {key!r}")
            raise
        encoded_key = _encode_string(key, config.ensure_ascii)
        items.append((key, encoded_key, encoded_value))

    if config.sort_keys:
        items.sort(key=lambda x: x[0])

    members = [
        f"{encoded_key}{config.key_separator}{encoded_value}"
        for _, encoded_key, encoded_value in items
    ]
    return _join_members(members, "{}", config, level)


def _encode_value(obj: Any, config: EncodeConfig, level: int) -> str:  # noqa: PLR0911
    """Encode any canonical value."""
    if obj is None:
        return "null"
    elif obj is True:
        return "true"
    elif obj is False:
        return "false"
    elif isinstance(obj, Literal):
        return obj.to_json()
    elif isinstance(obj, str):
        return _encode_string(obj, config.ensure_ascii)
    elif isinstance(obj, int | float | Decimal):
        return _encode_number(obj)
    elif isinstance(obj, dict):
        return _encode_dict(obj, config, level)
    elif isinstance(obj, list | tuple):
        return _encode_array(obj, config, level)
    else:
        raise UnsupportedValueError(
            f"Object of type {type(obj).__name__} is not JSON serializable"
        )


def serialize(value: Any, **kwargs: Any) -> str:
    """
    Renders a canonical value as JSON text.

    Keyword arguments build an EncodeConfig. Values outside the canonical
    model raise UnsupportedValueError.
    """
    config = EncodeConfig(**kwargs)
    with ProfileContext("serialize"):
        text = _encode_value(value, config, 0)
    logger.debug(
        "Serialized %s into %d characters", type(value).__name__, len(text)
    )
    return text
