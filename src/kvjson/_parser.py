"""
State machine parser turning JSON text into the canonical value model.

Grammar is encoded as a small transition table keyed by parser state. The
parser drives a JsonLexer, runs one entry action per state and assembles
sibling values on an explicit ValueStack. Only nested containers recurse:
each gets a fresh JsonParser that shares the caller's lexer, so the cursor
stays a single source of truth across nesting depth.
"""

import logging
import string
from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import fields
from decimal import Decimal
from decimal import InvalidOperation
from enum import Enum
from types import MappingProxyType
from typing import Any
from typing import Final

from ._errors import ExtraDataError
from ._errors import InvalidNumberError
from ._errors import InvalidStringError
from ._errors import NoTransitionError
from ._errors import Position
from ._errors import UnexpectedTokenError
from ._errors import UnknownLiteralError
from ._lexer import NUMERIC_START_CHARS
from ._lexer import JsonLexer
from ._model import CanonicalValue
from ._model import JsonArray
from ._model import JsonObject
from ._model import Literal
from ._profile import ProfileContext

logger = logging.getLogger(__name__)

INT64_MIN: Final = -(2**63)
INT64_MAX: Final = 2**63 - 1

_LITERAL_START_CHARS = frozenset("ntf")
_HEX_DIGITS = frozenset(string.hexdigits)


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures JSON parsing behavior with immutable settings.

    strict rejects raw control characters inside strings. raw_strings keeps
    escape sequences verbatim instead of decoding them. allow_exponent
    controls whether numbers may use e/E notation. allow_trailing_data
    accepts content after the root value closes.
    """

    strict: bool = True
    raw_strings: bool = False
    allow_exponent: bool = True
    allow_trailing_data: bool = False

    def __post_init__(self) -> None:
        for field in fields(self):
            if not isinstance(getattr(self, field.name), bool):
                raise TypeError(f"{field.name} must be a boolean")


class ParseState(Enum):
    """States of the JSON grammar automaton."""

    INIT = "init"
    OBJECT_START = "object_start"
    ARRAY_START = "array_start"
    PROPERTY_NAME = "property_name"
    PROPERTY_VALUE = "property_value"
    NEXT_PROPERTY = "next_property"
    NEXT_ELEMENT = "next_element"
    OBJECT_END = "object_end"
    ARRAY_END = "array_end"


# Wildcard key: matches any character without an explicit entry
ANY_CHAR: Final = None

TRANSITIONS: Final[Mapping[ParseState, Mapping[str | None, ParseState]]] = (
    MappingProxyType(
        {
            ParseState.INIT: MappingProxyType(
                {
                    "{": ParseState.OBJECT_START,
                    "[": ParseState.ARRAY_START,
                }
            ),
            ParseState.OBJECT_START: MappingProxyType(
                {
                    "}": ParseState.OBJECT_END,
                    '"': ParseState.PROPERTY_NAME,
                }
            ),
            ParseState.NEXT_PROPERTY: MappingProxyType(
                {'"': ParseState.PROPERTY_NAME}
            ),
            ParseState.PROPERTY_NAME: MappingProxyType(
                {":": ParseState.PROPERTY_VALUE}
            ),
            ParseState.PROPERTY_VALUE: MappingProxyType(
                {
                    ",": ParseState.NEXT_PROPERTY,
                    "}": ParseState.OBJECT_END,
                }
            ),
            ParseState.ARRAY_START: MappingProxyType(
                {
                    "]": ParseState.ARRAY_END,
                    ANY_CHAR: ParseState.NEXT_ELEMENT,
                }
            ),
            ParseState.NEXT_ELEMENT: MappingProxyType(
                {
                    ",": ParseState.NEXT_ELEMENT,
                    "]": ParseState.ARRAY_END,
                }
            ),
        }
    )
)

END_STATES: Final[Mapping[ParseState, ParseState]] = MappingProxyType(
    {
        ParseState.OBJECT_START: ParseState.OBJECT_END,
        ParseState.ARRAY_START: ParseState.ARRAY_END,
    }
)


class ValueStack:
    """
    Containers under construction plus, transiently, a pending property name.

    When a value is ready the top is either a JsonArray, which receives it,
    or a property name, which is popped and the value set on the JsonObject
    beneath it.
    """

    def __init__(self) -> None:
        self._items: list[JsonObject | JsonArray | str] = []

    def __len__(self) -> int:
        return len(self._items)

    def push(self, item: JsonObject | JsonArray | str) -> None:
        self._items.append(item)

    def pop(self) -> JsonObject | JsonArray | str:
        if not self._items:
            raise RuntimeError("pop from empty value stack")
        return self._items.pop()

    def peek(self) -> JsonObject | JsonArray | str:
        if not self._items:
            raise RuntimeError("peek at empty value stack")
        return self._items[-1]

    def attach(self, value: CanonicalValue) -> None:
        """Attaches a finished value to the container it belongs to."""
        top = self.peek()
        if isinstance(top, JsonArray):
            top.append(value)
        elif isinstance(top, str):
            self._items.pop()
            owner = self.peek()
            if not isinstance(owner, JsonObject):
                raise RuntimeError(
                    f"property '{top}' is not owned by an object"
                )
            owner[top] = value
        else:
            raise RuntimeError(
                "no container ready to receive a value; top of stack is "
                f"{type(top).__name__}"
            )


class JsonParser:
    """
    Drives the transition table over a lexer to build one container.

    The lexer is owned by the outermost deserialize() call and handed by
    reference to every nested parser; nested parses run strictly one after
    another, so they never advance the cursor concurrently.
    """

    def __init__(
        self,
        lexer: JsonLexer,
        config: ParseConfig,
        key_cache: dict[str, str] | None = None,
    ):
        self.lexer = lexer
        self.config = config
        self.state = ParseState.INIT
        self.stack = ValueStack()
        self._key_cache = key_cache if key_cache is not None else {}

    def parse(self) -> JsonObject | JsonArray:
        """
        Parses the container whose opening delimiter is under the cursor.

        Leaves the cursor on the container's closing delimiter.
        """
        with ProfileContext("parse"):
            self.state = self.next_state(
                ParseState.INIT, self.lexer.current_token()
            )
            end = END_STATES[self.state]

            while self.lexer.has_more_tokens() and self.state is not end:
                # The opening quote of a name is already under the cursor
                if self.state is not ParseState.PROPERTY_NAME:
                    self.lexer.skip_whitespace()
                self.enter(self.state)
                self.lexer.skip_whitespace()
                self.state = self.next_state(
                    self.state, self.lexer.next_token()
                )

            if self.state is not end:
                raise NoTransitionError(
                    f"Unexpected end of input in state {self.state.name}",
                    self.lexer.text,
                    self.lexer.length,
                )

            result = self.stack.pop()
            if isinstance(result, str) or len(self.stack):
                raise RuntimeError("value stack not reduced to one container")
            return result

    def next_state(self, state: ParseState, char: str) -> ParseState:
        """Looks up the transition for char, falling back to the wildcard."""
        rules = TRANSITIONS.get(state)
        if rules is None:
            raise NoTransitionError(
                f"State {state.name} has no transition",
                self.lexer.text,
                self.lexer.pos,
            )

        if char in rules:
            return rules[char]
        if ANY_CHAR in rules and not self.lexer.at_end():
            self.lexer.push_back()
            return rules[ANY_CHAR]

        expected = " ".join(repr(c) for c in rules if c is not ANY_CHAR)
        raise NoTransitionError(
            f"State {state.name} has no transition for "
            f"{self.lexer.describe(char)}."
            f" Expecting either of {expected}",
            self.lexer.text,
            self.lexer.pos,
        )

    def enter(self, state: ParseState) -> None:
        """Runs the entry action of a state."""
        if state is ParseState.OBJECT_START:
            self.stack.push(JsonObject())
        elif state is ParseState.ARRAY_START:
            self.stack.push(JsonArray())
        elif state is ParseState.PROPERTY_NAME:
            self.stack.push(self._read_property_name())
        elif state in (ParseState.PROPERTY_VALUE, ParseState.NEXT_ELEMENT):
            self.stack.attach(self._read_value())

    def _read_value(self) -> CanonicalValue:
        """Classifies the next value by one character of lookahead."""
        lookahead = self.lexer.next_token()

        if lookahead in NUMERIC_START_CHARS:
            value: CanonicalValue = self._parse_number()
            self.lexer.push_back()
        elif lookahead == '"':
            value = self._read_string()
        elif lookahead in _LITERAL_START_CHARS:
            value = self._parse_literal()
            self.lexer.push_back()
        elif lookahead in ("{", "["):
            value = JsonParser(self.lexer, self.config, self._key_cache).parse()
        else:
            raise UnexpectedTokenError(
                f"Unexpected next token {self.lexer.describe(lookahead)} at "
                f"{self.state.name}",
                self.lexer.text,
                self.lexer.pos,
            )
        return value

    def _read_property_name(self) -> str:
        """Reads a property name, reusing one str object per distinct key."""
        name = self._read_string()
        return self._key_cache.setdefault(name, name)

    def _read_string(self) -> str:
        start = self.lexer.pos
        raw = self.lexer.read_quoted_string()
        if self.config.raw_strings:
            return raw
        return _decode_string(raw, self.config, self.lexer.text, start + 1)

    def _parse_number(self) -> int | Decimal:
        start = self.lexer.pos
        content = self.lexer.read_numeric_string()
        return _parse_number_content(
            content, self.config, self.lexer.text, start
        )

    def _parse_literal(self) -> bool | None:
        start = self.lexer.pos
        word = self.lexer.read_literal_string()
        try:
            return Literal.from_string(word).as_value()
        except ValueError as e:
            raise UnknownLiteralError(
                f"Unknown literal value [{word}]", self.lexer.text, start
            ) from e


def _parse_number_content(
    content: str, config: ParseConfig, doc: str, pos: Position
) -> int | Decimal:
    """
    Parses a numeric run as a 64-bit integer, else as a Decimal.

    Integers outside the signed 64-bit range become Decimals.
    """
    with ProfileContext("parse_number", len(content)):
        if not config.allow_exponent and ("e" in content or "E" in content):
            raise InvalidNumberError(
                f"Exponential notation not allowed in {content!r}", doc, pos
            )

        try:
            value = int(content)
        except ValueError:
            pass
        else:
            if INT64_MIN <= value <= INT64_MAX:
                return value

        try:
            return Decimal(content)
        except InvalidOperation as e:
            raise InvalidNumberError(
                f"Invalid numeric string {content!r}", doc, pos
            ) from e


_ESCAPE_MAP: Final = MappingProxyType(
    {
        '"': '"',
        "\\": "\\",
        "/": "/",
        "b": "\b",
        "f": "\f",
        "n": "\n",
        "r": "\r",
        "t": "\t",
    }
)


def _read_code_unit(inner: str, i: int, doc: str, offset: Position) -> int:
    """Reads the four hex digits of a \\uXXXX escape starting at inner[i]."""
    hex_digits = inner[i + 2 : i + 6]
    if len(hex_digits) < 4:
        raise InvalidStringError(
            "Incomplete unicode escape sequence", doc, offset + i
        )
    if not all(c in _HEX_DIGITS for c in hex_digits):
        raise InvalidStringError(
            f"Invalid unicode escape sequence: \\u{hex_digits}", doc, offset + i
        )
    return int(hex_digits, 16)


def _process_escape_sequence(
    inner: str, i: int, doc: str, offset: Position
) -> tuple[str, int]:
    """Process a single escape sequence and return the character and new position."""
    if i + 1 >= len(inner):
        raise InvalidStringError("Incomplete escape sequence", doc, offset + i)

    next_char = inner[i + 1]
    if next_char in _ESCAPE_MAP:
        return _ESCAPE_MAP[next_char], i + 2
    if next_char != "u":
        raise InvalidStringError(
            f"Invalid escape sequence: \\{next_char}", doc, offset + i
        )

    code_point = _read_code_unit(inner, i, doc, offset)
    # Combine a UTF-16 surrogate pair written as two escapes
    if 0xD800 <= code_point <= 0xDBFF and inner[i + 6 : i + 8] == "\\u":
        low = _read_code_unit(inner, i + 6, doc, offset)
        if 0xDC00 <= low <= 0xDFFF:
            combined = 0x10000 + ((code_point - 0xD800) << 10) + (low - 0xDC00)
            return chr(combined), i + 12
    return chr(code_point), i + 6


def _decode_string(
    inner: str, config: ParseConfig, doc: str, offset: Position
) -> str:
    """Decodes escape sequences in raw string content starting at doc[offset]."""
    with ProfileContext("decode_string", len(inner)):
        result = []
        i = 0
        while i < len(inner):
            char = inner[i]
            if char == "\\":
                decoded, i = _process_escape_sequence(inner, i, doc, offset)
                result.append(decoded)
                continue
            if config.strict and char < " ":
                raise InvalidStringError(
                    f"Invalid control character {char!r} in string",
                    doc,
                    offset + i,
                )
            result.append(char)
            i += 1

        return "".join(result)


def deserialize(text: str, **kwargs: Any) -> JsonObject | JsonArray:
    """
    Parses a JSON document whose root is an object or an array.

    Keyword arguments build a ParseConfig. Any malformed input raises a
    JSONDecodeError subclass; there is no partial result.
    """
    if not isinstance(text, str):
        raise TypeError(
            f"the JSON object must be str, not {type(text).__name__}"
        )

    config = ParseConfig(**kwargs)

    with ProfileContext("deserialize", len(text)):
        if text.startswith("\ufeff"):
            raise UnexpectedTokenError(
                "JSON input should not contain BOM (Byte Order Mark)", text, 0
            )

        lexer = JsonLexer(text)
        if lexer.current_token().isspace():
            lexer.skip_whitespace()
            lexer.next_token()

        result = JsonParser(lexer, config).parse()

        if not config.allow_trailing_data:
            lexer.skip_whitespace()
            lexer.next_token()
            if not lexer.at_end():
                raise ExtraDataError("Extra data", text, lexer.pos)

    logger.debug(
        "Deserialized %d characters into %s", len(text), type(result).__name__
    )
    return result
