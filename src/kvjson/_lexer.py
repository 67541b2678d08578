"""
Character-level access to a JSON document.

The lexer knows nothing about JSON grammar. It owns the text and a cursor
and offers single-character moves plus bounded substring reads governed by
entry/exit predicates. The parser decides what to read and when.
"""

from collections.abc import Callable

from ._errors import InvalidNumberError
from ._errors import JSONDecodeError
from ._errors import Position
from ._errors import UnexpectedTokenError
from ._errors import UnterminatedLiteralError
from ._errors import UnterminatedStringError
from ._profile import ProfileContext
from ._profile import note_document

# End-of-stream sentinel returned instead of raising past the end
EOS = "\0"

NUMERIC_START_CHARS = frozenset("0123456789+-.")
_NUMERIC_RUN_CHARS = NUMERIC_START_CHARS | frozenset("eE")

type CharPredicate = Callable[[str], bool]


class JsonLexer:
    """
    Cursor over an immutable JSON text.

    The cursor points at the current token. next_token() advances exactly
    one character, push_back() rewinds exactly one. The cursor never moves
    beyond len(text); at that position every read yields EOS. A NUL inside
    the text reads the same as EOS, so callers test at_end() to tell them
    apart.
    """

    def __init__(self, text: str):
        self.text = text
        self.pos: Position = 0
        self.length = len(text)
        note_document(self.length)

    def current_token(self) -> str:
        """Returns the character under the cursor without moving."""
        return self.text[self.pos] if self.pos < self.length else EOS

    def next_token(self) -> str:
        """Advances one character and returns the character now current."""
        if self.pos < self.length:
            self.pos += 1
        return self.current_token()

    def push_back(self) -> None:
        """Rewinds the cursor by one character."""
        if self.pos > 0:
            self.pos -= 1

    def at_end(self) -> bool:
        """True once the cursor has moved past the last character."""
        return self.pos >= self.length

    def describe(self, char: str) -> str:
        """Renders a character read at the cursor for diagnostics."""
        return "end of input" if self.at_end() else repr(char)

    def has_more_tokens(self) -> bool:
        """True while at least one character follows the cursor."""
        return self.pos < self.length - 1

    def skip_whitespace(self) -> None:
        """
        Moves past a run of whitespace following the cursor.

        Afterwards next_token() returns the first non-whitespace character.
        """
        with ProfileContext("skip_whitespace"):
            while self.next_token().isspace():
                pass
            self.push_back()

    def read_quoted_string(self) -> str:
        """
        Reads a double-quoted string starting at the cursor.

        Returns the content between the quotes exactly as written, escape
        sequences included. A backslash hides the following character from
        the closing-quote test. The cursor is left on the closing quote.
        """
        with ProfileContext("read_quoted_string"):
            start = self.pos
            if self.current_token() != '"':
                raise UnexpectedTokenError(
                    "Expecting '\"' to start a string, got "
                    f"{self.describe(self.current_token())}",
                    self.text,
                    start,
                )
            raw = self._read_until(
                lambda c: c == '"',
                lambda: UnterminatedStringError(
                    "Unterminated string starting at", self.text, start
                ),
                escapes=True,
            )
            return raw[1:]

    def read_numeric_string(self) -> str:
        """
        Reads the maximal run of numeric characters starting at the cursor.

        The run may contain digits, signs, dots and exponent markers; it is
        validated by the caller. The cursor is left on the first character
        after the run, or at the end of input.
        """
        with ProfileContext("read_numeric_string"):
            if self.current_token() not in NUMERIC_START_CHARS:
                raise InvalidNumberError(
                    "Expecting a number, got "
                    f"{self.describe(self.current_token())}",
                    self.text,
                    self.pos,
                )
            return self._read_until(lambda c: c not in _NUMERIC_RUN_CHARS)

    def read_literal_string(self) -> str:
        """
        Reads a run of letters starting at the cursor.

        The cursor is left on the first non-letter character.
        """
        with ProfileContext("read_literal_string"):
            start = self.pos
            return self._read_until(
                lambda c: not c.isalpha(),
                lambda: UnterminatedLiteralError(
                    "Unterminated literal starting at", self.text, start
                ),
            )

    def _read_until(
        self,
        exit_: CharPredicate,
        end_error: Callable[[], JSONDecodeError] | None = None,
        escapes: bool = False,
    ) -> str:
        """
        Reads from the cursor up to the first later character matching exit_.

        The substring excludes the exit character; the cursor moves onto
        it. Running out of input raises end_error, or, when end_error is
        None, returns the rest of the text and parks the cursor at the end.
        """
        start = self.pos
        i = start + 1
        while i < self.length:
            char = self.text[i]
            if escapes and char == "\\":
                i += 2
                continue
            if exit_(char):
                self.pos = i
                return self.text[start:i]
            i += 1

        if end_error is not None:
            raise end_error()
        self.pos = self.length
        return self.text[start:]
