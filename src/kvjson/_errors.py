"""
Exception hierarchy for JSON parsing and serialization failures.

Every decoding failure is a JSONDecodeError carrying the document, the
offending position and the derived line/column, so callers can treat all
of them as one "malformed input" class or branch on the concrete kind.
"""

type Position = int


class JSONDecodeError(ValueError):
    """
    Handles JSON parsing failures with precise position and context information.

    Error state containing position, line/column numbers, and surrounding
    context to help users identify and fix JSON syntax issues.
    """

    def __init__(self, msg: str, doc: str = "", pos: Position = 0) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.doc = doc
        self.pos = pos

        # Compute line and column numbers from position
        self.lineno = doc.count("\n", 0, pos) + 1 if doc else 1
        self.colno = pos - doc.rfind("\n", 0, pos) if doc else pos + 1

        super().__init__(f"{msg} at line {self.lineno}, column {self.colno}")

    def __reduce__(self) -> tuple[type, tuple[str, str, Position]]:
        return self.__class__, (self.msg, self.doc, self.pos)


class NoTransitionError(JSONDecodeError):
    """The parser state has no transition for the observed character."""


class UnexpectedTokenError(JSONDecodeError):
    """A character cannot start any value or token expected here."""


class UnterminatedStringError(JSONDecodeError):
    """A quoted string has no unescaped closing quote."""


class UnterminatedLiteralError(JSONDecodeError):
    """A bare literal runs into the end of input."""


class InvalidNumberError(JSONDecodeError):
    """A numeric run is neither a 64-bit integer nor a decimal."""


class UnknownLiteralError(JSONDecodeError):
    """A bare word other than true, false or null."""


class InvalidStringError(JSONDecodeError):
    """Bad escape sequence or raw control character inside a string."""


class ExtraDataError(JSONDecodeError):
    """Non-whitespace content follows the root value."""


class UnsupportedValueError(TypeError):
    """Raised when the serializer meets a value outside the canonical model."""


__all__ = [
    "ExtraDataError",
    "InvalidNumberError",
    "InvalidStringError",
    "JSONDecodeError",
    "NoTransitionError",
    "Position",
    "UnexpectedTokenError",
    "UnknownLiteralError",
    "UnsupportedValueError",
    "UnterminatedLiteralError",
    "UnterminatedStringError",
]
