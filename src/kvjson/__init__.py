"""
JSON text to canonical value model and back, for the key/value client.

A character lexer and an explicit state machine parser turn a JSON document
into JsonObject/JsonArray containers holding str, int, Decimal, bool and
None; the serializer renders that model back to text.
"""

from typing import IO
from typing import Any

from ._encoder import EncodeConfig
from ._encoder import serialize
from ._errors import ExtraDataError
from ._errors import InvalidNumberError
from ._errors import InvalidStringError
from ._errors import JSONDecodeError
from ._errors import NoTransitionError
from ._errors import UnexpectedTokenError
from ._errors import UnknownLiteralError
from ._errors import UnsupportedValueError
from ._errors import UnterminatedLiteralError
from ._errors import UnterminatedStringError
from ._lexer import EOS
from ._lexer import JsonLexer
from ._model import CanonicalValue
from ._model import JsonArray
from ._model import JsonObject
from ._model import Literal
from ._parser import TRANSITIONS
from ._parser import JsonParser
from ._parser import ParseConfig
from ._parser import ParseState
from ._parser import ValueStack
from ._parser import deserialize
from ._profile import HotPathRegistry
from ._profile import HotPathStats
from ._profile import clear_hot_path_stats
from ._profile import get_hot_path_stats
from ._profile import log_hot_path_stats

__version__ = "0.1.0"


def load(fp: IO[str], **kwargs: Any) -> JsonObject | JsonArray:
    """
    Parses a JSON document read from a file-like object.
    """
    if not hasattr(fp, "read"):
        raise TypeError("fp must have a read() method")

    return deserialize(fp.read(), **kwargs)


def dump(value: Any, fp: IO[str], **kwargs: Any) -> None:
    """
    Serializes a canonical value to a file-like object.
    """
    if not hasattr(fp, "write"):
        raise TypeError("fp must have a write() method")

    fp.write(serialize(value, **kwargs))


__all__ = [
    "EOS",
    "TRANSITIONS",
    "CanonicalValue",
    "EncodeConfig",
    "ExtraDataError",
    "HotPathRegistry",
    "HotPathStats",
    "InvalidNumberError",
    "InvalidStringError",
    "JSONDecodeError",
    "JsonArray",
    "JsonLexer",
    "JsonObject",
    "JsonParser",
    "Literal",
    "NoTransitionError",
    "ParseConfig",
    "ParseState",
    "UnexpectedTokenError",
    "UnknownLiteralError",
    "UnsupportedValueError",
    "UnterminatedLiteralError",
    "UnterminatedStringError",
    "ValueStack",
    "clear_hot_path_stats",
    "deserialize",
    "dump",
    "get_hot_path_stats",
    "load",
    "log_hot_path_stats",
    "serialize",
]
