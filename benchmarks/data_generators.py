"""
Test data generators for JSON parsing benchmarks.

Builds documents shaped like key/value client traffic: single records,
bulk get responses, heterogeneous value arrays, deeply nested bucket
properties and escape-heavy string payloads. Generation is seeded so
every library parses the same text.
"""

import json
import random
import string
from typing import Any

DATA_TYPES = (
    "single_record",
    "bulk_response",
    "mixed_values",
    "nested_properties",
    "string_heavy",
)

_SEED = 20240115
_ESCAPE_PROBABILITY = 0.3
_ESCAPES = ('\\"', "\\\\", "\\/", "\\b", "\\f", "\\n", "\\r", "\\t")


def generate_test_data(data_type: str) -> str:
    """Generates a JSON document of the named shape."""
    generators = {
        "single_record": _generate_single_record,
        "bulk_response": _generate_bulk_response,
        "mixed_values": _generate_mixed_values,
        "nested_properties": _generate_nested_properties,
        "string_heavy": _generate_string_heavy,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    return json.dumps(generators[data_type](random.Random(_SEED)))


def _record(rng: random.Random, index: int) -> dict[str, Any]:
    """One stored object with its metadata."""
    return {
        "bucket": rng.choice(["users", "sessions", "carts", "events"]),
        "key": f"obj_{index:06d}",
        "vclock": _random_string(rng, 24),
        "content_type": "application/json",
        "last_modified": (
            f"2024-{rng.randint(1, 12):02d}-{rng.randint(1, 28):02d}"
            f"T{rng.randint(0, 23):02d}:{rng.randint(0, 59):02d}:00Z"
        ),
        "deleted": rng.random() < 0.05,  # noqa: PLR2004
        "size": rng.randint(64, 65536),
        "score": round(rng.uniform(0.0, 100.0), 3),
        "indexes": {
            "email_bin": f"{_random_string(rng, 8)}@example.com",
            "age_int": rng.randint(18, 90),
        },
        "links": [
            {"bucket": "users", "key": f"obj_{rng.randint(0, 999):06d}"}
            for _ in range(rng.randint(0, 3))
        ],
    }


def _generate_single_record(rng: random.Random) -> dict[str, Any]:
    """A small object (< 1KB) as returned by a single fetch."""
    return _record(rng, 1)


def _generate_bulk_response(rng: random.Random) -> dict[str, Any]:
    """A large object (> 10KB) listing many fetched records."""
    return {
        "request_id": _random_string(rng, 16),
        "complete": True,
        "records": [_record(rng, i) for i in range(60)],
        "missing": [f"obj_{rng.randint(0, 99999):06d}" for _ in range(20)],
    }


def _generate_mixed_values(rng: random.Random) -> list[Any]:
    """A root array holding every scalar kind plus small objects."""
    values: list[Any] = []
    for i in range(200):
        kind = rng.randrange(6)
        if kind == 0:
            values.append(rng.randint(-1000, 1000))
        elif kind == 1:
            values.append(round(rng.uniform(-100.0, 100.0), 3))
        elif kind == 2:  # noqa: PLR2004
            values.append(_random_string(rng, rng.randint(5, 30)))
        elif kind == 3:  # noqa: PLR2004
            values.append(rng.choice([True, False]))
        elif kind == 4:  # noqa: PLR2004
            values.append(None)
        else:
            values.append({"index": i, "key": _random_string(rng, 10)})
    return values


def _generate_nested_properties(rng: random.Random) -> dict[str, Any]:
    """Bucket properties nested eight levels deep."""

    def level(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"n_val": rng.randint(1, 5)}

        return {
            "depth": depth,
            "name": _random_string(rng, 15),
            "hooks": [level(depth - 1) for _ in range(3)],
            "props": level(depth - 1),
        }

    return level(8)


def _generate_string_heavy(rng: random.Random) -> dict[str, Any]:
    """
    Values full of escape sequences.

    The escapes are written as text, so the resulting JSON contains them
    double escaped and every string exercises the escape-skipping read.
    """

    def escaped(length: int) -> str:
        chars = []
        for _ in range(length):
            if rng.random() < _ESCAPE_PROBABILITY:
                chars.append(rng.choice(_ESCAPES))
            else:
                chars.append(
                    rng.choice(string.ascii_letters + string.digits + " ")
                )
        return "".join(chars)

    return {
        "values": [escaped(50) for _ in range(100)],
        "unicode": [
            f"\u00e9t\u00e9 {chr(rng.randint(0x4E00, 0x9FFF))}"
            for _ in range(50)
        ],
        "paths": {
            f"obj_{i}": f"C:\\Users\\{_random_string(rng, 8)}\\file_{i}.txt"
            for i in range(20)
        },
    }


def _random_string(rng: random.Random, length: int) -> str:
    return "".join(rng.choices(string.ascii_letters, k=length))
