"""
Memory usage benchmarks for JSON parsing.

Measures peak memory during a single parse with tracemalloc, for kvjson
and the libraries it is compared against.
"""

import json
import tracemalloc
from collections.abc import Callable
from typing import Any

import orjson
import pytest
import ujson  # type: ignore[import-untyped]

import kvjson
from benchmarks.data_generators import DATA_TYPES
from benchmarks.data_generators import generate_test_data

LIBRARIES: dict[str, Callable[[str], Any]] = {
    "stdlib_json": json.loads,
    "orjson": lambda text: orjson.loads(text.encode("utf-8")),
    "ujson": ujson.loads,
    "kvjson": kvjson.deserialize,
}


def measure_memory_usage(func: Callable[..., Any], *args: Any) -> tuple[Any, int]:
    """
    Measures peak memory usage during function execution.

    Returns:
        Tuple of (function_result, peak_memory_bytes)
    """
    tracemalloc.start()
    try:
        result = func(*args)
        _, peak = tracemalloc.get_traced_memory()
        return result, peak
    finally:
        tracemalloc.stop()


class TestMemoryUsage:
    """Memory usage benchmarks for JSON parsing."""

    @pytest.mark.parametrize("data_type", DATA_TYPES)
    @pytest.mark.parametrize("library", list(LIBRARIES))
    def test_peak_memory(self, library: str, data_type: str) -> None:
        test_data = generate_test_data(data_type)

        result, peak_memory = measure_memory_usage(
            LIBRARIES[library], test_data
        )

        print(f"\n{library} {data_type}: {peak_memory:,} bytes")
        assert result is not None
        assert peak_memory > 0

    def test_memory_comparison_summary(self) -> None:
        """Prints peak memory per library and the ratio to stdlib json."""
        results = {
            data_type: {
                library: measure_memory_usage(func, test_data)[1]
                for library, func in LIBRARIES.items()
            }
            for data_type in DATA_TYPES
            for test_data in [generate_test_data(data_type)]
        }

        header = "".join(f"{name:<14}" for name in LIBRARIES)
        print("\n" + "=" * 80)
        print("MEMORY USAGE COMPARISON (bytes)")
        print("=" * 80)
        print(f"{'Data Type':<20} {header}")
        print("-" * 80)
        for data_type, measurements in results.items():
            row = "".join(f"{m:<14,}" for m in measurements.values())
            print(f"{data_type:<20} {row}")
        print("=" * 80)

        print("\nMEMORY EFFICIENCY vs stdlib_json")
        print("-" * 40)
        for data_type, measurements in results.items():
            baseline = measurements["stdlib_json"]
            ratios = " ".join(
                f"{name}={value / baseline:.2f}x"
                for name, value in measurements.items()
                if name != "stdlib_json"
            )
            print(f"{data_type}: {ratios}")

        assert len(results) == len(DATA_TYPES)
