"""
Opt-in timing of the lexer and parser hot paths.

Set KVJSON_PROFILE in the environment to turn it on (ignored under -O).
Timed sections and whole documents are tallied in a HotPathRegistry and
reported through logging. With profiling off, ProfileContext is a no-op
section and note_document() returns at once.
"""

import logging
import os
import time
from dataclasses import dataclass
from dataclasses import field
from typing import Any

logger = logging.getLogger(__name__)

PROFILE_HOT_PATHS = __debug__ and "KVJSON_PROFILE" in os.environ


@dataclass
class HotPathStats:
    """Accumulated timings for one named section."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    max_time_ns: int = 0
    chars_processed: int = 0

    def record_call(self, duration_ns: int, chars: int = 0) -> None:
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.max_time_ns = max(self.max_time_ns, duration_ns)
        self.chars_processed += chars

    @property
    def mean_time_ns(self) -> float:
        return self.total_time_ns / self.call_count if self.call_count else 0.0


@dataclass
class HotPathRegistry:
    """
    Section timings plus a count of the documents that produced them.

    Documents are counted by the lexer, once per text, so nested parsers
    sharing a lexer do not inflate the totals.
    """

    sections: dict[str, HotPathStats] = field(default_factory=dict)
    documents: int = 0
    document_chars: int = 0

    def record(self, name: str, duration_ns: int, chars: int = 0) -> None:
        stats = self.sections.get(name)
        if stats is None:
            stats = self.sections[name] = HotPathStats(name)
        stats.record_call(duration_ns, chars)

    def record_document(self, chars: int) -> None:
        self.documents += 1
        self.document_chars += chars

    def snapshot(self) -> dict[str, HotPathStats]:
        return dict(self.sections)

    def clear(self) -> None:
        self.sections.clear()
        self.documents = 0
        self.document_chars = 0

    def slowest_first(self) -> list[HotPathStats]:
        return sorted(
            self.sections.values(),
            key=lambda s: s.total_time_ns,
            reverse=True,
        )


_registry = HotPathRegistry()


class _TimedSection:
    """Times the enclosed block into a registry, the shared one by default."""

    __slots__ = ("name", "chars", "registry", "_start")

    def __init__(
        self,
        name: str,
        chars: int = 0,
        registry: HotPathRegistry | None = None,
    ) -> None:
        self.name = name
        self.chars = chars
        self.registry = registry
        self._start = 0

    def __enter__(self) -> "_TimedSection":
        self._start = time.perf_counter_ns()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        elapsed = time.perf_counter_ns() - self._start
        (self.registry or _registry).record(self.name, elapsed, self.chars)


class _NullSection:
    __slots__ = ()

    def __init__(self, name: str, chars: int = 0) -> None:
        pass

    def __enter__(self) -> "_NullSection":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        pass


ProfileContext: type[_TimedSection] | type[_NullSection] = (
    _TimedSection if PROFILE_HOT_PATHS else _NullSection
)


def note_document(chars: int) -> None:
    """Counts one document of the given length when profiling is on."""
    if PROFILE_HOT_PATHS:
        _registry.record_document(chars)


def get_hot_path_stats() -> dict[str, HotPathStats]:
    """Returns a copy of the per-section statistics gathered so far."""
    return _registry.snapshot()


def clear_hot_path_stats() -> None:
    _registry.clear()


def log_hot_path_stats(
    level: int = logging.INFO, registry: HotPathRegistry | None = None
) -> None:
    """Logs a document summary, then one record per section, slowest first."""
    registry = registry or _registry
    if not registry.sections:
        logger.log(level, "No hot path statistics recorded")
        return

    logger.log(
        level,
        "Profiled %d documents, %d chars",
        registry.documents,
        registry.document_chars,
    )
    for entry in registry.slowest_first():
        logger.log(
            level,
            "%s: %d calls, %.3f ms total, %.0f ns mean, %.0f ns max",
            entry.function_name,
            entry.call_count,
            entry.total_time_ns / 1_000_000,
            entry.mean_time_ns,
            entry.max_time_ns,
        )
