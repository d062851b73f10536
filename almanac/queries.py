"""
Almanac Query Drivers

Feed the almanac's query list through a Pipeline and report the lowest
identifier that comes out the other end.

Two modes:
- scalar: every value is translated on its own.
- ranges: the list is read as consecutive (start, length) pairs, each pair
  becomes the interval [start, start + length), and the intervals are
  translated in range mode. The answer is the lowest start among the
  resulting intervals.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from almanac.errors import EmptyQueryError
from almanac.pipeline import Pipeline
from almanac.segment import Interval


logger = logging.getLogger(__name__)


class QueryMode(Enum):
    SCALAR = "scalar"
    RANGES = "ranges"


@dataclass(frozen=True)
class QueryResult:
    """The outcome of one query driver run."""
    mode: QueryMode
    value: int
    elapsed_ms: float
    # intervals (ranges) or values (scalar) that reached the destination
    count: int

    def __repr__(self) -> str:
        return (
            f"<QueryResult {self.mode.value}: {self.value} "
            f"({self.count} results, {self.elapsed_ms:.1f}ms)>"
        )


def seed_intervals(values: Sequence[int]) -> list[Interval]:
    """Pair up ``values`` as (start, length) into intervals.

    A trailing unpaired value is ignored.
    """
    if len(values) % 2:
        logger.warning("Ignoring unpaired trailing value %d", values[-1])
    return [
        Interval.from_length(start, length)
        for start, length in zip(values[::2], values[1::2])
    ]


def lowest_scalar(pipeline: Pipeline, values: Sequence[int]) -> int:
    """Minimum of every value translated through the whole pipeline."""
    if not values:
        raise EmptyQueryError("No values to translate")
    return min(pipeline.translate_scalar_all(value) for value in values)


def translate_seed_ranges(pipeline: Pipeline, values: Sequence[int]) -> list[Interval]:
    """Non-empty intervals produced from (start, length) pairs."""
    results = [r for r in pipeline.translate_range_all(seed_intervals(values)) if not r.is_empty]
    if not results:
        raise EmptyQueryError("No non-empty intervals to translate")
    return results


def lowest_in_ranges(pipeline: Pipeline, values: Sequence[int]) -> int:
    """Minimum start of the intervals produced from (start, length) pairs."""
    return min(r.start for r in translate_seed_ranges(pipeline, values))


def run_query(pipeline: Pipeline, values: Sequence[int], mode: QueryMode) -> QueryResult:
    """Run one driver and time it."""
    started = time.perf_counter()
    if mode is QueryMode.SCALAR:
        value = lowest_scalar(pipeline, values)
        count = len(values)
    else:
        results = translate_seed_ranges(pipeline, values)
        value = min(r.start for r in results)
        count = len(results)
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.debug("%s query done in %.2fms", mode.value, elapsed_ms)
    return QueryResult(mode=mode, value=value, elapsed_ms=elapsed_ms, count=count)
