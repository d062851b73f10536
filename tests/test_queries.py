"""
Query driver tests: scalar minimum, seed-range minimum, pairing, timing result.
"""

import pytest

from almanac.errors import EmptyQueryError
from almanac.pipeline import Pipeline
from almanac.queries import (
    QueryMode,
    lowest_in_ranges,
    lowest_scalar,
    run_query,
    seed_intervals,
)
from almanac.segment import Interval


class TestSeedIntervals:
    def test_pairs(self) -> None:
        assert seed_intervals([79, 14, 55, 13]) == [Interval(79, 93), Interval(55, 68)]

    def test_unpaired_trailing_value_dropped(self, caplog) -> None:
        assert seed_intervals([1, 2, 3]) == [Interval(1, 3)]
        assert "unpaired" in caplog.text

    def test_zero_length_pair(self) -> None:
        assert seed_intervals([5, 0]) == [Interval(5, 5)]


class TestDrivers:
    def test_scalar(self, example_almanac) -> None:
        assert lowest_scalar(example_almanac.pipeline(), example_almanac.seeds) == 35

    def test_ranges(self, example_almanac) -> None:
        assert lowest_in_ranges(example_almanac.pipeline(), example_almanac.seeds) == 46

    def test_scalar_empty(self) -> None:
        with pytest.raises(EmptyQueryError):
            lowest_scalar(Pipeline([]), [])

    def test_ranges_all_empty(self) -> None:
        with pytest.raises(EmptyQueryError):
            lowest_in_ranges(Pipeline([]), [5, 0])

    def test_run_query(self, example_almanac) -> None:
        pipeline = example_almanac.pipeline()
        scalar = run_query(pipeline, example_almanac.seeds, QueryMode.SCALAR)
        ranged = run_query(pipeline, example_almanac.seeds, QueryMode.RANGES)
        assert (scalar.mode, scalar.value, scalar.count) == (QueryMode.SCALAR, 35, 4)
        assert ranged.mode is QueryMode.RANGES
        assert ranged.value == 46
        assert ranged.count >= 2
        assert ranged.elapsed_ms >= 0
