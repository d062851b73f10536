"""
Almanac StageMap

A StageMap is one translation stage: an ordered set of Segments keyed by
``source_start``. Any identifier not covered by a segment maps to itself
(identity fallback).

Two translation modes:
- Scalar: one identifier in, one identifier out.
- Range: one half-open Interval in, a list of Intervals out. The interval is
  swept left to right across the segment boundaries it crosses, so the cost
  depends on the number of segments, never on the interval's length.

Segments are expected to be mutually disjoint. When they are not, the
segment with the lowest ``source_start`` wins for every identifier it
covers; ``overlaps()`` reports the offending pairs so a loader can decide
whether to warn or refuse.
"""

from __future__ import annotations

import logging
from operator import attrgetter
from typing import Iterable, Iterator, Optional

from almanac.segment import Interval, Segment, saturating_add


logger = logging.getLogger(__name__)


class StageMap:
    """One layer of the pipeline.

    Usage:
        stage = StageMap([Segment(50, 200, 10)], source="seed", destination="soil")
        stage.translate_scalar(55)                 # 205
        stage.translate_range(Interval(40, 70))    # [40:50), [200:210), [60:70)
    """

    __slots__ = ("_segments", "_source", "_destination")

    def __init__(
        self,
        segments: Iterable[Segment] = (),
        source: Optional[str] = None,
        destination: Optional[str] = None,
    ) -> None:
        unique: dict[int, Segment] = {}
        for seg in segments:
            if seg.source_start in unique:
                logger.warning(
                    "Dropping %r: source_start %d already bound by %r",
                    seg, seg.source_start, unique[seg.source_start],
                )
                continue
            unique[seg.source_start] = seg
        self._segments: tuple[Segment, ...] = tuple(
            sorted(unique.values(), key=attrgetter("source_start"))
        )
        self._source = source
        self._destination = destination

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def segments(self) -> tuple[Segment, ...]:
        """Segments in ascending ``source_start`` order."""
        return self._segments

    @property
    def source(self) -> Optional[str]:
        """Identifier space this stage reads from, if named."""
        return self._source

    @property
    def destination(self) -> Optional[str]:
        """Identifier space this stage writes to, if named."""
        return self._destination

    @property
    def name(self) -> str:
        return f"{self._source or '?'}-to-{self._destination or '?'}"

    def overlaps(self) -> list[tuple[Segment, Segment]]:
        """Pairs of segments whose source ranges intersect.

        Each pair is (earlier segment, later segment); the earlier one is the
        segment that wins for the shared identifiers.
        """
        pairs: list[tuple[Segment, Segment]] = []
        reach: Optional[Segment] = None
        for seg in self._segments:
            if reach is not None and reach.source_end > seg.source_start:
                pairs.append((reach, seg))
            if reach is None or seg.source_end > reach.source_end:
                reach = seg
        return pairs

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def translate_scalar(self, value: int) -> int:
        """Translate one identifier. First covering segment wins."""
        for seg in self._segments:
            if seg.covers(value):
                return seg.translate(value)
        return value

    def translate_range(self, interval: Interval) -> list[Interval]:
        """Translate every identifier of ``interval`` without enumerating them.

        Returns disjoint intervals in the order they are discovered while
        sweeping the query from left to right. Their total length equals
        ``interval.length``. An empty or inverted interval yields ``[]``.
        """
        result: list[Interval] = []
        current, end = interval.start, interval.end
        remaining = iter(self._segments)
        seg = next(remaining, None)

        while current < end:
            if seg is not None and seg.source_end <= current:
                # Already swept past this one
                seg = next(remaining, None)
                continue

            if seg is None or seg.source_start >= end:
                # Nothing else maps inside the query
                result.append(Interval(current, end))
                break

            if current < seg.source_start:
                result.append(Interval(current, seg.source_start))
                current = seg.source_start

            covered = min(seg.source_end, end) - current
            start = seg.translate(current)
            result.append(Interval(start, saturating_add(start, covered)))
            current += covered

        return result

    # ------------------------------------------------------------------
    # Container protocol
    # ------------------------------------------------------------------

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StageMap):
            return NotImplemented
        return (
            self._segments == other._segments
            and self._source == other._source
            and self._destination == other._destination
        )

    def __hash__(self) -> int:
        return hash((self._segments, self._source, self._destination))

    def __repr__(self) -> str:
        return f"<StageMap {self.name}: {len(self._segments)} segments>"
