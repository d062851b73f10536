"""
Almanac Segments and Intervals

A Segment binds one contiguous source range to a contiguous destination
range with a fixed offset. An Interval is the half-open query/result type
used by range-mode translation.

Identifiers live in an unsigned 32-bit domain. Python integers never wrap,
so the domain ceiling is enforced explicitly: every addition that could run
past DOMAIN_MAX saturates instead.

Usage:
    seg = Segment(source_start=50, destination_start=200, length=10)
    seg.covers(55)       # True
    seg.translate(55)    # 205
    Interval.from_length(79, 14)  # <Interval [79:93)>
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


DOMAIN_MAX = 2**32 - 1


def saturating_add(a: int, b: int, limit: int = DOMAIN_MAX) -> int:
    """a + b clamped to [0, limit]."""
    return max(0, min(a + b, limit))


def saturating_sub(a: int, b: int) -> int:
    """a - b clamped at zero."""
    return max(a - b, 0)


@dataclass(frozen=True)
class Segment:
    """One source-range → destination-range binding.

    ``source_start`` is the sort key of a StageMap.

    Attributes:
        source_start: First identifier covered on the source side
        destination_start: Identifier that ``source_start`` maps to
        length: Number of identifiers covered (always > 0)
    """
    source_start: int
    destination_start: int
    length: int

    def __post_init__(self) -> None:
        if self.length <= 0:
            raise ValueError(f"Segment length must be positive, got {self.length}")

    @property
    def source_end(self) -> int:
        """Exclusive end of the source range."""
        return saturating_add(self.source_start, self.length)

    @property
    def offset(self) -> int:
        return self.destination_start - self.source_start

    def covers(self, value: int) -> bool:
        return self.source_start <= value < self.source_end

    def translate(self, value: int) -> int:
        # caller checks covers() first
        return saturating_add(value - self.source_start, self.destination_start)

    def __repr__(self) -> str:
        return (
            f"<Segment [{self.source_start}:{self.source_end}) "
            f"-> {self.destination_start} (+{self.offset})>"
        )


@dataclass(frozen=True)
class Interval:
    """Half-open range of identifiers: [start, end).

    Empty (start == end) and inverted (start > end) intervals are legal and
    hold no values.
    """
    start: int
    end: int

    @classmethod
    def from_length(cls, start: int, length: int) -> Interval:
        return cls(start, saturating_add(start, length))

    @property
    def length(self) -> int:
        return saturating_sub(self.end, self.start)

    @property
    def is_empty(self) -> bool:
        return self.start >= self.end

    def contains(self, value: int) -> bool:
        return self.start <= value < self.end

    def values(self) -> Iterator[int]:
        """Every identifier in the interval. Only sensible for small intervals."""
        return iter(range(self.start, self.end))

    def __repr__(self) -> str:
        return f"<Interval [{self.start}:{self.end})>"
