"""
Almanac Pipeline

An ordered chain of StageMaps. The output of stage *i* is the input of stage
*i+1*, so a pipeline carries identifiers from its first stage's source space
to its last stage's destination space.

Range mode keeps a working set of intervals. Each stage may split an
interval at its segment boundaries, so the working set grows with the number
of boundaries crossed, never with the magnitude of the identifiers.

Usage:
    pipeline = Pipeline([seed_to_soil, soil_to_fertilizer, ...])
    pipeline.translate_scalar_all(79)
    pipeline.translate_range_all([Interval(79, 93), Interval(55, 68)])
    for step in pipeline.trace(79):
        print(step)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from almanac.segment import Interval
from almanac.stage import StageMap


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TraceStep:
    """What one stage did to one identifier."""
    stage: str
    before: int
    after: int

    @property
    def mapped(self) -> bool:
        """False when the identity fallback applied."""
        return self.before != self.after

    def __repr__(self) -> str:
        return f"<{self.stage}: {self.before} → {self.after}>"


class Pipeline:
    """Immutable sequence of stages folded over scalars or intervals."""

    __slots__ = ("_stages",)

    def __init__(self, stages: Iterable[StageMap]) -> None:
        self._stages: tuple[StageMap, ...] = tuple(stages)
        logger.debug("Pipeline built: %s", " → ".join(s.name for s in self._stages))

    @property
    def stages(self) -> tuple[StageMap, ...]:
        return self._stages

    @property
    def source(self) -> Optional[str]:
        return self._stages[0].source if self._stages else None

    @property
    def destination(self) -> Optional[str]:
        return self._stages[-1].destination if self._stages else None

    def translate_scalar_all(self, value: int) -> int:
        for stage in self._stages:
            value = stage.translate_scalar(value)
        return value

    def translate_range_all(self, intervals: Iterable[Interval]) -> list[Interval]:
        """Push every interval through every stage, splitting as needed."""
        working = list(intervals)
        for stage in self._stages:
            working = [
                piece
                for interval in working
                for piece in stage.translate_range(interval)
            ]
        return working

    def trace(self, value: int) -> list[TraceStep]:
        """Record the identifier entering and leaving each stage."""
        steps: list[TraceStep] = []
        for stage in self._stages:
            translated = stage.translate_scalar(value)
            steps.append(TraceStep(stage.name, value, translated))
            value = translated
        return steps

    def __len__(self) -> int:
        return len(self._stages)

    def __iter__(self):
        return iter(self._stages)

    def __repr__(self) -> str:
        return f"<Pipeline {self.source or '?'} → {self.destination or '?'}: {len(self._stages)} stages>"
