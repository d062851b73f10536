"""
Almanac Parser

Builds StageMaps from stage-definition text and whole almanac files.

A stage definition is a sequence of lines, each holding exactly three
whitespace-separated non-negative integers:

    destination_start source_start length

An almanac file holds the query list followed by named stage blocks:

    seeds: 79 14 55 13

    seed-to-soil map:
    50 98 2
    52 50 48

    soil-to-fertilizer map:
    0 15 37
    ...

Malformed input is rejected as a whole: the first bad line raises, with its
line number in the message. Nothing past the parser validates again.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Union

from almanac.errors import (
    MalformedAlmanacError,
    MalformedQueryError,
    MalformedStageError,
    OverlappingSegmentsError,
)
from almanac.graph import SpaceGraph
from almanac.pipeline import Pipeline
from almanac.segment import DOMAIN_MAX, Interval, Segment
from almanac.stage import StageMap


logger = logging.getLogger(__name__)

SEEDS_RE = re.compile(r"^seeds:(?P<values>.*)$")
HEADER_RE = re.compile(r"^(?P<source>[A-Za-z_][\w]*)-to-(?P<destination>[A-Za-z_][\w]*)\s+map:$")
NUMBER_RE = re.compile(r"^[0-9]+$")


# ============================================================================
# Numbers and segments
# ============================================================================

def parse_number(token: str, line: int, text: str) -> int:
    """One unsigned identifier within the numeric domain."""
    if not NUMBER_RE.match(token):
        raise MalformedStageError(f"Not a non-negative integer: {token!r}", line, text)
    value = int(token)
    if value > DOMAIN_MAX:
        raise MalformedStageError(f"{value} exceeds domain maximum {DOMAIN_MAX}", line, text)
    return value


def parse_identifier(token: str, name: str = "identifier") -> int:
    """A query identifier given outside an almanac file (e.g. on the command line)."""
    token = token.strip()
    if not NUMBER_RE.match(token):
        raise MalformedQueryError(f"{name} must be a non-negative integer, got {token!r}")
    value = int(token)
    if value > DOMAIN_MAX:
        raise MalformedQueryError(f"{name} {value} exceeds domain maximum {DOMAIN_MAX}")
    return value


def parse_query_interval(start: str, length: str) -> Interval:
    """[start, start + length) from text, refusing to run past DOMAIN_MAX."""
    first = parse_identifier(start, "start")
    count = parse_identifier(length, "length")
    if first + count > DOMAIN_MAX:
        raise MalformedQueryError(
            f"Interval [{first}, {first} + {count}) runs past domain maximum {DOMAIN_MAX}"
        )
    return Interval(first, first + count)


def parse_segment(text: str, line: int = 1) -> Segment:
    """Parse ``destination_start source_start length`` into a Segment."""
    tokens = text.split()
    if len(tokens) != 3:
        raise MalformedStageError(f"Expected 3 integers, found {len(tokens)}", line, text)
    destination_start, source_start, length = (
        parse_number(token, line, text) for token in tokens
    )
    if length == 0:
        raise MalformedStageError("Segment length must be positive", line, text)
    return Segment(source_start=source_start, destination_start=destination_start, length=length)


def check_overlaps(stage: StageMap, strict: bool = False) -> None:
    """Warn about (or, when strict, refuse) intersecting segments."""
    pairs = stage.overlaps()
    if not pairs:
        return
    if strict:
        first, second = pairs[0]
        raise OverlappingSegmentsError(
            f"Stage {stage.name}: {first!r} overlaps {second!r} "
            f"({len(pairs)} overlapping pair(s))"
        )
    for first, second in pairs:
        logger.warning("Stage %s: %r overlaps %r; the first one wins", stage.name, first, second)


def check_duplicates(segments: list[Segment], name: str, strict: bool = False) -> None:
    """Refuse, when strict, segments sharing a source_start.

    StageMap keeps the first of each and warns about the rest, so
    this has to run before the StageMap is built.
    """
    if not strict:
        return
    seen: dict[int, Segment] = {}
    for seg in segments:
        if seg.source_start in seen:
            raise OverlappingSegmentsError(
                f"Stage {name}: {seen[seg.source_start]!r} and {seg!r} share source_start {seg.source_start}"
            )
        seen[seg.source_start] = seg


def parse_stage(
    lines: Iterable[str],
    source: Optional[str] = None,
    destination: Optional[str] = None,
    strict: bool = False,
    first_line: int = 1,
) -> StageMap:
    """Build one StageMap from its definition lines. Blank lines are skipped.

    Args:
        lines: Stage-definition lines
        source: Identifier space the stage reads from
        destination: Identifier space the stage writes to
        strict: Raise OverlappingSegmentsError instead of logging a warning
        first_line: Line number of the first element of ``lines`` (for errors)
    """
    segments = [
        parse_segment(text, line_no)
        for line_no, text in enumerate(lines, first_line)
        if text.strip()
    ]
    check_duplicates(segments, f"{source or '?'}-to-{destination or '?'}", strict=strict)
    stage = StageMap(segments, source=source, destination=destination)
    check_overlaps(stage, strict=strict)
    return stage


# ============================================================================
# Almanac files
# ============================================================================

@dataclass
class Almanac:
    """A parsed almanac: the query values and the stages in file order."""
    seeds: list[int]
    stages: list[StageMap] = field(default_factory=list)

    def graph(self) -> SpaceGraph:
        graph = SpaceGraph()
        for stage in self.stages:
            graph.register(stage)
        return graph

    def pipeline(
        self,
        source: Optional[str] = None,
        destination: Optional[str] = None,
    ) -> Pipeline:
        """The stages leading from ``source`` to ``destination``.

        With neither given, every stage is chained in file order.
        """
        if source is None and destination is None:
            return Pipeline(self.stages)
        if not self.stages:
            raise MalformedAlmanacError("Almanac defines no stages to route through")
        return self.graph().route(
            source or self.stages[0].source,
            destination or self.stages[-1].destination,
        )

    def __repr__(self) -> str:
        return f"<Almanac: {len(self.seeds)} seeds, {len(self.stages)} stages>"


def parse_seeds(text: str, line: int) -> list[int]:
    match = SEEDS_RE.match(text)
    if match is None:
        raise MalformedAlmanacError(f"Expected 'seeds:' line, got {text!r}", line)
    try:
        return [parse_number(token, line, text) for token in match.group("values").split()]
    except MalformedStageError as e:
        raise MalformedAlmanacError(f"Bad seed value: {e}", line) from e


def parse_almanac(text: str, strict: bool = False) -> Almanac:
    """Parse a complete almanac.

    Raises:
        MalformedAlmanacError: missing seeds line, or numbers outside a block
        MalformedStageError: a bad line inside a stage block
        OverlappingSegmentsError: overlapping segments when ``strict``
    """
    seeds: Optional[list[int]] = None
    stages: list[StageMap] = []
    # (source, destination, header line, every line after the header)
    block: Optional[tuple[str, str, int, list[str]]] = None

    def flush() -> None:
        if block is None:
            return
        source, destination, header_line, body = block
        stage = parse_stage(body, source, destination, strict=strict, first_line=header_line + 1)
        if not stage:
            logger.warning("Line %d: stage %s has no segments", header_line, stage.name)
        stages.append(stage)

    for line_no, raw in enumerate(text.splitlines(), 1):
        line = raw.strip()
        if not line:
            if block is not None:
                block[3].append(line)
            continue

        if seeds is None:
            seeds = parse_seeds(line, line_no)
            continue

        header = HEADER_RE.match(line)
        if header:
            flush()
            block = (header.group("source"), header.group("destination"), line_no, [])
            continue

        if block is None:
            raise MalformedAlmanacError(f"Segment line outside of a map block: {line!r}", line_no)
        block[3].append(line)

    if seeds is None:
        raise MalformedAlmanacError("Almanac is empty: no 'seeds:' line")
    flush()

    logger.debug("Parsed almanac: %d seeds, %d stages", len(seeds), len(stages))
    return Almanac(seeds=seeds, stages=stages)


def load_almanac(source: Union[str, Path], strict: bool = False) -> Almanac:
    """Read and parse an almanac file."""
    path = Path(source)
    return parse_almanac(path.read_text(), strict=strict)
