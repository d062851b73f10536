"""
almanac - multi-stage piecewise-range remapping.

Identifiers are carried through a chain of lookup stages. Each stage maps
contiguous source ranges onto contiguous destination ranges; anything a
stage does not cover passes through unchanged. Whole intervals can be
translated at once, at a cost set by the segment boundaries they cross
rather than by their length.
"""

__version__ = "0.1.0"

from almanac.segment import DOMAIN_MAX, Segment, Interval
from almanac.stage import StageMap
from almanac.pipeline import Pipeline, TraceStep
from almanac.graph import SpaceGraph
from almanac.parser import Almanac, parse_almanac, parse_segment, parse_stage, load_almanac
from almanac.queries import QueryMode, QueryResult, lowest_scalar, lowest_in_ranges, run_query
from almanac.errors import (
    AlmanacError,
    EmptyQueryError,
    MalformedAlmanacError,
    MalformedQueryError,
    MalformedStageError,
    OverlappingSegmentsError,
    RouteError,
)

__all__ = [
    "DOMAIN_MAX",
    "Segment",
    "Interval",
    "StageMap",
    "Pipeline",
    "TraceStep",
    "SpaceGraph",
    "Almanac",
    "parse_almanac",
    "parse_segment",
    "parse_stage",
    "load_almanac",
    "QueryMode",
    "QueryResult",
    "lowest_scalar",
    "lowest_in_ranges",
    "run_query",
    "AlmanacError",
    "EmptyQueryError",
    "MalformedAlmanacError",
    "MalformedQueryError",
    "MalformedStageError",
    "OverlappingSegmentsError",
    "RouteError",
]
