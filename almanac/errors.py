"""
Almanac errors.

Translation itself never fails; everything here is raised while building
stages from text, planning a route, or running a query driver.
"""

from __future__ import annotations

from typing import Optional


class AlmanacError(Exception):
    """Base class for every error the almanac package raises."""


class MalformedStageError(AlmanacError):
    """A stage-definition line is not three non-negative integers."""
    def __init__(self, message: str, line: int, text: str = ""):
        super().__init__(f"Line {line}: {message} (got {text!r})")
        self.line = line
        self.text = text


class MalformedAlmanacError(AlmanacError):
    """The almanac text does not have the seeds/map-block layout."""
    def __init__(self, message: str, line: Optional[int] = None):
        prefix = f"Line {line}: " if line is not None else ""
        super().__init__(f"{prefix}{message}")
        self.line = line


class OverlappingSegmentsError(AlmanacError):
    """Two segments of one stage cover the same source identifiers."""


class RouteError(AlmanacError):
    """No chain of stages connects two identifier spaces."""


class EmptyQueryError(AlmanacError):
    """A query driver was given nothing to take the minimum of."""


class MalformedQueryError(AlmanacError):
    """A query identifier is not a non-negative integer inside the domain."""
