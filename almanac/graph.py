"""
Almanac Space Graph

Identifier spaces (seed, soil, fertilizer, ...) are nodes; each named
StageMap is a directed edge from its source space to its destination space.
Route planning turns a (source, destination) request into the Pipeline of
stages that connects them.

An almanac file lists its stages in chain order, but the graph does not rely
on that: any stage set whose edges connect the two spaces can be routed.
"""

from __future__ import annotations

import logging

import networkx as nx

from almanac.errors import RouteError
from almanac.pipeline import Pipeline
from almanac.stage import StageMap


logger = logging.getLogger(__name__)


class SpaceGraph:
    """Directed graph of identifier spaces joined by stages.

    Usage:
        graph = SpaceGraph()
        for stage in stages:
            graph.register(stage)
        pipeline = graph.route("seed", "location")
    """

    def __init__(self) -> None:
        self._graph = nx.DiGraph()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(self, stage: StageMap) -> None:
        """Add a stage as the edge source → destination.

        Registering a second stage for the same pair replaces the first.
        """
        if stage.source is None or stage.destination is None:
            raise ValueError(f"Cannot route an unnamed stage: {stage!r}")
        if self._graph.has_edge(stage.source, stage.destination):
            logger.warning("Replacing stage %s", stage.name)
        self._graph.add_edge(stage.source, stage.destination, stage=stage)

    # ------------------------------------------------------------------
    # Routing
    # ------------------------------------------------------------------

    def route(self, source: str, destination: str) -> Pipeline:
        """Pipeline of the fewest stages leading from source to destination.

        Raises:
            KeyError: either space is unknown
            RouteError: both spaces exist but no chain of stages connects them
        """
        for space in (source, destination):
            if space not in self._graph:
                raise KeyError(
                    f"Unknown identifier space '{space}'. "
                    f"Known: {self.spaces}"
                )
        try:
            path = nx.shortest_path(self._graph, source, destination)
        except nx.NetworkXNoPath:
            raise RouteError(f"No stages lead from '{source}' to '{destination}'") from None

        stages = [self._graph.edges[a, b]["stage"] for a, b in zip(path, path[1:])]
        logger.debug("Routed %s → %s via %s", source, destination, " → ".join(path))
        return Pipeline(stages)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def spaces(self) -> list[str]:
        return list(self._graph.nodes)

    @property
    def stages(self) -> list[StageMap]:
        return [data["stage"] for _, _, data in self._graph.edges(data=True)]

    def neighbors(self, space: str) -> list[str]:
        """Spaces reachable from this one through a single stage."""
        return list(self._graph.successors(space))

    def summary(self) -> str:
        lines = [
            f"Space Graph: {self._graph.number_of_nodes()} spaces, "
            f"{self._graph.number_of_edges()} stages",
            "",
        ]
        for stage in self.stages:
            lines.append(f"  {stage.name}: {len(stage)} segments")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"<SpaceGraph: {self._graph.number_of_nodes()} spaces, "
            f"{self._graph.number_of_edges()} stages>"
        )
