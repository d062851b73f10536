"""
SpaceGraph tests: registration, routing, introspection.
"""

import pytest

from almanac.errors import RouteError
from almanac.graph import SpaceGraph
from almanac.segment import Segment
from almanac.stage import StageMap


def stage(source: str, destination: str, *segments: Segment) -> StageMap:
    return StageMap(segments, source=source, destination=destination)


@pytest.fixture
def graph() -> SpaceGraph:
    g = SpaceGraph()
    g.register(stage("seed", "soil", Segment(0, 10, 5)))
    g.register(stage("soil", "water", Segment(10, 100, 5)))
    g.register(stage("water", "location", Segment(100, 7, 5)))
    g.register(stage("seed", "water", Segment(0, 50, 5)))
    return g


class TestRouting:
    def test_shortest_route(self, graph: SpaceGraph) -> None:
        pipeline = graph.route("seed", "location")
        assert [s.name for s in pipeline.stages] == ["seed-to-water", "water-to-location"]

    def test_route_translates(self, graph: SpaceGraph) -> None:
        assert graph.route("soil", "location").translate_scalar_all(12) == 9

    def test_same_space_is_empty_pipeline(self, graph: SpaceGraph) -> None:
        assert len(graph.route("soil", "soil")) == 0

    def test_no_route(self, graph: SpaceGraph) -> None:
        with pytest.raises(RouteError, match="No stages lead"):
            graph.route("location", "seed")

    def test_unknown_space(self, graph: SpaceGraph) -> None:
        with pytest.raises(KeyError, match="Unknown identifier space"):
            graph.route("seed", "moon")


class TestRegistration:
    def test_unnamed_stage_rejected(self) -> None:
        with pytest.raises(ValueError):
            SpaceGraph().register(StageMap([Segment(0, 1, 1)]))

    def test_replacing_stage(self, caplog) -> None:
        g = SpaceGraph()
        g.register(stage("a", "b", Segment(0, 1, 1)))
        g.register(stage("a", "b", Segment(0, 9, 1)))
        assert g.route("a", "b").translate_scalar_all(0) == 9
        assert "Replacing" in caplog.text

    def test_introspection(self, graph: SpaceGraph) -> None:
        assert set(graph.spaces) == {"seed", "soil", "water", "location"}
        assert len(graph.stages) == 4
        assert set(graph.neighbors("seed")) == {"soil", "water"}
        assert "4 spaces, 4 stages" in graph.summary()
