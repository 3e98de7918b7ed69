"""Shared fixtures for tests."""

from pathlib import Path

import pytest

from indoornav.graph.builder import build_graph
from indoornav.graph.floor_graph import FloorGraph
from indoornav.routing.distance import DistanceCalculator
from indoornav.schema.loader import parse_map_from_string
from indoornav.schema.models import NodeRecord


@pytest.fixture
def examples_dir() -> Path:
    """Return the path to the examples directory."""
    return Path(__file__).parent.parent / "examples"


@pytest.fixture
def two_floor_map_yaml() -> str:
    """Return a two-floor map with one stairwell per floor."""
    return """
floors: [1, 2]
pixelsPerMeter: 10
nodes:
  exit1: {type: exit, name: Main Exit, floor: 1, x: 50, y: 300, identifier: QR-EXIT-1}
  corridor1_1: {type: corridor, name: Corridor 1, floor: 1, x: 200, y: 300}
  room101: {type: room, name: Room 101, floor: 1, x: 200, y: 150}
  stairs1_f1: {type: stair, name: Stairs 1, floor: 1, x: 400, y: 300, connectsToFloor: 2}
  stairs1_f2: {type: stair, name: Stairs 1, floor: 2, x: 400, y: 300}
  corridor2_1: {type: corridor, name: Corridor 2, floor: 2, x: 250, y: 300}
  room201: {type: room, name: Room 201, floor: 2, x: 250, y: 150}
connections:
  - {from: exit1, to: corridor1_1}
  - {from: corridor1_1, to: room101}
  - {from: corridor1_1, to: stairs1_f1}
  - {from: stairs1_f1, to: stairs1_f2}
  - {from: stairs1_f2, to: corridor2_1}
  - {from: corridor2_1, to: room201}
"""


@pytest.fixture
def legacy_map_yaml() -> str:
    """Return a map whose stairwell is a single record linked to floor 2."""
    return """
nodes:
  room101: {type: room, name: Room 101, x: 150, y: 100, qrCode: room101}
  door1: {type: door, name: Door 1, x: 250, y: 100}
  stairs1: {type: stair, name: Stairs 1, x: 350, y: 100, connectsToFloor: 2}
  room201: {type: room, name: Room 201, floor: 2, x: 450, y: 100}
connections:
  - {from: room101, to: door1}
  - {from: door1, to: stairs1}
  - {from: stairs1, to: room201}
"""


@pytest.fixture
def two_floor_document(two_floor_map_yaml):
    """Return the parsed two-floor map."""
    return parse_map_from_string(two_floor_map_yaml, "yaml")


@pytest.fixture
def two_floor_graph(two_floor_document):
    """Return the graph built from the two-floor map."""
    return build_graph(two_floor_document)


@pytest.fixture
def legacy_document(legacy_map_yaml):
    return parse_map_from_string(legacy_map_yaml, "yaml")


@pytest.fixture
def legacy_graph(legacy_document):
    return build_graph(legacy_document)


@pytest.fixture
def calculator() -> DistanceCalculator:
    """Return a calculator at 10 map units per meter."""
    return DistanceCalculator(pixels_per_meter=10)


def make_node(node_id: str, **fields) -> NodeRecord:
    """Build a node record with room defaults."""
    return NodeRecord(id=node_id, **fields)


@pytest.fixture
def square_graph() -> FloorGraph:
    """A 4-cycle a-b-c-d-a on one floor plus a detached pair x-y.

    a(0,0) b(100,0) c(100,100) d(0,100), scale 10 units per meter.
    """
    graph = FloorGraph(floors=[1], pixels_per_meter=10)
    for node_id, x, y in [
        ("a", 0, 0),
        ("b", 100, 0),
        ("c", 100, 100),
        ("d", 0, 100),
        ("x", 500, 500),
        ("y", 600, 500),
    ]:
        graph.add_node(make_node(node_id, x=x, y=y))
    graph.add_connection("a", "b")
    graph.add_connection("b", "c")
    graph.add_connection("c", "d")
    graph.add_connection("d", "a")
    graph.add_connection("x", "y")
    return graph
