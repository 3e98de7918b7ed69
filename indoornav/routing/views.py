"""Per-floor payloads for map renderers."""

from dataclasses import dataclass, field
from typing import Sequence

from ..graph.floor_graph import FloorGraph
from ..graph.floors import connections_on_floor, nodes_on_floor
from ..schema.models import ConnectionRecord, NodeRecord
from .distance import DistanceCalculator
from .models import Segment


@dataclass
class FloorView:
    """Everything a renderer draws for one floor."""

    floor: int
    nodes: list[NodeRecord] = field(default_factory=list)
    connections: list[ConnectionRecord] = field(default_factory=list)
    route: list[str] = field(default_factory=list)
    route_segments: list[Segment] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "floor": self.floor,
            "nodes": [node.to_record() for node in self.nodes],
            "connections": [conn.to_record() for conn in self.connections],
            "route": list(self.route),
            "route_segments": [
                {
                    "from": seg.from_id,
                    "to": seg.to_id,
                    "distance": seg.distance,
                    "classification": seg.classification.value,
                }
                for seg in self.route_segments
            ],
        }


def floor_view(
    graph: FloorGraph,
    floor: int,
    route: Sequence[str] | None = None,
    calculator: DistanceCalculator | None = None,
) -> FloorView:
    """Build the render payload for a floor.

    When a route is given, only the route ids visible on the floor and the
    segments with both ends visible on it are included.
    """
    nodes = nodes_on_floor(graph, floor)
    view = FloorView(floor=floor, nodes=nodes, connections=connections_on_floor(graph, floor))

    if route:
        if calculator is None:
            calculator = DistanceCalculator.for_graph(graph)
        visible = {node.id for node in nodes}
        view.route = [node_id for node_id in route if node_id in visible]
        view.route_segments = [
            seg
            for seg in calculator.segments(graph, route)
            if seg.from_id in visible and seg.to_id in visible
        ]

    return view
