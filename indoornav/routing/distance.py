"""Physical distance estimates from map coordinates."""

import math
from typing import Sequence

from ..graph.floor_graph import FloorGraph
from ..schema.models import NodeRecord
from .models import Segment, SegmentClass

DEFAULT_PIXELS_PER_METER = 10.0
DEFAULT_SHORT_BELOW = 10
DEFAULT_LONG_ABOVE = 25


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(math.floor(abs(value) + 0.5)) * (1 if value >= 0 else -1)


class DistanceCalculator:
    """Converts map-unit positions into whole-meter distances.

    Only same-floor pairs have a meaningful distance. Cross-floor pairs
    still get a number from ``edge_distance`` but ``path_distance`` and
    ``segments`` count them as zero.
    """

    def __init__(
        self,
        pixels_per_meter: float = DEFAULT_PIXELS_PER_METER,
        short_below: int = DEFAULT_SHORT_BELOW,
        long_above: int = DEFAULT_LONG_ABOVE,
    ):
        """Initialize the calculator.

        Args:
            pixels_per_meter: Map units per physical meter.
            short_below: Distances below this are SHORT.
            long_above: Distances above this are LONG.

        Raises:
            ValueError: If the scale is not positive or the bins overlap.
        """
        if pixels_per_meter <= 0:
            raise ValueError("pixels_per_meter must be > 0")
        if short_below > long_above:
            raise ValueError("short_below must not exceed long_above")
        self.pixels_per_meter = float(pixels_per_meter)
        self.short_below = short_below
        self.long_above = long_above

    @classmethod
    def for_graph(cls, graph: FloorGraph) -> "DistanceCalculator":
        """Calculator using the scale stored with a map, or the default."""
        return cls(graph.pixels_per_meter or DEFAULT_PIXELS_PER_METER)

    def edge_distance(self, a: NodeRecord, b: NodeRecord) -> int:
        """Euclidean distance between two nodes in whole meters."""
        return round_half_up(math.hypot(a.x - b.x, a.y - b.y) / self.pixels_per_meter)

    def step_distance(self, a: NodeRecord, b: NodeRecord) -> int:
        """Distance contributed by one route step; floor changes count as 0."""
        if a.floor != b.floor:
            return 0
        return self.edge_distance(a, b)

    def path_distance(self, graph: FloorGraph, route: Sequence[str]) -> int:
        """Total same-floor distance along a route.

        Ids missing from the graph are skipped.
        """
        records = [graph.get_node(node_id) for node_id in route]
        present = [r for r in records if r is not None]
        return sum(self.step_distance(a, b) for a, b in zip(present, present[1:]))

    def classify_segment(self, distance: float) -> SegmentClass:
        if distance < self.short_below:
            return SegmentClass.SHORT
        if distance > self.long_above:
            return SegmentClass.LONG
        return SegmentClass.MEDIUM

    def segments(self, graph: FloorGraph, route: Sequence[str]) -> list[Segment]:
        """Per-step distance and classification for path highlighting."""
        result = []
        for from_id, to_id in zip(route, route[1:]):
            a = graph.get_node(from_id)
            b = graph.get_node(to_id)
            if a is None or b is None:
                continue
            distance = self.step_distance(a, b)
            result.append(
                Segment(
                    from_id=from_id,
                    to_id=to_id,
                    distance=distance,
                    classification=self.classify_segment(distance),
                    crosses_floors=a.floor != b.floor,
                )
            )
        return result
