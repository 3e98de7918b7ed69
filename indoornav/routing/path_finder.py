"""Shortest routes across the whole multi-floor graph."""

import heapq
import itertools
import logging

from ..graph.floor_graph import FloorGraph
from .distance import DistanceCalculator
from .models import CostMode

logger = logging.getLogger(__name__)


def _edge_cost(
    graph: FloorGraph,
    a: str,
    b: str,
    cost_mode: CostMode,
    calculator: DistanceCalculator,
) -> float:
    if cost_mode == CostMode.HOPS:
        return 1
    return calculator.step_distance(graph.get_node(a), graph.get_node(b))


def find_route(
    graph: FloorGraph,
    start_id: str,
    end_id: str,
    cost_mode: CostMode = CostMode.HOPS,
    calculator: DistanceCalculator | None = None,
) -> list[str]:
    """Find a minimum-cost route between two nodes.

    Runs Dijkstra over every floor at once; floor changes are ordinary
    connections. Neighbours are expanded in ``graph.neighbors`` order and
    a node's cost is only replaced on strict improvement, so among equal
    cost routes the first one discovered wins.

    Args:
        graph: The map graph.
        start_id: Id of the start node.
        end_id: Id of the destination node.
        cost_mode: HOPS counts connections; DISTANCE sums same-floor meters
            (floor changes cost nothing).
        calculator: Distance calculator for DISTANCE mode. Defaults to one
            using the graph's scale.

    Returns:
        Node ids from start to end inclusive, or an empty list when either
        node is missing or no route connects them.
    """
    if not graph.has_node(start_id) or not graph.has_node(end_id):
        return []
    if start_id == end_id:
        return [start_id]

    cost_mode = CostMode(cost_mode)
    if calculator is None:
        calculator = DistanceCalculator.for_graph(graph)

    counter = itertools.count()
    open_heap: list[tuple[float, int, str]] = [(0, next(counter), start_id)]
    came_from: dict[str, str] = {}
    g_score: dict[str, float] = {start_id: 0}
    closed: set[str] = set()

    while open_heap:
        cost, _, current = heapq.heappop(open_heap)

        if current in closed:
            continue
        if current == end_id:
            path = [current]
            while current in came_from:
                current = came_from[current]
                path.append(current)
            path.reverse()
            logger.debug(
                "Route %s -> %s: %d node(s), cost %s (%s)",
                start_id,
                end_id,
                len(path),
                cost,
                cost_mode.value,
            )
            return path

        closed.add(current)

        for neighbor in graph.neighbors(current):
            if neighbor in closed:
                continue

            tentative = g_score[current] + _edge_cost(
                graph, current, neighbor, cost_mode, calculator
            )
            if tentative < g_score.get(neighbor, float("inf")):
                came_from[neighbor] = current
                g_score[neighbor] = tentative
                heapq.heappush(open_heap, (tentative, next(counter), neighbor))

    logger.debug("No route between %s and %s", start_id, end_id)
    return []


def route_cost(
    graph: FloorGraph,
    route: list[str],
    cost_mode: CostMode = CostMode.HOPS,
    calculator: DistanceCalculator | None = None,
) -> float:
    """Cost of an existing route under a cost mode."""
    if calculator is None:
        calculator = DistanceCalculator.for_graph(graph)
    return sum(
        _edge_cost(graph, a, b, CostMode(cost_mode), calculator)
        for a, b in zip(route, route[1:])
    )
