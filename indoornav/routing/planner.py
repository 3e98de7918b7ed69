"""Route planning: request validation, search and narration in one call."""

import logging

from ..graph.floor_graph import FloorGraph
from .distance import DistanceCalculator
from .errors import RouteValidationError
from .instructions import generate_instructions
from .models import CostMode, RoutePlan
from .path_finder import find_route

logger = logging.getLogger(__name__)


def validate_route_request(graph: FloorGraph, start_id: str | None, end_id: str | None) -> None:
    """Reject route requests the path finder should never see.

    Raises:
        RouteValidationError: If an endpoint is missing, unknown, or both
            endpoints are the same node.
    """
    if not start_id:
        raise RouteValidationError("No start point selected", "start")
    if not end_id:
        raise RouteValidationError("No destination selected", "end")
    if start_id == end_id:
        raise RouteValidationError("Start and destination must differ", "end")
    if not graph.has_node(start_id):
        raise RouteValidationError(f"Unknown start node '{start_id}'", "start")
    if not graph.has_node(end_id):
        raise RouteValidationError(f"Unknown destination node '{end_id}'", "end")


def plan_route(
    graph: FloorGraph,
    start_id: str | None,
    end_id: str | None,
    cost_mode: CostMode = CostMode.HOPS,
    calculator: DistanceCalculator | None = None,
) -> RoutePlan:
    """Validate a request, find the route and build its narration.

    Args:
        graph: The map graph.
        start_id: Id of the start node.
        end_id: Id of the destination node.
        cost_mode: Edge cost for the search.
        calculator: Distance calculator. Defaults to the graph's scale.

    Returns:
        A RoutePlan; ``plan.found`` is False when the nodes are not
        connected.

    Raises:
        RouteValidationError: If the request is invalid.
    """
    validate_route_request(graph, start_id, end_id)

    if calculator is None:
        calculator = DistanceCalculator.for_graph(graph)
    cost_mode = CostMode(cost_mode)

    plan = RoutePlan(start_id=start_id, end_id=end_id, cost_mode=cost_mode)
    route = find_route(graph, start_id, end_id, cost_mode, calculator)
    if not route:
        logger.info("No route from %s to %s", start_id, end_id)
        return plan

    plan.route = route
    plan.segments = calculator.segments(graph, route)
    plan.instructions = generate_instructions(graph, route, calculator)
    plan.total_distance = calculator.path_distance(graph, route)
    return plan
