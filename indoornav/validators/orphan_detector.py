"""Isolated node detection validator."""

from ..graph.floor_graph import FloorGraph
from .base import ValidationResult


def check_isolated_nodes(graph: FloorGraph) -> ValidationResult:
    """Check for nodes with no connections.

    An isolated node can never be part of a route; it usually means a
    connection was forgotten while editing the map.

    Args:
        graph: The map graph to check.

    Returns:
        ValidationResult with warnings for isolated nodes.
    """
    result = ValidationResult()

    if len(graph) < 2:
        return result

    for node in graph.nodes():
        if not graph.neighbors(node.id):
            result.add_warning(
                code="ISOLATED_NODE",
                message=f"Node '{node.name}' has no connections",
                node=node.id,
                floor=node.floor,
            )

    return result
