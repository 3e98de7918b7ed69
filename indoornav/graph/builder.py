"""Builder for converting a MapDocument to a FloorGraph."""

import logging

from ..schema.models import MapDocument
from .errors import DuplicateEdge, InvalidEndpoint
from .floor_graph import FloorGraph

logger = logging.getLogger(__name__)


def build_graph(document: MapDocument) -> FloorGraph:
    """Build a FloorGraph from a parsed map document.

    Persisted data is accepted as-is: floor references outside the floor
    set are kept but inert, and connections that are dangling, self-loops
    or duplicates are dropped with a warning.

    Args:
        document: The parsed map document.

    Returns:
        A FloorGraph representing the map.
    """
    floors = document.floors
    if not floors:
        floors = sorted(document.referenced_floors()) or [1]

    graph = FloorGraph(floors=floors, pixels_per_meter=document.pixels_per_meter)

    # Add all nodes first
    for node in document.nodes:
        if graph.has_node(node.id):
            logger.warning("Node '%s' appears more than once; keeping the last record", node.id)
        graph.add_node(node, check_floors=False)

        unknown = sorted(node.referenced_floors - set(graph.floors))
        if unknown:
            logger.warning("Node '%s' references undefined floor(s) %s", node.id, unknown)

    # Add connections (after all nodes exist)
    for conn in document.connections:
        try:
            graph.add_connection(conn.from_id, conn.to_id)
        except DuplicateEdge:
            logger.warning(
                "Dropping duplicate connection %s - %s", conn.from_id, conn.to_id
            )
        except InvalidEndpoint as e:
            logger.warning(
                "Dropping connection %s - %s: %s", conn.from_id, conn.to_id, e
            )

    logger.debug(
        "Built graph with %d node(s), %d connection(s) on floors %s",
        len(graph),
        graph.graph.number_of_edges(),
        graph.floors,
    )
    return graph
