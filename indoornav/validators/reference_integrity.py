"""Reference integrity validator."""

from ..graph.floor_graph import FloorGraph
from ..schema.models import MapDocument
from .base import ValidationResult


def check_reference_integrity(document: MapDocument, graph: FloorGraph) -> ValidationResult:
    """Check that persisted references resolve.

    This validator checks the document as written, before the builder
    dropped anything:
    - connection endpoints reference defined nodes
    - connections are not self-loops or repeated pairs
    - node floors and stair floor links are in the floor set

    Args:
        document: The parsed map document.
        graph: The graph built from it.

    Returns:
        ValidationResult with warnings for inert references.
    """
    result = ValidationResult()

    node_ids = set(document.get_all_node_ids())
    seen_pairs: set[frozenset[str]] = set()

    for conn in document.connections:
        missing = [e for e in (conn.from_id, conn.to_id) if e not in node_ids]
        if missing:
            for endpoint in missing:
                result.add_warning(
                    code="DANGLING_CONNECTION",
                    message=(
                        f"Connection {conn.from_id} - {conn.to_id} references "
                        f"undefined node '{endpoint}'"
                    ),
                    node=endpoint,
                    connection=conn.to_record(),
                )
            continue

        if conn.from_id == conn.to_id:
            result.add_warning(
                code="SELF_LOOP",
                message=f"Connection joins node '{conn.from_id}' to itself",
                node=conn.from_id,
            )
            continue

        if conn.pair in seen_pairs:
            result.add_warning(
                code="DUPLICATE_CONNECTION",
                message=f"Connection {conn.from_id} - {conn.to_id} is listed more than once",
                node=conn.from_id,
                connection=conn.to_record(),
            )
        seen_pairs.add(conn.pair)

    floors = set(graph.floors)
    for node in document.nodes:
        for floor in sorted(node.referenced_floors - floors):
            result.add_warning(
                code="UNKNOWN_FLOOR",
                message=f"Node '{node.id}' references floor {floor}, which is not defined",
                node=node.id,
                floor=floor,
            )

    return result


def check_identifiers(graph: FloorGraph) -> ValidationResult:
    """Check that scan codes resolve to exactly one node.

    A code is looked up against identifiers and ids alike, so a node id
    equal to another node's identifier is a collision too.
    """
    result = ValidationResult()

    owners: dict[str, list[str]] = {}
    for node in graph.nodes():
        for code in dict.fromkeys((node.identifier, node.id)):
            owners.setdefault(code, []).append(node.id)

    for code, ids in owners.items():
        if len(ids) > 1:
            result.add_error(
                code="DUPLICATE_IDENTIFIER",
                message=f"Scan code '{code}' is shared by nodes {', '.join(ids)}",
                node=ids[0],
                nodes=ids,
            )

    return result
