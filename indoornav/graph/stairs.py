"""Migration between the two stairwell encodings.

Maps describe a stairwell either as one stair record tagged with
``connectsToFloor``/``connectsToFloors``, or as one stair record per floor
joined by an ordinary connection. Both are read; the per-floor form is
the canonical one and is what gets written.
"""

import logging

from ..schema.models import NodeRecord
from .floor_graph import FloorGraph

logger = logging.getLogger(__name__)


def find_legacy_stairs(graph: FloorGraph) -> list[NodeRecord]:
    """Get stair records that stand for more than their own floor."""
    return [node for node in graph.nodes() if node.linked_floors]


def _connected_stair_on(graph: FloorGraph, stair: NodeRecord, floor: int) -> NodeRecord | None:
    for other_id in graph.neighbors(stair.id):
        other = graph.get_node(other_id)
        if other is not None and other.is_stair and other.floor == floor:
            return other
    return None


def _counterpart_id(graph: FloorGraph, stair: NodeRecord, floor: int) -> str:
    base = f"{stair.id}@{floor}"
    candidate = base
    suffix = 2
    while graph.has_node(candidate):
        candidate = f"{base}-{suffix}"
        suffix += 1
    return candidate


def normalize_stairs(graph: FloorGraph) -> list[str]:
    """Rewrite single-record stairs into one stair record per floor.

    For every floor a stair record links to, the stair is joined to a stair
    record on that floor: an already-connected one is reused, otherwise a
    new record is created at the same position. The stair's connections
    to nodes on that floor are moved to the per-floor record, and the
    floor link is cleared. Links to floors outside the graph's floor set
    are left in place untouched.

    Running it twice is a no-op the second time.

    Args:
        graph: The graph to rewrite in place.

    Returns:
        Ids of the stair records that were created.
    """
    created: list[str] = []
    known_floors = set(graph.floors)

    for stair in find_legacy_stairs(graph):
        targets = stair.linked_floors
        migratable = sorted(targets & known_floors)
        if not migratable:
            continue

        for floor in migratable:
            counterpart = _connected_stair_on(graph, stair, floor)
            if counterpart is None:
                counterpart = NodeRecord(
                    id=_counterpart_id(graph, stair, floor),
                    type=stair.type,
                    name=stair.name,
                    info=stair.info,
                    floor=floor,
                    x=stair.x,
                    y=stair.y,
                )
                graph.add_node(counterpart, check_floors=False)
                graph.add_connection(stair.id, counterpart.id)
                created.append(counterpart.id)
                logger.info(
                    "Created stair record '%s' on floor %d for '%s'",
                    counterpart.id,
                    floor,
                    stair.id,
                )

            for other_id in graph.neighbors(stair.id):
                if other_id == counterpart.id:
                    continue
                other = graph.get_node(other_id)
                if other is None or other.floor != floor:
                    continue
                graph.remove_connection(stair.id, other_id)
                if not graph.has_connection(counterpart.id, other_id):
                    graph.add_connection(counterpart.id, other_id)
                logger.debug(
                    "Moved connection %s - %s to %s", stair.id, other_id, counterpart.id
                )

        leftover = sorted(targets - set(migratable))
        graph.add_node(
            stair.model_copy(
                update={
                    "connects_to_floor": None,
                    "connects_to_floors": leftover or None,
                }
            ),
            check_floors=False,
        )
        if leftover:
            logger.warning(
                "Stair '%s' links to undefined floor(s) %s; left as is", stair.id, leftover
            )

    return created
