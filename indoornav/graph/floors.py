"""Per-floor visibility of map nodes.

A stair record is visible on its own floor and, in the single-record
encoding, on every floor listed in ``connectsToFloor``/``connectsToFloors``.
The floor is always passed in explicitly.
"""

import math

from ..schema.models import ConnectionRecord, NodeRecord
from .floor_graph import FloorGraph
from .node_types import style_for


def is_stair_on_floor(node: NodeRecord, floor: int) -> bool:
    """Check whether a stair record also stands for another floor."""
    if not node.is_stair:
        return False
    if node.connects_to_floor == floor:
        return True
    return floor in (node.connects_to_floors or [])


def is_visible_on_floor(node: NodeRecord, floor: int) -> bool:
    return node.floor == floor or is_stair_on_floor(node, floor)


def nodes_on_floor(graph: FloorGraph, floor: int) -> list[NodeRecord]:
    """Get every node visible on a floor, in graph insertion order."""
    return [node for node in graph.nodes() if is_visible_on_floor(node, floor)]


def connections_on_floor(graph: FloorGraph, floor: int) -> list[ConnectionRecord]:
    """Get the connections whose endpoints are both visible on a floor."""
    visible = {node.id for node in nodes_on_floor(graph, floor)}
    return [
        conn
        for conn in graph.connections()
        if conn.from_id in visible and conn.to_id in visible
    ]


def node_at(graph: FloorGraph, floor: int, x: float, y: float) -> NodeRecord | None:
    """Hit-test a map position against the nodes visible on a floor.

    A node is hit when the position lies within half of its type's
    default size from its centre. The first match in insertion order wins.
    """
    for node in nodes_on_floor(graph, floor):
        radius = style_for(node.type).size / 2
        if math.hypot(x - node.x, y - node.y) <= radius:
            return node
    return None
