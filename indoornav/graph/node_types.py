"""Per-type presentation defaults for map nodes."""

from dataclasses import dataclass

from ..schema.models import NodeType


@dataclass(frozen=True)
class NodeStyle:
    """Default sizing for a node type."""

    size: float  # map units, used for hit testing


NODE_STYLES: dict[NodeType, NodeStyle] = {
    NodeType.ROOM: NodeStyle(size=60),
    NodeType.CORRIDOR: NodeStyle(size=40),
    NodeType.STAIR: NodeStyle(size=50),
    NodeType.EXIT: NodeStyle(size=40),
    NodeType.DOOR: NodeStyle(size=30),
}


def style_for(node_type: NodeType) -> NodeStyle:
    """Get the style for a node type."""
    return NODE_STYLES[NodeType(node_type)]
