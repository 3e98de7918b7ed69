"""Graph layer: the node/connection store and per-floor queries."""

from .errors import DuplicateEdge, GraphError, InvalidEndpoint, UnknownFloor
from .node_types import NODE_STYLES, NodeStyle, style_for
from .floor_graph import FloorGraph
from .builder import build_graph
from .floors import (
    connections_on_floor,
    is_stair_on_floor,
    is_visible_on_floor,
    node_at,
    nodes_on_floor,
)
from .stairs import find_legacy_stairs, normalize_stairs

__all__ = [
    "DuplicateEdge",
    "GraphError",
    "InvalidEndpoint",
    "UnknownFloor",
    "NODE_STYLES",
    "NodeStyle",
    "style_for",
    "FloorGraph",
    "build_graph",
    "connections_on_floor",
    "is_stair_on_floor",
    "is_visible_on_floor",
    "node_at",
    "nodes_on_floor",
    "find_legacy_stairs",
    "normalize_stairs",
]
