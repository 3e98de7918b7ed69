"""FloorGraph wrapper around networkx for indoor maps."""

import logging
from typing import Iterable

import networkx as nx

from ..schema.models import ConnectionRecord, NodeRecord
from .errors import DuplicateEdge, InvalidEndpoint, UnknownFloor

logger = logging.getLogger(__name__)


class FloorGraph:
    """The node and connection store for a multi-floor building.

    Wraps an undirected networkx Graph. Each graph node carries its
    NodeRecord under the ``record`` attribute; each edge remembers the
    direction it was inserted with (``source``) and its insertion order
    so that serialization and neighbour enumeration are deterministic.

    The store also owns the ordered set of valid floor numbers.
    """

    def __init__(
        self,
        floors: Iterable[int] | None = None,
        pixels_per_meter: float | None = None,
    ):
        """Initialize an empty graph.

        Args:
            floors: Valid floor numbers. Defaults to a single floor 1.
            pixels_per_meter: Map scale carried along for persistence.
        """
        self._graph = nx.Graph()
        self._floors: set[int] = set(floors) if floors is not None else {1}
        self._next_order = 0
        self.pixels_per_meter = pixels_per_meter

    @property
    def graph(self) -> nx.Graph:
        """Get the underlying networkx graph."""
        return self._graph

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def __contains__(self, node_id: object) -> bool:
        return self._graph.has_node(node_id)

    # -------------------------------------------------------------------------
    # Floors
    # -------------------------------------------------------------------------

    @property
    def floors(self) -> list[int]:
        """Valid floor numbers in ascending order."""
        return sorted(self._floors)

    def has_floor(self, floor: int) -> bool:
        return floor in self._floors

    def add_floor(self, floor: int) -> None:
        """Register a floor number (no-op if already known)."""
        self._floors.add(int(floor))

    def remove_floor(self, floor: int) -> None:
        """Remove a floor that no node references.

        Raises:
            UnknownFloor: If the floor is not registered or still in use.
        """
        if floor not in self._floors:
            raise UnknownFloor(f"Floor {floor} is not defined", floor)
        users = [n.id for n in self.nodes() if floor in n.referenced_floors]
        if users:
            raise UnknownFloor(
                f"Floor {floor} is still referenced by {len(users)} node(s)", floor
            )
        self._floors.discard(floor)

    def _check_floors(self, node: NodeRecord) -> None:
        missing = sorted(node.referenced_floors - self._floors)
        if missing:
            raise UnknownFloor(
                f"Node '{node.id}' references undefined floor(s) {missing}",
                missing[0],
            )

    # -------------------------------------------------------------------------
    # Node management
    # -------------------------------------------------------------------------

    def add_node(self, node: NodeRecord, check_floors: bool = True) -> str:
        """Insert a node or replace the record stored under its id.

        Replacing a node keeps its connections.

        Args:
            node: The node record.
            check_floors: Reject floor references outside the floor set.

        Returns:
            The node id.

        Raises:
            UnknownFloor: If ``check_floors`` and the node mentions an
                undefined floor.
        """
        if check_floors:
            self._check_floors(node)

        if self._graph.has_node(node.id):
            self._graph.nodes[node.id]["record"] = node
        else:
            self._graph.add_node(node.id, record=node)
        return node.id

    def remove_node(self, node_id: str) -> NodeRecord:
        """Delete a node and every connection referencing it.

        Returns:
            The removed record.

        Raises:
            InvalidEndpoint: If the node does not exist.
        """
        record = self._require(node_id)
        removed = self.remove_connections_of(node_id)
        self._graph.remove_node(node_id)
        logger.debug("Removed node %s and %d connection(s)", node_id, removed)
        return record

    def get_node(self, node_id: str) -> NodeRecord | None:
        """Get a node record by id."""
        if self._graph.has_node(node_id):
            return self._graph.nodes[node_id]["record"]
        return None

    def has_node(self, node_id: str) -> bool:
        return self._graph.has_node(node_id)

    def nodes(self) -> list[NodeRecord]:
        """All node records in insertion order."""
        return [data["record"] for _, data in self._graph.nodes(data=True)]

    def node_ids(self) -> list[str]:
        return list(self._graph.nodes)

    def _require(self, node_id: str) -> NodeRecord:
        record = self.get_node(node_id)
        if record is None:
            raise InvalidEndpoint(f"Node '{node_id}' does not exist", node_id)
        return record

    # -------------------------------------------------------------------------
    # Connection management
    # -------------------------------------------------------------------------

    def add_connection(self, a: str, b: str) -> ConnectionRecord:
        """Connect two existing nodes.

        Raises:
            InvalidEndpoint: If ``a == b`` or either node does not exist.
            DuplicateEdge: If the nodes are already connected.
        """
        if a == b:
            raise InvalidEndpoint(f"Cannot connect node '{a}' to itself", a)
        self._require(a)
        self._require(b)
        if self._graph.has_edge(a, b):
            raise DuplicateEdge(a, b)

        self._graph.add_edge(a, b, source=a, order=self._next_order)
        self._next_order += 1
        return ConnectionRecord(from_id=a, to_id=b)

    def remove_connection(self, a: str, b: str) -> None:
        """Remove the connection between two nodes.

        Raises:
            InvalidEndpoint: If no such connection exists.
        """
        if not self._graph.has_edge(a, b):
            raise InvalidEndpoint(f"No connection between '{a}' and '{b}'", a)
        self._graph.remove_edge(a, b)

    def remove_connections_of(self, node_id: str) -> int:
        """Remove every connection touching a node.

        Returns:
            The number of connections removed.
        """
        if not self._graph.has_node(node_id):
            return 0
        edges = list(self._graph.edges(node_id))
        self._graph.remove_edges_from(edges)
        return len(edges)

    def has_connection(self, a: str, b: str) -> bool:
        return self._graph.has_edge(a, b)

    def neighbors(self, node_id: str) -> list[str]:
        """Ids directly connected to a node, in connection insertion order."""
        if not self._graph.has_node(node_id):
            return []
        adjacent = self._graph.adj[node_id]
        return sorted(adjacent, key=lambda other: adjacent[other]["order"])

    def connections(self) -> list[ConnectionRecord]:
        """All connections in insertion order, with their original direction."""
        edges = sorted(self._graph.edges(data=True), key=lambda e: e[2]["order"])
        return [self._as_record(u, v, data) for u, v, data in edges]

    def connections_of(self, node_id: str) -> list[ConnectionRecord]:
        """Connections touching a node."""
        if not self._graph.has_node(node_id):
            return []
        edges = sorted(self._graph.edges(node_id, data=True), key=lambda e: e[2]["order"])
        return [self._as_record(u, v, data) for u, v, data in edges]

    @staticmethod
    def _as_record(u: str, v: str, data: dict) -> ConnectionRecord:
        source = data.get("source", u)
        target = v if source == u else u
        return ConnectionRecord(from_id=source, to_id=target)

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def find_node_by_code(self, code: str) -> NodeRecord | None:
        """Resolve a scanned code to a node.

        Matches each node's identifier, falling back to its id; the first
        node in insertion order wins.
        """
        for node in self.nodes():
            if node.identifier == code or node.id == code:
                return node
        return None

    def components(self) -> list[set[str]]:
        """Connected components, largest first."""
        return sorted(nx.connected_components(self._graph), key=len, reverse=True)

    # -------------------------------------------------------------------------
    # Whole-graph operations
    # -------------------------------------------------------------------------

    def copy(self) -> "FloorGraph":
        """Copy the graph; records are shared and treated as immutable."""
        clone = FloorGraph(floors=self._floors, pixels_per_meter=self.pixels_per_meter)
        clone._graph = self._graph.copy()
        clone._next_order = self._next_order
        return clone

    def clear(self) -> None:
        """Remove every node and connection; floors are kept."""
        self._graph.clear()
        self._next_order = 0
