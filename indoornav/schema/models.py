"""Pydantic models for persisted indoor maps."""

import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

logger = logging.getLogger(__name__)

MAP_FORMAT_VERSION = "1.0"


class NodeType(str, Enum):
    """Closed set of point-of-interest categories."""

    ROOM = "room"
    CORRIDOR = "corridor"
    STAIR = "stair"
    EXIT = "exit"
    DOOR = "door"


class NodeRecord(BaseModel):
    """A navigable point of interest on one floor."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    type: NodeType = NodeType.ROOM
    name: str = ""
    info: str = ""
    floor: int = 1
    x: float = 0.0
    y: float = 0.0
    identifier: str = ""
    connects_to_floor: int | None = Field(default=None, alias="connectsToFloor")
    connects_to_floors: list[int] | None = Field(default=None, alias="connectsToFloors")

    @model_validator(mode="before")
    @classmethod
    def normalize_record(cls, data: dict) -> dict:
        """Accept legacy keys and fill display defaults from the id."""
        if not isinstance(data, dict):
            return data

        data = dict(data)

        # Older maps store the scan code under qrCode
        if not data.get("identifier") and data.get("qrCode"):
            data["identifier"] = data["qrCode"]

        node_type = data.get("type")
        if isinstance(node_type, str):
            data["type"] = node_type.strip().lower()

        # null optional fields fall back to their defaults
        for key in [k for k, v in data.items() if v is None and k != "id"]:
            del data[key]

        # ids and codes may be written as bare numbers
        for key in ("id", "name", "info", "identifier"):
            if isinstance(data.get(key), (int, float)):
                data[key] = str(data[key])

        targets = data.get("connectsToFloors", data.get("connects_to_floors"))
        if targets is not None and not isinstance(targets, (list, tuple, set)):
            data["connectsToFloors"] = [targets]
            data.pop("connects_to_floors", None)

        return data

    @model_validator(mode="after")
    def fill_defaults(self) -> "NodeRecord":
        """Default the name and scan code to the node id."""
        if not self.name:
            self.name = self.id
        if not self.identifier:
            self.identifier = self.id
        return self

    @property
    def is_stair(self) -> bool:
        return self.type == NodeType.STAIR

    @property
    def linked_floors(self) -> set[int]:
        """Floors other than its own that a stair record also stands for."""
        if not self.is_stair:
            return set()
        floors = set(self.connects_to_floors or [])
        if self.connects_to_floor is not None:
            floors.add(self.connects_to_floor)
        floors.discard(self.floor)
        return floors

    @property
    def referenced_floors(self) -> set[int]:
        """Every floor number this record mentions."""
        return {self.floor} | self.linked_floors

    def to_record(self) -> dict:
        """Serialize using the persisted key names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ConnectionRecord(BaseModel):
    """An undirected edge between two node ids."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    from_id: str = Field(alias="from")
    to_id: str = Field(alias="to")

    @property
    def pair(self) -> frozenset[str]:
        return frozenset((self.from_id, self.to_id))

    def to_record(self) -> dict:
        return {"from": self.from_id, "to": self.to_id}


class MapDocument(BaseModel):
    """Root model for a persisted building map."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    version: str = MAP_FORMAT_VERSION
    floors: list[int] = Field(default_factory=list)
    pixels_per_meter: float | None = Field(default=None, alias="pixelsPerMeter", gt=0)
    nodes: list[NodeRecord] = Field(default_factory=list)
    connections: list[ConnectionRecord] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def normalize_document(cls, data: dict) -> dict:
        """Normalize the accepted node and connection layouts.

        Nodes may be given as a list of ``[id, record]`` pairs (the saved
        form), a mapping of id to record, or a plain list of records.
        Connection entries without both endpoints are dropped.
        """
        if not isinstance(data, dict):
            return data

        data = dict(data)

        if data.get("version") is not None:
            data["version"] = str(data["version"])

        nodes = data.get("nodes") or []
        if isinstance(nodes, dict):
            nodes = list(nodes.items())

        normalized_nodes = []
        for entry in nodes:
            if isinstance(entry, (list, tuple)) and len(entry) == 2:
                node_id, record = entry
                if isinstance(record, dict):
                    record = dict(record)
                    record["id"] = str(node_id)
                normalized_nodes.append(record)
            else:
                normalized_nodes.append(entry)
        data["nodes"] = normalized_nodes

        connections = data.get("connections") or []
        if not isinstance(connections, list):
            connections = []

        normalized_connections = []
        for conn in connections:
            if isinstance(conn, dict) and conn.get("from") and conn.get("to"):
                normalized_connections.append(
                    {"from": str(conn["from"]), "to": str(conn["to"])}
                )
            elif isinstance(conn, (list, tuple)) and len(conn) == 2:
                normalized_connections.append(
                    {"from": str(conn[0]), "to": str(conn[1])}
                )
            else:
                logger.warning("Ignoring malformed connection entry: %r", conn)
        data["connections"] = normalized_connections

        if data.get("floors") is None:
            data.pop("floors", None)

        return data

    def get_node(self, node_id: str) -> NodeRecord | None:
        """Get a node record by id (last one wins for repeated ids)."""
        found = None
        for node in self.nodes:
            if node.id == node_id:
                found = node
        return found

    def get_all_node_ids(self) -> list[str]:
        """Get all node ids in document order."""
        return [node.id for node in self.nodes]

    def referenced_floors(self) -> set[int]:
        """Every floor mentioned by any node."""
        floors: set[int] = set()
        for node in self.nodes:
            floors |= node.referenced_floors
        return floors
