"""Data models for routes and narration."""

from dataclasses import dataclass, field
from enum import Enum

from ..schema.models import NodeType


class CostMode(str, Enum):
    """Edge cost used by the path finder."""

    HOPS = "hops"  # every connection costs 1
    DISTANCE = "distance"  # physical distance in meters


class SegmentClass(str, Enum):
    """Distance bins for route segments."""

    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class InstructionKind(str, Enum):
    """Text-independent kind of a narration step."""

    START = "start"
    TRAVERSE = "traverse"  # same-floor movement to the next node
    CHANGE_FLOOR = "change_floor"
    ARRIVE = "arrive"


class FloorDirection(str, Enum):
    ASCEND = "ascend"
    DESCEND = "descend"


@dataclass(frozen=True)
class Segment:
    """One connection within a route."""

    from_id: str
    to_id: str
    distance: int  # meters; 0 across floors
    classification: SegmentClass
    crosses_floors: bool = False


@dataclass(frozen=True)
class Instruction:
    """A single narration step.

    ``distance`` is the total route distance for START and the distance to
    the next node for TRAVERSE. ``target_floor`` and ``direction`` are set
    for CHANGE_FLOOR only.
    """

    kind: InstructionKind
    node_id: str
    floor: int
    target_floor: int | None = None
    distance: int | None = None
    node_type: NodeType | None = None
    direction: FloorDirection | None = None
    next_node_id: str | None = None

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "node_id": self.node_id,
            "floor": self.floor,
            "target_floor": self.target_floor,
            "distance": self.distance,
            "node_type": self.node_type.value if self.node_type else None,
            "direction": self.direction.value if self.direction else None,
            "next_node_id": self.next_node_id,
        }


@dataclass
class RoutePlan:
    """Result of planning a route between two nodes.

    An empty ``route`` means the nodes are valid but not connected.
    """

    start_id: str
    end_id: str
    cost_mode: CostMode
    route: list[str] = field(default_factory=list)
    segments: list[Segment] = field(default_factory=list)
    instructions: list[Instruction] = field(default_factory=list)
    total_distance: int = 0

    @property
    def found(self) -> bool:
        return len(self.route) > 0

    @property
    def floor_changes(self) -> int:
        return sum(1 for i in self.instructions if i.kind == InstructionKind.CHANGE_FLOOR)
