"""English phrasing for narration steps."""

from ..graph.floor_graph import FloorGraph
from ..schema.models import NodeType
from .models import FloorDirection, Instruction, InstructionKind

TRAVERSE_VERBS = {
    NodeType.DOOR: "Go through",
    NodeType.STAIR: "Use",
    NodeType.CORRIDOR: "Follow",
    NodeType.EXIT: "Pass",
}


def _name(graph: FloorGraph, node_id: str | None) -> str:
    if node_id is None:
        return ""
    node = graph.get_node(node_id)
    return node.name if node is not None else node_id


def describe_instruction(graph: FloorGraph, instruction: Instruction) -> str:
    """Render an instruction as a sentence."""
    name = _name(graph, instruction.node_id)

    if instruction.kind == InstructionKind.START:
        return f"Start at {name}. The route is about {instruction.distance or 0} m long."

    if instruction.kind == InstructionKind.ARRIVE:
        return f"You have arrived at {name}."

    if instruction.kind == InstructionKind.CHANGE_FLOOR:
        way = "up" if instruction.direction == FloorDirection.ASCEND else "down"
        return f"Take {name} {way} to floor {instruction.target_floor}."

    verb = TRAVERSE_VERBS.get(instruction.node_type, "Walk through")
    text = f"{verb} {name}"
    if instruction.next_node_id:
        text += f" towards {_name(graph, instruction.next_node_id)}"
    if instruction.distance:
        text += f", about {instruction.distance} m"
    return text + "."


def describe_route(graph: FloorGraph, instructions: list[Instruction]) -> list[str]:
    return [describe_instruction(graph, i) for i in instructions]
