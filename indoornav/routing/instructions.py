"""Turn a resolved route into narration steps."""

from typing import Sequence

from ..graph.floor_graph import FloorGraph
from .distance import DistanceCalculator
from .models import FloorDirection, Instruction, InstructionKind


def generate_instructions(
    graph: FloorGraph,
    route: Sequence[str],
    calculator: DistanceCalculator | None = None,
) -> list[Instruction]:
    """Generate one instruction per route node.

    The first node yields START (carrying the total route distance) and
    the last yields ARRIVE. An interior stair whose next node is on
    another floor yields CHANGE_FLOOR; every other interior node yields
    TRAVERSE with the distance to the next node.

    Floor changes are read off consecutive node floors only, so both
    stairwell encodings narrate the same way.

    Args:
        graph: The map graph.
        route: Node ids from start to end, as returned by ``find_route``.
        calculator: Distance calculator. Defaults to the graph's scale.

    Returns:
        The instructions, or an empty list for routes shorter than two
        nodes.

    Raises:
        KeyError: If a route id is not in the graph.
    """
    if len(route) < 2:
        return []

    if calculator is None:
        calculator = DistanceCalculator.for_graph(graph)

    nodes = []
    for node_id in route:
        node = graph.get_node(node_id)
        if node is None:
            raise KeyError(f"Route references unknown node '{node_id}'")
        nodes.append(node)

    instructions = [
        Instruction(
            kind=InstructionKind.START,
            node_id=nodes[0].id,
            floor=nodes[0].floor,
            distance=calculator.path_distance(graph, route),
            node_type=nodes[0].type,
            next_node_id=nodes[1].id,
        )
    ]

    for current, following in zip(nodes[1:-1], nodes[2:]):
        if current.is_stair and current.floor != following.floor:
            direction = (
                FloorDirection.ASCEND
                if following.floor > current.floor
                else FloorDirection.DESCEND
            )
            instructions.append(
                Instruction(
                    kind=InstructionKind.CHANGE_FLOOR,
                    node_id=current.id,
                    floor=current.floor,
                    target_floor=following.floor,
                    node_type=current.type,
                    direction=direction,
                    next_node_id=following.id,
                )
            )
        else:
            instructions.append(
                Instruction(
                    kind=InstructionKind.TRAVERSE,
                    node_id=current.id,
                    floor=current.floor,
                    distance=calculator.edge_distance(current, following),
                    node_type=current.type,
                    next_node_id=following.id,
                )
            )

    last = nodes[-1]
    instructions.append(
        Instruction(
            kind=InstructionKind.ARRIVE,
            node_id=last.id,
            floor=last.floor,
            node_type=last.type,
        )
    )
    return instructions
