"""Map connectivity validators."""

from ..graph.floor_graph import FloorGraph
from ..graph.stairs import find_legacy_stairs
from .base import ValidationResult


def check_connectivity(graph: FloorGraph) -> ValidationResult:
    """Check that every node can reach every other node.

    Isolated nodes are reported by ``check_isolated_nodes``; this check
    only flags separate groups of two or more connected nodes.

    Args:
        graph: The map graph to check.

    Returns:
        ValidationResult with a warning per detached group.
    """
    result = ValidationResult()

    groups = [c for c in graph.components() if len(c) > 1]
    if len(groups) < 2:
        return result

    main = groups[0]
    for group in groups[1:]:
        members = sorted(group)
        result.add_warning(
            code="DISCONNECTED_MAP",
            message=(
                f"{len(members)} node(s) cannot be reached from the main group "
                f"of {len(main)} node(s)"
            ),
            node=members[0],
            nodes=members,
        )

    return result


def check_stair_encoding(graph: FloorGraph) -> ValidationResult:
    """Report stairs stored in the single-record encoding.

    They route correctly but are rewritten on save.
    """
    result = ValidationResult()

    for stair in find_legacy_stairs(graph):
        result.add_info(
            code="LEGACY_STAIR_ENCODING",
            message=(
                f"Stair '{stair.name}' also stands for floor(s) "
                f"{sorted(stair.linked_floors)}"
            ),
            node=stair.id,
            floor=stair.floor,
        )

    return result
