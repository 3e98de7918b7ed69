"""Validation runner that orchestrates all map validators."""

from pathlib import Path

from ..graph.builder import build_graph
from ..graph.floor_graph import FloorGraph
from ..schema.loader import parse_map
from ..schema.models import MapDocument
from .base import ValidationResult
from .orphan_detector import check_isolated_nodes
from .reachability import check_connectivity, check_stair_encoding
from .reference_integrity import check_identifiers, check_reference_integrity


def run_validators(document: MapDocument, graph: FloorGraph) -> ValidationResult:
    """Run all validators on a map.

    Args:
        document: The parsed map document.
        graph: The graph built from it.

    Returns:
        Combined ValidationResult from all validators.
    """
    result = ValidationResult()

    # Reference integrity first (most fundamental)
    result.merge(check_reference_integrity(document, graph))
    result.merge(check_identifiers(graph))

    result.merge(check_isolated_nodes(graph))
    result.merge(check_connectivity(graph))
    result.merge(check_stair_encoding(graph))

    return result


def validate_map_file(path: str | Path) -> ValidationResult:
    """Load and validate a map file.

    Raises:
        MapLoadError: If the file cannot be loaded.
        MapValidationError: If the map fails schema validation.
    """
    document = parse_map(path)
    graph = build_graph(document)
    return run_validators(document, graph)
