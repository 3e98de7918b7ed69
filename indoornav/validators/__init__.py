"""Validators for structural checks of indoor maps."""

from .base import Severity, ValidationIssue, ValidationResult
from .orphan_detector import check_isolated_nodes
from .reachability import check_connectivity, check_stair_encoding
from .reference_integrity import check_identifiers, check_reference_integrity
from .runner import run_validators, validate_map_file

__all__ = [
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    "check_isolated_nodes",
    "check_connectivity",
    "check_stair_encoding",
    "check_identifiers",
    "check_reference_integrity",
    "run_validators",
    "validate_map_file",
]
