"""Output formatting for validation results, routes and node listings."""

import json
from typing import Literal

from ..graph.floor_graph import FloorGraph
from ..routing.models import InstructionKind, RoutePlan
from ..routing.phrasing import describe_instruction
from ..schema.models import NodeRecord
from ..validators.base import Severity, ValidationIssue, ValidationResult

OutputFormat = Literal["text", "json"]

SEVERITY_SYMBOLS = {
    Severity.ERROR: "✘",
    Severity.WARNING: "⚠",
    Severity.INFO: "ℹ",
}


def format_validation_result(
    result: ValidationResult,
    format: OutputFormat = "text",
) -> str:
    """Format a validation result for output.

    Args:
        result: The validation result to format.
        format: Output format ("text" or "json").

    Returns:
        Formatted string representation.
    """
    if format == "json":
        return _format_validation_json(result)
    return _format_validation_text(result)


def _format_validation_text(result: ValidationResult) -> str:
    errors = result.errors
    warnings = result.warnings

    sections = [("ERRORS", errors), ("WARNINGS", warnings)]
    # notes only show up when a map has some
    if result.infos:
        sections.append(("NOTES", result.infos))

    lines: list[str] = []
    for title, issues in sections:
        lines.append(f"{title}:")
        lines.extend(f"  {_format_issue_text(i)}" for i in issues)
        if not issues:
            lines.append("  (none)")
        lines.append("")

    if not result.is_valid:
        summary = f"Validation failed: {len(errors)} error(s), {len(warnings)} warning(s)"
    elif warnings:
        summary = f"Validation passed with {len(warnings)} warning(s)"
    else:
        summary = "Validation passed"
    lines.append(summary)

    return "\n".join(lines)


def _format_issue_text(issue: ValidationIssue) -> str:
    location = f"{issue.location} " if issue.location else ""
    return f"{SEVERITY_SYMBOLS[issue.severity]} {issue.code}: {location}{issue.message}"


def _format_validation_json(result: ValidationResult) -> str:
    data = {
        "valid": result.is_valid,
        "error_count": len(result.errors),
        "warning_count": len(result.warnings),
        "issues": [
            {
                "code": issue.code,
                "message": issue.message,
                "severity": issue.severity.value,
                "node": issue.node,
                "floor": issue.floor,
                "details": issue.details,
            }
            for issue in result.issues
        ],
    }
    return json.dumps(data, indent=2)


def format_route(plan: RoutePlan, graph: FloorGraph, format: OutputFormat = "text") -> str:
    """Format a planned route with its narration."""
    if format == "json":
        data = {
            "found": plan.found,
            "start": plan.start_id,
            "end": plan.end_id,
            "cost_mode": plan.cost_mode.value,
            "route": plan.route,
            "total_distance": plan.total_distance,
            "floor_changes": plan.floor_changes,
            "segments": [
                {
                    "from": seg.from_id,
                    "to": seg.to_id,
                    "distance": seg.distance,
                    "classification": seg.classification.value,
                    "crosses_floors": seg.crosses_floors,
                }
                for seg in plan.segments
            ],
            "instructions": [
                dict(i.to_dict(), text=describe_instruction(graph, i))
                for i in plan.instructions
            ],
        }
        return json.dumps(data, indent=2, ensure_ascii=False)

    if not plan.found:
        return f"No route from {plan.start_id} to {plan.end_id}"

    lines = [
        f"Route {plan.start_id} -> {plan.end_id}: {len(plan.route)} stop(s), "
        f"about {plan.total_distance} m"
    ]
    total = len(plan.instructions)
    for index, instruction in enumerate(plan.instructions, start=1):
        marker = "↕" if instruction.kind == InstructionKind.CHANGE_FLOOR else " "
        lines.append(
            f"  {index}/{total} {marker} [floor {instruction.floor}] "
            f"{describe_instruction(graph, instruction)}"
        )
    return "\n".join(lines)


def format_nodes(nodes: list[NodeRecord], format: OutputFormat = "text") -> str:
    """Format a list of nodes."""
    if format == "json":
        return json.dumps([node.to_record() for node in nodes], indent=2, ensure_ascii=False)

    if not nodes:
        return "(no nodes)"
    return "\n".join(
        f"{node.id:<20} {node.type.value:<9} floor {node.floor:<3} {node.name}"
        for node in nodes
    )
