"""Text and JSON output for the command line."""

from .formatter import format_nodes, format_route, format_validation_result

__all__ = [
    "format_nodes",
    "format_route",
    "format_validation_result",
]
