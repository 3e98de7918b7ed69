"""Structural graph exceptions.

These are raised synchronously by direct mutations of a FloorGraph and
always leave the graph unchanged.
"""


class GraphError(Exception):
    """Base exception for graph mutation errors."""

    pass


class InvalidEndpoint(GraphError):
    """Raised for self-loops or references to nonexistent node ids."""

    def __init__(self, message: str, node_id: str | None = None):
        self.node_id = node_id
        super().__init__(message)


class DuplicateEdge(GraphError):
    """Raised when an undirected edge already exists in either direction."""

    def __init__(self, a: str, b: str):
        self.pair = (a, b)
        super().__init__(f"Connection between '{a}' and '{b}' already exists")


class UnknownFloor(GraphError):
    """Raised when a floor number is outside the graph's floor set."""

    def __init__(self, message: str, floor: int | None = None):
        self.floor = floor
        super().__init__(message)
