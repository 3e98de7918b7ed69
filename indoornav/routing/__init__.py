"""Routing: path search, distances, narration and render payloads."""

from .distance import DistanceCalculator
from .errors import RouteValidationError
from .instructions import generate_instructions
from .models import (
    CostMode,
    FloorDirection,
    Instruction,
    InstructionKind,
    RoutePlan,
    Segment,
    SegmentClass,
)
from .navigation import AutoAdvance, NavigationSession
from .path_finder import find_route, route_cost
from .phrasing import describe_instruction, describe_route
from .planner import plan_route, validate_route_request
from .views import FloorView, floor_view

__all__ = [
    "DistanceCalculator",
    "RouteValidationError",
    "generate_instructions",
    "CostMode",
    "FloorDirection",
    "Instruction",
    "InstructionKind",
    "RoutePlan",
    "Segment",
    "SegmentClass",
    "AutoAdvance",
    "NavigationSession",
    "find_route",
    "route_cost",
    "describe_instruction",
    "describe_route",
    "plan_route",
    "validate_route_request",
    "FloorView",
    "floor_view",
]
