"""Routing — ordered per-method route table with segment matching.

Routes are registered during setup and frozen into an immutable table
when the app freezes.
"""

from stooge.routing.route import PathSegment, Route, RouteMatch, SegmentKind
from stooge.routing.router import METHODS, Router, parse_pattern

__all__ = [
    "METHODS",
    "PathSegment",
    "Route",
    "RouteMatch",
    "Router",
    "SegmentKind",
    "parse_pattern",
]
