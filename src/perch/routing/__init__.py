"""Routing — route pattern compilation and ordered first-match dispatch.

Routes are compiled once at construction and never change afterwards.
"""

from perch.routing.pattern import Segment, SegmentKind, parse_path
from perch.routing.route import Route, RouteMatch
from perch.routing.router import Router

__all__ = ["Route", "RouteMatch", "Router", "Segment", "SegmentKind", "parse_path"]
