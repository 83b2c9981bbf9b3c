"""
Geometry and path primitives for level map connectors.

Every connector produced by the router is one of three immutable primitives:

- StraightSegment: a line between two nodes of the same row
- CubicCurve: the fallback vertical S-bend
- RoundedZigZag: a line-arc-line-arc-line jog along a vertical lane

Each primitive maps directly onto drawing commands (svg_path) and can be
flattened into a polyline for raster back-ends that have no native curve or
arc support (flatten).
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, NamedTuple, Tuple, Union


class Point(NamedTuple):
    """A 2D coordinate in layout units (y grows downwards)."""

    x: float
    y: float


class TurnDirection(Enum):
    """Sense of the corner arcs of a zig-zag, in screen (y-down) space."""

    CLOCKWISE = "clockwise"
    COUNTER_CLOCKWISE = "counter_clockwise"


def _fmt(value: float) -> str:
    """Format a coordinate compactly for path strings."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def _arc_points(
    center: Point, radius: float, start_angle: float, end_angle: float, segments: int
) -> List[Point]:
    """Sample an arc, excluding its first point."""
    points = []
    for step in range(1, segments + 1):
        angle = start_angle + (end_angle - start_angle) * step / segments
        points.append(
            Point(center.x + radius * math.cos(angle), center.y + radius * math.sin(angle))
        )
    return points


@dataclass(frozen=True)
class StraightSegment:
    """A straight connector, used between the two nodes of a row."""

    start: Point
    end: Point

    kind = "straight"

    def svg_path(self) -> str:
        return (
            f"M {_fmt(self.start.x)} {_fmt(self.start.y)} "
            f"L {_fmt(self.end.x)} {_fmt(self.end.y)}"
        )

    def flatten(self, segments: int = 1) -> List[Point]:
        return [self.start, self.end]


@dataclass(frozen=True)
class CubicCurve:
    """
    Cubic Bezier connector.

    The router places both control points at the vertical midpoint, each
    directly above or below its own endpoint, which yields a vertical S-bend.
    """

    start: Point
    control1: Point
    control2: Point
    end: Point

    kind = "cubic"

    def point_at(self, t: float) -> Point:
        """Evaluate the curve at parameter t in [0, 1]."""
        u = 1.0 - t
        a = u * u * u
        b = 3 * u * u * t
        c = 3 * u * t * t
        d = t * t * t
        return Point(
            a * self.start.x + b * self.control1.x + c * self.control2.x + d * self.end.x,
            a * self.start.y + b * self.control1.y + c * self.control2.y + d * self.end.y,
        )

    def svg_path(self) -> str:
        return (
            f"M {_fmt(self.start.x)} {_fmt(self.start.y)} "
            f"C {_fmt(self.control1.x)} {_fmt(self.control1.y)} "
            f"{_fmt(self.control2.x)} {_fmt(self.control2.y)} "
            f"{_fmt(self.end.x)} {_fmt(self.end.y)}"
        )

    def flatten(self, segments: int = 24) -> List[Point]:
        segments = max(1, segments)
        return [self.point_at(step / segments) for step in range(segments + 1)]


@dataclass(frozen=True)
class RoundedZigZag:
    """
    Rounded "over-and-down" connector.

    The path leaves the start node horizontally towards a vertical lane at
    lane_x, turns down with a rounded corner, runs along the lane, turns
    again and travels horizontally into the end node. A clockwise turn means
    the lane lies to the right of the path's horizontal legs
    (right-down-left); counter-clockwise means left-down-right.

    Attributes:
        start: Centre of the node the connector leaves.
        end: Centre of the node the connector enters (on a lower row).
        lane_x: X coordinate of the vertical lane.
        corner_radius: Radius of both corner arcs.
        turn: Sense of both corner arcs.
    """

    start: Point
    end: Point
    lane_x: float
    corner_radius: float
    turn: TurnDirection

    kind = "zigzag"

    @property
    def is_right_lane(self) -> bool:
        return self.turn is TurnDirection.CLOCKWISE

    @property
    def _approach(self) -> float:
        """Signed horizontal distance from the lane to where the corners begin."""
        return -self.corner_radius if self.is_right_lane else self.corner_radius

    def waypoints(self) -> Tuple[Point, Point, Point, Point, Point, Point]:
        """
        Return the six points joined by the path.

        Order: start, first arc start, first arc end, second arc start,
        second arc end, end.
        """
        r = self.corner_radius
        corner_x = self.lane_x + self._approach
        return (
            self.start,
            Point(corner_x, self.start.y),
            Point(self.lane_x, self.start.y + r),
            Point(self.lane_x, self.end.y - r),
            Point(corner_x, self.end.y),
            self.end,
        )

    def svg_path(self) -> str:
        start, arc1_from, arc1_to, arc2_from, arc2_to, end = self.waypoints()
        r = _fmt(self.corner_radius)
        sweep = 1 if self.turn is TurnDirection.CLOCKWISE else 0
        return " ".join(
            [
                f"M {_fmt(start.x)} {_fmt(start.y)}",
                f"L {_fmt(arc1_from.x)} {_fmt(arc1_from.y)}",
                f"A {r} {r} 0 0 {sweep} {_fmt(arc1_to.x)} {_fmt(arc1_to.y)}",
                f"L {_fmt(arc2_from.x)} {_fmt(arc2_from.y)}",
                f"A {r} {r} 0 0 {sweep} {_fmt(arc2_to.x)} {_fmt(arc2_to.y)}",
                f"L {_fmt(end.x)} {_fmt(end.y)}",
            ]
        )

    def flatten(self, segments: int = 12) -> List[Point]:
        segments = max(1, segments)
        start, arc1_from, _, arc2_from, _, end = self.waypoints()
        r = self.corner_radius
        corner_x = self.lane_x + self._approach

        # Arc centres sit one radius inside each corner, angles in y-down space.
        top_center = Point(corner_x, self.start.y + r)
        bottom_center = Point(corner_x, self.end.y - r)
        if self.is_right_lane:
            top = _arc_points(top_center, r, -math.pi / 2, 0.0, segments)
            bottom = _arc_points(bottom_center, r, 0.0, math.pi / 2, segments)
        else:
            top = _arc_points(top_center, r, -math.pi / 2, -math.pi, segments)
            bottom = _arc_points(bottom_center, r, math.pi, math.pi / 2, segments)

        return [start, arc1_from, *top, arc2_from, *bottom, end]


PathPrimitive = Union[StraightSegment, CubicCurve, RoundedZigZag]
