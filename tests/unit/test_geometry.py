"""Unit tests for the geometry module."""

import pytest

from levelpath.geometry import (
    CubicCurve,
    Point,
    RoundedZigZag,
    StraightSegment,
    TurnDirection,
)


@pytest.fixture
def right_zigzag():
    """Right-down-left jog from (200, 100) to (260, 220) along x=320."""
    return RoundedZigZag(
        start=Point(200, 100),
        end=Point(260, 220),
        lane_x=320,
        corner_radius=50,
        turn=TurnDirection.CLOCKWISE,
    )


@pytest.fixture
def left_zigzag():
    """Left-down-right jog from (140, 220) to (200, 340) along x=80."""
    return RoundedZigZag(
        start=Point(140, 220),
        end=Point(200, 340),
        lane_x=80,
        corner_radius=50,
        turn=TurnDirection.COUNTER_CLOCKWISE,
    )


class TestPoint:
    """Tests for Point."""

    def test_point_is_tuple(self):
        """Points unpack like (x, y) tuples."""
        x, y = Point(1.5, 2.0)
        assert (x, y) == (1.5, 2.0)


class TestStraightSegment:
    """Tests for StraightSegment."""

    def test_kind(self):
        assert StraightSegment(Point(0, 0), Point(1, 0)).kind == "straight"

    def test_svg_path(self):
        segment = StraightSegment(Point(140, 220), Point(260, 220))
        assert segment.svg_path() == "M 140 220 L 260 220"

    def test_flatten(self):
        segment = StraightSegment(Point(0, 0), Point(3, 4))
        assert segment.flatten() == [Point(0, 0), Point(3, 4)]


class TestCubicCurve:
    """Tests for CubicCurve."""

    @pytest.fixture
    def curve(self):
        return CubicCurve(Point(200, 100), Point(200, 160), Point(260, 160), Point(260, 220))

    def test_endpoints(self, curve):
        """The curve passes through its endpoints."""
        assert curve.point_at(0) == Point(200, 100)
        assert curve.point_at(1) == Point(260, 220)

    def test_midpoint(self, curve):
        """The S-bend is symmetric around its middle."""
        mid = curve.point_at(0.5)
        assert mid.x == pytest.approx(230)
        assert mid.y == pytest.approx(160)

    def test_svg_path(self, curve):
        assert curve.svg_path() == "M 200 100 C 200 160 260 160 260 220"

    def test_flatten(self, curve):
        points = curve.flatten(10)
        assert len(points) == 11
        assert points[0] == curve.start
        assert points[-1] == curve.end

    def test_svg_path_formats_fractions(self):
        curve = CubicCurve(Point(0.5, 0), Point(0.5, 1.25), Point(-0.0, 1.25), Point(0, 2.5))
        assert curve.svg_path() == "M 0.5 0 C 0.5 1.25 0 1.25 0 2.5"


class TestRoundedZigZag:
    """Tests for RoundedZigZag."""

    def test_kind(self, right_zigzag):
        assert right_zigzag.kind == "zigzag"

    def test_right_lane_waypoints(self, right_zigzag):
        """Corners sit one radius inside the lane on the approach side."""
        assert right_zigzag.is_right_lane
        assert right_zigzag.waypoints() == (
            Point(200, 100),
            Point(270, 100),
            Point(320, 150),
            Point(320, 170),
            Point(270, 220),
            Point(260, 220),
        )

    def test_left_lane_waypoints(self, left_zigzag):
        assert not left_zigzag.is_right_lane
        assert left_zigzag.waypoints() == (
            Point(140, 220),
            Point(130, 220),
            Point(80, 270),
            Point(80, 290),
            Point(130, 340),
            Point(200, 340),
        )

    def test_right_svg_path_uses_clockwise_arcs(self, right_zigzag):
        assert right_zigzag.svg_path() == (
            "M 200 100 L 270 100 A 50 50 0 0 1 320 150 "
            "L 320 170 A 50 50 0 0 1 270 220 L 260 220"
        )

    def test_left_svg_path_uses_counter_clockwise_arcs(self, left_zigzag):
        assert left_zigzag.svg_path() == (
            "M 140 220 L 130 220 A 50 50 0 0 0 80 270 "
            "L 80 290 A 50 50 0 0 0 130 340 L 200 340"
        )

    def test_flatten_passes_through_waypoints(self, right_zigzag):
        """The polyline starts, ends and turns at the waypoints."""
        points = right_zigzag.flatten(4)
        assert len(points) == 12
        assert points[0] == right_zigzag.start
        assert points[-1] == right_zigzag.end
        arc1_end = points[5]
        assert arc1_end.x == pytest.approx(320)
        assert arc1_end.y == pytest.approx(150)
        assert points[6] == Point(320, 170)

    def test_flatten_arcs_stay_on_circle(self, left_zigzag):
        """Sampled arc points are one radius from the arc centre."""
        points = left_zigzag.flatten(6)
        top_arc = points[2:8]
        for p in top_arc:
            distance = ((p.x - 130) ** 2 + (p.y - 270) ** 2) ** 0.5
            assert distance == pytest.approx(50)

    def test_flatten_left_arc_bulges_outwards(self, left_zigzag):
        """Counter-clockwise corners bend away from the centre line."""
        points = left_zigzag.flatten(2)
        midpoint_of_first_arc = points[2]
        assert midpoint_of_first_arc.x < 130
        assert midpoint_of_first_arc.y < 270
