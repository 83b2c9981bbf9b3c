"""Unit tests for the layout module."""

import pytest

from levelpath.geometry import Point
from levelpath.layout import LayoutResult, LevelLayout, compute_layout
from levelpath.models import ConfigurationError, LayoutConstants


class TestLayoutResult:
    """Tests for LayoutResult dataclass."""

    def test_defaults(self):
        """Test LayoutResult default values."""
        result = LayoutResult()
        assert result.centers == ()
        assert result.total_height == 0.0
        assert result.row_starts == ()

    def test_top_left(self):
        """top_left subtracts half the node size from the centre."""
        result = LayoutResult(centers=(Point(200, 100),), node_size=60)
        assert result.top_left(0) == Point(170, 70)

    def test_top_left_out_of_range(self):
        """Negative and past-the-end indices are rejected, not wrapped."""
        result = LayoutResult(centers=(Point(200, 100), Point(200, 220)), node_size=60)
        with pytest.raises(IndexError):
            result.top_left(-1)
        with pytest.raises(IndexError):
            result.top_left(2)


class TestLevelLayout:
    """Tests for LevelLayout class."""

    def test_single_to_double(self, layout_engine, single_to_double):
        """A single row sits on the centre line, a double row straddles it."""
        result = layout_engine.layout(single_to_double, 400)
        assert result.centers == (
            Point(200, 100),
            Point(140, 220),
            Point(260, 220),
        )
        assert result.center_x == 200
        assert result.total_height == 330

    def test_single_row(self, layout_engine, make_graph):
        """One row uses zero inter-row gaps for the height."""
        result = layout_engine.layout(make_graph(2), 400)
        assert len(result.centers) == 2
        assert result.total_height == 100 + 60 + 50

    def test_center_count_matches_nodes(self, layout_engine, make_graph):
        """Exactly one centre per node, in row-major order."""
        graph = make_graph(1, 2, 1, 1, 2, 2, 1)
        result = layout_engine.layout(graph, 360)
        assert len(result.centers) == graph.node_count
        ys = [c.y for c in result.centers]
        assert ys == sorted(ys)
        for row_idx, row in enumerate(graph.rows):
            row_centers = result.centers[
                graph.row_starts[row_idx]:graph.row_starts[row_idx] + len(row)
            ]
            xs = [c.x for c in row_centers]
            assert xs == sorted(xs)

    def test_rows_are_centred(self, layout_engine, make_graph):
        """Each row is symmetric around the viewport centre."""
        graph = make_graph(2, 1, 2)
        result = layout_engine.layout(graph, 500)
        for row_idx, row in enumerate(graph.rows):
            start = graph.row_starts[row_idx]
            xs = [result.centers[start + i].x for i in range(len(row))]
            assert sum(xs) / len(xs) == pytest.approx(250)

    def test_row_spacing(self, layout_engine, make_graph):
        """Rows advance by the vertical gap from the top margin."""
        result = layout_engine.layout(make_graph(1, 1, 1), 400)
        assert [c.y for c in result.centers] == [100, 220, 340]
        assert result.total_height == 100 + 2 * 120 + 60 + 50

    def test_empty_row_keeps_its_slot(self, layout_engine, make_graph):
        """An empty row adds no centres but still takes vertical space."""
        graph = make_graph(1, 0, 1)
        result = layout_engine.layout(graph, 400)
        assert result.centers == (Point(200, 100), Point(200, 340))
        assert result.row_starts == (0, 1, 1)

    def test_empty_graph(self, layout_engine, make_graph):
        """No rows still yields a valid height."""
        result = layout_engine.layout(make_graph(), 400)
        assert result.centers == ()
        assert result.total_height == 100 + 60 + 50

    def test_custom_constants(self, make_graph):
        """Spacing follows the given constants."""
        engine = LevelLayout(
            LayoutConstants(node_size=40, horizontal_gap=20, vertical_gap=100, top_margin=50)
        )
        result = engine.layout(make_graph(2, 1), 300)
        # Row width 100, first centre at 150 - 50 + 20
        assert result.centers == (Point(120, 50), Point(180, 50), Point(150, 150))

    def test_zero_width(self, layout_engine, make_graph):
        """A zero-width viewport only moves the centre line."""
        result = layout_engine.layout(make_graph(2), 0)
        assert result.centers == (Point(-60, 100), Point(60, 100))

    def test_negative_width_rejected(self, layout_engine, make_graph):
        with pytest.raises(ConfigurationError):
            layout_engine.layout(make_graph(1), -1)

    def test_recomputes_on_width_change(self, layout_engine, single_to_double):
        """A new width shifts every centre horizontally."""
        narrow = layout_engine.layout(single_to_double, 300)
        wide = layout_engine.layout(single_to_double, 500)
        for a, b in zip(narrow.centers, wide.centers):
            assert b.x - a.x == 100
            assert b.y == a.y

    def test_idempotent(self, layout_engine, single_to_double):
        """Same inputs, equal results."""
        assert layout_engine.layout(single_to_double, 400) == layout_engine.layout(
            single_to_double, 400
        )

    def test_row_width(self, layout_engine):
        assert layout_engine.row_width(0) == 0
        assert layout_engine.row_width(1) == 60
        assert layout_engine.row_width(2) == 180


class TestComputeLayout:
    """Tests for the compute_layout convenience function."""

    def test_defaults(self, single_to_double):
        result = compute_layout(single_to_double)
        assert result.viewport_width == 400
        assert result.centers[0] == Point(200, 100)
