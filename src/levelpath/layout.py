"""
Layout module for level maps.

Places every node of a LevelGraph on a vertical track centred in the
viewport. Rows are stacked at a fixed vertical pitch; the nodes of a
two-node row are spread symmetrically around the centre line.

The flat, row-major order of the resulting centres is the contract the path
router depends on: flat index i is the i-th node when reading rows top to
bottom and nodes left to right.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from .geometry import Point
from .models import ConfigurationError, LayoutConstants, LevelGraph

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutResult:
    """
    Result of one layout pass.

    Attributes:
        centers: Node centres in row-major order.
        total_height: Height of the scrollable content.
        center_x: Horizontal centre line of the viewport.
        viewport_width: Width the pass was computed for.
        row_starts: Flat index of the first node of each row.
        node_size: Node diameter used for the pass.
    """

    centers: Tuple[Point, ...] = ()
    total_height: float = 0.0
    center_x: float = 0.0
    viewport_width: float = 0.0
    row_starts: Tuple[int, ...] = ()
    node_size: float = 0.0

    def top_left(self, index: int) -> Point:
        """
        Top-left corner of the node box at a flat index.

        Raises:
            IndexError: If the index is outside the laid-out nodes.
        """
        if not 0 <= index < len(self.centers):
            raise IndexError(f"Flat index {index} out of range")
        center = self.centers[index]
        half = self.node_size / 2
        return Point(center.x - half, center.y - half)


class LevelLayout:
    """
    Computes node centres for a level graph.

    Example:
        >>> engine = LevelLayout(LayoutConstants())
        >>> result = engine.layout(graph, viewport_width=400)
        >>> result.centers[0]
        Point(x=200.0, y=100.0)
    """

    def __init__(self, constants: Optional[LayoutConstants] = None):
        self.constants = constants if constants is not None else LayoutConstants()

    def row_width(self, length: int) -> float:
        """Width spanned by a row of the given length."""
        if length == 0:
            return 0.0
        c = self.constants
        return length * c.node_size + (length - 1) * c.horizontal_gap

    def total_height(self, row_count: int) -> float:
        """Content height for a graph with row_count rows."""
        c = self.constants
        gaps = max(row_count - 1, 0)
        return c.top_margin + gaps * c.vertical_gap + c.node_size + c.bottom_padding

    def layout(self, graph: LevelGraph, viewport_width: float) -> LayoutResult:
        """
        Compute the layout for a graph at a given viewport width.

        Args:
            graph: The rows to place
            viewport_width: Width of the hosting viewport

        Returns:
            LayoutResult with one centre per node in row-major order

        Raises:
            ConfigurationError: If viewport_width is negative
        """
        if viewport_width < 0:
            raise ConfigurationError(
                f"viewport_width must not be negative, got {viewport_width}"
            )

        c = self.constants
        center_x = viewport_width / 2
        centers = []

        for row_idx, row in enumerate(graph.rows):
            start_x = center_x - self.row_width(len(row)) / 2 + c.node_size / 2
            y = c.top_margin + row_idx * c.vertical_gap
            for pos in range(len(row)):
                centers.append(
                    Point(float(start_x + pos * (c.node_size + c.horizontal_gap)), float(y))
                )

        result = LayoutResult(
            centers=tuple(centers),
            total_height=float(self.total_height(graph.row_count)),
            center_x=float(center_x),
            viewport_width=float(viewport_width),
            row_starts=graph.row_starts,
            node_size=float(c.node_size),
        )
        logger.debug(
            "Laid out %d nodes in %d rows (width=%s, height=%s)",
            len(centers),
            graph.row_count,
            viewport_width,
            result.total_height,
        )
        return result


def compute_layout(
    graph: LevelGraph,
    constants: Optional[LayoutConstants] = None,
    viewport_width: float = 400.0,
) -> LayoutResult:
    """
    Convenience function to lay out a level graph.

    Args:
        graph: The rows to place
        constants: Layout constants (defaults if omitted)
        viewport_width: Width of the hosting viewport

    Returns:
        LayoutResult
    """
    return LevelLayout(constants).layout(graph, viewport_width)
