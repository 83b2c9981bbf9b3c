"""
Data models for level map generation.

This module contains the immutable descriptors that every layout and routing
pass consumes. A level map is an ordered sequence of rows, each holding one or
two nodes; the row cardinalities alone decide how nodes are connected.

Classes:
    NodeSpec: Descriptor for a single selectable level node.
    LevelGraph: Ordered rows of nodes with flat-index bookkeeping.
    LayoutConstants: Spacing and connector constants for one layout pass.
    MapStyle: Colours and stroke widths used when drawing a map.

Exceptions:
    LevelMapError: Base class for all errors raised by this package.
    ConfigurationError: Invalid layout constants or viewport width.
    GraphStructureError: Row structure the router cannot handle.
"""

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

MAX_ROW_LENGTH = 2


class LevelMapError(Exception):
    """Base class for level map errors."""

    pass


class ConfigurationError(LevelMapError, ValueError):
    """Raised when layout constants or viewport parameters are invalid."""

    pass


class GraphStructureError(LevelMapError):
    """Raised when a level graph violates a structural precondition."""

    pass


@dataclass(frozen=True)
class NodeSpec:
    """
    Descriptor for a single level node.

    Nodes carry no identity beyond their position in the map; two rows may
    hold specs that compare equal.

    Attributes:
        label: Text shown under the node.
        icon: Icon identifier consumed by the node visual.
        unlocked: Whether the level is playable (drawn highlighted, no lock).
    """

    label: str
    icon: str = "star"
    unlocked: bool = False


RowSpec = Tuple[NodeSpec, ...]


@dataclass(frozen=True)
class LevelGraph:
    """
    Ordered rows of level nodes, top to bottom.

    Rows hold at most two nodes. Empty rows are tolerated so that layout can
    skip them, but they cannot be routed (see require_routable).

    Attributes:
        rows: Tuple of rows, each a tuple of NodeSpec.
        row_starts: Flat index of the first node of each row (prefix sum of
            row lengths). Computed on construction.
    """

    rows: Tuple[RowSpec, ...] = ()
    row_starts: Tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        rows = tuple(tuple(row) for row in self.rows)
        for row_idx, row in enumerate(rows):
            if len(row) > MAX_ROW_LENGTH:
                raise GraphStructureError(
                    f"Row {row_idx} has {len(row)} nodes; at most "
                    f"{MAX_ROW_LENGTH} nodes per row are supported"
                )
            for node in row:
                if not isinstance(node, NodeSpec):
                    raise GraphStructureError(
                        f"Row {row_idx} contains {node!r}, expected NodeSpec"
                    )

        starts = []
        running = 0
        for row in rows:
            starts.append(running)
            running += len(row)

        object.__setattr__(self, "rows", rows)
        object.__setattr__(self, "row_starts", tuple(starts))

    @classmethod
    def from_rows(cls, rows: Iterable[Iterable[NodeSpec]]) -> "LevelGraph":
        """Build a graph from any nested iterable of NodeSpec."""
        return cls(tuple(tuple(row) for row in rows))

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def node_count(self) -> int:
        return sum(len(row) for row in self.rows)

    def row_lengths(self) -> List[int]:
        """Return the cardinality of every row."""
        return [len(row) for row in self.rows]

    def nodes(self) -> List[NodeSpec]:
        """Return all nodes flattened in row-major order."""
        return [node for row in self.rows for node in row]

    def flat_index(self, row: int, position: int) -> int:
        """
        Convert a (row, position) pair into a flat row-major index.

        Raises:
            IndexError: If the row or position does not exist.
        """
        if not 0 <= row < len(self.rows):
            raise IndexError(f"Row index {row} out of range")
        if not 0 <= position < len(self.rows[row]):
            raise IndexError(f"Position {position} out of range for row {row}")
        return self.row_starts[row] + position

    def position_of(self, flat_index: int) -> Tuple[int, int]:
        """
        Convert a flat row-major index back into (row, position).

        Empty rows share their start offset with the following row, so the
        last row starting at or before the index is the one containing it.

        Raises:
            IndexError: If the index is outside the flattened node list.
        """
        if not 0 <= flat_index < self.node_count:
            raise IndexError(f"Flat index {flat_index} out of range")
        row = bisect_right(self.row_starts, flat_index) - 1
        return row, flat_index - self.row_starts[row]

    def require_routable(self) -> None:
        """
        Check that every row can be routed.

        Raises:
            GraphStructureError: If any row has a cardinality other than 1 or 2.
        """
        for row_idx, row in enumerate(self.rows):
            if len(row) not in (1, 2):
                raise GraphStructureError(
                    f"Row {row_idx} has {len(row)} nodes; routing requires "
                    "1 or 2 nodes per row"
                )


@dataclass(frozen=True)
class LayoutConstants:
    """
    Spacing and connector constants, fixed for one layout pass.

    Attributes:
        node_size: Diameter of a node in layout units.
        horizontal_gap: Gap between the two nodes of a row.
        vertical_gap: Distance between consecutive row baselines.
        top_margin: Y coordinate of the first row.
        bottom_padding: Extra space below the last row.
        corner_radius: Radius of the rounded corners of zig-zag connectors.
        lane_offset: Horizontal distance of zig-zag lanes from the centre line.
    """

    node_size: float = 60.0
    horizontal_gap: float = 60.0
    vertical_gap: float = 120.0
    top_margin: float = 100.0
    bottom_padding: float = 50.0
    corner_radius: float = 50.0
    lane_offset: float = 120.0

    def __post_init__(self):
        for name in (
            "node_size",
            "horizontal_gap",
            "vertical_gap",
            "corner_radius",
            "lane_offset",
        ):
            value = getattr(self, name)
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")

        for name in ("top_margin", "bottom_padding"):
            value = getattr(self, name)
            if value < 0:
                raise ConfigurationError(
                    f"{name} must not be negative, got {value}"
                )

        if 2 * self.corner_radius > self.vertical_gap:
            raise ConfigurationError(
                f"corner_radius ({self.corner_radius}) must be at most half of "
                f"vertical_gap ({self.vertical_gap})"
            )


Color = Tuple[int, int, int]


@dataclass(frozen=True)
class MapStyle:
    """
    Visual constants for drawing a level map.

    Attributes:
        path_color: RGB colour of connectors.
        path_opacity: Connector opacity in [0, 1].
        stroke_width: Connector width in layout units.
        unlocked_fill: Fill of unlocked nodes.
        locked_fill: Fill of locked nodes.
        border_color: Ring drawn around each node.
        border_width: Width of that ring.
        node_diameter: Diameter of the drawn node circle.
        icon_color: Colour of icon glyphs and lock badges.
        label_color: Colour of node labels.
        label_font_size: Label font size in layout units.
        background: Background colour.
    """

    path_color: Color = (189, 189, 189)
    path_opacity: float = 0.3
    stroke_width: float = 3.0
    unlocked_fill: Color = (255, 152, 0)
    locked_fill: Color = (189, 189, 189)
    border_color: Color = (187, 222, 251)
    border_width: float = 4.0
    node_diameter: float = 80.0
    icon_color: Color = (255, 255, 255)
    label_color: Color = (13, 71, 161)
    label_font_size: int = 14
    background: Color = (255, 255, 255)

    def __post_init__(self):
        if not 0.0 <= self.path_opacity <= 1.0:
            raise ConfigurationError(
                f"path_opacity must be within [0, 1], got {self.path_opacity}"
            )
        for name in ("stroke_width", "node_diameter", "label_font_size"):
            value = getattr(self, name)
            if value <= 0:
                raise ConfigurationError(f"{name} must be positive, got {value}")
        if self.border_width < 0:
            raise ConfigurationError(
                f"border_width must not be negative, got {self.border_width}"
            )

    def fill_for(self, node: NodeSpec) -> Color:
        """Fill colour for a node depending on its unlocked flag."""
        return self.unlocked_fill if node.unlocked else self.locked_fill
