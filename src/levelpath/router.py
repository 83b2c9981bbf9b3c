"""
Path routing module for level maps.

Derives the connectors between laid-out nodes purely from row cardinalities
and ordering. Every pair of nodes that are adjacent in the flattened,
row-major node order forms a connection slot; slot i joins flat indices i and
i + 1. Routing rules run in a fixed precedence and claim slots as they go.
The first rule to claim a slot owns it, so when routing finishes each slot is
drawn by exactly one primitive.

Fan routing (the default) applies, in order:
- intra_row: straight line between the two nodes of a two-node row
- fan_out: single row above a double row, zig-zag to the second lower node
- fan_in: double row above a single row, zig-zag from the first upper node
- single_to_single: zig-zag between single rows, alternating right and left
- fallback: cubic S-curve for every slot still unclaimed

Steps routing keeps the intra-row lines and joins the last node of each row
to the first node of the next with a zig-zag whose side alternates by row
index.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Dict, List, Mapping, Optional, Sequence, Tuple, Union

import networkx as nx

from .geometry import (
    CubicCurve,
    PathPrimitive,
    Point,
    RoundedZigZag,
    StraightSegment,
    TurnDirection,
)
from .models import ConfigurationError, GraphStructureError, LayoutConstants, LevelGraph

if TYPE_CHECKING:
    from .tracer import RenderTrace

logger = logging.getLogger(__name__)


class RoutingStyle(Enum):
    """How rows are joined to each other."""

    FAN = "fan"
    STEPS = "steps"


class ConnectionRule(Enum):
    """The rule that claimed a connection slot."""

    INTRA_ROW = "intra_row"
    FAN_OUT = "fan_out"
    FAN_IN = "fan_in"
    SINGLE_TO_SINGLE = "single_to_single"
    STEP = "step"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class ConnectionDecision:
    """
    Classification of one connection slot.

    Attributes:
        slot: Slot index (flat index of the upper/left node).
        source: Flat index of the first node of the slot.
        target: Flat index of the second node of the slot.
        rule: Rule that claimed the slot.
        primitive_index: Index of the primitive drawing this slot.
        reason: Human-readable explanation.
    """

    slot: int
    source: int
    target: int
    rule: ConnectionRule
    primitive_index: int
    reason: str


@dataclass(frozen=True)
class RouteResult:
    """
    Result of routing a level graph.

    Attributes:
        primitives: Drawable connectors, in emission order.
        endpoints: Flat (start, end) node indices of each primitive.
        decisions: One decision per connection slot, ordered by slot.
        node_count: Number of nodes that were routed.
    """

    primitives: Tuple[PathPrimitive, ...] = ()
    endpoints: Tuple[Tuple[int, int], ...] = ()
    decisions: Tuple[ConnectionDecision, ...] = ()
    node_count: int = 0

    def primitives_of_kind(self, kind: str) -> List[PathPrimitive]:
        """Get all primitives of a kind ("straight", "cubic" or "zigzag")."""
        return [p for p in self.primitives if p.kind == kind]

    def decision_for(self, slot: int) -> ConnectionDecision:
        """Get the decision for a slot."""
        for decision in self.decisions:
            if decision.slot == slot:
                return decision
        raise IndexError(f"No connection slot {slot}")

    def primitive_for(self, slot: int) -> PathPrimitive:
        """Get the primitive that draws a slot."""
        return self.primitives[self.decision_for(slot).primitive_index]

    def to_networkx(self) -> nx.Graph:
        """
        Build an undirected graph of the drawn connections.

        Nodes are flat node indices; each primitive becomes an edge between its
        endpoints carrying the primitive kind and index.
        """
        graph = nx.Graph()
        graph.add_nodes_from(range(self.node_count))
        for index, (start, end) in enumerate(self.endpoints):
            graph.add_edge(start, end, kind=self.primitives[index].kind, index=index)
        return graph

    def is_connected(self) -> bool:
        """Whether the drawn connectors join every node into one piece."""
        if self.node_count == 0:
            return True
        return nx.is_connected(self.to_networkx())


class _SlotClaims:
    """Per-pass bookkeeping of claimed slots and emitted primitives."""

    def __init__(self, node_count: int):
        self.node_count = node_count
        self.slot_count = max(node_count - 1, 0)
        self.decisions: Dict[int, ConnectionDecision] = {}
        self.primitives: List[PathPrimitive] = []
        self.endpoints: List[Tuple[int, int]] = []

    def is_claimed(self, slot: int) -> bool:
        return slot in self.decisions

    def emit(
        self,
        primitive: PathPrimitive,
        endpoints: Tuple[int, int],
        rule: ConnectionRule,
        slots: Sequence[int],
        reason: str,
    ) -> Optional[int]:
        """
        Emit a primitive claiming the given slots.

        Slots already owned by an earlier rule are left alone. If none of the
        slots is free, nothing is emitted and None is returned.
        """
        free = [s for s in slots if 0 <= s < self.slot_count and s not in self.decisions]
        if not free:
            return None

        index = len(self.primitives)
        self.primitives.append(primitive)
        self.endpoints.append(endpoints)
        for slot in free:
            self.decisions[slot] = ConnectionDecision(
                slot=slot,
                source=slot,
                target=slot + 1,
                rule=rule,
                primitive_index=index,
                reason=reason,
            )
        return index

    def result(self) -> RouteResult:
        return RouteResult(
            primitives=tuple(self.primitives),
            endpoints=tuple(self.endpoints),
            decisions=tuple(self.decisions[s] for s in sorted(self.decisions)),
            node_count=self.node_count,
        )


class PathRouter:
    """
    Routes connectors between the nodes of a laid-out level graph.

    Example:
        >>> router = PathRouter(LayoutConstants())
        >>> result = router.route(graph, layout.centers, layout.center_x)
        >>> [p.kind for p in result.primitives]
        ['zigzag']
    """

    def __init__(
        self,
        constants: Optional[LayoutConstants] = None,
        style: Union[RoutingStyle, str] = RoutingStyle.FAN,
        lane_overrides: Optional[Mapping[int, float]] = None,
    ):
        """
        Initialize the router.

        Args:
            constants: Layout constants providing corner radius and lane offset
            style: Routing style, RoutingStyle or its string value
            lane_overrides: Lane offset per row pair, keyed by the index of the
                upper row of the pair

        Raises:
            ConfigurationError: If an override offset is not positive
        """
        self.constants = constants if constants is not None else LayoutConstants()
        self.style = RoutingStyle(style)
        self.lane_overrides: Dict[int, float] = dict(lane_overrides or {})

        for row, offset in self.lane_overrides.items():
            if offset <= 0:
                raise ConfigurationError(
                    f"Lane override for row {row} must be positive, got {offset}"
                )

    def route(
        self,
        graph: LevelGraph,
        centers: Sequence[Point],
        center_x: float,
        trace: Optional["RenderTrace"] = None,
    ) -> RouteResult:
        """
        Route all connectors for a graph.

        Args:
            graph: Row structure the centres were computed from
            centers: Node centres in row-major order
            center_x: Horizontal centre line of the viewport
            trace: Optional trace receiving one placement per slot

        Returns:
            RouteResult with primitives and per-slot decisions

        Raises:
            GraphStructureError: If a row is not routable, the centres do not
                match the rows, or a lane override names a missing row pair
            ConfigurationError: If a lane is too close to a node it joins for
                the corner radius to fit
        """
        graph.require_routable()
        if len(centers) != graph.node_count:
            raise GraphStructureError(
                f"Got {len(centers)} centres for {graph.node_count} nodes"
            )
        for row in self.lane_overrides:
            if not 0 <= row < graph.row_count - 1:
                raise GraphStructureError(
                    f"Lane override for row {row} has no following row "
                    f"(graph has {graph.row_count} rows)"
                )

        points = [Point(float(p[0]), float(p[1])) for p in centers]
        claims = _SlotClaims(graph.node_count)

        self._route_intra_rows(graph, points, claims)
        if self.style is RoutingStyle.FAN:
            self._route_fan_out(graph, points, center_x, claims)
            self._route_fan_in(graph, points, center_x, claims)
            self._route_single_chains(graph, points, center_x, claims)
            self._route_fallback(points, claims)
        else:
            self._route_steps(graph, points, center_x, claims)

        result = claims.result()

        if trace is not None:
            for decision in result.decisions:
                trace.add_placement(
                    decision.slot,
                    decision.source,
                    decision.target,
                    decision.rule.value,
                    result.primitives[decision.primitive_index].kind,
                    decision.primitive_index,
                    decision.reason,
                )

        logger.debug(
            "Routed %d slots with %d primitives (%s)",
            len(result.decisions),
            len(result.primitives),
            self.style.value,
        )
        return result

    def _zigzag(
        self,
        start: Point,
        end: Point,
        center_x: float,
        upper_row: int,
        right: bool,
    ) -> RoundedZigZag:
        offset = self.lane_overrides.get(upper_row, self.constants.lane_offset)
        radius = self.constants.corner_radius
        lane_x = center_x + offset if right else center_x - offset

        # Both horizontal legs run towards the lane and stop a radius short of it.
        corner_x = lane_x - radius if right else lane_x + radius
        for point in (start, end):
            if (point.x > corner_x) if right else (point.x < corner_x):
                raise ConfigurationError(
                    f"Lane offset {offset} between rows {upper_row} and "
                    f"{upper_row + 1} is too narrow: the "
                    f"{'right' if right else 'left'} lane at x={lane_x} must sit "
                    f"at least {radius} beyond the node at x={point.x}"
                )

        return RoundedZigZag(
            start=start,
            end=end,
            lane_x=lane_x,
            corner_radius=radius,
            turn=TurnDirection.CLOCKWISE if right else TurnDirection.COUNTER_CLOCKWISE,
        )

    def _route_intra_rows(
        self, graph: LevelGraph, points: List[Point], claims: _SlotClaims
    ) -> None:
        for row_idx, row in enumerate(graph.rows):
            if len(row) != 2:
                continue
            first = graph.row_starts[row_idx]
            claims.emit(
                StraightSegment(points[first], points[first + 1]),
                (first, first + 1),
                ConnectionRule.INTRA_ROW,
                [first],
                f"row {row_idx} holds two nodes",
            )

    def _route_fan_out(
        self,
        graph: LevelGraph,
        points: List[Point],
        center_x: float,
        claims: _SlotClaims,
    ) -> None:
        for row_idx in range(graph.row_count - 1):
            if len(graph.rows[row_idx]) != 1 or len(graph.rows[row_idx + 1]) != 2:
                continue
            single = graph.row_starts[row_idx]
            second = graph.row_starts[row_idx + 1] + 1
            # The curve also stands in for the lower row's internal slot.
            claims.emit(
                self._zigzag(points[single], points[second], center_x, row_idx, right=True),
                (single, second),
                ConnectionRule.FAN_OUT,
                [single, single + 1],
                f"single row {row_idx} fans out into double row {row_idx + 1}",
            )

    def _route_fan_in(
        self,
        graph: LevelGraph,
        points: List[Point],
        center_x: float,
        claims: _SlotClaims,
    ) -> None:
        for row_idx in range(graph.row_count - 1):
            if len(graph.rows[row_idx]) != 2 or len(graph.rows[row_idx + 1]) != 1:
                continue
            first = graph.row_starts[row_idx]
            single = graph.row_starts[row_idx + 1]
            claims.emit(
                self._zigzag(points[first], points[single], center_x, row_idx, right=False),
                (first, single),
                ConnectionRule.FAN_IN,
                [first, first + 1],
                f"double row {row_idx} fans in to single row {row_idx + 1}",
            )

    def _route_single_chains(
        self,
        graph: LevelGraph,
        points: List[Point],
        center_x: float,
        claims: _SlotClaims,
    ) -> None:
        occurrence = 0
        for row_idx in range(graph.row_count - 1):
            if len(graph.rows[row_idx]) != 1 or len(graph.rows[row_idx + 1]) != 1:
                continue
            start = graph.row_starts[row_idx]
            if claims.is_claimed(start):
                continue
            end = graph.row_starts[row_idx + 1]
            # Alternation counts single-to-single pairs only, not row indices.
            right = occurrence % 2 == 0
            claims.emit(
                self._zigzag(points[start], points[end], center_x, row_idx, right=right),
                (start, end),
                ConnectionRule.SINGLE_TO_SINGLE,
                [start],
                f"single-to-single pair #{occurrence + 1} routes "
                f"{'right' if right else 'left'}",
            )
            occurrence += 1

    def _route_fallback(self, points: List[Point], claims: _SlotClaims) -> None:
        for slot in range(claims.slot_count):
            if claims.is_claimed(slot):
                continue
            start, end = points[slot], points[slot + 1]
            mid_y = (start.y + end.y) / 2
            claims.emit(
                CubicCurve(start, Point(start.x, mid_y), Point(end.x, mid_y), end),
                (slot, slot + 1),
                ConnectionRule.FALLBACK,
                [slot],
                "no specialised rule applies",
            )

    def _route_steps(
        self,
        graph: LevelGraph,
        points: List[Point],
        center_x: float,
        claims: _SlotClaims,
    ) -> None:
        for row_idx in range(graph.row_count - 1):
            last = graph.row_starts[row_idx] + len(graph.rows[row_idx]) - 1
            first = graph.row_starts[row_idx + 1]
            right = row_idx % 2 == 1
            claims.emit(
                self._zigzag(points[last], points[first], center_x, row_idx, right=right),
                (last, first),
                ConnectionRule.STEP,
                [last],
                f"step from row {row_idx} routes {'right' if right else 'left'}",
            )


def route_paths(
    graph: LevelGraph,
    centers: Sequence[Point],
    center_x: float,
    constants: Optional[LayoutConstants] = None,
    style: Union[RoutingStyle, str] = RoutingStyle.FAN,
    lane_overrides: Optional[Mapping[int, float]] = None,
) -> RouteResult:
    """
    Convenience function to route a laid-out level graph.

    Args:
        graph: Row structure
        centers: Node centres in row-major order
        center_x: Horizontal centre line of the viewport
        constants: Layout constants (defaults if omitted)
        style: Routing style
        lane_overrides: Lane offset per row pair, keyed by upper row index

    Returns:
        RouteResult
    """
    router = PathRouter(constants, style=style, lane_overrides=lane_overrides)
    return router.route(graph, centers, center_x)
