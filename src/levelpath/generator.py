"""
Main level map generator module.

Combines parsing, layout and path routing to produce a LevelMap, the
immutable result consumed by the PNG and SVG exporters.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional, Tuple, Union

from .export import LevelMapExporter
from .geometry import PathPrimitive, Point
from .layout import LayoutResult, LevelLayout
from .models import LayoutConstants, LevelGraph, MapStyle, NodeSpec
from .parser import Parser
from .router import PathRouter, RouteResult, RoutingStyle
from .tracer import RenderTrace

logger = logging.getLogger(__name__)

LevelSource = Union[str, LevelGraph, Iterable[Iterable[Union[NodeSpec, str]]]]


@dataclass(frozen=True)
class LevelMap:
    """
    A fully computed level map.

    Attributes:
        graph: The rows that were laid out.
        layout: Node centres and content height.
        routes: Connectors and per-slot decisions.
        viewport_width: Width the map was computed for.
    """

    graph: LevelGraph
    layout: LayoutResult
    routes: RouteResult
    viewport_width: float

    @property
    def centers(self) -> Tuple[Point, ...]:
        return self.layout.centers

    @property
    def primitives(self) -> Tuple[PathPrimitive, ...]:
        return self.routes.primitives

    @property
    def total_height(self) -> float:
        return self.layout.total_height

    def node_placements(self) -> List[Tuple[NodeSpec, Point]]:
        """Pair every node with the top-left corner of its box."""
        return [
            (node, self.layout.top_left(index))
            for index, node in enumerate(self.graph.nodes())
        ]

    def needs_redraw(self, previous: Optional["LevelMap"]) -> bool:
        """
        Whether this map differs visually from a previously drawn one.

        Compares centres, rows and the centre line; anything else is derived
        from those.
        """
        if previous is None:
            return True
        return (
            previous.centers != self.centers
            or previous.graph.rows != self.graph.rows
            or previous.layout.center_x != self.layout.center_x
        )


class LevelMapGenerator:
    """
    Generate level maps from row tables or text descriptions.

    Example:
        >>> generator = LevelMapGenerator()
        >>> level_map = generator.generate('''
        ...     Start *
        ...     Left | Right
        ...     Boss
        ... ''', viewport_width=400)
        >>> [p.kind for p in level_map.primitives]
        ['straight', 'zigzag', 'zigzag']
    """

    def __init__(
        self,
        node_size: float = 60.0,
        horizontal_gap: float = 60.0,
        vertical_gap: float = 120.0,
        top_margin: float = 100.0,
        bottom_padding: float = 50.0,
        corner_radius: float = 50.0,
        lane_offset: float = 120.0,
        routing: str = "fan",
        lane_overrides: Optional[Mapping[int, float]] = None,
        style: Optional[MapStyle] = None,
    ):
        """
        Initialize the level map generator.

        Args:
            node_size: Node diameter in layout units
            horizontal_gap: Gap between the two nodes of a row
            vertical_gap: Distance between row baselines
            top_margin: Y coordinate of the first row
            bottom_padding: Space below the last row
            corner_radius: Radius of zig-zag corners
            lane_offset: Distance of zig-zag lanes from the centre line
            routing: "fan" (default) or "steps"
            lane_overrides: Lane offset per row pair, keyed by upper row index
            style: Visual constants for PNG/SVG export
        """
        self.routing = routing.lower()
        if self.routing not in ("fan", "steps"):
            raise ValueError("routing must be 'fan' or 'steps'")

        self.constants = LayoutConstants(
            node_size=node_size,
            horizontal_gap=horizontal_gap,
            vertical_gap=vertical_gap,
            top_margin=top_margin,
            bottom_padding=bottom_padding,
            corner_radius=corner_radius,
            lane_offset=lane_offset,
        )
        self.style = style if style is not None else MapStyle()

        self.parser = Parser()
        self.layout_engine = LevelLayout(self.constants)
        self.router = PathRouter(
            self.constants,
            style=RoutingStyle(self.routing),
            lane_overrides=lane_overrides,
        )
        self.exporter = LevelMapExporter(self.style)
        self._trace: Optional[RenderTrace] = None

    def _to_graph(self, source: LevelSource) -> LevelGraph:
        if isinstance(source, LevelGraph):
            return source
        if isinstance(source, str):
            return self.parser.parse(source)
        return LevelGraph.from_rows(
            [NodeSpec(node) if isinstance(node, str) else node for node in row]
            for row in source
        )

    def generate(
        self, source: LevelSource, viewport_width: float = 400.0, debug: bool = False
    ) -> LevelMap:
        """
        Compute the layout and connectors of a level map.

        Args:
            source: Map text, a LevelGraph, or rows of NodeSpec / labels
            viewport_width: Width of the hosting viewport
            debug: Record a RenderTrace, available through get_trace()

        Returns:
            LevelMap
        """
        trace = RenderTrace(routing=self.routing, viewport_width=viewport_width) if debug else None

        graph = self._to_graph(source)
        if trace is not None:
            trace.add_stage(
                "parse",
                {
                    "rows": graph.row_count,
                    "nodes": graph.node_count,
                    "row_lengths": graph.row_lengths(),
                },
            )

        layout = self.layout_engine.layout(graph, viewport_width)
        if trace is not None:
            trace.add_stage(
                "layout",
                {
                    "center_x": layout.center_x,
                    "total_height": layout.total_height,
                    "centers": list(layout.centers),
                },
            )

        routes = self.router.route(graph, layout.centers, layout.center_x, trace=trace)
        if trace is not None:
            kinds = Counter(p.kind for p in routes.primitives)
            trace.add_stage(
                "routing",
                {
                    "primitives": len(routes.primitives),
                    "by_kind": dict(kinds),
                    "connected": routes.is_connected(),
                },
            )

        self._trace = trace
        logger.debug(
            "Generated level map: %d nodes, %d connectors",
            graph.node_count,
            len(routes.primitives),
        )
        return LevelMap(graph, layout, routes, float(viewport_width))

    def get_trace(self) -> Optional[RenderTrace]:
        """Return the trace of the last generate(debug=True) call, if any."""
        return self._trace

    def save_svg(
        self, source: LevelSource, filename: str, viewport_width: float = 400.0
    ) -> None:
        """
        Generate a level map and save it as SVG.

        Args:
            source: Map text, a LevelGraph, or rows
            filename: Output filename (should end in .svg)
            viewport_width: Width of the map
        """
        self.exporter.save_svg(self.generate(source, viewport_width), filename)

    def save_png(
        self,
        source: LevelSource,
        filename: str,
        viewport_width: float = 400.0,
        scale: int = 2,
        font: Optional[str] = None,
    ) -> None:
        """
        Generate a level map and save it as a high-resolution PNG image.

        Args:
            source: Map text, a LevelGraph, or rows
            filename: Output filename (should end in .png)
            viewport_width: Width of the map in layout units
            scale: Resolution multiplier for crisp output (default 2 for retina)
            font: Font path for labels and icon glyphs

        Example:
            >>> generator = LevelMapGenerator()
            >>> generator.save_png(MOVIE_MAP, "movies.png", viewport_width=360)
        """
        level_map = self.generate(source, viewport_width)
        self.exporter.save_png(level_map, filename, scale=scale, font=font)
