"""
levelpath - Level map layout and path routing

A Python library for laying out vertically scrolling level maps and routing
the connectors that join their nodes.

Example:
    >>> from levelpath import LevelMapGenerator
    >>> generator = LevelMapGenerator()
    >>> level_map = generator.generate('''
    ...     Inception (movie) *
    ...     Interstellar (public) | Tenet (access_time)
    ... ''', viewport_width=400)
    >>> level_map.centers
    (Point(x=200.0, y=100.0), Point(x=140.0, y=220.0), Point(x=260.0, y=220.0))

Debug Mode Example:
    >>> level_map = generator.generate(MOVIE_MAP, 400, debug=True)
    >>> trace = generator.get_trace()
    >>> print(trace.summary())
"""

from .export import LevelMapExporter
from .generator import LevelMap, LevelMapGenerator
from .geometry import (
    CubicCurve,
    PathPrimitive,
    Point,
    RoundedZigZag,
    StraightSegment,
    TurnDirection,
)
from .layout import LayoutResult, LevelLayout, compute_layout
from .levels import BUILTIN_MAPS, LETTER_MAP, LETTER_MAP_LANE_OVERRIDES, MOVIE_MAP
from .models import (
    ConfigurationError,
    GraphStructureError,
    LayoutConstants,
    LevelGraph,
    LevelMapError,
    MapStyle,
    NodeSpec,
)
from .parser import ParseError, Parser, parse_level_map
from .png_renderer import LevelMapRenderer
from .router import (
    ConnectionDecision,
    ConnectionRule,
    PathRouter,
    RouteResult,
    RoutingStyle,
    route_paths,
)
from .tracer import ConnectorPlacement, PipelineStage, RenderTrace

__version__ = "0.1.0"

__all__ = [
    # Main API
    "LevelMapGenerator",
    "LevelMap",
    # Models
    "NodeSpec",
    "LevelGraph",
    "LayoutConstants",
    "MapStyle",
    "LevelMapError",
    "ConfigurationError",
    "GraphStructureError",
    # Parser
    "Parser",
    "ParseError",
    "parse_level_map",
    # Geometry
    "Point",
    "StraightSegment",
    "CubicCurve",
    "RoundedZigZag",
    "TurnDirection",
    "PathPrimitive",
    # Layout
    "LevelLayout",
    "LayoutResult",
    "compute_layout",
    # Router
    "PathRouter",
    "RouteResult",
    "RoutingStyle",
    "ConnectionRule",
    "ConnectionDecision",
    "route_paths",
    # Export
    "LevelMapExporter",
    "LevelMapRenderer",
    # Built-in maps
    "MOVIE_MAP",
    "LETTER_MAP",
    "LETTER_MAP_LANE_OVERRIDES",
    "BUILTIN_MAPS",
    # Debug/Tracing
    "RenderTrace",
    "PipelineStage",
    "ConnectorPlacement",
]
