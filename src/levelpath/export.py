"""
File export functionality for level maps.

This module handles exporting computed level maps to various file formats:
- SVG documents - One <path> per connector using native line, cubic and arc
  commands, plus a circle and label per node
- PNG images - Rasterized through LevelMapRenderer

The LevelMapExporter class provides methods for saving level maps and handles
style defaults and file I/O.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, List, Optional
from xml.sax.saxutils import escape

from .models import Color, MapStyle
from .png_renderer import LevelMapRenderer

if TYPE_CHECKING:
    from .generator import LevelMap

logger = logging.getLogger(__name__)


def _hex(color: Color) -> str:
    return "#{:02x}{:02x}{:02x}".format(*color)


def _num(value: float) -> str:
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


class LevelMapExporter:
    """
    Exports level maps to various file formats.

    Attributes:
        style: Visual constants shared by all formats.
        default_font: Font path for PNG export.
    """

    def __init__(self, style: Optional[MapStyle] = None, default_font: Optional[str] = None):
        """
        Initialize the level map exporter.

        Args:
            style: Visual constants (defaults if omitted).
            default_font: Font path for PNG export.
        """
        self.style = style if style is not None else MapStyle()
        self.default_font = default_font

    def to_svg(self, level_map: "LevelMap") -> str:
        """
        Build an SVG document for a level map.

        Args:
            level_map: The computed map to draw.

        Returns:
            The SVG document as a string.
        """
        style = self.style
        width = _num(level_map.viewport_width)
        height = _num(level_map.total_height)
        radius = style.node_diameter / 2

        lines: List[str] = [
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" '
            f'height="{height}" viewBox="0 0 {width} {height}">',
            f'  <rect width="100%" height="100%" fill="{_hex(style.background)}"/>',
            f'  <g class="paths" fill="none" stroke="{_hex(style.path_color)}" '
            f'stroke-opacity="{_num(style.path_opacity)}" '
            f'stroke-width="{_num(style.stroke_width)}">',
        ]
        for primitive in level_map.primitives:
            lines.append(
                f'    <path class="{primitive.kind}" d="{primitive.svg_path()}"/>'
            )
        lines.append("  </g>")

        lines.append('  <g class="nodes">')
        for node, center in zip(level_map.graph.nodes(), level_map.centers):
            state = "unlocked" if node.unlocked else "locked"
            icon_attr = escape(node.icon, {'"': "&quot;"})
            lines.append(f'    <g class="node {state}">')
            lines.append(
                f'      <circle cx="{_num(center.x)}" cy="{_num(center.y)}" '
                f'r="{_num(radius)}" fill="{_hex(style.fill_for(node))}" '
                f'stroke="{_hex(style.border_color)}" '
                f'stroke-width="{_num(style.border_width)}"/>'
            )
            lines.append(
                f'      <text x="{_num(center.x)}" y="{_num(center.y)}" '
                f'text-anchor="middle" dominant-baseline="central" '
                f'fill="{_hex(style.icon_color)}" '
                f'data-icon="{icon_attr}">'
                f"{escape(node.icon[:1].upper())}</text>"
            )
            lines.append(
                f'      <text x="{_num(center.x)}" '
                f'y="{_num(center.y + radius + 8 + style.label_font_size)}" '
                f'text-anchor="middle" font-size="{style.label_font_size}" '
                f'font-weight="600" fill="{_hex(style.label_color)}">'
                f"{escape(node.label)}</text>"
            )
            lines.append("    </g>")
        lines.append("  </g>")
        lines.append("</svg>")

        return "\n".join(lines) + "\n"

    def save_svg(self, level_map: "LevelMap", filename: str) -> None:
        """
        Save a level map as an SVG file.

        Args:
            level_map: The computed map to save.
            filename: Output filename (should end in .svg).
        """
        output_path = Path(filename)
        output_path.write_text(self.to_svg(level_map), encoding="utf-8")
        logger.debug("Saved level map SVG to %s", output_path)

    def save_png(
        self,
        level_map: "LevelMap",
        filename: str,
        scale: int = 2,
        font: Optional[str] = None,
    ) -> None:
        """
        Save a level map as a high-resolution PNG image.

        Args:
            level_map: The computed map to save.
            filename: Output filename (should end in .png).
            scale: Resolution multiplier for crisp output (default 2 for retina).
            font: Font path to use (overrides default_font if provided).

        Example:
            >>> exporter = LevelMapExporter()
            >>> exporter.save_png(level_map, "map.png", scale=3)
        """
        renderer = LevelMapRenderer(
            self.style, scale=scale, font_path=font or self.default_font
        )
        renderer.render_to_file(level_map, str(Path(filename)))
