"""
PNG Renderer module for level maps.

Draws a computed level map with Pillow. Connectors are flattened into
polylines and composited on a translucent layer; nodes are drawn on top as
filled circles with a ring, an icon glyph, a lock badge when locked and a
label underneath.
"""

import logging
import os
from typing import TYPE_CHECKING, Dict, Optional, Tuple

from PIL import Image, ImageDraw, ImageFont

from .geometry import Point
from .models import ConfigurationError, MapStyle, NodeSpec

if TYPE_CHECKING:
    from .generator import LevelMap

logger = logging.getLogger(__name__)


class LevelMapRenderer:
    """Renders level maps as PNG images."""

    def __init__(
        self,
        style: Optional[MapStyle] = None,
        scale: int = 2,  # For high-resolution output
        font_path: Optional[str] = None,
        curve_segments: int = 16,
    ):
        if scale < 1:
            raise ConfigurationError(f"scale must be at least 1, got {scale}")
        self.style = style if style is not None else MapStyle()
        self.scale = scale
        self.font_path = font_path
        self.curve_segments = curve_segments
        self._fonts: Dict[int, ImageFont.ImageFont] = {}

    def _get_font(self, size: int) -> ImageFont.ImageFont:
        """Get a font of the given pixel size, trying common system fonts."""
        if size in self._fonts:
            return self._fonts[size]

        font_options = []
        if self.font_path and os.path.exists(self.font_path):
            font_options.append(self.font_path)
        font_options.extend(
            [
                "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
                "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
                "/usr/share/fonts/truetype/liberation/LiberationSans-Bold.ttf",
                "DejaVuSans.ttf",
                "Arial.ttf",
            ]
        )

        font = None
        for path in font_options:
            try:
                font = ImageFont.truetype(path, size)
                break
            except OSError:
                continue

        if font is None:
            try:
                font = ImageFont.load_default(size=size)
            except TypeError:
                # Older Pillow versions don't support size parameter
                font = ImageFont.load_default()

        self._fonts[size] = font
        return font

    def _scaled(self, point: Point) -> Tuple[float, float]:
        return point.x * self.scale, point.y * self.scale

    def image_size(self, level_map: "LevelMap") -> Tuple[int, int]:
        """Pixel size of the rendered image."""
        width = max(1, round(level_map.viewport_width * self.scale))
        height = max(1, round(level_map.total_height * self.scale))
        return width, height

    def render(self, level_map: "LevelMap") -> Image.Image:
        """
        Render a level map to an RGB image.

        Args:
            level_map: The computed map (layout and routes)

        Returns:
            A Pillow image
        """
        style = self.style
        size = self.image_size(level_map)
        img = Image.new("RGBA", size, style.background + (255,))

        # Connectors share one layer so overlapping strokes keep one opacity.
        paths = Image.new("RGBA", size, (0, 0, 0, 0))
        path_draw = ImageDraw.Draw(paths)
        path_fill = style.path_color + (round(255 * style.path_opacity),)
        stroke = max(1, round(style.stroke_width * self.scale))
        for primitive in level_map.primitives:
            points = [self._scaled(p) for p in primitive.flatten(self.curve_segments)]
            path_draw.line(points, fill=path_fill, width=stroke, joint="curve")
        img = Image.alpha_composite(img, paths)

        draw = ImageDraw.Draw(img)
        for node, center in zip(level_map.graph.nodes(), level_map.centers):
            self._draw_node(draw, node, center)

        return img.convert("RGB")

    def _draw_centered_text(
        self,
        draw: ImageDraw.ImageDraw,
        center: Tuple[float, float],
        text: str,
        font: ImageFont.ImageFont,
        fill: Tuple[int, int, int],
    ) -> None:
        bbox = draw.textbbox((0, 0), text, font=font)
        width = bbox[2] - bbox[0]
        height = bbox[3] - bbox[1]
        draw.text(
            (center[0] - width / 2 - bbox[0], center[1] - height / 2 - bbox[1]),
            text,
            font=font,
            fill=fill,
        )

    def _draw_node(
        self, draw: ImageDraw.ImageDraw, node: NodeSpec, center: Point
    ) -> None:
        """Draw one node: circle, icon glyph, lock badge and label."""
        style = self.style
        s = self.scale
        cx, cy = self._scaled(center)
        radius = style.node_diameter / 2 * s

        draw.ellipse(
            [cx - radius, cy - radius, cx + radius, cy + radius],
            fill=style.fill_for(node),
            outline=style.border_color,
            width=round(style.border_width * s),
        )

        glyph = node.icon[:1].upper() or "?"
        self._draw_centered_text(
            draw, (cx, cy), glyph, self._get_font(round(radius)), style.icon_color
        )

        if not node.unlocked:
            self._draw_lock_badge(draw, cx + radius * 0.6, cy + radius * 0.6, radius * 0.22)

        label_font = self._get_font(style.label_font_size * s)
        label_top = cy + radius + 8 * s
        bbox = draw.textbbox((0, 0), node.label, font=label_font)
        self._draw_centered_text(
            draw,
            (cx, label_top + (bbox[3] - bbox[1]) / 2),
            node.label,
            label_font,
            style.label_color,
        )

    def _draw_lock_badge(
        self, draw: ImageDraw.ImageDraw, x: float, y: float, size: float
    ) -> None:
        """Draw a small padlock centred at (x, y)."""
        color = self.style.icon_color
        line = max(1, round(size * 0.3))
        # Shackle
        draw.arc(
            [x - size * 0.6, y - size * 1.2, x + size * 0.6, y],
            start=180,
            end=360,
            fill=color,
            width=line,
        )
        # Body
        draw.rectangle([x - size, y - size * 0.4, x + size, y + size], fill=color)

    def render_to_file(self, level_map: "LevelMap", output_path: str) -> str:
        """
        Render a level map and save it as PNG.

        Args:
            level_map: The computed map
            output_path: Path to save the PNG file

        Returns:
            Path to the saved PNG file
        """
        img = self.render(level_map)
        img.save(output_path, "PNG")
        logger.debug("Saved level map PNG to %s (%dx%d)", output_path, *img.size)
        return output_path
