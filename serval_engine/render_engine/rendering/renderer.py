"""
Painting for the rendering engine.
This module turns a laid-out box tree into a display list of solid color
rectangles and paints it onto a raster (Pillow) or an HTML canvas page.
"""

import logging
import os
from typing import List, Optional

from PIL import Image, ImageDraw

from ..css import Color, ColorValue
from ..layout import BoxType, LayoutBox, Rect
from ..layout.box_metrics import format_number

logger = logging.getLogger(__name__)

FORMAT_PNG = 'png'
FORMAT_CANVAS = 'canvas'
FORMATS = (FORMAT_PNG, FORMAT_CANVAS)

CANVAS_PAGE_TEMPLATE = """<!doctype html>
<html>
<canvas id="canvas" width="{width}" height="{height}"></canvas>
<script>
const canvas = document.querySelector('#canvas');
const ctx = canvas.getContext('2d');
{commands}
</script>
</html>
"""


class SolidColor:
    """Display command filling a rectangle with one color."""

    def __init__(self, color: Color, rect: Rect):
        self.color = color
        self.rect = rect

    def __eq__(self, other):
        if not isinstance(other, SolidColor):
            return NotImplemented
        return self.color == other.color and self.rect == other.rect

    def __repr__(self):
        return f"SolidColor({self.color.to_hex()}, {self.rect})"


DisplayList = List[SolidColor]


def get_color(layout_box: LayoutBox, name: str) -> Optional[Color]:
    """
    Get a color property of a box.

    Args:
        layout_box: The box to query
        name: Property name, e.g. 'background'

    Returns:
        The color, or None if unset, not a color, or the box is anonymous
    """
    if layout_box.box_type is BoxType.ANONYMOUS:
        return None
    value = layout_box.get_style_node().value(name)
    if isinstance(value, ColorValue):
        return value.color
    return None


def build_display_list(layout_root: LayoutBox) -> DisplayList:
    """
    Build the display list for a laid-out box tree.

    Boxes are painted in document order: background first, then borders,
    then children.

    Args:
        layout_root: Root of the laid-out box tree

    Returns:
        Display commands in painting order
    """
    display_list: DisplayList = []
    for layout_box in layout_root.walk():
        render_background(display_list, layout_box)
        render_borders(display_list, layout_box)
    return display_list


def render_background(display_list: DisplayList, layout_box: LayoutBox) -> None:
    color = get_color(layout_box, 'background')
    if color is not None:
        display_list.append(SolidColor(color, layout_box.dimensions.border_box()))


def render_borders(display_list: DisplayList, layout_box: LayoutBox) -> None:
    """
    Add the four border strips of a box, when it has a border color.

    Args:
        display_list: List to append to
        layout_box: The box being painted
    """
    color = get_color(layout_box, 'border-color')
    if color is None:
        return

    d = layout_box.dimensions
    border_box = d.border_box()

    # Left border
    display_list.append(SolidColor(color, Rect(
        border_box.x, border_box.y, d.border.left, border_box.height)))

    # Right border
    display_list.append(SolidColor(color, Rect(
        border_box.x + border_box.width - d.border.right, border_box.y,
        d.border.right, border_box.height)))

    # Top border
    display_list.append(SolidColor(color, Rect(
        border_box.x, border_box.y, border_box.width, d.border.top)))

    # Bottom border
    display_list.append(SolidColor(color, Rect(
        border_box.x, border_box.y + border_box.height - d.border.bottom,
        border_box.width, d.border.bottom)))


class Canvas:
    """
    Base class for paint targets.

    Subclasses implement ``paint_item`` and ``save_as``.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height

    def paint(self, layout_root: LayoutBox) -> None:
        """
        Paint a laid-out box tree.

        Args:
            layout_root: Root of the laid-out box tree
        """
        display_list = build_display_list(layout_root)
        logger.debug(f"Painting display list with {len(display_list)} items")
        for item in display_list:
            self.paint_item(item)

    def paint_item(self, item: SolidColor) -> None:
        raise NotImplementedError

    def save_as(self, path: str) -> None:
        raise NotImplementedError


class PixelCanvas(Canvas):
    """Raster canvas backed by a Pillow RGBA image with a black background."""

    def __init__(self, width: int, height: int):
        super().__init__(width, height)
        self.image = Image.new('RGBA', (width, height), (0, 0, 0, 255))
        self._draw = ImageDraw.Draw(self.image)

    def _clamp(self, value: float, upper: int) -> int:
        return int(min(max(value, 0.0), float(upper)))

    def paint_item(self, item: SolidColor) -> None:
        rect = item.rect
        x0 = self._clamp(rect.x, self.width)
        y0 = self._clamp(rect.y, self.height)
        x1 = self._clamp(rect.x + rect.width, self.width)
        y1 = self._clamp(rect.y + rect.height, self.height)
        if x1 <= x0 or y1 <= y0:
            return

        logger.debug(f"painting: color: {item.color.to_hex()}, rect: {rect}")
        # Pillow rectangles include their far edge
        self._draw.rectangle([x0, y0, x1 - 1, y1 - 1], fill=item.color.to_tuple() + (255,))

    def get_pixel(self, x: int, y: int) -> Color:
        r, g, b, _ = self.image.getpixel((x, y))
        return Color(r, g, b)

    def save_as(self, path: str) -> None:
        """
        Save the canvas as a PNG image.

        Args:
            path: Output file path
        """
        logger.debug(f"save_as_png: {path}")
        self.image.save(path, format='PNG')


class WebCanvas(Canvas):
    """Vector canvas emitting HTML canvas drawing commands."""

    def __init__(self, width: int, height: int):
        super().__init__(width, height)
        self.commands: List[str] = []

    def paint_item(self, item: SolidColor) -> None:
        color, rect = item.color, item.rect
        self.commands.append(f"ctx.fillStyle = 'rgb({color.r}, {color.g}, {color.b})';")
        self.commands.append(
            f"ctx.fillRect({format_number(rect.x)}, {format_number(rect.y)}, "
            f"{format_number(rect.width)}, {format_number(rect.height)});")

    def to_html(self) -> str:
        return CANVAS_PAGE_TEMPLATE.format(width=self.width, height=self.height,
                                           commands="\n".join(self.commands))

    def save_as(self, path: str) -> None:
        """
        Save the canvas as an HTML page.

        Args:
            path: Output file path
        """
        logger.debug(f"save_as_html: {path}")
        with open(path, 'w', encoding='utf-8') as f:
            f.write(self.to_html())


def create_canvas(output_format: str, width: int, height: int) -> Canvas:
    """
    Create a canvas for an output format.

    Args:
        output_format: 'png' or 'canvas'
        width: Canvas width in pixels
        height: Canvas height in pixels

    Returns:
        The new canvas

    Raises:
        ValueError: If the format is unknown
    """
    if output_format == FORMAT_PNG:
        return PixelCanvas(width, height)
    if output_format == FORMAT_CANVAS:
        return WebCanvas(width, height)
    raise ValueError(f"Unknown output format {output_format!r}; expected one of {', '.join(FORMATS)}")


def format_for_path(path: str, default: str = FORMAT_PNG) -> str:
    """Guess the output format from a file extension."""
    extension = os.path.splitext(path)[1].lower()
    if extension in ('.html', '.htm'):
        return FORMAT_CANVAS
    return default
