"""
CSS box model geometry: the content rectangle and the per-edge sizes
of padding, border and margin.
"""

import math
from typing import Tuple


def format_number(value: float) -> str:
    """Format a pixel amount, dropping the fraction when it is integral."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def nearly_equal(a: float, b: float) -> bool:
    return math.isclose(a, b, rel_tol=0.0, abs_tol=1e-6)


class Rect:
    """An axis-aligned rectangle in document coordinates."""

    def __init__(self, x: float = 0.0, y: float = 0.0, width: float = 0.0, height: float = 0.0):
        self.x = x
        self.y = y
        self.width = width
        self.height = height

    def expanded_by(self, edges: 'EdgeSizes') -> 'Rect':
        """
        Grow the rectangle outwards by a set of edge sizes.

        Args:
            edges: Amount to add on each side

        Returns:
            A new, larger rectangle
        """
        return Rect(
            self.x - edges.left,
            self.y - edges.top,
            self.width + edges.left + edges.right,
            self.height + edges.top + edges.bottom,
        )

    def to_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)

    def copy(self) -> 'Rect':
        return Rect(*self.to_tuple())

    def __eq__(self, other):
        if not isinstance(other, Rect):
            return NotImplemented
        return self.to_tuple() == other.to_tuple()

    def __str__(self):
        return (f"({format_number(self.x)}, {format_number(self.y)}) "
                f"[{format_number(self.width)}x{format_number(self.height)}]")

    def __repr__(self):
        return f"Rect(x={self.x}, y={self.y}, width={self.width}, height={self.height})"


class EdgeSizes:
    """Sizes of the four edges of a padding, border or margin area."""

    def __init__(self, left: float = 0.0, right: float = 0.0, top: float = 0.0,
                 bottom: float = 0.0):
        self.left = left
        self.right = right
        self.top = top
        self.bottom = bottom

    def to_tuple(self) -> Tuple[float, float, float, float]:
        return (self.left, self.right, self.top, self.bottom)

    def copy(self) -> 'EdgeSizes':
        return EdgeSizes(*self.to_tuple())

    def __eq__(self, other):
        if not isinstance(other, EdgeSizes):
            return NotImplemented
        return self.to_tuple() == other.to_tuple()

    def __str__(self):
        # Same collapsing rules as the CSS shorthand
        top, right = format_number(self.top), format_number(self.right)
        bottom, left = format_number(self.bottom), format_number(self.left)
        if (nearly_equal(self.left, self.right) and nearly_equal(self.right, self.top)
                and nearly_equal(self.top, self.bottom)):
            return top
        if nearly_equal(self.left, self.right) and nearly_equal(self.top, self.bottom):
            return f"{top} {right}"
        if nearly_equal(self.left, self.right):
            return f"{top} {right} {bottom}"
        return f"{top} {right} {bottom} {left}"

    def __repr__(self):
        return (f"EdgeSizes(left={self.left}, right={self.right}, "
                f"top={self.top}, bottom={self.bottom})")


class Dimensions:
    """
    Represents the CSS box model metrics for a layout box.

    ``content`` is positioned relative to the document origin. The padding,
    border and margin boxes are derived on demand and never stored.
    """

    def __init__(self, content: Rect = None, padding: EdgeSizes = None,
                 border: EdgeSizes = None, margin: EdgeSizes = None):
        self.content = content if content is not None else Rect()
        self.padding = padding if padding is not None else EdgeSizes()
        self.border = border if border is not None else EdgeSizes()
        self.margin = margin if margin is not None else EdgeSizes()

    def padding_box(self) -> Rect:
        """The content area plus padding."""
        return self.content.expanded_by(self.padding)

    def border_box(self) -> Rect:
        """The content area plus padding and borders."""
        return self.padding_box().expanded_by(self.border)

    def margin_box(self) -> Rect:
        """The content area plus padding, borders and margins."""
        return self.border_box().expanded_by(self.margin)

    def copy(self) -> 'Dimensions':
        return Dimensions(self.content.copy(), self.padding.copy(), self.border.copy(),
                          self.margin.copy())

    def __eq__(self, other):
        if not isinstance(other, Dimensions):
            return NotImplemented
        return (self.content == other.content and self.padding == other.padding
                and self.border == other.border and self.margin == other.margin)

    def __str__(self):
        return (f"{self.content} (padding: {self.padding}, border: {self.border}, "
                f"margin: {self.margin})")

    def __repr__(self):
        return f"Dimensions({self})"


def viewport(width: float, height: float = 0.0) -> Dimensions:
    """
    Build the initial containing block.

    Args:
        width: Viewport width in pixels
        height: Starting content height; children are stacked below it

    Returns:
        Dimensions whose content rectangle sits at the origin
    """
    return Dimensions(content=Rect(0.0, 0.0, width, height))
