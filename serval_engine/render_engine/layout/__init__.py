"""
Layout Implementation for the rendering engine.
This package provides the box model geometry and the block layout engine.
"""

from .box_metrics import Dimensions, EdgeSizes, Rect, viewport
from .layout import BoxType, LayoutBox, build_layout_tree, layout_tree

__all__ = [
    'Dimensions', 'EdgeSizes', 'Rect', 'viewport',
    'BoxType', 'LayoutBox', 'build_layout_tree', 'layout_tree',
]
