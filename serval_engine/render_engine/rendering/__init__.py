"""
Rendering Implementation for the rendering engine.
This package paints laid-out box trees to PNG images or HTML canvas pages.
"""

from .renderer import (FORMATS, Canvas, PixelCanvas, SolidColor, WebCanvas, build_display_list,
                       create_canvas, format_for_path)

__all__ = [
    'FORMATS', 'Canvas', 'PixelCanvas', 'SolidColor', 'WebCanvas', 'build_display_list',
    'create_canvas', 'format_for_path',
]
