"""
Rendering engine implementation.
This package styles a document tree with a stylesheet, lays it out as
nested block boxes and paints the result.
"""

from .core import RenderEngine
from .errors import LayoutInvariantError, ParseError

__all__ = ['RenderEngine', 'LayoutInvariantError', 'ParseError']
