"""
Core implementation for the rendering engine.
This module contains the main RenderEngine class.
"""

from .engine import RenderEngine

__all__ = ['RenderEngine']
