"""
DOM Implementation for the rendering engine.
This package provides the document tree (elements and text) and its parsers.
"""

from .node import Node, NodeType
from .element import Element
from .text import Text
from .parser import DocumentParser, parse_document, SYNTAXES

__all__ = [
    'Node', 'NodeType', 'Element', 'Text', 'DocumentParser', 'parse_document', 'SYNTAXES'
]
