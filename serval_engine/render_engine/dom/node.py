"""
Node implementation for the DOM.
This module implements the base node shared by elements and text.
"""

from enum import IntEnum
from typing import Iterable, List


class NodeType(IntEnum):
    """Node types the engine builds, numbered as in the DOM specification."""
    ELEMENT_NODE = 1
    TEXT_NODE = 3


class Node:
    """
    Base Node implementation for the DOM.

    Nodes own their children in document order. The tree is built once by a
    parser and is not mutated by styling or layout.
    """

    def __init__(self, node_type: NodeType, children: Iterable['Node'] = ()):
        """
        Initialize a new Node.

        Args:
            node_type: The type of this node
            children: Child nodes in document order
        """
        self.node_type = node_type
        self.children: List['Node'] = list(children)

    @property
    def is_element(self) -> bool:
        return self.node_type == NodeType.ELEMENT_NODE

    @property
    def is_text(self) -> bool:
        return self.node_type == NodeType.TEXT_NODE

    def simple_name(self) -> str:
        """
        Get a short label for the node.

        Returns:
            The tag name for elements, the text itself for text nodes
        """
        raise NotImplementedError

    def to_sexpr(self, recursive: bool = True) -> str:
        """
        Render the node in the compact document notation.

        Args:
            recursive: Whether to include the children

        Returns:
            The node as ``(tag key=value child...)`` or ``"text"``
        """
        raise NotImplementedError

    def __str__(self):
        return self.to_sexpr(recursive=False)
