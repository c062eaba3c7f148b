"""
Style tree.
This module builds a tree of specified values mirroring the document tree.
"""

import logging
from enum import Enum
from typing import Iterable, List, Optional

from ..css import Keyword, Stylesheet, Value
from ..dom import Node
from .cascade import PropertyMap, specified_values

logger = logging.getLogger(__name__)


class DisplayType(Enum):
    """Box classification derived from the ``display`` property."""
    BLOCK = "block"
    INLINE = "inline"
    NONE = "none"


class StyledNode:
    """
    A document node paired with its specified values.

    Holds a reference to the source node without owning it; the document
    tree must outlive the style tree.
    """

    def __init__(self, node: Node, values: Optional[PropertyMap] = None,
                 children: Iterable['StyledNode'] = ()):
        """
        Initialize a styled node.

        Args:
            node: The document node being styled
            values: Specified values resolved by the cascade
            children: Styled children in document order
        """
        self.node = node
        self.specified_values: PropertyMap = dict(values or {})
        self.children: List['StyledNode'] = list(children)

    def value(self, name: str) -> Optional[Value]:
        """
        Get the specified value of a property.

        Args:
            name: Property name

        Returns:
            The value, or None if the property is not set
        """
        return self.specified_values.get(name)

    def lookup(self, name: str, fallback_name: str, default: Value) -> Value:
        """
        Get a property, falling back to its shorthand and then to a default.

        Args:
            name: Longhand property name, e.g. 'margin-left'
            fallback_name: Shorthand property name, e.g. 'margin'
            default: Value used when neither is set

        Returns:
            The first value found
        """
        value = self.value(name)
        if value is None:
            value = self.value(fallback_name)
        if value is None:
            value = default
        return value

    def display(self) -> DisplayType:
        """
        Classify the node for box generation.

        Returns:
            BLOCK for 'block', NONE for 'none', INLINE for anything else
            including an unset property
        """
        value = self.value('display')
        if isinstance(value, Keyword):
            if value.name == 'block':
                return DisplayType.BLOCK
            if value.name == 'none':
                return DisplayType.NONE
        return DisplayType.INLINE

    def __repr__(self):
        return f"StyledNode({self.node.simple_name()!r}, {self.specified_values!r})"


def style_tree(root: Node, stylesheet: Stylesheet) -> StyledNode:
    """
    Apply a stylesheet to every node of a document tree.

    Text nodes get an empty property map. No default stylesheet is applied:
    callers set ``display: block`` themselves, e.g. with a universal rule.

    Args:
        root: Root of the document tree
        stylesheet: The stylesheet to apply

    Returns:
        The root of the style tree
    """
    values = specified_values(root, stylesheet) if root.is_element else {}
    return StyledNode(root, values, [style_tree(child, stylesheet) for child in root.children])
