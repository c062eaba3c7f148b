"""
Element implementation for the DOM.
This module implements elements: a tag name, an attribute map and children.
"""

from typing import Any, Dict, Iterable, Optional, Set

from .node import Node, NodeType


class Element(Node):
    """
    Element node implementation for the DOM.

    Attribute keys are unique. The ``class`` attribute is stored as the
    original space separated string and exploded into a set when asked for.
    """

    def __init__(self,
                 tag_name: str,
                 attributes: Optional[Dict[str, str]] = None,
                 children: Iterable[Node] = ()):
        """
        Initialize a new Element.

        Args:
            tag_name: Name of the element tag (e.g., "div", "span")
            attributes: Attribute map
            children: Child nodes in document order
        """
        super().__init__(NodeType.ELEMENT_NODE, children)

        self.tag_name = tag_name
        self.attributes: Dict[str, str] = dict(attributes or {})

    @property
    def id(self) -> Optional[str]:
        """Get the ID of the element, or None when it has none."""
        return self.attributes.get('id')

    def classes(self) -> Set[str]:
        """
        Get the classes applied to this element.

        Returns:
            Set of class names from the ``class`` attribute
        """
        class_attr = self.attributes.get('class')
        if not class_attr:
            return set()
        return set(class_attr.split())

    def get_attribute(self, name: str) -> Optional[str]:
        """
        Get an attribute value.

        Args:
            name: Attribute name

        Returns:
            The attribute value, or None if not present
        """
        return self.attributes.get(name)

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def simple_name(self) -> str:
        return self.tag_name

    def to_sexpr(self, recursive: bool = True) -> str:
        parts = [self.tag_name]
        parts.extend(f"{key}={value}" for key, value in sorted(self.attributes.items()))
        if recursive:
            parts.extend(child.to_sexpr(recursive=True) for child in self.children)
        return f"({' '.join(parts)})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Element):
            return NotImplemented
        return (self.tag_name == other.tag_name
                and self.attributes == other.attributes
                and self.children == other.children)

    __hash__ = None

    def __repr__(self):
        return f"Element({self.tag_name!r}, {self.attributes!r}, {len(self.children)} children)"
