"""
Text node implementation for the DOM.
"""

from typing import Any

from .node import Node, NodeType


class Text(Node):
    """
    Text node implementation for the DOM.

    Text never carries attributes or children and is never matched by selectors.
    """

    def __init__(self, data: str):
        """
        Initialize a text node.

        Args:
            data: The text content
        """
        super().__init__(NodeType.TEXT_NODE)

        # Ensure data is not None
        if data is None:
            data = ""

        self.data = data

    def simple_name(self) -> str:
        return self.data

    def to_sexpr(self, recursive: bool = True) -> str:
        escaped = self.data.replace('\\', '\\\\').replace('"', '\\"')
        return f'"{escaped}"'

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Text):
            return NotImplemented
        return self.data == other.data

    def __hash__(self) -> int:
        return hash(self.data)

    def __repr__(self):
        return f"Text({self.data!r})"
