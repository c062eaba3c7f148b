"""
Exceptions raised by the rendering engine.
"""

from typing import Optional


class ParseError(ValueError):
    """
    Raised when document or stylesheet source cannot be parsed.

    Carries the offending position (character offset) when one is known.
    """

    def __init__(self, message: str, position: Optional[int] = None):
        """
        Initialize a parse error.

        Args:
            message: Description of the problem
            position: Character offset in the source, if known
        """
        self.message = message
        self.position = position
        if position is not None:
            message = f"{message} (at offset {position})"
        super().__init__(message)


class LayoutInvariantError(RuntimeError):
    """
    Raised when the box tree breaks an invariant of the layout engine.

    These indicate a broken tree-construction step, never bad input data,
    so callers are not expected to recover from them.
    """
