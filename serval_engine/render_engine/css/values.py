"""
CSS value types.
This module defines the resolved values a declaration can carry: keywords,
pixel lengths and RGB colors.
"""

from enum import Enum
from typing import Any, Tuple


class Unit(Enum):
    """Length units. Only device-independent pixels are modeled."""
    PX = "px"


class Color:
    """An opaque RGB color with 8-bit channels."""

    def __init__(self, r: int = 0, g: int = 0, b: int = 0):
        self.r = r
        self.g = g
        self.b = b

    def to_tuple(self) -> Tuple[int, int, int]:
        """Get the color as an ``(r, g, b)`` tuple."""
        return (self.r, self.g, self.b)

    def to_hex(self) -> str:
        """Get the color in ``#rrggbb`` notation."""
        return f"#{self.r:02x}{self.g:02x}{self.b:02x}"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return self.to_tuple() == other.to_tuple()

    def __hash__(self) -> int:
        return hash(self.to_tuple())

    def __repr__(self):
        return f"Color({self.r}, {self.g}, {self.b})"


class Value:
    """
    Base class for a specified CSS value.

    Values compare structurally, so ``Keyword('auto') == AUTO`` holds no
    matter where either side was created.
    """

    def to_px(self) -> float:
        """
        Get the value in pixels.

        Returns:
            The pixel amount for lengths, 0.0 for every other value
        """
        return 0.0

    def _key(self) -> Tuple:
        raise NotImplementedError

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Value):
            return NotImplemented
        return type(self) is type(other) and self._key() == other._key()

    def __hash__(self) -> int:
        return hash((type(self).__name__,) + self._key())


class Keyword(Value):
    """An identifier value such as ``block`` or ``auto``."""

    def __init__(self, name: str):
        self.name = name

    def _key(self) -> Tuple:
        return (self.name,)

    def __str__(self):
        return self.name

    def __repr__(self):
        return f"Keyword({self.name!r})"


class Length(Value):
    """A numeric length. The amount may be negative."""

    def __init__(self, amount: float, unit: Unit = Unit.PX):
        self.amount = float(amount)
        self.unit = unit

    def to_px(self) -> float:
        if self.unit is Unit.PX:
            return self.amount
        return 0.0

    def _key(self) -> Tuple:
        return (self.amount, self.unit)

    def __str__(self):
        amount = int(self.amount) if self.amount.is_integer() else self.amount
        return f"{amount}{self.unit.value}"

    def __repr__(self):
        return f"Length({self.amount}, {self.unit})"


class ColorValue(Value):
    """A color value."""

    def __init__(self, color: Color):
        self.color = color

    @classmethod
    def rgb(cls, r: int, g: int, b: int) -> 'ColorValue':
        """Create a color value from its channels."""
        return cls(Color(r, g, b))

    def _key(self) -> Tuple:
        return self.color.to_tuple()

    def __str__(self):
        return self.color.to_hex()

    def __repr__(self):
        return f"ColorValue({self.color!r})"


# Shared sentinels used by the layout engine
AUTO = Keyword("auto")
LENGTH_ZERO = Length(0.0)


def px(amount: float) -> Length:
    """Shorthand for a pixel length."""
    return Length(amount, Unit.PX)
