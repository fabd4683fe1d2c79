# viewmod/styles.py
"""
Value types used as decoration parameters.

All of them are immutable and expose ``to_tuple()`` (hashing, comparison)
and ``to_dict()`` (plain data for render output).
"""
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Union


class Colors:
    """Named colors. Values are plain strings so they compare and print simply."""
    blue = "blue"
    red = "red"
    white = "white"
    black = "black"
    yellow = "yellow"
    green = "green"
    gray = "gray"
    clear = "clear"
    primary = "primary"


class Alignment:
    """Alignment guides for stacks and overlays."""
    topLeading = "topLeading"
    top = "top"
    topTrailing = "topTrailing"
    leading = "leading"
    center = "center"
    trailing = "trailing"
    bottomLeading = "bottomLeading"
    bottom = "bottom"
    bottomTrailing = "bottomTrailing"


@dataclass(frozen=True)
class Font:
    """A text style with its nominal point size."""
    style: str
    size: float

    def to_tuple(self):
        return (self.style, self.size)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def __str__(self):
        return self.style


Font.largeTitle = Font("largeTitle", 34)
Font.title = Font("title", 28)
Font.headline = Font("headline", 17)
Font.body = Font("body", 17)
Font.caption = Font("caption", 12)


@dataclass(frozen=True)
class EdgeInsets:
    """
    Insets on each of the four sides. Insets add up side by side, which is
    what makes padding an additive property.
    """
    top: float = 0
    left: float = 0
    bottom: float = 0
    right: float = 0

    @classmethod
    def all(cls, value: float) -> 'EdgeInsets':
        return cls(value, value, value, value)

    @classmethod
    def symmetric(cls, vertical: float = 0, horizontal: float = 0) -> 'EdgeInsets':
        return cls(vertical, horizontal, vertical, horizontal)

    @classmethod
    def only(cls, top: float = 0, left: float = 0, bottom: float = 0, right: float = 0) -> 'EdgeInsets':
        return cls(top, left, bottom, right)

    @classmethod
    def coerce(cls, value: Union['EdgeInsets', float, int]) -> 'EdgeInsets':
        if isinstance(value, EdgeInsets):
            return value
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise TypeError(f"Cannot use {value!r} as EdgeInsets")
        return cls.all(value)

    def __add__(self, other: 'EdgeInsets') -> 'EdgeInsets':
        other = EdgeInsets.coerce(other)
        return EdgeInsets(
            self.top + other.top,
            self.left + other.left,
            self.bottom + other.bottom,
            self.right + other.right,
        )

    def to_tuple(self):
        return (self.top, self.left, self.bottom, self.right)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class Frame:
    """Proposed size for an element. ``float('inf')`` fills the available space."""
    width: Optional[float] = None
    height: Optional[float] = None
    maxWidth: Optional[float] = None
    maxHeight: Optional[float] = None

    def to_tuple(self):
        return (self.width, self.height, self.maxWidth, self.maxHeight)

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


infinity = float('inf')


# --- Shapes ---
@dataclass(frozen=True)
class Shape:
    """Base class for clip shapes and shape elements."""

    @property
    def name(self) -> str:
        return type(self).__name__

    def to_tuple(self):
        return (self.name,) + tuple(asdict(self).values())

    def to_dict(self) -> Dict[str, Any]:
        return {'shape': self.name, **asdict(self)}


@dataclass(frozen=True)
class Rectangle(Shape):
    pass


@dataclass(frozen=True)
class RoundedRectangle(Shape):
    cornerRadius: float = 0


@dataclass(frozen=True)
class Capsule(Shape):
    pass


@dataclass(frozen=True)
class Circle(Shape):
    pass
