# viewmod/widgets.py
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from .base import Element, Key, coerce_children
from .styles import Alignment, Colors, Shape


TEXT = "text"
COLOR = "color"
SHAPE = "shape"
BUTTON = "button"
SPACER = "spacer"
VSTACK = "vstack"
HSTACK = "hstack"
ZSTACK = "zstack"


@dataclass(frozen=True)
class StackLayout:
    """How a stack arranges its children."""
    alignment: str = Alignment.center
    spacing: Optional[float] = None

    def to_tuple(self):
        return (self.alignment, self.spacing)

    def to_dict(self) -> Dict[str, Any]:
        data = {'alignment': self.alignment}
        if self.spacing is not None:
            data['spacing'] = self.spacing
        return data


class Text(Element):
    """
    A run of text.

    Args:
        data (str): The text content to render.
        key (Optional[Key]): Optional key identifying this element across renders.
    """
    def __init__(self, data: str, key: Optional[Key] = None):
        super().__init__(kind=TEXT, content=str(data), key=key)


class Color(Element):
    """A block of solid color that fills whatever space it is offered."""
    def __init__(self, color: str, key: Optional[Key] = None):
        super().__init__(kind=COLOR, content=color, key=key)


Color.blue = Color(Colors.blue)
Color.red = Color(Colors.red)
Color.white = Color(Colors.white)
Color.black = Color(Colors.black)
Color.yellow = Color(Colors.yellow)
Color.green = Color(Colors.green)


class ShapeView(Element):
    """A shape drawn as an element in its own right (as opposed to a clip shape)."""
    def __init__(self, shape: Shape, key: Optional[Key] = None):
        super().__init__(kind=SHAPE, content=shape, key=key)


class Button(Element):
    """
    A tappable label. `action` is called with no arguments when the button is tapped.
    """
    def __init__(self, label: str, action: Optional[Callable[[], Any]] = None, key: Optional[Key] = None):
        super().__init__(kind=BUTTON, content=str(label), key=key, action=action)


class Spacer(Element):
    def __init__(self, key: Optional[Key] = None):
        super().__init__(kind=SPACER, key=key)


class _Stack(Element):
    _kind = ""
    _default_alignment = Alignment.center

    def __init__(self, *children, alignment: Optional[str] = None, spacing: Optional[float] = None,
                 key: Optional[Key] = None):
        if len(children) == 1 and isinstance(children[0], (list, tuple)):
            children = tuple(children[0])
        layout = StackLayout(alignment or self._default_alignment, spacing)
        super().__init__(kind=self._kind, content=layout, children=coerce_children(children), key=key)


class VStack(_Stack):
    """Arranges children top to bottom."""
    _kind = VSTACK


class HStack(_Stack):
    """Arranges children leading to trailing."""
    _kind = HSTACK


class ZStack(_Stack):
    """Layers children back to front, the first child at the back."""
    _kind = ZSTACK
