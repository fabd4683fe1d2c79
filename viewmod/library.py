# viewmod/library.py
"""
Ready-made styles built from the primitive modifiers.

``register_library`` adds them to a registry under the names used by the
fluent API: ``prominentTitle``, ``watermarked`` and ``titleStyle``.
"""
from typing import Optional

from .base import Element, Key
from .modifiers import ModifierRegistry, ViewModifier
from .state import StatelessView
from .styles import Alignment, Capsule, Colors, Font, RoundedRectangle
from .widgets import Text, ZStack


class ProminentTitle(ViewModifier):
    """Large blue title text."""

    def body(self, content: Element) -> Element:
        return (content
                .font(Font.largeTitle)
                .foregroundColor(Colors.blue))


class Watermark(ViewModifier):
    """Overlay a small caption in the bottom-trailing corner of the content."""

    def __init__(self, text: str):
        self.text = text

    def body(self, content: Element) -> Element:
        return ZStack(
            content,
            Text(self.text)
                .font(Font.caption)
                .foregroundColor(Colors.white)
                .padding(5)
                .background(Colors.black),
            alignment=Alignment.bottomTrailing,
        )


class Title(ViewModifier):
    """White large title on a rounded blue background."""

    def body(self, content: Element) -> Element:
        return (content
                .font(Font.largeTitle)
                .foregroundColor(Colors.white)
                .padding()
                .background(Colors.blue)
                .clipShape(RoundedRectangle(cornerRadius=10)))


class CapsuleText(StatelessView):
    """Large text on a blue capsule. The text color is left to the caller."""

    def __init__(self, text: str, key: Optional[Key] = None):
        super().__init__(key=key)
        self.text = text

    def build(self) -> Element:
        return (Text(self.text)
                .font(Font.largeTitle)
                .padding()
                .background(Colors.blue)
                .clipShape(Capsule()))


def register_library(registry: ModifierRegistry) -> ModifierRegistry:
    registry.define_modifier("prominentTitle", ProminentTitle)
    registry.define_modifier("watermarked", Watermark)
    registry.define_modifier("titleStyle", Title)
    return registry
