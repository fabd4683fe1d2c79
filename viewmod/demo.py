# viewmod/demo.py
"""
The tutorial screen: one stateful view with every variant of the lesson.

``ContentView(variant)`` renders the variant named by `variant`; all of them
share the same state object, so the toggle in ``body4`` and ``body5`` flips
the same flag.
"""
import logging
from typing import Optional

from .base import Element, Group, Key, view_builder
from .library import CapsuleText
from .state import State, StatefulView
from .styles import Colors, Font, infinity
from .widgets import Button, Color, Text, VStack

logger = logging.getLogger(__name__)

VARIANTS = (
    "body", "body1", "body2", "body3", "body4", "body5",
    "body6", "body7", "body8", "body9",
    "spells", "spells1", "spells2",
)


class ContentViewState(State):
    def initState(self):
        self.useRedText = False
        self.motto2 = Text("nunquam titillandus")

    def build(self) -> Element:
        return getattr(self, self.get_view().variant)()

    def toggle_red_text(self):
        self.useRedText = not self.useRedText
        self.setState()

    # --- Variants ---
    @view_builder
    def body(self):
        return (
            Color.blue
                .frame(width=300, height=200)
                .watermarked("Hacking With Swift"),
            # modifiers return new elements rather than changing existing ones
            Text("Hello, world!")
                .titleStyle(),
        )

    def body1(self) -> Element:
        return VStack(
            CapsuleText("First")
                .foregroundColor(Colors.white),
            CapsuleText("Second")
                .foregroundColor(Colors.yellow),
            spacing=10,
        )

    def motto1(self) -> Element:
        return Text("Draco dormiens")

    def spells(self) -> Element:
        return VStack(
            Text("Lumos"),
            Text("Obliviate"),
        )

    def spells1(self) -> Element:
        # arrangement is left to whichever container the group ends up in
        return Group(
            Text("Lumos"),
            Text("Obliviate"),
        )

    @view_builder
    def spells2(self):
        return (
            Text("Lumos"),
            Text("Obliviate"),
        )

    def body2(self) -> Element:
        return VStack(
            self.motto1()
                .foregroundColor(Colors.red),
            self.motto2
                .foregroundColor(Colors.blue),
        )

    def body3(self) -> Element:
        return VStack(
            Text("Gryf")
                # a child's font wins over the font set on the stack
                .font(Font.largeTitle)
                # blur adds to the stack's blur instead of replacing it
                .blur(0),
            Text("Huff"),
            Text("Rave"),
            Text("Slyth"),
        ).font(Font.title).blur(5)

    def body4(self) -> Element:
        return (Button("Hello, world!", self.toggle_red_text, key=Key("hello-button"))
                .foregroundColor(Colors.red if self.useRedText else Colors.blue))

    def body5(self) -> Element:
        return (Button("Hello, world!", self.toggle_red_text, key=Key("hello-button"))
                .foregroundColor(Colors.red if self.useRedText else Colors.blue))

    @view_builder
    def body6(self):
        return (
            Text("Hello"),
            Text("World"),
            Text("Goodbye"),
            Text("World"),
        )

    def body7(self) -> Element:
        return VStack(
            Text("Hello"),
            Text("World"),
            Text("Goodbye"),
            Text("World"),
        )

    def body8(self) -> Element:
        # order matters: the background fills the 200x200 frame, not just the label
        return (Button("Hello world", self._log_body_type)
                .frame(width=200, height=200)
                .background(Colors.red))

    def body9(self) -> Element:
        # the text has nothing behind it; the frame has to grow for the background to fill the screen
        return (Text("Hello, world!")
                .frame(maxWidth=infinity, maxHeight=infinity)
                .background(Colors.red))

    def _log_body_type(self):
        logger.info("body is %r", self.body())


class ContentView(StatefulView):
    """The lesson's screen. `variant` picks which body is shown."""

    def __init__(self, variant: str = "body", key: Optional[Key] = None):
        if variant not in VARIANTS:
            raise ValueError(f"Unknown variant '{variant}'. Choose one of: {', '.join(VARIANTS)}")
        self.variant = variant
        super().__init__(key=key)

    def createState(self) -> ContentViewState:
        return ContentViewState()
