# tests/test_library.py
import unittest

from viewmod.library import CapsuleText, ProminentTitle, Title, Watermark, register_library
from viewmod.modifiers import ModifierRegistry
from viewmod.styles import Alignment, Capsule, Colors, EdgeInsets, Font, RoundedRectangle
from viewmod.widgets import Color, Text, ZSTACK


class TestWatermark(unittest.TestCase):
    def test_watermark_layers_caption_over_content(self):
        content = Color.blue.frame(width=300, height=200)
        marked = content.watermarked("Hacking With Swift")

        self.assertEqual(marked.kind, ZSTACK)
        self.assertEqual(marked.content.alignment, Alignment.bottomTrailing)
        self.assertEqual(len(marked.children), 2)
        self.assertEqual(marked.children[0], content)

        caption = marked.children[1]
        self.assertEqual(caption.content, "Hacking With Swift")
        self.assertEqual(caption.resolved_properties(), {
            "font": Font.caption,
            "foregroundColor": Colors.white,
            "padding": EdgeInsets.all(5),
            "background": Colors.black,
        })

    def test_watermark_requires_text(self):
        registry = register_library(ModifierRegistry(on_duplicate="error"))
        with self.assertRaises(TypeError):
            registry.apply_modifier(Text("a"), "watermarked")

    def test_watermark_instance(self):
        marked = Text("a").modifier(Watermark("mark"))
        self.assertEqual(marked.children[1].content, "mark")


class TestTitles(unittest.TestCase):
    def test_prominent_title(self):
        title = Text("Hello").prominentTitle()
        self.assertEqual(title.resolved_properties(), {"font": Font.largeTitle, "foregroundColor": Colors.blue})
        self.assertEqual(title, Text("Hello").modifier(ProminentTitle()))

    def test_title_style_applies_layers_in_order(self):
        title = Text("Hello, world!").titleStyle()
        self.assertEqual([d.name for d in title.decorations],
                         ["font", "foregroundColor", "padding", "background", "clipShape"])
        props = title.resolved_properties()
        self.assertEqual(props["font"], Font.largeTitle)
        self.assertEqual(props["foregroundColor"], Colors.white)
        self.assertEqual(props["padding"], EdgeInsets.all(16))
        self.assertEqual(props["background"], Colors.blue)
        self.assertEqual(props["clipShape"], RoundedRectangle(cornerRadius=10))
        self.assertEqual(title, Text("Hello, world!").modifier(Title()))

    def test_register_library_names(self):
        registry = register_library(ModifierRegistry(on_duplicate="error"))
        for name in ("prominentTitle", "watermarked", "titleStyle"):
            self.assertIn(name, registry)
        self.assertEqual(registry.describe()["titleStyle"], "White large title on a rounded blue background.")


class TestCapsuleText(unittest.TestCase):
    def test_capsule_text_leaves_color_to_caller(self):
        element = CapsuleText("First").as_element()
        props = element.resolved_properties()
        self.assertEqual(element.content, "First")
        self.assertNotIn("foregroundColor", props)
        self.assertEqual(props["clipShape"], Capsule())
        self.assertEqual(props["background"], Colors.blue)

    def test_caller_color_is_applied_last(self):
        element = CapsuleText("Second").foregroundColor(Colors.yellow)
        self.assertEqual(element.decorations[-1].name, "foregroundColor")
        self.assertEqual(element.resolved_properties()["foregroundColor"], Colors.yellow)

    def test_key_is_carried_to_the_element(self):
        element = CapsuleText("First", key="first").as_element()
        self.assertEqual(element.key.value, "first")


if __name__ == "__main__":
    unittest.main()
