# tests/test_modifiers.py
import unittest

from viewmod.base import Combine, DecorationKind, Element
from viewmod.exceptions import (
    ConfigurationError,
    DuplicateNameError,
    InvalidElementError,
    ModifierArgumentError,
    RegistryFrozenError,
    UnknownModifierError,
)
from viewmod.modifiers import BUILTINS, ModifierRegistry, ViewModifier, get_registry
from viewmod.styles import Capsule, Colors, EdgeInsets, Font, Frame
from viewmod.widgets import Color, Text


class Shout(ViewModifier):
    """Large red text."""

    def body(self, content):
        return content.font(Font.largeTitle).foregroundColor(Colors.red)


class Border(ViewModifier):
    def __init__(self, width, color=Colors.black):
        self.width = width
        self.color = color

    def body(self, content):
        return content.padding(self.width).background(self.color)


def underline(content, color=Colors.black):
    """Underline the content."""
    return content.background(color)


class TestRegistration(unittest.TestCase):
    def setUp(self):
        self.registry = ModifierRegistry(on_duplicate="error")

    def test_builtins_are_registered(self):
        for name in BUILTINS:
            self.assertIn(name, self.registry)
        self.assertEqual(len(self.registry), len(BUILTINS))

    def test_empty_registry(self):
        registry = ModifierRegistry(builtins=False)
        self.assertEqual(registry.names(), [])

    def test_define_and_describe(self):
        self.registry.define_modifier("underline", underline)
        self.registry.define_modifier("shout", Shout)
        self.registry.define_modifier("plain", lambda content: content, description="Does nothing")
        described = self.registry.describe()
        self.assertEqual(described["underline"], "Underline the content.")
        self.assertEqual(described["shout"], "Large red text.")
        self.assertEqual(described["plain"], "Does nothing")
        self.assertEqual(described["font"], "Set the text style. Cascades to descendants.")

    def test_duplicate_name_is_fatal_by_default(self):
        self.registry.define_modifier("underline", underline)
        with self.assertRaises(DuplicateNameError) as ctx:
            self.registry.define_modifier("underline", underline)
        self.assertIn("underline", str(ctx.exception))

    def test_duplicate_builtin_name_is_fatal(self):
        with self.assertRaises(DuplicateNameError):
            self.registry.define_modifier("font", underline)

    def test_shadow_policy_replaces(self):
        registry = ModifierRegistry(on_duplicate="shadow")
        registry.define_modifier("style", underline)
        with self.assertLogs("viewmod.modifiers", level="WARNING"):
            registry.define_modifier("style", Shout)
        styled = registry.apply_modifier(Text("a"), "style")
        self.assertEqual(styled.resolved_properties()["foregroundColor"], Colors.red)

    def test_unknown_policy(self):
        with self.assertRaises(ConfigurationError):
            ModifierRegistry(on_duplicate="ignore")

    def test_frozen_registry_rejects_definitions(self):
        self.registry.freeze()
        self.assertTrue(self.registry.is_frozen)
        with self.assertRaises(RegistryFrozenError):
            self.registry.define_modifier("underline", underline)

    def test_non_callable_transform(self):
        with self.assertRaises(TypeError):
            self.registry.define_modifier("broken", "not callable")


class TestApplyModifier(unittest.TestCase):
    def setUp(self):
        self.registry = ModifierRegistry(on_duplicate="error")
        self.registry.define_modifier("underline", underline)
        self.registry.define_modifier("shout", Shout)
        self.registry.define_modifier("border", Border)

    def test_unknown_modifier(self):
        with self.assertRaises(UnknownModifierError) as ctx:
            self.registry.apply_modifier(Text("a"), "sparkle")
        message = str(ctx.exception)
        self.assertIn("sparkle", message)
        self.assertIn("font", message)

    def test_apply_does_not_mutate_input(self):
        text = Text("Hello")
        before = text.to_dict()
        result = self.registry.apply_modifier(text, "font", font=Font.title)
        self.assertIsNot(result, text)
        self.assertEqual(text.decorations, ())
        self.assertEqual(text.to_dict(), before)
        self.assertEqual(result.resolved_properties(), {"font": Font.title})

    def test_function_modifier_with_params(self):
        result = self.registry.apply_modifier(Text("a"), "underline", color=Colors.red)
        self.assertEqual(result.resolved_properties()["background"], Colors.red)

    def test_view_modifier_class_with_params(self):
        result = self.registry.apply_modifier(Text("a"), "border", width=2, color=Colors.green)
        props = result.resolved_properties()
        self.assertEqual(props["padding"], EdgeInsets.all(2))
        self.assertEqual(props["background"], Colors.green)

    def test_bad_arguments(self):
        with self.assertRaises(ModifierArgumentError):
            self.registry.apply_modifier(Text("a"), "font", size=3)
        with self.assertRaises(ModifierArgumentError):
            self.registry.apply_modifier(Text("a"), "border")
        with self.assertRaises(TypeError):
            self.registry.apply_modifier(Text("a"), "shout", loud=True)

    def test_bad_values(self):
        with self.assertRaises(ModifierArgumentError):
            self.registry.apply_modifier(Text("a"), "blur", radius=-1)
        with self.assertRaises(ModifierArgumentError):
            self.registry.apply_modifier(Text("a"), "padding", insets="wide")

    def test_transform_must_return_an_element(self):
        self.registry.define_modifier("nothing", lambda content: None)
        with self.assertRaises(InvalidElementError):
            self.registry.apply_modifier(Text("a"), "nothing")

    def test_builtin_decoration_kinds(self):
        text = Text("a")
        font = self.registry.apply_modifier(text, "font", font=Font.body).decorations[-1]
        self.assertEqual(font.kind, DecorationKind.CASCADING)
        self.assertEqual(font.combine, Combine.EXCLUSIVE)
        padding = self.registry.apply_modifier(text, "padding", insets=3).decorations[-1]
        self.assertEqual(padding.kind, DecorationKind.LOCAL)
        self.assertEqual(padding.combine, Combine.ADDITIVE)
        blur = self.registry.apply_modifier(text, "blur", radius=1).decorations[-1]
        self.assertEqual((blur.kind, blur.combine), (DecorationKind.CASCADING, Combine.ADDITIVE))
        clip = self.registry.apply_modifier(text, "clipShape", shape=Capsule()).decorations[-1]
        self.assertEqual((clip.kind, clip.combine), (DecorationKind.LOCAL, Combine.EXCLUSIVE))

    def test_default_padding(self):
        result = self.registry.apply_modifier(Text("a"), "padding")
        self.assertEqual(result.resolved_properties()["padding"], EdgeInsets.all(16))

    def test_frame(self):
        result = self.registry.apply_modifier(Color.blue, "frame", width=300, height=200)
        self.assertEqual(result.resolved_properties()["frame"], Frame(width=300, height=200))


class TestCompose(unittest.TestCase):
    def setUp(self):
        self.registry = ModifierRegistry(on_duplicate="error")
        self.registry.define_modifier("shout", Shout)

    def test_compose_is_deterministic(self):
        steps = ["shout", ("padding", {"insets": 4}), ("blur", {"radius": 2})]
        first = self.registry.compose(Text("a"), steps)
        second = self.registry.compose(Text("a"), steps)
        self.assertEqual(first, second)
        self.assertEqual(first.to_dict(), second.to_dict())

    def test_order_matters_for_exclusive_properties(self):
        large = ("font", {"font": Font.largeTitle})
        small = ("font", {"font": Font.caption})
        a = self.registry.compose(Text("a"), [large, small])
        b = self.registry.compose(Text("a"), [small, large])
        self.assertNotEqual(a, b)
        self.assertEqual(a.resolved_properties()["font"], Font.caption)
        self.assertEqual(b.resolved_properties()["font"], Font.largeTitle)

    def test_additive_properties_accumulate(self):
        result = self.registry.compose(Text("a"), [
            ("blur", {"radius": 2}),
            ("padding", {"insets": 5}),
            ("blur", {"radius": 3}),
            ("padding", {"insets": EdgeInsets.only(top=1)}),
        ])
        props = result.resolved_properties()
        self.assertEqual(props["blur"], 5)
        self.assertEqual(props["padding"], EdgeInsets(6, 5, 5, 5))

    def test_decorations_keep_application_order(self):
        result = self.registry.compose(Text("a"), ["shout", ("background", {"color": Colors.black})])
        self.assertEqual([d.name for d in result.decorations], ["font", "foregroundColor", "background"])

    def test_view_modifier_instances_as_steps(self):
        result = self.registry.compose(Text("a"), [Border(1), (Shout(), {})])
        self.assertEqual([d.name for d in result.decorations],
                         ["padding", "background", "font", "foregroundColor"])

    def test_view_modifier_instance_rejects_params(self):
        with self.assertRaises(ModifierArgumentError):
            self.registry.compose(Text("a"), [(Shout(), {"loud": True})])

    def test_step_tuples_must_be_pairs(self):
        for step in [("padding", {}, 1), ("padding",), ()]:
            with self.subTest(step=step):
                with self.assertRaises(ModifierArgumentError):
                    self.registry.compose(Text("a"), [step])

    def test_compose_stops_at_first_error(self):
        with self.assertRaises(UnknownModifierError):
            self.registry.compose(Text("a"), ["shout", "missing", "shout"])

    def test_empty_compose_returns_input(self):
        text = Text("a")
        self.assertIs(self.registry.compose(text, []), text)

    def test_compose_accepts_views(self):
        from viewmod.library import CapsuleText
        result = self.registry.compose(CapsuleText("a"), ["shout"])
        self.assertIsInstance(result, Element)
        self.assertEqual(result.decorations[-1].name, "foregroundColor")


class TestDefaultRegistry(unittest.TestCase):
    def test_default_registry_is_shared_and_frozen(self):
        registry = get_registry()
        self.assertIs(registry, get_registry())
        self.assertTrue(registry.is_frozen)
        for name in ("prominentTitle", "watermarked", "titleStyle", "font", "blur"):
            self.assertIn(name, registry)
        with self.assertRaises(RegistryFrozenError):
            registry.define_modifier("late", underline)

    def test_fluent_api_matches_registry(self):
        registry = get_registry()
        self.assertEqual(Text("a").font(Font.title), registry.apply_modifier(Text("a"), "font", font=Font.title))
        self.assertEqual(Text("a").modifier("blur", radius=2), Text("a").blur(2))
        self.assertEqual(Text("a").modifier(Shout()), Text("a").font(Font.largeTitle).foregroundColor(Colors.red))


if __name__ == "__main__":
    unittest.main()
