# viewmod/modifiers.py
"""
Named, composable view modifiers.

A modifier is a pure function ``Element -> Element``. The registry maps
names to modifiers so that styles can be defined once and applied anywhere:

```python
registry = ModifierRegistry()
registry.define_modifier("shout", lambda content: content.font(Font.largeTitle))
title = registry.compose(Text("Hello"), ["shout", ("foregroundColor", {"color": "red"})])
```

Steps are applied strictly in list order; the output of one step is the
input of the next. Nothing here ever mutates an element: each step hands
back a new one.
"""
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from .base import Combine, Decoration, DecorationKind, Element, ModifierMixin, coerce_element
from .config import get_config
from .exceptions import (
    ConfigurationError,
    DuplicateNameError,
    InvalidElementError,
    ModifierArgumentError,
    RegistryFrozenError,
    UnknownModifierError,
)
from .styles import EdgeInsets, Frame

logger = logging.getLogger(__name__)

DUPLICATE_POLICIES = ("error", "shadow")

Step = Union[str, Tuple[Any, Mapping[str, Any]], 'ViewModifier']


class ViewModifier:
    """
    Base class for reusable styles.

    Subclasses take their parameters in ``__init__`` and implement
    ``body(content)``, returning the decorated content. A subclass can be
    registered by name with ``define_modifier(name, SubClass)``; its
    constructor arguments become the modifier's parameters.
    """

    def body(self, content: Element) -> Element:
        raise NotImplementedError(f"{self.__class__.__name__} must implement body()")

    def __call__(self, content: Element) -> Element:
        return self.body(content)

    def __repr__(self):
        return f"{self.__class__.__name__}({vars(self)!r})"


@dataclass(frozen=True)
class RegisteredModifier:
    name: str
    transform: Callable[..., Any]
    description: str = ""

    def bind(self, element: Element, params: Mapping[str, Any]) -> Callable[[], Any]:
        """Check `params` against the transform's signature and return a ready-to-run call."""
        transform = self.transform
        if inspect.isclass(transform) and issubclass(transform, ViewModifier):
            try:
                inspect.signature(transform).bind(**params)
            except TypeError as e:
                raise ModifierArgumentError(self.name, str(e)) from None
            return lambda: transform(**params).body(element)
        try:
            inspect.signature(transform).bind(element, **params)
        except TypeError as e:
            raise ModifierArgumentError(self.name, str(e)) from None
        return lambda: transform(element, **params)


class ModifierRegistry:
    """
    Holds named modifiers.

    Args:
        on_duplicate: "error" raises DuplicateNameError when a name is defined
            twice, "shadow" lets the later definition replace the earlier one.
            Defaults to the ``registry.on_duplicate`` config value.
        builtins: Register the primitive modifiers (font, padding, ...).
    """

    def __init__(self, on_duplicate: Optional[str] = None, builtins: bool = True):
        if on_duplicate is None:
            on_duplicate = get_config().get_nested("registry.on_duplicate", "error")
        if on_duplicate not in DUPLICATE_POLICIES:
            raise ConfigurationError("registry.on_duplicate", on_duplicate,
                                     f"expected one of {', '.join(DUPLICATE_POLICIES)}")
        self.on_duplicate = on_duplicate
        self._modifiers: Dict[str, RegisteredModifier] = {}
        self._frozen = False
        if builtins:
            register_builtins(self)

    # --- Registration ---
    def define_modifier(self, name: str, transform: Callable[..., Any], description: Optional[str] = None) -> None:
        """
        Register `transform` under `name`.

        `transform` is either a callable ``(element, **params) -> Element`` or a
        ViewModifier subclass.
        """
        if self._frozen:
            raise RegistryFrozenError(name)
        if not callable(transform):
            raise TypeError(f"Modifier '{name}' must be callable, got {type(transform).__name__}")
        if name in self._modifiers:
            if self.on_duplicate == "error":
                raise DuplicateNameError(name)
            logger.warning("Modifier '%s' redefined; the new definition shadows the old one.", name)
        if description is None:
            # Own docstring only; getdoc() would fall back to ViewModifier's.
            doc = inspect.cleandoc(transform.__doc__) if transform.__doc__ else ""
            description = doc.splitlines()[0] if doc else ""
        self._modifiers[name] = RegisteredModifier(name, transform, description)
        logger.debug("Registered modifier '%s'", name)

    def freeze(self) -> 'ModifierRegistry':
        """Make the registry read-only. Returns the registry for chaining."""
        self._frozen = True
        return self

    @property
    def is_frozen(self) -> bool:
        return self._frozen

    # --- Lookup ---
    def get(self, name: str) -> RegisteredModifier:
        try:
            return self._modifiers[name]
        except KeyError:
            raise UnknownModifierError(name, self._modifiers.keys()) from None

    def names(self) -> List[str]:
        return sorted(self._modifiers)

    def describe(self) -> Dict[str, str]:
        return {name: self._modifiers[name].description for name in self.names()}

    def __contains__(self, name: object) -> bool:
        return name in self._modifiers

    def __len__(self) -> int:
        return len(self._modifiers)

    # --- Application ---
    def apply_modifier(self, element: Any, name: str, **params) -> Element:
        """Return ``transform(element, **params)`` for the modifier registered as `name`."""
        element = coerce_element(element)
        call = self.get(name).bind(element, params)
        return _checked(call(), name)

    def compose(self, element: Any, steps: Iterable[Step]) -> Element:
        """
        Apply `steps` to `element` in order.

        A step is a registered name, a ``(name, params)`` pair, or a
        ViewModifier instance. A ``(ViewModifier instance, {})`` pair is
        accepted too.
        """
        current = coerce_element(element)
        for step in steps:
            if isinstance(step, ViewModifier):
                current = _checked(step.body(current), type(step).__name__)
                continue
            if isinstance(step, tuple):
                if len(step) != 2:
                    raise ModifierArgumentError(str(step[0]) if step else "?",
                                                f"a step must be a (name, params) pair, got {step!r}")
                target, params = step
            else:
                target, params = step, {}
            if isinstance(target, ViewModifier):
                if params:
                    raise ModifierArgumentError(type(target).__name__,
                                                "a ViewModifier instance takes no extra parameters")
                current = _checked(target.body(current), type(target).__name__)
            else:
                current = self.apply_modifier(current, target, **dict(params))
        return current


def _checked(result: Any, source: str) -> Element:
    if isinstance(result, Element):
        return result
    if isinstance(result, ModifierMixin):
        return result.as_element()
    raise InvalidElementError(result, source)


# --- Built-in primitives ---
def font(content: Element, font) -> Element:
    """Set the text style. Cascades to descendants."""
    return content.decorated(Decoration("font", "font", font, DecorationKind.CASCADING))


def foreground_color(content: Element, color) -> Element:
    """Set the foreground color. Cascades to descendants."""
    return content.decorated(Decoration("foregroundColor", "foregroundColor", color, DecorationKind.CASCADING))


def padding(content: Element, insets: Union[EdgeInsets, float, None] = None) -> Element:
    """Add space around the content. Repeated padding adds up."""
    if insets is None:
        insets = get_config().get_nested("defaults.padding", 16)
    try:
        insets = EdgeInsets.coerce(insets)
    except TypeError as e:
        raise ModifierArgumentError("padding", str(e)) from None
    return content.decorated(Decoration("padding", "padding", insets, DecorationKind.LOCAL, Combine.ADDITIVE))


def background(content: Element, color) -> Element:
    """Fill the area behind the content."""
    return content.decorated(Decoration("background", "background", color))


def clip_shape(content: Element, shape) -> Element:
    """Clip the content to a shape."""
    return content.decorated(Decoration("clipShape", "clipShape", shape))


def blur(content: Element, radius: float) -> Element:
    """Blur the content. Blurs of nested elements add up."""
    if isinstance(radius, bool) or not isinstance(radius, (int, float)) or radius < 0:
        raise ModifierArgumentError("blur", f"radius must be a non-negative number, got {radius!r}")
    return content.decorated(Decoration("blur", "blur", radius, DecorationKind.CASCADING, Combine.ADDITIVE))


def frame(content: Element, width=None, height=None, maxWidth=None, maxHeight=None) -> Element:
    """Propose a size for the content."""
    return content.decorated(Decoration("frame", "frame", Frame(width, height, maxWidth, maxHeight)))


BUILTINS = {
    "font": font,
    "foregroundColor": foreground_color,
    "padding": padding,
    "background": background,
    "clipShape": clip_shape,
    "blur": blur,
    "frame": frame,
}


def register_builtins(registry: ModifierRegistry) -> None:
    for name, transform in BUILTINS.items():
        registry.define_modifier(name, transform)


# --- Process-wide default registry ---
_default_registry: Optional[ModifierRegistry] = None


def get_registry() -> ModifierRegistry:
    """
    Return the shared registry, creating it on first use.

    It holds the built-in primitives and the library styles and is frozen
    before it is handed out.
    """
    global _default_registry
    if _default_registry is None:
        from .library import register_library
        registry = ModifierRegistry()
        register_library(registry)
        _default_registry = registry.freeze()
        logger.debug("🪄  Default modifier registry ready: %s", ", ".join(registry.names()))
    return _default_registry
