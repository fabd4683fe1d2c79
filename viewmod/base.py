import functools
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple, Union


# --- Key Class ---
class Key:
    """
    A unique identifier for an element to help distinguish it across rebuilds.

    :param value: Any hashable value to uniquely represent the element.
    """
    def __init__(self, value):
        self.value = value

    def __eq__(self, other):
        return isinstance(other, Key) and self.value == other.value

    def __hash__(self):
        """
        Return a hash for the key. Converts mutable types like lists to hashable ones.
        """
        return hash(make_hashable(self.value))

    def __repr__(self):
        return f"Key({self.value!r})"


# --- Hashable Helper for Complex Style Objects ---
# Style objects (EdgeInsets, Font, shapes) expose `to_tuple()`.
def make_hashable(value):
    """
    Converts a given value to a hashable representation, useful for comparing
    decoration parameters and resolved properties.

    :param value: Any value or style object (EdgeInsets, Font, etc.)
    :return: A hashable version of the value.
    """
    if hasattr(value, 'to_tuple'):
        return value.to_tuple()
    elif isinstance(value, (str, int, float, bool, tuple, Key, type(None))):
        return value
    elif isinstance(value, list):
        return tuple(make_hashable(v) for v in value)
    elif isinstance(value, dict):
        return tuple(sorted((k, make_hashable(v)) for k, v in value.items()))
    try:
        hash(value)
        return value
    except TypeError:
        return repr(value)


def render_safe(value):
    """Convert a property value to plain data (dicts, lists, scalars)."""
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    elif isinstance(value, (list, tuple)):
        return [render_safe(v) for v in value]
    elif isinstance(value, dict):
        return {k: render_safe(v) for k, v in value.items()}
    return value


# --- Decorations ---
class DecorationKind(str, Enum):
    """Whether a decoration propagates to descendants."""
    CASCADING = "cascading"
    LOCAL = "local"


class Combine(str, Enum):
    """How repeated values of the same property merge."""
    EXCLUSIVE = "exclusive"
    ADDITIVE = "additive"


@dataclass(frozen=True)
class Decoration:
    """
    One applied modifier: the named property it sets and the value it sets it to.

    Exclusive decorations replace an earlier value of the same property,
    additive ones are summed with it (values must support ``+``).
    """
    name: str
    property: str
    value: Any
    kind: DecorationKind = DecorationKind.LOCAL
    combine: Combine = Combine.EXCLUSIVE

    def merge(self, current: Any) -> Any:
        """Return the property value after this decoration is applied on top of `current`."""
        if self.combine is Combine.ADDITIVE and current is not None:
            return current + self.value
        return self.value

    @property
    def is_cascading(self) -> bool:
        return self.kind is DecorationKind.CASCADING

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'property': self.property,
            'value': render_safe(self.value),
            'kind': self.kind.value,
            'combine': self.combine.value,
        }


# --- Fluent modifier API ---
class ModifierMixin:
    """
    Fluent modifier methods shared by elements and views.

    Every method returns a new Element; the receiver is left untouched.
    Calls go through the process-wide default registry.
    """

    def as_element(self) -> 'Element':
        raise NotImplementedError(f"{self.__class__.__name__} must implement as_element()")

    def modifier(self, step, **params) -> 'Element':
        """Apply a registered modifier by name, or a ViewModifier instance."""
        from .modifiers import get_registry
        return get_registry().compose(self.as_element(), [(step, params) if params else step])

    # Built-in primitives
    def font(self, font) -> 'Element':
        return self.modifier('font', font=font)

    def foregroundColor(self, color) -> 'Element':
        return self.modifier('foregroundColor', color=color)

    def padding(self, insets=None) -> 'Element':
        if insets is None:
            return self.modifier('padding')
        return self.modifier('padding', insets=insets)

    def background(self, color) -> 'Element':
        return self.modifier('background', color=color)

    def clipShape(self, shape) -> 'Element':
        return self.modifier('clipShape', shape=shape)

    def blur(self, radius) -> 'Element':
        return self.modifier('blur', radius=radius)

    def frame(self, width=None, height=None, maxWidth=None, maxHeight=None) -> 'Element':
        return self.modifier('frame', width=width, height=height, maxWidth=maxWidth, maxHeight=maxHeight)

    # Library styles
    def prominentTitle(self) -> 'Element':
        return self.modifier('prominentTitle')

    def watermarked(self, text: str) -> 'Element':
        return self.modifier('watermarked', text=text)

    def titleStyle(self) -> 'Element':
        return self.modifier('titleStyle')


# --- Element ---
@dataclass(frozen=True)
class Element(ModifierMixin):
    """
    An immutable description of something to display.

    :param kind: Tag naming what the element is ("text", "color", "vstack", "group", ...).
    :param content: The payload (text data, color name, shape, stack layout).
    :param decorations: Applied decorations, oldest first.
    :param children: Child elements for containers.
    :param key: Optional Key identifying the element across renders.
    :param action: Callback for interactive elements (buttons).
    """
    kind: str
    content: Any = None
    decorations: Tuple[Decoration, ...] = ()
    children: Tuple['Element', ...] = ()
    key: Optional[Key] = None
    action: Optional[Callable[[], Any]] = field(default=None, compare=False, repr=False)

    def as_element(self) -> 'Element':
        return self

    def decorated(self, decoration: Decoration) -> 'Element':
        """Return a copy of this element with `decoration` appended."""
        return Element(
            kind=self.kind,
            content=self.content,
            decorations=self.decorations + (decoration,),
            children=self.children,
            key=self.key,
            action=self.action,
        )

    def with_key(self, key: Union[Key, Any]) -> 'Element':
        """Return a copy of this element identified by `key`."""
        if not isinstance(key, Key):
            key = Key(key)
        return Element(self.kind, self.content, self.decorations, self.children, key, self.action)

    def get_unique_id(self) -> Optional[Key]:
        return self.key

    def get_children(self) -> Tuple['Element', ...]:
        return self.children

    def resolved_properties(self) -> Dict[str, Any]:
        """Fold this element's own decorations in order, without any inherited values."""
        props: Dict[str, Any] = {}
        for decoration in self.decorations:
            props[decoration.property] = decoration.merge(props.get(decoration.property))
        return props

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'kind': self.kind,
            'content': render_safe(self.content),
            'decorations': [d.to_dict() for d in self.decorations],
        }
        if self.key is not None:
            data['key'] = render_safe(self.key.value)
        if self.children:
            data['children'] = [c.to_dict() for c in self.children]
        return data

    def __repr__(self):
        names = ", ".join(d.name for d in self.decorations)
        return f"{self.kind.capitalize()}({self.content!r}, decorations=[{names}], children={len(self.children)})"


def coerce_element(value: Any) -> Element:
    """Turn an element or a view into an Element, rejecting anything else."""
    if isinstance(value, ModifierMixin):
        element = value.as_element()
        if isinstance(element, Element):
            return element
    from .exceptions import InvalidElementError
    raise InvalidElementError(value)


def coerce_children(children: Iterable[Any]) -> Tuple[Element, ...]:
    return tuple(coerce_element(c) for c in children if c is not None)


GROUP = "group"


class Group(Element):
    """
    A transparent container for sibling elements.

    A group has no layout of its own: its children are arranged by whichever
    container the group ends up in, and decorations applied to the group
    apply to each child.
    """
    def __init__(self, *children, key: Optional[Key] = None):
        if len(children) == 1 and isinstance(children[0], (list, tuple)):
            children = tuple(children[0])
        super().__init__(kind=GROUP, children=coerce_children(children), key=key)


def view_builder(func: Callable[..., Any]) -> Callable[..., Element]:
    """
    Decorator for view-producing functions that return several views.

    A tuple or list result is wrapped in a Group, a single view is returned
    as an Element.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Element:
        result = func(*args, **kwargs)
        if isinstance(result, (list, tuple)):
            views: List[Any] = [v for v in result if v is not None]
            if len(views) == 1:
                return coerce_element(views[0])
            return Group(*views)
        return coerce_element(result)
    return wrapper
