# viewmod/__init__.py

"""
ViewMod

Declarative view composition for Python: immutable elements, named and
composable view modifiers, cascading vs. local decorations, and
state-driven re-rendering with patch-based reconciliation.
"""

# --- Core Framework Classes ---
from .core import Framework
from .config import Config, get_config, configure_logging

# --- Elements and Views ---
from .base import (
    Key,
    Element,
    Group,
    Decoration,
    DecorationKind,
    Combine,
    view_builder,
)
from .state import View, State, StatefulView, StatelessView
from .widgets import (
    Text,
    Color,
    ShapeView,
    Button,
    Spacer,
    VStack,
    HStack,
    ZStack,
    StackLayout,
)

# --- Modifiers ---
from .modifiers import ModifierRegistry, ViewModifier, get_registry
from .library import ProminentTitle, Watermark, Title, CapsuleText

# --- Styling ---
from .styles import (
    Colors, Font, EdgeInsets, Alignment, Frame, infinity,
    Shape, Rectangle, RoundedRectangle, Capsule, Circle,
)

# --- Rendering ---
from .reconciler import Reconciler, RenderNode, Patch, ReconciliationResult

# --- Errors ---
from .exceptions import (
    ViewModError,
    ConfigurationError,
    RegistryError,
    UnknownModifierError,
    DuplicateNameError,
    RegistryFrozenError,
    ModifierArgumentError,
    InvalidElementError,
    NodeNotFoundError,
)

__all__ = [
    # --- Core & Base ---
    'Framework', 'Config', 'get_config', 'configure_logging',
    'Key', 'Element', 'Group', 'Decoration', 'DecorationKind', 'Combine', 'view_builder',
    'View', 'State', 'StatefulView', 'StatelessView',
    # --- Elements ---
    'Text', 'Color', 'ShapeView', 'Button', 'Spacer', 'VStack', 'HStack', 'ZStack', 'StackLayout',
    # --- Modifiers ---
    'ModifierRegistry', 'ViewModifier', 'get_registry',
    'ProminentTitle', 'Watermark', 'Title', 'CapsuleText',
    # --- Styling ---
    'Colors', 'Font', 'EdgeInsets', 'Alignment', 'Frame', 'infinity',
    'Shape', 'Rectangle', 'RoundedRectangle', 'Capsule', 'Circle',
    # --- Rendering ---
    'Reconciler', 'RenderNode', 'Patch', 'ReconciliationResult',
    # --- Errors ---
    'ViewModError', 'ConfigurationError', 'RegistryError', 'UnknownModifierError',
    'DuplicateNameError', 'RegistryFrozenError', 'ModifierArgumentError',
    'InvalidElementError', 'NodeNotFoundError',
]

__version__ = "0.1.0"
