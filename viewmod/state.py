# viewmod/state.py
import logging
import weakref
from typing import Any, Callable, Optional, TYPE_CHECKING

from .base import Element, Key, ModifierMixin, coerce_element

# Use TYPE_CHECKING to prevent circular imports for type hints
if TYPE_CHECKING:
    from .core import Framework

logger = logging.getLogger(__name__)


class View(ModifierMixin):
    """
    Base class for user-defined views.

    A view is a recipe for an Element: ``as_element()`` runs the recipe.
    Modifiers applied to a view (``CapsuleText("Hi").foregroundColor(...)``)
    are applied to the element it produces.
    """

    def __init__(self, key: Optional[Key] = None):
        self.key = key

    def as_element(self) -> Element:
        element = coerce_element(self._produce())
        if self.key is not None and element.key is None:
            element = element.with_key(self.key)
        return element

    def _produce(self) -> Any:
        raise NotImplementedError(f"{self.__class__.__name__} must implement build()")

    def __repr__(self):
        return f"{self.__class__.__name__}(key={self.key})"


class StatelessView(View):
    """
    A view whose output depends only on its constructor arguments.
    """

    def build(self) -> Element:
        """
        Describes the part of the user interface represented by this view.
        """
        raise NotImplementedError(
            f"{self.__class__.__name__} must implement the build() method."
        )

    def _produce(self) -> Any:
        return self.build()


# --- StatefulView Class ---
class StatefulView(View):
    """
    A view that has mutable state managed by a State object.

    The state is created once, when the view is constructed, and lives as
    long as the view. Every time the state changes the framework calls
    ``State.build()`` again and reconciles the result with what was rendered
    before.
    """

    def __init__(self, key: Optional[Key] = None):
        super().__init__(key=key)
        self.framework: Optional['Framework'] = None
        self._state = self.createState()
        self._state._set_view(self)
        self._state.initState()

    def createState(self) -> 'State':
        """Create the mutable state for this view."""
        raise NotImplementedError(f"{self.__class__.__name__} must implement createState()")

    def get_state(self) -> 'State':
        """Returns the associated State object."""
        return self._state

    def _attach(self, framework: 'Framework') -> None:
        self.framework = framework
        self._state.framework = framework

    def _produce(self) -> Any:
        return self._state.build()


# --- State Class ---
class State:
    """
    Manages the mutable state for a StatefulView.

    Subclasses keep their fields as plain attributes, implement ``build()``,
    and call ``setState()`` after changing a field that ``build()`` reads.
    """

    def __init__(self):
        self._view_ref: Optional[weakref.ref] = None
        self.framework: Optional['Framework'] = None

    def _set_view(self, view: StatefulView):
        """Internal method to link State to its StatefulView."""
        self._view_ref = weakref.ref(view)
        self.framework = getattr(view, 'framework', None)

    def initState(self):
        """
        Called once when this state object is created, before the first build.
        """
        pass

    def dispose(self):
        """
        Called when this state object is removed permanently.
        """
        pass

    def get_view(self) -> Optional[StatefulView]:
        """Safely retrieves the associated StatefulView instance."""
        return self._view_ref() if self._view_ref else None

    def build(self) -> Element:
        """Describes the part of the user interface represented by this state."""
        raise NotImplementedError(f"{self.__class__.__name__} must implement build()")

    def setState(self, fn: Optional[Callable[[], Any]] = None):
        """
        Notify the framework that the internal state of this object has changed.

        If `fn` is given it is called first, so the change and the
        notification read as one step: ``self.setState(lambda: ...)``.
        Returns the reconciliation result, or None when no framework is attached.
        """
        if fn is not None:
            fn()

        view = self.get_view()
        if view is None:
            logger.warning("Cannot setState for %s, view reference lost.", self.__class__.__name__)
            return None

        if self.framework is None:
            logger.warning("setState for %s ignored: view is not mounted in a Framework.",
                           self.__class__.__name__)
            return None

        logger.debug(">>> setState triggered for State: %s (View Key: %s) <<<",
                     self.__class__.__name__, view.key)
        return self.framework.request_reconciliation(self)
