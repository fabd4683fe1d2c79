# viewmod/core.py
import logging
import time
from typing import Any, Callable, Dict, List, Optional, Set, Union

from .base import Element, Key, ModifierMixin
from .config import Config, get_config
from .exceptions import InvalidElementError, NodeNotFoundError
from .reconciler import NodeData, NodeKey, ReconciliationResult, Reconciler, RenderNode
from .state import State, StatefulView
from .widgets import BUTTON

logger = logging.getLogger(__name__)


class Framework:
    """
    Owns the root view, renders it, and re-renders it when its state changes.

    Everything happens synchronously on the caller's thread: ``setState``
    returns once the new tree has been rendered and reconciled.
    """

    _instance = None

    @classmethod
    def instance(cls):
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def __init__(self, config: Optional[Config] = None):
        self.config = config or get_config()
        self.reconciler = Reconciler()
        self.root_view: Optional[ModifierMixin] = None
        self.rendered_tree: Optional[RenderNode] = None
        self.last_result: Optional[ReconciliationResult] = None
        self.render_count = 0

        # State Management / Reconciliation Control
        self._reconciling: bool = False
        self._pending_state_updates: Set[State] = set()
        self._listeners: List[Callable[[ReconciliationResult], None]] = []

    def set_root(self, view: Union[Element, ModifierMixin]):
        """Sets the root view (an Element or a View) for the application."""
        if not isinstance(view, ModifierMixin):
            raise InvalidElementError(view)
        if isinstance(self.root_view, StatefulView) and self.root_view is not view:
            self.root_view.get_state().dispose()
        self.root_view = view
        if isinstance(view, StatefulView):
            view._attach(self)
        self.rendered_tree = None
        self.reconciler.clear_all_contexts()

    def add_listener(self, listener: Callable[[ReconciliationResult], None]) -> None:
        """Call `listener` with every reconciliation result."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Callable[[ReconciliationResult], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def render(self) -> ReconciliationResult:
        """Builds the root view and reconciles it against whatever was rendered before."""
        if self.root_view is None:
            raise ValueError("Root view not set. Use set_root() before render().")
        self._pending_state_updates.clear()
        result = self._reconcile_root()
        # setState calls made by that build are handled before returning
        return self._process_reconciliation() or result

    def request_reconciliation(self, state_instance: State) -> Optional[ReconciliationResult]:
        """Called by State.setState to bring the rendered tree up to date."""
        self._pending_state_updates.add(state_instance)
        if self.rendered_tree is None:
            # Nothing rendered yet; the first render() picks the change up.
            return None
        if self._reconciling:
            # setState during a build: handled by the running cycle.
            return None
        return self._process_reconciliation()

    def _process_reconciliation(self) -> Optional[ReconciliationResult]:
        result = None
        while self._pending_state_updates:
            logger.debug("--- Framework: Processing Reconciliation Cycle (%d pending) ---",
                         len(self._pending_state_updates))
            start_time = time.time()
            self._pending_state_updates.clear()
            result = self._reconcile_root()
            logger.debug("--- Framework: Reconciliation Complete (Total: %.4fs, %d patches) ---",
                         time.time() - start_time, len(result.patches))
        return result

    def _reconcile_root(self) -> ReconciliationResult:
        self._reconciling = True
        try:
            built = self.root_view.as_element()
            new_tree = self.reconciler.render(built)
            previous_map = self.reconciler.get_map_for_context("main")
            result = self.reconciler.reconcile(previous_map, new_tree)
        finally:
            self._reconciling = False

        self.reconciler.context_maps["main"] = result.new_rendered_map
        self.rendered_tree = new_tree
        self.last_result = result
        self.render_count += 1
        for listener in list(self._listeners):
            listener(result)
        return result

    # --- Lookup & interaction ---
    def find_node(self, target: Any) -> NodeData:
        """
        Find a rendered node by its node id ("vm_id_3"), its tree path ("0.1"),
        a Key, or a key value.
        """
        rendered_map: Dict[NodeKey, NodeData] = self.reconciler.get_map_for_context("main")
        # Tree paths are plain strings; keyed nodes are stored under Key objects.
        if isinstance(target, str) and target in rendered_map:
            return rendered_map[target]
        key = target if isinstance(target, Key) else Key(target)
        if key in rendered_map:
            return rendered_map[key]
        for data in rendered_map.values():
            if data["node_id"] == target:
                return data
        raise NodeNotFoundError(target)

    def buttons(self) -> List[NodeData]:
        """All rendered buttons, in tree order."""
        if self.rendered_tree is None:
            return []
        rendered_map = self.reconciler.get_map_for_context("main")
        return [rendered_map[node.uid] for node in self.rendered_tree.walk()
                if node.kind == BUTTON and node.uid in rendered_map]

    def tap(self, target: Any) -> Optional[ReconciliationResult]:
        """
        Invoke the action of the button identified by `target`.

        Returns the reconciliation result the tap produced, or None if the
        action did not change any state.
        """
        data = self.find_node(target)
        if data["kind"] != BUTTON or data.get("action") is None:
            raise NodeNotFoundError(target, "is not a tappable button")
        before = self.last_result
        data["action"]()
        return self.last_result if self.last_result is not before else None

    def dispose(self):
        """Disposes of the root state and forgets everything rendered."""
        if isinstance(self.root_view, StatefulView):
            self.root_view.get_state().dispose()
        self.root_view = None
        self.rendered_tree = None
        self.last_result = None
        self._pending_state_updates.clear()
        self.reconciler.clear_all_contexts()
