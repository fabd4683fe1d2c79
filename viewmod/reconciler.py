# viewmod/reconciler.py
"""
Rendering and reconciliation.

``Reconciler.render`` walks an Element tree and resolves, for every node,
the properties that actually apply to it:

- decorations are folded in the order they were applied, so for exclusive
  properties the last one wins and additive ones are summed;
- cascading decorations flow down to descendants as defaults. A descendant's
  own exclusive value overrides the inherited one, an additive value is
  added to it;
- a Group has no node of its own inside a container: its children are
  spliced into the container and the group's decorations are applied to each
  of them, before the child's own decorations.

``Reconciler.reconcile`` compares a new render tree with the flat map of the
previous one and produces patches:

- INSERT: a subtree appeared
- REMOVE: a subtree disappeared
- UPDATE: a node kept its identity and kind but some properties changed
- REPLACE: a node kept its identity but changed kind
- MOVE: a node kept its identity but changed parent or position

Rendering the same tree twice gives equal RenderNodes, and reconciling an
unchanged tree gives no patches.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Literal, Optional, Set, Tuple, Union

from .base import GROUP, Decoration, Element, Key, coerce_element, render_safe

logger = logging.getLogger(__name__)


class IDGenerator:
    def __init__(self):
        self._count = 0

    def next_id(self) -> str:
        self._count += 1
        return f"vm_id_{self._count}"


PatchAction = Literal["INSERT", "REMOVE", "UPDATE", "MOVE", "REPLACE"]


@dataclass
class Patch:
    action: PatchAction
    node_id: str
    data: Dict[str, Any]


NodeData = Dict[str, Any]
NodeKey = Union[Key, str]


@dataclass
class RenderNode:
    """A resolved element: what a renderer would draw for it."""
    uid: NodeKey
    kind: str
    content: Any
    props: Dict[str, Any]
    layers: Tuple[str, ...] = ()
    children: List['RenderNode'] = field(default_factory=list)
    action: Optional[Callable[[], Any]] = field(default=None, compare=False, repr=False)

    def get_unique_id(self) -> NodeKey:
        return self.uid

    def get_children(self) -> List['RenderNode']:
        return self.children

    def render_props(self) -> Dict[str, Any]:
        """Plain-data properties used for diffing."""
        props = {name: render_safe(value) for name, value in self.props.items()}
        props['content'] = render_safe(self.content)
        props['layers'] = list(self.layers)
        return props

    def walk(self) -> Iterator['RenderNode']:
        yield self
        for child in self.get_children():
            yield from child.walk()

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'id': self.uid.value if isinstance(self.uid, Key) else self.uid,
            'kind': self.kind,
            'content': render_safe(self.content),
            'props': {name: render_safe(value) for name, value in sorted(self.props.items())},
            'layers': list(self.layers),
        }
        if self.children:
            data['children'] = [child.to_dict() for child in self.children]
        return data


@dataclass
class ReconciliationResult:
    patches: List[Patch] = field(default_factory=list)
    new_rendered_map: Dict[NodeKey, NodeData] = field(default_factory=dict)
    replaced_keys: Set[NodeKey] = field(default_factory=set)
    root: Optional[RenderNode] = None


# --- The Reconciler Class ---
class Reconciler:
    def __init__(self):
        self.context_maps: Dict[str, Dict[NodeKey, NodeData]] = {"main": {}}
        self.id_generator = IDGenerator()
        logger.debug("🪄  ViewMod | Reconciler Initialized")

    def get_map_for_context(self, context_key: str) -> Dict[NodeKey, NodeData]:
        return self.context_maps.setdefault(context_key, {})

    def clear_context(self, context_key: str):
        if context_key in self.context_maps:
            del self.context_maps[context_key]

    def clear_all_contexts(self):
        """Resets all stored render maps."""
        self.context_maps.clear()
        self.context_maps['main'] = {}

    # --- Rendering ---
    def render(self, root: Any) -> RenderNode:
        """Resolve an element (or view) into a RenderNode tree."""
        root = coerce_element(root)
        return self._render_node(root, env={}, uid=root.key if root.key is not None else "0")

    def _render_node(self, element: Element, env: Dict[str, Any], uid: NodeKey) -> RenderNode:
        if element.kind == GROUP:
            # Only reached for a group at the root; nested groups are spliced.
            node = RenderNode(uid=uid, kind=GROUP, content=None, props={})
            node.children = self._render_children(element.get_children(), env, uid, element.decorations)
            return node

        props: Dict[str, Any] = dict(env)
        child_env: Dict[str, Any] = dict(env)
        for decoration in element.decorations:
            props[decoration.property] = decoration.merge(props.get(decoration.property))
            if decoration.is_cascading:
                child_env[decoration.property] = decoration.merge(child_env.get(decoration.property))

        node = RenderNode(
            uid=uid,
            kind=element.kind,
            content=element.content,
            props=props,
            layers=tuple(d.name for d in element.decorations),
            action=element.action,
        )
        node.children = self._render_children(element.get_children(), child_env, uid)
        return node

    def _render_children(self, children, env, parent_uid, inherited: Tuple[Decoration, ...] = ()) -> List[RenderNode]:
        rendered = []
        for index, child in enumerate(self._flatten(children, inherited)):
            uid = child.key if child.key is not None else f"{parent_uid}.{index}"
            rendered.append(self._render_node(child, env, uid))
        return rendered

    def _flatten(self, children, inherited: Tuple[Decoration, ...]) -> Iterator[Element]:
        """Splice groups into their parent, handing the group's decorations to each child."""
        for child in children:
            if child.kind == GROUP:
                yield from self._flatten(child.get_children(), inherited + child.decorations)
            elif inherited:
                yield Element(child.kind, child.content, inherited + child.decorations,
                              child.children, child.key, child.action)
            else:
                yield child

    # --- Reconciliation ---
    def reconcile(
        self,
        previous_map: Dict[NodeKey, NodeData],
        new_root: Optional[RenderNode],
        parent_node_id: str = "root-container",
    ) -> ReconciliationResult:
        """
        Compares a new render tree with the previous map and generates patches.
        """
        result = ReconciliationResult(root=new_root)

        if new_root is not None:
            self._diff_node(new_root, None, parent_node_id, 0, result, previous_map)

        for key, data in previous_map.items():
            if key in result.new_rendered_map:
                continue
            parent_key = data.get("parent_key")
            if parent_key is not None and self._is_gone(parent_key, previous_map, result):
                # Goes away together with an ancestor.
                continue
            result.patches.append(Patch(action="REMOVE", node_id=data["node_id"], data={}))

        logger.debug("Reconciled %d nodes, %d patches", len(result.new_rendered_map), len(result.patches))
        return result

    def _is_gone(self, key: NodeKey, previous_map, result) -> bool:
        """True if `key` or one of its old ancestors was removed or replaced."""
        while key is not None:
            if key not in result.new_rendered_map or key in result.replaced_keys:
                return True
            key = previous_map.get(key, {}).get("parent_key")
        return False

    def _diff_node(self, node: RenderNode, parent_key, parent_node_id, index, result, previous_map):
        """Compares a new node with its old version."""
        old_data = previous_map.get(node.uid)

        if old_data is None:
            node_id = self._insert_subtree(node, parent_key, parent_node_id, index, result)
            result.patches.append(Patch(action="INSERT", node_id=node_id, data={
                "parent_id": parent_node_id,
                "index": index,
                "node": node.to_dict(),
            }))
            return

        node_id = old_data["node_id"]

        if old_data.get("kind") != node.kind:
            result.replaced_keys.add(node.uid)
            self._insert_subtree(node, parent_key, parent_node_id, index, result, node_id=node_id)
            result.patches.append(Patch(action="REPLACE", node_id=node_id, data={"node": node.to_dict()}))
            return

        # --- UPDATE PATH ---
        new_props = node.render_props()
        old_props = old_data.get("props", {})
        prop_changes = self._diff_props(old_props, new_props)
        if prop_changes:
            result.patches.append(Patch(action="UPDATE", node_id=node_id, data={
                "props": prop_changes,
                "old_props": {k: old_props.get(k) for k in prop_changes},
            }))

        if old_data.get("parent_key") != parent_key or old_data.get("index") != index:
            result.patches.append(Patch(action="MOVE", node_id=node_id, data={
                "parent_id": parent_node_id,
                "index": index,
            }))

        self._record(node, node_id, new_props, parent_key, parent_node_id, index, result)
        for child_index, child in enumerate(node.get_children()):
            self._diff_node(child, node.uid, node_id, child_index, result, previous_map)

    def _insert_subtree(self, node, parent_key, parent_node_id, index, result, node_id=None) -> str:
        node_id = node_id or self.id_generator.next_id()
        self._record(node, node_id, node.render_props(), parent_key, parent_node_id, index, result)
        for child_index, child in enumerate(node.get_children()):
            self._insert_subtree(child, node.uid, node_id, child_index, result)
        return node_id

    def _record(self, node, node_id, props, parent_key, parent_node_id, index, result):
        if node.uid in result.new_rendered_map:
            logger.warning("Duplicate element key %r in render tree; the last one wins.", node.uid)
        result.new_rendered_map[node.uid] = {
            "node_id": node_id,
            "kind": node.kind,
            "key": node.uid if isinstance(node.uid, Key) else None,
            "props": props,
            "action": node.action,
            "parent_key": parent_key,
            "parent_node_id": parent_node_id,
            "index": index,
            "children_keys": [c.get_unique_id() for c in node.children],
        }

    def _diff_props(self, old_props: Dict, new_props: Dict) -> Optional[Dict]:
        changes = {}
        for key in set(old_props.keys()) | set(new_props.keys()):
            old_val, new_val = old_props.get(key), new_props.get(key)
            if old_val != new_val:
                changes[key] = new_val
        return changes if changes else None
