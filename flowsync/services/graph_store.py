import copy
import random
from collections.abc import Hashable
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from flowsync.schemas.graph import Connection, GraphDocument, Node, Position, Snapshot, Viewport
from flowsync.utils.id_generator import IdGenerator, edge_ids, node_ids
from flowsync.utils.logger import get_logger

logger = get_logger(__name__)

NEW_NODE_TYPE = "default"
NEW_NODE_LABEL = "New Node"

Listener = Callable[[str, Snapshot], None]


class GraphStore:
    """Owns the live node and edge sequences of the editor.

    Every mutation runs synchronously to completion and then notifies the
    subscribers registered with :meth:`on`. Sequence order is insertion
    order, which is also the render order.
    """

    def __init__(
        self,
        node_id_generator: IdGenerator = node_ids,
        edge_id_generator: IdGenerator = edge_ids,
        rng: Optional[random.Random] = None,
    ):
        self._nodes: List[Dict[str, Any]] = []
        self._edges: List[Dict[str, Any]] = []
        self._node_ids = node_id_generator
        self._edge_ids = edge_id_generator
        self._rng = rng or random.Random()
        self._listeners: Dict[str, List[Listener]] = {}

    @property
    def nodes(self) -> Tuple[Dict[str, Any], ...]:
        return tuple(self._nodes)

    @property
    def edges(self) -> Tuple[Dict[str, Any], ...]:
        return tuple(self._edges)

    # 订阅变更通知，"*" 表示所有事件
    def on(self, event: str, callback: Listener) -> None:
        self._listeners.setdefault(event, []).append(callback)

    def off(self, event: str, callback: Listener) -> None:
        callbacks = self._listeners.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def _emit(self, event: str) -> None:
        callbacks = self._listeners.get(event, []) + self._listeners.get("*", [])
        if not callbacks:
            return
        snapshot = self.snapshot()
        for callback in callbacks:
            try:
                callback(event, snapshot)
            except Exception as e:
                logger.error(f"Listener for '{event}' failed: {e}")

    def initialize(self, document: GraphDocument) -> None:
        self._nodes = list(document.nodes)
        self._edges = list(document.edges)
        logger.info(f"Store initialized with {len(self._nodes)} nodes and {len(self._edges)} edges")
        self._emit("initialized")

    # 恢复到给定快照，使用深拷贝避免后续编辑污染快照
    def reset(self, snapshot: Snapshot) -> None:
        self._nodes = copy.deepcopy(snapshot.nodes)
        self._edges = copy.deepcopy(snapshot.edges)
        self._emit("restored")

    def add_node(self, viewport: Viewport) -> Dict[str, Any]:
        position = Position(
            x=viewport.x + self._rng.random() * viewport.width,
            y=viewport.y + self._rng.random() * viewport.height,
        )
        node = Node(
            id=self._node_ids.next(),
            type=NEW_NODE_TYPE,
            position=position,
            data={"label": NEW_NODE_LABEL},
        ).model_dump()
        self._nodes.append(node)
        logger.debug(f"Added node {node['id']} at ({position.x:.1f}, {position.y:.1f})")
        self._emit("node_added")
        return node

    def apply_changes(self, changes: Iterable[Mapping[str, Any]]) -> None:
        """Shallow-merge change entries into the nodes they name.

        For each node only the first entry carrying its id is applied, with
        the entry's keys winning. Untouched nodes keep their identity.
        Entries without a usable id or naming an unknown node are ignored.
        """
        by_id: Dict[str, Mapping[str, Any]] = {}
        for change in changes:
            change_id = change.get("id")
            if isinstance(change_id, Hashable) and change_id is not None and change_id not in by_id:
                by_id[change_id] = change
        if not by_id:
            return

        merged = 0
        updated = []
        for node in self._nodes:
            node_id = node.get("id")
            change = by_id.get(node_id) if isinstance(node_id, Hashable) else None
            if change is None:
                updated.append(node)
                continue
            updated.append({**node, **change})
            merged += 1
        self._nodes = updated

        if merged:
            self._emit("nodes_changed")

    # 不做去重：同一对节点重复连接会产生多条连线
    def connect(self, connection: Union[Connection, Mapping[str, Any]]) -> Dict[str, Any]:
        if not isinstance(connection, Connection):
            connection = Connection(**connection)
        edge = {"id": self._edge_ids.next(), **connection.model_dump(exclude_none=True)}
        self._edges.append(edge)
        logger.debug(f"Connected {connection.source} -> {connection.target} as {edge['id']}")
        self._emit("edge_added")
        return edge

    def snapshot(self) -> Snapshot:
        return Snapshot(nodes=copy.deepcopy(self._nodes), edges=copy.deepcopy(self._edges))
