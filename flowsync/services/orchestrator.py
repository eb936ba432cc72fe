import asyncio
import copy
from typing import Any, Dict, Iterable, Mapping, Optional, Protocol, Sequence, Set, Union

from flowsync.config import VIEWPORT_HEIGHT, VIEWPORT_WIDTH
from flowsync.schemas.graph import Connection, SaveResult, Snapshot, Viewport
from flowsync.services.graph_store import GraphStore
from flowsync.services.persistence_client import PersistenceClient
from flowsync.services.type_registry import TypeRegistry
from flowsync.utils.errors import FetchError, SaveError
from flowsync.utils.logger import get_logger

logger = get_logger(__name__)


# 外部渲染引擎接口
class RenderEngine(Protocol):
    def render(
        self,
        nodes: Sequence[Dict[str, Any]],
        edges: Sequence[Dict[str, Any]],
        node_types: Mapping[str, Any],
        edge_types: Mapping[str, Any],
    ) -> None:
        ...


class Orchestrator:
    """Wires the store, the type registry and the persistence client.

    The document loaded by :meth:`start` is frozen as the restore baseline;
    :meth:`restore` always goes back to it and never fetches again.
    """

    def __init__(
        self,
        client: PersistenceClient,
        store: Optional[GraphStore] = None,
        registry: Optional[TypeRegistry] = None,
        renderer: Optional[RenderEngine] = None,
        viewport: Optional[Viewport] = None,
    ):
        self.client = client
        self.store = store or GraphStore()
        self.registry = registry or TypeRegistry()
        self.viewport = viewport or Viewport(width=VIEWPORT_WIDTH, height=VIEWPORT_HEIGHT)
        self.is_loading = True
        self._baseline = Snapshot()
        self._pending: Set["asyncio.Task[SaveResult]"] = set()
        self.renderer = renderer
        if renderer is not None:
            self.store.on("*", self._render)

    def _render(self, event: str, snapshot: Snapshot) -> None:
        self.renderer.render(
            snapshot.nodes,
            snapshot.edges,
            self.registry.node_types(),
            self.registry.edge_types(),
        )

    @property
    def baseline(self) -> Snapshot:
        return copy.deepcopy(self._baseline)

    # 加载失败时保持加载中状态，没有备用文档
    async def start(self) -> bool:
        try:
            document = await self.client.load()
        except FetchError as e:
            logger.error(f"Loading process document failed, staying in loading state: {e}")
            return False

        self._baseline = copy.deepcopy(document.snapshot())
        self.registry.merge(document.nodeTypes, document.edgeTypes)
        self.store.initialize(document)
        self.is_loading = False
        return True

    async def _save(self, snapshot: Snapshot) -> SaveResult:
        try:
            return await self.client.save(snapshot)
        except SaveError as e:
            logger.error(f"There was a problem with the save operation: {e}")
            return SaveResult(ok=False, status_code=e.status_code, error=str(e))

    async def _refuse_save(self) -> SaveResult:
        return SaveResult(ok=False, error="Process document has not been loaded")

    # 返回任务句柄，调用方可以等待、忽略或取消
    # 文档未加载成功时不发请求，避免空快照覆盖服务端文件
    def save(self) -> "asyncio.Task[SaveResult]":
        if self.is_loading:
            logger.warning("Save ignored: process document is still loading")
            task = asyncio.create_task(self._refuse_save())
        else:
            task = asyncio.create_task(self._save(self.store.snapshot()))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def restore(self) -> None:
        if self.is_loading:
            logger.warning("Restore ignored: process document is still loading")
            return
        logger.info("Restoring store to the snapshot captured at load")
        self.store.reset(self._baseline)

    def set_viewport(self, viewport: Viewport) -> None:
        self.viewport = viewport

    def add_node(self) -> Optional[Dict[str, Any]]:
        if self.is_loading:
            logger.warning("Add node ignored: process document is still loading")
            return None
        return self.store.add_node(self.viewport)

    # 渲染引擎回调
    def on_nodes_change(self, changes: Iterable[Mapping[str, Any]]) -> None:
        self.store.apply_changes(changes)

    def on_connect(self, connection: Union[Connection, Mapping[str, Any]]) -> Dict[str, Any]:
        return self.store.connect(connection)
