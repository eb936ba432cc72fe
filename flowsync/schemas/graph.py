from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, List, Optional

from flowsync.utils.logger import get_logger

logger = get_logger(__name__)


class Position(BaseModel):
    x: float = 0.0
    y: float = 0.0


class Node(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    type: Optional[str] = None  # 为空时使用默认渲染器
    position: Position = Field(default_factory=Position)
    data: Dict[str, Any] = Field(default_factory=dict)


class Edge(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    source: str
    target: str
    sourceHandle: Optional[str] = None
    targetHandle: Optional[str] = None
    type: Optional[str] = None
    data: Optional[Dict[str, Any]] = None


# 完整文档：节点、连线以及服务端提供的类型描述
# 不对节点/连线做结构校验，原样保留
class GraphDocument(BaseModel):
    model_config = ConfigDict(extra="allow")

    nodes: List[Dict[str, Any]] = Field(default_factory=list)
    edges: List[Dict[str, Any]] = Field(default_factory=list)
    nodeTypes: Optional[Dict[str, Any]] = None
    edgeTypes: Optional[Dict[str, Any]] = None

    # 类型描述不是对象时按空处理，不让整个文档加载失败
    @field_validator("nodeTypes", "edgeTypes", mode="before")
    @classmethod
    def _ignore_malformed_types(cls, value: Any, info) -> Any:
        if value is None or isinstance(value, dict):
            return value
        logger.warning(f"Ignoring {info.field_name}: expected an object, got {type(value).__name__}")
        return None

    def snapshot(self) -> "Snapshot":
        return Snapshot(nodes=self.nodes, edges=self.edges)


# 持久化的子集，只包含节点和连线
class Snapshot(BaseModel):
    nodes: List[Dict[str, Any]] = Field(default_factory=list)
    edges: List[Dict[str, Any]] = Field(default_factory=list)


class Connection(BaseModel):
    source: str
    target: str
    sourceHandle: Optional[str] = None
    targetHandle: Optional[str] = None


# 新节点随机放置的区域
class Viewport(BaseModel):
    x: float = 0.0
    y: float = 0.0
    width: float
    height: float


class SaveResult(BaseModel):
    ok: bool
    status_code: Optional[int] = None
    message: str = ""
    error: Optional[str] = None
