from enum import Enum
from typing import Any, Dict, Mapping, Optional

from flowsync.utils.logger import get_logger

logger = get_logger(__name__)


class RendererKind(str, Enum):
    NODE = "node"
    EDGE = "edge"


DEFAULT_TYPE = "default"

# 内置渲染器描述，对注册表而言只是不透明的句柄
BUILTIN_NODE_TYPES: Dict[str, Any] = {
    "default": {"renderer": "DefaultNode"},
    "input": {"renderer": "InputNode"},
    "output": {"renderer": "OutputNode"},
    "group": {"renderer": "GroupNode"},
    "position-logger": {"renderer": "PositionLoggerNode"},
}

BUILTIN_EDGE_TYPES: Dict[str, Any] = {
    "default": {"renderer": "BezierEdge"},
    "straight": {"renderer": "StraightEdge"},
    "step": {"renderer": "StepEdge"},
    "smoothstep": {"renderer": "SmoothStepEdge"},
    "simplebezier": {"renderer": "SimpleBezierEdge"},
    "button-edge": {"renderer": "ButtonEdge"},
}


class TypeRegistry:
    """Maps type names to renderer descriptors for nodes and edges.

    Entries merged from a loaded document override built-ins of the same
    name. Unknown names resolve to the ``default`` descriptor of their kind.
    """

    def __init__(
        self,
        node_types: Optional[Mapping[str, Any]] = None,
        edge_types: Optional[Mapping[str, Any]] = None,
    ):
        self._types: Dict[RendererKind, Dict[str, Any]] = {
            RendererKind.NODE: {},
            RendererKind.EDGE: {},
        }
        self.register_builtins(
            BUILTIN_NODE_TYPES if node_types is None else node_types,
            BUILTIN_EDGE_TYPES if edge_types is None else edge_types,
        )

    def register_builtins(self, node_types: Mapping[str, Any], edge_types: Mapping[str, Any]) -> None:
        self._types[RendererKind.NODE].update(node_types)
        self._types[RendererKind.EDGE].update(edge_types)

    # 加载文档时调用一次，文档中的同名类型覆盖内置类型
    def merge(
        self,
        node_types: Optional[Mapping[str, Any]] = None,
        edge_types: Optional[Mapping[str, Any]] = None,
    ) -> None:
        for kind, incoming in ((RendererKind.NODE, node_types), (RendererKind.EDGE, edge_types)):
            if not incoming:
                continue
            overridden = [name for name in incoming if name in self._types[kind]]
            self._types[kind].update(incoming)
            logger.info(
                f"Merged {len(incoming)} {kind.value} type(s) from document"
                + (f", overriding {overridden}" if overridden else "")
            )

    def resolve(self, name: Optional[str], kind: RendererKind = RendererKind.NODE) -> Any:
        registered = self._types[kind]
        if isinstance(name, str) and name in registered:
            return registered[name]
        return registered.get(DEFAULT_TYPE)

    def resolve_node(self, name: Optional[str]) -> Any:
        return self.resolve(name, RendererKind.NODE)

    def resolve_edge(self, name: Optional[str]) -> Any:
        return self.resolve(name, RendererKind.EDGE)

    def node_types(self) -> Dict[str, Any]:
        return dict(self._types[RendererKind.NODE])

    def edge_types(self) -> Dict[str, Any]:
        return dict(self._types[RendererKind.EDGE])
