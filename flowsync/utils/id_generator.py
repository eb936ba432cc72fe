import itertools
import threading
import time
from typing import Callable

# 进程内共享的递增序号，所有生成器共用，时间戳相同时也不会重复
_sequence = itertools.count(1)
_sequence_lock = threading.Lock()


def _next_sequence() -> int:
    with _sequence_lock:
        return next(_sequence)


class IdGenerator:
    """Produces ids that are unique for the lifetime of the process.

    The timestamp only makes ids readable; uniqueness comes from the shared
    sequence number, so two calls inside the same clock tick still differ.
    """

    def __init__(self, prefix: str, clock: Callable[[], float] = time.time):
        self.prefix = prefix
        self._clock = clock

    def next(self) -> str:
        millis = int(self._clock() * 1000)
        return f"{self.prefix}_{millis}_{_next_sequence()}"


# 节点与连线的默认生成器
node_ids = IdGenerator("randomnode")
edge_ids = IdGenerator("edge")
