"""EventQueue - 单消费者 FIFO 事件队列

特性：
- 严格按入队顺序出队，不排序、不去重、不合并
- drain 时处理过程中新入队的事件追加到队尾，在同一轮中处理
- 仅在 UI 线程中使用，无锁
"""

from collections import deque
from collections.abc import Callable
from typing import Any

from ..config import METRICS_ENABLED
from ..telemetry import get_logger, metrics
from .types import InternalEvent

logger = get_logger(__name__)

EventHandler = Callable[[InternalEvent], Any]


class EventQueue:
    """内部事件队列

    整个应用只构造一个实例，通过构造参数传给所有组件。
    """

    def __init__(self):
        self._queue: deque[InternalEvent] = deque()
        self._draining = False

    def push(self, event: InternalEvent) -> None:
        """入队（追加到队尾）"""
        self._queue.append(event)
        logger.debug(f"[Queue] Pushed {event}")
        if METRICS_ENABLED:
            metrics.inc("queue.pushed", {"event": type(event).__name__})
            metrics.gauge("queue.depth", len(self._queue))

    def pop(self) -> InternalEvent | None:
        """出队

        Returns:
            队首事件，队列空时返回 None
        """
        if not self._queue:
            return None
        event = self._queue.popleft()
        if METRICS_ENABLED:
            metrics.gauge("queue.depth", len(self._queue))
        return event

    def peek(self) -> InternalEvent | None:
        """查看队首（不移除）"""
        if not self._queue:
            return None
        return self._queue[0]

    def drain(self, handler: EventHandler) -> int:
        """按入队顺序处理所有事件

        handler 中入队的事件追加到队尾，并在本轮处理。

        Args:
            handler: 事件处理函数

        Returns:
            本轮处理的事件数
        """
        if self._draining:
            raise RuntimeError("EventQueue.drain() is not reentrant")

        processed = 0
        self._draining = True
        try:
            while (event := self.pop()) is not None:
                handler(event)
                processed += 1
        finally:
            self._draining = False

        if processed:
            logger.debug(f"[Queue] Drained {processed} events")
            if METRICS_ENABLED:
                metrics.inc("queue.processed", value=processed)
        return processed

    def clear(self) -> int:
        """清空队列

        Returns:
            清除的事件数
        """
        count = len(self._queue)
        self._queue.clear()
        if METRICS_ENABLED:
            metrics.gauge("queue.depth", 0)
        return count

    def snapshot(self) -> list[InternalEvent]:
        """当前排队事件的副本（按顺序）"""
        return list(self._queue)

    # === 状态 ===

    def __len__(self) -> int:
        return len(self._queue)

    def __bool__(self) -> bool:
        return len(self._queue) > 0

    @property
    def is_empty(self) -> bool:
        return len(self._queue) == 0

    @property
    def is_draining(self) -> bool:
        """是否正在 drain"""
        return self._draining
