"""TaskEventHub -- 内存中的 Task 变更事件广播器

每个订阅者持有一个 asyncio.Queue。订阅时可指定 email，
只接收收件人包含该 email 的事件；不指定则接收全部事件。
发布是 fire-and-forget：队列已满的订阅者直接移除，不阻塞写请求。
"""

import asyncio
from collections import defaultdict

import structlog
from taskboard.core.config import EVENT_QUEUE_MAXSIZE
from taskboard.core.models.event import TaskEvent

log = structlog.get_logger()

# 订阅全部事件的 key
_ALL = ""


class TaskEventHub:
    """Task 事件广播器 -- 基于 asyncio.Queue 的发布/订阅模式"""

    def __init__(self, queue_maxsize: int = EVENT_QUEUE_MAXSIZE) -> None:
        # email（或 _ALL）-> set of asyncio.Queue
        self._subscribers: dict[str, set[asyncio.Queue]] = defaultdict(set)
        self._queue_maxsize = queue_maxsize

    @property
    def subscriber_count(self) -> int:
        return sum(len(queues) for queues in self._subscribers.values())

    async def subscribe(self, email: str | None = None) -> asyncio.Queue:
        """订阅 Task 事件流

        Args:
            email: 只接收与该邮箱相关的事件；None 表示接收全部

        Returns:
            asyncio.Queue 实例，新事件会被推送到此队列
        """
        queue: asyncio.Queue = asyncio.Queue(maxsize=self._queue_maxsize)
        self._subscribers[email or _ALL].add(queue)
        return queue

    async def unsubscribe(self, queue: asyncio.Queue, email: str | None = None) -> None:
        """取消订阅

        Args:
            queue: 之前订阅时返回的队列
            email: 订阅时使用的 email
        """
        key = email or _ALL
        self._subscribers[key].discard(queue)
        if not self._subscribers[key]:
            del self._subscribers[key]

    async def publish(self, event: TaskEvent) -> None:
        """向相关订阅者广播事件

        Args:
            event: 要广播的事件
        """
        keys = [_ALL, *dict.fromkeys(event.recipients)]
        for key in keys:
            queues = self._subscribers.get(key)
            if not queues:
                continue
            dead_queues = []
            for queue in queues:
                try:
                    queue.put_nowait(event)
                except asyncio.QueueFull:
                    dead_queues.append(queue)

            # 清理已满的队列
            for q in dead_queues:
                queues.discard(q)
                log.warning(
                    "task_event_dropped",
                    event_type=event.type.value,
                    task_id=event.task_id,
                    subscriber=key or "*",
                )
            if not queues:
                del self._subscribers[key]
