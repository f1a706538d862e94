"""实时事件流路由

GET /api/stream/tasks: SSE 推送 taskCreated / taskUpdated / taskDeleted 事件。
可选 email 参数只推送收件人包含该邮箱的事件；空闲时按间隔发送心跳注释。
"""

import asyncio
import json
from collections.abc import AsyncIterator

from fastapi import APIRouter, Depends, Query
from sse_starlette.sse import EventSourceResponse
from taskboard.core.config import SSE_HEARTBEAT_INTERVAL
from taskboard.core.models.event import TaskEvent

from ..deps import get_event_hub
from ..errors import error_response
from ..services.event_hub import TaskEventHub

router = APIRouter()


def _event_to_sse(event: TaskEvent) -> dict:
    """将 TaskEvent 转换为 SSE 消息"""
    return {
        "id": event.event_id,
        "event": event.type.value,
        "data": json.dumps(event.model_dump(mode="json"), ensure_ascii=False),
    }


async def task_event_stream(
    hub: TaskEventHub,
    email: str | None = None,
    heartbeat_interval: float = SSE_HEARTBEAT_INTERVAL,
) -> AsyncIterator[dict]:
    """订阅 hub 并持续产出 SSE 消息，生成器关闭时取消订阅"""
    queue = await hub.subscribe(email)
    try:
        while True:
            try:
                event = await asyncio.wait_for(queue.get(), timeout=heartbeat_interval)
                yield _event_to_sse(event)
            except TimeoutError:
                yield {"comment": "heartbeat"}
    finally:
        await hub.unsubscribe(queue, email)


@router.get("/api/stream/tasks")
async def stream_task_events(
    email: str | None = Query(default=None, description="只推送与该邮箱相关的事件"),
    event_hub=Depends(get_event_hub),
):
    """SSE 事件流端点"""
    if event_hub is None:
        return error_response(503, "Real-time channel unavailable")
    return EventSourceResponse(task_event_stream(event_hub, email))
