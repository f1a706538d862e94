"""TaskEvent -- 实时推送事件

每次成功的 Task 变更发布一条，经 TaskEventHub 推送给 SSE 订阅者。
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from .enums import TaskEventType


class TaskEvent(BaseModel):
    """Task 变更事件"""

    event_id: str = Field(description="唯一标识，ULID 格式，时间有序")
    type: TaskEventType = Field(description="事件类型")
    task_id: str = Field(description="关联的 Task ID")
    ts: datetime = Field(description="事件时间戳")
    task: dict[str, Any] | None = Field(
        default=None,
        description="变更后的 Task JSON，删除事件为 None",
    )
    recipients: list[str] = Field(default_factory=list, description="与通知一致的收件人")
