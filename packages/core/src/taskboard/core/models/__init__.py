"""Taskboard Core Domain Models -- 公共类型导出

所有公共模型类型从此入口导入。
"""

from .enums import Priority, TaskEventType, TaskStatus
from .event import TaskEvent
from .notification import FieldChange, Notification
from .task import Task, TaskCreate, TaskFilter, TaskUpdate

__all__ = [
    # 枚举
    "Priority",
    "TaskStatus",
    "TaskEventType",
    # Task
    "Task",
    "TaskCreate",
    "TaskUpdate",
    "TaskFilter",
    # Notification
    "Notification",
    "FieldChange",
    # 实时事件
    "TaskEvent",
]
