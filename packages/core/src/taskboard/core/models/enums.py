"""枚举定义

包含 Task 优先级、Task 状态（看板三列）以及实时推送事件类型。
枚举值即对外 JSON 中的字符串值。
"""

from enum import StrEnum


class Priority(StrEnum):
    """Task 优先级"""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class TaskStatus(StrEnum):
    """Task 状态 -- 对应看板的三列"""

    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class TaskEventType(StrEnum):
    """实时推送事件类型"""

    TASK_CREATED = "taskCreated"
    TASK_UPDATED = "taskUpdated"
    TASK_DELETED = "taskDeleted"
