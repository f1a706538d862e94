"""Store Protocol 接口定义

定义 TaskStore、NotificationStore 的抽象接口，
使用 Python Protocol 实现结构化子类型（duck typing）。
"""

from typing import Protocol

from ..models.notification import Notification
from ..models.task import Task, TaskFilter


class TaskStore(Protocol):
    """Task 存储接口"""

    async def create_task(self, task: Task) -> None:
        """插入任务记录"""
        ...

    async def get_task(self, task_id: str) -> Task | None:
        """根据 id 查询任务"""
        ...

    async def list_tasks(self, filters: TaskFilter | None = None) -> list[Task]:
        """按过滤条件查询任务列表"""
        ...

    async def update_task(self, task: Task) -> None:
        """整体替换可变字段"""
        ...

    async def delete_task(self, task_id: str) -> Task | None:
        """删除任务并返回删除前的记录"""
        ...


class NotificationStore(Protocol):
    """Notification 存储接口

    通知表 append-only：只允许插入，不允许更新或删除。
    """

    async def append_notification(self, notification: Notification) -> None:
        """追加通知（append-only）"""
        ...

    async def list_for_user(self, email: str) -> list[Notification]:
        """查询收件人包含 email 的通知，最新在前"""
        ...
