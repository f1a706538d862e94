"""TaskService -- 任务创建/查询/更新/删除业务逻辑

每个变更操作的流程：
1. 校验输入并写入 Task（单文档事务）
2. 推导通知收件人与字段 diff，追加 Notification（best-effort）
3. 发布实时事件到 TaskEventHub（fire-and-forget）

第 2、3 步失败只记录日志，不影响已成功的 Task 写入，也不回滚。
"""

from datetime import UTC, datetime
from typing import Any, TypeVar

import pydantic
import structlog
from taskboard.core.changes import (
    created_recipients,
    deleted_recipients,
    diff_task,
    exclusive_viewers,
    updated_recipients,
)
from taskboard.core.exceptions import NotFoundError, ValidationError
from taskboard.core.models import (
    FieldChange,
    Notification,
    Task,
    TaskCreate,
    TaskEvent,
    TaskEventType,
    TaskFilter,
    TaskUpdate,
)
from taskboard.core.store import StoreGroup
from ulid import ULID

log = structlog.get_logger()

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


def parse_input(model_cls: type[ModelT], data: ModelT | dict[str, Any]) -> ModelT:
    """将原始输入解析为模型，pydantic 校验错误转换为 ValidationError"""
    if isinstance(data, model_cls):
        return data
    try:
        return model_cls.model_validate(data)
    except pydantic.ValidationError as e:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in e.errors()})
        raise ValidationError(
            "Invalid task fields",
            detail=f"invalid or missing: {', '.join(fields)}",
        ) from e


def is_valid_task_id(task_id: str) -> bool:
    """task_id 是否为合法 ULID"""
    try:
        ULID.from_str(task_id)
    except ValueError:
        return False
    return True


class TaskService:
    """任务业务服务"""

    def __init__(self, store_group: StoreGroup, event_hub=None) -> None:
        self._stores = store_group
        self._event_hub = event_hub

    async def create_task(self, data: TaskCreate | dict[str, Any]) -> Task:
        """创建任务

        Args:
            data: 创建输入，collaborators / viewers 缺省为空列表

        Returns:
            已持久化的 Task（含新分配的 id）

        Raises:
            ValidationError: 必填字段缺失或枚举值非法
            StorageError: 写入失败，不会留下部分写入的 Task
        """
        payload = parse_input(TaskCreate, data)
        now = datetime.now(UTC)
        task = Task(
            id=str(ULID()),
            name=payload.name,
            description=payload.description,
            due_date=payload.due_date,
            priority=payload.priority,
            status=payload.status,
            creator_email=payload.creator_email,
            collaborators=payload.collaborators,
            viewers=payload.viewers,
            created_at=now,
            updated_at=now,
        )

        async with self._stores.transaction("creating task"):
            await self._stores.task_store.create_task(task)

        log.info("task_created", task_id=task.id, creator=task.creator_email)

        recipients = created_recipients(task)
        await self._record_notification(
            task.id,
            f'Task "{task.name}" created by "{task.creator_email}"',
            recipients,
        )
        await self._publish(TaskEventType.TASK_CREATED, task.id, recipients, task)
        return task

    async def get_tasks(self, filters: TaskFilter | None = None) -> list[Task]:
        """按过滤条件查询任务列表，返回存储原生顺序"""
        return await self._stores.task_store.list_tasks(filters)

    async def get_task_by_id(self, task_id: str) -> Task:
        """查询任务详情

        Raises:
            NotFoundError: 任务不存在
        """
        task = await self._stores.task_store.get_task(task_id)
        if task is None:
            raise NotFoundError("Task", task_id)
        return task

    async def update_task(self, task_id: str, data: TaskUpdate | dict[str, Any]) -> Task:
        """整体替换任务的可变字段

        流程：
        1. 读取当前 Task
        2. 对提交值计算字段 diff（在查看者互斥规则之前）
        3. 从 viewers 中移除同时是协作者的地址
        4. 写入新值并刷新 updated_at
        5. 通知新协作者、新查看者、操作者和原创建者

        data.creator_email 是操作者，只用于通知，不覆盖原创建者。

        Raises:
            ValidationError: 输入非法
            NotFoundError: 任务不存在
            StorageError: 写入失败
        """
        payload = parse_input(TaskUpdate, data)
        current = await self.get_task_by_id(task_id)

        changes = diff_task(current, payload)
        updated = current.model_copy(
            update={
                "name": payload.name,
                "description": payload.description,
                "due_date": payload.due_date,
                "priority": payload.priority,
                "status": payload.status,
                "collaborators": list(payload.collaborators),
                "viewers": exclusive_viewers(payload.viewers, payload.collaborators),
                "updated_at": datetime.now(UTC),
            }
        )

        async with self._stores.transaction("updating task"):
            await self._stores.task_store.update_task(updated)

        log.info(
            "task_updated",
            task_id=task_id,
            actor=payload.creator_email,
            changed_fields=[c.field for c in changes],
        )

        recipients = updated_recipients(current.creator_email, payload.creator_email, payload)
        await self._record_notification(
            task_id,
            f'Task "{updated.name}" updated by "{payload.creator_email}".',
            recipients,
            changes,
        )
        await self._publish(TaskEventType.TASK_UPDATED, task_id, recipients, updated)
        return updated

    async def delete_task(self, task_id: str) -> Task:
        """永久删除任务

        删除通知只发给删除前的协作者和查看者，不包含创建者。

        Returns:
            删除前的 Task

        Raises:
            ValidationError: task_id 不是合法 ID
            NotFoundError: 任务不存在
            StorageError: 删除失败
        """
        if not is_valid_task_id(task_id):
            raise ValidationError("Invalid task ID", detail=task_id)

        async with self._stores.transaction("deleting task"):
            task = await self._stores.task_store.delete_task(task_id)
        if task is None:
            raise NotFoundError("Task", task_id)

        log.info("task_deleted", task_id=task_id)

        recipients = deleted_recipients(task)
        await self._record_notification(
            task_id,
            f'Task "{task.name}" deleted',
            recipients,
        )
        await self._publish(TaskEventType.TASK_DELETED, task_id, recipients)
        return task

    async def _record_notification(
        self,
        task_id: str,
        message: str,
        users: list[str],
        updates: list[FieldChange] | None = None,
    ) -> Notification | None:
        """追加通知（best-effort）：写入失败只记录日志，不向上抛出"""
        notification = Notification(
            id=str(ULID()),
            message=message,
            task_id=task_id,
            users=users,
            updates=updates or [],
            created_at=datetime.now(UTC),
        )
        try:
            async with self._stores.transaction("saving notification"):
                await self._stores.notification_store.append_notification(notification)
        except Exception as e:
            log.warning(
                "notification_write_failed",
                task_id=task_id,
                error_type=type(e).__name__,
                error=str(e),
            )
            return None
        return notification

    async def _publish(
        self,
        event_type: TaskEventType,
        task_id: str,
        recipients: list[str],
        task: Task | None = None,
    ) -> None:
        """发布实时事件（fire-and-forget）"""
        if self._event_hub is None:
            return
        event = TaskEvent(
            event_id=str(ULID()),
            type=event_type,
            task_id=task_id,
            ts=datetime.now(UTC),
            task=task.to_json() if task is not None else None,
            recipients=recipients,
        )
        try:
            await self._event_hub.publish(event)
        except Exception as e:
            log.warning(
                "task_event_publish_failed",
                task_id=task_id,
                event_type=event_type.value,
                error_type=type(e).__name__,
            )
