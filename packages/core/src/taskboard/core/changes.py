"""Task 变更推导 -- diff、查看者互斥规则、通知收件人

纯函数，不访问存储。TaskService 在写入前后调用这些函数，
得到通知的 updates 与 users。
"""

from collections.abc import Iterable
from datetime import datetime

from .models.notification import FieldChange
from .models.task import Task, TaskUpdate


def _render(value) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, list):
        return ", ".join(value)
    return str(value)


def diff_task(current: Task, update: TaskUpdate) -> list[FieldChange]:
    """计算字段级 diff

    在查看者互斥规则之前执行，所以传入的 viewers 是调用方原样提交的列表。
    列表字段整体比较，顺序敏感。

    Returns:
        变化字段的 FieldChange 列表，字段顺序固定
    """
    pairs = [
        ("name", current.name, update.name),
        ("description", current.description, update.description),
        ("dueDate", current.due_date, update.due_date),
        ("priority", current.priority, update.priority),
        ("status", current.status, update.status),
        ("collaborators", current.collaborators, update.collaborators),
        ("viewers", current.viewers, update.viewers),
    ]
    changes: list[FieldChange] = []
    for field, old, new in pairs:
        if old != new:
            changes.append(
                FieldChange(field=field, old_value=_render(old), new_value=_render(new))
            )
    return changes


def exclusive_viewers(viewers: list[str], collaborators: list[str]) -> list[str]:
    """移除同时是协作者的查看者（协作者身份优先）"""
    collaborator_set = set(collaborators)
    return [v for v in viewers if v not in collaborator_set]


def unique_emails(*groups: Iterable[str]) -> list[str]:
    """合并多组邮箱，按首次出现顺序去重，忽略空值"""
    seen: dict[str, None] = {}
    for group in groups:
        for email in group:
            if email:
                seen.setdefault(email, None)
    return list(seen)


def created_recipients(task: Task) -> list[str]:
    """create 通知收件人：创建者 ∪ 协作者 ∪ 查看者"""
    return unique_emails([task.creator_email], task.collaborators, task.viewers)


def updated_recipients(
    stored_creator: str,
    acting_email: str,
    update: TaskUpdate,
) -> list[str]:
    """update 通知收件人：新协作者 ∪ 新查看者 ∪ 操作者 ∪ 原创建者"""
    return unique_emails(
        update.collaborators,
        update.viewers,
        [acting_email, stored_creator],
    )


def deleted_recipients(task: Task) -> list[str]:
    """delete 通知收件人：删除前的协作者 ∪ 查看者，不含创建者"""
    return unique_emails(task.collaborators, task.viewers)
