"""Notification Domain Model

通知表 append-only：每次 Task 变更（create/update/delete）写入一条，
写入后不更新、不删除。task_id 是弱引用，Task 删除后通知保留。
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class FieldChange(BaseModel):
    """单个字段的变更记录"""

    field: str = Field(description="字段名")
    old_value: str | None = Field(alias="oldValue", default=None)
    new_value: str | None = Field(alias="newValue", default=None)

    model_config = ConfigDict(populate_by_name=True)


class Notification(BaseModel):
    """Notification 数据模型"""

    id: str = Field(description="唯一标识，ULID 格式")
    message: str = Field(description="可读的变更描述")
    task_id: str = Field(alias="taskId", description="触发通知的 Task ID")
    users: list[str] = Field(default_factory=list, description="收件人邮箱（去重）")
    updates: list[FieldChange] = Field(
        default_factory=list,
        description="字段变更列表，仅 update 通知非空",
    )
    created_at: datetime = Field(alias="createdAt", description="创建时间，查询排序键")

    model_config = ConfigDict(populate_by_name=True)
