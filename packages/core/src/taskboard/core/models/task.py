"""Task Domain Model

Task 是唯一的可变文档：由 create 写入，由 update 整体替换可变字段，
由 delete 永久删除。creator_email 创建后不可变。
JSON 字段名使用 camelCase（dueDate / creatorEmail / createdAt ...）。
"""

from datetime import UTC, date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import Priority, TaskStatus


def to_utc(value: datetime) -> datetime:
    """统一为 UTC aware datetime（naive 视为 UTC）"""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _parse_due_date(value):
    # 前端只提交日期（YYYY-MM-DD），按当天 00:00 UTC 存储
    if isinstance(value, str) and len(value) == 10:
        value = date.fromisoformat(value)
    if isinstance(value, date) and not isinstance(value, datetime):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    return value


class _CamelModel(BaseModel):
    """snake_case 属性 + camelCase JSON 别名"""

    model_config = ConfigDict(populate_by_name=True)


class Task(_CamelModel):
    """Task 数据模型

    collaborators 与 viewers 保持输入顺序用于展示。
    查看者互斥规则（同时是协作者的地址从 viewers 移除）只在更新时应用，
    创建时按原样保存，因此新建记录中同一地址可能同时出现在两者中。
    """

    id: str = Field(description="唯一标识，ULID 格式")
    name: str = Field(min_length=1, description="任务名称")
    description: str = Field(description="任务描述，可为空")
    due_date: datetime = Field(alias="dueDate", description="截止时间")
    priority: Priority = Field(description="优先级")
    status: TaskStatus = Field(description="当前状态")
    creator_email: str = Field(alias="creatorEmail", description="创建者邮箱")
    collaborators: list[str] = Field(default_factory=list, description="协作者邮箱")
    viewers: list[str] = Field(default_factory=list, description="查看者邮箱")
    created_at: datetime = Field(alias="createdAt", description="创建时间")
    updated_at: datetime = Field(alias="updatedAt", description="更新时间")

    @field_validator("due_date", "created_at", "updated_at")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return to_utc(value)

    def to_json(self) -> dict:
        """对外 JSON 表示（camelCase，ISO-8601 时间）"""
        return self.model_dump(mode="json", by_alias=True)


class _TaskFields(_CamelModel):
    """create / update 共用的可变字段"""

    name: str = Field(min_length=1)
    description: str
    due_date: datetime = Field(alias="dueDate")
    priority: Priority
    status: TaskStatus
    creator_email: str = Field(alias="creatorEmail", min_length=1)
    collaborators: list[str] = Field(default_factory=list)
    viewers: list[str] = Field(default_factory=list)

    @field_validator("collaborators", "viewers", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return [] if value is None else value

    @field_validator("due_date", mode="before")
    @classmethod
    def _date_only(cls, value):
        return _parse_due_date(value)

    @field_validator("due_date")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return to_utc(value)


class TaskCreate(_TaskFields):
    """createTask 输入"""


class TaskUpdate(_TaskFields):
    """updateTask 输入

    creator_email 是本次操作者，仅用于通知文案与收件人，
    不会覆盖 Task 原有的 creator_email。
    """


class TaskFilter(BaseModel):
    """getTasks 过滤条件 -- 所有已提供的条件 AND 组合"""

    name: str | None = Field(default=None, description="名称子串，大小写不敏感")
    creator_email: str | None = Field(default=None, description="创建者精确匹配")
    description: str | None = Field(default=None, description="描述精确匹配")
    status: TaskStatus | None = Field(default=None)
    priority: Priority | None = Field(default=None)
    due_date_lte: datetime | None = Field(default=None, description="截止时间上界（含）")
    associated_email: str | None = Field(
        default=None,
        description="创建者 / 协作者 / 查看者任一匹配",
    )

    @field_validator("due_date_lte", mode="before")
    @classmethod
    def _date_only(cls, value):
        return _parse_due_date(value)

    @field_validator("due_date_lte")
    @classmethod
    def _utc(cls, value: datetime | None) -> datetime | None:
        return None if value is None else to_utc(value)
