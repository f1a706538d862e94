"""Domain Models 单元测试

测试内容：
1. 枚举值与字符串互转
2. Task JSON 使用 camelCase 别名
3. 输入模型校验（必填字段、枚举、日期解析）
"""

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError
from taskboard.core.models import (
    FieldChange,
    Notification,
    Priority,
    TaskCreate,
    TaskEventType,
    TaskFilter,
    TaskStatus,
    TaskUpdate,
)


def _create_payload(**overrides) -> dict:
    payload = {
        "name": "Write report",
        "description": "",
        "dueDate": "2025-01-01",
        "priority": "High",
        "status": "Pending",
        "creatorEmail": "a@x.com",
    }
    payload.update(overrides)
    return payload


class TestEnums:
    """枚举测试"""

    def test_task_status_values(self):
        """TaskStatus 值与看板列名一致"""
        assert TaskStatus.PENDING == "Pending"
        assert TaskStatus.IN_PROGRESS == "In Progress"
        assert TaskStatus.COMPLETED == "Completed"

    def test_priority_from_string(self):
        """字符串可转换为 Priority"""
        assert Priority("Medium") is Priority.MEDIUM

    def test_unknown_status_rejected(self):
        with pytest.raises(ValueError):
            TaskStatus("Done")

    def test_event_type_values(self):
        assert TaskEventType.TASK_CREATED == "taskCreated"
        assert TaskEventType.TASK_DELETED == "taskDeleted"


class TestTask:
    """Task 模型测试"""

    def test_json_uses_camel_case(self, make_task):
        """to_json 输出 camelCase 字段与 ISO-8601 时间"""
        data = make_task().to_json()
        assert set(data) == {
            "id",
            "name",
            "description",
            "dueDate",
            "priority",
            "status",
            "creatorEmail",
            "collaborators",
            "viewers",
            "createdAt",
            "updatedAt",
        }
        assert data["dueDate"].startswith("2026-02-01T00:00:00")
        assert data["status"] == "Pending"

    def test_naive_datetime_treated_as_utc(self, make_task):
        task = make_task(due_date=datetime(2026, 3, 1, 12, 0))
        assert task.due_date.tzinfo is not None
        assert task.due_date.utcoffset().total_seconds() == 0


class TestTaskCreate:
    """createTask 输入校验"""

    def test_date_only_due_date(self):
        """YYYY-MM-DD 解析为当天 00:00 UTC"""
        payload = TaskCreate.model_validate(_create_payload())
        assert payload.due_date == datetime(2025, 1, 1, tzinfo=UTC)

    def test_lists_default_to_empty(self):
        payload = TaskCreate.model_validate(_create_payload())
        assert payload.collaborators == []
        assert payload.viewers == []

    def test_null_lists_become_empty(self):
        payload = TaskCreate.model_validate(
            _create_payload(collaborators=None, viewers=None)
        )
        assert payload.collaborators == []
        assert payload.viewers == []

    def test_empty_description_allowed(self):
        payload = TaskCreate.model_validate(_create_payload(description=""))
        assert payload.description == ""

    @pytest.mark.parametrize(
        "field", ["name", "description", "dueDate", "priority", "status", "creatorEmail"]
    )
    def test_required_fields(self, field):
        """缺少任一必填字段校验失败"""
        payload = _create_payload()
        del payload[field]
        with pytest.raises(ValidationError):
            TaskCreate.model_validate(payload)

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            TaskCreate.model_validate(_create_payload(name=""))

    def test_invalid_priority_rejected(self):
        with pytest.raises(ValidationError):
            TaskCreate.model_validate(_create_payload(priority="Urgent"))

    def test_update_accepts_full_datetime(self):
        payload = TaskUpdate.model_validate(
            _create_payload(dueDate="2025-01-01T10:30:00+02:00", status="In Progress")
        )
        assert payload.due_date == datetime(2025, 1, 1, 8, 30, tzinfo=UTC)
        assert payload.status is TaskStatus.IN_PROGRESS


class TestTaskFilter:
    """getTasks 过滤条件"""

    def test_all_optional(self):
        f = TaskFilter()
        assert f.name is None
        assert f.associated_email is None

    def test_due_date_lte_date_only(self):
        f = TaskFilter(due_date_lte="2025-06-30")
        assert f.due_date_lte == datetime(2025, 6, 30, tzinfo=UTC)

    def test_invalid_status_rejected(self):
        with pytest.raises(ValidationError):
            TaskFilter(status="Archived")


class TestNotification:
    """Notification 模型测试"""

    def test_json_aliases(self):
        n = Notification(
            id="01JNOTIF000000000000000001",
            message='Task "x" deleted',
            task_id="01JTASK0000000000000000001",
            users=["b@x.com"],
            updates=[FieldChange(field="status", old_value="Pending", new_value="Completed")],
            created_at=datetime(2026, 1, 1, tzinfo=UTC),
        )
        data = n.model_dump(mode="json", by_alias=True)
        assert data["taskId"] == "01JTASK0000000000000000001"
        assert data["updates"] == [
            {"field": "status", "oldValue": "Pending", "newValue": "Completed"}
        ]
        assert "createdAt" in data
