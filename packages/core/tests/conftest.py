"""packages/core 测试配置 -- 核心层 fixture"""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime
from pathlib import Path

import aiosqlite
import pytest
import pytest_asyncio


@pytest_asyncio.fixture
async def core_db(tmp_path: Path) -> AsyncGenerator[aiosqlite.Connection, None]:
    """核心层已初始化数据库连接"""
    from taskboard.core.store.sqlite_init import init_db

    conn = await aiosqlite.connect(str(tmp_path / "core_test.db"))
    await init_db(conn)
    yield conn
    await conn.close()


@pytest.fixture
def make_task():
    """构造 Task 的工厂，未指定字段使用默认值"""
    from taskboard.core.models import Task

    def _make(**overrides):
        now = datetime(2026, 1, 1, 9, 0, tzinfo=UTC)
        fields = {
            "id": "01JTASK0000000000000000001",
            "name": "Write report",
            "description": "first draft",
            "due_date": datetime(2026, 2, 1, tzinfo=UTC),
            "priority": "High",
            "status": "Pending",
            "creator_email": "a@x.com",
            "collaborators": [],
            "viewers": [],
            "created_at": now,
            "updated_at": now,
        }
        fields.update(overrides)
        return Task(**fields)

    return _make
