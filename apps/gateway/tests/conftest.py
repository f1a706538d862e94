"""apps/gateway 测试配置 -- httpx AsyncClient + 手动初始化的 app 状态"""

import os
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from taskboard.core.store import create_store_group


@pytest_asyncio.fixture
async def store_group(tmp_path: Path):
    """临时数据库上的 StoreGroup"""
    sg = await create_store_group(str(tmp_path / "sqlite" / "test.db"))
    yield sg
    await sg.conn.close()


@pytest_asyncio.fixture
async def test_app(tmp_path: Path, store_group):
    """创建测试用 FastAPI app，手动初始化 lifespan 状态"""
    os.environ["TASKBOARD_DB_PATH"] = str(tmp_path / "sqlite" / "test.db")

    from taskboard.gateway.config import GatewayConfig
    from taskboard.gateway.main import create_app
    from taskboard.gateway.services.event_hub import TaskEventHub

    app = create_app(GatewayConfig())
    app.state.store_group = store_group
    app.state.event_hub = TaskEventHub()

    yield app

    os.environ.pop("TASKBOARD_DB_PATH", None)


@pytest_asyncio.fixture
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """提供 httpx AsyncClient 用于测试"""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def task_payload():
    """合法的创建请求体工厂"""

    def _make(**overrides) -> dict:
        payload = {
            "name": "Write report",
            "description": "first draft",
            "dueDate": "2025-01-01",
            "priority": "High",
            "status": "Pending",
            "creatorEmail": "a@x.com",
            "collaborators": [],
            "viewers": [],
        }
        payload.update(overrides)
        return payload

    return _make
