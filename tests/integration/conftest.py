"""集成测试共享 fixture"""

import os
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from taskboard.core.store import create_store_group
from taskboard.gateway.services.event_hub import TaskEventHub


@pytest_asyncio.fixture
async def integration_app(tmp_path: Path):
    """集成测试用 FastAPI app"""
    os.environ["TASKBOARD_DB_PATH"] = str(tmp_path / "test.db")

    from taskboard.gateway.config import GatewayConfig
    from taskboard.gateway.main import create_app

    app = create_app(GatewayConfig())

    store_group = await create_store_group(str(tmp_path / "test.db"))
    app.state.store_group = store_group
    app.state.event_hub = TaskEventHub()

    yield app

    await store_group.conn.close()
    os.environ.pop("TASKBOARD_DB_PATH", None)


@pytest_asyncio.fixture
async def client(integration_app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(
        transport=ASGITransport(app=integration_app),
        base_url="http://test",
    ) as ac:
        yield ac
