"""依赖注入模块 -- 通过 FastAPI Depends 注入 Store 实例与事件广播器

实例通过 app.state 管理，在 lifespan 中初始化/清理。
"""

from fastapi import Request
from taskboard.core.store import StoreGroup

from .services.event_hub import TaskEventHub


def get_store_group(request: Request) -> StoreGroup:
    """从 app.state 获取 StoreGroup 实例"""
    return request.app.state.store_group


def get_event_hub(request: Request) -> TaskEventHub | None:
    """从 app.state 获取 TaskEventHub 实例（未初始化时为 None）"""
    return getattr(request.app.state, "event_hub", None)
