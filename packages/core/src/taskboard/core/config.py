"""配置常量模块 -- 可通过环境变量覆盖

包含数据库路径与实时推送心跳间隔。
"""

import os
from pathlib import Path


def _get_base_dir() -> Path:
    """获取项目 data 基础目录"""
    return Path(os.environ.get("TASKBOARD_DATA_DIR", "data"))


def get_db_path() -> str:
    """获取 SQLite 数据库路径"""
    return os.environ.get(
        "TASKBOARD_DB_PATH",
        str(_get_base_dir() / "sqlite" / "taskboard.db"),
    )


# SSE 心跳间隔（秒）
SSE_HEARTBEAT_INTERVAL: int = int(
    os.environ.get("TASKBOARD_SSE_HEARTBEAT_INTERVAL", "15")
)

# 实时推送订阅队列长度，队列满的订阅者会被移除
EVENT_QUEUE_MAXSIZE: int = 100
