"""SQLite 数据库初始化

PRAGMA 配置 + SQL 函数注册 + 两张表 DDL + 索引创建。
collaborators / viewers / users / updates 以 JSON 文本存储，查询时用 json_each 展开。
使用 aiosqlite 异步操作。
"""

import aiosqlite

# tasks 表 DDL
_TASKS_DDL = """
CREATE TABLE IF NOT EXISTS tasks (
    id             TEXT PRIMARY KEY,
    name           TEXT NOT NULL,
    description    TEXT NOT NULL DEFAULT '',
    due_date       TEXT NOT NULL,
    priority       TEXT NOT NULL,
    status         TEXT NOT NULL,
    creator_email  TEXT NOT NULL,
    collaborators  TEXT NOT NULL DEFAULT '[]',
    viewers        TEXT NOT NULL DEFAULT '[]',
    created_at     TEXT NOT NULL,
    updated_at     TEXT NOT NULL
);
"""

_TASKS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_tasks_status ON tasks(status);",
    "CREATE INDEX IF NOT EXISTS idx_tasks_creator_email ON tasks(creator_email);",
    "CREATE INDEX IF NOT EXISTS idx_tasks_due_date ON tasks(due_date);",
]

# notifications 表 DDL（task_id 为弱引用，不加外键：Task 删除后通知保留）
_NOTIFICATIONS_DDL = """
CREATE TABLE IF NOT EXISTS notifications (
    id          TEXT PRIMARY KEY,
    message     TEXT NOT NULL,
    task_id     TEXT NOT NULL,
    users       TEXT NOT NULL DEFAULT '[]',
    updates     TEXT NOT NULL DEFAULT '[]',
    created_at  TEXT NOT NULL
);
"""

_NOTIFICATIONS_INDEXES = [
    "CREATE INDEX IF NOT EXISTS idx_notifications_created_at ON notifications(created_at DESC);",
]


def _casefold(value: str | None) -> str | None:
    # SQLite 内置 lower() 只处理 ASCII
    return value.casefold() if value is not None else None


async def init_db(conn: aiosqlite.Connection) -> None:
    """初始化数据库：设置 PRAGMA + 注册 SQL 函数 + 创建表 + 创建索引

    casefold() 是连接级函数，每个新连接都必须经过 init_db。

    Args:
        conn: aiosqlite 数据库连接
    """
    # 设置 PRAGMA
    await conn.execute("PRAGMA journal_mode = WAL;")
    await conn.execute("PRAGMA busy_timeout = 5000;")

    # 名称过滤使用的 Unicode 大小写折叠
    await conn.create_function("casefold", 1, _casefold, deterministic=True)

    # 创建表
    await conn.execute(_TASKS_DDL)
    await conn.execute(_NOTIFICATIONS_DDL)

    # 创建索引
    for idx_sql in _TASKS_INDEXES + _NOTIFICATIONS_INDEXES:
        await conn.execute(idx_sql)

    await conn.commit()


async def verify_wal_mode(conn: aiosqlite.Connection) -> bool:
    """验证 WAL 模式是否生效

    Returns:
        True 如果 WAL 模式已启用
    """
    cursor = await conn.execute("PRAGMA journal_mode;")
    row = await cursor.fetchone()
    return row is not None and row[0].lower() == "wal"
