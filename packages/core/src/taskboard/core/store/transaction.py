"""单文档写事务封装

每次 Task 或 Notification 写入都在一个 SQLite 事务内完成：
成功则提交，失败则回滚并转换为 StorageError。
Task 写入与其通知写入是两个独立事务，不做跨文档原子性。

所有请求共享同一个连接，commit / rollback 作用于连接上全部未提交语句，
因此写事务必须持有写锁直到提交或回滚完成。
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager, nullcontext

import aiosqlite

from ..exceptions import StorageError


@asynccontextmanager
async def write_transaction(
    conn: aiosqlite.Connection,
    operation: str,
    lock: asyncio.Lock | None = None,
) -> AsyncIterator[aiosqlite.Connection]:
    """在同一事务内执行写操作并原子提交

    Args:
        conn: 数据库连接
        operation: 操作描述，用于错误信息
        lock: 连接级写锁；连接被并发请求共享时必须传入

    Raises:
        StorageError: 写入或提交失败，事务已回滚
    """
    async with lock or nullcontext():
        try:
            yield conn
            await conn.commit()
        except aiosqlite.Error as e:
            await conn.rollback()
            raise StorageError(f"Error {operation}", e) from e
        except Exception:
            await conn.rollback()
            raise
