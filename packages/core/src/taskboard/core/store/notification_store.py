"""NotificationStore SQLite 实现

通知表 append-only：只允许插入，不允许更新或删除。
"""

import json
from datetime import datetime

import aiosqlite

from ..models.notification import FieldChange, Notification

_COLUMNS = "id, message, task_id, users, updates, created_at"


class SqliteNotificationStore:
    """NotificationStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def append_notification(self, notification: Notification) -> None:
        """追加通知（append-only）

        注意：此方法不自动提交事务，需由调用方管理事务。
        """
        await self._conn.execute(
            f"INSERT INTO notifications ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
            (
                notification.id,
                notification.message,
                notification.task_id,
                json.dumps(notification.users, ensure_ascii=False),
                json.dumps(
                    [u.model_dump(by_alias=True) for u in notification.updates],
                    ensure_ascii=False,
                ),
                notification.created_at.isoformat(timespec="microseconds"),
            ),
        )

    async def list_for_user(self, email: str) -> list[Notification]:
        """查询收件人包含 email 的所有通知，按 created_at 倒序

        同一时间戳内按 id 倒序（ULID 时间有序）。
        """
        cursor = await self._conn.execute(
            f"""
            SELECT {_COLUMNS} FROM notifications
            WHERE EXISTS (
                SELECT 1 FROM json_each(notifications.users) WHERE value = ?
            )
            ORDER BY created_at DESC, id DESC
            """,
            (email,),
        )
        rows = await cursor.fetchall()
        return [self._row_to_notification(row) for row in rows]

    @staticmethod
    def _row_to_notification(row: aiosqlite.Row) -> Notification:
        """将数据库行转换为 Notification 模型"""
        updates = json.loads(row[4]) if row[4] else []
        return Notification(
            id=row[0],
            message=row[1],
            task_id=row[2],
            users=json.loads(row[3]) if row[3] else [],
            updates=[FieldChange(**u) for u in updates],
            created_at=datetime.fromisoformat(row[5]),
        )
