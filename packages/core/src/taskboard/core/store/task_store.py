"""TaskStore SQLite 实现

tasks 表每行即一个 Task 文档，列表字段以 JSON 文本存储。
此处仅提供数据库操作，不提交事务，由调用方通过 write_transaction 管理。
"""

import json
from datetime import datetime

import aiosqlite

from ..models.task import Task, TaskFilter

_COLUMNS = (
    "id, name, description, due_date, priority, status, creator_email, "
    "collaborators, viewers, created_at, updated_at"
)


def _ts(value: datetime) -> str:
    # 固定精度，保证文本比较与时间比较一致
    return value.isoformat(timespec="microseconds")


class SqliteTaskStore:
    """TaskStore 的 SQLite 实现"""

    def __init__(self, conn: aiosqlite.Connection) -> None:
        self._conn = conn

    async def create_task(self, task: Task) -> None:
        """插入任务记录"""
        await self._conn.execute(
            f"INSERT INTO tasks ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                task.id,
                task.name,
                task.description,
                _ts(task.due_date),
                task.priority.value,
                task.status.value,
                task.creator_email,
                json.dumps(task.collaborators, ensure_ascii=False),
                json.dumps(task.viewers, ensure_ascii=False),
                _ts(task.created_at),
                _ts(task.updated_at),
            ),
        )

    async def get_task(self, task_id: str) -> Task | None:
        """根据 id 查询任务"""
        cursor = await self._conn.execute(
            f"SELECT {_COLUMNS} FROM tasks WHERE id = ?",
            (task_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_task(row)

    async def list_tasks(self, filters: TaskFilter | None = None) -> list[Task]:
        """按过滤条件查询任务列表

        所有已提供的条件 AND 组合；associated_email 自身是一个 OR 组。
        不排序，返回存储原生顺序。
        """
        clauses: list[str] = []
        params: list[str] = []
        f = filters or TaskFilter()

        if f.name:
            clauses.append("instr(casefold(name), ?) > 0")
            params.append(f.name.casefold())
        if f.creator_email:
            clauses.append("creator_email = ?")
            params.append(f.creator_email)
        if f.description:
            clauses.append("description = ?")
            params.append(f.description)
        if f.status:
            clauses.append("status = ?")
            params.append(f.status.value)
        if f.priority:
            clauses.append("priority = ?")
            params.append(f.priority.value)
        if f.due_date_lte:
            clauses.append("due_date <= ?")
            params.append(_ts(f.due_date_lte))
        if f.associated_email:
            clauses.append(
                "(creator_email = ?"
                " OR EXISTS (SELECT 1 FROM json_each(tasks.collaborators) WHERE value = ?)"
                " OR EXISTS (SELECT 1 FROM json_each(tasks.viewers) WHERE value = ?))"
            )
            params.extend([f.associated_email] * 3)

        sql = f"SELECT {_COLUMNS} FROM tasks"
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)

        cursor = await self._conn.execute(sql, params)
        rows = await cursor.fetchall()
        return [self._row_to_task(row) for row in rows]

    async def update_task(self, task: Task) -> None:
        """整体替换可变字段（creator_email / created_at 不变）"""
        await self._conn.execute(
            """
            UPDATE tasks
            SET name = ?, description = ?, due_date = ?, priority = ?, status = ?,
                collaborators = ?, viewers = ?, updated_at = ?
            WHERE id = ?
            """,
            (
                task.name,
                task.description,
                _ts(task.due_date),
                task.priority.value,
                task.status.value,
                json.dumps(task.collaborators, ensure_ascii=False),
                json.dumps(task.viewers, ensure_ascii=False),
                _ts(task.updated_at),
                task.id,
            ),
        )

    async def delete_task(self, task_id: str) -> Task | None:
        """删除任务并返回删除前的记录，不存在时返回 None"""
        task = await self.get_task(task_id)
        if task is None:
            return None
        await self._conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))
        return task

    @staticmethod
    def _row_to_task(row: aiosqlite.Row) -> Task:
        """将数据库行转换为 Task 模型"""
        return Task(
            id=row[0],
            name=row[1],
            description=row[2],
            due_date=datetime.fromisoformat(row[3]),
            priority=row[4],
            status=row[5],
            creator_email=row[6],
            collaborators=json.loads(row[7]),
            viewers=json.loads(row[8]),
            created_at=datetime.fromisoformat(row[9]),
            updated_at=datetime.fromisoformat(row[10]),
        )
