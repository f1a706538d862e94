"""看板端到端场景

创建 -> 分配协作者/查看者 -> 拖拽改状态 -> 删除，
每一步校验持久化记录、通知流与实时事件。
"""

from httpx import AsyncClient

_BASE = {
    "name": "Write report",
    "description": "",
    "dueDate": "2025-01-01",
    "priority": "High",
    "status": "Pending",
    "creatorEmail": "a@x.com",
    "collaborators": [],
    "viewers": [],
}


async def _feed(client: AsyncClient, email: str) -> list[dict]:
    resp = await client.post("/api/notifications", json={"userEmail": email})
    assert resp.status_code == 200
    return resp.json()


class TestAssignmentScenario:
    """创建后分配成员，查看者与协作者互斥"""

    async def test_assign_members(self, client: AsyncClient):
        # 1. 创建
        resp = await client.post("/api/tasks", json=_BASE)
        assert resp.status_code == 201
        task = resp.json()
        assert task["collaborators"] == []
        assert task["viewers"] == []

        # 2. 同一地址同时作为协作者和查看者提交
        resp = await client.put(
            f"/api/tasks/{task['id']}",
            json={**_BASE, "collaborators": ["b@x.com"], "viewers": ["b@x.com", "c@x.com"]},
        )
        assert resp.status_code == 200
        stored = (await client.get(f"/api/tasks/{task['id']}")).json()
        assert stored["collaborators"] == ["b@x.com"]
        assert stored["viewers"] == ["c@x.com"]

        # 3. diff 同时包含 collaborators 和 viewers（按提交值计算）
        [latest, *_] = await _feed(client, "c@x.com")
        assert latest["message"] == 'Task "Write report" updated by "a@x.com".'
        assert [u["field"] for u in latest["updates"]] == ["collaborators", "viewers"]
        assert latest["updates"][1]["newValue"] == "b@x.com, c@x.com"

        # 4. 无关用户没有通知
        assert await _feed(client, "z@x.com") == []

    async def test_associated_email_view(self, client: AsyncClient):
        """associatedEmail 返回创建 / 协作 / 查看三类任务的并集"""
        await client.post("/api/tasks", json={**_BASE, "name": "own"})
        await client.post(
            "/api/tasks",
            json={**_BASE, "name": "collab", "creatorEmail": "z@x.com", "collaborators": ["a@x.com"]},
        )
        await client.post(
            "/api/tasks",
            json={**_BASE, "name": "view", "creatorEmail": "z@x.com", "viewers": ["a@x.com"]},
        )
        await client.post("/api/tasks", json={**_BASE, "name": "unrelated", "creatorEmail": "z@x.com"})

        resp = await client.get("/api/tasks", params={"associatedEmail": "a@x.com"})
        names = [t["name"] for t in resp.json()]
        assert sorted(names) == ["collab", "own", "view"]


class TestBoardScenario:
    """拖拽改状态与删除"""

    async def test_drag_to_in_progress(self, client: AsyncClient, integration_app):
        queue = await integration_app.state.event_hub.subscribe("a@x.com")
        task = (await client.post("/api/tasks", json=_BASE)).json()

        # 看板拖拽：同一 PUT 接口，仅 status 变化
        resp = await client.put(
            f"/api/tasks/{task['id']}", json={**_BASE, "status": "In Progress"}
        )
        assert resp.status_code == 200

        column = (await client.get("/api/tasks", params={"status": "In Progress"})).json()
        assert [t["id"] for t in column] == [task["id"]]

        [latest, *_] = await _feed(client, "a@x.com")
        assert latest["updates"] == [
            {"field": "status", "oldValue": "Pending", "newValue": "In Progress"}
        ]

        events = [queue.get_nowait() for _ in range(queue.qsize())]
        assert [e.type.value for e in events] == ["taskCreated", "taskUpdated"]

    async def test_delete_notifies_members_only(self, client: AsyncClient):
        task = (
            await client.post(
                "/api/tasks",
                json={**_BASE, "collaborators": ["b@x.com"], "viewers": ["c@x.com"]},
            )
        ).json()

        resp = await client.delete(f"/api/tasks/{task['id']}")
        assert resp.status_code == 200
        assert (await client.get(f"/api/tasks/{task['id']}")).status_code == 404

        deleted = [n for n in await _feed(client, "b@x.com") if n["message"].endswith("deleted")]
        assert len(deleted) == 1
        assert deleted[0]["users"] == ["b@x.com", "c@x.com"]
        assert deleted[0]["taskId"] == task["id"]

        creator_messages = [n["message"] for n in await _feed(client, "a@x.com")]
        assert not any(m.endswith("deleted") for m in creator_messages)
