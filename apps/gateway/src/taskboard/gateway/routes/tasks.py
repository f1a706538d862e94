"""任务路由

POST   /api/tasks            创建任务，201
GET    /api/tasks            任务列表，支持过滤
GET    /api/tasks/{task_id}  任务详情，404 不存在
PUT    /api/tasks/{task_id}  整体更新，404 不存在
DELETE /api/tasks/{task_id}  删除任务，400 非法 ID / 404 不存在
"""

from fastapi import APIRouter, Depends, Query
from starlette.responses import JSONResponse
from taskboard.core.models import TaskCreate, TaskFilter, TaskUpdate

from ..deps import get_event_hub, get_store_group
from ..services.task_service import TaskService, parse_input

router = APIRouter()


@router.post("/api/tasks", status_code=201)
async def create_task(
    body: TaskCreate,
    store_group=Depends(get_store_group),
    event_hub=Depends(get_event_hub),
):
    """创建任务，返回含 id 的完整 Task"""
    service = TaskService(store_group, event_hub)
    task = await service.create_task(body)
    return JSONResponse(status_code=201, content=task.to_json())


@router.get("/api/tasks")
async def list_tasks(
    name: str | None = Query(default=None, description="名称子串，大小写不敏感"),
    creator_email: str | None = Query(default=None, alias="creatorEmail"),
    description: str | None = Query(default=None),
    status: str | None = Query(default=None, description="Pending / In Progress / Completed"),
    priority: str | None = Query(default=None, description="Low / Medium / High"),
    due_date_lte: str | None = Query(default=None, alias="dueDateLTE"),
    associated_email: str | None = Query(default=None, alias="associatedEmail"),
    store_group=Depends(get_store_group),
):
    """按条件查询任务列表，空字符串参数视为未提供"""
    raw = {
        "name": name,
        "creator_email": creator_email,
        "description": description,
        "status": status,
        "priority": priority,
        "due_date_lte": due_date_lte,
        "associated_email": associated_email,
    }
    filters = parse_input(TaskFilter, {k: v for k, v in raw.items() if v})

    service = TaskService(store_group)
    tasks = await service.get_tasks(filters)
    return [t.to_json() for t in tasks]


@router.get("/api/tasks/{task_id}")
async def get_task(
    task_id: str,
    store_group=Depends(get_store_group),
):
    """查询任务详情"""
    service = TaskService(store_group)
    task = await service.get_task_by_id(task_id)
    return task.to_json()


@router.put("/api/tasks/{task_id}")
async def update_task(
    task_id: str,
    body: TaskUpdate,
    store_group=Depends(get_store_group),
    event_hub=Depends(get_event_hub),
):
    """整体更新任务；creatorEmail 为本次操作者"""
    service = TaskService(store_group, event_hub)
    task = await service.update_task(task_id, body)
    return task.to_json()


@router.delete("/api/tasks/{task_id}")
async def delete_task(
    task_id: str,
    store_group=Depends(get_store_group),
    event_hub=Depends(get_event_hub),
):
    """删除任务"""
    service = TaskService(store_group, event_hub)
    await service.delete_task(task_id)
    return {"message": "Task deleted"}
