"""通知查询路由

POST /api/notifications: 请求体 {"userEmail": ...}，返回该用户的通知，最新在前。
邮箱放在请求体而非查询参数中。
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from ..deps import get_store_group
from ..services.notification_service import NotificationService

router = APIRouter()


class NotificationQuery(BaseModel):
    """通知查询请求体"""

    user_email: str | None = Field(default=None, alias="userEmail")

    model_config = ConfigDict(populate_by_name=True)


@router.post("/api/notifications")
async def list_notifications(
    body: NotificationQuery,
    store_group=Depends(get_store_group),
):
    """查询发给 userEmail 的通知，缺少 userEmail 返回 400"""
    service = NotificationService(store_group)
    notifications = await service.list_for_user(body.user_email)
    return [n.model_dump(mode="json", by_alias=True) for n in notifications]
