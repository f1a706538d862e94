"""NotificationService -- 通知查询"""

from taskboard.core.exceptions import ValidationError
from taskboard.core.models import Notification
from taskboard.core.store import StoreGroup


class NotificationService:
    """通知查询服务"""

    def __init__(self, store_group: StoreGroup) -> None:
        self._stores = store_group

    async def list_for_user(self, email: str | None) -> list[Notification]:
        """查询发给 email 的所有通知，最新在前，不分页

        Raises:
            ValidationError: email 缺失
        """
        if not email:
            raise ValidationError("User email is required")
        return await self._stores.notification_store.list_for_user(email)
