from typing import List

from campushub.core import errors
from campushub.core.errors import Result
from campushub.db.gateway import EntityStoreGateway, Row


class NotificationService:
    def __init__(self, gateway: EntityStoreGateway):
        self.gateway = gateway

    async def notify(self, user_id: str, title: str, message: str) -> Result:
        return await self.gateway.insert(
            "notifications",
            {"user_id": user_id, "title": title, "message": message, "is_read": False},
        )

    async def notifications_for_user(self, user_id: str) -> List[Row]:
        result = await self.gateway.fetch_all("notifications", {"user_id": user_id})
        return result.data if result.success else []

    async def mark_read(self, notification_id: str, user_id: str) -> Result:
        result = await self.gateway.update(
            "notifications",
            {"id": notification_id, "user_id": user_id},
            {"is_read": True},
        )
        if not result.success:
            return result
        if not result.data:
            return Result.fail(errors.NO_ROWS, f"No notification {notification_id} for user {user_id}")
        return Result.ok(result.data[0])
