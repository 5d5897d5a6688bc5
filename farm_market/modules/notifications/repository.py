"""Data-access helpers for notifications.

Keys are scoped by owner (`notification:<userId>:<id>`); every read goes through the
caller's own prefix, which is what keeps one user's notifications invisible to another.
"""

from __future__ import annotations

from typing import List, Optional

from farm_market.modules.utils.repository import RecordRepository

from .models import Notification


class NotificationRepository(RecordRepository[Notification]):
    prefix = "notification"
    model = Notification

    async def list_for_user(self, user_id: str) -> List[Notification]:
        return await self.scan(user_id)

    async def get_for_user(self, user_id: str, notification_id: str) -> Optional[Notification]:
        return await self.get(user_id, notification_id)

    async def save(self, notification: Notification) -> Notification:
        return await self.put(notification, notification.user_id, notification.id)
