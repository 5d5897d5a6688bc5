"""Notification creation and per-user inbox operations."""

from __future__ import annotations

import logging
from typing import List

from farm_market.core.exceptions import ResourceNotFoundException
from farm_market.core.storage import KeyValueStore
from farm_market.modules.utils.records import new_record_id, newest_first

from .models import Notification, NotificationType
from .repository import NotificationRepository

logger = logging.getLogger(__name__)


class NotificationService:
    def __init__(self, store: KeyValueStore):
        self.notifications = NotificationRepository(store)

    async def notify(
        self,
        user_id: str,
        notification_type: NotificationType,
        title: str,
        message: str,
    ) -> Notification:
        """Enqueue one unread notification in `user_id`'s inbox."""
        notification = Notification(
            id=new_record_id("notif"),
            user_id=user_id,
            type=notification_type,
            title=title,
            message=message,
        )
        await self.notifications.save(notification)
        logger.debug("Queued %s notification for %s", notification.type, user_id)
        return notification

    async def list_for_user(self, user_id: str) -> List[Notification]:
        return newest_first(await self.notifications.list_for_user(user_id))

    async def unread_count(self, user_id: str) -> int:
        items = await self.notifications.list_for_user(user_id)
        return sum(1 for item in items if not item.read)

    async def mark_read(self, user_id: str, notification_id: str) -> Notification:
        notification = await self.notifications.get_for_user(user_id, notification_id)
        if notification is None:
            raise ResourceNotFoundException("Notification", notification_id)
        if not notification.read:
            notification = notification.model_copy(update={"read": True})
            await self.notifications.save(notification)
        return notification

    async def mark_all_read(self, user_id: str) -> int:
        updated = 0
        for notification in await self.notifications.list_for_user(user_id):
            if notification.read:
                continue
            await self.notifications.save(notification.model_copy(update={"read": True}))
            updated += 1
        return updated
