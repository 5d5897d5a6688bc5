"""Pydantic schemas dedicated to the notifications domain."""

from __future__ import annotations

from typing import List

from farm_market.modules.utils.records import CamelModel

from .models import Notification


class NotificationListResponse(CamelModel):
    notifications: List[Notification]


class NotificationResponse(CamelModel):
    notification: Notification


class UnreadCountResponse(CamelModel):
    unread_count: int


class MarkAllReadResponse(CamelModel):
    updated: int
