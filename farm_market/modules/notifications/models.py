"""Notification record stored under `notification:<userId>:<id>`."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import Field

from farm_market.modules.utils.records import CamelModel, utcnow


class NotificationType(str, Enum):
    MESSAGE = "message"
    ORDER = "order"
    ALERT = "alert"
    PRICE = "price"


class Notification(CamelModel):
    id: str
    user_id: str
    type: NotificationType
    title: str
    message: str
    read: bool = False
    created_at: datetime = Field(default_factory=utcnow)
