"""Chat message stored under `message:<conversationId>:<id>`."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from farm_market.modules.utils.records import CamelModel, utcnow


class Message(CamelModel):
    id: str
    conversation_id: str
    sender_id: str
    receiver_id: str
    content: str
    order_id: Optional[str] = None
    offer_price: Optional[float] = None
    read: bool = False
    created_at: datetime = Field(default_factory=utcnow)

    def involves(self, user_id: str) -> bool:
        return user_id in (self.sender_id, self.receiver_id)
