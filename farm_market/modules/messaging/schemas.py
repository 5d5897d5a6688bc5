"""Request/response schemas for messaging."""

from __future__ import annotations

from typing import List, Optional

from farm_market.modules.utils.records import CamelModel

from .models import Message


class MessageCreate(CamelModel):
    receiver_id: Optional[str] = None
    content: Optional[str] = None
    conversation_id: Optional[str] = None
    order_id: Optional[str] = None
    offer_price: Optional[float] = None


class Conversation(CamelModel):
    conversation_id: str
    last_message: Message
    unread_count: int
    # Newest first.
    messages: List[Message]


class ConversationListResponse(CamelModel):
    conversations: List[Conversation]


class MessageListResponse(CamelModel):
    messages: List[Message]


class MessageResponse(CamelModel):
    message: Message
