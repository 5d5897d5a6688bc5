"""Buyer/supplier chat.

Conversations are implicit: a message carries its `conversationId` and conversations are
rebuilt by grouping the caller's messages on every read.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, List, Optional

from farm_market.core.exceptions import (
    ForbiddenException,
    ResourceNotFoundException,
    ValidationException,
)
from farm_market.core.storage import KeyValueStore
from farm_market.modules.notifications import NotificationService, NotificationType
from farm_market.modules.utils.records import new_record_id, newest_first, oldest_first

from .models import Message
from .repository import MessageRepository
from .schemas import Conversation, MessageCreate

logger = logging.getLogger(__name__)


def derive_conversation_id(user_a: str, user_b: str) -> str:
    """Order-independent conversation id for a pair of users."""
    first, second = sorted((user_a, user_b))
    return f"conv-{first}-{second}"


class MessageService:
    def __init__(self, store: KeyValueStore):
        self.messages = MessageRepository(store)
        self.notifications = NotificationService(store)

    async def list_conversations(self, user_id: str) -> List[Conversation]:
        grouped: Dict[str, List[Message]] = defaultdict(list)
        for message in await self.messages.list_all():
            if message.involves(user_id):
                grouped[message.conversation_id].append(message)

        conversations = []
        for conversation_id, items in grouped.items():
            ordered = newest_first(items)
            conversations.append(
                Conversation(
                    conversation_id=conversation_id,
                    last_message=ordered[0],
                    unread_count=sum(
                        1 for m in ordered if not m.read and m.receiver_id == user_id
                    ),
                    messages=ordered,
                )
            )
        return sorted(
            conversations, key=lambda c: c.last_message.created_at, reverse=True
        )

    async def list_messages(self, user_id: str, conversation_id: str) -> List[Message]:
        """Oldest first; only messages the user sent or received."""
        items = await self.messages.list_conversation(conversation_id)
        return oldest_first(m for m in items if m.involves(user_id))

    async def send(self, sender_id: str, payload: MessageCreate) -> Message:
        content = payload.content or ""
        if not payload.receiver_id or not content.strip():
            raise ValidationException("Receiver and content required")

        message = Message(
            id=new_record_id(),
            conversation_id=payload.conversation_id
            or derive_conversation_id(sender_id, payload.receiver_id),
            sender_id=sender_id,
            receiver_id=payload.receiver_id,
            content=content,
            order_id=payload.order_id or None,
            offer_price=payload.offer_price or None,
        )
        await self.messages.save(message)
        logger.info(
            "Message %s sent in %s by %s", message.id, message.conversation_id, sender_id
        )

        await self.notifications.notify(
            message.receiver_id,
            NotificationType.MESSAGE,
            "New Message",
            "You have a new message",
        )
        return message

    async def mark_read(
        self, user_id: str, message_id: str, conversation_id: Optional[str] = None
    ) -> Message:
        if conversation_id:
            message = await self.messages.get_message(conversation_id, message_id)
        else:
            message = await self.messages.find_message(message_id)
        if message is None:
            raise ResourceNotFoundException("Message", message_id)
        if message.receiver_id != user_id:
            logger.warning("User %s may not mark message %s read", user_id, message_id)
            raise ForbiddenException()

        if not message.read:
            message = message.model_copy(update={"read": True})
            await self.messages.save(message)
        return message
