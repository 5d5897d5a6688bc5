"""Data-access helpers for chat messages."""

from __future__ import annotations

from typing import List, Optional

from farm_market.modules.utils.repository import RecordRepository

from .models import Message


class MessageRepository(RecordRepository[Message]):
    prefix = "message"
    model = Message

    async def get_message(self, conversation_id: str, message_id: str) -> Optional[Message]:
        return await self.get(conversation_id, message_id)

    async def find_message(self, message_id: str) -> Optional[Message]:
        """Locate a message by id alone; requires a scan over every conversation."""
        for message in await self.scan():
            if message.id == message_id:
                return message
        return None

    async def save(self, message: Message) -> Message:
        return await self.put(message, message.conversation_id, message.id)

    async def list_conversation(self, conversation_id: str) -> List[Message]:
        # `message:c1:` also matches keys of a conversation named `c1:x`.
        return [
            m for m in await self.scan(conversation_id)
            if m.conversation_id == conversation_id
        ]

    async def list_all(self) -> List[Message]:
        return await self.scan()
