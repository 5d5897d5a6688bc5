"""Messaging domain package."""

from .models import Message
from .service import MessageService, derive_conversation_id

__all__ = ["Message", "MessageService", "derive_conversation_id"]
