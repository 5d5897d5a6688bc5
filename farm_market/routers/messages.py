"""Buyer/supplier chat router."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from farm_market.core.config import settings
from farm_market.core.middleware.rate_limit import limiter
from farm_market.core.storage import KeyValueStore, get_store
from farm_market.identity import Identity, get_current_identity
from farm_market.modules.messaging import MessageService
from farm_market.modules.messaging.schemas import (
    ConversationListResponse,
    MessageCreate,
    MessageListResponse,
    MessageResponse,
)

router = APIRouter(prefix="/messages", tags=["Messages"])


def get_message_service(store: KeyValueStore = Depends(get_store)) -> MessageService:
    return MessageService(store)


@router.get("")
async def list_messages(
    conversation_id: Optional[str] = Query(None, alias="conversationId"),
    service: MessageService = Depends(get_message_service),
    identity: Identity = Depends(get_current_identity),
):
    """One conversation's messages when `conversationId` is given, else the conversation list."""
    if conversation_id:
        messages = await service.list_messages(identity.id, conversation_id)
        return MessageListResponse(messages=messages)
    conversations = await service.list_conversations(identity.id)
    return ConversationListResponse(conversations=conversations)


@router.post("", response_model=MessageResponse)
@limiter.limit(settings.message_rate_limit)
async def send_message(
    request: Request,
    payload: MessageCreate,
    service: MessageService = Depends(get_message_service),
    identity: Identity = Depends(get_current_identity),
):
    return MessageResponse(message=await service.send(identity.id, payload))


@router.patch("/{message_id}/read", response_model=MessageResponse)
async def mark_message_read(
    message_id: str,
    conversation_id: Optional[str] = Query(None, alias="conversationId"),
    service: MessageService = Depends(get_message_service),
    identity: Identity = Depends(get_current_identity),
):
    """Receiver-only; `conversationId` allows a direct lookup instead of a scan."""
    message = await service.mark_read(identity.id, message_id, conversation_id)
    return MessageResponse(message=message)
