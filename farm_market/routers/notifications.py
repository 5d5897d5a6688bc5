"""Per-user notification inbox."""

from fastapi import APIRouter, Depends

from farm_market.core.storage import KeyValueStore, get_store
from farm_market.identity import Identity, get_current_identity
from farm_market.modules.notifications import NotificationService
from farm_market.modules.notifications.schemas import (
    MarkAllReadResponse,
    NotificationListResponse,
    NotificationResponse,
    UnreadCountResponse,
)

router = APIRouter(prefix="/notifications", tags=["Notifications"])


def get_notification_service(
    store: KeyValueStore = Depends(get_store),
) -> NotificationService:
    return NotificationService(store)


@router.get("", response_model=NotificationListResponse)
async def list_notifications(
    service: NotificationService = Depends(get_notification_service),
    identity: Identity = Depends(get_current_identity),
):
    """Newest first."""
    notifications = await service.list_for_user(identity.id)
    return NotificationListResponse(notifications=notifications)


@router.get("/unread-count", response_model=UnreadCountResponse)
async def unread_count(
    service: NotificationService = Depends(get_notification_service),
    identity: Identity = Depends(get_current_identity),
):
    return UnreadCountResponse(unread_count=await service.unread_count(identity.id))


@router.patch("/read-all", response_model=MarkAllReadResponse)
async def mark_all_read(
    service: NotificationService = Depends(get_notification_service),
    identity: Identity = Depends(get_current_identity),
):
    return MarkAllReadResponse(updated=await service.mark_all_read(identity.id))


@router.patch("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(
    notification_id: str,
    service: NotificationService = Depends(get_notification_service),
    identity: Identity = Depends(get_current_identity),
):
    notification = await service.mark_read(identity.id, notification_id)
    return NotificationResponse(notification=notification)
