"""Notifications domain package."""

from .models import Notification, NotificationType
from .service import NotificationService

__all__ = ["Notification", "NotificationType", "NotificationService"]
