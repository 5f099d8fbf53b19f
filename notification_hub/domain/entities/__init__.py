"""Domain entities exposed by the application."""

from .notification import Notification, NotificationType, NotificationUpdate

__all__ = [
    "Notification",
    "NotificationType",
    "NotificationUpdate",
]
