"""ORM models used by the application infrastructure."""

from .notification import NotificationModel

__all__ = [
    "NotificationModel",
]
