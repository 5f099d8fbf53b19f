"""Realtime push gateway: per-user websocket rooms and event publishing."""

from .events import SocketEvents, user_room
from .manager import RoomConnectionManager, room_manager
from .publisher import (
    NotificationEventPublisher,
    notification_event_publisher,
    serialize_notification,
)

__all__ = [
    "SocketEvents",
    "user_room",
    "RoomConnectionManager",
    "room_manager",
    "NotificationEventPublisher",
    "notification_event_publisher",
    "serialize_notification",
]
