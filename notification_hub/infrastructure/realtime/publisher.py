"""Utility helpers to push notification events to websocket rooms."""

from __future__ import annotations

import asyncio
from typing import Any, Sequence

import logging

from anyio import from_thread

from notification_hub.domain.entities import Notification, NotificationType

from .events import SocketEvents, user_room
from .manager import RoomConnectionManager, room_manager

logger = logging.getLogger(__name__)


class NotificationEventPublisher:
    """Serialize notification state changes and schedule their delivery.

    Delivery is best effort: callers persist first and publish afterwards,
    and nothing here reports failure back to them.
    """

    def __init__(self, manager: RoomConnectionManager) -> None:
        self._manager = manager
        self._pending: set[asyncio.Task[int]] = set()

    def emit_notification_created(self, notification: Notification) -> None:
        self._emit_notification(SocketEvents.NOTIFICATION_CREATED, notification)

    def emit_notification_marked_read(self, notification: Notification) -> None:
        self._emit_notification(SocketEvents.NOTIFICATION_MARKED_READ, notification)

    def emit_notification_marked_unread(self, notification: Notification) -> None:
        self._emit_notification(SocketEvents.NOTIFICATION_MARKED_UNREAD, notification)

    def emit_notification_deleted(self, notification_id: int, user_id: int) -> None:
        self.emit(
            user_room(user_id),
            SocketEvents.NOTIFICATION_DELETED,
            {"id": notification_id},
        )

    def emit_bulk_marked_read(self, ids: Sequence[int], user_id: int) -> None:
        self.emit(
            user_room(user_id),
            SocketEvents.NOTIFICATIONS_BULK_MARKED_READ,
            {"ids": list(ids)},
        )

    def emit_bulk_marked_unread(self, ids: Sequence[int], user_id: int) -> None:
        self.emit(
            user_room(user_id),
            SocketEvents.NOTIFICATIONS_BULK_MARKED_UNREAD,
            {"ids": list(ids)},
        )

    def emit_bulk_deleted(self, ids: Sequence[int], user_id: int) -> None:
        self.emit(
            user_room(user_id),
            SocketEvents.NOTIFICATIONS_BULK_DELETED,
            {"ids": list(ids)},
        )

    def emit(self, room: str, event: str, payload: Any) -> None:
        """Schedule ``event`` for ``room`` from sync or async code."""

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Sync route handlers run in an AnyIO worker thread.
            try:
                from_thread.run(self._manager.emit, room, event, payload)
            except RuntimeError:
                logger.warning(
                    "No event loop reachable; dropping %s for room %s", event, room
                )
        else:
            task = loop.create_task(self._manager.emit(room, event, payload))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

    def _emit_notification(self, event: str, notification: Notification) -> None:
        if not notification.user_id:
            logger.warning("Notification %s has no owner; skipping %s", notification.id, event)
            return
        self.emit(user_room(notification.user_id), event, serialize_notification(notification))


def serialize_notification(notification: Notification) -> dict[str, Any]:
    """Return the websocket payload for ``notification``.

    Keys and value formats match the REST representation.
    """

    created_at = notification.created_at
    return {
        "id": notification.id,
        "title": notification.title,
        "content": notification.content,
        "type": NotificationType(notification.type).value,
        "isRead": notification.is_read,
        "userId": notification.user_id,
        "createdAt": created_at.isoformat() if created_at else None,
    }


notification_event_publisher = NotificationEventPublisher(room_manager)


__all__ = [
    "NotificationEventPublisher",
    "notification_event_publisher",
    "serialize_notification",
]
