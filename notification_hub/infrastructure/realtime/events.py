"""Names of the frames exchanged over the realtime channel."""

from __future__ import annotations


class SocketEvents:
    """Event names used in the ``type`` field of every websocket frame."""

    # Server -> client
    NOTIFICATION_CREATED = "notification:created"
    NOTIFICATION_DELETED = "notification:deleted"
    NOTIFICATION_MARKED_READ = "notification:marked_read"
    NOTIFICATION_MARKED_UNREAD = "notification:marked_unread"
    NOTIFICATIONS_BULK_DELETED = "notifications:bulk_deleted"
    NOTIFICATIONS_BULK_MARKED_READ = "notifications:bulk_marked_read"
    NOTIFICATIONS_BULK_MARKED_UNREAD = "notifications:bulk_marked_unread"
    ROOM_JOINED = "room:joined"
    ROOM_LEFT = "room:left"
    PONG = "pong"
    ERROR = "error"

    # Client -> server
    JOIN_USER_ROOM = "join:user_room"
    LEAVE_USER_ROOM = "leave:user_room"
    PING = "ping"


def user_room(user_id: int) -> str:
    """Return the room key that groups every connection of ``user_id``."""

    return f"user:{user_id}"


__all__ = ["SocketEvents", "user_room"]
