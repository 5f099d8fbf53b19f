"""Construction of new notification records."""

from __future__ import annotations

from typing import Any

from notification_hub.domain.entities import NotificationType


def to_entity(
    *,
    title: str,
    content: str,
    notification_type: NotificationType | str,
    user_id: int,
) -> dict[str, Any]:
    """Return the fields of a new, unread notification for ``user_id``."""

    return {
        "title": title,
        "content": content,
        "type": NotificationType(notification_type),
        "user_id": user_id,
        "is_read": False,
    }


__all__ = ["to_entity"]
