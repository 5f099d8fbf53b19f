"""Conversion of stored notifications into their REST representation."""

from __future__ import annotations

from typing import Iterable

from notification_hub.domain.entities import Notification
from notification_hub.interfaces.api.schemas import NotificationRead


def to_response_dto(notification: Notification) -> NotificationRead:
    return NotificationRead(
        id=notification.id or 0,
        title=notification.title,
        content=notification.content,
        type=notification.type,
        is_read=notification.is_read,
        user_id=notification.user_id,
        created_at=notification.created_at,
    )


def to_response_dto_array(notifications: Iterable[Notification]) -> list[NotificationRead]:
    return [to_response_dto(notification) for notification in notifications]


__all__ = ["to_response_dto", "to_response_dto_array"]
