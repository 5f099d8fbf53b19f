"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from enum import Enum
from typing import Any


class NotificationType(str, Enum):
    """Severity of a notification as shown to the recipient."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @classmethod
    def values(cls) -> list[str]:
        return [member.value for member in cls]


@dataclass
class Notification:
    """Message owned by a single recipient.

    Sending one message to many users produces one ``Notification`` per
    recipient, each with its own ``is_read`` flag. ``id`` and ``created_at``
    stay ``None`` until the record has been saved.
    """

    id: int | None
    title: str
    content: str
    type: NotificationType
    is_read: bool = False
    user_id: int | None = None
    created_at: datetime | None = None


@dataclass
class NotificationUpdate:
    """Partial changes applied to several notifications at once.

    Fields left as ``None`` are not touched.
    """

    title: str | None = None
    content: str | None = None
    type: NotificationType | None = None
    is_read: bool | None = None

    def to_changes(self) -> dict[str, Any]:
        return {name: value for name, value in asdict(self).items() if value is not None}


__all__ = ["Notification", "NotificationType", "NotificationUpdate"]
