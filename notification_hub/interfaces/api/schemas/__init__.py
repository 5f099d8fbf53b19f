from .health import HealthRead
from .notification import (
    MessageResponse,
    NotificationCreate,
    NotificationIdsRequest,
    NotificationRead,
    UnreadCountRead,
)

__all__ = [
    "HealthRead",
    "MessageResponse",
    "NotificationCreate",
    "NotificationIdsRequest",
    "NotificationRead",
    "UnreadCountRead",
]
