"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, Enum, Integer, String, Text

from notification_hub.domain.entities import NotificationType
from notification_hub.infrastructure.database import Base
from notification_hub.utils import current_storage_time


class NotificationModel(Base):
    """Database representation for user notifications."""

    __tablename__ = "notifications"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    type = Column(
        Enum(
            NotificationType,
            name="notification_type",
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
        default=NotificationType.INFO,
    )
    is_read = Column(Boolean, nullable=False, default=False)
    user_id = Column(Integer, nullable=True, index=True)
    created_at = Column(DateTime(), nullable=False, default=current_storage_time)


__all__ = ["NotificationModel"]
