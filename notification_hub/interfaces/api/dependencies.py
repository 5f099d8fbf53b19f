"""FastAPI dependency utilities."""

from fastapi import Depends
from sqlalchemy.orm import Session

from notification_hub.application.services import NotificationService
from notification_hub.infrastructure.database import get_db
from notification_hub.infrastructure.realtime import (
    NotificationEventPublisher,
    RoomConnectionManager,
    notification_event_publisher,
    room_manager,
)
from notification_hub.infrastructure.repositories import NotificationRepository


def get_room_manager() -> RoomConnectionManager:
    return room_manager


def get_notification_publisher() -> NotificationEventPublisher:
    return notification_event_publisher


def get_notification_service(
    db: Session = Depends(get_db),
    publisher: NotificationEventPublisher = Depends(get_notification_publisher),
) -> NotificationService:
    """Build a service bound to the request's database session."""

    return NotificationService(NotificationRepository(db), publisher)
