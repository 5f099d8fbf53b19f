"""REST endpoints for notification CRUD and read state."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from notification_hub.application.services import NotificationService
from notification_hub.interfaces.api.dependencies import get_notification_service
from notification_hub.interfaces.api.errors import unwrap
from notification_hub.interfaces.api.notification_mapper import (
    to_response_dto,
    to_response_dto_array,
)
from notification_hub.interfaces.api.schemas import (
    MessageResponse,
    NotificationCreate,
    NotificationIdsRequest,
    NotificationRead,
    UnreadCountRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])

NotificationId = Annotated[int, Path(gt=0, description="Notification identifier")]
UserId = Annotated[int, Path(gt=0, description="Recipient identifier")]


# Bulk routes must be registered before the "/{notification_id}" routes,
# otherwise "bulk" is captured as a notification id.
@router.patch("/bulk/read", response_model=MessageResponse)
def mark_multiple_as_read(
    payload: NotificationIdsRequest,
    service: NotificationService = Depends(get_notification_service),
) -> MessageResponse:
    """Mark every notification in ``ids`` as read."""

    unwrap(service.mark_multiple_as_read(payload.unique_ids()))
    return MessageResponse(message="Notifications marked as read")


@router.patch("/bulk/unread", response_model=MessageResponse)
def mark_multiple_as_unread(
    payload: NotificationIdsRequest,
    service: NotificationService = Depends(get_notification_service),
) -> MessageResponse:
    """Mark every notification in ``ids`` as unread."""

    unwrap(service.mark_multiple_as_unread(payload.unique_ids()))
    return MessageResponse(message="Notifications marked as unread")


@router.delete("/bulk", response_model=MessageResponse)
def delete_multiple_notifications(
    payload: NotificationIdsRequest,
    service: NotificationService = Depends(get_notification_service),
) -> MessageResponse:
    """Delete every notification in ``ids``."""

    unwrap(service.delete_multiple_notifications(payload.unique_ids()))
    return MessageResponse(message="Notifications deleted successfully")


@router.get("/user/{user_id}", response_model=list[NotificationRead])
def list_notifications_by_user(
    user_id: UserId,
    service: NotificationService = Depends(get_notification_service),
) -> list[NotificationRead]:
    """Return the notifications of ``userId``, newest first."""

    return to_response_dto_array(unwrap(service.get_notifications_by_user_id(user_id)))


@router.get("/user/{user_id}/unread-count", response_model=UnreadCountRead)
def get_unread_count(
    user_id: UserId,
    service: NotificationService = Depends(get_notification_service),
) -> UnreadCountRead:
    return UnreadCountRead(unread_count=unwrap(service.get_unread_count(user_id)))


@router.get("/{notification_id}", response_model=NotificationRead)
def read_notification(
    notification_id: NotificationId,
    service: NotificationService = Depends(get_notification_service),
) -> NotificationRead:
    return to_response_dto(unwrap(service.get_notification_by_id(notification_id)))


@router.post("", response_model=list[NotificationRead], status_code=status.HTTP_201_CREATED)
def create_notification(
    payload: NotificationCreate,
    service: NotificationService = Depends(get_notification_service),
) -> list[NotificationRead]:
    """Send one notification to every user listed in ``userIds``.

    Recipients whose notification could not be stored are skipped; the call
    fails only when none was stored.
    """

    created = unwrap(
        service.create_notification(
            payload.title,
            payload.content,
            payload.type,
            payload.user_ids,
        )
    )
    return to_response_dto_array(created)


@router.patch("/{notification_id}/read", response_model=NotificationRead)
def mark_as_read(
    notification_id: NotificationId,
    service: NotificationService = Depends(get_notification_service),
) -> NotificationRead:
    return to_response_dto(unwrap(service.mark_as_read(notification_id)))


@router.patch("/{notification_id}/unread", response_model=NotificationRead)
def mark_as_unread(
    notification_id: NotificationId,
    service: NotificationService = Depends(get_notification_service),
) -> NotificationRead:
    return to_response_dto(unwrap(service.mark_as_unread(notification_id)))


@router.delete("/{notification_id}", response_model=MessageResponse)
def delete_notification(
    notification_id: NotificationId,
    service: NotificationService = Depends(get_notification_service),
) -> MessageResponse:
    unwrap(service.delete_notification(notification_id))
    return MessageResponse(message="Notification deleted successfully")
