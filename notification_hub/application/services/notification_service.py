"""Notification use cases: fan-out creation, read state and deletion."""

from __future__ import annotations

from collections.abc import Sequence

import logging

from notification_hub.application import notification_mapper as mapper
from notification_hub.domain.entities import Notification, NotificationType, NotificationUpdate
from notification_hub.domain.results import ErrorCode, ServiceResult
from notification_hub.infrastructure.realtime import NotificationEventPublisher
from notification_hub.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Notification not found"
EMPTY_IDS_MESSAGE = "IDs array cannot be empty"


class NotificationService:
    """Coordinate the notification store and the realtime publisher.

    Every operation returns a :class:`ServiceResult`; nothing raises. State is
    always persisted before the matching realtime event is published, and a
    publishing problem never turns a persisted change into a failure.
    """

    def __init__(
        self,
        repository: NotificationRepository,
        publisher: NotificationEventPublisher | None = None,
    ) -> None:
        self._repository = repository
        self._publisher = publisher

    def create_notification(
        self,
        title: str,
        content: str,
        notification_type: NotificationType | str,
        user_ids: Sequence[int],
    ) -> ServiceResult[list[Notification]]:
        """Store one notification per entry of ``user_ids``.

        Duplicated recipients get duplicated rows. A recipient whose row
        cannot be saved is skipped; the call only fails when nobody got one.
        """

        if not user_ids:
            return ServiceResult.fail(ErrorCode.INVALID_INPUT, "UserIds array cannot be empty")
        if not title or not title.strip():
            return ServiceResult.fail(
                ErrorCode.INVALID_INPUT, "Title is required and must be a non-empty string"
            )
        if not content or not content.strip():
            return ServiceResult.fail(
                ErrorCode.INVALID_INPUT, "Content is required and must be a non-empty string"
            )
        try:
            notification_type = NotificationType(notification_type)
        except ValueError:
            allowed = ", ".join(NotificationType.values())
            return ServiceResult.fail(ErrorCode.INVALID_INPUT, f"Type must be one of: {allowed}")

        created: list[Notification] = []
        failed: list[int] = []
        for user_id in user_ids:
            fields = mapper.to_entity(
                title=title,
                content=content,
                notification_type=notification_type,
                user_id=user_id,
            )
            saved = self._repository.save(self._repository.create(fields))
            if saved is None:
                logger.warning("Could not store notification for user %s", user_id)
                failed.append(user_id)
                continue
            if self._publisher is not None:
                self._publisher.emit_notification_created(saved)
            created.append(saved)

        if not created:
            logger.error("Notification fan-out failed for every recipient: %s", failed)
            return ServiceResult.fail(ErrorCode.INTERNAL_ERROR, "Failed to create notifications")
        if failed:
            logger.warning(
                "Notification fan-out partially failed: %d stored, recipients %s skipped",
                len(created),
                failed,
            )
        return ServiceResult.ok(created)

    def get_notification_by_id(self, notification_id: int) -> ServiceResult[Notification]:
        notification = self._repository.find_one(notification_id)
        if notification is None:
            return ServiceResult.fail(ErrorCode.NOT_FOUND, NOT_FOUND_MESSAGE)
        return ServiceResult.ok(notification)

    def get_notifications_by_user_id(self, user_id: int) -> ServiceResult[list[Notification]]:
        return ServiceResult.ok(list(self._repository.find_by_user_id(user_id)))

    def mark_as_read(self, notification_id: int) -> ServiceResult[Notification]:
        return self._set_read_state(notification_id, is_read=True)

    def mark_as_unread(self, notification_id: int) -> ServiceResult[Notification]:
        return self._set_read_state(notification_id, is_read=False)

    def mark_multiple_as_read(self, ids: Sequence[int]) -> ServiceResult[list[int]]:
        return self._set_read_state_bulk(ids, is_read=True)

    def mark_multiple_as_unread(self, ids: Sequence[int]) -> ServiceResult[list[int]]:
        return self._set_read_state_bulk(ids, is_read=False)

    def delete_notification(self, notification_id: int) -> ServiceResult[int]:
        notification = self._repository.find_one(notification_id)
        if notification is None:
            return ServiceResult.fail(ErrorCode.NOT_FOUND, NOT_FOUND_MESSAGE)

        if not self._repository.delete(notification_id):
            logger.error("Failed to delete notification %s", notification_id)
            return ServiceResult.fail(ErrorCode.INTERNAL_ERROR, "Failed to delete notification")

        if self._publisher is not None and notification.user_id:
            self._publisher.emit_notification_deleted(notification_id, notification.user_id)
        return ServiceResult.ok(notification_id)

    def delete_multiple_notifications(self, ids: Sequence[int]) -> ServiceResult[list[int]]:
        """Delete ``ids`` and tell the owner of the first id about it.

        All ids are expected to belong to one user; only the first id's
        owner receives the realtime event.
        """

        if not ids:
            return ServiceResult.fail(ErrorCode.INVALID_INPUT, EMPTY_IDS_MESSAGE)

        owner = self._repository.find_one(ids[0])
        if owner is None:
            return ServiceResult.fail(ErrorCode.NOT_FOUND, NOT_FOUND_MESSAGE)

        if not self._repository.delete_multiple(ids):
            logger.error("Failed to delete notifications %s", list(ids))
            return ServiceResult.fail(ErrorCode.INTERNAL_ERROR, "Failed to delete notifications")

        if self._publisher is not None and owner.user_id:
            self._publisher.emit_bulk_deleted(ids, owner.user_id)
        return ServiceResult.ok(list(ids))

    def get_unread_count(self, user_id: int) -> ServiceResult[int]:
        return ServiceResult.ok(self._repository.count_unread(user_id))

    def _set_read_state(
        self, notification_id: int, *, is_read: bool
    ) -> ServiceResult[Notification]:
        notification = self._repository.find_one(notification_id)
        if notification is None:
            return ServiceResult.fail(ErrorCode.NOT_FOUND, NOT_FOUND_MESSAGE)

        notification.is_read = is_read
        updated = self._repository.save(notification)
        if updated is None:
            logger.error("Failed to update read state of notification %s", notification_id)
            return ServiceResult.fail(ErrorCode.INTERNAL_ERROR, "Failed to update notification")

        if self._publisher is not None:
            if is_read:
                self._publisher.emit_notification_marked_read(updated)
            else:
                self._publisher.emit_notification_marked_unread(updated)
        return ServiceResult.ok(updated)

    def _set_read_state_bulk(
        self, ids: Sequence[int], *, is_read: bool
    ) -> ServiceResult[list[int]]:
        # The first id decides which user's room hears about the change.
        if not ids:
            return ServiceResult.fail(ErrorCode.INVALID_INPUT, EMPTY_IDS_MESSAGE)

        owner = self._repository.find_one(ids[0])
        if owner is None:
            return ServiceResult.fail(ErrorCode.NOT_FOUND, NOT_FOUND_MESSAGE)

        changes = NotificationUpdate(is_read=is_read).to_changes()
        if not self._repository.update_multiple(ids, changes):
            logger.error("Failed to update read state of notifications %s", list(ids))
            return ServiceResult.fail(ErrorCode.INTERNAL_ERROR, "Failed to update notifications")

        if self._publisher is not None and owner.user_id:
            if is_read:
                self._publisher.emit_bulk_marked_read(ids, owner.user_id)
            else:
                self._publisher.emit_bulk_marked_unread(ids, owner.user_id)
        return ServiceResult.ok(list(ids))


__all__ = ["NotificationService"]
