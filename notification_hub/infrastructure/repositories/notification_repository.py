"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Iterable

import logging

from sqlalchemy import desc, false, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from notification_hub.domain.entities import Notification, NotificationType
from notification_hub.infrastructure.models import NotificationModel
from notification_hub.utils import current_time, to_app_time, to_storage_time

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = ("title", "content", "type", "is_read")


class NotificationRepository:
    """Provide CRUD operations for :class:`Notification` objects.

    Database errors never propagate out of this class: they are logged, the
    session is rolled back and the caller receives ``None``, ``False``, an
    empty list or ``0`` depending on the operation.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, fields: Mapping[str, Any]) -> Notification:
        """Build an unsaved notification from ``fields``.

        ``id`` and ``created_at`` are left empty; :meth:`save` assigns them.
        """

        return Notification(
            id=None,
            title=fields["title"],
            content=fields["content"],
            type=NotificationType(fields.get("type", NotificationType.INFO)),
            is_read=bool(fields.get("is_read", False)),
            user_id=fields.get("user_id"),
            created_at=None,
        )

    def save(self, notification: Notification) -> Notification | None:
        """Insert ``notification`` when new, update it otherwise."""

        try:
            if notification.id is None:
                model = NotificationModel()
                model.created_at = to_storage_time(notification.created_at or current_time())
            else:
                model = self.session.get(NotificationModel, notification.id)
                if model is None:
                    logger.warning(
                        "Cannot update notification %s: row no longer exists",
                        notification.id,
                    )
                    return None
            self._apply_entity_to_model(model, notification)
            self.session.add(model)
            self.session.commit()
            self.session.refresh(model)
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Failed to save notification %s", notification.id)
            return None
        return self._to_entity(model)

    def find_one(self, notification_id: int) -> Notification | None:
        try:
            model = self.session.get(NotificationModel, notification_id)
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Failed to load notification %s", notification_id)
            return None
        return self._to_entity(model) if model else None

    def find_by_user_id(self, user_id: int) -> Sequence[Notification]:
        """Return every notification owned by ``user_id``, newest first."""

        try:
            models = (
                self.session.query(NotificationModel)
                .filter(NotificationModel.user_id == user_id)
                .order_by(desc(NotificationModel.created_at), desc(NotificationModel.id))
                .all()
            )
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Failed to list notifications for user %s", user_id)
            return []
        return [self._to_entity(model) for model in models]

    def delete(self, notification_id: int) -> bool:
        return self.delete_multiple([notification_id])

    def delete_multiple(self, notification_ids: Iterable[int]) -> bool:
        """Delete the given rows; ``True`` when at least one was removed."""

        ids = list(notification_ids)
        if not ids:
            return False
        try:
            removed = (
                self.session.query(NotificationModel)
                .filter(NotificationModel.id.in_(ids))
                .delete(synchronize_session=False)
            )
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Failed to delete notifications %s", ids)
            return False
        return removed > 0

    def update_multiple(
        self, notification_ids: Iterable[int], changes: Mapping[str, Any]
    ) -> bool:
        """Apply ``changes`` to the given rows; ``True`` when any row matched."""

        ids = list(notification_ids)
        values = {
            getattr(NotificationModel, field): value
            for field, value in changes.items()
            if field in _UPDATABLE_FIELDS
        }
        if not ids or not values:
            return False
        try:
            affected = (
                self.session.query(NotificationModel)
                .filter(NotificationModel.id.in_(ids))
                .update(values, synchronize_session=False)
            )
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Failed to update notifications %s", ids)
            return False
        return affected > 0

    def count_unread(self, user_id: int) -> int:
        try:
            count = (
                self.session.query(func.count(NotificationModel.id))
                .filter(NotificationModel.user_id == user_id)
                .filter(NotificationModel.is_read == false())
                .scalar()
            )
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("Failed to count unread notifications for user %s", user_id)
            return 0
        return int(count or 0)

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel, notification: Notification
    ) -> None:
        model.title = notification.title
        model.content = notification.content
        model.type = NotificationType(notification.type)
        model.is_read = notification.is_read
        model.user_id = notification.user_id

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            title=model.title,
            content=model.content,
            type=NotificationType(model.type),
            is_read=bool(model.is_read),
            user_id=model.user_id,
            created_at=to_app_time(model.created_at),
        )


__all__ = ["NotificationRepository"]
