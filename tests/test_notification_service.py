import pytest

from notification_hub.application.services import NotificationService
from notification_hub.domain.entities import NotificationType
from notification_hub.domain.results import ErrorCode
from notification_hub.infrastructure.realtime import SocketEvents
from notification_hub.infrastructure.repositories import NotificationRepository


class FlakyRepository(NotificationRepository):
    """Refuse to insert rows for selected recipients."""

    def __init__(self, session, failing_user_ids):
        super().__init__(session)
        self.failing_user_ids = set(failing_user_ids)

    def save(self, notification):
        if notification.id is None and notification.user_id in self.failing_user_ids:
            return None
        return super().save(notification)


def _create(service, user_ids, title="Hello", content="World", notification_type="info"):
    result = service.create_notification(title, content, notification_type, user_ids)
    assert result.success, result.message
    return result.data


def test_create_fans_out_one_unread_notification_per_recipient(service, publisher):
    created = _create(service, [1, 2, 3])

    assert [n.user_id for n in created] == [1, 2, 3]
    assert len({n.id for n in created}) == 3
    assert all(n.is_read is False for n in created)
    assert all(n.type is NotificationType.INFO for n in created)
    assert [(event, user) for event, user, _ in publisher.events] == [
        (SocketEvents.NOTIFICATION_CREATED, 1),
        (SocketEvents.NOTIFICATION_CREATED, 2),
        (SocketEvents.NOTIFICATION_CREATED, 3),
    ]


def test_duplicate_recipients_get_duplicate_rows(service):
    created = _create(service, [5, 5])

    assert len(created) == 2
    assert created[0].id != created[1].id
    assert service.get_unread_count(5).data == 2


def test_partial_fan_out_failure_still_succeeds(session, publisher):
    service = NotificationService(FlakyRepository(session, {2}), publisher)

    created = _create(service, [1, 2, 3])

    assert [n.user_id for n in created] == [1, 3]
    assert [user for _, user, _ in publisher.events] == [1, 3]


def test_fan_out_failing_for_everyone_is_an_internal_error(session, publisher):
    service = NotificationService(FlakyRepository(session, {1, 2}), publisher)

    result = service.create_notification("Hello", "World", "info", [1, 2])

    assert not result.success
    assert result.error_code is ErrorCode.INTERNAL_ERROR
    assert publisher.events == []


@pytest.mark.parametrize(
    ("title", "content", "notification_type", "user_ids"),
    [
        ("Hello", "World", "info", []),
        ("   ", "World", "info", [1]),
        ("Hello", "", "info", [1]),
        ("Hello", "World", "urgent", [1]),
    ],
)
def test_create_rejects_invalid_input(service, publisher, title, content, notification_type, user_ids):
    result = service.create_notification(title, content, notification_type, user_ids)

    assert result.error_code is ErrorCode.INVALID_INPUT
    assert publisher.events == []


def test_get_notification_by_id(service):
    created = _create(service, [1])[0]

    assert service.get_notification_by_id(created.id).data == created
    missing = service.get_notification_by_id(created.id + 100)
    assert missing.error_code is ErrorCode.NOT_FOUND
    assert missing.message == "Notification not found"


def test_list_for_unknown_user_is_empty(service):
    result = service.get_notifications_by_user_id(42)

    assert result.success
    assert result.data == []


def test_mark_as_read_is_idempotent_and_publishes_each_time(service, publisher):
    created = _create(service, [1])[0]
    publisher.events.clear()

    first = service.mark_as_read(created.id)
    second = service.mark_as_read(created.id)

    assert first.data.is_read is True
    assert second.data.is_read is True
    assert publisher.names() == [SocketEvents.NOTIFICATION_MARKED_READ] * 2
    assert service.get_unread_count(1).data == 0


def test_mark_as_unread_restores_unread_state(service, publisher):
    created = _create(service, [1])[0]
    service.mark_as_read(created.id)
    publisher.events.clear()

    result = service.mark_as_unread(created.id)

    assert result.data.is_read is False
    assert publisher.names() == [SocketEvents.NOTIFICATION_MARKED_UNREAD]
    assert service.get_unread_count(1).data == 1


def test_mark_missing_notification_is_not_found(service, publisher):
    assert service.mark_as_read(999).error_code is ErrorCode.NOT_FOUND
    assert service.mark_as_unread(999).error_code is ErrorCode.NOT_FOUND
    assert publisher.events == []


def test_mark_as_read_reports_store_failure(service, repository, publisher, monkeypatch):
    created = _create(service, [1])[0]
    publisher.events.clear()
    monkeypatch.setattr(repository, "save", lambda notification: None)

    result = service.mark_as_read(created.id)

    assert result.error_code is ErrorCode.INTERNAL_ERROR
    assert publisher.events == []


def test_bulk_operations_reject_empty_ids(service, publisher):
    _create(service, [1])

    for operation in (
        service.mark_multiple_as_read,
        service.mark_multiple_as_unread,
        service.delete_multiple_notifications,
    ):
        result = operation([])
        assert result.error_code is ErrorCode.INVALID_INPUT
        assert result.message == "IDs array cannot be empty"

    assert service.get_notifications_by_user_id(1).data
    assert publisher.names() == [SocketEvents.NOTIFICATION_CREATED]


def test_bulk_mark_read_emits_once_to_the_first_owner(service, publisher):
    ids = [n.id for n in _create(service, [1, 1, 1])]
    publisher.events.clear()

    result = service.mark_multiple_as_read(ids)

    assert result.data == ids
    assert publisher.events == [
        (SocketEvents.NOTIFICATIONS_BULK_MARKED_READ, 1, {"ids": ids})
    ]
    assert service.get_unread_count(1).data == 0


def test_bulk_mark_with_unknown_trailing_ids_still_succeeds(service, publisher):
    existing = _create(service, [1])[0]
    publisher.events.clear()

    result = service.mark_multiple_as_read([existing.id, 9999])

    assert result.success
    assert publisher.events == [
        (SocketEvents.NOTIFICATIONS_BULK_MARKED_READ, 1, {"ids": [existing.id, 9999]})
    ]


def test_bulk_mark_with_unknown_first_id_is_not_found(service, publisher):
    existing = _create(service, [1])[0]
    publisher.events.clear()

    result = service.mark_multiple_as_unread([9999, existing.id])

    assert result.error_code is ErrorCode.NOT_FOUND
    assert publisher.events == []


def test_bulk_update_failure_is_an_internal_error(service, repository, publisher, monkeypatch):
    existing = _create(service, [1])[0]
    publisher.events.clear()
    monkeypatch.setattr(repository, "update_multiple", lambda ids, changes: False)

    result = service.mark_multiple_as_read([existing.id])

    assert result.error_code is ErrorCode.INTERNAL_ERROR
    assert publisher.events == []


def test_disjoint_bulk_updates_reach_their_own_owner(service, publisher):
    first = [n.id for n in _create(service, [10, 10])]
    second = [n.id for n in _create(service, [20])]
    publisher.events.clear()

    service.mark_multiple_as_read(first)
    service.mark_multiple_as_read(second)

    assert [(event, user) for event, user, _ in publisher.events] == [
        (SocketEvents.NOTIFICATIONS_BULK_MARKED_READ, 10),
        (SocketEvents.NOTIFICATIONS_BULK_MARKED_READ, 20),
    ]


def test_delete_notification_removes_and_publishes(service, publisher):
    created = _create(service, [4])[0]
    publisher.events.clear()

    result = service.delete_notification(created.id)

    assert result.data == created.id
    assert publisher.events == [(SocketEvents.NOTIFICATION_DELETED, 4, {"id": created.id})]
    assert service.get_notification_by_id(created.id).error_code is ErrorCode.NOT_FOUND
    assert service.delete_notification(created.id).error_code is ErrorCode.NOT_FOUND


def test_delete_multiple_notifications(service, publisher):
    ids = [n.id for n in _create(service, [4, 4])]
    publisher.events.clear()

    result = service.delete_multiple_notifications(ids)

    assert result.data == ids
    assert publisher.events == [(SocketEvents.NOTIFICATIONS_BULK_DELETED, 4, {"ids": ids})]
    assert service.get_notifications_by_user_id(4).data == []


def test_unread_count_follows_read_state_changes(service):
    ids = [n.id for n in _create(service, [8, 8, 8])]

    service.mark_as_read(ids[0])
    assert service.get_unread_count(8).data == 2

    service.mark_multiple_as_read(ids)
    assert service.get_unread_count(8).data == 0

    service.mark_multiple_as_unread(ids[:1])
    assert service.get_unread_count(8).data == 1


def test_service_without_publisher_still_persists(repository):
    service = NotificationService(repository)

    created = _create(service, [1])[0]

    assert service.mark_as_read(created.id).data.is_read is True


def test_read_state_is_tracked_per_recipient(service):
    created = _create(service, [1, 2], title="T", content="C")
    assert service.get_unread_count(1).data == 1
    assert service.get_unread_count(2).data == 1

    own = next(n for n in created if n.user_id == 1)
    service.mark_as_read(own.id)

    assert service.get_unread_count(1).data == 0
    assert service.get_unread_count(2).data == 1
