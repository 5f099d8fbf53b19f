"""Shared fixtures: an isolated in-memory database per test."""

from __future__ import annotations

import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["LOG_JSON"] = "false"

import pytest
from sqlalchemy.orm import sessionmaker

from notification_hub.application.services import NotificationService
from notification_hub.infrastructure.database import build_engine, initialize_database
from notification_hub.infrastructure.realtime import SocketEvents
from notification_hub.infrastructure.repositories import NotificationRepository


class RecordingPublisher:
    """Stand-in for the realtime publisher that remembers every event."""

    def __init__(self) -> None:
        self.events: list[tuple[str, int, object]] = []

    def emit_notification_created(self, notification) -> None:
        self.events.append((SocketEvents.NOTIFICATION_CREATED, notification.user_id, notification))

    def emit_notification_marked_read(self, notification) -> None:
        self.events.append(
            (SocketEvents.NOTIFICATION_MARKED_READ, notification.user_id, notification)
        )

    def emit_notification_marked_unread(self, notification) -> None:
        self.events.append(
            (SocketEvents.NOTIFICATION_MARKED_UNREAD, notification.user_id, notification)
        )

    def emit_notification_deleted(self, notification_id, user_id) -> None:
        self.events.append((SocketEvents.NOTIFICATION_DELETED, user_id, {"id": notification_id}))

    def emit_bulk_marked_read(self, ids, user_id) -> None:
        self.events.append(
            (SocketEvents.NOTIFICATIONS_BULK_MARKED_READ, user_id, {"ids": list(ids)})
        )

    def emit_bulk_marked_unread(self, ids, user_id) -> None:
        self.events.append(
            (SocketEvents.NOTIFICATIONS_BULK_MARKED_UNREAD, user_id, {"ids": list(ids)})
        )

    def emit_bulk_deleted(self, ids, user_id) -> None:
        self.events.append((SocketEvents.NOTIFICATIONS_BULK_DELETED, user_id, {"ids": list(ids)}))

    def names(self) -> list[str]:
        return [event for event, _, _ in self.events]


@pytest.fixture()
def anyio_backend():
    return "asyncio"


@pytest.fixture()
def engine():
    engine = build_engine("sqlite://")
    initialize_database(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def session(session_factory):
    db = session_factory()
    yield db
    db.close()


@pytest.fixture()
def repository(session):
    return NotificationRepository(session)


@pytest.fixture()
def publisher():
    return RecordingPublisher()


@pytest.fixture()
def service(repository, publisher):
    return NotificationService(repository, publisher)


@pytest.fixture()
def client(session_factory):
    """Return a test client whose requests share the per-test database."""

    from fastapi.testclient import TestClient

    from main import create_app
    from notification_hub.infrastructure.database import get_db

    app = create_app()

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
