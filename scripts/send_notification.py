"""Utility script to send a notification straight from the command line."""

from __future__ import annotations

import argparse

from notification_hub.application.services import NotificationService
from notification_hub.domain.entities import NotificationType
from notification_hub.infrastructure.database import SessionLocal, initialize_database
from notification_hub.infrastructure.repositories import NotificationRepository


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments for notification creation."""

    parser = argparse.ArgumentParser(
        description="Store a notification for one or more users.",
    )
    parser.add_argument(
        "user_ids",
        nargs="+",
        type=int,
        help="Recipients; one notification is stored per id",
    )
    parser.add_argument("--title", required=True, help="Short notification title")
    parser.add_argument("--content", required=True, help="Notification body")
    parser.add_argument(
        "--type",
        dest="notification_type",
        choices=NotificationType.values(),
        default=NotificationType.INFO.value,
        help="Severity shown to the recipients (default: info)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Create the notifications described by the command line arguments.

    Nothing is pushed in realtime: connected clients see the notifications
    the next time they fetch them.
    """

    args = parse_args(argv)
    initialize_database()

    session = SessionLocal()
    try:
        service = NotificationService(NotificationRepository(session))
        result = service.create_notification(
            args.title,
            args.content,
            args.notification_type,
            args.user_ids,
        )
    finally:
        session.close()

    if not result.success:
        raise SystemExit(f"Could not send the notification: {result.message}")

    print(f"Stored {len(result.data)} notification(s):")
    for notification in result.data:
        print(f"  ID {notification.id} -> user {notification.user_id}")


if __name__ == "__main__":
    main()
