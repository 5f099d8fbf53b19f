"""Outbound clients for services that talk to the notification API."""

from .notification_client import NotificationClient, map_http_status_to_error_code

__all__ = ["NotificationClient", "map_http_status_to_error_code"]
