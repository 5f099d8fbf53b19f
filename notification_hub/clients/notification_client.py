"""HTTP client used by sibling services to reach the notification API."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import logging

import httpx

from notification_hub.config import get_settings
from notification_hub.domain.entities import NotificationType
from notification_hub.domain.results import ErrorCode, ServiceResult

logger = logging.getLogger(__name__)

_ERROR_CODE_BY_STATUS: dict[int, ErrorCode] = {
    400: ErrorCode.INVALID_INPUT,
    401: ErrorCode.UNAUTHORIZED,
    403: ErrorCode.FORBIDDEN,
    404: ErrorCode.NOT_FOUND,
    409: ErrorCode.CONFLICT,
}


def map_http_status_to_error_code(status_code: int) -> ErrorCode:
    return _ERROR_CODE_BY_STATUS.get(status_code, ErrorCode.INTERNAL_ERROR)


class NotificationClient:
    """Call the notification REST surface and return :class:`ServiceResult` values.

    ``base_url`` includes the API prefix, e.g. ``http://notifications:6432/api``.
    Failed calls are logged and reported through the result, never raised.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.notification_service_url).rstrip("/")
        self._client = httpx.Client(
            base_url=self.base_url,
            headers={"Content-Type": "application/json"},
            timeout=timeout if timeout is not None else settings.client_timeout_seconds,
            transport=transport,
        )

    def __enter__(self) -> "NotificationClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def create_notification(
        self,
        user_ids: Sequence[int],
        title: str,
        content: str,
        notification_type: NotificationType | str = NotificationType.INFO,
    ) -> ServiceResult[list[dict[str, Any]]]:
        payload = {
            "title": title,
            "content": content,
            "type": NotificationType(notification_type).value,
            "userIds": list(user_ids),
        }
        return self._request("POST", "/notifications", json=payload)

    def send_notification(
        self,
        user_ids: Sequence[int],
        title: str,
        content: str,
        notification_type: NotificationType | str = NotificationType.INFO,
    ) -> bool:
        """Notify ``user_ids`` after a change made by the calling service.

        An empty recipient list sends nothing. Returns whether the call
        succeeded; failures are only logged.
        """

        if not user_ids:
            return False
        result = self.create_notification(user_ids, title, content, notification_type)
        if not result.success:
            logger.error("Failed to send notification '%s': %s", title, result.message)
        return result.success

    def get_notification(self, notification_id: int) -> ServiceResult[dict[str, Any]]:
        return self._request("GET", f"/notifications/{notification_id}")

    def get_notifications_by_user(self, user_id: int) -> ServiceResult[list[dict[str, Any]]]:
        return self._request("GET", f"/notifications/user/{user_id}")

    def get_unread_count(self, user_id: int) -> ServiceResult[int]:
        result = self._request("GET", f"/notifications/user/{user_id}/unread-count")
        if not result.success:
            return result
        if not isinstance(result.data, dict) or "unreadCount" not in result.data:
            logger.warning("Notification API returned no unread count for user %s", user_id)
            return ServiceResult.fail(
                ErrorCode.INTERNAL_ERROR, "Unexpected response from notification service"
            )
        return ServiceResult.ok(int(result.data["unreadCount"]))

    def mark_as_read(self, notification_id: int) -> ServiceResult[dict[str, Any]]:
        return self._request("PATCH", f"/notifications/{notification_id}/read")

    def mark_as_unread(self, notification_id: int) -> ServiceResult[dict[str, Any]]:
        return self._request("PATCH", f"/notifications/{notification_id}/unread")

    def mark_multiple_as_read(self, ids: Sequence[int]) -> ServiceResult[dict[str, Any]]:
        return self._request("PATCH", "/notifications/bulk/read", json={"ids": list(ids)})

    def mark_multiple_as_unread(self, ids: Sequence[int]) -> ServiceResult[dict[str, Any]]:
        return self._request("PATCH", "/notifications/bulk/unread", json={"ids": list(ids)})

    def delete_notification(self, notification_id: int) -> ServiceResult[dict[str, Any]]:
        return self._request("DELETE", f"/notifications/{notification_id}")

    def delete_multiple_notifications(self, ids: Sequence[int]) -> ServiceResult[dict[str, Any]]:
        return self._request("DELETE", "/notifications/bulk", json={"ids": list(ids)})

    def _request(self, method: str, path: str, *, json: Any = None) -> ServiceResult[Any]:
        try:
            response = self._client.request(method, path, json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            message = _extract_message(exc.response)
            logger.warning(
                "Notification API %s %s failed with status %s: %s",
                method,
                path,
                exc.response.status_code,
                message,
            )
            return ServiceResult.fail(
                map_http_status_to_error_code(exc.response.status_code), message
            )
        except httpx.RequestError as exc:
            logger.error("Notification API %s %s unreachable: %s", method, path, exc)
            return ServiceResult.fail(
                ErrorCode.INTERNAL_ERROR, "Notification service is unavailable"
            )

        if not response.content:
            return ServiceResult.ok(None)
        return ServiceResult.ok(response.json())


def _extract_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason_phrase


__all__ = ["NotificationClient", "map_http_status_to_error_code"]
