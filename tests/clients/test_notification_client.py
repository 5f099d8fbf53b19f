import json

import httpx
import pytest

from notification_hub.clients import NotificationClient, map_http_status_to_error_code
from notification_hub.domain.results import ErrorCode


class Recorder:
    """Mock transport handler that answers with a canned response."""

    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self.body = body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.body is None:
            return httpx.Response(self.status_code)
        return httpx.Response(self.status_code, json=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


def _client(handler) -> NotificationClient:
    return NotificationClient(
        "http://notifications.test/api/", transport=httpx.MockTransport(handler)
    )


def test_create_notification_posts_camel_case_payload():
    created = [{"id": 1, "userId": 4}]
    recorder = Recorder(201, created)

    with _client(recorder) as client:
        result = client.create_notification([4], "Report ready", "Download it now", "warning")

    assert result.success
    assert result.data == created
    assert recorder.last.method == "POST"
    assert recorder.last.url == "http://notifications.test/api/notifications"
    assert json.loads(recorder.last.content) == {
        "title": "Report ready",
        "content": "Download it now",
        "type": "warning",
        "userIds": [4],
    }


def test_send_notification_skips_empty_recipient_lists():
    recorder = Recorder(201, [])

    with _client(recorder) as client:
        assert client.send_notification([], "Report ready", "Download it now") is False

    assert recorder.requests == []


def test_send_notification_reports_failures_without_raising():
    recorder = Recorder(500, {"message": "Failed to create notifications"})

    with _client(recorder) as client:
        assert client.send_notification([1], "Report ready", "Download it now") is False


def test_http_errors_are_mapped_to_error_codes():
    recorder = Recorder(404, {"message": "Notification not found"})

    with _client(recorder) as client:
        result = client.get_notification(9)

    assert not result.success
    assert result.error_code is ErrorCode.NOT_FOUND
    assert result.message == "Notification not found"
    assert recorder.last.url.path == "/api/notifications/9"


def test_unreachable_service_is_an_internal_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with _client(handler) as client:
        result = client.mark_as_read(1)

    assert result.error_code is ErrorCode.INTERNAL_ERROR
    assert result.message == "Notification service is unavailable"


def test_get_unread_count_reads_the_counter():
    with _client(Recorder(200, {"unreadCount": 3})) as client:
        result = client.get_unread_count(2)

    assert result.data == 3


@pytest.mark.parametrize("recorder", [Recorder(200), Recorder(200, {"count": 3})])
def test_get_unread_count_without_counter_is_a_failure(recorder):
    with _client(recorder) as client:
        result = client.get_unread_count(2)

    assert not result.success
    assert result.error_code is ErrorCode.INTERNAL_ERROR


@pytest.mark.parametrize(
    ("call", "method", "path"),
    [
        (lambda c: c.get_notifications_by_user(5), "GET", "/api/notifications/user/5"),
        (lambda c: c.mark_as_unread(5), "PATCH", "/api/notifications/5/unread"),
        (lambda c: c.mark_multiple_as_read([1, 2]), "PATCH", "/api/notifications/bulk/read"),
        (lambda c: c.mark_multiple_as_unread([1]), "PATCH", "/api/notifications/bulk/unread"),
        (lambda c: c.delete_notification(5), "DELETE", "/api/notifications/5"),
        (lambda c: c.delete_multiple_notifications([1]), "DELETE", "/api/notifications/bulk"),
    ],
)
def test_operations_target_the_expected_routes(call, method, path):
    recorder = Recorder(200, {"message": "ok"})

    with _client(recorder) as client:
        assert call(client).success

    assert recorder.last.method == method
    assert recorder.last.url.path == path


def test_empty_response_body_is_a_success_without_data():
    with _client(Recorder(204)) as client:
        result = client.delete_notification(1)

    assert result.success
    assert result.data is None


@pytest.mark.parametrize(
    ("status", "code"),
    [
        (400, ErrorCode.INVALID_INPUT),
        (401, ErrorCode.UNAUTHORIZED),
        (409, ErrorCode.CONFLICT),
        (502, ErrorCode.INTERNAL_ERROR),
    ],
)
def test_map_http_status_to_error_code(status, code):
    assert map_http_status_to_error_code(status) is code
