"""Unit tests for HttpNotificationClient."""

import json

import httpx
import pytest

from yard.adapter.error import NotificationDeliveryError
from yard.adapter.notification import HttpNotificationClient
from yard.config import NotificationSettings
from yard.domain.model import Notification
from yard.domain.value import NotificationKind

URL = "https://functions.example.com/send-notification"


@pytest.fixture
def route(monkeypatch):
    """Send the client's requests to a handler instead of the network."""
    calls: list[httpx.Request] = []
    responses: list[httpx.Response] = []
    real_client = httpx.AsyncClient

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return responses.pop(0) if responses else httpx.Response(200, json={"ok": True})

    monkeypatch.setattr(
        httpx,
        "AsyncClient",
        lambda **kwargs: real_client(transport=httpx.MockTransport(handler), **kwargs),
    )
    return calls, responses


def reminder() -> Notification:
    return Notification(
        kind=NotificationKind.REMINDER,
        recipient="dave@example.com",
        template_data={"logger_name": "Carol"},
    )


class TestHttpNotificationClient:
    """Wire format and failure reporting."""

    @pytest.mark.asyncio
    async def test_posts_payload_with_key(self, route):
        # Arrange
        calls, _ = route
        client = HttpNotificationClient(NotificationSettings(function_url=URL, api_key="k3y"))

        # Act
        outcome = await client.send(reminder())

        # Assert
        assert outcome.success is True
        request = calls[0]
        assert str(request.url) == URL
        assert request.headers["Authorization"] == "Bearer k3y"
        assert json.loads(request.content) == {
            "type": "reminder",
            "recipient": "dave@example.com",
            "data": {"logger_name": "Carol"},
        }

    @pytest.mark.asyncio
    async def test_error_response_raises(self, route):
        # Arrange
        _, responses = route
        responses.append(httpx.Response(502, text="upstream down"))
        client = HttpNotificationClient(NotificationSettings(function_url=URL))

        # Act & Assert
        with pytest.raises(NotificationDeliveryError) as exc_info:
            await client.send(reminder())
        assert exc_info.value.status_code == 502
