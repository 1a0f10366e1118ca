"""Clients for the external notification (email) function."""

import httpx

from yard.adapter.error import NotificationDeliveryError
from yard.config import NotificationSettings
from yard.domain.model.notification import Notification, NotificationOutcome
from yard.domain.service.notification_service import NotificationClient
from yard.util.logging import get_logger

logger = get_logger(__name__)


class HttpNotificationClient(NotificationClient):
    """Posts notifications to the hosted notification function.

    The function receives ``{"type", "recipient", "data"}`` and renders the
    email itself.
    """

    def __init__(self, settings: NotificationSettings):
        """Initialize notification client.

        Args:
            settings: Notification function URL, key and timeout
        """
        self._url = settings.function_url
        self._api_key = settings.api_key
        self._timeout = settings.timeout_seconds

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"
        return headers

    async def send(self, notification: Notification) -> NotificationOutcome:
        """Deliver a notification.

        Raises:
            NotificationDeliveryError: Non-2xx response or transport failure
        """
        payload = {
            "type": notification.kind.value,
            "recipient": notification.recipient,
            "data": notification.template_data,
        }

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.post(
                    self._url, json=payload, headers=self._headers()
                )
        except httpx.HTTPError as e:
            raise NotificationDeliveryError(None, str(e)) from e

        if response.is_error:
            raise NotificationDeliveryError(response.status_code, response.text[:200])

        logger.debug(f"Notification {notification.kind.value} accepted by function")
        return NotificationOutcome(success=True, message="Notification sent")


class MockNotificationClient(NotificationClient):
    """Records notifications instead of sending them.

    Set ``fail`` to make every send raise, as a down function would.
    """

    def __init__(self) -> None:
        self.sent: list[Notification] = []
        self.fail = False

    async def send(self, notification: Notification) -> NotificationOutcome:
        if self.fail:
            raise NotificationDeliveryError(503, "notification function unavailable")
        self.sent.append(notification)
        return NotificationOutcome(success=True, message="Notification sent")
