"""Notification delivery adapters."""

from yard.adapter.notification.client import (
    HttpNotificationClient,
    MockNotificationClient,
)

__all__ = ["HttpNotificationClient", "MockNotificationClient"]
