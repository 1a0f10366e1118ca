"""Notification infrastructure providers."""

from dishka import Scope, provide

from yard.adapter.notification import HttpNotificationClient
from yard.config import NotificationSettings
from yard.domain.service import NotificationClient
from yard.util.di.base import ProviderBase
from yard.util.error import ConfigurationError


class NotificationProvider(ProviderBase):
    """Notification component base."""

    __mock_component__ = "notification"


class ProdNotificationProvider(NotificationProvider):
    """Production provider posting to the notification function."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_notification_client(
        self, settings: NotificationSettings
    ) -> NotificationClient:
        """Provide HTTP notification client.

        Raises:
            ConfigurationError: Notifications enabled without a function URL
        """
        if settings.enabled and not settings.function_url:
            raise ConfigurationError(
                "notifications.function_url", "required when notifications are enabled"
            )
        return HttpNotificationClient(settings)
