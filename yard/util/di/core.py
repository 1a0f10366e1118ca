"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from yard.config import (
    APISettings,
    AuthSettings,
    LedgerSettings,
    NotificationSettings,
    Settings,
)
from yard.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings and their sections, loaded once from the environment."""

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide
    def provide_ledger_settings(self, settings: Settings) -> LedgerSettings:
        return settings.ledger

    @provide
    def provide_notification_settings(self, settings: Settings) -> NotificationSettings:
        return settings.notifications

    @provide
    def provide_api_settings(self, settings: Settings) -> APISettings:
        return settings.api
