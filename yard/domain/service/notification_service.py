"""Notification dispatch domain service."""

from decimal import Decimal

import logfire

from yard.config import NotificationSettings
from yard.domain.model.notification import Notification, NotificationOutcome
from yard.domain.value import LogMode, NotificationKind

from .base import Service


class NotificationClient:
    """Delivery channel for notifications (email function, test double)."""

    async def send(self, notification: Notification) -> NotificationOutcome:
        """Deliver one notification.

        Args:
            notification: Message to deliver

        Returns:
            Delivery outcome

        Raises:
            Exception: Implementations may raise on transport failure
        """
        raise NotImplementedError


def _hours_label(hours: Decimal) -> str:
    value = hours.normalize()
    return f"{value} hour" if value == 1 else f"{value} hours"


class NotificationService(Service):
    """Sends invitation, time-logged and reminder notifications.

    Runs after the triggering change is committed. Delivery problems are
    reported in the returned outcome and never raised.
    """

    def __init__(
        self, client: NotificationClient, notification_settings: NotificationSettings
    ) -> None:
        self.client = client
        self.settings = notification_settings

    async def dispatch(self, notification: Notification) -> NotificationOutcome:
        """Deliver a notification, converting any failure into an outcome.

        Args:
            notification: Message to deliver

        Returns:
            Delivery outcome
        """
        with logfire.span(
            "notification_service.dispatch", kind=notification.kind.value
        ):
            if not self.settings.enabled:
                logfire.info("Notifications disabled", kind=notification.kind.value)
                return NotificationOutcome(
                    success=False, message="Notifications are disabled"
                )

            try:
                outcome = await self.client.send(notification)
            except Exception as e:
                logfire.error(
                    "Notification delivery failed",
                    kind=notification.kind.value,
                    error=str(e),
                )
                return NotificationOutcome(success=False, message=str(e))

            if outcome.success:
                logfire.info("Notification sent", kind=notification.kind.value)
            else:
                logfire.warn(
                    "Notification rejected",
                    kind=notification.kind.value,
                    message=outcome.message,
                )
            return outcome

    async def send_invitation(
        self,
        invitee_email: str,
        invitee_name: str | None,
        inviter_name: str,
        hours: Decimal,
        mode: LogMode,
        invitation_token: str,
        invite_url: str,
    ) -> NotificationOutcome:
        """Invite a non-member to join and confirm a logged exchange."""
        return await self.dispatch(
            Notification(
                kind=NotificationKind.INVITATION,
                recipient=invitee_email,
                template_data={
                    "invitee_email": invitee_email,
                    "invitee_name": invitee_name or invitee_email,
                    "inviter_name": inviter_name,
                    "hours": float(hours),
                    "hours_label": _hours_label(hours),
                    "mode": mode.value,
                    "invitation_token": invitation_token,
                    "invite_url": invite_url,
                    "subject": f"{inviter_name} wants to track time with you on Yard",
                },
            )
        )

    async def send_time_logged(
        self,
        recipient_email: str,
        recipient_name: str,
        logger_name: str,
        hours: Decimal,
        mode: LogMode,
        description: str,
    ) -> NotificationOutcome:
        """Tell a member that time was logged with them and awaits confirmation.

        ``mode`` is from the logger's side.
        """
        return await self.dispatch(
            Notification(
                kind=NotificationKind.TIME_LOGGED,
                recipient=recipient_email,
                template_data={
                    "recipient_name": recipient_name,
                    "logger_name": logger_name,
                    "hours": float(hours),
                    "hours_label": _hours_label(hours),
                    "mode": mode.value,
                    "description": description,
                },
            )
        )

    async def send_reminder(
        self,
        recipient_email: str,
        recipient_name: str,
        logger_name: str,
        hours: Decimal,
        description: str,
        nudge_count: int,
    ) -> NotificationOutcome:
        """Remind a counterpart that a transaction is waiting on them."""
        return await self.dispatch(
            Notification(
                kind=NotificationKind.REMINDER,
                recipient=recipient_email,
                template_data={
                    "recipient_name": recipient_name,
                    "logger_name": logger_name,
                    "hours": float(hours),
                    "hours_label": _hours_label(hours),
                    "description": description,
                    "nudge_count": nudge_count,
                },
            )
        )
