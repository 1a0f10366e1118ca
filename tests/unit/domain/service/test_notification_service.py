"""Unit tests for NotificationService."""

from decimal import Decimal

import pytest

from yard.adapter.notification import MockNotificationClient
from yard.config import NotificationSettings
from yard.domain.service import NotificationService
from yard.domain.value import LogMode, NotificationKind
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class TestDispatch:
    """Delivery outcome reporting."""

    @pytest.mark.asyncio
    async def test_invitation_payload(self, unit_env):
        # Arrange
        service = await unit_env.get(NotificationService)
        client = await unit_env.get(MockNotificationClient)

        # Act
        outcome = await service.send_invitation(
            invitee_email="bob@example.com",
            invitee_name=None,
            inviter_name="Alice",
            hours=Decimal("1.0"),
            mode=LogMode.HELPED,
            invitation_token="a" * 64,
            invite_url="http://localhost:5173/invite/" + "a" * 64,
        )

        # Assert
        assert outcome.success is True
        sent = client.sent[0]
        assert sent.kind == NotificationKind.INVITATION
        assert sent.recipient == "bob@example.com"
        assert sent.template_data["invitee_name"] == "bob@example.com"
        assert sent.template_data["hours_label"] == "1 hour"
        assert sent.template_data["mode"] == "helped"

    @pytest.mark.asyncio
    async def test_transport_failure_becomes_outcome(self, unit_env):
        # Arrange
        service = await unit_env.get(NotificationService)
        client = await unit_env.get(MockNotificationClient)
        client.fail = True

        # Act
        outcome = await service.send_reminder(
            "dave@example.com", "Dave", "Carol", Decimal("2.5"), "Tutoring", 1
        )

        # Assert
        assert outcome.success is False
        assert outcome.message
        assert client.sent == []

    @pytest.mark.asyncio
    async def test_disabled_notifications_skip_delivery(self):
        # Arrange
        client = MockNotificationClient()
        service = NotificationService(client, NotificationSettings(enabled=False))

        # Act
        outcome = await service.send_time_logged(
            "dave@example.com", "Dave", "Carol", Decimal("2"), LogMode.HELPED, ""
        )

        # Assert
        assert outcome.success is False
        assert client.sent == []
