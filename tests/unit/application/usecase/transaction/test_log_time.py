"""Unit tests for LogTimeUseCase."""

from decimal import Decimal

import pytest

from yard.adapter.notification import MockNotificationClient
from yard.application.usecase.transaction import LogTimeRequest, LogTimeUseCase
from yard.domain.error import NotFoundError, ValidationError
from yard.domain.repository import ProfileRepository
from yard.domain.value import LogMode, NotificationKind
from yard.persistence.repository.inmemory import (
    InMemoryInvitationRepository,
    InMemoryUnitOfWork,
)
from tests.conftest import add_profile
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


class TestLogTimeUseCase:
    """Commit and notification ordering around a logged exchange."""

    @pytest.mark.asyncio
    async def test_commits_before_notifying(self, unit_env, monkeypatch):
        # Arrange
        use_case = await unit_env.get(LogTimeUseCase)
        profiles = await unit_env.get(ProfileRepository)
        uow = await unit_env.get(InMemoryUnitOfWork)
        client = await unit_env.get(MockNotificationClient)
        carol = await add_profile(profiles, "carol@example.com", "Carol")
        await add_profile(profiles, "dave@example.com", "Dave")

        commits_at_send = []
        original_send = client.send

        async def send(notification):
            commits_at_send.append(uow.commits)
            return await original_send(notification)

        monkeypatch.setattr(client, "send", send)

        # Act
        response = await use_case.execute(
            LogTimeRequest(
                actor_id=str(carol.id),
                mode=LogMode.HELPED,
                counterpart_contact="dave@example.com",
                hours=Decimal("1.5"),
                description="Bike repair",
            )
        )

        # Assert
        assert response.result.kind == "direct"
        assert response.notification_sent is True
        assert commits_at_send == [1]
        sent = client.sent[0]
        assert sent.kind == NotificationKind.TIME_LOGGED
        assert sent.recipient == "dave@example.com"
        assert sent.template_data["logger_name"] == "Carol"

    @pytest.mark.asyncio
    async def test_invitation_survives_notification_failure(self, unit_env):
        # Arrange
        use_case = await unit_env.get(LogTimeUseCase)
        profiles = await unit_env.get(ProfileRepository)
        invitations = await unit_env.get(InMemoryInvitationRepository)
        client = await unit_env.get(MockNotificationClient)
        alice = await add_profile(profiles, "alice@example.com", "Alice")
        client.fail = True

        # Act
        response = await use_case.execute(
            LogTimeRequest(
                actor_id=str(alice.id),
                mode=LogMode.HELPED,
                counterpart_contact="bob@example.com",
                counterpart_name="Bob",
                hours=Decimal("2"),
            )
        )

        # Assert
        assert response.result.kind == "invited"
        assert response.notification_sent is False
        assert response.notification_message
        assert str(response.result.invitation_token) in response.result.invite_url
        assert await invitations.find_by_id(response.result.invitation_id) is not None

    @pytest.mark.asyncio
    async def test_rejected_input_commits_nothing(self, unit_env):
        # Arrange
        use_case = await unit_env.get(LogTimeUseCase)
        profiles = await unit_env.get(ProfileRepository)
        uow = await unit_env.get(InMemoryUnitOfWork)
        client = await unit_env.get(MockNotificationClient)
        carol = await add_profile(profiles, "carol@example.com", "Carol")

        # Act & Assert
        with pytest.raises(ValidationError):
            await use_case.execute(
                LogTimeRequest(
                    actor_id=str(carol.id),
                    mode=LogMode.HELPED,
                    counterpart_contact="dave@example.com",
                    hours=Decimal("0"),
                )
            )
        assert uow.commits == 0
        assert client.sent == []

    @pytest.mark.asyncio
    async def test_unknown_actor(self, unit_env):
        # Arrange
        use_case = await unit_env.get(LogTimeUseCase)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await use_case.execute(
                LogTimeRequest(
                    actor_id="00000000-0000-0000-0000-000000000000",
                    mode=LogMode.HELPED,
                    counterpart_contact="dave@example.com",
                    hours=Decimal("1"),
                )
            )
