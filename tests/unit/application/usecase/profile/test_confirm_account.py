"""Unit tests for ConfirmAccountUseCase."""

from decimal import Decimal
from uuid import uuid4

import pytest

from yard.adapter.notification import MockNotificationClient
from yard.application.usecase.profile import (
    ConfirmAccountRequest,
    ConfirmAccountUseCase,
)
from yard.config import AuthSettings
from yard.domain.model import TimeLoggingData
from yard.domain.repository import ProfileRepository
from yard.domain.service import ProfileService
from yard.domain.value import Email, LogMode, NotificationKind
from yard.persistence.repository.inmemory import (
    InMemoryInvitationRepository,
    InMemoryTransactionRepository,
)
from yard.util.jwt import JWTError, create_token
from tests.conftest import add_profile
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


async def _token(unit_env, email: str) -> tuple[str, str]:
    settings = await unit_env.get(AuthSettings)
    user_id = str(uuid4())
    return user_id, create_token(user_id, email, settings)


class TestConfirmAccount:
    """Profile creation and staged time logging after sign-up."""

    @pytest.mark.asyncio
    async def test_creates_profile_without_staged_data(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ConfirmAccountUseCase)
        _, token = await _token(unit_env, "carol@example.com")

        # Act
        response = await use_case.execute(ConfirmAccountRequest(token=token))

        # Assert
        assert response.created is True
        assert response.time_logged is None
        assert response.time_log_error is None

    @pytest.mark.asyncio
    async def test_staged_exchange_with_member_is_logged(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ConfirmAccountUseCase)
        profile_service = await unit_env.get(ProfileService)
        profiles = await unit_env.get(ProfileRepository)
        transactions = await unit_env.get(InMemoryTransactionRepository)
        client = await unit_env.get(MockNotificationClient)
        dave = await add_profile(profiles, "dave@example.com", "Dave")
        await profile_service.stage_pending_profile(
            Email("carol@example.com"),
            full_name="Carol",
            time_logging_data=TimeLoggingData(
                mode=LogMode.WAS_HELPED,
                hours=Decimal("3"),
                name="Dave",
                contact="dave@example.com",
                description="Taxes",
            ),
        )
        _, token = await _token(unit_env, "carol@example.com")

        # Act
        response = await use_case.execute(ConfirmAccountRequest(token=token))

        # Assert
        assert response.created is True
        assert response.time_logged.result.kind == "direct"
        transaction = transactions.all()[0]
        assert transaction.giver_id == dave.id
        assert str(transaction.receiver_id) == response.profile_id
        assert client.sent[0].kind == NotificationKind.TIME_LOGGED

    @pytest.mark.asyncio
    async def test_staged_exchange_with_non_member_invites(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ConfirmAccountUseCase)
        profile_service = await unit_env.get(ProfileService)
        invitations = await unit_env.get(InMemoryInvitationRepository)
        await profile_service.stage_pending_profile(
            Email("carol@example.com"),
            time_logging_data=TimeLoggingData(
                mode=LogMode.HELPED,
                hours=Decimal("1"),
                name="Erin",
                contact="erin@example.com",
            ),
        )
        _, token = await _token(unit_env, "carol@example.com")

        # Act
        response = await use_case.execute(ConfirmAccountRequest(token=token))

        # Assert
        result = response.time_logged.result
        assert result.kind == "invited"
        assert await invitations.find_by_id(result.invitation_id) is not None

    @pytest.mark.asyncio
    async def test_failed_staged_exchange_keeps_profile(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ConfirmAccountUseCase)
        profile_service = await unit_env.get(ProfileService)
        profiles = await unit_env.get(ProfileRepository)
        transactions = await unit_env.get(InMemoryTransactionRepository)
        await profile_service.stage_pending_profile(
            Email("carol@example.com"),
            time_logging_data=TimeLoggingData(
                mode=LogMode.HELPED,
                hours=Decimal("1"),
                name="Me",
                contact="carol@example.com",
            ),
        )
        user_id, token = await _token(unit_env, "carol@example.com")

        # Act
        response = await use_case.execute(ConfirmAccountRequest(token=token))

        # Assert
        assert response.created is True
        assert response.time_logged is None
        assert response.time_log_error
        assert await profiles.find_by_email(Email("carol@example.com")) is not None
        assert transactions.all() == []

    @pytest.mark.asyncio
    async def test_repeat_confirmation_is_idempotent(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ConfirmAccountUseCase)
        _, token = await _token(unit_env, "carol@example.com")
        first = await use_case.execute(ConfirmAccountRequest(token=token))

        # Act
        second = await use_case.execute(ConfirmAccountRequest(token=token))

        # Assert
        assert second.created is False
        assert second.profile_id == first.profile_id

    @pytest.mark.asyncio
    async def test_invalid_token(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ConfirmAccountUseCase)

        # Act & Assert
        with pytest.raises(JWTError):
            await use_case.execute(ConfirmAccountRequest(token="not-a-jwt"))
