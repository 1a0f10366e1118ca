"""Unit tests for InvitationService."""

from decimal import Decimal

import pytest

from yard.domain.error import (
    AlreadyUsedError,
    ExpiredError,
    ForbiddenError,
    NotFoundError,
)
from yard.domain.repository import InvitationRepository, ProfileRepository
from yard.domain.service import InvitationService, LedgerService
from yard.domain.value import (
    InvitationStatus,
    LogMode,
    PendingTimeLogStatus,
    TransactionStatus,
)
from yard.persistence.repository.inmemory import InMemoryTransactionRepository
from yard.util.clock import FixedClock
from tests.conftest import add_profile
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


async def _invite_bob(unit_env, mode: LogMode = LogMode.HELPED):
    """Alice logs two hours with Bob, who has no profile yet."""
    ledger = await unit_env.get(LedgerService)
    profiles = await unit_env.get(ProfileRepository)
    alice = await add_profile(profiles, "alice@example.com", "Alice")
    result = await ledger.log_time(
        alice, mode, "bob@example.com", "Bob", Decimal("2"), "Garden work"
    )
    return alice, result


class TestGetByToken:
    """Invite landing page lookup."""

    @pytest.mark.asyncio
    async def test_returns_details_with_time_log(self, unit_env):
        # Arrange
        _, invited = await _invite_bob(unit_env)
        service = await unit_env.get(InvitationService)

        # Act
        details = await service.get_by_token(str(invited.invitation_token))

        # Assert
        assert details.inviter_name == "Alice"
        assert str(details.email) == "bob@example.com"
        assert details.full_name == "Bob"
        assert details.time_log.hours == Decimal("2")
        assert details.time_log.mode == LogMode.HELPED

    @pytest.mark.asyncio
    async def test_unknown_token(self, unit_env):
        # Arrange
        service = await unit_env.get(InvitationService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await service.get_by_token("0" * 64)

    @pytest.mark.asyncio
    async def test_malformed_token_is_not_found(self, unit_env):
        # Arrange
        service = await unit_env.get(InvitationService)

        # Act & Assert
        with pytest.raises(NotFoundError):
            await service.get_by_token("not-a-token")

    @pytest.mark.asyncio
    async def test_expired_even_while_stored_as_pending(self, unit_env):
        # Arrange
        _, invited = await _invite_bob(unit_env)
        service = await unit_env.get(InvitationService)
        invitations = await unit_env.get(InvitationRepository)
        clock = await unit_env.get(FixedClock)
        clock.advance(days=8)

        # Act & Assert
        with pytest.raises(ExpiredError):
            await service.get_by_token(str(invited.invitation_token))
        stored = await invitations.find_by_id(invited.invitation_id)
        assert stored.status == InvitationStatus.PENDING


class TestAccept:
    """Acceptance converts the pending time log exactly once."""

    @pytest.mark.asyncio
    async def test_accept_creates_pending_transaction(self, unit_env):
        # Arrange
        alice, invited = await _invite_bob(unit_env)
        service = await unit_env.get(InvitationService)
        profiles = await unit_env.get(ProfileRepository)
        invitations = await unit_env.get(InvitationRepository)
        transactions = await unit_env.get(InMemoryTransactionRepository)
        bob = await add_profile(profiles, "bob@example.com", "Bob")

        # Act
        result = await service.accept(str(invited.invitation_token), bob)

        # Assert
        assert result.transaction_created is True
        transaction = await transactions.find_by_id(result.transaction_id)
        assert transaction.giver_id == alice.id
        assert transaction.receiver_id == bob.id
        assert transaction.logged_by == alice.id
        assert transaction.status == TransactionStatus.PENDING
        assert transaction.hours == Decimal("2")

        invitation = await invitations.find_by_id(invited.invitation_id)
        time_log = await invitations.find_time_log(invited.invitation_id)
        assert invitation.status == InvitationStatus.ACCEPTED
        assert invitation.accepted_by == bob.id
        assert time_log.status == PendingTimeLogStatus.CONVERTED
        assert time_log.converted_transaction_id == transaction.id

    @pytest.mark.asyncio
    async def test_was_helped_makes_invitee_the_giver(self, unit_env):
        # Arrange
        alice, invited = await _invite_bob(unit_env, mode=LogMode.WAS_HELPED)
        service = await unit_env.get(InvitationService)
        profiles = await unit_env.get(ProfileRepository)
        transactions = await unit_env.get(InMemoryTransactionRepository)
        bob = await add_profile(profiles, "bob@example.com", "Bob")

        # Act
        result = await service.accept(str(invited.invitation_token), bob)

        # Assert
        transaction = await transactions.find_by_id(result.transaction_id)
        assert transaction.giver_id == bob.id
        assert transaction.receiver_id == alice.id

    @pytest.mark.asyncio
    async def test_repeat_accept_by_same_profile_creates_nothing(self, unit_env):
        # Arrange
        _, invited = await _invite_bob(unit_env)
        service = await unit_env.get(InvitationService)
        profiles = await unit_env.get(ProfileRepository)
        transactions = await unit_env.get(InMemoryTransactionRepository)
        bob = await add_profile(profiles, "bob@example.com", "Bob")
        first = await service.accept(str(invited.invitation_token), bob)

        # Act
        second = await service.accept(str(invited.invitation_token), bob)

        # Assert
        assert second.already_accepted is True
        assert second.transaction_created is False
        assert second.transaction_id == first.transaction_id
        assert len(transactions.all()) == 1

    @pytest.mark.asyncio
    async def test_accept_by_someone_else_after_use(self, unit_env):
        # Arrange
        _, invited = await _invite_bob(unit_env)
        service = await unit_env.get(InvitationService)
        profiles = await unit_env.get(ProfileRepository)
        transactions = await unit_env.get(InMemoryTransactionRepository)
        bob = await add_profile(profiles, "bob@example.com", "Bob")
        mallory = await add_profile(profiles, "mallory@example.com", "Mallory")
        await service.accept(str(invited.invitation_token), bob)

        # Act & Assert
        with pytest.raises(AlreadyUsedError):
            await service.accept(str(invited.invitation_token), mallory)
        assert len(transactions.all()) == 1

    @pytest.mark.asyncio
    async def test_inviter_cannot_accept_own_invitation(self, unit_env):
        # Arrange
        alice, invited = await _invite_bob(unit_env)
        service = await unit_env.get(InvitationService)

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await service.accept(str(invited.invitation_token), alice)

    @pytest.mark.asyncio
    async def test_expired_invitation_cannot_be_accepted(self, unit_env):
        # Arrange
        _, invited = await _invite_bob(unit_env)
        service = await unit_env.get(InvitationService)
        profiles = await unit_env.get(ProfileRepository)
        transactions = await unit_env.get(InMemoryTransactionRepository)
        clock = await unit_env.get(FixedClock)
        bob = await add_profile(profiles, "bob@example.com", "Bob")
        clock.advance(days=7, seconds=1)

        # Act & Assert
        with pytest.raises(ExpiredError):
            await service.accept(str(invited.invitation_token), bob)
        assert transactions.all() == []


class TestCancelAndExpire:
    """Inviter withdrawal and the expiry sweep."""

    @pytest.mark.asyncio
    async def test_inviter_cancels(self, unit_env):
        # Arrange
        alice, invited = await _invite_bob(unit_env)
        service = await unit_env.get(InvitationService)
        invitations = await unit_env.get(InvitationRepository)

        # Act
        await service.cancel(invited.invitation_id, alice.id)

        # Assert
        invitation = await invitations.find_by_id(invited.invitation_id)
        time_log = await invitations.find_time_log(invited.invitation_id)
        assert invitation.status == InvitationStatus.CANCELLED
        assert time_log.status == PendingTimeLogStatus.CANCELLED

        with pytest.raises(AlreadyUsedError):
            await service.get_by_token(str(invited.invitation_token))

    @pytest.mark.asyncio
    async def test_only_inviter_can_cancel(self, unit_env):
        # Arrange
        _, invited = await _invite_bob(unit_env)
        service = await unit_env.get(InvitationService)
        profiles = await unit_env.get(ProfileRepository)
        mallory = await add_profile(profiles, "mallory@example.com", "Mallory")

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await service.cancel(invited.invitation_id, mallory.id)

    @pytest.mark.asyncio
    async def test_expire_stale_marks_invitation_and_log(self, unit_env):
        # Arrange
        _, invited = await _invite_bob(unit_env)
        service = await unit_env.get(InvitationService)
        invitations = await unit_env.get(InvitationRepository)
        clock = await unit_env.get(FixedClock)

        # Act
        before = await service.expire_stale()
        clock.advance(days=8)
        after = await service.expire_stale()

        # Assert
        assert before == 0
        assert after == 1
        invitation = await invitations.find_by_id(invited.invitation_id)
        time_log = await invitations.find_time_log(invited.invitation_id)
        assert invitation.status == InvitationStatus.EXPIRED
        assert time_log.status == PendingTimeLogStatus.EXPIRED
