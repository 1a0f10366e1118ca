"""Integration tests for the Postgres ledger repositories.

Require PostgreSQL at DATABASE__URL with migrations applied. Each test
uses fresh emails so runs do not collide.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest

from yard.domain.model import Invitation, PendingTimeLog, TimeTransaction
from yard.domain.repository import (
    InvitationRepository,
    ProfileRepository,
    TransactionRepository,
)
from yard.domain.value import (
    InvitationId,
    InvitationStatus,
    InvitationToken,
    LogMode,
    PendingTimeLogId,
    PendingTimeLogStatus,
    ProfileId,
    TransactionId,
    TransactionStatus,
)
from tests.conftest import make_profile
from tests.harness import create_env_fixture

pytestmark = pytest.mark.integration

# Integration test fixture - real persistence
integration_env = create_env_fixture(unmock={"persistence"})


def unique_email(name: str) -> str:
    return f"{name}-{uuid4().hex[:8]}@example.com"


async def two_profiles(env):
    profiles = await env.get(ProfileRepository)
    now = datetime.now(timezone.utc)
    carol = await profiles.save(make_profile(unique_email("carol"), "Carol", now=now))
    dave = await profiles.save(make_profile(unique_email("dave"), "Dave", now=now))
    return carol, dave


def pending_transaction(giver, receiver) -> TimeTransaction:
    now = datetime.now(timezone.utc)
    return TimeTransaction(
        id=TransactionId(uuid4()),
        giver_id=giver.id,
        receiver_id=receiver.id,
        hours=Decimal("1.50"),
        description="Fixing the fence",
        logged_by=giver.id,
        created_at=now,
        updated_at=now,
    )


class TestTransactionRepositoryIntegration:
    """Conditional updates on time_transactions."""

    @pytest.mark.asyncio
    async def test_transition_applies_only_once(self, integration_env):
        # Arrange
        repo = await integration_env.get(TransactionRepository)
        carol, dave = await two_profiles(integration_env)
        transaction = await repo.create(pending_transaction(carol, dave))
        now = datetime.now(timezone.utc)
        confirmed = transaction.model_copy(
            update={
                "status": TransactionStatus.CONFIRMED,
                "confirmed_at": now,
                "confirmed_by": dave.id,
            }
        )
        disputed = transaction.model_copy(
            update={"status": TransactionStatus.DISPUTED, "dispute_reason": "No"}
        )

        # Act
        first = await repo.save_transition(confirmed)
        second = await repo.save_transition(disputed)

        # Assert
        assert first is True
        assert second is False
        stored = await repo.find_by_id(transaction.id)
        assert stored.status == TransactionStatus.CONFIRMED
        assert stored.hours == Decimal("1.50")

    @pytest.mark.asyncio
    async def test_record_nudge_requires_unchanged_timestamp(self, integration_env):
        # Arrange
        repo = await integration_env.get(TransactionRepository)
        carol, dave = await two_profiles(integration_env)
        transaction = await repo.create(pending_transaction(carol, dave))
        now = datetime.now(timezone.utc)

        # Act
        first = await repo.record_nudge(transaction.id, None, now)
        stale = await repo.record_nudge(transaction.id, None, now + timedelta(hours=2))

        # Assert
        assert first is True
        assert stale is False
        stored = await repo.find_by_id(transaction.id)
        assert stored.nudge_count == 1

    @pytest.mark.asyncio
    async def test_sum_confirmed_hours_ignores_pending(self, integration_env):
        # Arrange
        repo = await integration_env.get(TransactionRepository)
        carol, dave = await two_profiles(integration_env)
        confirmed = await repo.create(pending_transaction(carol, dave))
        await repo.create(pending_transaction(dave, carol))
        await repo.save_transition(
            confirmed.model_copy(update={"status": TransactionStatus.CONFIRMED})
        )

        # Act
        given, received = await repo.sum_confirmed_hours(carol.id)

        # Assert
        assert given == Decimal("1.50")
        assert received == Decimal("0")


class TestProfileBalanceIntegration:
    """Cached balance rewritten from confirmed transactions in the database."""

    @pytest.mark.asyncio
    async def test_refresh_balance_sums_confirmed_only(self, integration_env):
        # Arrange
        profiles = await integration_env.get(ProfileRepository)
        repo = await integration_env.get(TransactionRepository)
        carol, dave = await two_profiles(integration_env)
        confirmed = [
            await repo.create(pending_transaction(carol, dave)),
            await repo.create(pending_transaction(carol, dave)),
            await repo.create(pending_transaction(dave, carol)),
        ]
        await repo.create(pending_transaction(carol, dave))
        for transaction in confirmed:
            await repo.save_transition(
                transaction.model_copy(update={"status": TransactionStatus.CONFIRMED})
            )
        now = datetime.now(timezone.utc)

        # Act
        carol_balance = await profiles.refresh_balance(carol.id, now)
        dave_balance = await profiles.refresh_balance(dave.id, now)

        # Assert
        assert carol_balance == Decimal("1.50")
        assert dave_balance == Decimal("-1.50")
        stored = await profiles.find_by_id(carol.id)
        assert stored.time_balance_hours == Decimal("1.50")

    @pytest.mark.asyncio
    async def test_refresh_balance_of_unknown_profile(self, integration_env):
        # Arrange
        profiles = await integration_env.get(ProfileRepository)

        # Act
        balance = await profiles.refresh_balance(
            ProfileId(uuid4()), datetime.now(timezone.utc)
        )

        # Assert
        assert balance is None


class TestInvitationRepositoryIntegration:
    """Invitation acceptance and the expiry sweep."""

    async def _invite(self, env, expires_in: timedelta):
        repo = await env.get(InvitationRepository)
        carol, _ = await two_profiles(env)
        now = datetime.now(timezone.utc)
        email = unique_email("bob")
        invitation = Invitation(
            id=InvitationId(uuid4()),
            inviter_id=carol.id,
            email=email,
            full_name="Bob",
            token=InvitationToken(uuid4().hex + uuid4().hex),
            status=InvitationStatus.PENDING,
            expires_at=now + expires_in,
            created_at=now,
            updated_at=now,
        )
        time_log = PendingTimeLog(
            id=PendingTimeLogId(uuid4()),
            invitation_id=invitation.id,
            logger_profile_id=carol.id,
            invitee_email=email,
            invitee_name="Bob",
            invitee_contact=email,
            hours=Decimal("2"),
            mode=LogMode.HELPED,
            status=PendingTimeLogStatus.PENDING,
            created_at=now,
            updated_at=now,
        )
        await repo.create_with_time_log(invitation, time_log)
        return repo, invitation

    @pytest.mark.asyncio
    async def test_find_by_token(self, integration_env):
        # Arrange
        repo, invitation = await self._invite(integration_env, timedelta(days=7))

        # Act
        found = await repo.find_by_token(invitation.token)

        # Assert
        assert found is not None
        assert found.id == invitation.id
        assert found.token.root == invitation.token.root

    @pytest.mark.asyncio
    async def test_mark_accepted_claims_once(self, integration_env):
        # Arrange
        repo, invitation = await self._invite(integration_env, timedelta(days=7))
        profiles = await integration_env.get(ProfileRepository)
        bob = await profiles.save(make_profile(str(invitation.email), "Bob"))
        now = datetime.now(timezone.utc)

        # Act
        first = await repo.mark_accepted(invitation.id, bob.id, now)
        second = await repo.mark_accepted(invitation.id, bob.id, now)

        # Assert
        assert first is True
        assert second is False

    @pytest.mark.asyncio
    async def test_expire_stale_expires_log_too(self, integration_env):
        # Arrange
        repo, invitation = await self._invite(integration_env, timedelta(seconds=-1))

        # Act
        count = await repo.expire_stale(datetime.now(timezone.utc))

        # Assert
        assert count >= 1
        stored = await repo.find_by_id(invitation.id)
        time_log = await repo.find_time_log(invitation.id)
        assert stored.status == InvitationStatus.EXPIRED
        assert time_log.status == PendingTimeLogStatus.EXPIRED
