"""Unit tests for BalanceService."""

from decimal import Decimal
from uuid import uuid4

import pytest

from yard.domain.repository import ProfileRepository
from yard.domain.service import BalanceService, LedgerService
from yard.domain.value import LogMode, ProfileId, TransactionStatus
from yard.persistence.repository.inmemory import InMemoryTransactionRepository
from tests.conftest import add_profile
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


async def _confirm_directly(unit_env, transaction_id):
    """Flip a pending transaction to confirmed without recomputing balances."""
    transactions = await unit_env.get(InMemoryTransactionRepository)
    transaction = await transactions.find_by_id(transaction_id)
    await transactions.save_transition(
        transaction.model_copy(update={"status": TransactionStatus.CONFIRMED})
    )


class TestRecompute:
    """Cached balance refresh."""

    @pytest.mark.asyncio
    async def test_overwrites_stale_cached_balance(self, unit_env):
        # Arrange
        ledger = await unit_env.get(LedgerService)
        service = await unit_env.get(BalanceService)
        profiles = await unit_env.get(ProfileRepository)
        carol = await add_profile(profiles, "carol@example.com", "Carol")
        await profiles.save(carol.model_copy(update={"time_balance_hours": Decimal("50")}))
        await add_profile(profiles, "dave@example.com", "Dave")
        result = await ledger.log_time(
            carol, LogMode.HELPED, "dave@example.com", None, Decimal("1.25")
        )
        await _confirm_directly(unit_env, result.transaction_id)

        # Act
        balance = await service.recompute(carol.id)

        # Assert
        assert balance == Decimal("1.25")
        assert (await profiles.find_by_id(carol.id)).time_balance_hours == Decimal("1.25")

    @pytest.mark.asyncio
    async def test_counts_every_confirmation_since_last_refresh(self, unit_env):
        # Arrange
        ledger = await unit_env.get(LedgerService)
        service = await unit_env.get(BalanceService)
        profiles = await unit_env.get(ProfileRepository)
        carol = await add_profile(profiles, "carol@example.com", "Carol")
        await add_profile(profiles, "dave@example.com", "Dave")
        await add_profile(profiles, "erin@example.com", "Erin")
        gave = await ledger.log_time(
            carol, LogMode.HELPED, "dave@example.com", None, Decimal("3")
        )
        got = await ledger.log_time(
            carol, LogMode.WAS_HELPED, "erin@example.com", None, Decimal("1")
        )
        await _confirm_directly(unit_env, gave.transaction_id)
        await _confirm_directly(unit_env, got.transaction_id)

        # Act
        balance = await service.recompute(carol.id)

        # Assert
        assert balance == Decimal("2")

    @pytest.mark.asyncio
    async def test_missing_profile_is_left_alone(self, unit_env):
        # Arrange
        service = await unit_env.get(BalanceService)
        profiles = await unit_env.get(ProfileRepository)
        ghost = ProfileId(uuid4())

        # Act
        balance = await service.recompute(ghost)

        # Assert
        assert balance == Decimal("0")
        assert await profiles.find_by_id(ghost) is None
