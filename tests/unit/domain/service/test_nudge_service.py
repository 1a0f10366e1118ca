"""Unit tests for NudgeService."""

from datetime import timedelta
from decimal import Decimal

import pytest

from yard.domain.error import ForbiddenError, InvalidStateError, RateLimitedError
from yard.domain.repository import ProfileRepository
from yard.domain.service import LedgerService, NudgeService, TransactionService
from yard.domain.value import LogMode
from yard.util.clock import FixedClock
from tests.conftest import add_profile
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()


async def _pending(unit_env):
    ledger = await unit_env.get(LedgerService)
    profiles = await unit_env.get(ProfileRepository)
    carol = await add_profile(profiles, "carol@example.com", "Carol")
    dave = await add_profile(profiles, "dave@example.com", "Dave")
    result = await ledger.log_time(carol, LogMode.HELPED, "dave@example.com", None, Decimal("1"))
    return carol, dave, result.transaction_id


class TestNudge:
    """Reminder throttling."""

    @pytest.mark.asyncio
    async def test_first_nudge_is_allowed(self, unit_env):
        # Arrange
        carol, _, tx_id = await _pending(unit_env)
        nudges = await unit_env.get(NudgeService)
        clock = await unit_env.get(FixedClock)

        # Act
        nudged = await nudges.nudge(tx_id, carol.id)

        # Assert
        assert nudged.nudge_count == 1
        assert nudged.last_nudged_at == clock.now()

    @pytest.mark.asyncio
    async def test_second_nudge_within_an_hour_is_throttled(self, unit_env):
        # Arrange
        carol, _, tx_id = await _pending(unit_env)
        nudges = await unit_env.get(NudgeService)
        clock = await unit_env.get(FixedClock)
        first = await nudges.nudge(tx_id, carol.id)
        clock.advance(minutes=59)

        # Act & Assert
        with pytest.raises(RateLimitedError) as exc_info:
            await nudges.nudge(tx_id, carol.id)
        assert exc_info.value.retry_after == first.last_nudged_at + timedelta(minutes=60)

    @pytest.mark.asyncio
    async def test_second_nudge_after_an_hour_is_allowed(self, unit_env):
        # Arrange
        carol, _, tx_id = await _pending(unit_env)
        nudges = await unit_env.get(NudgeService)
        clock = await unit_env.get(FixedClock)
        await nudges.nudge(tx_id, carol.id)
        clock.advance(minutes=61)

        # Act
        nudged = await nudges.nudge(tx_id, carol.id)

        # Assert
        assert nudged.nudge_count == 2
        assert nudged.last_nudged_at == clock.now()

    @pytest.mark.asyncio
    async def test_counterpart_cannot_nudge(self, unit_env):
        # Arrange
        _, dave, tx_id = await _pending(unit_env)
        nudges = await unit_env.get(NudgeService)

        # Act & Assert
        with pytest.raises(ForbiddenError):
            await nudges.nudge(tx_id, dave.id)

    @pytest.mark.asyncio
    async def test_confirmed_transaction_cannot_be_nudged(self, unit_env):
        # Arrange
        carol, dave, tx_id = await _pending(unit_env)
        nudges = await unit_env.get(NudgeService)
        transactions = await unit_env.get(TransactionService)
        await transactions.confirm(tx_id, dave.id)

        # Act & Assert
        with pytest.raises(InvalidStateError):
            await nudges.nudge(tx_id, carol.id)
