"""Integration tests for the Postgres feed sources.

Both sources share the request session, so a failing source must not
poison the transaction the other one reads through.
"""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy import Column, DateTime, MetaData, Numeric, String, Table, Text
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.ext.asyncio import AsyncSession

from yard.config import LedgerSettings
from yard.domain.error import StorageError
from yard.domain.model import TimeTransaction
from yard.domain.repository import (
    MemberTransactionSource,
    ProfileRepository,
    TransactionRepository,
)
from yard.domain.service import FeedService
from yard.domain.value import TransactionId, TransactionKind, TransactionStatus
from yard.persistence.repository.source import (
    PostgresAgentTransactionSource,
    _LedgerQuery,
)
from yard.persistence.tables import agent_profiles_table
from tests.conftest import make_profile
from tests.harness import create_env_fixture

pytestmark = pytest.mark.integration

# Integration test fixture - real persistence
integration_env = create_env_fixture(unmock={"persistence"})

# Shaped like a ledger table but never created, so every query fails in the database
missing_ledger_table = Table(
    "missing_agent_ledger",
    MetaData(),
    Column("id", PG_UUID(as_uuid=True), primary_key=True),
    Column("giver_id", PG_UUID(as_uuid=True)),
    Column("receiver_id", PG_UUID(as_uuid=True)),
    Column("hours", Numeric(5, 2)),
    Column("description", Text),
    Column("service_type", String(50)),
    Column("status", String(20)),
    Column("created_at", DateTime(timezone=True)),
)


def unique_email(name: str) -> str:
    return f"{name}-{uuid4().hex[:8]}@example.com"


class BrokenAgentSource(PostgresAgentTransactionSource):
    """Agent source whose table is absent from the database."""

    def __init__(self, session: AsyncSession) -> None:
        self._query = _LedgerQuery(
            session, TransactionKind.AGENT, missing_ledger_table, agent_profiles_table
        )


async def confirmed_transaction(env) -> TimeTransaction:
    profiles = await env.get(ProfileRepository)
    repo = await env.get(TransactionRepository)
    now = datetime.now(timezone.utc)
    carol = await profiles.save(make_profile(unique_email("carol"), "Carol", now=now))
    dave = await profiles.save(make_profile(unique_email("dave"), "Dave", now=now))
    transaction = await repo.create(
        TimeTransaction(
            id=TransactionId(uuid4()),
            giver_id=carol.id,
            receiver_id=dave.id,
            hours=Decimal("2.00"),
            description="Proofread the grant",
            logged_by=carol.id,
            created_at=now,
            updated_at=now,
        )
    )
    await repo.save_transition(
        transaction.model_copy(
            update={
                "status": TransactionStatus.CONFIRMED,
                "confirmed_at": datetime.now(timezone.utc),
                "confirmed_by": dave.id,
            }
        )
    )
    return transaction


class TestFeedSourceIntegration:
    """Savepoint isolation between sources on one session."""

    @pytest.mark.asyncio
    async def test_failed_source_raises_storage_error(self, integration_env):
        # Arrange
        session = await integration_env.get(AsyncSession)
        broken = BrokenAgentSource(session)

        # Act & Assert
        with pytest.raises(StorageError):
            await broken.list_confirmed(10)

    @pytest.mark.asyncio
    async def test_session_survives_failed_source(self, integration_env):
        # Arrange
        session = await integration_env.get(AsyncSession)
        member_source = await integration_env.get(MemberTransactionSource)
        repo = await integration_env.get(TransactionRepository)
        transaction = await confirmed_transaction(integration_env)

        with pytest.raises(StorageError):
            await BrokenAgentSource(session).list_confirmed(10)

        # Act
        entries = await member_source.list_confirmed(100)
        stored = await repo.find_by_id(transaction.id)

        # Assert
        assert transaction.id in [e.id for e in entries]
        assert stored.status == TransactionStatus.CONFIRMED

    @pytest.mark.asyncio
    async def test_feed_keeps_member_entries_when_agent_source_fails(self, integration_env):
        # Arrange
        session = await integration_env.get(AsyncSession)
        member_source = await integration_env.get(MemberTransactionSource)
        settings = await integration_env.get(LedgerSettings)
        transaction = await confirmed_transaction(integration_env)
        # Agent first, so the member query runs after the failure
        feed = FeedService(
            {
                TransactionKind.AGENT: BrokenAgentSource(session),
                TransactionKind.MEMBER: member_source,
            },
            settings,
        )

        # Act
        groups = await feed.load_feed(limit=100)

        # Assert
        ids = [tid for group in groups for tid in group.transaction_ids]
        assert transaction.id in ids
        assert all(not group.is_agent_transaction for group in groups)
