"""PostgreSQL feed sources over the member and agent ledgers."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import Table, and_, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from yard.domain.model import FeedEntry
from yard.domain.repository import AgentTransactionSource, MemberTransactionSource
from yard.domain.value import TransactionKind, TransactionStatus
from yard.persistence.error import storage_errors
from yard.persistence.mappers import row_to_feed_entry
from yard.persistence.tables import (
    agent_profiles_table,
    agent_time_transactions_table,
    profiles_table,
    time_transactions_table,
)


class _LedgerQuery:
    """Confirmed-transaction queries over one ledger table and its party table."""

    def __init__(
        self,
        session: AsyncSession,
        kind: TransactionKind,
        transactions: Table,
        parties: Table,
    ) -> None:
        self.session = session
        self.kind = kind
        self.transactions = transactions
        self.parties = parties

    def _select(self):
        t = self.transactions
        giver = self.parties.alias("giver")
        receiver = self.parties.alias("receiver")

        def display(p):
            return func.coalesce(p.c.full_name, p.c.display_name, p.c.email)

        return (
            select(
                t.c.id,
                t.c.giver_id,
                t.c.receiver_id,
                t.c.hours,
                t.c.description,
                t.c.service_type,
                t.c.created_at,
                display(giver).label("giver_name"),
                display(receiver).label("receiver_name"),
            )
            .select_from(
                t.join(giver, giver.c.id == t.c.giver_id).join(
                    receiver, receiver.c.id == t.c.receiver_id
                )
            )
            .where(t.c.status == TransactionStatus.CONFIRMED.value)
        )

    async def _fetch(self, stmt, operation: str) -> list[FeedEntry]:
        # Savepoint so a failing source leaves the shared request transaction usable
        with storage_errors(f"{self.kind.value}_source.{operation}"):
            async with self.session.begin_nested():
                result = await self.session.execute(stmt)
                rows = result.mappings().all()
        return [row_to_feed_entry(dict(row), self.kind) for row in rows]

    async def recent(self, limit: int) -> list[FeedEntry]:
        stmt = self._select().order_by(self.transactions.c.created_at.desc()).limit(limit)
        return await self._fetch(stmt, "list_confirmed")

    async def between(
        self, giver_id: UUID, receiver_id: UUID, start: datetime, end: datetime
    ) -> list[FeedEntry]:
        t = self.transactions
        stmt = self._select().where(
            and_(
                t.c.giver_id == giver_id,
                t.c.receiver_id == receiver_id,
                t.c.created_at >= start,
                t.c.created_at <= end,
            )
        )
        return await self._fetch(stmt, "find_reciprocal")


class PostgresMemberTransactionSource(MemberTransactionSource):
    """Member ledger read from ``time_transactions``."""

    def __init__(self, session: AsyncSession) -> None:
        self._query = _LedgerQuery(
            session, TransactionKind.MEMBER, time_transactions_table, profiles_table
        )

    async def list_confirmed(self, limit: int) -> list[FeedEntry]:
        return await self._query.recent(limit)

    async def find_reciprocal(
        self, giver_id: UUID, receiver_id: UUID, start: datetime, end: datetime
    ) -> list[FeedEntry]:
        return await self._query.between(giver_id, receiver_id, start, end)


class PostgresAgentTransactionSource(AgentTransactionSource):
    """Agent ledger read from ``agent_time_transactions``."""

    def __init__(self, session: AsyncSession) -> None:
        self._query = _LedgerQuery(
            session,
            TransactionKind.AGENT,
            agent_time_transactions_table,
            agent_profiles_table,
        )

    async def list_confirmed(self, limit: int) -> list[FeedEntry]:
        return await self._query.recent(limit)

    async def find_reciprocal(
        self, giver_id: UUID, receiver_id: UUID, start: datetime, end: datetime
    ) -> list[FeedEntry]:
        return await self._query.between(giver_id, receiver_id, start, end)
