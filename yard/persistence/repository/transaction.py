"""PostgreSQL implementation of the transaction repository."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import and_, case, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from yard.domain.model import TimeTransaction
from yard.domain.repository import TransactionRepository
from yard.domain.value import ProfileId, TransactionId, TransactionStatus
from yard.persistence.error import storage_errors
from yard.persistence.mappers import row_to_transaction, transaction_to_dict
from yard.persistence.tables import time_transactions_table

t = time_transactions_table

# Columns a transition out of pending may write
TRANSITION_COLUMNS = (
    "status",
    "confirmed_at",
    "confirmed_by",
    "disputed_at",
    "dispute_reason",
    "cancelled_at",
    "updated_at",
)


class PostgresTransactionRepository(TransactionRepository):
    """PostgreSQL implementation of TransactionRepository.

    Transitions and nudges are single conditional UPDATEs, so two
    concurrent requests cannot both succeed.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, transaction_id: TransactionId) -> TimeTransaction | None:
        stmt = select(t).where(t.c.id == transaction_id)
        with storage_errors("transaction.find_by_id"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_transaction(dict(row)) if row else None

    async def create(self, transaction: TimeTransaction) -> TimeTransaction:
        with storage_errors("transaction.create"):
            await self.session.execute(
                insert(t).values(**transaction_to_dict(transaction))
            )
            await self.session.flush()
        return transaction

    async def save_transition(self, transaction: TimeTransaction) -> bool:
        values = transaction_to_dict(transaction)
        stmt = (
            update(t)
            .where(
                and_(
                    t.c.id == transaction.id,
                    t.c.status == TransactionStatus.PENDING.value,
                )
            )
            .values(**{k: values[k] for k in TRANSITION_COLUMNS})
        )
        with storage_errors("transaction.save_transition"):
            result = await self.session.execute(stmt)
            await self.session.flush()
        return result.rowcount == 1

    async def record_nudge(
        self,
        transaction_id: TransactionId,
        previous_nudged_at: datetime | None,
        nudged_at: datetime,
    ) -> bool:
        unchanged = (
            t.c.last_nudged_at.is_(None)
            if previous_nudged_at is None
            else t.c.last_nudged_at == previous_nudged_at
        )
        stmt = (
            update(t)
            .where(
                and_(
                    t.c.id == transaction_id,
                    t.c.status == TransactionStatus.PENDING.value,
                    unchanged,
                )
            )
            .values(
                last_nudged_at=nudged_at,
                nudge_count=t.c.nudge_count + 1,
                updated_at=nudged_at,
            )
        )
        with storage_errors("transaction.record_nudge"):
            result = await self.session.execute(stmt)
            await self.session.flush()
        return result.rowcount == 1

    async def list_pending_for_profile(
        self, profile_id: ProfileId
    ) -> list[TimeTransaction]:
        stmt = (
            select(t)
            .where(
                and_(
                    t.c.status == TransactionStatus.PENDING.value,
                    or_(t.c.giver_id == profile_id, t.c.receiver_id == profile_id),
                )
            )
            .order_by(t.c.created_at.desc())
        )
        with storage_errors("transaction.list_pending_for_profile"):
            result = await self.session.execute(stmt)
        return [row_to_transaction(dict(row)) for row in result.mappings().all()]

    async def sum_confirmed_hours(self, profile_id: ProfileId) -> tuple[Decimal, Decimal]:
        stmt = select(
            func.coalesce(
                func.sum(case((t.c.giver_id == profile_id, t.c.hours), else_=0)), 0
            ).label("given"),
            func.coalesce(
                func.sum(case((t.c.receiver_id == profile_id, t.c.hours), else_=0)), 0
            ).label("received"),
        ).where(
            and_(
                t.c.status == TransactionStatus.CONFIRMED.value,
                or_(t.c.giver_id == profile_id, t.c.receiver_id == profile_id),
            )
        )
        with storage_errors("transaction.sum_confirmed_hours"):
            result = await self.session.execute(stmt)
        row = result.mappings().one()
        return Decimal(row["given"]), Decimal(row["received"])
