"""In-memory transaction repository for testing."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from yard.domain.model import TimeTransaction
from yard.domain.repository import TransactionRepository
from yard.domain.value import ProfileId, TransactionId, TransactionStatus


class InMemoryTransactionRepository(TransactionRepository):
    """In-memory implementation of TransactionRepository for testing."""

    def __init__(self) -> None:
        self._transactions: dict[TransactionId, TimeTransaction] = {}

    def snapshot(self) -> dict:
        return dict(self._transactions)

    def restore(self, state: dict) -> None:
        self._transactions = state

    async def find_by_id(self, transaction_id: TransactionId) -> Optional[TimeTransaction]:
        return self._transactions.get(transaction_id)

    async def create(self, transaction: TimeTransaction) -> TimeTransaction:
        self._transactions[transaction.id] = transaction
        return transaction

    async def save_transition(self, transaction: TimeTransaction) -> bool:
        stored = self._transactions.get(transaction.id)
        if stored is None or stored.status != TransactionStatus.PENDING:
            return False
        self._transactions[transaction.id] = transaction
        return True

    async def record_nudge(
        self,
        transaction_id: TransactionId,
        previous_nudged_at: datetime | None,
        nudged_at: datetime,
    ) -> bool:
        stored = self._transactions.get(transaction_id)
        if (
            stored is None
            or stored.status != TransactionStatus.PENDING
            or stored.last_nudged_at != previous_nudged_at
        ):
            return False
        self._transactions[transaction_id] = stored.model_copy(
            update={
                "last_nudged_at": nudged_at,
                "nudge_count": stored.nudge_count + 1,
                "updated_at": nudged_at,
            }
        )
        return True

    async def list_pending_for_profile(
        self, profile_id: ProfileId
    ) -> list[TimeTransaction]:
        pending = [
            t
            for t in self._transactions.values()
            if t.is_pending and t.is_participant(profile_id)
        ]
        pending.sort(key=lambda t: t.created_at, reverse=True)
        return pending

    async def sum_confirmed_hours(self, profile_id: ProfileId) -> tuple[Decimal, Decimal]:
        given = Decimal("0")
        received = Decimal("0")
        for t in self._transactions.values():
            if t.status != TransactionStatus.CONFIRMED:
                continue
            if t.giver_id == profile_id:
                given += t.hours
            elif t.receiver_id == profile_id:
                received += t.hours
        return given, received

    def all(self) -> list[TimeTransaction]:
        """Every stored transaction (test inspection only)."""
        return list(self._transactions.values())
