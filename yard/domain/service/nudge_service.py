"""Nudge throttle domain service."""

from datetime import datetime, timedelta

import logfire

from yard.config import LedgerSettings
from yard.domain.error import (
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    RateLimitedError,
)
from yard.domain.model.transaction import TimeTransaction
from yard.domain.repository import TransactionRepository
from yard.domain.value import ProfileId, TransactionId
from yard.util.clock import Clock

from .base import Service


class NudgeService(Service):
    """Lets a logger remind their counterpart, at most once per interval."""

    def __init__(
        self,
        transaction_repository: TransactionRepository,
        clock: Clock,
        ledger_settings: LedgerSettings,
    ) -> None:
        self.transaction_repository = transaction_repository
        self.clock = clock
        self.interval = timedelta(minutes=ledger_settings.nudge_interval_minutes)

    def next_nudge_at(self, transaction: TimeTransaction) -> datetime | None:
        """Earliest time of the next reminder, None if one can go now."""
        if transaction.last_nudged_at is None:
            return None
        available = transaction.last_nudged_at + self.interval
        return available if available > self.clock.now() else None

    def can_nudge(self, transaction: TimeTransaction, actor_id: ProfileId) -> bool:
        return (
            transaction.is_pending
            and transaction.logged_by == actor_id
            and self.next_nudge_at(transaction) is None
        )

    async def nudge(
        self, transaction_id: TransactionId, actor_id: ProfileId
    ) -> TimeTransaction:
        """Record a reminder on a pending transaction.

        Args:
            transaction_id: Transaction to nudge
            actor_id: Profile asking; must be the logger

        Returns:
            The transaction with updated reminder bookkeeping

        Raises:
            NotFoundError: Unknown transaction
            ForbiddenError: Actor did not log the transaction
            InvalidStateError: Transaction is no longer pending
            RateLimitedError: A reminder was sent less than an interval ago
        """
        with logfire.span(
            "nudge_service.nudge",
            transaction_id=str(transaction_id),
            actor_id=str(actor_id),
        ):
            transaction = await self.transaction_repository.find_by_id(transaction_id)
            if transaction is None:
                raise NotFoundError("Transaction", str(transaction_id))

            if transaction.logged_by != actor_id:
                logfire.warn(
                    "Non-logger tried to nudge",
                    transaction_id=str(transaction_id),
                    actor_id=str(actor_id),
                )
                raise ForbiddenError(
                    "nudge", "transaction", str(transaction_id), "only the logger can send reminders"
                )

            if not transaction.is_pending:
                raise InvalidStateError(
                    "Transaction", str(transaction_id), transaction.status.value
                )

            retry_after = self.next_nudge_at(transaction)
            if retry_after is not None:
                logfire.info(
                    "Nudge throttled",
                    transaction_id=str(transaction_id),
                    retry_after=retry_after.isoformat(),
                )
                raise RateLimitedError("send a reminder", retry_after)

            now = self.clock.now()
            recorded = await self.transaction_repository.record_nudge(
                transaction_id, transaction.last_nudged_at, now
            )
            if not recorded:
                # Someone else nudged (or the status changed) since we read it
                current = await self.transaction_repository.find_by_id(transaction_id)
                if current is not None and not current.is_pending:
                    raise InvalidStateError(
                        "Transaction", str(transaction_id), current.status.value
                    )
                raise RateLimitedError("send a reminder", now + self.interval)

            nudged = transaction.model_copy(
                update={
                    "last_nudged_at": now,
                    "nudge_count": transaction.nudge_count + 1,
                    "updated_at": now,
                }
            )
            logfire.info(
                "Transaction nudged",
                transaction_id=str(transaction_id),
                nudge_count=nudged.nudge_count,
            )
            return nudged
