"""Feed aggregator domain service."""

from datetime import timedelta
from decimal import Decimal

import logfire

from yard.config import LedgerSettings
from yard.domain.error import ValidationError
from yard.domain.model.feed import FeedEntry, GroupedTransaction
from yard.domain.repository import TransactionSource
from yard.domain.value import TransactionKind

from .base import Service


class FeedService(Service):
    """Builds the public feed of confirmed exchanges.

    Entries from every source are merged newest first, collapsed into
    groups (same giver, same description, same hour) and singletons are
    flagged as balanced when a reciprocal exchange of similar size exists.
    The feed is read-only: nothing here writes.
    """

    def __init__(
        self,
        sources: dict[TransactionKind, TransactionSource],
        ledger_settings: LedgerSettings,
    ) -> None:
        """Initialize feed service.

        Args:
            sources: Map of transaction kind to its source
            ledger_settings: Grouping and balance parameters
        """
        self.sources = sources
        self.settings = ledger_settings
        self.bucket_seconds = ledger_settings.feed_bucket_minutes * 60
        self.balance_window = timedelta(hours=ledger_settings.balance_window_hours)
        self.balance_tolerance = Decimal(str(ledger_settings.balance_tolerance_hours))

    async def load_feed(self, limit: int | None = None) -> list[GroupedTransaction]:
        """Load grouped, annotated feed items.

        Args:
            limit: Number of transactions to consider before grouping

        Returns:
            Feed items, newest first

        Raises:
            ValidationError: If limit is not positive
        """
        if limit is None:
            limit = self.settings.feed_default_limit
        if limit < 1:
            raise ValidationError("Feed limit must be at least 1")
        limit = min(limit, self.settings.feed_max_limit)

        with logfire.span("feed_service.load_feed", limit=limit):
            entries = await self._collect(limit)
            groups = self.group(entries)

            for index, group in enumerate(groups):
                if group.is_group:
                    continue
                if await self._is_balanced(group):
                    groups[index] = group.model_copy(update={"is_balanced": True})

            logfire.info(
                "Feed loaded",
                transactions=len(entries),
                items=len(groups),
                balanced=sum(1 for g in groups if g.is_balanced),
            )
            return groups

    async def _collect(self, limit: int) -> list[FeedEntry]:
        entries: list[FeedEntry] = []
        for kind, source in self.sources.items():
            try:
                entries.extend(await source.list_confirmed(limit))
            except Exception as e:
                logfire.warn(
                    "Feed source failed, continuing without it",
                    source=kind.value,
                    error=str(e),
                )
        entries.sort(key=lambda e: e.created_at, reverse=True)
        return entries[:limit]

    def _bucket(self, entry: FeedEntry) -> int:
        return int(entry.created_at.timestamp() // self.bucket_seconds)

    def group(self, entries: list[FeedEntry]) -> list[GroupedTransaction]:
        """Collapse entries sharing giver, description and time bucket.

        ``entries`` must be newest first; each group takes its id, hours and
        timestamp from its newest entry.
        """
        groups: dict[tuple, GroupedTransaction] = {}
        for entry in entries:
            key = (entry.kind, entry.giver.id, entry.description, self._bucket(entry))
            existing = groups.get(key)
            if existing is None:
                groups[key] = GroupedTransaction(
                    id=entry.id,
                    transaction_ids=[entry.id],
                    giver=entry.giver,
                    receivers=[entry.receiver],
                    hours=entry.hours,
                    description=entry.description,
                    service_type=entry.service_type,
                    created_at=entry.created_at,
                    is_group=False,
                    is_agent_transaction=entry.kind == TransactionKind.AGENT,
                    kind=entry.kind,
                )
            else:
                groups[key] = existing.model_copy(
                    update={
                        "transaction_ids": [*existing.transaction_ids, entry.id],
                        "receivers": [*existing.receivers, entry.receiver],
                        "is_group": True,
                    }
                )

        return sorted(groups.values(), key=lambda g: g.created_at, reverse=True)

    async def _is_balanced(self, group: GroupedTransaction) -> bool:
        source = self.sources.get(group.kind)
        if source is None:
            return False

        receiver = group.receivers[0]
        try:
            reciprocal = await source.find_reciprocal(
                giver_id=receiver.id,
                receiver_id=group.giver.id,
                start=group.created_at - self.balance_window,
                end=group.created_at + self.balance_window,
            )
        except Exception as e:
            logfire.warn(
                "Balance lookup failed", transaction_id=str(group.id), error=str(e)
            )
            return False

        return any(
            abs(other.hours - group.hours) < self.balance_tolerance for other in reciprocal
        )
