"""Confirmed-transaction sources for the feed."""

from abc import ABC, abstractmethod
from datetime import datetime
from uuid import UUID

from yard.domain.model.feed import FeedEntry
from yard.domain.value import TransactionKind


class TransactionSource(ABC):
    """Read-only view over one ledger of confirmed transactions.

    Members and agents keep separate ledgers; the feed queries each one
    through this interface and merges the results.
    """

    kind: TransactionKind

    @abstractmethod
    async def list_confirmed(self, limit: int) -> list[FeedEntry]:
        """Most recent confirmed transactions, newest first.

        Args:
            limit: Maximum number of entries

        Returns:
            Feed entries
        """
        pass

    @abstractmethod
    async def find_reciprocal(
        self,
        giver_id: UUID,
        receiver_id: UUID,
        start: datetime,
        end: datetime,
    ) -> list[FeedEntry]:
        """Confirmed transactions from ``giver_id`` to ``receiver_id`` in a window.

        Args:
            giver_id: Giver to match
            receiver_id: Receiver to match
            start: Window start (inclusive)
            end: Window end (inclusive)

        Returns:
            Matching feed entries
        """
        pass


class MemberTransactionSource(TransactionSource):
    """Confirmed transactions between human members."""

    kind = TransactionKind.MEMBER


class AgentTransactionSource(TransactionSource):
    """Confirmed transactions between agents."""

    kind = TransactionKind.AGENT
