"""In-memory feed sources for testing."""

from datetime import datetime
from uuid import UUID

from yard.domain.model import FeedEntry, FeedParticipant
from yard.domain.repository import AgentTransactionSource, MemberTransactionSource
from yard.domain.value import TransactionKind, TransactionStatus

from .profile import InMemoryProfileRepository
from .transaction import InMemoryTransactionRepository


class InMemoryMemberTransactionSource(MemberTransactionSource):
    """Member feed derived from the in-memory transaction and profile stores."""

    def __init__(
        self,
        transactions: InMemoryTransactionRepository,
        profiles: InMemoryProfileRepository,
    ) -> None:
        self.transactions = transactions
        self.profiles = profiles
        self.fail = False

    async def _entries(self) -> list[FeedEntry]:
        if self.fail:
            raise RuntimeError("member ledger unavailable")
        entries = []
        for t in self.transactions.all():
            if t.status != TransactionStatus.CONFIRMED:
                continue
            giver = await self.profiles.find_by_id(t.giver_id)
            receiver = await self.profiles.find_by_id(t.receiver_id)
            if giver is None or receiver is None:
                continue
            entries.append(
                FeedEntry(
                    id=t.id,
                    kind=TransactionKind.MEMBER,
                    giver=FeedParticipant(id=giver.id, name=giver.name),
                    receiver=FeedParticipant(id=receiver.id, name=receiver.name),
                    hours=t.hours,
                    description=t.description,
                    service_type=t.service_type,
                    created_at=t.created_at,
                )
            )
        return entries

    async def list_confirmed(self, limit: int) -> list[FeedEntry]:
        entries = await self._entries()
        entries.sort(key=lambda e: e.created_at, reverse=True)
        return entries[:limit]

    async def find_reciprocal(
        self, giver_id: UUID, receiver_id: UUID, start: datetime, end: datetime
    ) -> list[FeedEntry]:
        return [
            e
            for e in await self._entries()
            if e.giver.id == giver_id
            and e.receiver.id == receiver_id
            and start <= e.created_at <= end
        ]


class InMemoryAgentTransactionSource(AgentTransactionSource):
    """Agent feed backed by a list of seeded entries."""

    def __init__(self) -> None:
        self.entries: list[FeedEntry] = []
        self.fail = False

    def add(self, entry: FeedEntry) -> FeedEntry:
        self.entries.append(entry)
        return entry

    async def list_confirmed(self, limit: int) -> list[FeedEntry]:
        if self.fail:
            raise RuntimeError("agent ledger unavailable")
        return sorted(self.entries, key=lambda e: e.created_at, reverse=True)[:limit]

    async def find_reciprocal(
        self, giver_id: UUID, receiver_id: UUID, start: datetime, end: datetime
    ) -> list[FeedEntry]:
        if self.fail:
            raise RuntimeError("agent ledger unavailable")
        return [
            e
            for e in self.entries
            if e.giver.id == giver_id
            and e.receiver.id == receiver_id
            and start <= e.created_at <= end
        ]
