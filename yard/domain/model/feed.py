"""Feed read models.

Nothing here is persisted. FeedEntry is the source-agnostic shape both
transaction sources return; GroupedTransaction is what the feed renders.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import Field

from yard.domain.model.common import DomainModel
from yard.domain.value import TransactionKind


class FeedParticipant(DomainModel):
    """Party to a feed entry."""

    id: UUID
    name: str


class FeedEntry(DomainModel):
    """A confirmed transaction from either source."""

    id: UUID
    kind: TransactionKind
    giver: FeedParticipant
    receiver: FeedParticipant
    hours: Decimal
    description: str = ""
    service_type: str = "general"
    created_at: datetime


class GroupedTransaction(DomainModel):
    """One feed item: a single transaction or several sharing giver,
    description and hour bucket."""

    id: UUID
    transaction_ids: list[UUID]
    giver: FeedParticipant
    receivers: list[FeedParticipant]
    hours: Decimal
    description: str
    service_type: str
    created_at: datetime
    is_group: bool = False
    is_balanced: bool = False
    is_agent_transaction: bool = False
    kind: TransactionKind = Field(default=TransactionKind.MEMBER, exclude=True)
