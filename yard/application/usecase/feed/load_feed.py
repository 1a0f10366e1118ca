"""Load feed use case."""

from datetime import datetime

from pydantic import BaseModel

from yard.domain.service import FeedService


class LoadFeedRequest(BaseModel):
    """Load feed request."""

    limit: int | None = None


class FeedParticipantItem(BaseModel):
    """Party shown on a feed item."""

    id: str
    name: str


class FeedItem(BaseModel):
    """One feed item (single exchange or group)."""

    id: str
    transaction_ids: list[str]
    giver: FeedParticipantItem
    receivers: list[FeedParticipantItem]
    hours: float
    description: str
    service_type: str
    created_at: datetime
    is_group: bool
    is_balanced: bool
    is_agent_transaction: bool


class LoadFeedResponse(BaseModel):
    """Load feed response."""

    items: list[FeedItem]


class LoadFeedUseCase:
    """Use case for the public feed of confirmed exchanges."""

    def __init__(self, feed_service: FeedService) -> None:
        """Initialize load feed use case.

        Args:
            feed_service: Feed aggregator
        """
        self.feed_service = feed_service

    async def execute(self, request: LoadFeedRequest) -> LoadFeedResponse:
        groups = await self.feed_service.load_feed(request.limit)
        return LoadFeedResponse(
            items=[
                FeedItem(
                    id=str(g.id),
                    transaction_ids=[str(t) for t in g.transaction_ids],
                    giver=FeedParticipantItem(id=str(g.giver.id), name=g.giver.name),
                    receivers=[
                        FeedParticipantItem(id=str(r.id), name=r.name) for r in g.receivers
                    ],
                    hours=float(g.hours),
                    description=g.description,
                    service_type=g.service_type,
                    created_at=g.created_at,
                    is_group=g.is_group,
                    is_balanced=g.is_balanced,
                    is_agent_transaction=g.is_agent_transaction,
                )
                for g in groups
            ]
        )
