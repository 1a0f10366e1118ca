"""Feed use cases."""

from yard.application.usecase.feed.load_feed import (
    FeedItem,
    FeedParticipantItem,
    LoadFeedRequest,
    LoadFeedResponse,
    LoadFeedUseCase,
)

__all__ = [
    "FeedItem",
    "FeedParticipantItem",
    "LoadFeedRequest",
    "LoadFeedResponse",
    "LoadFeedUseCase",
]
