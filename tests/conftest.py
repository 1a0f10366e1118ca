"""Test configuration and fixtures."""

from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

from yard.domain.model import FeedEntry, FeedParticipant, Profile
from yard.domain.repository import ProfileRepository
from yard.domain.value import Email, ProfileId, TransactionKind, UserId

DEFAULT_NOW = datetime(2025, 1, 6, 9, 0, tzinfo=timezone.utc)


def make_profile(
    email: str,
    full_name: str | None = None,
    display_name: str | None = None,
    now: datetime = DEFAULT_NOW,
) -> Profile:
    """Build a Profile with fresh ids."""
    return Profile(
        id=ProfileId(uuid4()),
        user_id=UserId(uuid4()),
        email=Email(email),
        full_name=full_name,
        display_name=display_name,
        created_at=now,
        updated_at=now,
    )


async def add_profile(
    repo: ProfileRepository,
    email: str,
    full_name: str | None = None,
) -> Profile:
    """Create and store a profile."""
    return await repo.save(make_profile(email, full_name=full_name))


def make_feed_entry(
    giver: FeedParticipant,
    receiver: FeedParticipant,
    hours: str,
    created_at: datetime,
    description: str = "",
    kind: TransactionKind = TransactionKind.MEMBER,
) -> FeedEntry:
    """Build a confirmed feed entry."""
    return FeedEntry(
        id=uuid4(),
        kind=kind,
        giver=giver,
        receiver=receiver,
        hours=Decimal(hours),
        description=description,
        created_at=created_at,
    )
