"""In-memory profile repositories for testing."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from yard.domain.model import PendingProfile, Profile, ProfileLink
from yard.domain.repository import PendingProfileRepository, ProfileRepository
from yard.domain.value import Email, ProfileId, UserId

from .transaction import InMemoryTransactionRepository


class InMemoryProfileRepository(ProfileRepository):
    """In-memory implementation of ProfileRepository for testing."""

    def __init__(
        self, transactions: Optional[InMemoryTransactionRepository] = None
    ) -> None:
        self._transactions = transactions
        self._profiles: dict[ProfileId, Profile] = {}
        self._links: dict[ProfileId, list[ProfileLink]] = {}

    def snapshot(self) -> tuple:
        return dict(self._profiles), {k: list(v) for k, v in self._links.items()}

    def restore(self, state: tuple) -> None:
        self._profiles, self._links = state

    async def find_by_id(self, profile_id: ProfileId) -> Optional[Profile]:
        return self._profiles.get(profile_id)

    async def find_by_user_id(self, user_id: UserId) -> Optional[Profile]:
        return next((p for p in self._profiles.values() if p.user_id == user_id), None)

    async def find_by_email(self, email: Email) -> Optional[Profile]:
        return next((p for p in self._profiles.values() if p.email == email), None)

    async def find_by_ids(self, profile_ids: list[ProfileId]) -> list[Profile]:
        return [self._profiles[i] for i in profile_ids if i in self._profiles]

    async def save(self, profile: Profile) -> Profile:
        self._profiles[profile.id] = profile
        return profile

    async def add_links(self, profile_id: ProfileId, links: list[ProfileLink]) -> None:
        existing = self._links.setdefault(profile_id, [])
        known = {link.url for link in existing}
        existing.extend(link for link in links if link.url not in known)

    async def refresh_balance(
        self, profile_id: ProfileId, updated_at: datetime
    ) -> Decimal | None:
        profile = self._profiles.get(profile_id)
        if profile is None:
            return None
        balance = Decimal("0")
        if self._transactions is not None:
            given, received = await self._transactions.sum_confirmed_hours(profile_id)
            balance = given - received
        self._profiles[profile_id] = profile.model_copy(
            update={"time_balance_hours": balance, "updated_at": updated_at}
        )
        return balance

    def links_for(self, profile_id: ProfileId) -> list[ProfileLink]:
        """Links stored for a profile (test inspection only)."""
        return list(self._links.get(profile_id, []))


class InMemoryPendingProfileRepository(PendingProfileRepository):
    """In-memory implementation of PendingProfileRepository for testing."""

    def __init__(self) -> None:
        self._pending: dict[str, PendingProfile] = {}

    def snapshot(self) -> dict:
        return dict(self._pending)

    def restore(self, state: dict) -> None:
        self._pending = state

    async def find_by_email(self, email: Email) -> Optional[PendingProfile]:
        return self._pending.get(email.root)

    async def save(self, pending: PendingProfile) -> PendingProfile:
        self._pending[pending.email.root] = pending
        return pending

    async def delete_by_email(self, email: Email) -> bool:
        return self._pending.pop(email.root, None) is not None

    async def delete_expired(self, now: datetime) -> int:
        expired = [k for k, p in self._pending.items() if p.is_expired(now)]
        for key in expired:
            del self._pending[key]
        return len(expired)
