"""PostgreSQL implementations of the profile repositories."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import and_, case, delete, func, insert, or_, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from yard.domain.model import PendingProfile, Profile, ProfileLink
from yard.domain.repository import PendingProfileRepository, ProfileRepository
from yard.domain.value import Email, ProfileId, TransactionStatus, UserId
from yard.persistence.error import storage_errors
from yard.persistence.mappers import (
    pending_profile_to_dict,
    profile_to_dict,
    row_to_pending_profile,
    row_to_profile,
)
from yard.persistence.tables import (
    pending_profiles_table,
    profile_urls_table,
    profiles_table,
    time_transactions_table,
)


class PostgresProfileRepository(ProfileRepository):
    """PostgreSQL implementation of ProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, profile_id: ProfileId) -> Profile | None:
        stmt = select(profiles_table).where(profiles_table.c.id == profile_id)
        with storage_errors("profile.find_by_id"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_profile(dict(row)) if row else None

    async def find_by_user_id(self, user_id: UserId) -> Profile | None:
        stmt = select(profiles_table).where(profiles_table.c.user_id == user_id)
        with storage_errors("profile.find_by_user_id"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_profile(dict(row)) if row else None

    async def find_by_email(self, email: Email) -> Profile | None:
        stmt = select(profiles_table).where(profiles_table.c.email == email.root)
        with storage_errors("profile.find_by_email"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_profile(dict(row)) if row else None

    async def find_by_ids(self, profile_ids: list[ProfileId]) -> list[Profile]:
        if not profile_ids:
            return []
        stmt = select(profiles_table).where(profiles_table.c.id.in_(profile_ids))
        with storage_errors("profile.find_by_ids"):
            result = await self.session.execute(stmt)
        return [row_to_profile(dict(row)) for row in result.mappings().all()]

    async def save(self, profile: Profile) -> Profile:
        """Insert or update a profile row keyed by id."""
        values = profile_to_dict(profile)
        stmt = pg_insert(profiles_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[profiles_table.c.id],
            set_={k: v for k, v in values.items() if k not in ("id", "created_at")},
        )
        with storage_errors("profile.save"):
            await self.session.execute(stmt)
            await self.session.flush()
        return profile

    async def add_links(self, profile_id: ProfileId, links: list[ProfileLink]) -> None:
        if not links:
            return
        with storage_errors("profile.add_links"):
            existing = await self.session.execute(
                select(profile_urls_table.c.url).where(
                    profile_urls_table.c.profile_id == profile_id
                )
            )
            known = {row[0] for row in existing.all()}
            fresh = [link for link in links if link.url not in known]
            if fresh:
                await self.session.execute(
                    insert(profile_urls_table),
                    [
                        {"profile_id": profile_id, "url": link.url, "url_type": link.url_type}
                        for link in fresh
                    ],
                )
            await self.session.flush()

    async def refresh_balance(
        self, profile_id: ProfileId, updated_at: datetime
    ) -> Decimal | None:
        t = time_transactions_table
        signed_hours = case((t.c.giver_id == profile_id, t.c.hours), else_=-t.c.hours)
        confirmed_sum = (
            select(func.coalesce(func.sum(signed_hours), 0))
            .where(
                and_(
                    t.c.status == TransactionStatus.CONFIRMED.value,
                    or_(t.c.giver_id == profile_id, t.c.receiver_id == profile_id),
                )
            )
            .scalar_subquery()
        )
        # Wait out concurrent writers so the UPDATE snapshot sees their confirmations
        lock = (
            select(profiles_table.c.id)
            .where(profiles_table.c.id == profile_id)
            .with_for_update()
        )
        stmt = (
            update(profiles_table)
            .where(profiles_table.c.id == profile_id)
            .values(time_balance_hours=confirmed_sum, updated_at=updated_at)
            .returning(profiles_table.c.time_balance_hours)
        )
        with storage_errors("profile.refresh_balance"):
            await self.session.execute(lock)
            result = await self.session.execute(stmt)
            balance = result.scalar_one_or_none()
        return Decimal(balance) if balance is not None else None


class PostgresPendingProfileRepository(PendingProfileRepository):
    """PostgreSQL implementation of PendingProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_email(self, email: Email) -> PendingProfile | None:
        stmt = select(pending_profiles_table).where(
            pending_profiles_table.c.email == email.root
        )
        with storage_errors("pending_profile.find_by_email"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_pending_profile(dict(row)) if row else None

    async def save(self, pending: PendingProfile) -> PendingProfile:
        """Upsert by email so a re-submitted sign-up replaces the old one."""
        values = pending_profile_to_dict(pending)
        stmt = pg_insert(pending_profiles_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[pending_profiles_table.c.email],
            set_={k: v for k, v in values.items() if k != "email"},
        )
        with storage_errors("pending_profile.save"):
            await self.session.execute(stmt)
            await self.session.flush()
        return pending

    async def delete_by_email(self, email: Email) -> bool:
        stmt = delete(pending_profiles_table).where(
            pending_profiles_table.c.email == email.root
        )
        with storage_errors("pending_profile.delete_by_email"):
            result = await self.session.execute(stmt)
            await self.session.flush()
        return result.rowcount > 0

    async def delete_expired(self, now: datetime) -> int:
        stmt = delete(pending_profiles_table).where(
            pending_profiles_table.c.expires_at <= now
        )
        with storage_errors("pending_profile.delete_expired"):
            result = await self.session.execute(stmt)
            await self.session.flush()
        return result.rowcount
