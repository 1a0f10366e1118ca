"""PostgreSQL implementation of the invitation repository."""

from datetime import datetime

from sqlalchemy import and_, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from yard.domain.model import Invitation, PendingTimeLog
from yard.domain.repository import InvitationRepository
from yard.domain.value import (
    InvitationId,
    InvitationStatus,
    InvitationToken,
    PendingTimeLogId,
    PendingTimeLogStatus,
    ProfileId,
    TransactionId,
)
from yard.persistence.error import storage_errors
from yard.persistence.mappers import (
    invitation_to_dict,
    row_to_invitation,
    row_to_time_log,
    time_log_to_dict,
)
from yard.persistence.tables import invitations_table, pending_time_logs_table

inv = invitations_table
logs = pending_time_logs_table


class PostgresInvitationRepository(InvitationRepository):
    """PostgreSQL implementation of InvitationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, invitation_id: InvitationId) -> Invitation | None:
        stmt = select(inv).where(inv.c.id == invitation_id)
        with storage_errors("invitation.find_by_id"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_by_token(self, token: InvitationToken) -> Invitation | None:
        stmt = select(inv).where(inv.c.token == token.root)
        with storage_errors("invitation.find_by_token"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_invitation(dict(row)) if row else None

    async def find_time_log(self, invitation_id: InvitationId) -> PendingTimeLog | None:
        stmt = select(logs).where(logs.c.invitation_id == invitation_id)
        with storage_errors("invitation.find_time_log"):
            result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_time_log(dict(row)) if row else None

    async def create_with_time_log(
        self, invitation: Invitation, time_log: PendingTimeLog
    ) -> tuple[Invitation, PendingTimeLog]:
        """Insert both rows inside a savepoint; a failure keeps neither."""
        with storage_errors("invitation.create_with_time_log"):
            async with self.session.begin_nested():
                await self.session.execute(
                    insert(inv).values(**invitation_to_dict(invitation))
                )
                await self.session.execute(
                    insert(logs).values(**time_log_to_dict(time_log))
                )
        return invitation, time_log

    async def mark_accepted(
        self, invitation_id: InvitationId, accepted_by: ProfileId, now: datetime
    ) -> bool:
        stmt = (
            update(inv)
            .where(
                and_(
                    inv.c.id == invitation_id,
                    inv.c.status == InvitationStatus.PENDING.value,
                    inv.c.expires_at > now,
                )
            )
            .values(
                status=InvitationStatus.ACCEPTED.value,
                accepted_at=now,
                accepted_by=accepted_by,
                updated_at=now,
            )
        )
        with storage_errors("invitation.mark_accepted"):
            result = await self.session.execute(stmt)
            await self.session.flush()
        return result.rowcount == 1

    async def mark_time_log_converted(
        self, time_log_id: PendingTimeLogId, transaction_id: TransactionId, now: datetime
    ) -> bool:
        stmt = (
            update(logs)
            .where(
                and_(
                    logs.c.id == time_log_id,
                    logs.c.status == PendingTimeLogStatus.PENDING.value,
                )
            )
            .values(
                status=PendingTimeLogStatus.CONVERTED.value,
                converted_transaction_id=transaction_id,
                updated_at=now,
            )
        )
        with storage_errors("invitation.mark_time_log_converted"):
            result = await self.session.execute(stmt)
            await self.session.flush()
        return result.rowcount == 1

    async def cancel(self, invitation_id: InvitationId, now: datetime) -> bool:
        with storage_errors("invitation.cancel"):
            result = await self.session.execute(
                update(inv)
                .where(
                    and_(
                        inv.c.id == invitation_id,
                        inv.c.status == InvitationStatus.PENDING.value,
                    )
                )
                .values(status=InvitationStatus.CANCELLED.value, updated_at=now)
            )
            if result.rowcount != 1:
                return False
            await self.session.execute(
                update(logs)
                .where(
                    and_(
                        logs.c.invitation_id == invitation_id,
                        logs.c.status == PendingTimeLogStatus.PENDING.value,
                    )
                )
                .values(status=PendingTimeLogStatus.CANCELLED.value, updated_at=now)
            )
            await self.session.flush()
        return True

    async def expire_stale(self, now: datetime) -> int:
        with storage_errors("invitation.expire_stale"):
            result = await self.session.execute(
                update(inv)
                .where(
                    and_(
                        inv.c.status == InvitationStatus.PENDING.value,
                        inv.c.expires_at <= now,
                    )
                )
                .values(status=InvitationStatus.EXPIRED.value, updated_at=now)
                .returning(inv.c.id)
            )
            expired_ids = [row[0] for row in result.all()]
            if expired_ids:
                await self.session.execute(
                    update(logs)
                    .where(
                        and_(
                            logs.c.invitation_id.in_(expired_ids),
                            logs.c.status == PendingTimeLogStatus.PENDING.value,
                        )
                    )
                    .values(status=PendingTimeLogStatus.EXPIRED.value, updated_at=now)
                )
            await self.session.flush()
        return len(expired_ids)
