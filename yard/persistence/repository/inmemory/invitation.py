"""In-memory invitation repository for testing."""

from datetime import datetime
from typing import Optional

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


class InMemoryInvitationRepository(InvitationRepository):
    """In-memory implementation of InvitationRepository for testing."""

    def __init__(self) -> None:
        self._invitations: dict[InvitationId, Invitation] = {}
        self._logs: dict[PendingTimeLogId, PendingTimeLog] = {}

    def snapshot(self) -> tuple:
        return dict(self._invitations), dict(self._logs)

    def restore(self, state: tuple) -> None:
        self._invitations, self._logs = state

    async def find_by_id(self, invitation_id: InvitationId) -> Optional[Invitation]:
        return self._invitations.get(invitation_id)

    async def find_by_token(self, token: InvitationToken) -> Optional[Invitation]:
        return next((i for i in self._invitations.values() if i.token == token), None)

    async def find_time_log(self, invitation_id: InvitationId) -> Optional[PendingTimeLog]:
        return next(
            (log for log in self._logs.values() if log.invitation_id == invitation_id),
            None,
        )

    async def create_with_time_log(
        self, invitation: Invitation, time_log: PendingTimeLog
    ) -> tuple[Invitation, PendingTimeLog]:
        self._invitations[invitation.id] = invitation
        self._logs[time_log.id] = time_log
        return invitation, time_log

    async def mark_accepted(
        self, invitation_id: InvitationId, accepted_by: ProfileId, now: datetime
    ) -> bool:
        invitation = self._invitations.get(invitation_id)
        if (
            invitation is None
            or invitation.status != InvitationStatus.PENDING
            or invitation.expires_at <= now
        ):
            return False
        self._invitations[invitation_id] = invitation.model_copy(
            update={
                "status": InvitationStatus.ACCEPTED,
                "accepted_at": now,
                "accepted_by": accepted_by,
                "updated_at": now,
            }
        )
        return True

    async def mark_time_log_converted(
        self, time_log_id: PendingTimeLogId, transaction_id: TransactionId, now: datetime
    ) -> bool:
        log = self._logs.get(time_log_id)
        if log is None or log.status != PendingTimeLogStatus.PENDING:
            return False
        self._logs[time_log_id] = log.model_copy(
            update={
                "status": PendingTimeLogStatus.CONVERTED,
                "converted_transaction_id": transaction_id,
                "updated_at": now,
            }
        )
        return True

    def _set_log_status(
        self, invitation_id: InvitationId, status: PendingTimeLogStatus, now: datetime
    ) -> None:
        for log_id, log in self._logs.items():
            if log.invitation_id == invitation_id and log.status == PendingTimeLogStatus.PENDING:
                self._logs[log_id] = log.model_copy(update={"status": status, "updated_at": now})

    async def cancel(self, invitation_id: InvitationId, now: datetime) -> bool:
        invitation = self._invitations.get(invitation_id)
        if invitation is None or invitation.status != InvitationStatus.PENDING:
            return False
        self._invitations[invitation_id] = invitation.model_copy(
            update={"status": InvitationStatus.CANCELLED, "updated_at": now}
        )
        self._set_log_status(invitation_id, PendingTimeLogStatus.CANCELLED, now)
        return True

    async def expire_stale(self, now: datetime) -> int:
        stale = [
            i
            for i in self._invitations.values()
            if i.status == InvitationStatus.PENDING and i.expires_at <= now
        ]
        for invitation in stale:
            self._invitations[invitation.id] = invitation.model_copy(
                update={"status": InvitationStatus.EXPIRED, "updated_at": now}
            )
            self._set_log_status(invitation.id, PendingTimeLogStatus.EXPIRED, now)
        return len(stale)
