"""Invitation and its deferred time log.

An invitation is created when time is logged against someone without a
profile. The PendingTimeLog waits on it and becomes a TimeTransaction once
the invitee signs up and accepts.
"""

from datetime import datetime
from decimal import Decimal

from yard.domain.model.common import DomainModel
from yard.domain.value import (
    Email,
    Hours,
    InvitationId,
    InvitationStatus,
    InvitationToken,
    LogMode,
    PendingTimeLogId,
    PendingTimeLogStatus,
    ProfileId,
    TransactionId,
)


class Invitation(DomainModel):
    """Email invitation to join and confirm a logged exchange.

    Business rules:
    - token is 256 random bits, unique
    - expires 7 days after creation
    - accepted at most once
    """

    id: InvitationId
    inviter_id: ProfileId
    email: Email
    full_name: str | None = None
    token: InvitationToken
    status: InvitationStatus = InvitationStatus.PENDING
    expires_at: datetime
    accepted_at: datetime | None = None
    accepted_by: ProfileId | None = None
    created_at: datetime
    updated_at: datetime

    def effective_status(self, now: datetime) -> InvitationStatus:
        """Status with expiry applied.

        Anything not yet accepted is expired once ``expires_at`` has passed,
        whatever the stored status says.
        """
        if self.status != InvitationStatus.ACCEPTED and self.expires_at <= now:
            return InvitationStatus.EXPIRED
        return self.status


class PendingTimeLog(DomainModel):
    """Time logged against an invitee who has no profile yet."""

    id: PendingTimeLogId
    invitation_id: InvitationId
    logger_profile_id: ProfileId
    invitee_email: Email
    invitee_name: str | None = None
    invitee_contact: str
    hours: Hours
    description: str = ""
    service_type: str = "general"
    mode: LogMode
    status: PendingTimeLogStatus = PendingTimeLogStatus.PENDING
    converted_transaction_id: TransactionId | None = None
    created_at: datetime
    updated_at: datetime


class TimeLogSummary(DomainModel):
    """What the invitee is being asked to confirm."""

    hours: Decimal
    description: str
    mode: LogMode


class InvitationDetails(DomainModel):
    """Public view of a valid invitation, shown on the invite landing page."""

    invitation_id: InvitationId
    email: Email
    full_name: str | None
    inviter_name: str
    expires_at: datetime
    time_log: TimeLogSummary | None


class AcceptInvitationResult(DomainModel):
    """Outcome of accepting an invitation."""

    invitation_id: InvitationId
    transaction_created: bool
    transaction_id: TransactionId | None = None
    already_accepted: bool = False
