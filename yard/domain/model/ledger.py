"""Ledger read and write results."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Literal, Union

from pydantic import Field

from yard.domain.model.common import DomainModel
from yard.domain.value import (
    ContactResolutionStatus,
    Email,
    InvitationId,
    InvitationToken,
    LogMode,
    ProfileId,
    TransactionId,
)


class ContactResolution(DomainModel):
    """Result of resolving a counterpart contact to a profile."""

    status: ContactResolutionStatus
    contact: str
    profile_id: ProfileId | None = None
    name: str | None = None
    email: Email | None = None

    @property
    def found(self) -> bool:
        return self.status == ContactResolutionStatus.FOUND


class DirectLogResult(DomainModel):
    """Counterpart already a member: a pending transaction was recorded."""

    kind: Literal["direct"] = "direct"
    transaction_id: TransactionId
    counterpart_id: ProfileId
    counterpart_name: str
    counterpart_email: Email


class InvitedLogResult(DomainModel):
    """Counterpart unknown: an invitation now holds the time log."""

    kind: Literal["invited"] = "invited"
    invitation_id: InvitationId
    invitation_token: InvitationToken
    invite_url: str
    invitee_email: Email
    invitee_name: str | None = None


LogTimeResult = Annotated[
    Union[DirectLogResult, InvitedLogResult], Field(discriminator="kind")
]


class ProfileBalance(DomainModel):
    """Confirmed hours given and received by a profile."""

    profile_id: ProfileId
    hours_given: Decimal
    hours_received: Decimal

    @property
    def balance(self) -> Decimal:
        return self.hours_given - self.hours_received


class PendingTransactionView(DomainModel):
    """Pending transaction as listed on a participant's dashboard."""

    transaction_id: TransactionId
    other_party_id: ProfileId
    other_party_name: str
    hours: Decimal
    description: str
    service_type: str
    mode: LogMode  # from the viewer's side
    is_logger: bool
    can_confirm: bool
    can_nudge: bool
    nudge_count: int
    last_nudged_at: datetime | None
    next_nudge_at: datetime | None
    created_at: datetime
