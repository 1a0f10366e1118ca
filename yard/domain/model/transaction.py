"""TimeTransaction entity.

A claim that one party gave time to another. The logger's counterpart
confirms or disputes it; after that it never changes again apart from
reminder bookkeeping.
"""

from datetime import datetime

from pydantic import Field, model_validator

from yard.domain.model.common import DomainModel
from yard.domain.value import Hours, LogMode, ProfileId, TransactionId, TransactionStatus


class TimeTransaction(DomainModel):
    """Time transaction between two profiles.

    Business rules:
    - giver and receiver are different profiles
    - hours are positive, at most 999.99, in hundredths
    - the logger is one of the two parties and cannot confirm or dispute
    - only ``pending`` transactions change status
    """

    id: TransactionId
    giver_id: ProfileId
    receiver_id: ProfileId
    hours: Hours
    description: str = ""
    service_type: str = "general"
    status: TransactionStatus = TransactionStatus.PENDING
    logged_by: ProfileId
    confirmed_at: datetime | None = None
    confirmed_by: ProfileId | None = None
    disputed_at: datetime | None = None
    dispute_reason: str | None = None
    cancelled_at: datetime | None = None
    last_nudged_at: datetime | None = None
    nudge_count: int = Field(default=0, ge=0)
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="after")
    def check_parties(self) -> "TimeTransaction":
        if self.giver_id == self.receiver_id:
            raise ValueError("Giver and receiver must be different profiles")
        if self.logged_by not in (self.giver_id, self.receiver_id):
            raise ValueError("Transaction must be logged by one of its parties")
        return self

    @property
    def is_pending(self) -> bool:
        return self.status == TransactionStatus.PENDING

    def is_participant(self, profile_id: ProfileId) -> bool:
        return profile_id in (self.giver_id, self.receiver_id)

    def counterpart_of(self, profile_id: ProfileId) -> ProfileId:
        """The other party of the exchange."""
        return self.receiver_id if profile_id == self.giver_id else self.giver_id

    def mode_for(self, profile_id: ProfileId) -> LogMode:
        """How the exchange reads from ``profile_id``'s side."""
        return LogMode.HELPED if profile_id == self.giver_id else LogMode.WAS_HELPED
