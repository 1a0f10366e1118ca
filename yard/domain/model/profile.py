"""Profile aggregate and sign-up staging records.

A Profile is the ledger's view of a member. It is created once the auth
provider confirms the account, optionally from a PendingProfile staged at
sign-up submission.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from yard.domain.model.common import DomainModel
from yard.domain.value import Email, Hours, LogMode, PendingProfileId, ProfileId, UserId
from yard.domain.value.common import ValueObject


class ProfileLink(ValueObject):
    """External link shown on a profile (site, scholar page, repository)."""

    url: str
    url_type: str = "website"


class TimeLoggingData(ValueObject):
    """Time exchange captured during sign-up, logged once the account exists."""

    mode: LogMode
    hours: Hours
    name: str
    contact: str
    description: str = ""


class Profile(DomainModel):
    """Member profile.

    ``time_balance_hours`` is a cached projection of confirmed hours given
    minus hours received; it is recomputed, never incremented.
    """

    id: ProfileId
    user_id: UserId
    email: Email
    full_name: str | None = None
    display_name: str | None = None
    bio: str | None = None
    location: str | None = None
    time_balance_hours: Decimal = Decimal("0")
    created_at: datetime
    updated_at: datetime

    @property
    def name(self) -> str:
        """Best available human-readable name."""
        return self.full_name or self.display_name or str(self.email)


class PendingProfile(DomainModel):
    """Sign-up data held until the account is confirmed."""

    id: PendingProfileId
    email: Email
    full_name: str | None = None
    display_name: str | None = None
    bio: str | None = None
    location: str | None = None
    urls: list[ProfileLink] = Field(default_factory=list)
    time_logging_data: TimeLoggingData | None = None
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now
