"""Domain value objects for the time ledger.

Value objects are immutable and defined by their values, not identity.
"""

import re
from decimal import Decimal
from enum import Enum
from typing import Annotated, TypeVar

from pydantic import EmailStr, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from yard.domain.value.common import RootValueObject

TOKEN_PATTERN = re.compile(r"^[0-9a-f]{64}$")

P = TypeVar("P")

_email_adapter = TypeAdapter(EmailStr)

# Matches the NUMERIC(5, 2) hours columns
MAX_HOURS = Decimal("999.99")
HOURS_STEP = Decimal("0.01")

Hours = Annotated[Decimal, Field(gt=0, le=MAX_HOURS, max_digits=5, decimal_places=2)]


class LogMode(str, Enum):
    """Direction of a logged exchange, from the logger's point of view."""

    HELPED = "helped"  # logger gave time
    WAS_HELPED = "wasHelped"  # logger received time

    def assign(self, logger: P, counterpart: P) -> tuple[P, P]:
        """Return ``(giver, receiver)`` for a logger and their counterpart."""
        if self is LogMode.HELPED:
            return logger, counterpart
        return counterpart, logger


class TransactionStatus(str, Enum):
    """Status of a time transaction.

    ``pending`` is the only non-terminal status.
    """

    PENDING = "pending"
    CONFIRMED = "confirmed"
    DISPUTED = "disputed"
    CANCELLED = "cancelled"


class InvitationStatus(str, Enum):
    """Stored status of an invitation."""

    PENDING = "pending"
    ACCEPTED = "accepted"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


class PendingTimeLogStatus(str, Enum):
    """Status of a time log waiting on an invitation."""

    PENDING = "pending"
    CONVERTED = "converted"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


class TransactionKind(str, Enum):
    """Which ledger a feed entry comes from."""

    MEMBER = "member"
    AGENT = "agent"


class NotificationKind(str, Enum):
    """Templates understood by the notification function."""

    TIME_LOGGED = "time_logged"
    INVITATION = "invitation"
    REMINDER = "reminder"


class ContactResolutionStatus(str, Enum):
    """Outcome of looking up a counterpart by contact."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    LOOKUP_FAILED = "lookup_failed"


def normalize_email(value: str) -> str:
    """Trim and lower-case an email-like contact."""
    return value.strip().lower()


def is_valid_email(value: str) -> bool:
    """Check an address the way the ``Email`` value object will."""
    try:
        _email_adapter.validate_python(value)
    except PydanticValidationError:
        return False
    return True


class Email(RootValueObject[EmailStr]):
    """Normalised email address, validated by email-validator via pydantic."""

    @field_validator("root", mode="before")
    @classmethod
    def normalize(cls, v: object) -> object:
        return normalize_email(v) if isinstance(v, str) else v

    @field_validator("root")
    @classmethod
    def lower_domain_and_local(cls, v: str) -> str:
        return v.lower()


class InvitationToken(RootValueObject[str]):
    """Unguessable invitation token: 32 random bytes as lowercase hex."""

    @field_validator("root")
    @classmethod
    def validate_token_format(cls, v: str) -> str:
        if not TOKEN_PATTERN.match(v):
            raise ValueError("Invitation token must be 64 lowercase hex characters")
        return v

    def redacted(self) -> str:
        return self.root[:8] + "..."
