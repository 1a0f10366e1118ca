"""Domain value objects for the time ledger."""

from yard.domain.value.identifiers import (
    InvitationId,
    PendingProfileId,
    PendingTimeLogId,
    ProfileId,
    TransactionId,
    UserId,
)
from yard.domain.value.types import (
    ContactResolutionStatus,
    Email,
    InvitationStatus,
    InvitationToken,
    LogMode,
    NotificationKind,
    PendingTimeLogStatus,
    TransactionKind,
    TransactionStatus,
    HOURS_STEP,
    MAX_HOURS,
    Hours,
    is_valid_email,
    normalize_email,
)

__all__ = [
    # Identifiers
    "ProfileId",
    "UserId",
    "TransactionId",
    "InvitationId",
    "PendingTimeLogId",
    "PendingProfileId",
    # Types
    "LogMode",
    "TransactionStatus",
    "InvitationStatus",
    "PendingTimeLogStatus",
    "TransactionKind",
    "NotificationKind",
    "ContactResolutionStatus",
    "Email",
    "InvitationToken",
    "Hours",
    "HOURS_STEP",
    "MAX_HOURS",
    "is_valid_email",
    "normalize_email",
]
