"""Domain model entities for the time ledger."""

from yard.domain.model.feed import FeedEntry, FeedParticipant, GroupedTransaction
from yard.domain.model.invitation import (
    AcceptInvitationResult,
    Invitation,
    InvitationDetails,
    PendingTimeLog,
    TimeLogSummary,
)
from yard.domain.model.ledger import (
    ContactResolution,
    DirectLogResult,
    InvitedLogResult,
    LogTimeResult,
    PendingTransactionView,
    ProfileBalance,
)
from yard.domain.model.notification import Notification, NotificationOutcome
from yard.domain.model.profile import (
    PendingProfile,
    Profile,
    ProfileLink,
    TimeLoggingData,
)
from yard.domain.model.transaction import TimeTransaction

__all__ = [
    "Profile",
    "PendingProfile",
    "ProfileLink",
    "TimeLoggingData",
    "TimeTransaction",
    "Invitation",
    "PendingTimeLog",
    "InvitationDetails",
    "TimeLogSummary",
    "AcceptInvitationResult",
    "ContactResolution",
    "DirectLogResult",
    "InvitedLogResult",
    "LogTimeResult",
    "ProfileBalance",
    "PendingTransactionView",
    "FeedEntry",
    "FeedParticipant",
    "GroupedTransaction",
    "Notification",
    "NotificationOutcome",
]
