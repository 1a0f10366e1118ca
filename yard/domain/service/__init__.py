"""Domain services."""

from .balance_service import BalanceService
from .base import Service
from .contact_resolver import ContactResolver
from .feed_service import FeedService
from .invitation_service import InvitationService
from .ledger_service import LedgerService
from .notification_service import NotificationClient, NotificationService
from .nudge_service import NudgeService
from .profile_service import ProfileService
from .session_service import SessionService
from .transaction_service import TransactionService

__all__ = [
    "BalanceService",
    "ContactResolver",
    "FeedService",
    "InvitationService",
    "LedgerService",
    "NotificationClient",
    "NotificationService",
    "NudgeService",
    "ProfileService",
    "Service",
    "SessionService",
    "TransactionService",
]
