"""Repository interfaces for the time ledger.

Interfaces live in the domain layer; implementations in persistence.
"""

from yard.domain.repository.invitation import InvitationRepository
from yard.domain.repository.profile import PendingProfileRepository, ProfileRepository
from yard.domain.repository.source import (
    AgentTransactionSource,
    MemberTransactionSource,
    TransactionSource,
)
from yard.domain.repository.transaction import TransactionRepository
from yard.domain.repository.unit_of_work import UnitOfWork

__all__ = [
    "ProfileRepository",
    "PendingProfileRepository",
    "TransactionRepository",
    "InvitationRepository",
    "TransactionSource",
    "MemberTransactionSource",
    "AgentTransactionSource",
    "UnitOfWork",
]
