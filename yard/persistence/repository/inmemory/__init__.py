"""In-memory repository implementations for testing."""

from .invitation import InMemoryInvitationRepository
from .profile import InMemoryPendingProfileRepository, InMemoryProfileRepository
from .source import InMemoryAgentTransactionSource, InMemoryMemberTransactionSource
from .transaction import InMemoryTransactionRepository
from .unit_of_work import InMemoryUnitOfWork

__all__ = [
    "InMemoryAgentTransactionSource",
    "InMemoryInvitationRepository",
    "InMemoryMemberTransactionSource",
    "InMemoryPendingProfileRepository",
    "InMemoryProfileRepository",
    "InMemoryTransactionRepository",
    "InMemoryUnitOfWork",
]
