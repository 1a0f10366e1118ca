"""PostgreSQL repository implementations."""

from yard.persistence.repository.invitation import PostgresInvitationRepository
from yard.persistence.repository.profile import (
    PostgresPendingProfileRepository,
    PostgresProfileRepository,
)
from yard.persistence.repository.source import (
    PostgresAgentTransactionSource,
    PostgresMemberTransactionSource,
)
from yard.persistence.repository.transaction import PostgresTransactionRepository
from yard.persistence.repository.unit_of_work import SqlUnitOfWork

__all__ = [
    "PostgresProfileRepository",
    "PostgresPendingProfileRepository",
    "PostgresTransactionRepository",
    "PostgresInvitationRepository",
    "PostgresMemberTransactionSource",
    "PostgresAgentTransactionSource",
    "SqlUnitOfWork",
]
