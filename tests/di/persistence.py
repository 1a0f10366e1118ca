"""Mock persistence providers for testing."""

from dishka import Scope, provide

from yard.domain.repository import (
    AgentTransactionSource,
    InvitationRepository,
    MemberTransactionSource,
    PendingProfileRepository,
    ProfileRepository,
    TransactionRepository,
    UnitOfWork,
)
from yard.persistence.repository.inmemory import (
    InMemoryAgentTransactionSource,
    InMemoryInvitationRepository,
    InMemoryMemberTransactionSource,
    InMemoryPendingProfileRepository,
    InMemoryProfileRepository,
    InMemoryTransactionRepository,
    InMemoryUnitOfWork,
)
from yard.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Stores are APP-scoped so state survives across requests of one
    container (the e2e client); each test builds its own container.
    Tests can ask for the InMemory* types directly to seed or inspect.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_profile_store(
        self, transactions: InMemoryTransactionRepository
    ) -> InMemoryProfileRepository:
        return InMemoryProfileRepository(transactions)

    @provide(scope=Scope.APP)
    def get_pending_profile_store(self) -> InMemoryPendingProfileRepository:
        return InMemoryPendingProfileRepository()

    @provide(scope=Scope.APP)
    def get_transaction_store(self) -> InMemoryTransactionRepository:
        return InMemoryTransactionRepository()

    @provide(scope=Scope.APP)
    def get_invitation_store(self) -> InMemoryInvitationRepository:
        return InMemoryInvitationRepository()

    @provide(scope=Scope.APP)
    def get_member_source_store(
        self,
        transactions: InMemoryTransactionRepository,
        profiles: InMemoryProfileRepository,
    ) -> InMemoryMemberTransactionSource:
        return InMemoryMemberTransactionSource(transactions, profiles)

    @provide(scope=Scope.APP)
    def get_agent_source_store(self) -> InMemoryAgentTransactionSource:
        return InMemoryAgentTransactionSource()

    @provide(scope=Scope.APP)
    def get_unit_of_work_store(
        self,
        profiles: InMemoryProfileRepository,
        pending: InMemoryPendingProfileRepository,
        transactions: InMemoryTransactionRepository,
        invitations: InMemoryInvitationRepository,
    ) -> InMemoryUnitOfWork:
        return InMemoryUnitOfWork(profiles, pending, transactions, invitations)

    @provide(scope=Scope.APP)
    def get_profile_repository(self, store: InMemoryProfileRepository) -> ProfileRepository:
        return store

    @provide(scope=Scope.APP)
    def get_pending_profile_repository(
        self, store: InMemoryPendingProfileRepository
    ) -> PendingProfileRepository:
        return store

    @provide(scope=Scope.APP)
    def get_transaction_repository(
        self, store: InMemoryTransactionRepository
    ) -> TransactionRepository:
        return store

    @provide(scope=Scope.APP)
    def get_invitation_repository(
        self, store: InMemoryInvitationRepository
    ) -> InvitationRepository:
        return store

    @provide(scope=Scope.APP)
    def get_member_source(
        self, store: InMemoryMemberTransactionSource
    ) -> MemberTransactionSource:
        return store

    @provide(scope=Scope.APP)
    def get_agent_source(self, store: InMemoryAgentTransactionSource) -> AgentTransactionSource:
        return store

    @provide(scope=Scope.APP)
    def get_unit_of_work(self, store: InMemoryUnitOfWork) -> UnitOfWork:
        return store
