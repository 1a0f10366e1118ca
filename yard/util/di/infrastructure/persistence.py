"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from yard.config import Settings
from yard.domain.repository import (
    AgentTransactionSource,
    InvitationRepository,
    MemberTransactionSource,
    PendingProfileRepository,
    ProfileRepository,
    TransactionRepository,
    UnitOfWork,
)
from yard.persistence.database import create_engine, create_session_factory
from yard.persistence.repository import (
    PostgresAgentTransactionSource,
    PostgresInvitationRepository,
    PostgresMemberTransactionSource,
    PostgresPendingProfileRepository,
    PostgresProfileRepository,
    PostgresTransactionRepository,
    SqlUnitOfWork,
)
from yard.util.di.base import ProviderBase
from yard.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        Use cases commit explicitly before notifying; whatever remains is
        committed here, or rolled back if the request raised.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_unit_of_work(self, session: AsyncSession) -> UnitOfWork:
        return SqlUnitOfWork(session)

    @provide(scope=Scope.REQUEST)
    def get_profile_repository(self, session: AsyncSession) -> ProfileRepository:
        return PostgresProfileRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_pending_profile_repository(
        self, session: AsyncSession
    ) -> PendingProfileRepository:
        return PostgresPendingProfileRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_transaction_repository(self, session: AsyncSession) -> TransactionRepository:
        return PostgresTransactionRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_invitation_repository(self, session: AsyncSession) -> InvitationRepository:
        return PostgresInvitationRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_member_source(self, session: AsyncSession) -> MemberTransactionSource:
        return PostgresMemberTransactionSource(session)

    @provide(scope=Scope.REQUEST)
    def get_agent_source(self, session: AsyncSession) -> AgentTransactionSource:
        return PostgresAgentTransactionSource(session)
