"""Unit of work over the request's SQLAlchemy session."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from sqlalchemy.ext.asyncio import AsyncSession

from yard.domain.repository import UnitOfWork
from yard.persistence.error import storage_errors


class SqlUnitOfWork(UnitOfWork):
    """Savepoints and commits on the session shared by the repositories."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @asynccontextmanager
    async def savepoint(self) -> AsyncIterator[None]:
        with storage_errors("unit_of_work.savepoint"):
            nested = await self.session.begin_nested()
        try:
            yield
        except Exception:
            await nested.rollback()
            raise
        with storage_errors("unit_of_work.savepoint"):
            await nested.commit()

    async def commit(self) -> None:
        with storage_errors("unit_of_work.commit"):
            await self.session.commit()
        logfire.info("Session committed")
